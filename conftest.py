import pytest
from django.core.cache import caches

from infrastructure.container import container


@pytest.fixture(autouse=True)
def _isolated_caches():
    """Every test starts with empty caches and freshly wired services."""
    caches["default"].clear()
    caches["responses"].clear()
    container.reset()
    yield
    container.reset()
