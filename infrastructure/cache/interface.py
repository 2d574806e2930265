"""
Response Cache Interface
=========================

Key-value cache fronting read endpoints. Entries expire after the TTL of the
tier they were written to and are removed explicitly by write operations:
by exact key, by key prefix, or by flushing a whole tier.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CacheTier:
    """A named TTL policy (seconds)."""

    name: str
    ttl: int


class ResponseCacheInterface(ABC):
    tier: CacheTier

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the cached value or None on miss."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store a value; ``ttl`` defaults to the tier TTL."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove one key. Returns True if it was indexed."""
        pass

    @abstractmethod
    def delete_prefix(self, prefix: str) -> int:
        """Remove every key starting with ``prefix``. Returns the number removed."""
        pass

    @abstractmethod
    def flush(self) -> int:
        """Remove every key of this cache. Returns the number removed."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        pass

    @abstractmethod
    def stats(self) -> Dict[str, Any]:
        pass

    def sweep(self) -> int:
        """Drop bookkeeping for expired keys. Returns the number dropped."""
        return 0
