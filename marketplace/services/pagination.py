from math import ceil
from typing import Any, Dict, List, Tuple

from django.conf import settings


def page_params(page=None, limit=None) -> Tuple[int, int]:
    """Coerce raw page/limit values: page >= 1, 1 <= limit <= MAX_PAGE_SIZE."""
    config = settings.MARKETPLACE
    try:
        page = max(int(page or 1), 1)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(limit or config["DEFAULT_PAGE_SIZE"])
    except (TypeError, ValueError):
        limit = config["DEFAULT_PAGE_SIZE"]
    return page, min(max(limit, 1), config["MAX_PAGE_SIZE"])


def paginate(queryset, page=None, limit=None, total_key: str = "totalItems") -> Tuple[List[Any], Dict[str, Any]]:
    """
    Slice a queryset and build the pagination envelope.

    Returns:
        (items, {"currentPage", "totalPages", total_key, "hasNext", "hasPrev"})
    """
    page, limit = page_params(page, limit)
    total = queryset.count()
    total_pages = ceil(total / limit) if total else 0
    offset = (page - 1) * limit
    items = list(queryset[offset : offset + limit])
    return items, {
        "currentPage": page,
        "totalPages": total_pages,
        total_key: total,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }
