"""
Response caching for read endpoints.

``cached_response`` wraps a view (function view or view method), serves the
stored body of a successful GET from the given tier, and stores the body of
fresh 200 responses. The ``X-Cache`` header tells which one happened.

Key builders receive the request and the view kwargs and return the cache key,
or None to bypass the cache for that request.
"""

import logging
from functools import wraps
from typing import Callable, Optional
from urllib.parse import urlencode

from django.http import HttpRequest
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from infrastructure.cache.invalidation import review_prefix, user_key
from infrastructure.container import container

logger = logging.getLogger(__name__)


def _find_request(args):
    for arg in args:
        if isinstance(arg, (Request, HttpRequest)):
            return arg
    return None


def query_suffix(request) -> str:
    params = sorted((key, value) for key, values in request.GET.lists() for value in values)
    return urlencode(params) or "all"


def cached_response(tier: str, key_builder: Callable[..., Optional[str]]):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            request = _find_request(args)
            if request is None or request.method != "GET":
                return view(*args, **kwargs)

            key = key_builder(request, **kwargs)
            if key is None:
                return view(*args, **kwargs)

            cache = container.response_cache(tier)
            cached = cache.get(key)
            if cached is not None:
                return Response(cached, headers={"X-Cache": "HIT"})

            response = view(*args, **kwargs)
            if response.status_code == status.HTTP_200_OK:
                cache.set(key, response.data)
                response["X-Cache"] = "MISS"
            return response

        return wrapper

    return decorator


# Key builders


def products_key(request, **kwargs) -> str:
    return f"products_list_{query_suffix(request)}"


def product_detail_key(request, pk=None, **kwargs) -> str:
    return f"products_detail_{pk}"


def listing_detail_key(request, listing_id=None, **kwargs) -> str:
    return f"products_listing_{listing_id}"


def master_search_key(request, **kwargs) -> str:
    return f"master_search_{query_suffix(request)}"


def stores_key(request, **kwargs) -> str:
    return f"stores_list_{query_suffix(request)}"


def store_detail_key(request, pk=None, **kwargs) -> str:
    return f"stores_{pk}_{query_suffix(request)}"


def product_reviews_key(request, product_id=None, **kwargs) -> str:
    return f"{review_prefix(product_id)}_{query_suffix(request)}"


def user_scoped_key(kind: str) -> Callable[..., Optional[str]]:
    """Per-user key; requests with query parameters are not cached."""

    def build(request, **kwargs) -> Optional[str]:
        user = getattr(request, "user", None)
        if not getattr(user, "is_authenticated", False) or request.GET:
            return None
        return user_key(kind, user.id)

    return build
