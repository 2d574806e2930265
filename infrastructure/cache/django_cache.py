"""
Django Cache Backed Response Cache
===================================

Concrete ResponseCacheInterface over a ``django.core.cache`` alias. Each tier
writes under its own namespace and keeps an index of live keys (key -> expiry
timestamp) so prefix deletion and flushes never touch other tiers or other
data stored in the same backend.
"""

import logging
import threading
import time
from typing import Any, Dict, List, Optional

from django.core.cache import caches

from infrastructure.observability.metrics import (
    response_cache_hits_total,
    response_cache_invalidations_total,
    response_cache_keys,
    response_cache_misses_total,
)

from .interface import CacheTier, ResponseCacheInterface

logger = logging.getLogger(__name__)


class DjangoResponseCache(ResponseCacheInterface):
    def __init__(self, tier: CacheTier, alias: str = "default"):
        self.tier = tier
        self.alias = alias
        self.namespace = f"response:{tier.name}"
        self._index_key = f"{self.namespace}:__index__"
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def backend(self):
        return caches[self.alias]

    def _full_key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def _load_index(self) -> Dict[str, float]:
        return self.backend.get(self._index_key) or {}

    def _save_index(self, index: Dict[str, float]) -> None:
        self.backend.set(self._index_key, index, None)
        response_cache_keys.labels(tier=self.tier.name).set(len(index))

    def get(self, key: str) -> Optional[Any]:
        value = self.backend.get(self._full_key(key))
        if value is None:
            self._misses += 1
            response_cache_misses_total.labels(tier=self.tier.name).inc()
        else:
            self._hits += 1
            response_cache_hits_total.labels(tier=self.tier.name).inc()
        return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        timeout = ttl if ttl is not None else self.tier.ttl
        with self._lock:
            self.backend.set(self._full_key(key), value, timeout)
            index = self._load_index()
            index[key] = time.time() + timeout
            self._save_index(index)

    def delete(self, key: str) -> bool:
        with self._lock:
            self.backend.delete(self._full_key(key))
            index = self._load_index()
            existed = index.pop(key, None) is not None
            self._save_index(index)
        if existed:
            response_cache_invalidations_total.labels(tier=self.tier.name, kind="key").inc()
        return existed

    def delete_prefix(self, prefix: str) -> int:
        with self._lock:
            index = self._load_index()
            matched = [key for key in index if key.startswith(prefix)]
            if matched:
                self.backend.delete_many([self._full_key(key) for key in matched])
                for key in matched:
                    index.pop(key)
                self._save_index(index)
        if matched:
            response_cache_invalidations_total.labels(tier=self.tier.name, kind="prefix").inc()
            logger.debug(f"Invalidated {len(matched)} '{prefix}*' entries in tier {self.tier.name}")
        return len(matched)

    def flush(self) -> int:
        with self._lock:
            index = self._load_index()
            if index:
                self.backend.delete_many([self._full_key(key) for key in index])
            self._save_index({})
        response_cache_invalidations_total.labels(tier=self.tier.name, kind="flush").inc()
        logger.debug(f"Flushed {len(index)} entries from tier {self.tier.name}")
        return len(index)

    def keys(self) -> List[str]:
        now = time.time()
        return [key for key, expires_at in self._load_index().items() if expires_at > now]

    def sweep(self) -> int:
        now = time.time()
        with self._lock:
            index = self._load_index()
            expired = [key for key, expires_at in index.items() if expires_at <= now]
            for key in expired:
                index.pop(key)
            if expired:
                self._save_index(index)
        return len(expired)

    def stats(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.name,
            "ttl": self.tier.ttl,
            "keys": len(self.keys()),
            "hits": self._hits,
            "misses": self._misses,
        }


class NullResponseCache(ResponseCacheInterface):
    """Used when response caching is disabled: every read misses."""

    def __init__(self, tier: CacheTier):
        self.tier = tier

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        return None

    def delete(self, key: str) -> bool:
        return False

    def delete_prefix(self, prefix: str) -> int:
        return 0

    def flush(self) -> int:
        return 0

    def keys(self) -> List[str]:
        return []

    def stats(self) -> Dict[str, Any]:
        return {"tier": self.tier.name, "ttl": self.tier.ttl, "keys": 0, "hits": 0, "misses": 0}
