"""
Response Cache Tests
=====================

Unit tests for the tiered response cache and invalidation helpers.
"""

from unittest.mock import patch

from django.core.cache import caches
from django.test import TestCase, override_settings

from infrastructure.cache import (
    CacheInvalidator,
    CacheTier,
    DjangoResponseCache,
    NullResponseCache,
    ResponseCacheFactory,
    review_prefix,
    user_key,
)


class DjangoResponseCacheTest(TestCase):
    def setUp(self):
        caches["responses"].clear()
        self.cache = DjangoResponseCache(CacheTier("short", 60), alias="responses")

    def test_set_and_get(self):
        self.cache.set("products_list_page1", {"results": [1, 2]})

        self.assertEqual(self.cache.get("products_list_page1"), {"results": [1, 2]})
        self.assertIsNone(self.cache.get("missing"))
        stats = self.cache.stats()
        self.assertEqual(stats["hits"], 1)
        self.assertEqual(stats["misses"], 1)
        self.assertEqual(stats["keys"], 1)

    def test_delete(self):
        self.cache.set("a", 1)

        self.assertTrue(self.cache.delete("a"))
        self.assertFalse(self.cache.delete("a"))
        self.assertIsNone(self.cache.get("a"))

    def test_delete_prefix_only_removes_matching_keys(self):
        self.cache.set("reviews_p1_page1", 1)
        self.cache.set("reviews_p1_page2", 2)
        self.cache.set("reviews_p2_page1", 3)

        removed = self.cache.delete_prefix("reviews_p1")

        self.assertEqual(removed, 2)
        self.assertIsNone(self.cache.get("reviews_p1_page1"))
        self.assertEqual(self.cache.get("reviews_p2_page1"), 3)
        self.assertEqual(self.cache.keys(), ["reviews_p2_page1"])

    def test_flush_is_scoped_to_tier(self):
        other = DjangoResponseCache(CacheTier("medium", 300), alias="responses")
        self.cache.set("k", "short")
        other.set("k", "medium")

        self.assertEqual(self.cache.flush(), 1)

        self.assertIsNone(self.cache.get("k"))
        self.assertEqual(other.get("k"), "medium")

    def test_sweep_drops_expired_index_entries(self):
        with patch("infrastructure.cache.django_cache.time.time", return_value=1000.0):
            self.cache.set("old", 1, ttl=10)
        with patch("infrastructure.cache.django_cache.time.time", return_value=2000.0):
            self.assertEqual(self.cache.sweep(), 1)
        self.assertEqual(self.cache.keys(), [])


class NullResponseCacheTest(TestCase):
    def test_everything_misses(self):
        cache = NullResponseCache(CacheTier("short", 60))
        cache.set("a", 1)

        self.assertIsNone(cache.get("a"))
        self.assertEqual(cache.delete_prefix("a"), 0)
        self.assertEqual(cache.flush(), 0)


class ResponseCacheFactoryTest(TestCase):
    def test_creates_configured_tiers(self):
        tiers = ResponseCacheFactory.tiers()

        self.assertEqual(tiers["short"].ttl, 60)
        self.assertEqual(tiers["medium"].ttl, 300)
        self.assertEqual(tiers["long"].ttl, 900)
        self.assertEqual(tiers["session"].ttl, 1800)

    def test_unknown_tier(self):
        with self.assertRaises(ValueError):
            ResponseCacheFactory.create("forever")

    @override_settings(RESPONSE_CACHE={"ENABLED": False, "TIERS": {"short": 60}})
    def test_disabled_returns_null_cache(self):
        self.assertIsInstance(ResponseCacheFactory.create("short"), NullResponseCache)


class CacheInvalidatorTest(TestCase):
    def setUp(self):
        caches["responses"].clear()
        self.caches = {
            name: DjangoResponseCache(CacheTier(name, ttl), alias="responses")
            for name, ttl in {"short": 60, "medium": 300, "long": 900, "session": 1800}.items()
        }
        self.invalidator = CacheInvalidator(self.caches)

    def test_products_flushes_medium_and_long(self):
        self.caches["medium"].set("products_list_x", 1)
        self.caches["long"].set("master_search_chair", 2)
        self.caches["short"].set(f"{review_prefix('p1')}_page1", 3)

        self.assertEqual(self.invalidator.products(), 2)
        self.assertEqual(self.caches["short"].get(f"{review_prefix('p1')}_page1"), 3)

    def test_reviews_by_product_prefix(self):
        self.caches["short"].set(f"{review_prefix('p1')}_page1", 1)
        self.caches["short"].set(f"{review_prefix('p2')}_page1", 2)

        self.assertEqual(self.invalidator.reviews("p1"), 1)
        self.assertEqual(self.caches["short"].get(f"{review_prefix('p2')}_page1"), 2)

    def test_user_exact_keys(self):
        self.caches["session"].set(user_key("vendor_dashboard", "u1"), {"orders": 3})
        self.caches["session"].set(user_key("vendor_dashboard", "u10"), {"orders": 1})

        self.assertEqual(self.invalidator.user("u1"), 1)
        self.assertEqual(self.caches["session"].get(user_key("vendor_dashboard", "u10")), {"orders": 1})

    def test_all(self):
        for cache in self.caches.values():
            cache.set("k", 1)

        self.assertEqual(self.invalidator.all(), 4)
        self.assertEqual(self.invalidator.stats()["short"]["keys"], 0)
