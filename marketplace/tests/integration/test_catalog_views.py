from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.tests.factories import (
    ListingFactory,
    OrderFactory,
    OrderItemFactory,
    ProductFactory,
    UserFactory,
    VendorFactory,
)


class ProductViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.product = ProductFactory(name="Clay Pot", category="Garden")
        self.listing = ListingFactory(product=self.product, price=Decimal("40.00"), stock=4)
        ListingFactory(product=self.product, price=Decimal("55.00"), stock=1)

        self.product_list_url = reverse("marketplace:product-list")
        self.product_detail_url = reverse("marketplace:product-detail", args=[self.product.id])

    def test_list_products(self):
        response = self.client.get(self.product_list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["pagination"]["totalProducts"], 1)
        product = response.data["products"][0]
        self.assertEqual(product["min_price"], "40.00")
        self.assertEqual(product["total_stock"], 5)
        self.assertEqual(product["listing_count"], 2)

    def test_list_is_cached_until_catalog_write(self):
        first = self.client.get(self.product_list_url)
        second = self.client.get(self.product_list_url)
        self.assertEqual(first["X-Cache"], "MISS")
        self.assertEqual(second["X-Cache"], "HIT")

        vendor = self.listing.vendor
        self.client.force_authenticate(user=vendor.user)
        self.client.patch(
            reverse("marketplace:vendor-listing-detail", args=[self.listing.id]),
            {"price": "35.00"},
            format="json",
        )

        refreshed = self.client.get(self.product_list_url)
        self.assertEqual(refreshed["X-Cache"], "MISS")
        self.assertEqual(refreshed.data["products"][0]["min_price"], "35.00")

    def test_distinct_queries_cached_separately(self):
        self.client.get(self.product_list_url, {"q": "clay"})

        response = self.client.get(self.product_list_url, {"q": "rose"})

        self.assertEqual(response["X-Cache"], "MISS")
        self.assertEqual(response.data["products"], [])

    def test_product_detail(self):
        response = self.client.get(self.product_detail_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["product"]["name"], "Clay Pot")
        self.assertEqual([listing["price"] for listing in response.data["listings"]], ["40.00", "55.00"])
        self.assertEqual(response.data["rating"], {"averageRating": 0.0, "reviewCount": 0})

    def test_unknown_product(self):
        response = self.client.get(reverse("marketplace:product-detail", args=["00000000-0000-0000-0000-000000000000"]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "product_not_found")

    def test_listing_detail(self):
        response = self.client.get(reverse("marketplace:product-listing", args=[self.listing.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["vendor"]["id"], str(self.listing.vendor_id))

    def test_unknown_listing_is_404(self):
        response = self.client.get(
            reverse("marketplace:product-listing", args=["00000000-0000-0000-0000-000000000000"])
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_master_search(self):
        response = self.client.get(reverse("marketplace:product-search-master"), {"q": "clay"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([product["name"] for product in response.data], ["Clay Pot"])


class StoreViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.vendor = VendorFactory(store_name="Lotus Crafts", city="Jaipur")
        ListingFactory(vendor=self.vendor)
        VendorFactory(store_name="Pending Shop", verified=False)

    def test_public_store_list(self):
        response = self.client.get(reverse("marketplace:store-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([store["store_name"] for store in response.data["stores"]], ["Lotus Crafts"])
        self.assertEqual(response.data["stores"][0]["listing_count"], 1)
        self.assertNotIn("email", response.data["stores"][0])

    def test_store_search(self):
        response = self.client.get(reverse("marketplace:store-list"), {"q": "jaipur"})
        self.assertEqual(response.data["pagination"]["totalStores"], 1)

    def test_store_page(self):
        response = self.client.get(reverse("marketplace:store-detail", args=[self.vendor.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["listings"]), 1)


class VendorViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.vendor = VendorFactory()
        self.client.force_authenticate(user=self.vendor.user)
        self.listings_url = reverse("marketplace:vendor-listings")

    def test_profile_read_and_update(self):
        me_url = reverse("marketplace:vendor-me")
        self.assertEqual(self.client.get(me_url).data["store_name"], self.vendor.store_name)

        response = self.client.put(me_url, {"store_name": "Renamed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        cached = self.client.get(me_url)
        self.assertEqual(cached["X-Cache"], "MISS")
        self.assertEqual(cached.data["store_name"], "Renamed")

    def test_create_listing_with_new_product(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                self.listings_url,
                {"name": "Jute Bag", "category": "Bags", "price": "250.00", "stock": 8},
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["product"]["name"], "Jute Bag")
        self.assertEqual(len(self.client.get(self.listings_url).data), 1)

    def test_listing_needs_product_reference(self):
        response = self.client.post(self.listings_url, {"price": "10.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unverified_vendor_cannot_list(self):
        self.vendor.verified = False
        self.vendor.save()

        response = self.client.post(
            self.listings_url, {"name": "Jute Bag", "category": "Bags", "price": "250.00"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "vendor_not_verified")

    def test_cannot_edit_other_vendors_listing(self):
        other = ListingFactory()

        response = self.client.patch(
            reverse("marketplace:vendor-listing-detail", args=[other.id]), {"stock": 0}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_own_listing(self):
        listing = ListingFactory(vendor=self.vendor)

        response = self.client.delete(reverse("marketplace:vendor-listing-detail", args=[listing.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_dashboard(self):
        listing = ListingFactory(vendor=self.vendor, price=Decimal("20.00"))
        OrderItemFactory(order=OrderFactory(status="paid"), listing=listing, quantity=3)

        response = self.client.get(reverse("marketplace:vendor-dashboard"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["stats"]["unitsSold"], 3)
        self.assertEqual(response.data["stats"]["totalRevenue"], Decimal("60.00"))

    def test_customer_forbidden(self):
        self.client.force_authenticate(user=UserFactory())
        self.assertEqual(self.client.get(self.listings_url).status_code, status.HTTP_403_FORBIDDEN)
