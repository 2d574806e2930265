from decimal import Decimal

from django.test import TestCase

from marketplace.services import CartService, ErrorCodes
from marketplace.tests.factories import ListingFactory


class FakeSession(dict):
    modified = False


class CartServiceTest(TestCase):
    def setUp(self):
        self.service = CartService()
        self.session = FakeSession()
        self.listing = ListingFactory(price=Decimal("100.00"), stock=5)

    def test_add_item_snapshots_listing(self):
        result = self.service.add_item(self.session, self.listing.id, 2)

        self.assertTrue(result.ok)
        line = result.value["items"][0]
        self.assertEqual(line["listingId"], str(self.listing.id))
        self.assertEqual(line["price"], "100.00")
        self.assertEqual(line["storeName"], self.listing.vendor.store_name)
        self.assertEqual(result.value["total"], Decimal("200.00"))
        self.assertEqual(result.value["itemCount"], 2)
        self.assertTrue(self.session.modified)

    def test_adding_same_listing_merges_lines(self):
        self.service.add_item(self.session, self.listing.id, 2)
        result = self.service.add_item(self.session, self.listing.id, 1)

        self.assertEqual(len(result.value["items"]), 1)
        self.assertEqual(result.value["items"][0]["quantity"], 3)

    def test_merged_quantity_checked_against_stock(self):
        self.service.add_item(self.session, self.listing.id, 4)

        result = self.service.add_item(self.session, self.listing.id, 2)

        self.assertEqual(result.error, ErrorCodes.INSUFFICIENT_STOCK)
        self.assertEqual(self.session["cart"][0]["quantity"], 4)

    def test_add_inactive_listing(self):
        self.listing.is_active = False
        self.listing.save()

        result = self.service.add_item(self.session, self.listing.id)

        self.assertEqual(result.error, ErrorCodes.LISTING_NOT_FOUND)

    def test_add_zero_quantity(self):
        result = self.service.add_item(self.session, self.listing.id, 0)
        self.assertEqual(result.error, ErrorCodes.INVALID_QUANTITY)

    def test_update_quantity(self):
        self.service.add_item(self.session, self.listing.id, 1)

        result = self.service.update_item(self.session, self.listing.id, 4)

        self.assertEqual(result.value["items"][0]["quantity"], 4)

    def test_update_to_zero_removes_line(self):
        self.service.add_item(self.session, self.listing.id, 1)

        result = self.service.update_item(self.session, self.listing.id, 0)

        self.assertEqual(result.value["items"], [])
        self.assertEqual(result.value["total"], Decimal("0.00"))

    def test_update_beyond_stock(self):
        self.service.add_item(self.session, self.listing.id, 1)

        result = self.service.update_item(self.session, self.listing.id, 6)

        self.assertEqual(result.error, ErrorCodes.INSUFFICIENT_STOCK)

    def test_update_empty_cart(self):
        result = self.service.update_item(self.session, self.listing.id, 1)
        self.assertEqual(result.error, ErrorCodes.EMPTY_CART)

    def test_update_missing_line(self):
        self.service.add_item(self.session, self.listing.id, 1)

        result = self.service.update_item(self.session, ListingFactory().id, 1)

        self.assertEqual(result.error, ErrorCodes.ITEM_NOT_IN_CART)

    def test_remove_and_clear(self):
        other = ListingFactory(price=Decimal("25.50"))
        self.service.add_item(self.session, self.listing.id, 1)
        self.service.add_item(self.session, other.id, 2)

        result = self.service.remove_item(self.session, self.listing.id)
        self.assertEqual([line["listingId"] for line in result.value["items"]], [str(other.id)])
        self.assertEqual(result.value["total"], Decimal("51.00"))

        self.service.clear(self.session)
        self.assertEqual(self.service.get_cart(self.session).value["items"], [])
