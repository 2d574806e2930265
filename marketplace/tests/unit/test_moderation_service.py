from decimal import Decimal
from unittest.mock import MagicMock

from django.contrib.auth import get_user_model
from django.test import TestCase

from marketplace.models import Listing, Order, Report, Vendor
from marketplace.services import ErrorCodes, ModerationService
from marketplace.tests.factories import (
    AdminFactory,
    GuestFactory,
    ListingFactory,
    OrderFactory,
    OrderItemFactory,
    ReportFactory,
    UserFactory,
    VendorFactory,
    VendorPayoutFactory,
)

User = get_user_model()


class ReportTest(TestCase):
    def setUp(self):
        self.service = ModerationService()
        self.user = UserFactory()
        self.vendor = VendorFactory()

    def test_file_report(self):
        result = self.service.file_report(self.user, self.vendor.id, "Fake reviews", "Seen on several items")

        self.assertTrue(result.ok)
        self.assertFalse(result.value.handled)

    def test_report_on_listing_must_belong_to_vendor(self):
        result = self.service.file_report(self.user, self.vendor.id, "Wrong item", listing_id=ListingFactory().id)
        self.assertEqual(result.error, ErrorCodes.LISTING_NOT_FOUND)

    def test_duplicate_open_report(self):
        self.service.file_report(self.user, self.vendor.id, "Fake reviews")

        result = self.service.file_report(self.user, self.vendor.id, "Still fake")

        self.assertEqual(result.error, ErrorCodes.REPORT_EXISTS)

    def test_new_report_allowed_after_handling(self):
        report = self.service.file_report(self.user, self.vendor.id, "Fake reviews").value
        self.service.action_report(AdminFactory(), report.id, "Warned vendor")

        self.assertTrue(self.service.file_report(self.user, self.vendor.id, "Again").ok)

    def test_cannot_report_own_store(self):
        result = self.service.file_report(self.vendor.user, self.vendor.id, "Self report")
        self.assertEqual(result.error, ErrorCodes.PERMISSION_DENIED)

    def test_action_report(self):
        admin = AdminFactory()
        report = ReportFactory()

        result = self.service.action_report(admin, report.id, "Listing removed")

        self.assertTrue(result.value.handled)
        self.assertEqual(result.value.handled_by, admin)
        self.assertIsNotNone(result.value.handled_at)

    def test_list_reports_by_handled_flag(self):
        open_report = ReportFactory()
        ReportFactory(handled=True)

        result = self.service.list_reports(handled=False)

        self.assertEqual([report.id for report in result.value["reports"]], [open_report.id])


class VendorModerationTest(TestCase):
    def setUp(self):
        self.service = ModerationService()

    def test_verify_vendor(self):
        vendor = VendorFactory(verified=False)

        result = self.service.verify_vendor(vendor.id)

        self.assertTrue(result.value.verified)
        self.assertIsNotNone(result.value.verified_at)

    def test_reject_removes_vendor_user_and_listings(self):
        vendor = VendorFactory(verified=False)
        ListingFactory(vendor=vendor)
        user_id = vendor.user_id

        result = self.service.reject_vendor(vendor.id)

        self.assertTrue(result.ok)
        self.assertFalse(Vendor.objects.filter(pk=vendor.pk).exists())
        self.assertFalse(User.objects.filter(pk=user_id).exists())

    def test_reject_vendor_with_sales_refused(self):
        listing = ListingFactory()
        OrderItemFactory(listing=listing)

        result = self.service.reject_vendor(listing.vendor_id)

        self.assertEqual(result.error, ErrorCodes.VENDOR_HAS_ORDERS)
        self.assertTrue(Vendor.objects.filter(pk=listing.vendor_id).exists())

    def test_list_vendors_filtered(self):
        pending = VendorFactory(verified=False)
        VendorFactory()

        result = self.service.list_vendors(verified=False)

        self.assertEqual([vendor.id for vendor in result.value["vendors"]], [pending.id])
        self.assertEqual(result.value["pagination"]["totalVendors"], 1)

    def test_dashboard_stats(self):
        UserFactory()
        GuestFactory()
        VendorFactory(verified=False)
        order = OrderFactory(status=Order.STATUS_PAID, total_amount=Decimal("300.00"))
        OrderFactory(status=Order.STATUS_PENDING, total_amount=Decimal("50.00"))
        VendorPayoutFactory(payment__order=order, commission=Decimal("3.00"))
        ReportFactory()

        stats = self.service.dashboard_stats().value

        self.assertEqual(stats["unverifiedVendors"], 1)
        self.assertEqual(stats["paidOrders"], 1)
        self.assertEqual(stats["grossRevenue"], Decimal("300.00"))
        self.assertEqual(stats["commissionEarned"], Decimal("3.00"))
        self.assertEqual(stats["pendingReports"], 1)
        self.assertEqual(stats["totalUsers"], User.objects.filter(role="customer", is_guest=False).count())

    def test_delete_verified_vendor(self):
        vendor = VendorFactory()
        listing = ListingFactory(vendor=vendor)

        result = self.service.delete_vendor(vendor.id)

        self.assertTrue(result.ok)
        self.assertFalse(Vendor.objects.filter(pk=vendor.pk).exists())
        self.assertFalse(Listing.objects.filter(pk=listing.pk).exists())
        self.assertFalse(User.objects.filter(pk=vendor.user_id).exists())

    def test_delete_unknown_vendor(self):
        result = self.service.delete_vendor("00000000-0000-0000-0000-000000000000")
        self.assertEqual(result.error, ErrorCodes.VENDOR_NOT_FOUND)


class UserManagementTest(TestCase):
    def setUp(self):
        self.invalidator = MagicMock()
        self.service = ModerationService(cache_invalidator=self.invalidator)
        self.admin = AdminFactory()

    def test_list_users_by_role(self):
        VendorFactory()
        customer = UserFactory()

        result = self.service.list_users(role="customer")

        self.assertEqual([user.id for user in result.value["users"]], [customer.id])
        self.assertEqual(result.value["pagination"]["totalUsers"], 1)

    def test_delete_customer(self):
        user = UserFactory()

        result = self.service.delete_user(self.admin, user.id)

        self.assertTrue(result.ok)
        self.assertFalse(User.objects.filter(pk=user.pk).exists())
        self.invalidator.user.assert_called_once_with(user.id)

    def test_delete_vendor_user_removes_store_and_listings(self):
        vendor = VendorFactory()
        listing = ListingFactory(vendor=vendor)

        result = self.service.delete_user(self.admin, vendor.user_id)

        self.assertTrue(result.ok)
        self.assertFalse(Vendor.objects.filter(pk=vendor.pk).exists())
        self.assertFalse(Listing.objects.filter(pk=listing.pk).exists())
        self.invalidator.products.assert_called_once()

    def test_user_with_orders_kept(self):
        order = OrderFactory()

        result = self.service.delete_user(self.admin, order.user_id)

        self.assertEqual(result.error, ErrorCodes.USER_HAS_ORDERS)
        self.assertTrue(User.objects.filter(pk=order.user_id).exists())

    def test_vendor_with_sales_kept(self):
        item = OrderItemFactory()

        result = self.service.delete_user(self.admin, item.vendor.user_id)

        self.assertEqual(result.error, ErrorCodes.VENDOR_HAS_ORDERS)
        self.assertTrue(Vendor.objects.filter(pk=item.vendor_id).exists())

    def test_admin_cannot_delete_self(self):
        result = self.service.delete_user(self.admin, self.admin.id)

        self.assertEqual(result.error, ErrorCodes.PERMISSION_DENIED)
        self.assertTrue(User.objects.filter(pk=self.admin.pk).exists())

    def test_unknown_user(self):
        result = self.service.delete_user(self.admin, "00000000-0000-0000-0000-000000000000")
        self.assertEqual(result.error, ErrorCodes.USER_NOT_FOUND)
