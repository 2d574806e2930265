"""
ModerationService - Reports & Admin Operations

Customers report vendors (optionally a specific listing). Admins review the
reports and manage vendors and user accounts. Platform-wide statistics feed
the admin dashboard.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from marketplace.catalog.domain.models.catalog import Listing, Product
from marketplace.infra.observability.metrics import reports_filed_total
from marketplace.moderation.domain.models.report import Report
from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.pagination import paginate
from marketplace.vendors.domain.models.vendor import Vendor
from payment_system.models import VendorPayout
from utils.rbac import ROLE_CUSTOMER

User = get_user_model()


class ModerationService(BaseService):
    def __init__(self, cache_invalidator=None):
        super().__init__()
        self.cache_invalidator = cache_invalidator

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def file_report(
        self, user, vendor_id, reason: str, details: str = "", listing_id=None
    ) -> ServiceResult[Report]:
        """
        File a report about a vendor.

        Only one unhandled report per (reporter, vendor, listing) may exist.
        """
        vendor = Vendor.objects.filter(pk=vendor_id).first()
        if vendor is None:
            return service_err(ErrorCodes.VENDOR_NOT_FOUND, "Vendor not found")
        if vendor.user_id == user.id:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You cannot report your own store")

        listing = None
        if listing_id:
            listing = Listing.objects.filter(pk=listing_id, vendor=vendor).first()
            if listing is None:
                return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found for this vendor")

        with transaction.atomic():
            duplicate = Report.objects.select_for_update().filter(
                reporter=user, vendor=vendor, listing=listing, handled=False
            )
            if duplicate.exists():
                return service_err(ErrorCodes.REPORT_EXISTS, "You already have an open report for this vendor")

            report = Report.objects.create(
                reporter=user, vendor=vendor, listing=listing, reason=reason, details=details or ""
            )

        reports_filed_total.inc()
        self.logger.info(f"User {user.id} reported vendor {vendor.id}")
        return service_ok(report)

    def user_reports(self, user) -> ServiceResult[list]:
        return service_ok(list(Report.objects.filter(reporter=user).select_related("vendor", "listing")))

    @BaseService.log_performance
    def list_reports(self, handled: Optional[bool] = None, page=None, limit=None) -> ServiceResult[Dict[str, Any]]:
        reports = Report.objects.select_related("reporter", "vendor", "listing", "handled_by")
        if handled is not None:
            reports = reports.filter(handled=handled)

        items, pagination = paginate(reports.order_by("-created_at"), page, limit, total_key="totalReports")
        return service_ok({"reports": items, "pagination": pagination})

    @BaseService.log_performance
    def action_report(self, admin, report_id, action_taken: str) -> ServiceResult[Report]:
        report = Report.objects.select_related("vendor", "reporter").filter(pk=report_id).first()
        if report is None:
            return service_err(ErrorCodes.REPORT_NOT_FOUND, "Report not found")

        report.handled = True
        report.action_taken = action_taken
        report.handled_by = admin
        report.handled_at = timezone.now()
        report.save(update_fields=["handled", "action_taken", "handled_by", "handled_at"])

        self.logger.info(f"Admin {admin.id} actioned report {report.id}")
        return service_ok(report)

    # ------------------------------------------------------------------
    # Vendors
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def list_vendors(self, verified: Optional[bool] = None, page=None, limit=None) -> ServiceResult[Dict[str, Any]]:
        vendors = Vendor.objects.select_related("user").annotate(listing_count=Count("listings"))
        if verified is not None:
            vendors = vendors.filter(verified=verified)

        items, pagination = paginate(vendors.order_by("-created_at"), page, limit, total_key="totalVendors")
        return service_ok({"vendors": items, "pagination": pagination})

    @BaseService.log_performance
    def verify_vendor(self, vendor_id) -> ServiceResult[Vendor]:
        vendor = Vendor.objects.select_related("user").filter(pk=vendor_id).first()
        if vendor is None:
            return service_err(ErrorCodes.VENDOR_NOT_FOUND, "Vendor not found")

        if not vendor.verified:
            vendor.verified = True
            vendor.verified_at = timezone.now()
            vendor.save(update_fields=["verified", "verified_at", "updated_at"])

        self._invalidate(vendor)
        self.logger.info(f"Vendor {vendor.id} verified")
        return service_ok(vendor)

    @BaseService.log_performance
    def reject_vendor(self, vendor_id) -> ServiceResult[None]:
        """
        Delete a vendor, its listings and its user account.

        Vendors that already sold something keep their records.
        """
        result = self._remove_vendor(vendor_id)
        if result.ok:
            self.logger.info(f"Vendor {vendor_id} rejected and removed")
        return result

    @BaseService.log_performance
    def delete_vendor(self, vendor_id) -> ServiceResult[None]:
        """Remove any vendor, verified or not, under the same order history rule as rejection."""
        result = self._remove_vendor(vendor_id)
        if result.ok:
            self.logger.info(f"Vendor {vendor_id} deleted")
        return result

    def _remove_vendor(self, vendor_id) -> ServiceResult[None]:
        vendor = Vendor.objects.select_related("user").filter(pk=vendor_id).first()
        if vendor is None:
            return service_err(ErrorCodes.VENDOR_NOT_FOUND, "Vendor not found")

        if self._vendor_has_sales(vendor):
            return service_err(
                ErrorCodes.VENDOR_HAS_ORDERS, "Vendor has order history and cannot be removed"
            )

        with transaction.atomic():
            vendor.listings.all().delete()
            user = vendor.user
            vendor.delete()
            user.delete()

        self._invalidate(vendor)
        return service_ok(None)

    @staticmethod
    def _vendor_has_sales(vendor: Vendor) -> bool:
        return OrderItem.objects.filter(vendor=vendor).exists() or VendorPayout.objects.filter(vendor=vendor).exists()

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def list_users(self, role: Optional[str] = None, page=None, limit=None) -> ServiceResult[Dict[str, Any]]:
        users = User.objects.all()
        if role:
            users = users.filter(role=role)

        items, pagination = paginate(users.order_by("-date_joined"), page, limit, total_key="totalUsers")
        return service_ok({"users": items, "pagination": pagination})

    @BaseService.log_performance
    def delete_user(self, admin, user_id) -> ServiceResult[None]:
        """
        Delete a user account; a vendor's store profile and listings go with it.

        Accounts with orders, or vendors with sales, are kept so payment
        records stay intact. Admins cannot delete themselves.
        """
        user = User.objects.filter(pk=user_id).first()
        if user is None:
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")
        if user.pk == admin.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You cannot delete your own account")
        if Order.objects.filter(user=user).exists():
            return service_err(ErrorCodes.USER_HAS_ORDERS, "User has order history and cannot be removed")

        vendor = Vendor.objects.filter(user=user).first()
        if vendor is not None and self._vendor_has_sales(vendor):
            return service_err(
                ErrorCodes.VENDOR_HAS_ORDERS, "Vendor has order history and cannot be removed"
            )

        with transaction.atomic():
            if vendor is not None:
                vendor.listings.all().delete()
                vendor.delete()
            user.delete()

        if vendor is not None:
            self._invalidate(vendor)
        elif self.cache_invalidator:
            self.cache_invalidator.user(user_id)
        self.logger.info(f"Admin {admin.id} deleted user {user_id}")
        return service_ok(None)

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def dashboard_stats(self) -> ServiceResult[Dict[str, Any]]:
        vendors = Vendor.objects.aggregate(total=Count("id"), unverified=Count("id", filter=Q(verified=False)))
        paid_orders = Order.objects.filter(status__in=Order.PURCHASED_STATUSES)
        revenue = paid_orders.aggregate(count=Count("id"), gross=Sum("total_amount"))
        commission = VendorPayout.objects.aggregate(total=Sum("commission"))["total"]

        return service_ok(
            {
                "totalUsers": User.objects.filter(role=ROLE_CUSTOMER, is_guest=False).count(),
                "totalVendors": vendors["total"],
                "unverifiedVendors": vendors["unverified"],
                "totalProducts": Product.objects.count(),
                "totalListings": Listing.objects.count(),
                "pendingReports": Report.objects.filter(handled=False).count(),
                "paidOrders": revenue["count"],
                "grossRevenue": revenue["gross"] or Decimal("0.00"),
                "commissionEarned": commission or Decimal("0.00"),
            }
        )

    def _invalidate(self, vendor: Vendor) -> None:
        if not self.cache_invalidator:
            return
        self.cache_invalidator.products()
        self.cache_invalidator.user(vendor.user_id)
