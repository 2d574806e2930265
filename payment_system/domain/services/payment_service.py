"""
PaymentService - Payment Records and Vendor Payment Accounts

Read access to the payments of an order, and management of the bank account a
vendor is paid out to.
"""

from typing import Any, Dict

from django.db import transaction

from marketplace.models import Order
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from payment_system.models import Payment, VendorPaymentAccount
from utils.logging_utils import mask_account_number
from utils.rbac import is_admin

BANK_FIELDS = ("account_holder_name", "account_number", "ifsc_code", "bank_name", "branch_name")
ACCOUNT_FIELDS = BANK_FIELDS + ("upi_id", "pan_number", "gst_number")
VERIFICATION_STATUSES = ("verified", "rejected")


class PaymentService(BaseService):
    @BaseService.log_performance
    def get_order_payment(self, user, order_id) -> ServiceResult[Dict[str, Any]]:
        """Payment details and payouts for an order owned by ``user`` (admins see any order)."""
        orders = Order.objects.all() if is_admin(user) else Order.objects.filter(user=user)
        try:
            order = orders.get(pk=order_id)
        except Order.DoesNotExist:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

        payment = (
            Payment.objects.filter(order=order)
            .prefetch_related("vendor_payouts__vendor")
            .order_by("-created_at")
            .first()
        )
        if payment is None:
            return service_err(ErrorCodes.PAYMENT_NOT_FOUND, "No payment recorded for this order")

        return service_ok({"order": order, "payment": payment, "payouts": list(payment.vendor_payouts.all())})

    @BaseService.log_performance
    def get_account(self, vendor) -> ServiceResult[Dict[str, Any]]:
        """Vendor's payment account with the account number masked."""
        try:
            account = VendorPaymentAccount.objects.get(vendor=vendor)
        except VendorPaymentAccount.DoesNotExist:
            return service_err(ErrorCodes.PAYMENT_ACCOUNT_NOT_FOUND, "Payment account not set up")

        return service_ok(self.account_summary(account))

    @BaseService.log_performance
    @transaction.atomic
    def setup_account(self, vendor, data: Dict[str, Any]) -> ServiceResult[Dict[str, Any]]:
        """
        Create or update the vendor's payment account.

        Changing any bank detail resets verification to pending.
        """
        account = VendorPaymentAccount.objects.select_for_update().filter(vendor=vendor).first()
        created = account is None
        if created:
            account = VendorPaymentAccount(vendor=vendor)

        bank_changed = any(
            field in data and data[field] != getattr(account, field) for field in BANK_FIELDS
        )
        for field in ACCOUNT_FIELDS:
            if field in data:
                setattr(account, field, data[field])

        if created or bank_changed:
            account.verification_status = "pending"
            account.verification_notes = ""

        account.save()
        self.logger.info(
            f"Payment account {'created' if created else 'updated'} for vendor {vendor.id} "
            f"({mask_account_number(account.account_number)})"
        )
        return service_ok({"created": created, "account": self.account_summary(account)})

    @BaseService.log_performance
    def set_verification(self, account_id, status: str, notes: str = "") -> ServiceResult[Dict[str, Any]]:
        """Admin: verify or reject a vendor payment account."""
        if status not in VERIFICATION_STATUSES:
            return service_err(
                ErrorCodes.VALIDATION_ERROR, f"Status must be one of: {', '.join(VERIFICATION_STATUSES)}"
            )

        try:
            account = VendorPaymentAccount.objects.get(pk=account_id)
        except VendorPaymentAccount.DoesNotExist:
            return service_err(ErrorCodes.PAYMENT_ACCOUNT_NOT_FOUND, "Payment account not found")

        account.verification_status = status
        account.verification_notes = notes or ""
        account.save(update_fields=["verification_status", "verification_notes", "updated_at"])
        self.logger.info(f"Payment account {account.id} marked {status}")
        return service_ok(self.account_summary(account))

    @staticmethod
    def account_summary(account: VendorPaymentAccount) -> Dict[str, Any]:
        return {
            "id": str(account.id),
            "accountHolderName": account.account_holder_name,
            "accountNumber": mask_account_number(account.account_number),
            "ifscCode": account.ifsc_code,
            "bankName": account.bank_name,
            "branchName": account.branch_name,
            "upiId": account.upi_id,
            "panNumber": account.pan_number,
            "gstNumber": account.gst_number,
            "commissionRate": account.commission_rate,
            "verificationStatus": account.verification_status,
            "verificationNotes": account.verification_notes,
            "updatedAt": account.updated_at,
        }
