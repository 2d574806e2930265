from django.contrib import admin

from utils.logging_utils import mask_account_number

from .models import Payment, VendorPaymentAccount, VendorPayout


class VendorPayoutInline(admin.TabularInline):
    model = VendorPayout
    extra = 0
    readonly_fields = ["vendor", "gross_amount", "commission", "net_amount", "created_at"]
    fields = ["vendor", "gross_amount", "commission", "net_amount", "status", "processed_at"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ["id_short", "order", "payment_mode", "amount", "currency", "status", "payout_status", "paid_at"]
    list_filter = ["payment_mode", "status", "payout_status", "created_at"]
    search_fields = ["gateway_order_id", "gateway_payment_id", "order__id", "user__email"]
    readonly_fields = ["id", "gateway_order_id", "gateway_payment_id", "gateway_signature", "created_at", "updated_at"]
    inlines = [VendorPayoutInline]

    def id_short(self, obj):
        return str(obj.id)[:8] + "..."

    id_short.short_description = "ID"


@admin.register(VendorPayout)
class VendorPayoutAdmin(admin.ModelAdmin):
    list_display = ["vendor", "gross_amount", "commission", "net_amount", "status", "processed_at"]
    list_filter = ["status"]
    search_fields = ["vendor__store_name", "vendor__company_name", "payment__order__id"]
    readonly_fields = ["payment", "vendor", "gross_amount", "commission", "net_amount", "created_at"]


@admin.register(VendorPaymentAccount)
class VendorPaymentAccountAdmin(admin.ModelAdmin):
    list_display = ["vendor", "bank_name", "masked_account", "commission_rate", "verification_status"]
    list_filter = ["verification_status"]
    search_fields = ["vendor__store_name", "account_holder_name", "ifsc_code"]

    def masked_account(self, obj):
        return mask_account_number(obj.account_number)

    masked_account.short_description = "Account"
