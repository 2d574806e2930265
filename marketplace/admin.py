from django.contrib import admin

from .models import BugReport, Listing, Order, OrderItem, Product, Report, Review, Vendor


class ListingInline(admin.TabularInline):
    model = Listing
    extra = 0
    fields = ("vendor", "price", "stock", "is_active")
    readonly_fields = ("vendor",)


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product_name", "store_name", "unit_price", "quantity")
    readonly_fields = fields
    can_delete = False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "listing_count", "created_at")
    list_filter = ("category",)
    search_fields = ("name", "category")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [ListingInline]

    def listing_count(self, obj):
        return obj.listings.count()

    listing_count.short_description = "Listings"


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ("product", "vendor", "price", "stock", "is_active", "updated_at")
    list_filter = ("is_active",)
    search_fields = ("product__name", "vendor__store_name")
    list_select_related = ("product", "vendor")


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ("store_name", "company_name", "user", "city", "verified", "created_at")
    list_filter = ("verified", "state")
    search_fields = ("store_name", "company_name", "user__email")
    readonly_fields = ("verified_at", "created_at", "updated_at")
    actions = ["mark_verified"]

    @admin.action(description="Mark selected vendors as verified")
    def mark_verified(self, request, queryset):
        from django.utils import timezone

        updated = queryset.filter(verified=False).update(verified=True, verified_at=timezone.now())
        self.message_user(request, f"{updated} vendor(s) verified")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("short_id", "user", "status", "total_amount", "payment_mode", "created_at")
    list_filter = ("status", "payment_mode")
    search_fields = ("id", "user__email", "gateway_order_id", "confirmation_id")
    readonly_fields = (
        "total_amount",
        "currency",
        "payment_mode",
        "gateway_order_id",
        "confirmation_id",
        "paid_at",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]

    def short_id(self, obj):
        return str(obj.id)[:8]

    short_id.short_description = "Order"


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "vendor", "user", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("product__name", "user__email", "comment")


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ("vendor", "reporter", "reason", "handled", "created_at")
    list_filter = ("handled",)
    search_fields = ("vendor__store_name", "reporter__email", "reason")
    readonly_fields = ("handled_by", "handled_at", "created_at")


@admin.register(BugReport)
class BugReportAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "priority", "status", "email", "created_at")
    list_filter = ("status", "category", "priority")
    search_fields = ("title", "email", "name")
    readonly_fields = ("user", "resolved_at", "created_at", "updated_at")
