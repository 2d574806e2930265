from django.contrib.auth import get_user_model
from rest_framework import serializers

from marketplace.api.serializers import PaginationSerializer
from marketplace.models import Report, Vendor

User = get_user_model()


class ReportSerializer(serializers.ModelSerializer):
    store_name = serializers.CharField(source="vendor.store_name", read_only=True)
    reporter_email = serializers.EmailField(source="reporter.email", read_only=True)

    class Meta:
        model = Report
        fields = [
            "id",
            "vendor",
            "store_name",
            "listing",
            "reporter_email",
            "reason",
            "details",
            "handled",
            "action_taken",
            "handled_at",
            "created_at",
        ]
        read_only_fields = fields


class ReportCreateRequestSerializer(serializers.Serializer):
    vendorId = serializers.UUIDField()
    listingId = serializers.UUIDField(required=False, allow_null=True)
    reason = serializers.CharField(min_length=5, max_length=200, trim_whitespace=True)
    details = serializers.CharField(max_length=2000, required=False, allow_blank=True, default="")


class ReportActionRequestSerializer(serializers.Serializer):
    actionTaken = serializers.CharField(min_length=3, max_length=1000, trim_whitespace=True)


class ReportPaginationSerializer(PaginationSerializer):
    totalReports = serializers.IntegerField()


class ReportListResponseSerializer(serializers.Serializer):
    reports = ReportSerializer(many=True)
    pagination = ReportPaginationSerializer()


class AdminVendorSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source="user.email", read_only=True)
    listing_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Vendor
        fields = [
            "id",
            "email",
            "company_name",
            "store_name",
            "city",
            "state",
            "verified",
            "verified_at",
            "listing_count",
            "created_at",
        ]
        read_only_fields = fields


class VendorPaginationSerializer(PaginationSerializer):
    totalVendors = serializers.IntegerField()


class AdminVendorListResponseSerializer(serializers.Serializer):
    vendors = AdminVendorSerializer(many=True)
    pagination = VendorPaginationSerializer()


class DashboardStatsSerializer(serializers.Serializer):
    totalUsers = serializers.IntegerField()
    totalVendors = serializers.IntegerField()
    unverifiedVendors = serializers.IntegerField()
    totalProducts = serializers.IntegerField()
    totalListings = serializers.IntegerField()
    pendingReports = serializers.IntegerField()
    paidOrders = serializers.IntegerField()
    grossRevenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    commissionEarned = serializers.DecimalField(max_digits=14, decimal_places=2)


class AdminUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "role",
            "is_guest",
            "is_active",
            "date_joined",
            "last_login",
        ]
        read_only_fields = fields


class UserPaginationSerializer(PaginationSerializer):
    totalUsers = serializers.IntegerField()


class AdminUserListResponseSerializer(serializers.Serializer):
    users = AdminUserSerializer(many=True)
    pagination = UserPaginationSerializer()
