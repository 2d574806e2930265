from rest_framework import serializers

from payment_system.models import Payment, VendorPayout


class VendorPayoutSerializer(serializers.ModelSerializer):
    vendor_id = serializers.UUIDField(source="vendor.id", read_only=True)
    store_name = serializers.CharField(source="vendor.store_name", read_only=True)
    order_id = serializers.UUIDField(source="payment.order_id", read_only=True)

    class Meta:
        model = VendorPayout
        fields = [
            "id",
            "vendor_id",
            "store_name",
            "order_id",
            "gross_amount",
            "commission",
            "net_amount",
            "status",
            "processed_at",
            "created_at",
        ]
        read_only_fields = fields


class PaymentSerializer(serializers.ModelSerializer):
    vendor_payouts = VendorPayoutSerializer(many=True, read_only=True)

    class Meta:
        model = Payment
        fields = [
            "id",
            "order_id",
            "payment_mode",
            "gateway_order_id",
            "gateway_payment_id",
            "amount",
            "currency",
            "status",
            "commission_rate",
            "payout_status",
            "paid_at",
            "vendor_payouts",
        ]
        read_only_fields = fields
