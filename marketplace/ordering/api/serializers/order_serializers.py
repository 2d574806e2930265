from rest_framework import serializers

from marketplace.api.serializers import PaginationSerializer
from marketplace.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "listing",
            "product",
            "vendor",
            "product_name",
            "store_name",
            "unit_price",
            "quantity",
            "line_total",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """
    Order with its lines. When the order was loaded for a vendor, only that
    vendor's lines (``vendor_items``) are shown.
    """

    items = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "total_amount",
            "currency",
            "payment_mode",
            "gateway_order_id",
            "confirmation_id",
            "shipping_address",
            "notes",
            "items",
            "created_at",
            "updated_at",
            "paid_at",
            "shipped_at",
            "delivered_at",
            "cancelled_at",
        ]
        read_only_fields = fields

    def get_items(self, obj) -> list:
        items = getattr(obj, "vendor_items", None)
        if items is None:
            items = obj.items.all()
        return OrderItemSerializer(items, many=True).data


class OrderPaginationSerializer(PaginationSerializer):
    totalOrders = serializers.IntegerField()


class OrderListResponseSerializer(serializers.Serializer):
    orders = OrderSerializer(many=True)
    pagination = OrderPaginationSerializer()


class CreateOrderRequestSerializer(serializers.Serializer):
    shippingAddress = serializers.DictField(required=False, default=dict)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")


class CreateOrderResponseSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    razorpayOrderId = serializers.CharField(required=False, help_text="Gateway mode only")
    key = serializers.CharField(required=False, help_text="Gateway mode only: public key for the checkout widget")
    demoMode = serializers.BooleanField(required=False, help_text="Demo mode only")
    message = serializers.CharField(required=False, help_text="Demo mode only")


class DemoCheckoutRequestSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()


class VerifyPaymentRequestSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()
    razorpay_order_id = serializers.CharField(max_length=100)
    razorpay_payment_id = serializers.CharField(max_length=100)
    razorpay_signature = serializers.CharField(max_length=256)


class PaymentConfirmedResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    order = OrderSerializer()
    paymentId = serializers.CharField()


class OrderStatusRequestSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[Order.STATUS_SHIPPED, Order.STATUS_DELIVERED])
