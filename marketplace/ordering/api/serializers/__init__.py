from .order_serializers import (
    CreateOrderRequestSerializer,
    CreateOrderResponseSerializer,
    DemoCheckoutRequestSerializer,
    OrderItemSerializer,
    OrderListResponseSerializer,
    OrderSerializer,
    OrderStatusRequestSerializer,
    PaymentConfirmedResponseSerializer,
    VerifyPaymentRequestSerializer,
)
