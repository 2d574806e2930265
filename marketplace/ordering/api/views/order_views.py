from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import VendorRequired
from infrastructure.container import container
from infrastructure.payments import PaymentMode
from marketplace.api.responses import error, error_response
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.views.product_views import UUID_PATTERN
from marketplace.models import Vendor
from marketplace.ordering.api.serializers import (
    CreateOrderRequestSerializer,
    CreateOrderResponseSerializer,
    DemoCheckoutRequestSerializer,
    OrderListResponseSerializer,
    OrderSerializer,
    OrderStatusRequestSerializer,
    PaymentConfirmedResponseSerializer,
    VerifyPaymentRequestSerializer,
)
from marketplace.services import ErrorCodes, OrderService

PAGINATION_PARAMETERS = [
    OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
    OpenApiParameter(name="limit", type=int, description="Items per page (default: 10, max: 50)"),
]


class OrderViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    def get_service(self) -> OrderService:
        return container.order_service()

    def get_permissions(self):
        if self.action == "vendor_orders":
            return [VendorRequired()]
        return super().get_permissions()

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    @extend_schema(
        operation_id="orders_create",
        summary="Create a pending order from the session cart",
        description="""
        **What it receives:**
        - The session cart (nothing to send besides optional shippingAddress and notes)

        **What it returns:**
        - orderId, amount and currency
        - Gateway mode: razorpayOrderId and key for the checkout widget
        - Demo mode (gateway unconfigured or unreachable): demoMode=true and a message

        Listings are re-read; prices and stock are checked against the current
        listing. Stock is only reserved when payment is confirmed.
        """,
        request=CreateOrderRequestSerializer,
        responses={
            201: OpenApiResponse(response=CreateOrderResponseSerializer, description="Pending order created"),
            400: OpenApiResponse(
                response=ErrorResponseSerializer, description="Empty cart, missing listing or insufficient stock"
            ),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["post"], url_path="create-order")
    def create_order(self, request):
        serializer = CreateOrderRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart_lines = container.cart_service().lines(request.session)
        result = self.get_service().create_order(
            request.user,
            cart_lines,
            shipping_address=serializer.validated_data["shippingAddress"],
            notes=serializer.validated_data["notes"],
        )
        if not result.ok:
            return error_response(result)

        order, gateway_order = result.value["order"], result.value["gateway_order"]
        data = {"orderId": order.id, "amount": order.total_amount, "currency": order.currency}
        if gateway_order.mode == PaymentMode.GATEWAY:
            data.update({"razorpayOrderId": gateway_order.order_id, "key": gateway_order.key_id})
        else:
            data.update(
                {
                    "demoMode": True,
                    "message": "Payment gateway unavailable; confirm this order with demo checkout",
                }
            )
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="orders_demo_checkout",
        summary="Confirm a demo-mode order",
        request=DemoCheckoutRequestSerializer,
        responses={
            200: OpenApiResponse(response=PaymentConfirmedResponseSerializer, description="Order paid"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Not pending, wrong mode or no stock"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["post"], url_path="demo-checkout")
    def demo_checkout(self, request):
        serializer = DemoCheckoutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().confirm_payment(
            serializer.validated_data["orderId"], request.user, PaymentMode.DEMO.value, session=request.session
        )
        return self._confirmation_response(result)

    @extend_schema(
        operation_id="orders_verify_payment",
        summary="Verify a gateway payment",
        description="""
        **What it receives:**
        - orderId and the razorpay_order_id, razorpay_payment_id and
          razorpay_signature returned by the checkout widget

        **What it returns:**
        - The paid order
        - 400 invalid_signature when the signature does not match; the order stays pending
        """,
        request=VerifyPaymentRequestSerializer,
        responses={
            200: OpenApiResponse(response=PaymentConfirmedResponseSerializer, description="Order paid"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid signature or not pending"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["post"], url_path="verify-payment")
    def verify_payment(self, request):
        serializer = VerifyPaymentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        payload = {
            "razorpay_order_id": data["razorpay_order_id"],
            "razorpay_payment_id": data["razorpay_payment_id"],
            "razorpay_signature": data["razorpay_signature"],
        }
        result = self.get_service().confirm_payment(
            data["orderId"], request.user, PaymentMode.GATEWAY.value, payload=payload, session=request.session
        )
        return self._confirmation_response(result)

    def _confirmation_response(self, result):
        if not result.ok:
            return error_response(result)

        return Response(
            {
                "message": "Payment confirmed",
                "order": OrderSerializer(result.value["order"]).data,
                "paymentId": result.value["payment"].gateway_payment_id,
            }
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @extend_schema(
        operation_id="orders_mine",
        summary="List own orders",
        parameters=PAGINATION_PARAMETERS,
        responses={200: OpenApiResponse(response=OrderListResponseSerializer, description="Orders")},
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["get"], url_path="my-orders")
    def my_orders(self, request):
        params = request.query_params
        result = self.get_service().list_orders(request.user, params.get("page"), params.get("limit"))
        return Response(
            {
                "orders": OrderSerializer(result.value["orders"], many=True).data,
                "pagination": result.value["pagination"],
            }
        )

    @extend_schema(
        operation_id="orders_vendor_mine",
        summary="List orders containing the caller's listings",
        description="Pending orders are excluded; each order shows only the caller's lines.",
        parameters=PAGINATION_PARAMETERS,
        responses={
            200: OpenApiResponse(response=OrderListResponseSerializer, description="Orders"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="No vendor profile"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["get"], url_path="vendor/my-orders")
    def vendor_orders(self, request):
        vendor = Vendor.objects.filter(user=request.user).first()
        if vendor is None:
            return error(ErrorCodes.VENDOR_NOT_FOUND, "Vendor profile not found")

        params = request.query_params
        result = self.get_service().list_vendor_orders(vendor, params.get("page"), params.get("limit"))
        return Response(
            {
                "orders": OrderSerializer(result.value["orders"], many=True).data,
                "pagination": result.value["pagination"],
            }
        )

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Order detail",
        responses={
            200: OpenApiResponse(response=OrderSerializer, description="Order"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_order(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value).data)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @extend_schema(
        operation_id="orders_update_status",
        summary="Mark an order shipped or delivered",
        request=OrderStatusRequestSerializer,
        responses={
            200: OpenApiResponse(response=OrderSerializer, description="Status updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid transition"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not a vendor in this order"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = OrderStatusRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_status(request.user, pk, serializer.validated_data["status"])
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value).data)

    @extend_schema(
        operation_id="orders_cancel",
        summary="Cancel a pending or paid order",
        description="Stock is not restored. Cancelling a paid order needs a manual refund.",
        request=None,
        responses={
            200: OpenApiResponse(response=OrderSerializer, description="Order cancelled"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Order already shipped"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        result = self.get_service().cancel_order(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value).data)
