from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.responses import error_response
from marketplace.api.serializers import ErrorResponseSerializer, MessageResponseSerializer
from marketplace.cart.api.serializers import (
    CartAddRequestSerializer,
    CartRemoveRequestSerializer,
    CartResponseSerializer,
    CartUpdateRequestSerializer,
)
from marketplace.services import CartService, ErrorCodes


class CartViewSet(viewsets.ViewSet):
    """
    Session cart. Works for anonymous sessions too; checkout requires a
    signed-in (or guest) account.
    """

    permission_classes = [AllowAny]

    def get_service(self) -> CartService:
        return container.cart_service()

    @extend_schema(
        operation_id="cart_get",
        summary="Get cart",
        responses={200: OpenApiResponse(response=CartResponseSerializer, description="Cart lines and total")},
        tags=["Marketplace - Cart"],
    )
    def list(self, request):
        result = self.get_service().get_cart(request.session)
        return Response(result.value)

    @extend_schema(
        operation_id="cart_add",
        summary="Add a listing to the cart",
        description="""
        **What it receives:**
        - listingId and quantity (default 1)

        **What it returns:**
        - The updated cart
        - 400 insufficient_stock when the merged quantity exceeds stock
        - 404 listing_not_found when the listing is missing or inactive
        """,
        request=CartAddRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Item added"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Insufficient stock"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Listing not found"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"], url_path="add")
    def add_item(self, request):
        serializer = CartAddRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().add_item(
            request.session, serializer.validated_data["listingId"], serializer.validated_data["quantity"]
        )
        if not result.ok:
            http_status = status.HTTP_404_NOT_FOUND if result.error == ErrorCodes.LISTING_NOT_FOUND else None
            return error_response(result, http_status=http_status)
        return Response(result.value)

    @extend_schema(
        operation_id="cart_update",
        summary="Set a line's quantity",
        request=CartUpdateRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Cart updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Empty cart or insufficient stock"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Item not in cart"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"], url_path="update")
    def update_item(self, request):
        serializer = CartUpdateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_item(
            request.session, serializer.validated_data["listingId"], serializer.validated_data["quantity"]
        )
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="cart_remove",
        summary="Remove a line",
        request=CartRemoveRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Line removed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Cart is empty"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"], url_path="remove")
    def remove_item(self, request):
        serializer = CartRemoveRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().remove_item(request.session, serializer.validated_data["listingId"])
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="cart_clear",
        summary="Empty the cart",
        request=None,
        responses={200: OpenApiResponse(response=MessageResponseSerializer, description="Cart cleared")},
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"])
    def clear(self, request):
        self.get_service().clear(request.session)
        return Response({"message": "Cart cleared"})
