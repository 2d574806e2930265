from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import VendorRequired
from infrastructure.container import container
from marketplace.api.caching import cached_response, product_reviews_key
from marketplace.api.responses import error, error_response
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers import (
    ProductReviewsResponseSerializer,
    ReviewCreateRequestSerializer,
    ReviewSerializer,
    ReviewUpdateRequestSerializer,
    VendorReviewsResponseSerializer,
)
from marketplace.catalog.api.views.product_views import UUID_PATTERN
from marketplace.models import Vendor
from marketplace.services import ErrorCodes, ReviewService


class ReviewViewSet(viewsets.ViewSet):
    """
    Reviews are gated on purchase: the caller must own a paid order that
    contains the reviewed (product, vendor) pair.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    def get_service(self) -> ReviewService:
        return container.review_service()

    def get_permissions(self):
        if self.action == "product":
            return [AllowAny()]
        if self.action == "vendor_reviews":
            return [VendorRequired()]
        return super().get_permissions()

    @extend_schema(
        operation_id="reviews_create",
        summary="Review a purchased product",
        description="""
        **What it receives:**
        - orderId, productId, vendorId identifying a line of a paid order
        - rating (1-5) and optional comment (max 500 characters)

        **What it returns:**
        - The created review
        - 400 order_not_eligible / product_not_in_order / review_exists
        """,
        request=ReviewCreateRequestSerializer,
        responses={
            201: OpenApiResponse(response=ReviewSerializer, description="Review created"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Not eligible or duplicate"),
        },
        tags=["Marketplace - Reviews"],
    )
    def create(self, request):
        serializer = ReviewCreateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = self.get_service().create_review(
            request.user,
            data["orderId"],
            data["productId"],
            data["vendorId"],
            data["rating"],
            data.get("comment", ""),
        )
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="reviews_product",
        summary="Reviews of a product",
        parameters=[
            OpenApiParameter(name="sort", type=str, description="newest, oldest, highest, lowest or helpful"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 10, max: 50)"),
        ],
        responses={
            200: OpenApiResponse(response=ProductReviewsResponseSerializer, description="Reviews with summary"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Unknown sort order"),
        },
        tags=["Marketplace - Reviews"],
    )
    @action(detail=False, methods=["get"], url_path=rf"product/(?P<product_id>{UUID_PATTERN})")
    @cached_response("short", product_reviews_key)
    def product(self, request, product_id=None):
        params = request.query_params
        result = self.get_service().list_product_reviews(
            product_id, params.get("sort"), params.get("page"), params.get("limit")
        )
        if not result.ok:
            return error_response(result)

        data = dict(result.value)
        data["reviews"] = ReviewSerializer(data["reviews"], many=True).data
        return Response(data)

    @extend_schema(
        operation_id="reviews_vendor_mine",
        summary="Reviews of the caller's store",
        parameters=[
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 10, max: 50)"),
        ],
        responses={
            200: OpenApiResponse(response=VendorReviewsResponseSerializer, description="Store reviews"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="No vendor profile"),
        },
        tags=["Marketplace - Reviews"],
    )
    @action(detail=False, methods=["get"], url_path="vendor/my-reviews")
    def vendor_reviews(self, request):
        vendor = Vendor.objects.filter(user=request.user).first()
        if vendor is None:
            return error(ErrorCodes.VENDOR_NOT_FOUND, "Vendor profile not found")

        params = request.query_params
        result = self.get_service().vendor_reviews(vendor, params.get("page"), params.get("limit"))
        data = dict(result.value)
        data["reviews"] = ReviewSerializer(data["reviews"], many=True).data
        return Response(data)

    @extend_schema(
        operation_id="reviews_mine",
        summary="Reviews written by the caller",
        responses={200: OpenApiResponse(response=ReviewSerializer(many=True), description="Own reviews")},
        tags=["Marketplace - Reviews"],
    )
    @action(detail=False, methods=["get"], url_path="my-reviews")
    def my_reviews(self, request):
        result = self.get_service().user_reviews(request.user)
        return Response(ReviewSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="reviews_update",
        summary="Update own review",
        request=ReviewUpdateRequestSerializer,
        responses={
            200: OpenApiResponse(response=ReviewSerializer, description="Review updated"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Not found or not the author"),
        },
        tags=["Marketplace - Reviews"],
    )
    def update(self, request, pk=None):
        serializer = ReviewUpdateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_review(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data)

    @extend_schema(
        operation_id="reviews_delete",
        summary="Delete own review",
        responses={
            204: OpenApiResponse(description="Review deleted"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Not found or not the author"),
        },
        tags=["Marketplace - Reviews"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_review(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
