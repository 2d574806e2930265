from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from authentication.permissions import VendorRequired
from infrastructure.container import container
from marketplace.api.caching import cached_response, store_detail_key, stores_key, user_scoped_key
from marketplace.api.responses import error_response
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers import ListingSerializer, ProductListingSerializer
from marketplace.catalog.api.views.product_views import UUID_PATTERN
from marketplace.services import VendorService
from marketplace.vendors.api.serializers import (
    ListingCreateRequestSerializer,
    ListingUpdateRequestSerializer,
    StoreDetailResponseSerializer,
    StoreListItemSerializer,
    StoreListResponseSerializer,
    StoreSerializer,
    VendorDashboardResponseSerializer,
    VendorProfileUpdateSerializer,
    VendorSerializer,
)


class VendorViewSet(viewsets.ViewSet):
    """Vendor-side store management. All endpoints act on the caller's own store."""

    permission_classes = [VendorRequired]

    def get_service(self) -> VendorService:
        return container.vendor_service()

    @extend_schema(
        operation_id="vendors_me",
        summary="Get or update own store profile",
        description="""
        **GET** returns the caller's store profile.

        **PUT** updates any of: company_name, store_name, description, images,
        address, city, state, pincode. Fields not sent are left unchanged.
        """,
        request=VendorProfileUpdateSerializer,
        responses={
            200: OpenApiResponse(response=VendorSerializer, description="Store profile"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="No vendor profile"),
        },
        tags=["Marketplace - Vendors"],
    )
    @action(detail=False, methods=["get", "put"], url_path="me")
    @cached_response("session", user_scoped_key("vendor_profile"))
    def me(self, request):
        service = self.get_service()
        if request.method == "GET":
            result = service.get_vendor(request.user)
        else:
            serializer = VendorProfileUpdateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            result = service.update_profile(request.user, serializer.validated_data)

        if not result.ok:
            return error_response(result)
        return Response(VendorSerializer(result.value).data)

    @extend_schema(
        operation_id="vendors_dashboard",
        summary="Store dashboard",
        description="Listing counts, stock, sales from paid-or-later orders and rating summary.",
        responses={
            200: OpenApiResponse(response=VendorDashboardResponseSerializer, description="Dashboard"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="No vendor profile"),
        },
        tags=["Marketplace - Vendors"],
    )
    @action(detail=False, methods=["get"])
    @cached_response("session", user_scoped_key("vendor_dashboard"))
    def dashboard(self, request):
        result = self.get_service().dashboard(request.user)
        if not result.ok:
            return error_response(result)

        return Response({"vendor": VendorSerializer(result.value["vendor"]).data, "stats": result.value["stats"]})

    @extend_schema(
        operation_id="vendors_listings",
        summary="List or create own listings",
        description="""
        **GET** returns every listing of the caller's store, active or not.

        **POST** publishes a listing. Only verified vendors may publish.
        Send product_id to list an existing master product, or name and
        category to create a new one. Price must be at least 0.01.
        """,
        request=ListingCreateRequestSerializer,
        responses={
            200: OpenApiResponse(response=ListingSerializer(many=True), description="Own listings"),
            201: OpenApiResponse(response=ListingSerializer, description="Listing created"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid listing data"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Vendor not verified"),
        },
        tags=["Marketplace - Vendors"],
    )
    @action(detail=False, methods=["get", "post"])
    @cached_response("session", user_scoped_key("vendor_products"))
    def listings(self, request):
        service = self.get_service()
        if request.method == "GET":
            result = service.list_listings(request.user)
            if not result.ok:
                return error_response(result)
            return Response(ListingSerializer(result.value, many=True).data)

        serializer = ListingCreateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = service.create_listing(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ListingSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="vendors_listing_detail",
        summary="Update or delete an own listing",
        request=ListingUpdateRequestSerializer,
        responses={
            200: OpenApiResponse(response=ListingSerializer, description="Listing updated"),
            204: OpenApiResponse(description="Listing deleted"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the listing owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Listing not found"),
        },
        tags=["Marketplace - Vendors"],
    )
    @action(detail=False, methods=["patch", "delete"], url_path=rf"listings/(?P<listing_id>{UUID_PATTERN})")
    def listing_detail(self, request, listing_id=None):
        service = self.get_service()
        if request.method == "DELETE":
            result = service.delete_listing(request.user, listing_id)
            if not result.ok:
                return error_response(result)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = ListingUpdateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = service.update_listing(request.user, listing_id, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ListingSerializer(result.value).data)


class StoreViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]
    lookup_value_regex = UUID_PATTERN

    def get_service(self) -> VendorService:
        return container.vendor_service()

    @extend_schema(
        operation_id="stores_list",
        summary="List verified stores",
        parameters=[
            OpenApiParameter(name="q", type=str, description="Search store name or city"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 10, max: 50)"),
        ],
        responses={200: OpenApiResponse(response=StoreListResponseSerializer, description="Stores")},
        tags=["Marketplace - Stores"],
    )
    @cached_response("medium", stores_key)
    def list(self, request):
        params = request.query_params
        result = self.get_service().list_stores(params.get("q"), params.get("page"), params.get("limit"))
        return Response(
            {
                "stores": StoreListItemSerializer(result.value["stores"], many=True).data,
                "pagination": result.value["pagination"],
            }
        )

    @extend_schema(
        operation_id="stores_retrieve",
        summary="Store page",
        description="A verified store with its active listings and rating summary.",
        responses={
            200: OpenApiResponse(response=StoreDetailResponseSerializer, description="Store"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Store not found"),
        },
        tags=["Marketplace - Stores"],
    )
    @cached_response("medium", store_detail_key)
    def retrieve(self, request, pk=None):
        result = self.get_service().get_store(pk)
        if not result.ok:
            return error_response(result)

        return Response(
            {
                "store": StoreSerializer(result.value["store"]).data,
                "listings": ProductListingSerializer(result.value["listings"], many=True).data,
                "rating": result.value["rating"],
            }
        )
