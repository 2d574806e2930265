from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.caching import (
    cached_response,
    listing_detail_key,
    master_search_key,
    product_detail_key,
    products_key,
)
from marketplace.api.responses import error_response
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers import (
    ListingSerializer,
    ProductBriefSerializer,
    ProductDetailResponseSerializer,
    ProductListingSerializer,
    ProductListResponseSerializer,
    ProductListSerializer,
)
from marketplace.services import CatalogService

UUID_PATTERN = r"[0-9a-fA-F-]{36}"


class ProductViewSet(viewsets.ViewSet):
    """
    Public catalog reads. Every endpoint is served from the response cache
    when possible; catalog writes elsewhere flush it.
    """

    permission_classes = [AllowAny]
    lookup_value_regex = UUID_PATTERN

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="""
        **What it receives:**
        - Optional filters: q (name/category search), category, min_price, max_price, in_stock, vendor
        - Optional ordering: created_at, name, price (prefix with - for descending)
        - Pagination parameters (page, limit)

        **What it returns:**
        - Products with at least one active listing, with price range, stock and rating
        - Pagination envelope (currentPage, totalPages, totalProducts, hasNext, hasPrev)
        """,
        parameters=[
            OpenApiParameter(name="q", type=str, description="Search in name and category"),
            OpenApiParameter(name="category", type=str, description="Exact category"),
            OpenApiParameter(name="min_price", type=float, description="Minimum listing price"),
            OpenApiParameter(name="max_price", type=float, description="Maximum listing price"),
            OpenApiParameter(name="in_stock", type=bool, description="Only products with stock"),
            OpenApiParameter(name="ordering", type=str, description="created_at, name or price"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 10, max: 50)"),
        ],
        responses={
            200: OpenApiResponse(response=ProductListResponseSerializer, description="Products retrieved"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid filter value"),
        },
        tags=["Marketplace - Products"],
    )
    @cached_response("medium", products_key)
    def list(self, request):
        params = request.query_params
        result = self.get_service().list_products(params, params.get("page"), params.get("limit"))
        if not result.ok:
            return error_response(result)

        return Response(
            {
                "products": ProductListSerializer(result.value["products"], many=True).data,
                "pagination": result.value["pagination"],
            }
        )

    @extend_schema(
        operation_id="products_retrieve",
        summary="Product detail",
        description="Product with its active listings (cheapest first) and rating summary.",
        responses={
            200: OpenApiResponse(response=ProductDetailResponseSerializer, description="Product found"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    @cached_response("medium", product_detail_key)
    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk)
        if not result.ok:
            return error_response(result)

        return Response(
            {
                "product": ProductBriefSerializer(result.value["product"]).data,
                "listings": ProductListingSerializer(result.value["listings"], many=True).data,
                "rating": result.value["rating"],
            }
        )

    @extend_schema(
        operation_id="products_listing_retrieve",
        summary="Listing detail",
        responses={
            200: OpenApiResponse(response=ListingSerializer, description="Listing found"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Listing not found"),
        },
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"], url_path=rf"listings/(?P<listing_id>{UUID_PATTERN})")
    @cached_response("medium", listing_detail_key)
    def listing(self, request, listing_id=None):
        result = self.get_service().get_listing(listing_id)
        if not result.ok:
            return error_response(result, http_status=status.HTTP_404_NOT_FOUND)
        return Response(ListingSerializer(result.value).data)

    @extend_schema(
        operation_id="products_search_master",
        summary="Search the master catalog",
        description="""
        Used by vendors to find an existing product before creating a listing.
        Returns at most 10 products whose name contains q; an empty q returns [].
        """,
        parameters=[OpenApiParameter(name="q", type=str, description="Name fragment")],
        responses={200: OpenApiResponse(response=ProductBriefSerializer(many=True), description="Matches")},
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"], url_path="search-master")
    @cached_response("long", master_search_key)
    def search_master(self, request):
        result = self.get_service().search_master(request.query_params.get("q"))
        return Response(ProductBriefSerializer(result.value, many=True).data)
