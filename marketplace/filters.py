import django_filters
from django.db.models import Exists, OuterRef, Q

from .models import Listing, Product


class ProductFilter(django_filters.FilterSet):
    """
    Filter for catalog products.

    Expects a queryset annotated with ``min_price``, ``max_price`` and
    ``total_stock`` over active listings (see CatalogService.product_queryset).
    """

    # Search in name and category
    q = django_filters.CharFilter(method="filter_search")
    category = django_filters.CharFilter(field_name="category", lookup_expr="icontains")

    # Price range: some active listing must fall inside it
    min_price = django_filters.NumberFilter(field_name="max_price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="min_price", lookup_expr="lte")

    in_stock = django_filters.BooleanFilter(method="filter_in_stock")
    vendor = django_filters.UUIDFilter(method="filter_vendor")

    ordering = django_filters.OrderingFilter(
        fields=(
            ("created_at", "created_at"),
            ("name", "name"),
            ("min_price", "price"),
        ),
    )

    class Meta:
        model = Product
        fields = ["q", "category", "min_price", "max_price", "in_stock", "vendor"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(category__icontains=value))

    def filter_in_stock(self, queryset, name, value):
        if value:
            return queryset.filter(total_stock__gt=0)
        return queryset.filter(Q(total_stock=0) | Q(total_stock__isnull=True))

    def filter_vendor(self, queryset, name, value):
        listings = Listing.objects.filter(product=OuterRef("pk"), vendor_id=value, is_active=True)
        return queryset.filter(Exists(listings))
