from .product_views import ProductViewSet
from .review_views import ReviewViewSet

__all__ = ["ProductViewSet", "ReviewViewSet"]
