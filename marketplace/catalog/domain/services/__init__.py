from .catalog_service import CatalogService, rating_summary
from .review_service import ReviewService

__all__ = ["CatalogService", "ReviewService", "rating_summary"]
