from .catalog import Listing, Product
from .interaction import Review

__all__ = ["Product", "Listing", "Review"]
