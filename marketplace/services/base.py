"""
Base classes and utilities for the service layer.

Services return a ServiceResult for expected failures (validation, missing
records, business rule violations) and let unexpected exceptions propagate.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code from ErrorCodes (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(order)
        >>> result = service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None

    def to_dict(self) -> dict:
        """Error envelope used by API responses."""
        if self.ok:
            return {"success": True, "data": self.value}
        return {"error": self.error, "detail": self.error_detail}


def service_ok(value: T = None) -> ServiceResult[T]:
    """Create a successful ServiceResult."""
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., ErrorCodes.INSUFFICIENT_STOCK)
        error_detail: Human-readable error message
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator

    Usage:
        class CatalogService(BaseService):
            @BaseService.log_performance
            def list_products(self, filters):
                self.logger.info(f"Listing products with filters: {filters}")
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log execution time of service methods and the outcome of
        any ServiceResult they return. Exceptions are logged and re-raised.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper


class ErrorCodes:
    """Standard error codes used across marketplace services."""

    # Catalog errors
    PRODUCT_NOT_FOUND = "product_not_found"
    LISTING_NOT_FOUND = "listing_not_found"
    INVALID_PRODUCT_DATA = "invalid_product_data"

    # Vendor errors
    VENDOR_NOT_FOUND = "vendor_not_found"
    VENDOR_NOT_VERIFIED = "vendor_not_verified"
    NOT_LISTING_OWNER = "not_listing_owner"
    VENDOR_HAS_ORDERS = "vendor_has_orders"

    # Cart errors
    EMPTY_CART = "empty_cart"
    INVALID_QUANTITY = "invalid_quantity"
    ITEM_NOT_IN_CART = "item_not_in_cart"

    # Order errors
    ORDER_NOT_FOUND = "order_not_found"
    ORDER_NOT_PENDING = "order_not_pending"
    INVALID_TRANSITION = "invalid_transition"
    PROVIDER_MISMATCH = "provider_mismatch"

    # Inventory errors
    INSUFFICIENT_STOCK = "insufficient_stock"

    # Payment errors
    INVALID_SIGNATURE = "invalid_signature"
    PAYMENT_NOT_FOUND = "payment_not_found"
    PAYOUT_NOT_FOUND = "payout_not_found"
    PAYMENT_ACCOUNT_NOT_FOUND = "payment_account_not_found"

    # Review errors
    REVIEW_NOT_FOUND = "review_not_found"
    REVIEW_EXISTS = "review_exists"
    ORDER_NOT_ELIGIBLE = "order_not_eligible"
    PRODUCT_NOT_IN_ORDER = "product_not_in_order"

    # Moderation errors
    REPORT_NOT_FOUND = "report_not_found"
    REPORT_EXISTS = "report_exists"
    BUG_REPORT_NOT_FOUND = "bug_report_not_found"

    # User errors
    USER_NOT_FOUND = "user_not_found"
    USER_HAS_ORDERS = "user_has_orders"

    # Permission errors
    PERMISSION_DENIED = "permission_denied"

    # Validation errors
    VALIDATION_ERROR = "validation_error"

    # Internal errors
    INTERNAL_ERROR = "internal_error"
