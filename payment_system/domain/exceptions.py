class PaymentError(Exception):
    """Base class for payment system exceptions."""

    pass


class PayoutComputationError(PaymentError):
    """Raised when vendor payouts cannot be computed or persisted for a payment."""

    pass


class StockConflictError(PaymentError):
    """Raised inside the confirmation transaction when a conditional stock decrement fails."""

    def __init__(self, product_name: str, requested: int, available: int):
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient stock for {product_name}. Available: {available}")
