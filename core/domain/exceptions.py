"""
Domain exceptions.

The API layer maps each class to an HTTP status; anything outside this
hierarchy is treated as an upstream failure (500).
"""
from typing import Optional


class OrderingError(Exception):
    """Base class for ordering errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrderValidationError(OrderingError):
    """Client supplied missing or invalid data. Nothing was written."""

    status_code = 400


class AccessDeniedError(OrderingError):
    """Requester may not see or change the order."""

    status_code = 403

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class OrderNotFoundError(OrderingError):
    """Unknown order number."""

    status_code = 404

    def __init__(self, message: str = "Order not found"):
        super().__init__(message)


class OrderPersistenceError(OrderingError):
    """A write to the store failed."""

    status_code = 500


class CompensationFailedError(OrderPersistenceError):
    """
    Item insert failed and the order row could not be removed.

    The order exists with zero items and needs manual cleanup.
    """

    def __init__(self, message: str, order_id: str, order_number: Optional[str] = None):
        super().__init__(message)
        self.order_id = order_id
        self.order_number = order_number
