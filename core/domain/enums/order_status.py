"""
Order lifecycle enums.

Status values for orders, payments and gateways.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Fulfilment status of an order."""

    PENDING = "pending"
    PROCESSING = "processing"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class PaymentStatus(str, Enum):
    """Payment status, updated out of band by the gateway callback."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentGateway(str, Enum):
    """Payment method chosen at checkout."""

    COD = "COD"
    PREPAID = "Prepaid"


class FulfillmentPartner(str, Enum):
    """Production and shipping vendors an order can be routed to."""

    QIKINK = "Qikink"
    PRINTROVE = "Printrove"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
