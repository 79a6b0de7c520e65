"""Domain entities."""
from .customer import Customer, ShippingAddress
from .order import (
    Order,
    OrderAddress,
    OrderDetails,
    OrderItem,
    Payment,
    StatusHistoryEntry,
    TRACKING_FIELDS,
)
from .product import CatalogProduct

__all__ = [
    "CatalogProduct",
    "Customer",
    "Order",
    "OrderAddress",
    "OrderDetails",
    "OrderItem",
    "Payment",
    "ShippingAddress",
    "StatusHistoryEntry",
    "TRACKING_FIELDS",
]
