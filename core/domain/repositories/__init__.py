"""Repository interfaces."""
from .order_repository import (
    CatalogRepository,
    CustomerRepository,
    OrderAddressRepository,
    OrderItemRepository,
    OrderRepository,
    PaymentRepository,
    StatusHistoryRepository,
    Store,
)

__all__ = [
    "CatalogRepository",
    "CustomerRepository",
    "OrderAddressRepository",
    "OrderItemRepository",
    "OrderRepository",
    "PaymentRepository",
    "StatusHistoryRepository",
    "Store",
]
