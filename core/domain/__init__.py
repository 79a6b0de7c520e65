"""Domain layer - pure domain models and interfaces."""

from .entities import Customer, Order, OrderItem
from .repositories import Store
from .value_objects import OrderNumber, split_tax

__all__ = [
    "Customer",
    "Order",
    "OrderItem",
    "OrderNumber",
    "Store",
    "split_tax",
]
