"""Database models."""

from .base import Base
from .order_model import (
    CustomerModel,
    OrderAddressModel,
    OrderItemModel,
    OrderModel,
    OrderSequenceModel,
    PaymentModel,
    ProductModel,
    StatusHistoryModel,
)

__all__ = [
    "Base",
    "CustomerModel",
    "OrderAddressModel",
    "OrderItemModel",
    "OrderModel",
    "OrderSequenceModel",
    "PaymentModel",
    "ProductModel",
    "StatusHistoryModel",
]
