"""Data layer - infrastructure persistence and mapping."""

from .mappers import CustomerMapper, OrderItemMapper, OrderMapper, StatusHistoryMapper
from .models import Base, CustomerModel, OrderItemModel, OrderModel, OrderSequenceModel
from .store import SqlAlchemyStore

__all__ = [
    "Base",
    "CustomerMapper",
    "CustomerModel",
    "OrderItemMapper",
    "OrderItemModel",
    "OrderMapper",
    "OrderModel",
    "OrderSequenceModel",
    "SqlAlchemyStore",
    "StatusHistoryMapper",
]
