"""SQLAlchemy repository implementations."""

from .order_repository_impl import (
    SqlAlchemyCatalogRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyOrderAddressRepository,
    SqlAlchemyOrderItemRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyStatusHistoryRepository,
)

__all__ = [
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyOrderAddressRepository",
    "SqlAlchemyOrderItemRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyStatusHistoryRepository",
]
