"""
Repository interfaces for the ordering context.

Every call is its own short transaction. Order creation relies on that:
the order insert and the item batch insert commit separately, and a failed
item insert is undone by deleting the order row.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from ..entities import (
    CatalogProduct,
    Customer,
    Order,
    OrderAddress,
    OrderItem,
    Payment,
    StatusHistoryEntry,
)


class CustomerRepository(ABC):
    """Customer persistence."""

    @abstractmethod
    async def find_by_id(self, customer_id: str) -> Optional[Customer]:
        pass

    @abstractmethod
    async def find_by_auth_user_id(self, auth_user_id: str) -> Optional[Customer]:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Customer]:
        """Exact, case-sensitive match on the stored email."""
        pass

    @abstractmethod
    async def add(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def update(self, customer_id: str, changes: Dict[str, Any]) -> None:
        pass


class OrderRepository(ABC):
    """Order row persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def find_by_number(self, order_number: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def find_all(
        self,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Order]:
        """Newest first."""
        pass

    @abstractmethod
    async def update(self, order_id: str, changes: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    async def delete(self, order_id: str) -> None:
        """Only used to compensate a failed item insert."""
        pass


class OrderItemRepository(ABC):
    """Order item persistence. Items are inserted once, in one batch."""

    @abstractmethod
    async def add_many(self, items: Iterable[OrderItem]) -> None:
        pass

    @abstractmethod
    async def find_by_order(self, order_id: str) -> List[OrderItem]:
        pass


class StatusHistoryRepository(ABC):
    """Append-only status history."""

    @abstractmethod
    async def append(self, entry: StatusHistoryEntry) -> None:
        pass

    @abstractmethod
    async def find_by_order(self, order_id: str) -> List[StatusHistoryEntry]:
        """Oldest first."""
        pass


class PaymentRepository(ABC):
    """Read access to gateway payment records."""

    @abstractmethod
    async def find_by_id(self, payment_id: str) -> Optional[Payment]:
        pass


class OrderAddressRepository(ABC):
    """Read access to legacy per-order address records."""

    @abstractmethod
    async def find_by_order(self, order_id: str) -> Optional[OrderAddress]:
        pass


class CatalogRepository(ABC):
    """Read-only product lookups."""

    @abstractmethod
    async def find_many(self, product_ids: Iterable[str]) -> List[CatalogProduct]:
        pass


class Store(ABC):
    """
    Datastore handle.

    Built once at process start and passed into every service.
    """

    customers: CustomerRepository
    orders: OrderRepository
    order_items: OrderItemRepository
    status_history: StatusHistoryRepository
    payments: PaymentRepository
    order_addresses: OrderAddressRepository
    catalog: CatalogRepository
