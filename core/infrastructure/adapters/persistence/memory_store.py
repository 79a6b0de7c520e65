"""
In-memory Store implementation.

Used by tests and local demos. Entities are copied in and out so callers
never share state with the store, the way rows behave in a database.

Failures can be injected per operation name, e.g.::

    store = InMemoryStore()
    store.fail_on("order_items.add_many")
"""
from copy import deepcopy
from datetime import datetime, timezone
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from core.domain.entities import (
    CatalogProduct,
    Customer,
    Order,
    OrderAddress,
    OrderItem,
    Payment,
    StatusHistoryEntry,
)
from core.domain.repositories import (
    CatalogRepository,
    CustomerRepository,
    OrderAddressRepository,
    OrderItemRepository,
    OrderRepository,
    PaymentRepository,
    StatusHistoryRepository,
    Store,
)


logger = logging.getLogger(__name__)


class SimulatedStoreError(RuntimeError):
    """Raised by an operation that was told to fail."""


class _Failures:
    def __init__(self) -> None:
        self.operations: Set[str] = set()

    def check(self, operation: str) -> None:
        if operation in self.operations:
            raise SimulatedStoreError(f"Simulated failure: {operation}")


class InMemoryCustomerRepository(CustomerRepository):
    def __init__(self, failures: _Failures):
        self._failures = failures
        self._storage: Dict[str, Customer] = {}

    async def find_by_id(self, customer_id: str) -> Optional[Customer]:
        return deepcopy(self._storage.get(customer_id))

    async def find_by_auth_user_id(self, auth_user_id: str) -> Optional[Customer]:
        for customer in self._storage.values():
            if customer.auth_user_id == auth_user_id:
                return deepcopy(customer)
        return None

    async def find_by_email(self, email: str) -> Optional[Customer]:
        for customer in self._storage.values():
            if customer.email == email:
                return deepcopy(customer)
        return None

    async def add(self, customer: Customer) -> Customer:
        self._failures.check("customers.add")
        self._storage[customer.id] = deepcopy(customer)
        logger.info(f"Customer saved to memory store: {customer.id}")
        return customer

    async def update(self, customer_id: str, changes: Dict[str, Any]) -> None:
        self._failures.check("customers.update")
        customer = self._storage.get(customer_id)
        if customer is None:
            return
        for name, value in changes.items():
            setattr(customer, name, value)

    def all(self) -> List[Customer]:
        return [deepcopy(c) for c in self._storage.values()]


class InMemoryOrderRepository(OrderRepository):
    def __init__(self, failures: _Failures):
        self._failures = failures
        self._storage: Dict[str, Order] = {}

    async def add(self, order: Order) -> Order:
        self._failures.check("orders.add")
        if any(o.order_number == order.order_number for o in self._storage.values()):
            raise SimulatedStoreError(f"Duplicate order number: {order.order_number}")
        self._storage[order.id] = deepcopy(order)
        logger.info(f"Order saved to memory store: {order.order_number} (status: {order.status})")
        return order

    async def find_by_number(self, order_number: str) -> Optional[Order]:
        for order in self._storage.values():
            if order.order_number == order_number:
                return deepcopy(order)
        return None

    async def find_all(
        self,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Order]:
        # Reverse insertion order first so equal timestamps still list newest first
        orders = [o for o in reversed(self._storage.values()) if status is None or o.status == status]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [deepcopy(o) for o in orders[offset:offset + limit]]

    async def update(self, order_id: str, changes: Dict[str, Any]) -> None:
        self._failures.check("orders.update")
        order = self._storage.get(order_id)
        if order is None:
            return
        for name, value in changes.items():
            setattr(order, name, value)
        order.updated_at = datetime.now(timezone.utc)

    async def delete(self, order_id: str) -> None:
        self._failures.check("orders.delete")
        self._storage.pop(order_id, None)
        logger.info(f"Order deleted from memory store: {order_id}")

    def count(self) -> int:
        return len(self._storage)


class InMemoryOrderItemRepository(OrderItemRepository):
    def __init__(self, failures: _Failures):
        self._failures = failures
        self._storage: List[OrderItem] = []

    async def add_many(self, items: Iterable[OrderItem]) -> None:
        batch = list(items)
        self._failures.check("order_items.add_many")
        self._storage.extend(batch)

    async def find_by_order(self, order_id: str) -> List[OrderItem]:
        return [item for item in self._storage if item.order_id == order_id]

    def count(self) -> int:
        return len(self._storage)


class InMemoryStatusHistoryRepository(StatusHistoryRepository):
    def __init__(self, failures: _Failures):
        self._failures = failures
        self._storage: List[StatusHistoryEntry] = []

    async def append(self, entry: StatusHistoryEntry) -> None:
        self._failures.check("status_history.append")
        self._storage.append(entry)

    async def find_by_order(self, order_id: str) -> List[StatusHistoryEntry]:
        entries = [e for e in self._storage if e.order_id == order_id]
        return sorted(entries, key=lambda e: e.created_at)


class InMemoryPaymentRepository(PaymentRepository):
    def __init__(self):
        self._storage: Dict[str, Payment] = {}

    async def find_by_id(self, payment_id: str) -> Optional[Payment]:
        return self._storage.get(payment_id)

    def put(self, payment: Payment) -> None:
        self._storage[payment.id] = payment


class InMemoryOrderAddressRepository(OrderAddressRepository):
    def __init__(self):
        self._storage: Dict[str, OrderAddress] = {}

    async def find_by_order(self, order_id: str) -> Optional[OrderAddress]:
        return self._storage.get(order_id)

    def put(self, address: OrderAddress) -> None:
        self._storage[address.order_id] = address


class InMemoryCatalogRepository(CatalogRepository):
    def __init__(self, products: Optional[Iterable[CatalogProduct]] = None):
        self._storage: Dict[str, CatalogProduct] = {}
        for product in products or []:
            self.put(product)

    async def find_many(self, product_ids: Iterable[str]) -> List[CatalogProduct]:
        return [self._storage[pid] for pid in dict.fromkeys(product_ids) if pid in self._storage]

    def put(self, product: CatalogProduct) -> None:
        self._storage[product.id] = product


class InMemoryStore(Store):
    """
    In-memory implementation of Store.

    Stores entities in dictionaries for testing/demo purposes.
    """

    def __init__(self, products: Optional[Iterable[CatalogProduct]] = None):
        self._failures = _Failures()
        self.customers = InMemoryCustomerRepository(self._failures)
        self.orders = InMemoryOrderRepository(self._failures)
        self.order_items = InMemoryOrderItemRepository(self._failures)
        self.status_history = InMemoryStatusHistoryRepository(self._failures)
        self.payments = InMemoryPaymentRepository()
        self.order_addresses = InMemoryOrderAddressRepository()
        self.catalog = InMemoryCatalogRepository(products)
        logger.info("InMemoryStore initialized (in-memory storage)")

    def fail_on(self, *operations: str) -> None:
        """Make the named operations raise SimulatedStoreError."""
        self._failures.operations.update(operations)

    def recover(self, *operations: str) -> None:
        """Stop failing the named operations (all when none given)."""
        if operations:
            self._failures.operations.difference_update(operations)
        else:
            self._failures.operations.clear()
