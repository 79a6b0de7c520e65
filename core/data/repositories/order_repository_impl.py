"""
SQLAlchemy implementations of the ordering repositories.

Every public call opens its own session and commits before returning.
Nothing spans two calls, so a failed item insert leaves the order row in
place until the caller compensates.
"""

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

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
)

from ..mappers import (
    CatalogProductMapper,
    CustomerMapper,
    OrderAddressMapper,
    OrderItemMapper,
    OrderMapper,
    PaymentMapper,
    StatusHistoryMapper,
)
from ..models.order_model import (
    CustomerModel,
    OrderAddressModel,
    OrderItemModel,
    OrderModel,
    PaymentModel,
    ProductModel,
    StatusHistoryModel,
)


class _SessionScoped:
    """Base for repositories that open one session per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory producing async sessions
        """
        self._session_factory = session_factory


class SqlAlchemyCustomerRepository(_SessionScoped, CustomerRepository):
    """Customer persistence backed by the customers table."""

    async def find_by_id(self, customer_id: str) -> Optional[Customer]:
        async with self._session_factory() as session:
            model = await session.get(CustomerModel, customer_id)
            return CustomerMapper.to_domain(model) if model else None

    async def find_by_auth_user_id(self, auth_user_id: str) -> Optional[Customer]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(CustomerModel)
                .where(CustomerModel.auth_user_id == auth_user_id)
                .limit(1)
            )
            model = result.scalars().first()
            return CustomerMapper.to_domain(model) if model else None

    async def find_by_email(self, email: str) -> Optional[Customer]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(CustomerModel).where(CustomerModel.email == email).limit(1)
            )
            model = result.scalars().first()
            return CustomerMapper.to_domain(model) if model else None

    async def add(self, customer: Customer) -> Customer:
        async with self._session_factory() as session:
            async with session.begin():
                session.add(CustomerMapper.to_persistence(customer))
        return customer

    async def update(self, customer_id: str, changes: Dict[str, Any]) -> None:
        if not changes:
            return
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(
                    update(CustomerModel)
                    .where(CustomerModel.id == customer_id)
                    .values(**changes)
                )


class SqlAlchemyOrderRepository(_SessionScoped, OrderRepository):
    """Order persistence backed by the orders table."""

    async def add(self, order: Order) -> Order:
        """Insert a new order row and commit.

        Args:
            order: Order aggregate (items are inserted separately)

        Returns:
            The persisted order
        """
        async with self._session_factory() as session:
            async with session.begin():
                session.add(OrderMapper.to_persistence(order))
        return order

    async def find_by_number(self, order_number: str) -> Optional[Order]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(OrderModel).where(OrderModel.order_number == order_number)
            )
            model = result.scalar_one_or_none()
            return OrderMapper.to_domain(model) if model else None

    async def find_all(
        self,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Order]:
        """List orders, newest first.

        Args:
            status: Optional status filter
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            List of Order aggregates
        """
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc())
        if status:
            stmt = stmt.where(OrderModel.status == status)
        stmt = stmt.limit(limit).offset(offset)

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def update(self, order_id: str, changes: Dict[str, Any]) -> None:
        if not changes:
            return
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(
                    update(OrderModel).where(OrderModel.id == order_id).values(**changes)
                )

    async def delete(self, order_id: str) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(delete(OrderModel).where(OrderModel.id == order_id))


class SqlAlchemyOrderItemRepository(_SessionScoped, OrderItemRepository):
    """Order item persistence backed by the order_items table."""

    async def add_many(self, items: Iterable[OrderItem]) -> None:
        """Insert all items in one transaction (all or nothing)."""
        models = [OrderItemMapper.to_persistence(item) for item in items]
        async with self._session_factory() as session:
            async with session.begin():
                session.add_all(models)

    async def find_by_order(self, order_id: str) -> List[OrderItem]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(OrderItemModel)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.created_at)
            )
            return [OrderItemMapper.to_domain(model) for model in result.scalars().all()]


class SqlAlchemyStatusHistoryRepository(_SessionScoped, StatusHistoryRepository):
    """Append-only status history backed by order_status_history."""

    async def append(self, entry: StatusHistoryEntry) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                session.add(StatusHistoryMapper.to_persistence(entry))

    async def find_by_order(self, order_id: str) -> List[StatusHistoryEntry]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(StatusHistoryModel)
                .where(StatusHistoryModel.order_id == order_id)
                .order_by(StatusHistoryModel.created_at.asc())
            )
            return [StatusHistoryMapper.to_domain(m) for m in result.scalars().all()]


class SqlAlchemyPaymentRepository(_SessionScoped, PaymentRepository):
    async def find_by_id(self, payment_id: str) -> Optional[Payment]:
        async with self._session_factory() as session:
            model = await session.get(PaymentModel, payment_id)
            return PaymentMapper.to_domain(model) if model else None


class SqlAlchemyOrderAddressRepository(_SessionScoped, OrderAddressRepository):
    async def find_by_order(self, order_id: str) -> Optional[OrderAddress]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(OrderAddressModel)
                .where(OrderAddressModel.order_id == order_id)
                .limit(1)
            )
            model = result.scalars().first()
            return OrderAddressMapper.to_domain(model) if model else None


class SqlAlchemyCatalogRepository(_SessionScoped, CatalogRepository):
    """Read-only product lookups against the products table."""

    async def find_many(self, product_ids: Iterable[str]) -> List[CatalogProduct]:
        ids = list(dict.fromkeys(product_ids))
        if not ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProductModel).where(ProductModel.id.in_(ids))
            )
            return [CatalogProductMapper.to_domain(m) for m in result.scalars().all()]
