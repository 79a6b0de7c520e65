"""SQLAlchemy-backed datastore handle."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.repositories import Store

from .repositories import (
    SqlAlchemyCatalogRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyOrderAddressRepository,
    SqlAlchemyOrderItemRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyStatusHistoryRepository,
)


class SqlAlchemyStore(Store):
    """
    Datastore handle over a shared session factory.

    Responsibilities:
    1. Hold the session factory for the process lifetime
    2. Lazy initialization of repositories

    Unlike a unit of work it never holds a session open: each repository
    call runs in its own transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the store.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory

        # Lazy-loaded repositories
        self._customers: Optional[SqlAlchemyCustomerRepository] = None
        self._orders: Optional[SqlAlchemyOrderRepository] = None
        self._order_items: Optional[SqlAlchemyOrderItemRepository] = None
        self._status_history: Optional[SqlAlchemyStatusHistoryRepository] = None
        self._payments: Optional[SqlAlchemyPaymentRepository] = None
        self._order_addresses: Optional[SqlAlchemyOrderAddressRepository] = None
        self._catalog: Optional[SqlAlchemyCatalogRepository] = None

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    @property
    def customers(self) -> SqlAlchemyCustomerRepository:
        if self._customers is None:
            self._customers = SqlAlchemyCustomerRepository(self._session_factory)
        return self._customers

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository.

        Returns:
            SqlAlchemyOrderRepository instance
        """
        if self._orders is None:
            self._orders = SqlAlchemyOrderRepository(self._session_factory)
        return self._orders

    @property
    def order_items(self) -> SqlAlchemyOrderItemRepository:
        if self._order_items is None:
            self._order_items = SqlAlchemyOrderItemRepository(self._session_factory)
        return self._order_items

    @property
    def status_history(self) -> SqlAlchemyStatusHistoryRepository:
        if self._status_history is None:
            self._status_history = SqlAlchemyStatusHistoryRepository(self._session_factory)
        return self._status_history

    @property
    def payments(self) -> SqlAlchemyPaymentRepository:
        if self._payments is None:
            self._payments = SqlAlchemyPaymentRepository(self._session_factory)
        return self._payments

    @property
    def order_addresses(self) -> SqlAlchemyOrderAddressRepository:
        if self._order_addresses is None:
            self._order_addresses = SqlAlchemyOrderAddressRepository(self._session_factory)
        return self._order_addresses

    @property
    def catalog(self) -> SqlAlchemyCatalogRepository:
        if self._catalog is None:
            self._catalog = SqlAlchemyCatalogRepository(self._session_factory)
        return self._catalog
