"""Pytest configuration and fixtures for integration tests."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.data import SqlAlchemyStore
from core.data.models import Base, ProductModel
from tests.conftest import CATALOG


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory with the catalog seeded."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        async with session.begin():
            session.add_all(
                ProductModel(
                    id=product.id,
                    title=product.title,
                    variants={"sizes": product.sizes, "colors": product.colors},
                    fulfillment_partner=product.fulfillment_partner,
                )
                for product in CATALOG
            )
    yield session_factory


@pytest_asyncio.fixture
async def sql_store(test_session_factory) -> SqlAlchemyStore:
    return SqlAlchemyStore(test_session_factory)
