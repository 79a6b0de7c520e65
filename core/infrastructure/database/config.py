"""
Database configuration.

Manages engine creation and the process-wide session factory.
"""
from typing import Any, Dict, Optional
import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.settings.sections import DatabaseSettings


logger = logging.getLogger(__name__)

_async_engine: Optional[AsyncEngine] = None
_async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


# =============================================================================
# ENGINE CREATION
# =============================================================================

def create_engine(settings: Optional[DatabaseSettings] = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        settings: Database settings (loaded from env when omitted)

    Returns:
        Configured async engine
    """
    settings = settings or DatabaseSettings()
    url = make_url(settings.database_url)
    logger.info(f"Creating database engine: {url.render_as_string(hide_password=True)}")

    options: Dict[str, Any] = {"echo": settings.echo_sql, "pool_pre_ping": True}
    if not url.drivername.startswith("sqlite"):
        options.update(
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            pool_recycle=settings.pool_recycle,
        )

    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# DATABASE LIFECYCLE
# =============================================================================

async def init_database(
    settings: Optional[DatabaseSettings] = None,
    create_tables: bool = True,
) -> async_sessionmaker[AsyncSession]:
    """
    Initialize async database engine and session factory.

    Creates all tables if they don't exist.
    """
    global _async_engine, _async_session_factory

    if _async_session_factory is not None:
        return _async_session_factory

    from core.data.models import Base

    logger.info("Initializing database...")
    _async_engine = create_engine(settings)
    _async_session_factory = create_session_factory(_async_engine)

    if create_tables:
        async with _async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    logger.info("✅ Database initialized successfully")
    return _async_session_factory


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get async session factory."""
    if _async_session_factory is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _async_session_factory


async def close_database() -> None:
    """Close database connections."""
    global _async_engine, _async_session_factory

    if _async_engine is not None:
        logger.info("Closing database connections...")
        await _async_engine.dispose()
        logger.info("✅ Database connections closed")

    _async_engine = None
    _async_session_factory = None
