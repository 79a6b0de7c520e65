"""
FastAPI Dependencies.

Provides dependency injection for the store and services.
"""
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.interfaces import (
    ICacheInvalidator,
    IInvoiceRenderer,
    IOrderNumberGenerator,
)
from core.application.services import InvoiceService, OrderApplicationService
from core.domain.repositories import Store
from core.infrastructure.adapters.cache import NullCacheInvalidator, RedisCacheInvalidator
from core.infrastructure.adapters.invoice import ReportLabInvoiceRenderer
from core.infrastructure.adapters.persistence import SqlAlchemyOrderNumberGenerator
from core.infrastructure.database.config import get_session_factory
from core.settings import get_app_settings

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_store = None
_order_number_generator = None
_cache_invalidator = None
_invoice_renderer = None
_order_service = None
_invoice_service = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_store() -> Store:
    global _store
    if _store is None:
        from core.data import SqlAlchemyStore

        _store = SqlAlchemyStore(get_session_factory())
        logger.info("Created SqlAlchemyStore instance")
    return _store


def get_order_number_generator() -> IOrderNumberGenerator:
    global _order_number_generator
    if _order_number_generator is None:
        settings = get_app_settings().storefront
        _order_number_generator = SqlAlchemyOrderNumberGenerator(
            get_session_factory(),
            prefix=settings.order_number_prefix,
            max_attempts=settings.order_number_max_attempts,
        )
        logger.info("Created SqlAlchemyOrderNumberGenerator instance")
    return _order_number_generator


def get_cache_invalidator() -> ICacheInvalidator:
    global _cache_invalidator
    if _cache_invalidator is None:
        settings = get_app_settings().cache
        if settings.enabled:
            _cache_invalidator = RedisCacheInvalidator(settings.redis_url)
            logger.info(f"Using RedisCacheInvalidator: {settings.redis_url}")
        else:
            _cache_invalidator = NullCacheInvalidator()
            logger.info("Using NullCacheInvalidator (cache disabled)")
    return _cache_invalidator


def get_invoice_renderer() -> IInvoiceRenderer:
    global _invoice_renderer
    if _invoice_renderer is None:
        _invoice_renderer = ReportLabInvoiceRenderer(get_app_settings().branding)
    return _invoice_renderer


def get_order_service() -> OrderApplicationService:
    global _order_service
    if _order_service is None:
        settings = get_app_settings()
        _order_service = OrderApplicationService(
            store=get_store(),
            order_numbers=get_order_number_generator(),
            cache=get_cache_invalidator(),
            recent_orders_cache_key=settings.cache.recent_orders_key,
            default_country_code=settings.storefront.default_country_code,
        )
        logger.info("Created OrderApplicationService instance")
    return _order_service


def get_invoice_service() -> InvoiceService:
    global _invoice_service
    if _invoice_service is None:
        _invoice_service = InvoiceService(
            store=get_store(),
            orders=get_order_service(),
            renderer=get_invoice_renderer(),
        )
        logger.info("Created InvoiceService instance")
    return _invoice_service


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _store, _order_number_generator, _cache_invalidator
    global _invoice_renderer, _order_service, _invoice_service

    _store = None
    _order_number_generator = None
    _cache_invalidator = None
    _invoice_renderer = None
    _order_service = None
    _invoice_service = None

    logger.info("Dependencies reset")
