"""Shared fixtures: catalog, in-memory store and wired services."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from core.application.dtos import CreateOrderRequest
from core.application.security import Identity
from core.application.services import InvoiceService, OrderApplicationService
from core.domain.entities import CatalogProduct
from core.infrastructure.adapters.invoice import ReportLabInvoiceRenderer
from core.infrastructure.adapters.persistence import (
    InMemoryOrderNumberGenerator,
    InMemoryStore,
)
from core.settings.sections import BrandingSettings
from tests.mocks.recording_cache import RecordingCacheInvalidator


FIXED_NOW = datetime(2024, 12, 29, 10, 30)

CATALOG = [
    CatalogProduct(
        id="prod-tee",
        title="Classic Cotton Tee",
        sizes=["S", "M", "L"],
        colors=["Black", "White"],
        fulfillment_partner="Qikink",
    ),
    CatalogProduct(
        id="prod-hoodie",
        title="Heavyweight Hoodie",
        sizes=["M", "L", "XL"],
        colors=["Grey"],
        fulfillment_partner="Qikink",
    ),
    CatalogProduct(
        id="prod-jacket",
        title="Denim Jacket",
        sizes=["M", "L"],
        colors=["Blue"],
        fulfillment_partner="Printrove",
    ),
    CatalogProduct(
        id="prod-cap",
        title="Logo Cap",
        sizes=["Free"],
        colors=["Black"],
        fulfillment_partner=None,
    ),
]


def shipping_address(**overrides: Any) -> Dict[str, Any]:
    address = {
        "first_name": "Asha",
        "last_name": "Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address1": "12 MG Road",
        "city": "Pune",
        "province": "Maharashtra",
        "zip": "411001",
        "country_code": "IN",
    }
    address.update(overrides)
    return address


def order_payload(
    line_items: Optional[List[Dict[str, Any]]] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Checkout body: 2 tees at 2000 plus 1 hoodie at 3000, COD."""
    payload = {
        "customer_email": "asha@example.com",
        "customer_name": "Asha Rao",
        "line_items": line_items if line_items is not None else [
            {"product_id": "prod-tee", "size": "M", "color": "Black", "quantity": 2, "price": "2000"},
            {"product_id": "prod-hoodie", "size": "L", "color": "Grey", "quantity": 1, "price": "3000"},
        ],
        "shipping_address": shipping_address(),
        "shipping_cost": "50",
        "cod_fee": "30",
        "total_amount": "7080",
        "gateway": "COD",
    }
    payload.update(overrides)
    return payload


def make_request(**overrides: Any) -> CreateOrderRequest:
    return CreateOrderRequest.model_validate(order_payload(**overrides))


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore(products=CATALOG)


@pytest.fixture
def cache() -> RecordingCacheInvalidator:
    return RecordingCacheInvalidator()


@pytest.fixture
def order_numbers() -> InMemoryOrderNumberGenerator:
    return InMemoryOrderNumberGenerator(prefix="TC", clock=lambda: FIXED_NOW)


@pytest.fixture
def order_service(store, order_numbers, cache) -> OrderApplicationService:
    return OrderApplicationService(store=store, order_numbers=order_numbers, cache=cache)


@pytest.fixture
def renderer() -> ReportLabInvoiceRenderer:
    return ReportLabInvoiceRenderer(
        BrandingSettings(business_name="Luxe Threads", gstin="27ABCDE1234F1Z5", logo_path=None)
    )


@pytest.fixture
def invoice_service(store, order_service, renderer) -> InvoiceService:
    return InvoiceService(store=store, orders=order_service, renderer=renderer)


@pytest.fixture
def admin() -> Identity:
    return Identity(user_id="admin-1", email="ops@luxethreads.in", role="admin")


@pytest.fixture
def customer_identity() -> Identity:
    return Identity(user_id="user-asha", email="asha@example.com")
