"""Integration tests for the SQLAlchemy store on SQLite."""
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from core.application.dtos import UpdateStatusRequest
from core.application.services import OrderApplicationService
from core.data.models import OrderItemModel, OrderModel
from core.domain.entities import Customer
from core.domain.exceptions import OrderPersistenceError
from core.domain.value_objects import split_tax, sum_splits
from core.infrastructure.adapters.persistence import InMemoryOrderNumberGenerator
from tests.conftest import FIXED_NOW, make_request
from tests.mocks.recording_cache import RecordingCacheInvalidator


@pytest.fixture
def sql_service(sql_store) -> OrderApplicationService:
    return OrderApplicationService(
        store=sql_store,
        order_numbers=InMemoryOrderNumberGenerator(clock=lambda: FIXED_NOW),
        cache=RecordingCacheInvalidator(),
    )


class TestSqlAlchemyStore:
    @pytest.mark.asyncio
    async def test_catalog_lookup(self, sql_store):
        products = await sql_store.catalog.find_many(["prod-tee", "prod-jacket", "prod-missing"])

        by_id = {p.id: p for p in products}
        assert set(by_id) == {"prod-tee", "prod-jacket"}
        assert by_id["prod-tee"].sizes == ["S", "M", "L"]
        assert by_id["prod-jacket"].fulfillment_partner == "Printrove"

    @pytest.mark.asyncio
    async def test_customer_round_trip_and_update(self, sql_store):
        customer = Customer(email="asha@example.com", city="Pune")
        await sql_store.customers.add(customer)

        await sql_store.customers.update(customer.id, {"province": "Maharashtra"})

        loaded = await sql_store.customers.find_by_email("asha@example.com")
        assert loaded.id == customer.id
        assert loaded.city == "Pune"
        assert loaded.province == "Maharashtra"
        assert await sql_store.customers.find_by_email("ASHA@example.com") is None

    @pytest.mark.asyncio
    async def test_create_and_read_order(self, sql_service, sql_store):
        await sql_service.create_order(make_request())

        detail = await sql_service.get_order("TC-241229-0001", email="asha@example.com")

        assert detail.subtotal == Decimal("6352")
        assert detail.tax_amount == Decimal("648")
        assert detail.total_amount == Decimal("7080")
        assert detail.fulfillment_partner == "Qikink"
        assert sorted(item.product_name for item in detail.items) == [
            "Classic Cotton Tee",
            "Heavyweight Hoodie",
        ]

    @pytest.mark.asyncio
    async def test_fractional_price_taxed_as_stored(self, sql_service, sql_store):
        line_items = [
            {"product_id": "prod-tee", "size": "M", "color": "Black", "quantity": 1, "price": "2500.004"},
        ]
        await sql_service.create_order(make_request(line_items=line_items, total_amount="2580"))

        order = await sql_store.orders.find_by_number("TC-241229-0001")
        items = await sql_store.order_items.find_by_order(order.id)
        recomputed = sum_splits(split_tax(item.unit_price, item.quantity) for item in items)

        assert items[0].unit_price == Decimal("2500.00")
        assert items[0].total_price == Decimal("2500.00")
        assert order.tax_amount == recomputed.rounded_tax == Decimal("119")
        assert order.subtotal == recomputed.rounded_net

    @pytest.mark.asyncio
    async def test_item_failure_is_compensated(self, sql_service, test_engine, test_session_factory):
        """Items table is gone, so the batch insert fails and the order row must be removed."""
        async with test_engine.begin() as conn:
            await conn.run_sync(OrderItemModel.__table__.drop)

        with pytest.raises(OrderPersistenceError, match="Failed to create order items"):
            await sql_service.create_order(make_request())

        async with test_session_factory() as session:
            orders = await session.scalar(select(func.count()).select_from(OrderModel))
        assert orders == 0

    @pytest.mark.asyncio
    async def test_status_update_and_history(self, sql_service, sql_store, admin):
        await sql_service.create_order(make_request())

        await sql_service.update_status(
            "TC-241229-0001",
            UpdateStatusRequest(status="shipped", shipping_partner="Delhivery"),
            admin,
        )

        order = await sql_store.orders.find_by_number("TC-241229-0001")
        history = await sql_store.status_history.find_by_order(order.id)
        assert order.status == "shipped"
        assert order.shipping_partner == "Delhivery"
        assert [(h.old_status, h.new_status) for h in history] == [("pending", "shipped")]

    @pytest.mark.asyncio
    async def test_list_orders_with_status_filter(self, sql_service):
        await sql_service.create_order(make_request())

        listing = await sql_service.list_orders()
        cancelled = await sql_service.list_orders(status="cancelled")

        assert [o.order_number for o in listing.orders] == ["TC-241229-0001"]
        assert len(listing.orders[0].items) == 2
        assert cancelled.total == 0
