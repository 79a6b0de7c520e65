"""Tests for OrderApplicationService."""
from decimal import Decimal

import pytest

from core.application.dtos import UpdateStatusRequest
from core.application.security import Identity
from core.domain.exceptions import (
    AccessDeniedError,
    CompensationFailedError,
    OrderNotFoundError,
    OrderPersistenceError,
    OrderValidationError,
)
from tests.conftest import make_request


# =============================================================================
# CREATE
# =============================================================================

class TestCreateOrder:
    """Checkout transaction."""

    @pytest.mark.asyncio
    async def test_mixed_slab_order(self, order_service, store, cache):
        response = await order_service.create_order(make_request())

        assert response.success is True
        assert response.items_count == 2
        assert response.message == "Order created successfully. Payment pending (COD)."
        assert response.order.order_number == "TC-241229-0001"
        assert response.order.subtotal == Decimal("6352")
        assert response.order.tax_amount == Decimal("648")
        assert response.order.total_amount == Decimal("7080")
        assert response.order.status == "pending"
        assert response.order.payment_status == "pending"

        order = await store.orders.find_by_number("TC-241229-0001")
        items = await store.order_items.find_by_order(order.id)
        assert order.fulfillment_partner == "Qikink"
        assert [(i.product_name, i.quantity, i.total_price) for i in items] == [
            ("Classic Cotton Tee", 2, Decimal("4000")),
            ("Heavyweight Hoodie", 1, Decimal("3000")),
        ]
        assert cache.invalidated == ["orders:last30days"]

    @pytest.mark.asyncio
    async def test_total_amount_is_stored_as_submitted(self, order_service, store):
        """Reporting drift between subtotal+tax and total is accepted."""
        await order_service.create_order(make_request(total_amount="7081"))

        order = await store.orders.find_by_number("TC-241229-0001")
        assert order.total_amount == Decimal("7081")
        assert order.subtotal + order.tax_amount == Decimal("7000")

    @pytest.mark.asyncio
    async def test_prepaid_message(self, order_service):
        response = await order_service.create_order(make_request(gateway="Prepaid", cod_fee="0"))

        assert response.message == "Order created successfully. Please complete payment."

    @pytest.mark.asyncio
    async def test_order_numbers_increase(self, order_service):
        first = await order_service.create_order(make_request())
        second = await order_service.create_order(make_request())

        assert first.order.order_number == "TC-241229-0001"
        assert second.order.order_number == "TC-241229-0002"

    @pytest.mark.asyncio
    async def test_mixed_partners_leave_order_unassigned(self, order_service, store):
        await order_service.create_order(
            make_request(
                line_items=[
                    {"product_id": "prod-tee", "size": "M", "color": "Black", "quantity": 1, "price": "999"},
                    {"product_id": "prod-jacket", "size": "L", "color": "Blue", "quantity": 1, "price": "2999"},
                ],
                total_amount="3998",
            )
        )

        order = await store.orders.find_by_number("TC-241229-0001")
        assert order.fulfillment_partner is None

    @pytest.mark.asyncio
    async def test_authenticated_order_links_customer(self, order_service, store, customer_identity):
        await order_service.create_order(make_request(), customer_identity)

        customer = await store.customers.find_by_auth_user_id("user-asha")
        order = await store.orders.find_by_number("TC-241229-0001")
        assert order.customer_id == customer.id

    @pytest.mark.asyncio
    async def test_repeat_customer_is_reused(self, order_service, store):
        await order_service.create_order(make_request())
        await order_service.create_order(make_request())

        assert len(store.customers.all()) == 1


class TestCreateOrderValidation:
    """Invalid submissions write nothing."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"customer_email": None},
            {"customer_name": ""},
            {"line_items": []},
            {"shipping_address": None},
            {"total_amount": None},
            {"total_amount": "0"},
        ],
    )
    async def test_missing_required_fields(self, order_service, store, overrides):
        with pytest.raises(OrderValidationError) as exc:
            await order_service.create_order(make_request(**overrides))

        assert exc.value.message == "Missing required fields"
        assert store.orders.count() == 0

    @pytest.mark.asyncio
    async def test_unknown_gateway(self, order_service):
        with pytest.raises(OrderValidationError, match="Gateway must be 'COD' or 'Prepaid'"):
            await order_service.create_order(make_request(gateway="UPI"))

    @pytest.mark.asyncio
    async def test_catalog_rejection_writes_nothing(self, order_service, store, cache):
        with pytest.raises(OrderValidationError, match="Size XXL is not available"):
            await order_service.create_order(
                make_request(
                    line_items=[
                        {"product_id": "prod-tee", "size": "XXL", "color": "Black", "quantity": 1, "price": "999"}
                    ]
                )
            )

        assert store.orders.count() == 0
        assert store.customers.all() == []
        assert cache.invalidated == []


class TestCreateOrderFailures:
    """Partial failure handling."""

    @pytest.mark.asyncio
    async def test_item_failure_removes_order(self, order_service, store, cache):
        store.fail_on("order_items.add_many")

        with pytest.raises(OrderPersistenceError) as exc:
            await order_service.create_order(make_request())

        assert exc.value.message == "Failed to create order items"
        assert not isinstance(exc.value, CompensationFailedError)
        assert store.orders.count() == 0
        assert store.order_items.count() == 0
        assert cache.invalidated == []

    @pytest.mark.asyncio
    async def test_failed_compensation_is_reported(self, order_service, store):
        store.fail_on("order_items.add_many", "orders.delete")

        with pytest.raises(CompensationFailedError) as exc:
            await order_service.create_order(make_request())

        assert exc.value.order_number == "TC-241229-0001"
        assert store.orders.count() == 1
        assert store.order_items.count() == 0

    @pytest.mark.asyncio
    async def test_order_insert_failure(self, order_service, store):
        store.fail_on("orders.add")

        with pytest.raises(OrderPersistenceError, match="Failed to create order in database"):
            await order_service.create_order(make_request())

        assert store.order_items.count() == 0

    @pytest.mark.asyncio
    async def test_cache_failure_does_not_fail_creation(self, store, order_numbers):
        from core.application.services import OrderApplicationService
        from tests.mocks.recording_cache import RecordingCacheInvalidator

        service = OrderApplicationService(
            store=store,
            order_numbers=order_numbers,
            cache=RecordingCacheInvalidator(fail=True),
        )

        response = await service.create_order(make_request())

        assert response.success is True
        assert store.orders.count() == 1


# =============================================================================
# READ
# =============================================================================

class TestOrderAccess:
    """Order visibility rules."""

    @pytest.mark.asyncio
    async def test_guest_with_matching_email(self, order_service):
        await order_service.create_order(make_request())

        detail = await order_service.get_order("TC-241229-0001", email="ASHA@example.com")

        assert detail.order_number == "TC-241229-0001"
        assert len(detail.items) == 2
        assert detail.customer.email == "asha@example.com"
        assert detail.payment is None

    @pytest.mark.asyncio
    async def test_guest_without_email_is_denied(self, order_service):
        await order_service.create_order(make_request())

        with pytest.raises(AccessDeniedError, match="provide email query parameter"):
            await order_service.get_order("TC-241229-0001")

    @pytest.mark.asyncio
    async def test_linked_customer_sees_order(self, order_service, customer_identity):
        await order_service.create_order(make_request(), customer_identity)

        detail = await order_service.get_order("TC-241229-0001", customer_identity)

        assert detail.customer_email == "asha@example.com"

    @pytest.mark.asyncio
    async def test_other_customer_is_denied(self, order_service):
        await order_service.create_order(make_request())
        stranger = Identity(user_id="user-other", email="other@example.com")

        with pytest.raises(AccessDeniedError):
            await order_service.get_order("TC-241229-0001", stranger)

    @pytest.mark.asyncio
    async def test_admin_sees_any_order(self, order_service, admin):
        await order_service.create_order(make_request())

        detail = await order_service.get_order("TC-241229-0001", admin)

        assert detail.total_amount == Decimal("7080")

    @pytest.mark.asyncio
    async def test_unknown_order(self, order_service, admin):
        with pytest.raises(OrderNotFoundError):
            await order_service.get_order("TC-241229-9999", admin)


class TestGuestLookup:
    @pytest.mark.asyncio
    async def test_lookup_requires_both_fields(self, order_service):
        with pytest.raises(OrderValidationError, match="Order number and email are required"):
            await order_service.lookup_guest_order("TC-241229-0001", None)

    @pytest.mark.asyncio
    async def test_lookup_email_mismatch(self, order_service):
        await order_service.create_order(make_request())

        with pytest.raises(AccessDeniedError, match="Email does not match this order"):
            await order_service.lookup_guest_order("TC-241229-0001", "other@example.com")

    @pytest.mark.asyncio
    async def test_lookup_success(self, order_service):
        await order_service.create_order(make_request())

        detail = await order_service.lookup_guest_order("TC-241229-0001", "asha@example.com")

        assert detail.fulfillment_partner == "Qikink"


class TestListOrders:
    @pytest.mark.asyncio
    async def test_newest_first_with_status_filter(self, order_service, admin):
        await order_service.create_order(make_request())
        await order_service.create_order(make_request())
        await order_service.update_status(
            "TC-241229-0001", UpdateStatusRequest(status="cancelled"), admin
        )

        everything = await order_service.list_orders()
        cancelled = await order_service.list_orders(status="cancelled")

        assert [o.order_number for o in everything.orders] == ["TC-241229-0002", "TC-241229-0001"]
        assert everything.total == 2
        assert [o.order_number for o in cancelled.orders] == ["TC-241229-0001"]
        assert len(everything.orders[0].items) == 2


# =============================================================================
# ADMIN UPDATES
# =============================================================================

class TestUpdateStatus:
    @pytest.mark.asyncio
    async def test_status_change_is_recorded(self, order_service, admin):
        await order_service.create_order(make_request())

        result = await order_service.update_status(
            "TC-241229-0001", UpdateStatusRequest(status="processing", notes="Picked"), admin
        )
        history = await order_service.get_status_history("TC-241229-0001")

        assert result["status"] == "processing"
        assert [(h.old_status, h.new_status, h.notes) for h in history] == [
            ("pending", "processing", "Picked")
        ]
        assert history[0].changed_by == "admin-1"
        assert history[0].changed_by_name == "ops"

    @pytest.mark.asyncio
    async def test_shipped_without_tracking_is_rejected(self, order_service, admin):
        await order_service.create_order(make_request())

        with pytest.raises(OrderValidationError):
            await order_service.update_status("TC-241229-0001", UpdateStatusRequest(status="shipped"), admin)

    @pytest.mark.asyncio
    async def test_tracking_update_on_shipped_order(self, order_service, store, admin):
        await order_service.create_order(make_request())
        await order_service.update_status(
            "TC-241229-0001",
            UpdateStatusRequest(status="shipped", shipping_partner="Delhivery", tracking_number="AWB1"),
            admin,
        )

        result = await order_service.update_status(
            "TC-241229-0001", UpdateStatusRequest(status="shipped", tracking_number="AWB2"), admin
        )

        order = await store.orders.find_by_number("TC-241229-0001")
        history = await order_service.get_status_history("TC-241229-0001")
        assert result["tracking_number"] == "AWB2"
        assert order.shipping_partner == "Delhivery"
        assert order.tracking_number == "AWB2"
        assert len(history) == 1

    @pytest.mark.asyncio
    async def test_status_is_required(self, order_service, admin):
        with pytest.raises(OrderValidationError, match="Status is required"):
            await order_service.update_status("TC-241229-0001", UpdateStatusRequest(), admin)

    @pytest.mark.asyncio
    async def test_history_failure_does_not_fail_update(self, order_service, store, admin):
        await order_service.create_order(make_request())
        store.fail_on("status_history.append")

        result = await order_service.update_status(
            "TC-241229-0001", UpdateStatusRequest(status="confirmed"), admin
        )

        assert result["status"] == "confirmed"
        assert await order_service.get_status_history("TC-241229-0001") == []


class TestFulfillmentUpdates:
    @pytest.mark.asyncio
    async def test_partner_assignment_and_clear(self, order_service, store):
        await order_service.create_order(make_request())

        await order_service.update_fulfillment_partner("TC-241229-0001", "Printrove")
        assert (await store.orders.find_by_number("TC-241229-0001")).fulfillment_partner == "Printrove"

        await order_service.update_fulfillment_partner("TC-241229-0001", None)
        assert (await store.orders.find_by_number("TC-241229-0001")).fulfillment_partner is None

    @pytest.mark.asyncio
    async def test_unknown_partner(self, order_service):
        with pytest.raises(OrderValidationError, match="Invalid fulfillment partner"):
            await order_service.update_fulfillment_partner("TC-241229-0001", "Shiprocket")

    @pytest.mark.asyncio
    async def test_partner_order_id_is_trimmed(self, order_service):
        await order_service.create_order(make_request())

        result = await order_service.update_partner_order_id("TC-241229-0001", "  QK-5521 ")

        assert result["partner_order_id"] == "QK-5521"

    @pytest.mark.asyncio
    async def test_blank_partner_order_id(self, order_service):
        with pytest.raises(OrderValidationError, match="Use null to clear it"):
            await order_service.update_partner_order_id("TC-241229-0001", "   ")
