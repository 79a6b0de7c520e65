"""Tests for order status and tracking update rules."""
from decimal import Decimal

import pytest

from core.domain.entities import Order
from core.domain.exceptions import OrderValidationError


def _order(**overrides) -> Order:
    values = dict(
        order_number="TC-241229-0001",
        customer_id="cust-1",
        customer_email="Asha@Example.com",
        customer_name="Asha Rao",
        gateway="COD",
        subtotal=Decimal("6352"),
        tax_amount=Decimal("648"),
        total_amount=Decimal("7080"),
    )
    values.update(overrides)
    return Order(**values)


class TestPlanStatusUpdate:
    """Status transition validation."""

    def test_rejects_unknown_status(self):
        with pytest.raises(OrderValidationError) as exc:
            _order().plan_status_update("teleported")

        assert "Invalid status" in exc.value.message
        assert "delivered" in exc.value.message

    def test_shipped_requires_tracking_info(self):
        with pytest.raises(OrderValidationError) as exc:
            _order(status="processing").plan_status_update("shipped")

        assert "required when marking an order as shipped" in exc.value.message

    def test_blank_tracking_values_do_not_count(self):
        with pytest.raises(OrderValidationError):
            _order().plan_status_update("shipped", {"tracking_number": "   "})

    def test_shipped_with_tracking_number(self):
        changes = _order().plan_status_update("shipped", {"tracking_number": " AWB123 "})

        assert changes == {"status": "shipped", "tracking_number": "AWB123"}

    def test_stored_tracking_does_not_satisfy_shipped(self):
        order = _order(status="processing")
        order.apply(order.plan_status_update("processing", {"tracking_number": "AWB1"}))

        with pytest.raises(OrderValidationError):
            order.plan_status_update("shipped", {})

    def test_reshipping_after_cancel_needs_new_tracking(self):
        order = _order(status="cancelled", shipping_partner="Delhivery", tracking_number="AWB1")

        with pytest.raises(OrderValidationError):
            order.plan_status_update("shipped")

    def test_same_status_without_tracking_is_rejected(self):
        with pytest.raises(OrderValidationError) as exc:
            _order(status="shipped", tracking_number="AWB1").plan_status_update("shipped")

        assert exc.value.message == "Order already has this status"

    def test_already_shipped_only_rewrites_supplied_fields(self):
        order = _order(status="shipped", tracking_number="AWB1", shipping_partner="Delhivery")

        changes = order.plan_status_update(
            "shipped", {"tracking_url": "https://track.example/AWB1", "tracking_number": None}
        )

        assert changes == {"tracking_url": "https://track.example/AWB1"}

    def test_other_transitions_are_free(self):
        assert _order().plan_status_update("cancelled") == {"status": "cancelled"}
        assert _order(status="delivered").plan_status_update("pending") == {"status": "pending"}


class TestOrderHelpers:
    def test_apply_sets_fields_and_touches_updated_at(self):
        order = _order()
        order.apply({"status": "delivered"})

        assert order.is_delivered
        assert order.updated_at is not None

    @pytest.mark.parametrize("email", ["asha@example.com", " ASHA@EXAMPLE.COM "])
    def test_belongs_to_email_ignores_case(self, email):
        assert _order().belongs_to_email(email)

    @pytest.mark.parametrize("email", [None, "", "other@example.com"])
    def test_belongs_to_email_rejects_others(self, email):
        assert not _order().belongs_to_email(email)
