"""
Order aggregate.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional
import uuid

from ..enums import OrderStatus, PaymentStatus
from .customer import Customer
from ..exceptions import OrderValidationError
from ..value_objects import TaxSplit, split_tax

TRACKING_FIELDS = ("shipping_partner", "tracking_number", "tracking_url")


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """
    Line item snapshot taken at checkout.

    Product name is denormalized so catalog renames never rewrite history.
    Items are never updated after creation.
    """
    order_id: str
    product_id: str
    product_name: str
    size: str
    color: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    id: str = field(default_factory=_new_id)
    variant_id: Optional[str] = None

    def tax_split(self) -> TaxSplit:
        """Recompute GST for this line from the stored unit price."""
        return split_tax(self.unit_price, self.quantity)


@dataclass
class Order:
    """
    Order aggregate root.

    Monetary fields:
    - total_amount: tax-inclusive, exactly what the customer saw at checkout
    - subtotal / tax_amount: derived for reporting, rounded once after summing
      unrounded per-line splits. subtotal + tax_amount may drift from
      total_amount - shipping_cost - cod_fee by rounding.
    """
    order_number: str
    customer_id: str
    customer_email: str
    customer_name: str
    gateway: str
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    shipping_cost: Decimal = Decimal("0")
    cod_fee: Decimal = Decimal("0")
    status: str = OrderStatus.PENDING.value
    payment_status: str = PaymentStatus.PENDING.value
    fulfillment_partner: Optional[str] = None
    partner_order_id: Optional[str] = None
    shipping_partner: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    payment_id: Optional[str] = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: Optional[datetime] = None

    def plan_status_update(
        self,
        status: str,
        tracking: Optional[Dict[str, Optional[str]]] = None,
    ) -> Dict[str, Any]:
        """
        Validate a status/tracking update and return the fields to write.

        Rules:
        - status must be one of OrderStatus
        - moving into shipped needs a shipping partner, tracking number or
          tracking URL supplied with the request
        - same status with no tracking fields is a no-op and rejected

        Raises:
            OrderValidationError: If the update breaks a rule
        """
        if status not in OrderStatus.values():
            raise OrderValidationError(
                f"Invalid status. Must be one of: {', '.join(OrderStatus.values())}"
            )

        supplied = {}
        for name, value in (tracking or {}).items():
            if name in TRACKING_FIELDS and value is not None and value.strip():
                supplied[name] = value.strip()

        status_changed = status != self.status
        if not status_changed and not supplied:
            raise OrderValidationError("Order already has this status")

        if status == OrderStatus.SHIPPED.value and self.status != OrderStatus.SHIPPED.value:
            if not supplied:
                raise OrderValidationError(
                    "Shipping partner, tracking number or tracking URL is required "
                    "when marking an order as shipped"
                )

        changes: Dict[str, Any] = dict(supplied)
        if status_changed:
            changes["status"] = status
        return changes

    def apply(self, changes: Dict[str, Any]) -> None:
        for name, value in changes.items():
            setattr(self, name, value)
        self.updated_at = _utcnow()

    def belongs_to_email(self, email: Optional[str]) -> bool:
        return bool(email) and self.customer_email.lower() == email.strip().lower()

    @property
    def is_delivered(self) -> bool:
        return self.status == OrderStatus.DELIVERED.value


@dataclass(frozen=True)
class StatusHistoryEntry:
    """Append-only record of one status change."""
    order_id: str
    old_status: str
    new_status: str
    changed_by: Optional[str]
    changed_by_name: str
    notes: Optional[str] = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class OrderAddress:
    """Legacy per-order address record, used only as an invoice fallback."""
    order_id: str
    first_name: str
    last_name: str
    address1: str
    city: str
    zip: str
    address2: Optional[str] = None
    province: Optional[str] = None
    country_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class Payment:
    """Gateway payment record linked to an order (written by the gateway flow)."""
    id: str
    order_id: str
    amount: Decimal
    status: str
    method: Optional[str] = None
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class OrderDetails:
    """Order with everything needed to display it."""
    order: Order
    items: List[OrderItem]
    customer: Optional[Customer] = None
    payment: Optional[Payment] = None
