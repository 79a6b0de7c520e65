"""
Requester identity and order access rules.

Authentication happens at the edge; this module only decides what a
verified identity (or a guest presenting an email) may see.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.entities import Customer, Order
from core.domain.exceptions import AccessDeniedError

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Identity:
    """Verified caller identity."""
    user_id: str
    email: Optional[str] = None
    role: str = "customer"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @property
    def display_name(self) -> str:
        if self.email and "@" in self.email:
            return self.email.split("@")[0]
        return "Admin"


def owns_order(
    order: Order,
    identity: Optional[Identity],
    linked_customer: Optional[Customer],
    guest_email: Optional[str],
) -> bool:
    """
    True when the requester may see the order.

    Args:
        order: Order being requested
        identity: Authenticated caller, if any
        linked_customer: Customer linked to identity.user_id, if any
        guest_email: Email presented for guest lookup, if any
    """
    if identity is not None and identity.is_admin:
        return True
    if identity is not None and linked_customer is not None:
        if order.customer_id == linked_customer.id:
            return True
    return order.belongs_to_email(guest_email)


def ensure_can_render_invoice(order: Order, identity: Optional[Identity]) -> None:
    """
    Non-admins only get invoices for delivered orders.

    Ownership must already have been checked with owns_order.
    """
    if identity is not None and identity.is_admin:
        return
    if not order.is_delivered:
        raise AccessDeniedError("Invoice is available only after the order is delivered")
