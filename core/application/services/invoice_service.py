"""Invoice download: authorization, billing address resolution and rendering."""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from core.domain.entities import Customer, Order, OrderAddress
from core.domain.repositories import Store

from ..interfaces import IInvoiceRenderer
from ..security import Identity, ensure_can_render_invoice
from .order_service import OrderApplicationService


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvoiceDocument:
    filename: str
    content: bytes
    media_type: str = "application/pdf"


def _address_lines(
    name: str,
    address1: Optional[str],
    address2: Optional[str],
    city: Optional[str],
    province: Optional[str],
    zip_code: Optional[str],
    country_code: Optional[str],
    phone: Optional[str],
    email: Optional[str],
) -> List[str]:
    locality = ", ".join(part for part in (city, province) if part)
    if zip_code:
        locality = f"{locality} - {zip_code}" if locality else zip_code
    lines = [name, address1, address2, locality, country_code]
    if phone:
        lines.append(f"Phone: {phone}")
    if email:
        lines.append(f"Email: {email}")
    return [line for line in lines if line]


def billing_lines_from_customer(customer: Customer) -> List[str]:
    return _address_lines(
        customer.full_name,
        customer.address1,
        customer.address2,
        customer.city,
        customer.province,
        customer.zip,
        customer.country_code,
        customer.phone,
        customer.email,
    )


def billing_lines_from_order_address(address: OrderAddress) -> List[str]:
    return _address_lines(
        " ".join(part for part in (address.first_name, address.last_name) if part),
        address.address1,
        address.address2,
        address.city,
        address.province,
        address.zip,
        address.country_code,
        address.phone,
        address.email,
    )


class InvoiceService:
    """Builds invoice documents for orders."""

    def __init__(
        self,
        store: Store,
        orders: OrderApplicationService,
        renderer: IInvoiceRenderer,
    ) -> None:
        self._store = store
        self._orders = orders
        self._renderer = renderer

    async def render_invoice(
        self,
        order_number: str,
        identity: Optional[Identity] = None,
        email: Optional[str] = None,
    ) -> InvoiceDocument:
        """
        Render the invoice for an order.

        Raises:
            OrderNotFoundError: Unknown order number
            AccessDeniedError: Not the owner, or a non-admin asking before delivery
        """
        order = await self._orders.authorize(order_number, identity, email)
        ensure_can_render_invoice(order, identity)

        items = await self._store.order_items.find_by_order(order.id)
        billing = await self.resolve_billing_lines(order)
        # reportlab is synchronous; keep it off the event loop
        content = await asyncio.to_thread(self._renderer.render, order, items, billing)

        logger.info(f"Rendered invoice for {order.order_number} ({len(content)} bytes)")
        return InvoiceDocument(
            filename=self._renderer.filename_for(order.order_number),
            content=content,
        )

    async def resolve_billing_lines(self, order: Order) -> List[str]:
        """Customer profile, then legacy order address, then bare order contact."""
        customer = await self._store.customers.find_by_id(order.customer_id)
        if customer is not None and customer.has_address:
            return billing_lines_from_customer(customer)

        legacy = await self._store.order_addresses.find_by_order(order.id)
        if legacy is not None:
            return billing_lines_from_order_address(legacy)

        return [order.customer_name, order.customer_email]
