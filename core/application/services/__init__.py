"""Application services."""
from .customer_resolver import CustomerResolver
from .invoice_service import InvoiceDocument, InvoiceService
from .line_item_validator import (
    LineItemValidator,
    RequestedLineItem,
    resolve_fulfillment_partner,
)
from .order_service import OrderApplicationService

__all__ = [
    "CustomerResolver",
    "InvoiceDocument",
    "InvoiceService",
    "LineItemValidator",
    "OrderApplicationService",
    "RequestedLineItem",
    "resolve_fulfillment_partner",
]
