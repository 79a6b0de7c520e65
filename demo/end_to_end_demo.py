"""
End-to-End Demo: Storefront Checkout to Invoice

This demonstrates the complete workflow:
1. Validate the cart against the catalog
2. Resolve the customer and create the order with its GST breakdown
3. Ship and deliver the order with tracking details
4. Render the invoice PDF

Uses in-memory implementations (no real database or Redis needed).
"""
import asyncio
import logging
from pathlib import Path

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from core.application.dtos import CreateOrderRequest, UpdateStatusRequest
from core.application.security import Identity
from core.application.services import InvoiceService, OrderApplicationService
from core.domain.entities import CatalogProduct
from core.infrastructure.adapters.cache import NullCacheInvalidator
from core.infrastructure.adapters.invoice import ReportLabInvoiceRenderer
from core.infrastructure.adapters.persistence import (
    InMemoryOrderNumberGenerator,
    InMemoryStore,
)
from core.settings import get_app_settings


CATALOG = [
    CatalogProduct("prod-tee", "Classic Cotton Tee", ["S", "M", "L"], ["Black", "White"], "Qikink"),
    CatalogProduct("prod-hoodie", "Heavyweight Hoodie", ["M", "L", "XL"], ["Grey"], "Qikink"),
]

CART = {
    "customer_email": "asha@example.com",
    "customer_name": "Asha Rao",
    "line_items": [
        {"product_id": "prod-tee", "size": "M", "color": "Black", "quantity": 2, "price": "2000"},
        {"product_id": "prod-hoodie", "size": "L", "color": "Grey", "quantity": 1, "price": "3000"},
    ],
    "shipping_address": {
        "first_name": "Asha",
        "last_name": "Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address1": "12 MG Road",
        "city": "Pune",
        "province": "Maharashtra",
        "zip": "411001",
    },
    "shipping_cost": "50",
    "cod_fee": "30",
    "total_amount": "7080",
    "gateway": "COD",
}


async def demo_checkout_to_invoice(output_dir: Path = Path(".")):
    """Demo: one order from checkout to invoice."""

    print("\n" + "="*80)
    print("DEMO: Storefront Checkout to Invoice")
    print("="*80 + "\n")

    # =========================================================================
    # SETUP
    # =========================================================================
    print("📦 Setting up in-memory dependencies...")

    store = InMemoryStore(products=CATALOG)
    orders = OrderApplicationService(
        store=store,
        order_numbers=InMemoryOrderNumberGenerator(),
        cache=NullCacheInvalidator(),
    )
    invoices = InvoiceService(
        store=store,
        orders=orders,
        renderer=ReportLabInvoiceRenderer(get_app_settings().branding),
    )
    admin = Identity(user_id="admin-1", email="ops@luxethreads.in", role="admin")

    print("✅ Dependencies ready\n")

    # =========================================================================
    # CHECKOUT
    # =========================================================================
    print("🛒 Creating order...")
    created = await orders.create_order(CreateOrderRequest.model_validate(CART))
    order_number = created.order.order_number

    print(f"✅ {created.message}")
    print(f"   Order:    {order_number}")
    print(f"   Subtotal: {created.order.subtotal}")
    print(f"   GST:      {created.order.tax_amount}")
    print(f"   Total:    {created.order.total_amount}\n")

    # =========================================================================
    # FULFILLMENT
    # =========================================================================
    print("🚚 Shipping and delivering...")
    await orders.update_status(
        order_number,
        UpdateStatusRequest(status="shipped", shipping_partner="Delhivery", tracking_number="AWB123"),
        admin,
    )
    await orders.update_status(order_number, UpdateStatusRequest(status="delivered"), admin)

    for entry in await orders.get_status_history(order_number):
        print(f"   {entry.old_status} -> {entry.new_status} by {entry.changed_by_name}")
    print()

    # =========================================================================
    # INVOICE
    # =========================================================================
    print("🧾 Rendering invoice...")
    document = await invoices.render_invoice(order_number, email=CART["customer_email"])
    path = output_dir / document.filename
    path.write_bytes(document.content)

    print(f"✅ Invoice written to {path} ({len(document.content)} bytes)\n")
    return path


if __name__ == "__main__":
    asyncio.run(demo_checkout_to_invoice())
