"""Tests for the reportlab invoice renderer."""
from datetime import datetime, timezone
from decimal import Decimal
import re

import pytest

from core.domain.entities import Order, OrderItem
from core.infrastructure.adapters.invoice import ReportLabInvoiceRenderer
from core.settings.sections import BrandingSettings


def _order() -> Order:
    return Order(
        order_number="TC-241229-0001",
        customer_id="cust-1",
        customer_email="asha@example.com",
        customer_name="Asha Rao",
        gateway="COD",
        subtotal=Decimal("6352"),
        tax_amount=Decimal("648"),
        shipping_cost=Decimal("50"),
        cod_fee=Decimal("30"),
        total_amount=Decimal("7080"),
        status="delivered",
        created_at=datetime(2024, 12, 29, tzinfo=timezone.utc),
    )


def _items(order: Order, count: int, name: str = "Classic Cotton Tee") -> list:
    return [
        OrderItem(
            order_id=order.id,
            product_id=f"prod-{index}",
            product_name=name,
            size="M",
            color="Black",
            quantity=1,
            unit_price=Decimal("2000"),
            total_price=Decimal("2000"),
        )
        for index in range(count)
    ]


def _page_count(pdf: bytes) -> int:
    return int(re.search(rb"/Count (\d+) /Kids", pdf).group(1))


class FooterRecordingRenderer(ReportLabInvoiceRenderer):
    def __init__(self):
        super().__init__(BrandingSettings())
        self.footer_pages = []

    def _draw_footer(self, pdf):
        self.footer_pages.append(pdf.getPageNumber())
        super()._draw_footer(pdf)


@pytest.fixture
def renderer():
    return ReportLabInvoiceRenderer(BrandingSettings(gstin="27ABCDE1234F1Z5"))


class TestReportLabInvoiceRenderer:
    def test_renders_pdf(self, renderer):
        order = _order()

        pdf = renderer.render(order, _items(order, 2), ["Asha Rao", "12 MG Road", "Pune - 411001"])

        assert pdf.startswith(b"%PDF")
        assert pdf.rstrip().endswith(b"%%EOF")

    def test_output_is_deterministic(self, renderer):
        order = _order()
        items = _items(order, 3)

        assert renderer.render(order, items, ["Asha"]) == renderer.render(order, items, ["Asha"])

    def test_many_items_flow_onto_more_pages(self, renderer):
        order = _order()

        short = renderer.render(order, _items(order, 2), ["Asha"])
        long = renderer.render(order, _items(order, 120), ["Asha"])

        assert _page_count(short) == 1
        assert _page_count(long) > 1
        assert len(long) > len(short)

    def test_footer_on_every_page(self):
        renderer = FooterRecordingRenderer()
        order = _order()

        pdf = renderer.render(order, _items(order, 120), ["Asha"])

        pages = _page_count(pdf)
        assert pages > 1
        assert renderer.footer_pages == list(range(1, pages + 1))

    def test_long_product_names_wrap(self, renderer):
        order = _order()
        name = "Limited Edition Hand Block Printed Organic Cotton Kurta With Embroidered Neckline " * 3

        pdf = renderer.render(order, _items(order, 40, name=name), ["Asha"])

        assert pdf.startswith(b"%PDF")

    def test_missing_logo_falls_back_to_text_header(self, tmp_path):
        renderer = ReportLabInvoiceRenderer(BrandingSettings(logo_path=str(tmp_path / "missing.png")))
        order = _order()

        pdf = renderer.render(order, _items(order, 1), ["Asha"])

        assert pdf.startswith(b"%PDF")

    def test_unreadable_logo_falls_back_to_text_header(self, tmp_path):
        logo = tmp_path / "logo.png"
        logo.write_bytes(b"not an image")
        renderer = ReportLabInvoiceRenderer(BrandingSettings(logo_path=str(logo)))
        order = _order()

        pdf = renderer.render(order, _items(order, 1), ["Asha"])

        assert pdf.startswith(b"%PDF")

    def test_filename(self, renderer):
        assert renderer.filename_for("TC-241229-0001") == "Invoice-TC-241229-0001.pdf"
