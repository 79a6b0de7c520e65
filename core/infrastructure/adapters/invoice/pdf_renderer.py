"""
PDF invoice renderer.

Draws directly on a reportlab canvas so the layout is fully deterministic:
- fixed margins on A4
- header with optional centered logo, seller block left, invoice meta right
- bill-to block
- line-item table whose rows grow with the wrapped product name and flow
  onto new pages when they would cross the bottom margin
- summary taken from the stored order totals

GST per line is recomputed from the stored unit price through the same tax
model used at checkout, and rounded only when printed.
"""
from dataclasses import dataclass
from decimal import Decimal
from io import BytesIO
import logging
import os
from typing import List, Optional, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from core.application.interfaces import IInvoiceRenderer
from core.domain.entities import Order, OrderItem
from core.domain.value_objects import round_currency
from core.settings.sections import BrandingSettings


logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 40
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
BODY_SIZE = 9
LINE_HEIGHT = 12
CELL_PADDING = 4

LOGO_MAX_WIDTH = 120
LOGO_MAX_HEIGHT = 50


@dataclass(frozen=True)
class Column:
    title: str
    width: float
    align: str = "left"


COLUMNS: Sequence[Column] = (
    Column("Product", 165),
    Column("Size / Color", 80),
    Column("Qty", 35, "right"),
    Column("Unit Price", 60, "right"),
    Column("GST %", 45, "right"),
    Column("GST Amt", 60, "right"),
    Column("Total", 70, "right"),
)


class ReportLabInvoiceRenderer(IInvoiceRenderer):
    """Renders invoices with reportlab."""

    def __init__(self, branding: Optional[BrandingSettings] = None):
        self.branding = branding or BrandingSettings()

    def render(
        self,
        order: Order,
        items: list[OrderItem],
        billing_lines: list[str],
    ) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1)
        pdf.setTitle(f"Invoice {order.order_number}")
        pdf.setAuthor(self.branding.business_name)

        y = PAGE_HEIGHT - MARGIN
        y = self._draw_header(pdf, order, y)
        y = self._draw_billing(pdf, billing_lines, y)
        y = self._draw_items(pdf, items, y)
        self._draw_summary(pdf, order, y)
        self._draw_footer(pdf)

        pdf.save()
        return buffer.getvalue()

    # =========================================================================
    # HEADER
    # =========================================================================

    def _draw_header(self, pdf: canvas.Canvas, order: Order, y: float) -> float:
        y = self._draw_logo(pdf, y)

        pdf.setFont(FONT_BOLD, 16)
        pdf.drawCentredString(PAGE_WIDTH / 2, y - 16, "TAX INVOICE")
        y -= 36

        # Seller block (left)
        seller = [self.branding.business_name, *self.branding.address_lines]
        if self.branding.gstin:
            seller.append(f"GSTIN: {self.branding.gstin}")
        if self.branding.email:
            seller.append(f"Email: {self.branding.email}")
        if self.branding.phone:
            seller.append(f"Phone: {self.branding.phone}")
        if self.branding.website:
            seller.append(self.branding.website)

        # Invoice metadata (right)
        meta = [
            f"Invoice No: {order.order_number}",
            f"Invoice Date: {order.created_at.strftime('%d %b %Y')}",
            f"Order Status: {order.status.capitalize()}",
            f"Payment Method: {order.gateway}",
        ]

        left_y = y
        for index, line in enumerate(seller):
            pdf.setFont(FONT_BOLD if index == 0 else FONT, 11 if index == 0 else BODY_SIZE)
            pdf.drawString(MARGIN, left_y, line)
            left_y -= LINE_HEIGHT + (2 if index == 0 else 0)

        right_y = y
        pdf.setFont(FONT, BODY_SIZE)
        for line in meta:
            pdf.drawRightString(PAGE_WIDTH - MARGIN, right_y, line)
            right_y -= LINE_HEIGHT

        y = min(left_y, right_y) - 6
        pdf.line(MARGIN, y, PAGE_WIDTH - MARGIN, y)
        return y - 16

    def _draw_logo(self, pdf: canvas.Canvas, y: float) -> float:
        path = self.branding.logo_path
        if not path:
            return y
        if not os.path.isfile(path):
            logger.warning(f"Invoice logo not found at {path}, rendering text-only header")
            return y

        try:
            logo = ImageReader(path)
            width, height = logo.getSize()
            scale = min(LOGO_MAX_WIDTH / width, LOGO_MAX_HEIGHT / height, 1)
            width, height = width * scale, height * scale
            pdf.drawImage(
                logo,
                (PAGE_WIDTH - width) / 2,
                y - height,
                width=width,
                height=height,
                mask="auto",
            )
        except Exception as e:
            logger.warning(f"Could not draw invoice logo {path}: {e}")
            return y
        return y - height - 6

    # =========================================================================
    # BILL TO
    # =========================================================================

    def _draw_billing(self, pdf: canvas.Canvas, lines: List[str], y: float) -> float:
        pdf.setFont(FONT_BOLD, 10)
        pdf.drawString(MARGIN, y, "Bill To")
        y -= LINE_HEIGHT + 2

        pdf.setFont(FONT, BODY_SIZE)
        for line in lines:
            for wrapped in simpleSplit(line, FONT, BODY_SIZE, CONTENT_WIDTH / 2):
                pdf.drawString(MARGIN, y, wrapped)
                y -= LINE_HEIGHT
        return y - 12

    # =========================================================================
    # LINE ITEMS
    # =========================================================================

    def _draw_items(self, pdf: canvas.Canvas, items: List[OrderItem], y: float) -> float:
        y = self._draw_table_header(pdf, y)

        for item in items:
            split = item.tax_split()
            product_lines = simpleSplit(
                item.product_name, FONT, BODY_SIZE, COLUMNS[0].width - 2 * CELL_PADDING
            ) or [""]
            variant_lines = simpleSplit(
                f"{item.size} / {item.color}", FONT, BODY_SIZE, COLUMNS[1].width - 2 * CELL_PADDING
            ) or [""]
            row_height = max(len(product_lines), len(variant_lines)) * LINE_HEIGHT + CELL_PADDING

            if y - row_height < MARGIN:
                self._new_page(pdf)
                y = self._draw_table_header(pdf, PAGE_HEIGHT - MARGIN)

            cells = [
                product_lines,
                variant_lines,
                [str(item.quantity)],
                [self._money(item.unit_price)],
                [f"{split.rate_percent:.0f}%"],
                [self._money(split.tax)],
                [self._money(item.total_price)],
            ]
            self._draw_row(pdf, cells, y)
            y -= row_height
            pdf.setLineWidth(0.25)
            pdf.line(MARGIN, y + 2, PAGE_WIDTH - MARGIN, y + 2)

        return y - 10

    def _draw_table_header(self, pdf: canvas.Canvas, y: float) -> float:
        pdf.setFont(FONT_BOLD, BODY_SIZE)
        self._draw_row(pdf, [[column.title] for column in COLUMNS], y, bold=True)
        y -= LINE_HEIGHT + CELL_PADDING
        pdf.setLineWidth(0.75)
        pdf.line(MARGIN, y + 2, PAGE_WIDTH - MARGIN, y + 2)
        return y - 2

    def _draw_row(
        self,
        pdf: canvas.Canvas,
        cells: List[List[str]],
        y: float,
        bold: bool = False,
    ) -> None:
        pdf.setFont(FONT_BOLD if bold else FONT, BODY_SIZE)
        x = MARGIN
        for column, lines in zip(COLUMNS, cells):
            line_y = y - BODY_SIZE
            for line in lines:
                if column.align == "right":
                    pdf.drawRightString(x + column.width - CELL_PADDING, line_y, line)
                else:
                    pdf.drawString(x + CELL_PADDING, line_y, line)
                line_y -= LINE_HEIGHT
            x += column.width

    # =========================================================================
    # SUMMARY
    # =========================================================================

    def _draw_summary(self, pdf: canvas.Canvas, order: Order, y: float) -> None:
        rows = [
            ("Subtotal (excl. GST)", order.subtotal),
            ("GST", order.tax_amount),
        ]
        if order.shipping_cost:
            rows.append(("Shipping", order.shipping_cost))
        if order.cod_fee:
            rows.append(("COD Fee", order.cod_fee))

        needed = (len(rows) + 3) * LINE_HEIGHT + 2 * LINE_HEIGHT
        if y - needed < MARGIN:
            self._new_page(pdf)
            y = PAGE_HEIGHT - MARGIN

        label_x = PAGE_WIDTH - MARGIN - 200
        pdf.setFont(FONT, BODY_SIZE + 1)
        for label, amount in rows:
            pdf.drawString(label_x, y, label)
            pdf.drawRightString(PAGE_WIDTH - MARGIN, y, self._money(amount))
            y -= LINE_HEIGHT + 2

        pdf.line(label_x, y + 6, PAGE_WIDTH - MARGIN, y + 6)
        y -= 4
        pdf.setFont(FONT_BOLD, 11)
        pdf.drawString(label_x, y, "Total Amount")
        pdf.drawRightString(PAGE_WIDTH - MARGIN, y, self._money(order.total_amount))

    # =========================================================================
    # PAGES
    # =========================================================================

    def _draw_footer(self, pdf: canvas.Canvas) -> None:
        pdf.setFont(FONT, 8)
        pdf.drawCentredString(PAGE_WIDTH / 2, MARGIN - 16, self.branding.footer_note)

    def _new_page(self, pdf: canvas.Canvas) -> None:
        """Finish the current page (footer included) and start another."""
        self._draw_footer(pdf)
        pdf.showPage()

    def _money(self, amount: Decimal) -> str:
        return f"{self.branding.currency_symbol} {round_currency(amount):,}"
