"""Invoice rendering adapters."""

from .pdf_renderer import ReportLabInvoiceRenderer

__all__ = ["ReportLabInvoiceRenderer"]
