"""Domain value objects."""

from .order_number import OrderNumber
from .tax import (
    GST_RATE_HIGH,
    GST_RATE_LOW,
    GST_SLAB_THRESHOLD,
    TaxSplit,
    TaxTotals,
    gst_rate_for_unit,
    round_currency,
    round_price,
    split_tax,
    sum_splits,
)

__all__ = [
    "GST_RATE_HIGH",
    "GST_RATE_LOW",
    "GST_SLAB_THRESHOLD",
    "OrderNumber",
    "TaxSplit",
    "TaxTotals",
    "gst_rate_for_unit",
    "round_currency",
    "round_price",
    "split_tax",
    "sum_splits",
]
