"""
GST slab model.

Prices are tax-inclusive. The slab is chosen from a single unit's price,
never from a line or order total:
- Up to 2,500 (inclusive) per unit -> 5% GST
- Above 2,500 per unit -> 18% GST

CRITICAL: This module is shared by order creation and invoice rendering.
Both must produce identical figures, so nothing in here rounds.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

Number = Union[Decimal, int, str]

GST_SLAB_THRESHOLD = Decimal("2500")
GST_RATE_LOW = Decimal("0.05")
GST_RATE_HIGH = Decimal("0.18")


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def gst_rate_for_unit(unit_price: Number) -> Decimal:
    """Return the GST rate for one tax-inclusive unit price."""
    if _to_decimal(unit_price) <= GST_SLAB_THRESHOLD:
        return GST_RATE_LOW
    return GST_RATE_HIGH


@dataclass(frozen=True)
class TaxSplit:
    """
    Net/tax decomposition of a tax-inclusive amount.

    Invariant: net + tax == gross (unrounded).
    """
    rate: Decimal
    gross: Decimal
    net: Decimal
    tax: Decimal

    @property
    def rate_percent(self) -> Decimal:
        return self.rate * 100


def split_tax(unit_price: Number, quantity: int = 1) -> TaxSplit:
    """
    Split a tax-inclusive line into net and tax.

    Args:
        unit_price: Tax-inclusive price of one unit (selects the slab)
        quantity: Units in the line (scales the amount, never the slab)

    Returns:
        TaxSplit with unrounded net and tax
    """
    price = _to_decimal(unit_price)
    rate = gst_rate_for_unit(price)
    gross = price * quantity
    net = gross / (1 + rate)
    return TaxSplit(rate=rate, gross=gross, net=net, tax=gross - net)


@dataclass(frozen=True)
class TaxTotals:
    """Order-level sums of per-line splits, still unrounded."""
    gross: Decimal
    net: Decimal
    tax: Decimal

    @property
    def rounded_net(self) -> Decimal:
        return round_currency(self.net)

    @property
    def rounded_tax(self) -> Decimal:
        return round_currency(self.tax)


def sum_splits(splits: Iterable[TaxSplit]) -> TaxTotals:
    """Accumulate line splits without intermediate rounding."""
    gross = net = tax = Decimal("0")
    for split in splits:
        gross += split.gross
        net += split.net
        tax += split.tax
    return TaxTotals(gross=gross, net=net, tax=tax)


def round_currency(amount: Number) -> Decimal:
    """Round to a whole currency unit, halves away from zero."""
    return _to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def round_price(amount: Number) -> Decimal:
    """Round a unit price to paise, the precision prices are stored at."""
    return _to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
