"""
Line item validation and fulfillment partner resolution.

Every requested variant is checked against the catalog before anything
is written. While validating, the distinct fulfillment partners of the
matched products are collected; the order is auto-assigned a partner only
when exactly one appears.
"""
from dataclasses import dataclass
from decimal import Decimal
import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from core.domain.entities import CatalogProduct
from core.domain.exceptions import OrderValidationError
from core.domain.repositories import CatalogRepository
from core.domain.value_objects import round_price

from ..dtos import LineItemInput


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestedLineItem:
    """Canonical line item, whatever shape the client sent."""
    product_id: Optional[str]
    size: Optional[str]
    color: Optional[str]
    quantity: int
    unit_price: Decimal
    variant_id: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.product_id and self.size and self.color)


def normalize_line_item(item: LineItemInput) -> RequestedLineItem:
    """Collapse the product/variant input shapes into RequestedLineItem.

    The price is rounded to paise here so tax is split from the stored value.
    """
    return RequestedLineItem(
        product_id=item.product_id,
        size=item.size,
        color=item.color,
        quantity=item.quantity,
        unit_price=round_price(item.price),
        variant_id=getattr(item, "variant_id", None),
    )


@dataclass(frozen=True)
class ValidatedLineItem:
    """Requested line matched to its catalog product."""
    requested: RequestedLineItem
    product: CatalogProduct

    @property
    def product_name(self) -> str:
        return self.product.title or "Unknown Product"


@dataclass(frozen=True)
class ValidationOutcome:
    items: List[ValidatedLineItem]
    partners: FrozenSet[str]
    fulfillment_partner: Optional[str]


def resolve_fulfillment_partner(partners: Iterable[Optional[str]]) -> Optional[str]:
    """
    Pick the order-level partner.

    Nulls are ignored. One distinct partner is assigned; none or several
    leave the order unassigned for manual selection.
    """
    distinct = {partner for partner in partners if partner}
    if len(distinct) == 1:
        return next(iter(distinct))
    return None


class LineItemValidator:
    """Validates line items against the catalog."""

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    async def validate_and_resolve(self, line_items: Sequence[RequestedLineItem]) -> ValidationOutcome:
        """
        Validate all line items and resolve the fulfillment partner.

        Raises:
            OrderValidationError: On the first invalid line item
        """
        if not line_items:
            raise OrderValidationError("At least one line item is required")

        for item in line_items:
            if not item.is_complete:
                raise OrderValidationError("Each line item must have productId, size, and color")

        product_ids = list(dict.fromkeys(item.product_id for item in line_items))
        products: Dict[str, CatalogProduct] = {
            product.id: product for product in await self._catalog.find_many(product_ids)
        }

        validated: List[ValidatedLineItem] = []
        partners = set()
        for item in line_items:
            product = products.get(item.product_id)
            if product is None:
                raise OrderValidationError(f"Product not found: {item.product_id}")

            if item.size not in product.sizes:
                raise OrderValidationError(
                    f"Size {item.size} is not available for product {product.title}. "
                    f"Available sizes: {', '.join(product.sizes)}"
                )
            if item.color not in product.colors:
                raise OrderValidationError(
                    f"Color {item.color} is not available for product {product.title}. "
                    f"Available colors: {', '.join(product.colors)}"
                )

            if product.fulfillment_partner:
                partners.add(product.fulfillment_partner)
            validated.append(ValidatedLineItem(requested=item, product=product))

        fulfillment_partner = resolve_fulfillment_partner(partners)
        if len(partners) > 1:
            logger.info(
                f"Multiple fulfillment partners detected ({sorted(partners)}); "
                f"leaving fulfillment_partner unset for manual selection"
            )

        return ValidationOutcome(
            items=validated,
            partners=frozenset(partners),
            fulfillment_partner=fulfillment_partner,
        )
