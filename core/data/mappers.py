"""Static mappers for domain entities ↔ database models."""

from dataclasses import fields
from decimal import Decimal
from typing import Any, Dict, Type

from core.domain.entities import (
    CatalogProduct,
    Customer,
    Order,
    OrderAddress,
    OrderItem,
    Payment,
    StatusHistoryEntry,
)

from .models.order_model import (
    CustomerModel,
    OrderAddressModel,
    OrderItemModel,
    OrderModel,
    PaymentModel,
    ProductModel,
    StatusHistoryModel,
)

MONEY_COLUMNS = {
    "subtotal",
    "tax_amount",
    "shipping_cost",
    "cod_fee",
    "total_amount",
    "unit_price",
    "total_price",
    "amount",
}


def _to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _column_values(model: Any, entity_cls: Type) -> Dict[str, Any]:
    """Read the columns that share a name with a dataclass field."""
    values = {}
    for f in fields(entity_cls):
        if not hasattr(model, f.name):
            continue
        value = getattr(model, f.name)
        if f.name in MONEY_COLUMNS:
            value = _to_decimal(value)
        values[f.name] = value
    return values


def _entity_values(entity: Any) -> Dict[str, Any]:
    return {f.name: getattr(entity, f.name) for f in fields(entity)}


class CustomerMapper:
    """Static mapper for Customer ↔ CustomerModel transformation."""

    @staticmethod
    def to_domain(model: CustomerModel) -> Customer:
        return Customer(**_column_values(model, Customer))

    @staticmethod
    def to_persistence(entity: Customer) -> CustomerModel:
        return CustomerModel(**_entity_values(entity))


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation.

    Items are mapped separately: they are written in their own batch and
    read through the item repository.
    """

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate.

        Args:
            model: OrderModel instance

        Returns:
            Order domain aggregate
        """
        return Order(**_column_values(model, Order))

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert domain aggregate to ORM model.

        Args:
            entity: Order domain aggregate

        Returns:
            OrderModel instance (without items)
        """
        return OrderModel(**_entity_values(entity))


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel) -> OrderItem:
        return OrderItem(**_column_values(model, OrderItem))

    @staticmethod
    def to_persistence(entity: OrderItem) -> OrderItemModel:
        return OrderItemModel(**_entity_values(entity))


class StatusHistoryMapper:
    """Static mapper for StatusHistoryEntry ↔ StatusHistoryModel."""

    @staticmethod
    def to_domain(model: StatusHistoryModel) -> StatusHistoryEntry:
        return StatusHistoryEntry(**_column_values(model, StatusHistoryEntry))

    @staticmethod
    def to_persistence(entity: StatusHistoryEntry) -> StatusHistoryModel:
        return StatusHistoryModel(**_entity_values(entity))


class PaymentMapper:
    """Read-only mapper for gateway payment rows."""

    @staticmethod
    def to_domain(model: PaymentModel) -> Payment:
        return Payment(**_column_values(model, Payment))


class OrderAddressMapper:
    """Read-only mapper for legacy shipping address rows."""

    @staticmethod
    def to_domain(model: OrderAddressModel) -> OrderAddress:
        return OrderAddress(**_column_values(model, OrderAddress))


class CatalogProductMapper:
    """Read-only mapper for catalog products."""

    @staticmethod
    def to_domain(model: ProductModel) -> CatalogProduct:
        variants = model.variants or {}
        return CatalogProduct(
            id=model.id,
            title=model.title,
            sizes=list(variants.get("sizes") or []),
            colors=list(variants.get("colors") or []),
            fulfillment_partner=model.fulfillment_partner,
        )
