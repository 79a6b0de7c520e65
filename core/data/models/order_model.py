"""SQLAlchemy ORM models for the ordering context."""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CustomerModel(Base):
    """SQLAlchemy ORM model for customers table."""

    __tablename__ = "customers"

    id = Column(String(36), primary_key=True)
    auth_user_id = Column(String(64), nullable=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    first_name = Column(String(120), nullable=True)
    last_name = Column(String(120), nullable=True)
    phone = Column(String(32), nullable=True)
    address1 = Column(String(255), nullable=True)
    address2 = Column(String(255), nullable=True)
    city = Column(String(120), nullable=True)
    province = Column(String(120), nullable=True)
    zip = Column(String(20), nullable=True)
    country_code = Column(String(2), nullable=True)
    type = Column(String(20), nullable=False, default="shipping")
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self):
        return f"<CustomerModel(id={self.id}, email={self.email})>"


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True)
    order_number = Column(String(32), unique=True, nullable=False, index=True)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)

    # Contact snapshot at order time
    customer_email = Column(String(255), nullable=False)
    customer_name = Column(String(255), nullable=False)

    status = Column(String(20), nullable=False, default="pending", index=True)
    payment_status = Column(String(20), nullable=False, default="pending")
    gateway = Column(String(20), nullable=False)
    payment_id = Column(String(36), nullable=True)

    # Money (whole currency units for derived fields)
    subtotal = Column(Numeric(12, 2), nullable=False)
    tax_amount = Column(Numeric(12, 2), nullable=False)
    shipping_cost = Column(Numeric(12, 2), nullable=False, default=0)
    cod_fee = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False)

    # Fulfillment / shipping
    fulfillment_partner = Column(String(32), nullable=True)
    partner_order_id = Column(String(64), nullable=True)
    shipping_partner = Column(String(120), nullable=True)
    tracking_number = Column(String(120), nullable=True)
    tracking_url = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=_utcnow)

    items = relationship("OrderItemModel", back_populates="order", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_orders_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<OrderModel(id={self.id}, order_number={self.order_number}, status={self.status})>"


class OrderItemModel(Base):
    """SQLAlchemy ORM model for order_items table."""

    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String(64), nullable=False, index=True)
    variant_id = Column(String(64), nullable=True)
    product_name = Column(String(500), nullable=False)
    size = Column(String(32), nullable=False)
    color = Column(String(64), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    order = relationship("OrderModel", back_populates="items")


class StatusHistoryModel(Base):
    """SQLAlchemy ORM model for order_status_history table (append-only)."""

    __tablename__ = "order_status_history"

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    old_status = Column(String(20), nullable=False)
    new_status = Column(String(20), nullable=False)
    changed_by = Column(String(64), nullable=True)
    changed_by_name = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class PaymentModel(Base):
    """SQLAlchemy ORM model for payments table (written by the gateway flow)."""

    __tablename__ = "payments"

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False)
    method = Column(String(40), nullable=True)
    gateway_order_id = Column(String(64), nullable=True)
    gateway_payment_id = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class OrderAddressModel(Base):
    """SQLAlchemy ORM model for the legacy shipping_addresses table."""

    __tablename__ = "shipping_addresses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), nullable=False, index=True)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False, default="")
    address1 = Column(String(255), nullable=False)
    address2 = Column(String(255), nullable=True)
    city = Column(String(120), nullable=False)
    province = Column(String(120), nullable=True)
    zip = Column(String(20), nullable=False)
    country_code = Column(String(2), nullable=True)
    phone = Column(String(32), nullable=True)
    email = Column(String(255), nullable=True)


class ProductModel(Base):
    """
    SQLAlchemy ORM model for products table.

    Owned by the catalog; read-only here.
    variants = {"sizes": [...], "colors": [...]}
    """

    __tablename__ = "products"

    id = Column(String(64), primary_key=True)
    title = Column(String(500), nullable=False)
    variants = Column(JSON, nullable=True)
    fulfillment_partner = Column(String(32), nullable=True)


class OrderSequenceModel(Base):
    """Per-day order number counter."""

    __tablename__ = "order_sequences"

    date_key = Column(String(6), primary_key=True)
    sequence_number = Column(Integer, nullable=False, default=0)
    last_updated = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
