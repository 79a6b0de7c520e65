"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Discriminator, Field, Tag

from core.domain.entities import (
    Customer,
    Order,
    OrderDetails,
    OrderItem,
    Payment,
    ShippingAddress,
    StatusHistoryEntry,
)


# =============================================================================
# CREATE ORDER
# =============================================================================

class ShippingAddressDTO(BaseModel):
    """Shipping address captured at checkout."""

    first_name: str = Field(..., description="First name")
    last_name: str = Field(default="", description="Last name")
    email: str = Field(..., description="Contact email")
    phone: Optional[str] = None
    address1: str = Field(..., description="Address line 1")
    address2: Optional[str] = None
    city: str
    province: Optional[str] = None
    zip: str
    country_code: Optional[str] = Field(None, description="ISO country code, defaults to IN")

    def to_domain(self) -> ShippingAddress:
        return ShippingAddress(**self.model_dump())


class ProductLineItemInput(BaseModel):
    """Line item addressed by product id + size + color."""

    kind: Literal["product"] = "product"
    product_id: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    quantity: int = Field(..., gt=0, description="Units ordered")
    price: Decimal = Field(..., ge=0, description="Tax-inclusive unit price")


class VariantLineItemInput(BaseModel):
    """Line item addressed by a variant id, carrying its product attributes."""

    kind: Literal["variant"] = "variant"
    variant_id: str
    product_id: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    quantity: int = Field(..., gt=0, description="Units ordered")
    price: Decimal = Field(..., ge=0, description="Tax-inclusive unit price")


def _line_item_kind(value: Any) -> str:
    if isinstance(value, dict):
        if value.get("kind"):
            return value["kind"]
        return "variant" if value.get("variant_id") else "product"
    return getattr(value, "kind", "product")


LineItemInput = Annotated[
    Union[
        Annotated[ProductLineItemInput, Tag("product")],
        Annotated[VariantLineItemInput, Tag("variant")],
    ],
    Discriminator(_line_item_kind),
]


class CreateOrderRequest(BaseModel):
    """
    Checkout submission.

    Required fields are optional at the schema level so that missing
    values are reported by the order service with a readable message.
    subtotal/tax_amount are display-only; stored values are recomputed.
    """

    customer_email: Optional[str] = Field(None, description="Contact email")
    customer_name: Optional[str] = Field(None, description="Contact name")
    line_items: List[LineItemInput] = Field(default_factory=list)
    shipping_address: Optional[ShippingAddressDTO] = None
    subtotal: Optional[Decimal] = None
    tax_amount: Optional[Decimal] = None
    shipping_cost: Decimal = Field(default=Decimal("0"), ge=0)
    cod_fee: Decimal = Field(default=Decimal("0"), ge=0)
    total_amount: Optional[Decimal] = Field(None, description="Tax-inclusive total shown at checkout")
    gateway: Optional[str] = Field(None, description="COD or Prepaid")


class OrderSummaryDTO(BaseModel):
    """Public fields of a newly created order."""

    id: str
    order_number: str
    status: str
    payment_status: str
    gateway: str
    subtotal: Decimal
    tax_amount: Decimal
    shipping_cost: Decimal
    cod_fee: Decimal
    total_amount: Decimal
    created_at: datetime

    model_config = {"frozen": True}

    @classmethod
    def from_order(cls, order: Order) -> "OrderSummaryDTO":
        return cls(
            id=order.id,
            order_number=order.order_number,
            status=order.status,
            payment_status=order.payment_status,
            gateway=order.gateway,
            subtotal=order.subtotal,
            tax_amount=order.tax_amount,
            shipping_cost=order.shipping_cost,
            cod_fee=order.cod_fee,
            total_amount=order.total_amount,
            created_at=order.created_at,
        )


class CreateOrderResponse(BaseModel):
    """Response body for order creation."""

    success: bool = True
    order: OrderSummaryDTO
    message: str
    items_count: int


# =============================================================================
# READ MODELS
# =============================================================================

class OrderItemDTO(BaseModel):
    """DTO for order item."""

    id: str
    product_id: str
    product_name: str
    size: str
    color: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    model_config = {"frozen": True}

    @classmethod
    def from_item(cls, item: OrderItem) -> "OrderItemDTO":
        return cls(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product_name,
            size=item.size,
            color=item.color,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=item.total_price,
        )


class CustomerDTO(BaseModel):
    """Customer snapshot shown with an order."""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    zip: Optional[str] = None
    country_code: Optional[str] = None

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerDTO":
        return cls(
            id=customer.id,
            email=customer.email,
            first_name=customer.first_name,
            last_name=customer.last_name,
            phone=customer.phone,
            address1=customer.address1,
            address2=customer.address2,
            city=customer.city,
            province=customer.province,
            zip=customer.zip,
            country_code=customer.country_code,
        )


class PaymentDTO(BaseModel):
    """Linked gateway payment."""

    id: str
    amount: Decimal
    status: str
    method: Optional[str] = None
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_payment(cls, payment: Payment) -> "PaymentDTO":
        return cls(
            id=payment.id,
            amount=payment.amount,
            status=payment.status,
            method=payment.method,
            gateway_order_id=payment.gateway_order_id,
            gateway_payment_id=payment.gateway_payment_id,
            created_at=payment.created_at,
        )


class OrderDetailDTO(BaseModel):
    """Full order as returned by lookups."""

    id: str
    order_number: str
    customer_email: str
    customer_name: str
    status: str
    payment_status: str
    gateway: str
    subtotal: Decimal
    tax_amount: Decimal
    shipping_cost: Decimal
    cod_fee: Decimal
    total_amount: Decimal
    fulfillment_partner: Optional[str] = None
    partner_order_id: Optional[str] = None
    shipping_partner: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    created_at: datetime
    items: List[OrderItemDTO] = Field(default_factory=list)
    payment: Optional[PaymentDTO] = None
    customer: Optional[CustomerDTO] = None

    @classmethod
    def from_details(cls, details: OrderDetails) -> "OrderDetailDTO":
        order = details.order
        return cls(
            id=order.id,
            order_number=order.order_number,
            customer_email=order.customer_email,
            customer_name=order.customer_name,
            status=order.status,
            payment_status=order.payment_status,
            gateway=order.gateway,
            subtotal=order.subtotal,
            tax_amount=order.tax_amount,
            shipping_cost=order.shipping_cost,
            cod_fee=order.cod_fee,
            total_amount=order.total_amount,
            fulfillment_partner=order.fulfillment_partner,
            partner_order_id=order.partner_order_id,
            shipping_partner=order.shipping_partner,
            tracking_number=order.tracking_number,
            tracking_url=order.tracking_url,
            created_at=order.created_at,
            items=[OrderItemDTO.from_item(item) for item in details.items],
            payment=PaymentDTO.from_payment(details.payment) if details.payment else None,
            customer=CustomerDTO.from_customer(details.customer) if details.customer else None,
        )


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    success: bool = True
    orders: List[OrderDetailDTO] = Field(default_factory=list)
    total: int = Field(..., ge=0)


class StatusHistoryDTO(BaseModel):
    """One status history entry."""

    id: str
    old_status: str
    new_status: str
    changed_by: Optional[str] = None
    changed_by_name: str
    notes: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: StatusHistoryEntry) -> "StatusHistoryDTO":
        return cls(
            id=entry.id,
            old_status=entry.old_status,
            new_status=entry.new_status,
            changed_by=entry.changed_by,
            changed_by_name=entry.changed_by_name,
            notes=entry.notes,
            created_at=entry.created_at,
        )


# =============================================================================
# ADMIN UPDATES
# =============================================================================

class GuestLookupRequest(BaseModel):
    """Guest order lookup by number and email."""

    order_number: Optional[str] = None
    email: Optional[str] = None


class UpdateStatusRequest(BaseModel):
    """Status change, optionally with tracking details."""

    status: Optional[str] = None
    notes: Optional[str] = None
    shipping_partner: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None


class UpdateFulfillmentPartnerRequest(BaseModel):
    """Fulfillment partner assignment; null clears it."""

    fulfillment_partner: Optional[str] = None


class UpdatePartnerOrderIdRequest(BaseModel):
    """Partner-side order reference; null clears it."""

    partner_order_id: Optional[str] = None


class OrderUpdateResponse(BaseModel):
    """Response body for admin updates."""

    success: bool = True
    message: str
    order: dict
