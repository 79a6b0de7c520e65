"""Application DTOs."""

from .order_dto import (
    CreateOrderRequest,
    CreateOrderResponse,
    CustomerDTO,
    GuestLookupRequest,
    LineItemInput,
    OrderDetailDTO,
    OrderItemDTO,
    OrderListDTO,
    OrderSummaryDTO,
    OrderUpdateResponse,
    PaymentDTO,
    ProductLineItemInput,
    ShippingAddressDTO,
    StatusHistoryDTO,
    UpdateFulfillmentPartnerRequest,
    UpdatePartnerOrderIdRequest,
    UpdateStatusRequest,
    VariantLineItemInput,
)

__all__ = [
    "CreateOrderRequest",
    "CreateOrderResponse",
    "CustomerDTO",
    "GuestLookupRequest",
    "LineItemInput",
    "OrderDetailDTO",
    "OrderItemDTO",
    "OrderListDTO",
    "OrderSummaryDTO",
    "OrderUpdateResponse",
    "PaymentDTO",
    "ProductLineItemInput",
    "ShippingAddressDTO",
    "StatusHistoryDTO",
    "UpdateFulfillmentPartnerRequest",
    "UpdatePartnerOrderIdRequest",
    "UpdateStatusRequest",
    "VariantLineItemInput",
]
