"""Domain enums."""
from .order_status import FulfillmentPartner, OrderStatus, PaymentGateway, PaymentStatus

__all__ = ["FulfillmentPartner", "OrderStatus", "PaymentGateway", "PaymentStatus"]
