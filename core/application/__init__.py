"""Application layer - services, interfaces, and DTOs."""

from .dtos import CreateOrderRequest, CreateOrderResponse, OrderDetailDTO
from .interfaces import ICacheInvalidator, IInvoiceRenderer, IOrderNumberGenerator
from .results import SideEffectResult
from .security import Identity
from .services import InvoiceService, OrderApplicationService

__all__ = [
    # DTOs
    "CreateOrderRequest",
    "CreateOrderResponse",
    "OrderDetailDTO",
    # Services
    "InvoiceService",
    "OrderApplicationService",
    # Interfaces
    "ICacheInvalidator",
    "IInvoiceRenderer",
    "IOrderNumberGenerator",
    # Misc
    "Identity",
    "SideEffectResult",
]
