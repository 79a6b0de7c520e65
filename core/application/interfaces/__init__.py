"""Application layer interfaces."""
from abc import ABC, abstractmethod

from core.domain.entities import Order, OrderItem

from ..results import SideEffectResult


class IOrderNumberGenerator(ABC):
    """
    Source of fresh, globally unique order numbers.

    Collision handling belongs to the implementation.
    """

    @abstractmethod
    async def generate(self) -> str:
        """
        Reserve one order number.

        Raises:
            OrderPersistenceError: If no number could be reserved
        """
        pass


class ICacheInvalidator(ABC):
    """
    Delete-on-write cache access.

    Invalidation is best effort: implementations report failures in the
    returned result instead of raising.
    """

    @abstractmethod
    async def invalidate(self, key: str) -> SideEffectResult:
        pass


class IInvoiceRenderer(ABC):
    """Renders an order into a paginated invoice document."""

    @abstractmethod
    def render(
        self,
        order: Order,
        items: list[OrderItem],
        billing_lines: list[str],
    ) -> bytes:
        """
        Render the invoice.

        Args:
            order: Order with stored totals
            items: Order items in display order
            billing_lines: Pre-resolved "bill to" block

        Returns:
            PDF document bytes
        """
        pass

    @staticmethod
    def filename_for(order_number: str) -> str:
        return f"Invoice-{order_number}.pdf"


__all__ = ["ICacheInvalidator", "IInvoiceRenderer", "IOrderNumberGenerator"]
