"""Application service for Order operations."""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from core.domain.entities import (
    Customer,
    Order,
    OrderDetails,
    OrderItem,
    Payment,
    StatusHistoryEntry,
)
from core.domain.enums import FulfillmentPartner, PaymentGateway
from core.domain.exceptions import (
    AccessDeniedError,
    CompensationFailedError,
    OrderNotFoundError,
    OrderPersistenceError,
    OrderValidationError,
)
from core.domain.repositories import Store
from core.domain.value_objects import split_tax, sum_splits

from ..dtos import (
    CreateOrderRequest,
    CreateOrderResponse,
    OrderDetailDTO,
    OrderListDTO,
    OrderSummaryDTO,
    StatusHistoryDTO,
    UpdateStatusRequest,
)
from ..interfaces import ICacheInvalidator, IOrderNumberGenerator
from ..results import SideEffectResult, fire_and_log
from ..security import Identity, owns_order
from .customer_resolver import CustomerResolver
from .line_item_validator import LineItemValidator, ValidationOutcome, normalize_line_item


logger = logging.getLogger(__name__)

RECENT_ORDERS_CACHE_KEY = "orders:last30days"


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Run the checkout transaction with compensating rollback
    - Enforce order visibility rules
    - Apply admin status / fulfillment updates with history
    """

    def __init__(
        self,
        store: Store,
        order_numbers: IOrderNumberGenerator,
        cache: ICacheInvalidator,
        recent_orders_cache_key: str = RECENT_ORDERS_CACHE_KEY,
        default_country_code: str = "IN",
    ) -> None:
        """Initialize order application service.

        Args:
            store: Datastore handle
            order_numbers: Order number generator
            cache: Cache invalidation target
            recent_orders_cache_key: Aggregate key dropped after each new order
            default_country_code: Country used for new customers without one
        """
        self._store = store
        self._order_numbers = order_numbers
        self._cache = cache
        self._recent_orders_cache_key = recent_orders_cache_key
        self._customers = CustomerResolver(store.customers, default_country_code)
        self._validator = LineItemValidator(store.catalog)

    # =========================================================================
    # CREATE
    # =========================================================================

    async def create_order(
        self,
        request: CreateOrderRequest,
        identity: Optional[Identity] = None,
    ) -> CreateOrderResponse:
        """Create an order from a checkout submission.

        Args:
            request: CreateOrderRequest DTO
            identity: Authenticated caller, if any

        Returns:
            CreateOrderResponse with the order's public fields

        Raises:
            OrderValidationError: Bad input; nothing was written
            OrderPersistenceError: A write failed; any partial order was removed
            CompensationFailedError: Item insert failed and the order could not be removed
        """
        started = time.monotonic()
        logger.info(
            f"[ORDER] Create requested: email={request.customer_email}, "
            f"gateway={request.gateway}, items={len(request.line_items)}, "
            f"total={request.total_amount}"
        )

        # 1. Validate request
        self._validate_request(request)
        line_items = [normalize_line_item(item) for item in request.line_items]
        outcome = await self._validator.validate_and_resolve(line_items)

        # 2. Reserve order number
        order_number = await self._order_numbers.generate()
        logger.info(f"[ORDER] Generated order number: {order_number}")

        # 3. Resolve customer
        customer_id = await self._customers.resolve(
            email=request.customer_email,
            shipping_address=request.shipping_address.to_domain(),
            auth_user_id=identity.user_id if identity else None,
        )

        # 4. Derive reporting figures (sum unrounded, round once)
        totals = sum_splits(
            split_tax(item.requested.unit_price, item.requested.quantity)
            for item in outcome.items
        )

        # 5. Insert order
        order = Order(
            order_number=order_number,
            customer_id=customer_id,
            customer_email=request.customer_email,
            customer_name=request.customer_name,
            gateway=request.gateway,
            subtotal=totals.rounded_net,
            tax_amount=totals.rounded_tax,
            shipping_cost=request.shipping_cost,
            cod_fee=request.cod_fee,
            total_amount=request.total_amount,
            fulfillment_partner=outcome.fulfillment_partner,
        )
        if order.fulfillment_partner:
            logger.info(f"[ORDER] Auto-assigned fulfillment partner for {order_number}: {order.fulfillment_partner}")

        try:
            order = await self._store.orders.add(order)
        except Exception as e:
            logger.error(f"[ORDER] Error creating order {order_number}: {e}", exc_info=True)
            raise OrderPersistenceError("Failed to create order in database") from e

        # 6. Insert items in one batch, compensating on failure
        items = self._build_items(order, outcome)
        try:
            await self._store.order_items.add_many(items)
        except Exception as e:
            logger.error(f"[ORDER] Error creating order items for {order_number}: {e}", exc_info=True)
            await self._compensate(order, e)
            raise OrderPersistenceError("Failed to create order items") from e

        # 7. Best-effort cache invalidation
        await self._cache.invalidate(self._recent_orders_cache_key)

        duration = time.monotonic() - started
        logger.info(
            f"[ORDER] Created {order_number}: items={len(items)}, total={order.total_amount}, "
            f"gateway={order.gateway}, payment_status={order.payment_status} ({duration:.3f}s)"
        )

        if order.gateway == PaymentGateway.COD.value:
            message = "Order created successfully. Payment pending (COD)."
        else:
            message = "Order created successfully. Please complete payment."

        return CreateOrderResponse(
            order=OrderSummaryDTO.from_order(order),
            message=message,
            items_count=len(items),
        )

    def _validate_request(self, request: CreateOrderRequest) -> None:
        if (
            not request.customer_email
            or not request.customer_name
            or not request.line_items
            or request.shipping_address is None
            or request.total_amount is None
            or request.total_amount <= 0
        ):
            raise OrderValidationError("Missing required fields")

        if request.gateway not in (PaymentGateway.COD.value, PaymentGateway.PREPAID.value):
            raise OrderValidationError("Gateway must be 'COD' or 'Prepaid'")

    def _build_items(self, order: Order, outcome: ValidationOutcome) -> List[OrderItem]:
        return [
            OrderItem(
                order_id=order.id,
                product_id=item.requested.product_id,
                product_name=item.product_name,
                size=item.requested.size,
                color=item.requested.color,
                quantity=item.requested.quantity,
                unit_price=item.requested.unit_price,
                total_price=item.requested.unit_price * item.requested.quantity,
                variant_id=item.requested.variant_id,
            )
            for item in outcome.items
        ]

    async def _compensate(self, order: Order, cause: Exception) -> None:
        """Delete an order whose items could not be written."""
        logger.info(f"[ORDER] Attempting to clean up order {order.order_number} ({order.id})")
        try:
            await self._store.orders.delete(order.id)
        except Exception as delete_error:
            logger.critical(
                f"[ORDER] Order {order.order_number} ({order.id}) exists without items and "
                f"could not be deleted; manual cleanup required: {delete_error}",
                exc_info=True,
            )
            raise CompensationFailedError(
                "Failed to create order items and failed to remove the partial order",
                order_id=order.id,
                order_number=order.order_number,
            ) from cause
        logger.info(f"[ORDER] Removed partial order {order.order_number}")

    # =========================================================================
    # READ
    # =========================================================================

    async def authorize(
        self,
        order_number: str,
        identity: Optional[Identity] = None,
        email: Optional[str] = None,
    ) -> Order:
        """Load an order the requester is allowed to see.

        Raises:
            OrderNotFoundError: Unknown order number
            AccessDeniedError: Requester neither owns the order nor presented its email
        """
        order = await self._get_order(order_number)

        linked_customer: Optional[Customer] = None
        if identity is not None and not identity.is_admin:
            linked_customer = await self._store.customers.find_by_auth_user_id(identity.user_id)

        if not owns_order(order, identity, linked_customer, email):
            raise AccessDeniedError(
                "Access denied. Please provide email query parameter for guest orders or log in."
            )
        return order

    async def get_order(
        self,
        order_number: str,
        identity: Optional[Identity] = None,
        email: Optional[str] = None,
    ) -> OrderDetailDTO:
        """Get an order with items, payment and customer."""
        order = await self.authorize(order_number, identity, email)
        return OrderDetailDTO.from_details(await self.load_details(order))

    async def lookup_guest_order(self, order_number: Optional[str], email: Optional[str]) -> OrderDetailDTO:
        """Guest lookup by order number and email."""
        if not order_number or not email:
            raise OrderValidationError("Order number and email are required")

        order = await self._get_order(order_number)
        if not order.belongs_to_email(email):
            raise AccessDeniedError("Email does not match this order")
        return OrderDetailDTO.from_details(await self.load_details(order))

    async def list_orders(
        self,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> OrderListDTO:
        """List orders newest first, each with its details."""
        orders = await self._store.orders.find_all(status=status, limit=limit, offset=offset)
        details = await asyncio.gather(*(self.load_details(order) for order in orders))
        return OrderListDTO(
            orders=[OrderDetailDTO.from_details(detail) for detail in details],
            total=len(details),
        )

    async def load_details(self, order: Order) -> OrderDetails:
        """Fetch items, then payment and customer concurrently."""
        items = await self._store.order_items.find_by_order(order.id)
        payment, customer = await asyncio.gather(
            self._find_payment(order),
            self._store.customers.find_by_id(order.customer_id),
        )
        return OrderDetails(order=order, items=items, customer=customer, payment=payment)

    async def get_status_history(self, order_number: str) -> List[StatusHistoryDTO]:
        order = await self._get_order(order_number)
        entries = await self._store.status_history.find_by_order(order.id)
        return [StatusHistoryDTO.from_entry(entry) for entry in entries]

    async def _find_payment(self, order: Order) -> Optional[Payment]:
        if not order.payment_id:
            return None
        return await self._store.payments.find_by_id(order.payment_id)

    async def _get_order(self, order_number: str) -> Order:
        order = await self._store.orders.find_by_number(order_number)
        if order is None:
            raise OrderNotFoundError()
        return order

    # =========================================================================
    # ADMIN UPDATES
    # =========================================================================

    async def update_status(
        self,
        order_number: str,
        request: UpdateStatusRequest,
        identity: Identity,
    ) -> Dict[str, Any]:
        """Change status and/or tracking details.

        Returns:
            Public fields of the updated order

        Raises:
            OrderValidationError: Invalid status, missing tracking info or no-op
            OrderNotFoundError: Unknown order number
            OrderPersistenceError: Update could not be written
        """
        if not request.status:
            raise OrderValidationError("Status is required")

        order = await self._get_order(order_number)
        old_status = order.status
        changes = order.plan_status_update(
            request.status,
            {
                "shipping_partner": request.shipping_partner,
                "tracking_number": request.tracking_number,
                "tracking_url": request.tracking_url,
            },
        )

        try:
            await self._store.orders.update(order.id, changes)
        except Exception as e:
            logger.error(f"Error updating order status for {order_number}: {e}", exc_info=True)
            raise OrderPersistenceError("Failed to update order status") from e
        order.apply(changes)

        if "status" in changes:
            logger.info(f"Order {order_number} status {old_status} -> {order.status} by {identity.user_id}")
            await self._record_status_change(order, old_status, identity, request.notes)

        return {
            "id": order.id,
            "order_number": order.order_number,
            "status": order.status,
            "shipping_partner": order.shipping_partner,
            "tracking_number": order.tracking_number,
            "tracking_url": order.tracking_url,
        }

    async def _record_status_change(
        self,
        order: Order,
        old_status: str,
        identity: Identity,
        notes: Optional[str],
    ) -> SideEffectResult:
        entry = StatusHistoryEntry(
            order_id=order.id,
            old_status=old_status,
            new_status=order.status,
            changed_by=identity.user_id,
            changed_by_name=identity.display_name,
            notes=notes or None,
        )
        return await fire_and_log(
            f"status history for {order.order_number}",
            lambda: self._store.status_history.append(entry),
        )

    async def update_fulfillment_partner(self, order_number: str, partner: Optional[str]) -> Dict[str, Any]:
        """Assign or clear the fulfillment partner."""
        if partner is not None and partner not in FulfillmentPartner.values():
            raise OrderValidationError(
                f"Invalid fulfillment partner. Must be one of: "
                f"{', '.join(FulfillmentPartner.values())}, or null"
            )

        order = await self._get_order(order_number)
        changes = {"fulfillment_partner": partner or None}
        try:
            await self._store.orders.update(order.id, changes)
        except Exception as e:
            logger.error(f"Error updating fulfillment partner for {order_number}: {e}", exc_info=True)
            raise OrderPersistenceError("Failed to update fulfillment partner") from e

        return {"id": order.id, "order_number": order.order_number, **changes}

    async def update_partner_order_id(self, order_number: str, partner_order_id: Optional[str]) -> Dict[str, Any]:
        """Set or clear the partner-side order reference."""
        if partner_order_id is not None and not partner_order_id.strip():
            raise OrderValidationError("Partner order ID cannot be empty. Use null to clear it.")

        order = await self._get_order(order_number)
        changes = {"partner_order_id": partner_order_id.strip() if partner_order_id else None}
        try:
            await self._store.orders.update(order.id, changes)
        except Exception as e:
            logger.error(f"Error updating partner order ID for {order_number}: {e}", exc_info=True)
            raise OrderPersistenceError("Failed to update partner order ID") from e

        return {"id": order.id, "order_number": order.order_number, **changes}
