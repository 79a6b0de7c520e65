"""
Order endpoints.

Checkout creation, customer/guest lookups, invoice download and admin
status / fulfillment updates.
"""
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_invoice_service, get_order_service
from api.security import get_optional_identity, require_admin
from core.application.dtos import (
    CreateOrderRequest,
    CreateOrderResponse,
    GuestLookupRequest,
    OrderDetailDTO,
    OrderListDTO,
    OrderUpdateResponse,
    StatusHistoryDTO,
    UpdateFulfillmentPartnerRequest,
    UpdatePartnerOrderIdRequest,
    UpdateStatusRequest,
)
from core.application.security import Identity
from core.application.services import InvoiceService, OrderApplicationService


logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# CREATE ORDER
# =============================================================================

@router.post(
    "",
    response_model=CreateOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="Create an order from a checkout submission",
)
async def create_order(
    request: CreateOrderRequest,
    identity: Optional[Identity] = Depends(get_optional_identity),
    service: OrderApplicationService = Depends(get_order_service),
):
    """
    Create an order.

    Guests may order without a token; a bearer token links the order's
    customer record to the authenticated user.
    """
    return await service.create_order(request, identity)


# =============================================================================
# LIST ORDERS (ADMIN)
# =============================================================================

@router.get(
    "",
    response_model=OrderListDTO,
    summary="List orders",
    description="Newest first, with items, payment and customer",
)
async def list_orders(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=500, description="Maximum number of orders to return"),
    offset: int = Query(default=0, ge=0, description="Number of orders to skip"),
    _admin: Identity = Depends(require_admin),
    service: OrderApplicationService = Depends(get_order_service),
):
    return await service.list_orders(status=status_filter, limit=limit, offset=offset)


# =============================================================================
# GUEST LOOKUP
# =============================================================================

@router.post(
    "/lookup",
    summary="Guest order lookup",
    description="Find an order by order number and the email used at checkout",
)
async def lookup_order(
    request: GuestLookupRequest,
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.lookup_guest_order(request.order_number, request.email)
    return {"success": True, "order": order}


# =============================================================================
# GET ORDER
# =============================================================================

@router.get(
    "/{order_number}",
    summary="Get order",
    description="Owner, admin, or guest presenting the order email",
)
async def get_order(
    order_number: str,
    email: Optional[str] = Query(default=None, description="Order email for guest access"),
    identity: Optional[Identity] = Depends(get_optional_identity),
    service: OrderApplicationService = Depends(get_order_service),
):
    order: OrderDetailDTO = await service.get_order(order_number, identity, email)
    return {"success": True, "order": order}


@router.get(
    "/{order_number}/invoice",
    summary="Download invoice",
    description="PDF invoice; non-admins only once the order is delivered",
    response_class=Response,
)
async def download_invoice(
    order_number: str,
    email: Optional[str] = Query(default=None, description="Order email for guest access"),
    identity: Optional[Identity] = Depends(get_optional_identity),
    service: InvoiceService = Depends(get_invoice_service),
):
    document = await service.render_invoice(order_number, identity, email)
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


@router.get(
    "/{order_number}/history",
    summary="Status history",
)
async def get_status_history(
    order_number: str,
    _admin: Identity = Depends(require_admin),
    service: OrderApplicationService = Depends(get_order_service),
):
    history: List[StatusHistoryDTO] = await service.get_status_history(order_number)
    return {"success": True, "history": history}


# =============================================================================
# ADMIN UPDATES
# =============================================================================

@router.put(
    "/{order_number}/status",
    response_model=OrderUpdateResponse,
    summary="Update order status",
)
async def update_status(
    order_number: str,
    request: UpdateStatusRequest,
    admin: Identity = Depends(require_admin),
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.update_status(order_number, request, admin)
    return OrderUpdateResponse(message="Order status updated successfully", order=order)


@router.put(
    "/{order_number}/fulfillment-partner",
    response_model=OrderUpdateResponse,
    summary="Update fulfillment partner",
)
async def update_fulfillment_partner(
    order_number: str,
    request: UpdateFulfillmentPartnerRequest,
    _admin: Identity = Depends(require_admin),
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.update_fulfillment_partner(order_number, request.fulfillment_partner)
    return OrderUpdateResponse(message="Fulfillment partner updated successfully", order=order)


@router.put(
    "/{order_number}/partner-order-id",
    response_model=OrderUpdateResponse,
    summary="Update partner order ID",
)
async def update_partner_order_id(
    order_number: str,
    request: UpdatePartnerOrderIdRequest,
    _admin: Identity = Depends(require_admin),
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.update_partner_order_id(order_number, request.partner_order_id)
    return OrderUpdateResponse(message="Partner order ID updated successfully", order=order)
