"""
Orders management endpoints.

Provides CRUD operations for orders.
"""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from core.application.dtos.order_dto import (
    CreateOrderRequest,
    OrderDTO,
    OrderListDTO,
    UpdateOrderStatusRequest,
)
from core.application.services.order_service import OrderApplicationService
from core.domain.errors import InvalidOrderTransitionError, OrderNotFoundError
from core.domain.value_objects import MAX_ORDER_ID
from api.dependencies import get_order_service


logger = logging.getLogger(__name__)
router = APIRouter()

OrderId = Annotated[int, Path(ge=0, le=MAX_ORDER_ID, description="Order identifier")]


# =============================================================================
# CREATE ORDER
# =============================================================================

@router.post(
    "",
    response_model=OrderDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create an order",
)
async def create_order(
    request: CreateOrderRequest,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Create a new order with a random id and the current time as created_at."""
    order = await service.create_order(request)
    logger.info(f"Order created: {order.order_id} (customer: {order.customer_id})")
    return order


# =============================================================================
# LIST ORDERS
# =============================================================================

@router.get(
    "",
    response_model=OrderListDTO,
    response_model_exclude_none=True,
    summary="List orders",
)
async def list_orders(
    cursor: int = Query(default=0, ge=0, description="Cursor returned by the previous page"),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    """
    List orders one page at a time.

    **Query Parameters:**
    - `cursor`: value of `next` from the previous response (default: 0)

    **Returns:**
    - `items`: orders on this page
    - `next`: cursor for the following page, absent once the listing is exhausted
    """
    return await service.list_orders(cursor=cursor)


# =============================================================================
# GET ORDER BY ID
# =============================================================================

@router.get(
    "/{order_id}",
    response_model=OrderDTO,
    summary="Get order by ID",
)
async def get_order(
    order_id: OrderId,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    try:
        return await service.get_order(order_id)
    except OrderNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order not found: {order_id}",
        )


# =============================================================================
# UPDATE ORDER STATUS
# =============================================================================

@router.put(
    "/{order_id}",
    response_model=OrderDTO,
    summary="Mark order shipped or completed",
)
async def update_order(
    request: UpdateOrderStatusRequest,
    order_id: OrderId,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """
    Move an order to `shipped` or `completed`.

    An order ships once, and completes once after shipping; anything else
    is rejected with 400.
    """
    try:
        return await service.update_status(order_id, request)
    except OrderNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order not found: {order_id}",
        )
    except InvalidOrderTransitionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# =============================================================================
# DELETE ORDER
# =============================================================================

@router.delete(
    "/{order_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete order by ID",
)
async def delete_order(
    order_id: OrderId,
    service: OrderApplicationService = Depends(get_order_service),
) -> dict:
    try:
        await service.delete_order(order_id)
    except OrderNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order not found: {order_id}",
        )
    logger.info(f"Order deleted: {order_id}")
    return {"status": "success"}
