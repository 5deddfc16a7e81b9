"""Application service for Order operations."""

from datetime import datetime, timezone
from typing import Callable, Optional

from core.application.dtos.order_dto import (
    CreateOrderRequest,
    OrderDTO,
    OrderListDTO,
    UpdateOrderStatusRequest,
)
from core.domain.entities.order import Order
from core.domain.repositories.order_repository import FindAllPage, OrderRepository
from core.domain.value_objects import generate_order_id


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Transform between DTOs and domain entities
    - Apply the shipped/completed business rules before updating
    - Delegate persistence to the OrderRepository
    """

    def __init__(
        self,
        repository: OrderRepository,
        page_size: int = 50,
        id_factory: Callable[[], int] = generate_order_id,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize order application service.

        Args:
            repository: Order repository
            page_size: Index entries scanned per listing call
            id_factory: Source of new order ids
            clock: Source of timestamps (UTC now by default)
        """
        self._repository = repository
        self._page_size = page_size
        self._id_factory = id_factory
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def create_order(self, request: CreateOrderRequest) -> OrderDTO:
        """Create a new order.

        Raises:
            OrderAlreadyExistsError: If the generated id collides
        """
        order = Order.create(
            order_id=self._id_factory(),
            customer_id=request.customer_id,
            line_items=[item.to_domain() for item in request.line_items],
            now=self._clock(),
        )
        await self._repository.insert(order)
        return OrderDTO.from_domain(order)

    async def get_order(self, order_id: int) -> OrderDTO:
        """Get order by ID.

        Raises:
            OrderNotFoundError: If the order does not exist
        """
        return OrderDTO.from_domain(await self._repository.find_by_id(order_id))

    async def list_orders(self, cursor: int = 0) -> OrderListDTO:
        """List one page of orders starting at cursor."""
        result = await self._repository.find_all(FindAllPage(size=self._page_size, offset=cursor))
        return OrderListDTO(
            items=[OrderDTO.from_domain(order) for order in result.orders],
            next=result.cursor or None,
        )

    async def update_status(self, order_id: int, request: UpdateOrderStatusRequest) -> OrderDTO:
        """Mark an order shipped or completed.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidOrderTransitionError: If the transition is not allowed
            OrderConflictError: If another request changed the order meanwhile
        """
        order = await self._repository.find_by_id(order_id)

        now = self._clock()
        if request.status == "shipped":
            order.mark_shipped(now)
        else:
            order.mark_completed(now)

        await self._repository.update(order)
        return OrderDTO.from_domain(order)

    async def delete_order(self, order_id: int) -> None:
        """Delete an order.

        Raises:
            OrderNotFoundError: If the order does not exist
        """
        await self._repository.delete_by_id(order_id)
