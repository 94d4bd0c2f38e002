import logging
import random
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import config
from db import session_commit
from enums.order_status import OrderStatus
from exceptions.order import EmptyOrderException, OrderNotFoundException
from models.order import OrderDTO
from models.orderItem import OrderItemDTO
from models.pricing import CartLineDTO, CartTotalsDTO, PricedLineDTO
from repositories.order import OrderRepository
from services.cart import CartService
from utils.color import color_display_name

logger = logging.getLogger(__name__)


class OrderService:

    @staticmethod
    def generate_order_number(now: datetime) -> str:
        """
        Human-friendly order number, e.g. "LA-482913-0057".

        Last six digits of the millisecond timestamp plus four random digits.
        """
        timestamp = str(int(now.timestamp() * 1000))[-6:]
        suffix = str(random.randint(0, 9999)).zfill(4)
        return f"{config.ORDER_NUMBER_PREFIX}-{timestamp}-{suffix}"

    @staticmethod
    def snapshot_line(line: PricedLineDTO) -> OrderItemDTO:
        """Freeze a priced line into an order item."""
        return OrderItemDTO(
            product_id=line.product_id,
            name=line.name,
            color=color_display_name(line.color) or None,
            category=line.category,
            quantity=line.quantity,
            original_price=line.base_price,
            price=line.unit_price,
            pair_price=line.pair_price,
            units_at_pair_rate=line.units_at_pair_rate,
            line_total=line.line_total,
            promotion_name=line.promotion_name
        )

    @staticmethod
    async def create_order(
        cart_totals: CartTotalsDTO,
        session: AsyncSession | Session,
        customer_email: str | None = None,
        payment_session_id: str | None = None
    ) -> OrderDTO:
        """
        Persist a priced cart as an immutable order snapshot.

        The totals are stored as computed; the order is never repriced when
        promotions or product prices change later.

        Args:
            cart_totals: Result of PricingService.aggregate_cart() for this checkout
            session: Database session
            customer_email: Optional contact email
            payment_session_id: Payment processor checkout session id

        Returns:
            Created OrderDTO with items

        Raises:
            EmptyOrderException: No lines to order
        """
        if not cart_totals.lines:
            raise EmptyOrderException()

        order_number = OrderService.generate_order_number(cart_totals.priced_at)
        while await OrderRepository.exists(order_number, session):
            order_number = OrderService.generate_order_number(cart_totals.priced_at)

        order_dto = OrderDTO(
            order_number=order_number,
            status=OrderStatus.PENDING_PAYMENT,
            currency=config.CURRENCY,
            subtotal=cart_totals.subtotal,
            total_savings=cart_totals.total_savings,
            shipping_cost=cart_totals.shipping,
            total=cart_totals.total,
            customer_email=customer_email,
            payment_session_id=payment_session_id,
            items=[OrderService.snapshot_line(line) for line in cart_totals.lines]
        )

        await OrderRepository.create(order_dto, session)
        await session_commit(session)
        logger.info(f"[Order] Created {order_number}: {len(order_dto.items)} items, "
                    f"total={cart_totals.total} {config.CURRENCY.value}")
        return await OrderService.get_order(order_number, session)

    @staticmethod
    async def place_order(
        lines: list[CartLineDTO],
        session: AsyncSession | Session,
        now: datetime | None = None,
        customer_email: str | None = None
    ) -> OrderDTO:
        """Price the cart against current campaign state and create the order in one go."""
        if not lines:
            raise EmptyOrderException()
        cart_totals = await CartService.price_cart(lines, session, now)
        return await OrderService.create_order(cart_totals, session, customer_email=customer_email)

    @staticmethod
    async def get_order(
        order_number: str,
        session: AsyncSession | Session
    ) -> OrderDTO:
        order = await OrderRepository.get_by_order_number(order_number, session)
        if order is None:
            raise OrderNotFoundException(order_number)
        return order

    @staticmethod
    async def mark_paid(
        order_number: str,
        session: AsyncSession | Session,
        paid_at: datetime | None = None
    ) -> None:
        updated = await OrderRepository.update_status(
            order_number, OrderStatus.PAID, session, paid_at=paid_at or datetime.utcnow()
        )
        if not updated:
            raise OrderNotFoundException(order_number)
        await session_commit(session)
        logger.info(f"[Order] {order_number} marked as paid")

    @staticmethod
    async def mark_payment_failed(
        order_number: str,
        session: AsyncSession | Session
    ) -> None:
        """Record a failed or abandoned payment. The pricing snapshot is kept as is."""
        updated = await OrderRepository.update_status(order_number, OrderStatus.FAILED, session)
        if not updated:
            raise OrderNotFoundException(order_number)
        await session_commit(session)
        logger.warning(f"[Order] Payment failed for {order_number}")
