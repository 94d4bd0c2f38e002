from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from enums.order_status import OrderStatus
from models.order import Order, OrderDTO
from models.orderItem import OrderItem


class OrderRepository:

    @staticmethod
    async def create(
        order_dto: OrderDTO,
        session: Session | AsyncSession
    ) -> int:
        """
        Persist an order header together with its item snapshots.

        Returns:
            Database id of the new order
        """
        order = Order(**order_dto.model_dump(exclude={"id", "items", "created_at"}))
        order.items = [
            OrderItem(**item.model_dump(exclude={"id", "order_id", "created_at"}))
            for item in order_dto.items
        ]
        session.add(order)
        await session_flush(session)
        return order.id

    @staticmethod
    async def get_by_order_number(
        order_number: str,
        session: Session | AsyncSession
    ) -> OrderDTO | None:
        stmt = select(Order).where(Order.order_number == order_number)
        result = await session_execute(stmt, session)
        order = result.scalar()

        if order is None:
            return None

        return OrderDTO.model_validate(order, from_attributes=True)

    @staticmethod
    async def exists(
        order_number: str,
        session: Session | AsyncSession
    ) -> bool:
        stmt = select(Order.id).where(Order.order_number == order_number).limit(1)
        result = await session_execute(stmt, session)
        return result.scalar() is not None

    @staticmethod
    async def update_status(
        order_number: str,
        status: OrderStatus,
        session: Session | AsyncSession,
        paid_at: datetime | None = None
    ) -> bool:
        values = {"status": status}
        if paid_at is not None:
            values["paid_at"] = paid_at
        stmt = update(Order).where(Order.order_number == order_number).values(**values)
        result = await session_execute(stmt, session)
        return result.rowcount > 0
