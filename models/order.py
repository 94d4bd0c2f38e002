from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field
from sqlalchemy import Column, Integer, String, Numeric, DateTime, CheckConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship

from enums.currency import Currency
from enums.order_status import OrderStatus
from models.base import Base
from models.orderItem import OrderItemDTO


class Order(Base):
    """
    Order header.

    All amounts are frozen at creation time. Later promotion or product
    changes never touch an existing order.
    """
    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(32), nullable=False, unique=True)
    status = Column(SQLEnum(OrderStatus), nullable=False, default=OrderStatus.PENDING_PAYMENT)
    currency = Column(SQLEnum(Currency), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    total_savings = Column(Numeric(10, 2), nullable=False, default=0)
    shipping_cost = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False)
    customer_email = Column(String(255), nullable=True)
    payment_session_id = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    paid_at = Column(DateTime, nullable=True)

    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", lazy="selectin")

    __table_args__ = (
        CheckConstraint('subtotal >= 0', name='check_order_subtotal_non_negative'),
        CheckConstraint('total >= 0', name='check_order_total_non_negative'),
    )


class OrderDTO(BaseModel):
    id: int | None = None
    order_number: str
    status: OrderStatus = OrderStatus.PENDING_PAYMENT
    currency: Currency
    subtotal: Decimal
    total_savings: Decimal
    shipping_cost: Decimal
    total: Decimal
    customer_email: str | None = None
    payment_session_id: str | None = None
    created_at: datetime | None = None
    paid_at: datetime | None = None
    items: list[OrderItemDTO] = Field(default_factory=list)
