from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, CheckConstraint, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship

from enums.product_category import ProductCategory
from models.base import Base


class OrderItem(Base):
    """
    Immutable pricing snapshot of one order line.

    original_price/price/quantity/pair_price are enough to re-derive
    line_total with the pair promotion rule, without live campaign state.
    """
    __tablename__ = 'order_items'

    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_order_item_quantity_positive'),
        CheckConstraint('price >= 0', name='ck_order_item_price_non_negative'),
        CheckConstraint('price <= original_price', name='ck_order_item_price_within_original'),
        Index('ix_order_items_order_id', 'order_id'),
    )

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(Integer, nullable=True)
    name = Column(String(200), nullable=False)
    color = Column(String(100), nullable=True)
    category = Column(SQLEnum(ProductCategory), nullable=False)
    quantity = Column(Integer, nullable=False)
    original_price = Column(Numeric(10, 2), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    pair_price = Column(Numeric(10, 2), nullable=True)
    units_at_pair_rate = Column(Integer, nullable=False, default=0)
    line_total = Column(Numeric(10, 2), nullable=False)
    promotion_name = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    order = relationship("Order", back_populates="items")


class OrderItemDTO(BaseModel):
    id: int | None = None
    order_id: int | None = None
    product_id: int | None = None
    name: str
    color: str | None = None
    category: ProductCategory
    quantity: int
    original_price: Decimal
    price: Decimal
    pair_price: Decimal | None = None
    units_at_pair_rate: int = 0
    line_total: Decimal
    promotion_name: str | None = None
    created_at: datetime | None = None
