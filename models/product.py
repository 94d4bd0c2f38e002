from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Numeric, DateTime, CheckConstraint, Enum as SQLEnum

from enums.product_category import ProductCategory
from enums.product_type import ProductType
from models.base import Base


class Product(Base):
    """
    Catalog product pricing facts.

    Only the columns the pricing engine reads live here; images, dimensions
    and descriptions belong to the catalog.
    """
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    base_price = Column(Numeric(10, 2), nullable=False)
    # 0 or NULL both mean "no standing discount"
    discounted_price = Column(Numeric(10, 2), nullable=True)
    category = Column(SQLEnum(ProductCategory), nullable=False, default=ProductCategory.NONE)
    product_type = Column(SQLEnum(ProductType), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint('base_price > 0', name='check_base_price_positive'),
    )


class ProductPricingDTO(BaseModel):
    """Read-only pricing facts handed to the pricing engine."""
    id: int | None = None
    name: str = ""
    base_price: Decimal
    discounted_price: Decimal | None = None
    category: ProductCategory = ProductCategory.NONE
    product_type: ProductType = ProductType.SUNGLASSES
