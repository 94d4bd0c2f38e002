from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Boolean, CheckConstraint, Index

from enums.product_category import ProductCategory
from models.base import Base


class Promotion(Base):
    """
    Time-bounded promotional campaign.

    A campaign prices both promotion-eligible collections at once: a single
    unit price and a fixed "price for two" per collection. It is running iff
    is_active and valid_from <= now <= valid_to.
    """
    __tablename__ = 'promotions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    offer_name = Column(String(100), nullable=False)
    valid_from = Column(DateTime, nullable=False)
    valid_to = Column(DateTime, nullable=False)

    signature_original_price = Column(Numeric(10, 2), nullable=False)
    signature_discounted_price = Column(Numeric(10, 2), nullable=False)
    signature_price_for_two = Column(Numeric(10, 2), nullable=False)

    essentials_original_price = Column(Numeric(10, 2), nullable=False)
    essentials_discounted_price = Column(Numeric(10, 2), nullable=False)
    essentials_price_for_two = Column(Numeric(10, 2), nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)
    # Lets an admin publish a pair price above two discounted singles
    allow_pair_price_override = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        CheckConstraint('valid_from <= valid_to', name='check_validity_window'),
        Index('ix_promotions_active_window', 'is_active', 'valid_from', 'valid_to'),
    )


class CategoryCampaignDTO(BaseModel):
    """One collection's slice of a promotion, as seen by the pricing engine."""
    promotion_id: int | None = None
    offer_name: str
    category: ProductCategory
    valid_from: datetime
    valid_to: datetime
    is_active: bool = True
    original_price: Decimal
    discounted_price: Decimal
    price_for_two: Decimal
    allow_pair_price_override: bool = False

    def is_running(self, now: datetime) -> bool:
        return self.is_active and self.valid_from <= now <= self.valid_to


class PromotionDTO(BaseModel):
    id: int | None = None
    offer_name: str
    valid_from: datetime
    valid_to: datetime
    signature_original_price: Decimal
    signature_discounted_price: Decimal
    signature_price_for_two: Decimal
    essentials_original_price: Decimal
    essentials_discounted_price: Decimal
    essentials_price_for_two: Decimal
    is_active: bool = True
    allow_pair_price_override: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def for_category(self, category: ProductCategory) -> CategoryCampaignDTO | None:
        """Project the promotion onto one collection (None for non-eligible categories)."""
        if not category.is_promotion_eligible:
            return None
        prefix = category.value
        return CategoryCampaignDTO(
            promotion_id=self.id,
            offer_name=self.offer_name,
            category=category,
            valid_from=self.valid_from,
            valid_to=self.valid_to,
            is_active=self.is_active,
            original_price=getattr(self, f"{prefix}_original_price"),
            discounted_price=getattr(self, f"{prefix}_discounted_price"),
            price_for_two=getattr(self, f"{prefix}_price_for_two"),
            allow_pair_price_override=self.allow_pair_price_override,
        )
