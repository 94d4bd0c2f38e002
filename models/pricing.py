from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from enums.price_source import PriceSource
from enums.product_category import ProductCategory
from models.color import Color
from models.product import ProductPricingDTO
from models.promotion import CategoryCampaignDTO


class ResolvedPriceDTO(BaseModel):
    """Effective price of one unit and where it came from."""
    unit_price: Decimal
    source: PriceSource
    campaign: CategoryCampaignDTO | None = None

    @property
    def pair_price(self) -> Decimal | None:
        """Pair price in effect, only while a campaign priced the unit."""
        if self.source == PriceSource.CAMPAIGN and self.campaign is not None:
            return self.campaign.price_for_two
        return None


class LineTotalDTO(BaseModel):
    """Pair promotion split for one line (e.g. "1 pair @ $140 + 3 × $79")."""
    line_total: Decimal
    units_at_pair_rate: int
    units_at_single_rate: int


class CartLineDTO(BaseModel):
    """One product+color combination in a cart."""
    product: ProductPricingDTO
    quantity: int
    color: Color | None = None


class PricedLineDTO(BaseModel):
    product_id: int | None = None
    name: str = ""
    color: Color | None = None
    category: ProductCategory
    quantity: int
    base_price: Decimal
    unit_price: Decimal
    source: PriceSource
    pair_price: Decimal | None = None
    promotion_name: str | None = None
    line_total: Decimal
    units_at_pair_rate: int
    units_at_single_rate: int
    line_savings: Decimal


class CartTotalsDTO(BaseModel):
    """Complete result of a cart or order pricing pass."""
    lines: list[PricedLineDTO] = Field(default_factory=list)
    subtotal: Decimal
    total_savings: Decimal
    shipping: Decimal
    total: Decimal
    priced_at: datetime


class PaymentLineItemDTO(BaseModel):
    """One payment-processor line item (single price per line, minor units)."""
    name: str
    description: str = ""
    unit_amount: int
    quantity: int
    currency: str


class ShippingOptionDTO(BaseModel):
    display_name: str
    amount: int
    currency: str
