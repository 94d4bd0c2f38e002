"""
Cart Service

Cart line bookkeeping and the two ways a cart gets priced:
- strict (checkout): any pricing failure aborts, nothing is charged
- display (cart page): a failing line shows "pricing unavailable", the rest still renders
"""

import logging
from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from exceptions.pricing import InvalidProductDataException, InvalidQuantityException, PricingException
from models.color import Color
from models.pricing import CartLineDTO, CartTotalsDTO, PricedLineDTO
from repositories.product import ProductRepository
from services.pricing import CampaignLookup, PricingService
from services.promotion import PromotionService
from utils.color import color_key, parse_color

logger = logging.getLogger(__name__)

PRICING_UNAVAILABLE = "Pricing unavailable"


class CartLineViewDTO(BaseModel):
    line: CartLineDTO
    priced: PricedLineDTO | None = None
    error: str | None = None


class CartViewDTO(BaseModel):
    lines: list[CartLineViewDTO] = Field(default_factory=list)
    # None as soon as one line could not be priced
    totals: CartTotalsDTO | None = None


class CartService:

    @staticmethod
    def line_key(line: CartLineDTO) -> tuple:
        return line.product.id, color_key(line.color)

    @staticmethod
    def add_line(lines: list[CartLineDTO], new_line: CartLineDTO) -> list[CartLineDTO]:
        """
        Add units to a cart, merging with an existing line for the same product and color.

        Returns:
            New list of lines (input is not mutated)
        """
        if new_line.quantity <= 0:
            raise InvalidQuantityException(new_line.quantity)

        key = CartService.line_key(new_line)
        merged = []
        found = False
        for line in lines:
            if CartService.line_key(line) == key:
                merged.append(line.model_copy(update={"quantity": line.quantity + new_line.quantity}))
                found = True
            else:
                merged.append(line)
        if not found:
            merged.append(new_line)
        return merged

    @staticmethod
    def update_quantity(
        lines: list[CartLineDTO],
        product_id: int,
        color: str | dict | Color | None,
        quantity: int
    ) -> list[CartLineDTO]:
        """
        Set a line's quantity. Quantity 0 removes the line.

        Raises:
            InvalidQuantityException: Negative quantity
        """
        if quantity < 0:
            raise InvalidQuantityException(quantity)

        key = (product_id, color_key(parse_color(color)))
        updated = []
        for line in lines:
            if CartService.line_key(line) != key:
                updated.append(line)
            elif quantity > 0:
                updated.append(line.model_copy(update={"quantity": quantity}))
        return updated

    @staticmethod
    def remove_line(
        lines: list[CartLineDTO],
        product_id: int,
        color: str | dict | Color | None = None
    ) -> list[CartLineDTO]:
        return CartService.update_quantity(lines, product_id, color, 0)

    @staticmethod
    async def load_lines(
        requested: list[dict],
        session: AsyncSession | Session
    ) -> list[CartLineDTO]:
        """
        Build cart lines from client payloads ({"product_id", "quantity", "color"}).

        Prices always come from the product store, never from the payload.

        Raises:
            InvalidProductDataException: Unknown product id
            InvalidQuantityException: Quantity <= 0
        """
        products = await ProductRepository.get_by_ids([item["product_id"] for item in requested], session)
        lines = []
        for item in requested:
            product = products.get(item["product_id"])
            if product is None:
                raise InvalidProductDataException(item["product_id"], "product not found")
            lines = CartService.add_line(lines, CartLineDTO(
                product=product,
                quantity=item["quantity"],
                color=parse_color(item.get("color"))
            ))
        return lines

    @staticmethod
    async def price_cart(
        lines: list[CartLineDTO],
        session: AsyncSession | Session,
        now: datetime | None = None
    ) -> CartTotalsDTO:
        """Strict pricing for checkout: every PricingException propagates."""
        now = now or datetime.utcnow()
        lookup = await PromotionService.load_campaign_lookup(now, session)
        return PricingService.aggregate_cart(lines, lookup, now)

    @staticmethod
    def price_cart_for_display(
        lines: list[CartLineDTO],
        campaign_lookup: CampaignLookup,
        now: datetime
    ) -> CartViewDTO:
        """
        Price a cart for rendering.

        Lines that fail are marked "Pricing unavailable". Totals are only
        reported when every line priced, a partial total is never shown.
        """
        views = []
        for line in lines:
            try:
                priced = PricingService.price_line(line, campaign_lookup, now)
                views.append(CartLineViewDTO(line=line, priced=priced))
            except PricingException as e:
                logger.warning(f"[Cart] Pricing unavailable for product {line.product.id}: {e}")
                views.append(CartLineViewDTO(line=line, error=PRICING_UNAVAILABLE))

        totals = None
        if all(view.priced is not None for view in views):
            totals = PricingService.summarize([view.priced for view in views], now)
        return CartViewDTO(lines=views, totals=totals)
