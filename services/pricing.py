import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from decimal import Decimal

from enums.price_source import PriceSource
from enums.product_category import ProductCategory
from exceptions.pricing import (
    InvalidProductDataException,
    InvalidQuantityException,
    PricingInvariantViolationException,
)
from models.pricing import (
    CartLineDTO,
    CartTotalsDTO,
    LineTotalDTO,
    PricedLineDTO,
    ResolvedPriceDTO,
)
from models.product import ProductPricingDTO
from models.promotion import CategoryCampaignDTO
from services.shipping import ShippingService
from utils.money import to_money

logger = logging.getLogger(__name__)

CampaignLookup = Callable[[ProductCategory], CategoryCampaignDTO | None]

ZERO = Decimal("0.00")


class PricingService:
    """
    Promotional pricing engine.

    Every caller (cart, checkout, order creation, invoice) prices through
    these functions. They are pure: the clock and campaign state are passed
    in, nothing is read from globals or storage, nothing is cached.
    """

    @staticmethod
    def resolve_price(
        product: ProductPricingDTO,
        campaign_lookup: CampaignLookup,
        now: datetime
    ) -> ResolvedPriceDTO:
        """
        Resolve the single price in effect for one unit of a product.

        Resolution order (first match wins, sources never stack):
        1. Running campaign for the product's collection -> campaign discounted_price
        2. Standing discount (> 0) -> product discounted_price
        3. Base price

        The campaign lookup is only consulted for promotion-eligible categories.
        Its errors (LookupUnavailableException) propagate untouched.

        Args:
            product: Product pricing facts
            campaign_lookup: Callable returning the campaign for a category, or None
            now: Point in time the campaign window is evaluated against

        Returns:
            ResolvedPriceDTO with unit price, winning source and the campaign (if any)

        Raises:
            InvalidProductDataException: Non-positive base price, or discount not below base price
            PricingInvariantViolationException: Resolved price outside [0, base_price]
        """
        base_price = PricingService._validate_product(product)

        if product.category.is_promotion_eligible:
            campaign = campaign_lookup(product.category)
            if campaign is not None and campaign.is_running(now):
                unit_price = to_money(campaign.discounted_price)
                PricingService._check_unit_price(product, unit_price, base_price, PriceSource.CAMPAIGN)
                return ResolvedPriceDTO(
                    unit_price=unit_price,
                    source=PriceSource.CAMPAIGN,
                    campaign=campaign
                )

        if product.discounted_price is not None and product.discounted_price > 0:
            unit_price = to_money(product.discounted_price)
            PricingService._check_unit_price(product, unit_price, base_price, PriceSource.DISCOUNT)
            return ResolvedPriceDTO(unit_price=unit_price, source=PriceSource.DISCOUNT)

        return ResolvedPriceDTO(unit_price=base_price, source=PriceSource.BASE)

    @staticmethod
    def resolve_unit_price(
        product: ProductPricingDTO,
        campaign_lookup: CampaignLookup,
        now: datetime
    ) -> Decimal:
        """Shortcut for resolve_price(...).unit_price."""
        return PricingService.resolve_price(product, campaign_lookup, now).unit_price

    @staticmethod
    def compute_line_total(
        unit_price: Decimal,
        category: ProductCategory,
        quantity: int,
        pair_price: Decimal | None
    ) -> LineTotalDTO:
        """
        Split a line into the promotional pair and single-rate units.

        Only ONE pair per line gets the pair price, however many pairs the
        quantity could form: quantity 4 is one pair + 2 singles, not two pairs.

        Example with unit $79 and pair $140:
            - quantity 1: $79
            - quantity 2: $140
            - quantity 3: $140 + $79 = $219
            - quantity 5: $140 + 3 × $79 = $377

        Args:
            unit_price: Effective unit price from resolve_price()
            category: Product category (non-eligible categories never get a pair price)
            quantity: Units on the line, positive integer
            pair_price: Campaign price_for_two, or None when no pair promotion applies

        Returns:
            LineTotalDTO with total and pair/single unit split

        Raises:
            InvalidQuantityException: Quantity is not a positive integer
            PricingInvariantViolationException: Negative unit price, or pair price
                negative or below one unit
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityException(quantity)

        unit_price = to_money(unit_price)
        if unit_price < 0:
            raise PricingInvariantViolationException("negative unit price", unit_price=unit_price)

        if pair_price is None or not category.is_promotion_eligible or quantity < 2:
            return LineTotalDTO(
                line_total=to_money(unit_price * quantity),
                units_at_pair_rate=0,
                units_at_single_rate=quantity
            )

        pair_price = to_money(pair_price)
        # A pair cheaper than one unit would make quantity 2 cost less than quantity 1
        if pair_price < 0 or pair_price < unit_price:
            raise PricingInvariantViolationException(
                "pair price below unit price",
                pair_price=pair_price,
                unit_price=unit_price
            )

        promotional_pairs = min(1, quantity // 2)
        remaining_units = quantity - promotional_pairs * 2

        line_total = promotional_pairs * pair_price + remaining_units * unit_price
        return LineTotalDTO(
            line_total=to_money(line_total),
            units_at_pair_rate=promotional_pairs * 2,
            units_at_single_rate=remaining_units
        )

    @staticmethod
    def price_line(
        line: CartLineDTO,
        campaign_lookup: CampaignLookup,
        now: datetime
    ) -> PricedLineDTO:
        """Resolve, split and compute savings for one cart line."""
        product = line.product
        resolved = PricingService.resolve_price(product, campaign_lookup, now)
        split = PricingService.compute_line_total(
            unit_price=resolved.unit_price,
            category=product.category,
            quantity=line.quantity,
            pair_price=resolved.pair_price
        )

        base_price = to_money(product.base_price)
        line_savings = to_money(base_price * line.quantity - split.line_total)
        if line_savings < 0:
            raise PricingInvariantViolationException(
                "line total exceeds undiscounted price",
                product_id=product.id,
                line_total=split.line_total,
                quantity=line.quantity
            )

        return PricedLineDTO(
            product_id=product.id,
            name=product.name,
            color=line.color,
            category=product.category,
            quantity=line.quantity,
            base_price=base_price,
            unit_price=resolved.unit_price,
            source=resolved.source,
            pair_price=resolved.pair_price if split.units_at_pair_rate else None,
            promotion_name=resolved.campaign.offer_name if resolved.campaign else None,
            line_total=split.line_total,
            units_at_pair_rate=split.units_at_pair_rate,
            units_at_single_rate=split.units_at_single_rate,
            line_savings=line_savings
        )

    @staticmethod
    def aggregate_cart(
        lines: Iterable[CartLineDTO],
        campaign_lookup: CampaignLookup,
        now: datetime
    ) -> CartTotalsDTO:
        """
        Price a whole cart.

        All-or-nothing: the first failing line aborts the aggregation, a cart
        never reports a partial total.

        Returns:
            CartTotalsDTO with subtotal, total_savings, shipping, total and priced lines
        """
        priced_lines = [PricingService.price_line(line, campaign_lookup, now) for line in lines]
        return PricingService.summarize(priced_lines, now)

    @staticmethod
    def summarize(priced_lines: list[PricedLineDTO], now: datetime) -> CartTotalsDTO:
        """Sum already priced lines and add shipping for the subtotal."""
        subtotal = to_money(sum((line.line_total for line in priced_lines), ZERO))
        total_savings = to_money(sum((line.line_savings for line in priced_lines), ZERO))
        shipping = ShippingService.calculate_shipping(subtotal)
        total = to_money(subtotal + shipping)

        logger.debug(
            f"[Pricing] {len(priced_lines)} lines: subtotal={subtotal} "
            f"savings={total_savings} shipping={shipping} total={total}"
        )

        return CartTotalsDTO(
            lines=priced_lines,
            subtotal=subtotal,
            total_savings=total_savings,
            shipping=shipping,
            total=total,
            priced_at=now
        )

    @staticmethod
    def _validate_product(product: ProductPricingDTO) -> Decimal:
        if product.base_price is None or product.base_price <= 0:
            raise InvalidProductDataException(product.id, f"base price must be positive (got {product.base_price})")

        base_price = to_money(product.base_price)
        discounted = product.discounted_price
        if discounted is not None:
            if discounted < 0:
                raise InvalidProductDataException(product.id, f"discounted price is negative ({discounted})")
            if discounted > 0 and discounted >= product.base_price:
                raise InvalidProductDataException(
                    product.id,
                    f"discounted price {discounted} is not below base price {product.base_price}"
                )
        return base_price

    @staticmethod
    def _check_unit_price(
        product: ProductPricingDTO,
        unit_price: Decimal,
        base_price: Decimal,
        source: PriceSource
    ) -> None:
        if unit_price < 0 or unit_price > base_price:
            logger.error(
                f"[Pricing] {source.value} price {unit_price} for product {product.id} "
                f"outside [0, {base_price}]"
            )
            raise PricingInvariantViolationException(
                f"{source.value} price outside [0, base price]",
                product_id=product.id,
                unit_price=unit_price,
                base_price=base_price
            )
