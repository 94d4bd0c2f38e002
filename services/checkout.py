"""
Checkout Session Builder

Turns a priced cart into payment-processor line items. Payment APIs take one
unit price per line item, so a line with a promotional pair is split into a
pair sub-line (quantity 1 at the pair price) and a single-rate sub-line.
"""

import logging

import config
from enums.currency import Currency
from exceptions.order import EmptyOrderException
from exceptions.pricing import PricingInvariantViolationException
from models.pricing import CartTotalsDTO, PaymentLineItemDTO, PricedLineDTO, ShippingOptionDTO
from utils.color import color_display_name
from utils.money import format_money, to_minor_units

logger = logging.getLogger(__name__)


class CheckoutService:

    @staticmethod
    def _line_description(line: PricedLineDTO) -> str:
        color = color_display_name(line.color)
        return f"Color: {color}" if color else ""

    @staticmethod
    def build_payment_line_items(
        cart_totals: CartTotalsDTO,
        currency: str | None = None
    ) -> list[PaymentLineItemDTO]:
        """
        Build payment line items for every priced unit.

        Example (unit $79, pair $140, quantity 3):
            [
                {"name": "Aviator (2 for $140.00)", "unit_amount": 14000, "quantity": 1},
                {"name": "Aviator", "unit_amount": 7900, "quantity": 1},
            ]

        Raises:
            EmptyOrderException: Cart has no lines
            PricingInvariantViolationException: Line items do not add up to the subtotal
        """
        if not cart_totals.lines:
            raise EmptyOrderException()

        currency_code = Currency((currency or config.CURRENCY.value).upper())
        currency = currency_code.value.lower()
        items = []
        for line in cart_totals.lines:
            description = CheckoutService._line_description(line)
            if line.units_at_pair_rate:
                items.append(PaymentLineItemDTO(
                    name=f"{line.name} (2 for {format_money(line.pair_price, currency_code.symbol)})",
                    description=description,
                    unit_amount=to_minor_units(line.pair_price),
                    quantity=1,
                    currency=currency
                ))
            if line.units_at_single_rate:
                items.append(PaymentLineItemDTO(
                    name=line.name,
                    description=description,
                    unit_amount=to_minor_units(line.unit_price),
                    quantity=line.units_at_single_rate,
                    currency=currency
                ))

        charged = sum(item.unit_amount * item.quantity for item in items)
        expected = to_minor_units(cart_totals.subtotal)
        if charged != expected:
            raise PricingInvariantViolationException(
                "payment line items do not match subtotal",
                charged=charged,
                expected=expected
            )
        return items

    @staticmethod
    def build_shipping_option(
        cart_totals: CartTotalsDTO,
        currency: str | None = None
    ) -> ShippingOptionDTO:
        currency = (currency or config.CURRENCY.value).lower()
        if cart_totals.shipping == 0:
            display_name = config.FREE_SHIPPING_DISPLAY_NAME
        else:
            display_name = config.SHIPPING_DISPLAY_NAME
        return ShippingOptionDTO(
            display_name=display_name,
            amount=to_minor_units(cart_totals.shipping),
            currency=currency
        )

    @staticmethod
    def build_checkout_payload(
        cart_totals: CartTotalsDTO,
        success_url: str,
        cancel_url: str,
        order_number: str | None = None
    ) -> dict:
        """
        Keyword arguments for the payment processor's "create checkout session" call.

        The payload charges exactly cart_totals.total: line items sum to the
        subtotal and the single shipping option carries the shipping cost.
        """
        line_items = CheckoutService.build_payment_line_items(cart_totals)
        shipping_option = CheckoutService.build_shipping_option(cart_totals)

        payload = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "allow_promotion_codes": False,
            "success_url": success_url,
            "cancel_url": cancel_url,
            "line_items": [
                {
                    "price_data": {
                        "currency": item.currency,
                        "product_data": {
                            "name": item.name,
                            **({"description": item.description} if item.description else {}),
                        },
                        "unit_amount": item.unit_amount,
                    },
                    "quantity": item.quantity,
                }
                for item in line_items
            ],
            "shipping_options": [
                {
                    "shipping_rate_data": {
                        "type": "fixed_amount",
                        "fixed_amount": {
                            "amount": shipping_option.amount,
                            "currency": shipping_option.currency,
                        },
                        "display_name": shipping_option.display_name,
                    }
                }
            ],
        }
        if order_number:
            payload["metadata"] = {"order_number": order_number}

        logger.info(f"[Checkout] Built payload with {len(line_items)} line items, "
                    f"total={to_minor_units(cart_totals.total)} {shipping_option.currency}")
        return payload
