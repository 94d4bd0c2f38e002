"""
Shipping Service

Flat-rate shipping against a free-shipping threshold. Threshold and fee come
from config (FREE_SHIPPING_THRESHOLD, FLAT_SHIPPING_FEE).
"""

from decimal import Decimal

import config
from utils.money import to_money, format_money


class ShippingService:

    @staticmethod
    def is_free_shipping(subtotal: Decimal) -> bool:
        return to_money(subtotal) >= to_money(config.FREE_SHIPPING_THRESHOLD)

    @staticmethod
    def calculate_shipping(subtotal: Decimal) -> Decimal:
        """
        Shipping cost for a cart subtotal.

        Orders at or above the threshold ship free, everything below pays the flat fee.
        A zero subtotal (empty cart, or everything free under a campaign) ships free.

        Example with threshold $60 and fee $10:
            - $59.99 -> $10.00
            - $60.00 -> $0.00
        """
        if to_money(subtotal) < 0:
            raise ValueError(f"Subtotal must not be negative (got {subtotal})")
        if to_money(subtotal) == 0 or ShippingService.is_free_shipping(subtotal):
            return Decimal("0.00")
        return to_money(config.FLAT_SHIPPING_FEE)

    @staticmethod
    def amount_until_free_shipping(subtotal: Decimal) -> Decimal:
        remaining = to_money(config.FREE_SHIPPING_THRESHOLD) - to_money(subtotal)
        return max(remaining, Decimal("0.00"))

    @staticmethod
    def get_shipping_message(subtotal: Decimal, currency_symbol: str = "$") -> str:
        """
        Cart banner text.

        Returns:
            "Free shipping" or "Add $X more for free shipping"
        """
        if ShippingService.is_free_shipping(subtotal):
            return config.FREE_SHIPPING_DISPLAY_NAME
        amount_needed = ShippingService.amount_until_free_shipping(subtotal)
        return f"Add {format_money(amount_needed, currency_symbol)} more for free shipping"
