"""
Unit Tests: ShippingService

Flat fee below the free-shipping threshold, free at or above it.
Threshold $60 and fee $10 come from the mocked config in conftest.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from services.shipping import ShippingService


class TestCalculateShipping:

    @pytest.mark.parametrize("subtotal,expected", [
        (Decimal("0.00"), Decimal("0.00")),
        (Decimal("0.01"), Decimal("10.00")),
        (Decimal("59.99"), Decimal("10.00")),
        (Decimal("60.00"), Decimal("0.00")),
        (Decimal("219.00"), Decimal("0.00")),
    ])
    def test_threshold(self, subtotal, expected):
        assert ShippingService.calculate_shipping(subtotal) == expected

    def test_negative_subtotal_rejected(self):
        with pytest.raises(ValueError):
            ShippingService.calculate_shipping(Decimal("-1"))

    def test_threshold_comes_from_config(self):
        with patch("services.shipping.config") as config_mock:
            config_mock.FREE_SHIPPING_THRESHOLD = Decimal("100")
            config_mock.FLAT_SHIPPING_FEE = Decimal("7.50")

            assert ShippingService.calculate_shipping(Decimal("99.99")) == Decimal("7.50")
            assert ShippingService.calculate_shipping(Decimal("100")) == Decimal("0.00")


class TestShippingMessage:

    def test_free_shipping_message(self):
        assert ShippingService.get_shipping_message(Decimal("60")) == "Free shipping"

    def test_amount_needed_message(self):
        message = ShippingService.get_shipping_message(Decimal("49"))

        assert message == "Add $11.00 more for free shipping"

    def test_amount_until_free_shipping_never_negative(self):
        assert ShippingService.amount_until_free_shipping(Decimal("75")) == Decimal("0.00")
