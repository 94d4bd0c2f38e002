"""
Custom exceptions for the storefront.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
StorefrontException (base)
├── PricingException
│   ├── InvalidProductDataException
│   ├── InvalidQuantityException
│   ├── PricingInvariantViolationException
│   └── LookupUnavailableException
├── PromotionException
│   ├── PromotionNotFoundException
│   └── InvalidPromotionException
└── OrderException
    ├── OrderNotFoundException
    └── EmptyOrderException

Usage:
------
Services raise specific exceptions:
    raise InvalidQuantityException(quantity=0)

Callers decide how to present them:
    try:
        totals = PricingService.aggregate_cart(lines, lookup, now)
    except PricingException as e:
        block_checkout(str(e))
"""

from .base import StorefrontException
from .pricing import (
    PricingException,
    InvalidProductDataException,
    InvalidQuantityException,
    PricingInvariantViolationException,
    LookupUnavailableException
)
from .promotion import PromotionException, PromotionNotFoundException, InvalidPromotionException
from .order import OrderException, OrderNotFoundException, EmptyOrderException

__all__ = [
    # Base
    'StorefrontException',

    # Pricing
    'PricingException',
    'InvalidProductDataException',
    'InvalidQuantityException',
    'PricingInvariantViolationException',
    'LookupUnavailableException',

    # Promotion
    'PromotionException',
    'PromotionNotFoundException',
    'InvalidPromotionException',

    # Order
    'OrderException',
    'OrderNotFoundException',
    'EmptyOrderException',
]
