"""
Pricing engine exceptions.

None of these are ever caught and defaulted inside the engine. Callers
decide whether to block checkout or show "pricing unavailable".
"""

from .base import StorefrontException


class PricingException(StorefrontException):
    """Base exception for pricing errors."""
    pass


class InvalidProductDataException(PricingException):
    """Raised when product pricing facts are unusable (non-positive base price, bad discount)."""

    def __init__(self, product_id: int | str | None, reason: str):
        super().__init__(
            f"Invalid pricing data for product {product_id}: {reason}",
            details={'product_id': product_id, 'reason': reason}
        )
        self.product_id = product_id
        self.reason = reason


class InvalidQuantityException(PricingException):
    """Raised when a line quantity is zero, negative or not an integer."""

    def __init__(self, quantity):
        super().__init__(
            f"Invalid quantity: {quantity!r} (must be a positive integer)",
            details={'quantity': quantity}
        )
        self.quantity = quantity


class PricingInvariantViolationException(PricingException):
    """Raised when a computed amount falls outside its allowed range (corrupt campaign data)."""

    def __init__(self, reason: str, **details):
        super().__init__(
            f"Pricing invariant violated: {reason}",
            details={'reason': reason, **details}
        )
        self.reason = reason


class LookupUnavailableException(PricingException):
    """Raised when the campaign store cannot be read."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Lookup unavailable ({source}): {reason}",
            details={'source': source, 'reason': reason}
        )
        self.source = source
        self.reason = reason
