"""
Promotion-related exceptions.
"""

from .base import StorefrontException


class PromotionException(StorefrontException):
    """Base exception for promotion-related errors."""
    pass


class PromotionNotFoundException(PromotionException):
    """Raised when promotion is not found in database."""

    def __init__(self, promotion_id: int):
        super().__init__(
            f"Promotion {promotion_id} not found",
            details={'promotion_id': promotion_id}
        )
        self.promotion_id = promotion_id


class InvalidPromotionException(PromotionException):
    """Raised when promotion prices or dates break the campaign rules."""

    def __init__(self, offer_name: str, reason: str):
        super().__init__(
            f"Invalid promotion '{offer_name}': {reason}",
            details={'offer_name': offer_name, 'reason': reason}
        )
        self.offer_name = offer_name
        self.reason = reason
