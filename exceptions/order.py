"""
Order-related exceptions.
"""

from .base import StorefrontException


class OrderException(StorefrontException):
    """Base exception for order-related errors."""
    pass


class OrderNotFoundException(OrderException):
    """Raised when order is not found in database."""

    def __init__(self, order_number: str):
        super().__init__(
            f"Order {order_number} not found",
            details={'order_number': order_number}
        )
        self.order_number = order_number


class EmptyOrderException(OrderException):
    """Raised when trying to create an order without any lines."""

    def __init__(self):
        super().__init__("Cannot create an order without items")
