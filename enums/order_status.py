from enum import Enum


class OrderStatus(Enum):
    PENDING_PAYMENT = "PENDING_PAYMENT"   # Checkout session created, waiting for payment
    PAID = "PAID"                         # Payment confirmed by the processor
    FAILED = "FAILED"                     # Payment failed or was abandoned
