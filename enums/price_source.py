from enum import Enum


class PriceSource(str, Enum):
    """Which pricing fact won for a unit. Exactly one applies, never stacked."""

    CAMPAIGN = "campaign"   # Active time-bounded promotion
    DISCOUNT = "discount"   # Standing product discount
    BASE = "base"           # Regular price
