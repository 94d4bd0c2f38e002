from enum import Enum


class ProductCategory(str, Enum):
    """
    Pricing collection a product belongs to.

    Only SIGNATURE and ESSENTIALS take part in promotional campaigns
    ("buy two for a fixed price"). Eligibility is decided here and never
    from the product type.
    """

    SIGNATURE = "signature"
    ESSENTIALS = "essentials"
    NONE = "none"

    @property
    def is_promotion_eligible(self) -> bool:
        return self in (ProductCategory.SIGNATURE, ProductCategory.ESSENTIALS)
