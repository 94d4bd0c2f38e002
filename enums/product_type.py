from enum import Enum


class ProductType(str, Enum):
    SUNGLASSES = "sunglasses"
    GLASSES = "glasses"
    CONTACTS = "contacts"
    ACCESSORY = "accessory"
