from enum import Enum


class Currency(str, Enum):
    AUD = "AUD"
    USD = "USD"
    EUR = "EUR"

    @property
    def symbol(self) -> str:
        if self == Currency.EUR:
            return "€"
        return "$"
