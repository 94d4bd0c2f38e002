from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """
    Quantize an amount to cents using commercial rounding.

    Floats are converted through str() so 79.1 stays 79.10 and does not
    pick up binary noise.
    """
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(value: Decimal) -> int:
    """Convert a money amount to integer cents for payment APIs."""
    return int((to_money(value) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def format_money(value: Decimal, symbol: str = "$") -> str:
    """
    Format an amount for display.

    Example:
        >>> format_money(Decimal("1234.5"))
        '$1,234.50'
    """
    amount = to_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
