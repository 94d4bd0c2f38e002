import os
import sys
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

from enums.currency import Currency

# Load .env but don't override existing environment variables
# This allows test scripts to set values before import
load_dotenv(".env", override=False)

# Parse CURRENCY with error handling
try:
    _currency_str = os.environ.get("CURRENCY", "AUD")
    CURRENCY = Currency(_currency_str.strip().upper())
except ValueError as e:
    valid_currencies = [c.value for c in Currency]
    print(f"\n ERROR: Invalid CURRENCY configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_currencies)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('CURRENCY', '(not set)')}", file=sys.stderr)
    print(f"\nAdd to .env: CURRENCY={valid_currencies[0]}\n", file=sys.stderr)
    sys.exit(1)


def _parse_money(name: str, default: str) -> Decimal:
    raw = os.environ.get(name, default)
    try:
        value = Decimal(raw)
        if value < 0:
            raise ValueError(f"{name} must not be negative (got: {value})")
        return value
    except (InvalidOperation, ValueError) as e:
        print(f"\n ERROR: Invalid {name} configuration\n", file=sys.stderr)
        print(f"Reason: {e}", file=sys.stderr)
        print(f"Expected: Non-negative amount (e.g., 60, 9.95)", file=sys.stderr)
        print(f"Current value: {raw}\n", file=sys.stderr)
        sys.exit(1)


# Shipping Configuration
# Orders at or above the threshold ship free, everything below pays the flat fee
FREE_SHIPPING_THRESHOLD = _parse_money("FREE_SHIPPING_THRESHOLD", "60")
FLAT_SHIPPING_FEE = _parse_money("FLAT_SHIPPING_FEE", "10")
SHIPPING_DISPLAY_NAME = os.environ.get("SHIPPING_DISPLAY_NAME", "Standard shipping")
FREE_SHIPPING_DISPLAY_NAME = os.environ.get("FREE_SHIPPING_DISPLAY_NAME", "Free shipping")

# Database Configuration
DB_URL = os.environ.get("DB_URL", "sqlite+aiosqlite:///data/storefront.db")

# Order Configuration
ORDER_NUMBER_PREFIX = os.environ.get("ORDER_NUMBER_PREFIX", "LA")

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask sensitive data in logs
LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "7"))
