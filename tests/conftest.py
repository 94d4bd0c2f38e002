"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from enums.currency import Currency

# Mock config module completely before any imports
config_mock = MagicMock()
config_mock.CURRENCY = Currency.AUD
config_mock.FREE_SHIPPING_THRESHOLD = Decimal("60")
config_mock.FLAT_SHIPPING_FEE = Decimal("10")
config_mock.SHIPPING_DISPLAY_NAME = "Standard shipping"
config_mock.FREE_SHIPPING_DISPLAY_NAME = "Free shipping"
config_mock.DB_URL = "sqlite+aiosqlite:///:memory:"  # In-memory test database
config_mock.ORDER_NUMBER_PREFIX = "LA"
config_mock.LOG_LEVEL = "INFO"
config_mock.LOG_MASK_SECRETS = True
config_mock.LOG_RETENTION_DAYS = 1

sys.modules['config'] = config_mock

from enums.product_category import ProductCategory
from enums.product_type import ProductType
from models.product import ProductPricingDTO
from models.promotion import PromotionDTO


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine (in-memory SQLite)."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False
    )

    # Import and create all tables
    from db import Base
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine):
    """Create test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


# ============================================================================
# Pricing Fixtures
# ============================================================================

@pytest.fixture
def now():
    """Fixed clock inside the summer campaign window."""
    return datetime(2025, 6, 15, 12, 0, 0)


@pytest.fixture
def summer_promotion():
    """
    Running campaign:
    - signature: $100 -> $79, two for $140
    - essentials: $60 -> $49, two for $85
    """
    return PromotionDTO(
        id=1,
        offer_name="Summer Sale",
        valid_from=datetime(2025, 6, 1),
        valid_to=datetime(2025, 6, 30, 23, 59, 59),
        signature_original_price=Decimal("100"),
        signature_discounted_price=Decimal("79"),
        signature_price_for_two=Decimal("140"),
        essentials_original_price=Decimal("60"),
        essentials_discounted_price=Decimal("49"),
        essentials_price_for_two=Decimal("85"),
        is_active=True
    )


@pytest.fixture
def campaign_lookup(summer_promotion):
    from services.promotion import PromotionService
    return PromotionService.lookup_from(summer_promotion)


@pytest.fixture
def no_campaign():
    return lambda category: None


@pytest.fixture
def signature_product():
    return ProductPricingDTO(
        id=10,
        name="Aviator Signature",
        base_price=Decimal("100"),
        discounted_price=Decimal("90"),
        category=ProductCategory.SIGNATURE,
        product_type=ProductType.SUNGLASSES
    )


@pytest.fixture
def essentials_product():
    return ProductPricingDTO(
        id=20,
        name="Wayfarer Essentials",
        base_price=Decimal("60"),
        category=ProductCategory.ESSENTIALS,
        product_type=ProductType.SUNGLASSES
    )


@pytest.fixture
def plain_product():
    return ProductPricingDTO(
        id=30,
        name="Lens Cleaning Kit",
        base_price=Decimal("50"),
        category=ProductCategory.NONE,
        product_type=ProductType.ACCESSORY
    )
