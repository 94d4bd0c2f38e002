"""
Tests for ProductRepository batch loading.

Run with:
    pytest tests/repositories/unit/test_product_repository.py -v
"""

from decimal import Decimal

import pytest

from enums.product_category import ProductCategory
from repositories.product import ProductRepository


@pytest.mark.asyncio
async def test_add_and_get_by_id(test_session, essentials_product):
    product_id = await ProductRepository.add(essentials_product.model_copy(update={"id": None}), test_session)

    product = await ProductRepository.get_by_id(product_id, test_session)

    assert product.name == "Wayfarer Essentials"
    assert product.base_price == Decimal("60.00")
    assert product.discounted_price is None
    assert product.category == ProductCategory.ESSENTIALS


@pytest.mark.asyncio
async def test_get_unknown_product(test_session):
    assert await ProductRepository.get_by_id(404, test_session) is None


@pytest.mark.asyncio
async def test_get_by_ids(test_session, signature_product, plain_product):
    first = await ProductRepository.add(signature_product.model_copy(update={"id": None}), test_session)
    second = await ProductRepository.add(plain_product.model_copy(update={"id": None}), test_session)

    products = await ProductRepository.get_by_ids([first, second, 404], test_session)

    assert set(products) == {first, second}
    assert products[second].name == "Lens Cleaning Kit"


@pytest.mark.asyncio
async def test_get_by_ids_empty(test_session):
    assert await ProductRepository.get_by_ids([], test_session) == {}
