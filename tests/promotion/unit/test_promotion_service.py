"""
PromotionService Unit Tests

Covers campaign validation rules and the campaign store (in-memory SQLite):
active-window lookups, per-category projection and failure propagation.

Run with:
    pytest tests/promotion/unit/test_promotion_service.py -v
"""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from enums.product_category import ProductCategory
from exceptions.pricing import LookupUnavailableException
from exceptions.promotion import InvalidPromotionException, PromotionNotFoundException
from services.promotion import PromotionService


class TestValidatePromotion:

    def test_valid_promotion(self, summer_promotion):
        PromotionService.validate_promotion(summer_promotion)

    def test_discounted_above_original(self, summer_promotion):
        promotion = summer_promotion.model_copy(update={"signature_discounted_price": Decimal("120")})

        with pytest.raises(InvalidPromotionException, match="exceeds original price"):
            PromotionService.validate_promotion(promotion)

    def test_pair_price_above_two_singles(self, summer_promotion):
        promotion = summer_promotion.model_copy(update={"essentials_price_for_two": Decimal("99")})

        with pytest.raises(InvalidPromotionException, match="exceeds two units"):
            PromotionService.validate_promotion(promotion)

    def test_pair_price_override(self, summer_promotion):
        promotion = summer_promotion.model_copy(update={
            "essentials_price_for_two": Decimal("99"),
            "allow_pair_price_override": True,
        })

        PromotionService.validate_promotion(promotion)

    def test_pair_price_below_single(self, summer_promotion):
        promotion = summer_promotion.model_copy(update={"signature_price_for_two": Decimal("70")})

        with pytest.raises(InvalidPromotionException, match="below the single price"):
            PromotionService.validate_promotion(promotion)

    def test_window_reversed(self, summer_promotion):
        promotion = summer_promotion.model_copy(update={"valid_from": datetime(2025, 7, 1)})

        with pytest.raises(InvalidPromotionException):
            PromotionService.validate_promotion(promotion)

    def test_blank_offer_name(self, summer_promotion):
        promotion = summer_promotion.model_copy(update={"offer_name": "  "})

        with pytest.raises(InvalidPromotionException):
            PromotionService.validate_promotion(promotion)


class TestCategoryProjection:

    def test_for_category(self, summer_promotion):
        campaign = summer_promotion.for_category(ProductCategory.ESSENTIALS)

        assert campaign.discounted_price == Decimal("49")
        assert campaign.price_for_two == Decimal("85")
        assert campaign.offer_name == "Summer Sale"

    def test_non_eligible_category(self, summer_promotion):
        assert summer_promotion.for_category(ProductCategory.NONE) is None

    def test_lookup_from_nothing(self):
        lookup = PromotionService.lookup_from(None)

        assert lookup(ProductCategory.SIGNATURE) is None


class TestCampaignStore:

    @pytest.mark.asyncio
    async def test_create_and_get_category_promotion(self, test_session, summer_promotion, now):
        created = await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)

        campaign = await PromotionService.get_category_promotion(ProductCategory.SIGNATURE, now, test_session)

        assert created.id is not None
        assert campaign.promotion_id == created.id
        assert campaign.discounted_price == Decimal("79.00")
        assert campaign.price_for_two == Decimal("140.00")

    @pytest.mark.asyncio
    async def test_create_rejects_invalid_promotion(self, test_session, summer_promotion):
        promotion = summer_promotion.model_copy(update={"id": None, "signature_price_for_two": Decimal("200")})

        with pytest.raises(InvalidPromotionException):
            await PromotionService.create_promotion(promotion, test_session)

        assert await PromotionService.list_promotions(test_session) == []

    @pytest.mark.asyncio
    async def test_no_campaign_returns_none(self, test_session, now):
        assert await PromotionService.get_category_promotion(ProductCategory.SIGNATURE, now, test_session) is None

    @pytest.mark.asyncio
    async def test_outside_window_returns_none(self, test_session, summer_promotion):
        await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)

        campaign = await PromotionService.get_category_promotion(
            ProductCategory.SIGNATURE, datetime(2025, 8, 1), test_session
        )

        assert campaign is None

    @pytest.mark.asyncio
    async def test_deactivated_campaign_is_not_returned(self, test_session, summer_promotion, now):
        created = await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)

        await PromotionService.deactivate_promotion(created.id, test_session)

        assert await PromotionService.get_active_promotion(now, test_session) is None
        assert len(await PromotionService.list_promotions(test_session, include_inactive=True)) == 1
        assert await PromotionService.list_promotions(test_session, include_inactive=False) == []

    @pytest.mark.asyncio
    async def test_deactivate_unknown_promotion(self, test_session):
        with pytest.raises(PromotionNotFoundException):
            await PromotionService.deactivate_promotion(404, test_session)

    @pytest.mark.asyncio
    async def test_most_recent_overlapping_campaign_wins(self, test_session, summer_promotion, now):
        await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)
        flash_sale = summer_promotion.model_copy(update={
            "id": None,
            "offer_name": "Flash Sale",
            "valid_from": datetime(2025, 6, 14),
            "valid_to": datetime(2025, 6, 16),
            "signature_discounted_price": Decimal("75"),
        })
        await PromotionService.create_promotion(flash_sale, test_session)

        campaign = await PromotionService.get_category_promotion(ProductCategory.SIGNATURE, now, test_session)

        assert campaign.offer_name == "Flash Sale"
        assert campaign.discounted_price == Decimal("75.00")

    @pytest.mark.asyncio
    async def test_load_campaign_lookup(self, test_session, summer_promotion, now):
        await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)

        lookup = await PromotionService.load_campaign_lookup(now, test_session)

        assert lookup(ProductCategory.ESSENTIALS).price_for_two == Decimal("85.00")
        assert lookup(ProductCategory.NONE) is None

    @pytest.mark.asyncio
    async def test_storage_failure_raises_lookup_unavailable(self, test_session, now):
        failure = OperationalError("SELECT ...", {}, Exception("database is locked"))
        with patch("services.promotion.PromotionRepository.get_active", new=AsyncMock(side_effect=failure)):
            with pytest.raises(LookupUnavailableException):
                await PromotionService.load_campaign_lookup(now, test_session)


class TestCampaignAdmin:

    @pytest.mark.asyncio
    async def test_get_promotion(self, test_session, summer_promotion):
        created = await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)

        promotion = await PromotionService.get_promotion(created.id, test_session)

        assert promotion.offer_name == "Summer Sale"
        assert promotion.signature_price_for_two == Decimal("140.00")

    @pytest.mark.asyncio
    async def test_get_unknown_promotion(self, test_session):
        with pytest.raises(PromotionNotFoundException):
            await PromotionService.get_promotion(404, test_session)

    @pytest.mark.asyncio
    async def test_update_promotion(self, test_session, summer_promotion, now):
        created = await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)
        changes = created.model_copy(update={
            "offer_name": "Summer Sale Extended",
            "valid_to": datetime(2025, 7, 31, 23, 59, 59),
            "signature_discounted_price": Decimal("75"),
        })

        updated = await PromotionService.update_promotion(created.id, changes, test_session)

        assert updated.offer_name == "Summer Sale Extended"
        assert updated.valid_to == datetime(2025, 7, 31, 23, 59, 59)
        campaign = await PromotionService.get_category_promotion(
            ProductCategory.SIGNATURE, datetime(2025, 7, 15), test_session
        )
        assert campaign.discounted_price == Decimal("75.00")

    @pytest.mark.asyncio
    async def test_update_rejects_invalid_prices(self, test_session, summer_promotion):
        created = await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)
        changes = created.model_copy(update={"essentials_price_for_two": Decimal("40")})

        with pytest.raises(InvalidPromotionException):
            await PromotionService.update_promotion(created.id, changes, test_session)

        stored = await PromotionService.get_promotion(created.id, test_session)
        assert stored.essentials_price_for_two == Decimal("85.00")

    @pytest.mark.asyncio
    async def test_update_unknown_promotion(self, test_session, summer_promotion):
        with pytest.raises(PromotionNotFoundException):
            await PromotionService.update_promotion(404, summer_promotion, test_session)

    @pytest.mark.asyncio
    async def test_reactivate_promotion(self, test_session, summer_promotion, now):
        created = await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)
        await PromotionService.deactivate_promotion(created.id, test_session)

        await PromotionService.activate_promotion(created.id, test_session)

        assert (await PromotionService.get_active_promotion(now, test_session)).id == created.id

    @pytest.mark.asyncio
    async def test_activate_unknown_promotion(self, test_session):
        with pytest.raises(PromotionNotFoundException):
            await PromotionService.activate_promotion(404, test_session)

    @pytest.mark.asyncio
    async def test_toggle_promotion_status(self, test_session, summer_promotion):
        created = await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)

        toggled = await PromotionService.toggle_promotion_status(created.id, test_session)
        assert toggled.is_active is False

        toggled = await PromotionService.toggle_promotion_status(created.id, test_session)
        assert toggled.is_active is True

    @pytest.mark.asyncio
    async def test_delete_promotion(self, test_session, summer_promotion, now):
        created = await PromotionService.create_promotion(summer_promotion.model_copy(update={"id": None}), test_session)

        await PromotionService.delete_promotion(created.id, test_session)

        assert await PromotionService.list_promotions(test_session) == []
        assert await PromotionService.get_active_promotion(now, test_session) is None
        with pytest.raises(PromotionNotFoundException):
            await PromotionService.get_promotion(created.id, test_session)

    @pytest.mark.asyncio
    async def test_delete_unknown_promotion(self, test_session):
        with pytest.raises(PromotionNotFoundException):
            await PromotionService.delete_promotion(404, test_session)
