"""
Promotion Service

Campaign store access for the pricing engine plus admin-side validation of
campaign prices.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_commit
from enums.product_category import ProductCategory
from exceptions.pricing import LookupUnavailableException
from exceptions.promotion import InvalidPromotionException, PromotionNotFoundException
from models.promotion import CategoryCampaignDTO, PromotionDTO
from repositories.promotion import PromotionRepository
from services.pricing import CampaignLookup

logger = logging.getLogger(__name__)


class PromotionService:

    @staticmethod
    def validate_promotion(promotion: PromotionDTO) -> None:
        """
        Check the commercial rules of a campaign before it is stored.

        Per collection:
        - discounted_price <= original_price
        - discounted_price <= price_for_two (a pair never costs less than one unit)
        - price_for_two <= 2 × discounted_price, unless allow_pair_price_override is set

        Raises:
            InvalidPromotionException: On the first broken rule
        """
        name = promotion.offer_name
        if not name or not name.strip():
            raise InvalidPromotionException(name, "offer name is required")
        if promotion.valid_from > promotion.valid_to:
            raise InvalidPromotionException(name, "valid_from is after valid_to")

        for category in (ProductCategory.SIGNATURE, ProductCategory.ESSENTIALS):
            campaign = promotion.for_category(category)
            label = category.value
            if campaign.original_price <= 0:
                raise InvalidPromotionException(name, f"{label} original price must be positive")
            if campaign.discounted_price < 0 or campaign.price_for_two < 0:
                raise InvalidPromotionException(name, f"{label} prices must not be negative")
            if campaign.discounted_price > campaign.original_price:
                raise InvalidPromotionException(
                    name, f"{label} discounted price {campaign.discounted_price} exceeds original price {campaign.original_price}"
                )
            if campaign.price_for_two < campaign.discounted_price:
                raise InvalidPromotionException(
                    name, f"{label} price for two {campaign.price_for_two} is below the single price {campaign.discounted_price}"
                )
            if campaign.price_for_two > 2 * campaign.discounted_price and not promotion.allow_pair_price_override:
                raise InvalidPromotionException(
                    name, f"{label} price for two {campaign.price_for_two} exceeds two units at {campaign.discounted_price}"
                )

    @staticmethod
    async def create_promotion(
        promotion: PromotionDTO,
        session: AsyncSession | Session
    ) -> PromotionDTO:
        PromotionService.validate_promotion(promotion)
        promotion_id = await PromotionRepository.add(promotion, session)
        await session_commit(session)
        logger.info(f"[Promotion] Created '{promotion.offer_name}' (id={promotion_id}) "
                    f"{promotion.valid_from:%Y-%m-%d} - {promotion.valid_to:%Y-%m-%d}")
        return await PromotionRepository.get_by_id(promotion_id, session)

    @staticmethod
    async def deactivate_promotion(
        promotion_id: int,
        session: AsyncSession | Session
    ) -> None:
        updated = await PromotionRepository.set_active(promotion_id, False, session)
        if not updated:
            raise PromotionNotFoundException(promotion_id)
        await session_commit(session)
        logger.info(f"[Promotion] Deactivated promotion {promotion_id}")

    @staticmethod
    async def get_promotion(
        promotion_id: int,
        session: AsyncSession | Session
    ) -> PromotionDTO:
        promotion = await PromotionRepository.get_by_id(promotion_id, session)
        if promotion is None:
            raise PromotionNotFoundException(promotion_id)
        return promotion

    @staticmethod
    async def update_promotion(
        promotion_id: int,
        promotion: PromotionDTO,
        session: AsyncSession | Session
    ) -> PromotionDTO:
        """
        Replace a campaign's name, window and prices.

        The new values go through the same checks as a new campaign. Orders
        already placed keep the prices they were snapshotted with.

        Raises:
            InvalidPromotionException: New values break a pricing rule
            PromotionNotFoundException: Unknown promotion id
        """
        PromotionService.validate_promotion(promotion)
        updated = await PromotionRepository.update(promotion_id, promotion, session)
        if not updated:
            raise PromotionNotFoundException(promotion_id)
        await session_commit(session)
        logger.info(f"[Promotion] Updated '{promotion.offer_name}' (id={promotion_id})")
        return await PromotionService.get_promotion(promotion_id, session)

    @staticmethod
    async def activate_promotion(
        promotion_id: int,
        session: AsyncSession | Session
    ) -> None:
        updated = await PromotionRepository.set_active(promotion_id, True, session)
        if not updated:
            raise PromotionNotFoundException(promotion_id)
        await session_commit(session)
        logger.info(f"[Promotion] Activated promotion {promotion_id}")

    @staticmethod
    async def toggle_promotion_status(
        promotion_id: int,
        session: AsyncSession | Session
    ) -> PromotionDTO:
        """Flip is_active and return the updated promotion."""
        promotion = await PromotionService.get_promotion(promotion_id, session)
        if promotion.is_active:
            await PromotionService.deactivate_promotion(promotion_id, session)
        else:
            await PromotionService.activate_promotion(promotion_id, session)
        return await PromotionService.get_promotion(promotion_id, session)

    @staticmethod
    async def delete_promotion(
        promotion_id: int,
        session: AsyncSession | Session
    ) -> None:
        deleted = await PromotionRepository.delete(promotion_id, session)
        if not deleted:
            raise PromotionNotFoundException(promotion_id)
        await session_commit(session)
        logger.info(f"[Promotion] Deleted promotion {promotion_id}")

    @staticmethod
    async def list_promotions(
        session: AsyncSession | Session,
        include_inactive: bool = True
    ) -> list[PromotionDTO]:
        return await PromotionRepository.get_all(session, include_inactive)

    @staticmethod
    async def get_active_promotion(
        now: datetime,
        session: AsyncSession | Session
    ) -> PromotionDTO | None:
        """
        Read the running campaign.

        Storage failures are raised as LookupUnavailableException. They are
        never turned into "no promotion", that would silently reprice carts.
        """
        try:
            return await PromotionRepository.get_active(now, session)
        except SQLAlchemyError as e:
            logger.error(f"[Promotion] Campaign lookup failed: {e}")
            raise LookupUnavailableException("promotions", str(e)) from e

    @staticmethod
    async def get_category_promotion(
        category: ProductCategory,
        now: datetime,
        session: AsyncSession | Session
    ) -> CategoryCampaignDTO | None:
        """
        Campaign for one collection at `now`.

        Returns:
            CategoryCampaignDTO, or None when no campaign runs or the category is not eligible
        """
        if not category.is_promotion_eligible:
            return None
        promotion = await PromotionService.get_active_promotion(now, session)
        if promotion is None:
            return None
        return promotion.for_category(category)

    @staticmethod
    def lookup_from(promotion: PromotionDTO | None) -> CampaignLookup:
        """Wrap an already loaded promotion (or None) as a campaign lookup."""
        def lookup(category: ProductCategory) -> CategoryCampaignDTO | None:
            if promotion is None:
                return None
            return promotion.for_category(category)
        return lookup

    @staticmethod
    async def load_campaign_lookup(
        now: datetime,
        session: AsyncSession | Session
    ) -> CampaignLookup:
        """
        Read campaign state once and hand it to the engine as a plain lookup.

        The returned lookup is meant for a single pricing pass. Load a new one
        per request.
        """
        promotion = await PromotionService.get_active_promotion(now, session)
        if promotion is not None:
            logger.debug(f"[Promotion] Pricing with campaign '{promotion.offer_name}' (id={promotion.id})")
        return PromotionService.lookup_from(promotion)
