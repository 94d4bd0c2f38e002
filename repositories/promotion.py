from datetime import datetime

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.promotion import Promotion, PromotionDTO


class PromotionRepository:
    """Repository for promotional campaign records."""

    @staticmethod
    async def add(
        promotion_dto: PromotionDTO,
        session: Session | AsyncSession
    ) -> int:
        promotion = Promotion(**promotion_dto.model_dump(exclude={"id", "created_at", "updated_at"}))
        session.add(promotion)
        await session_flush(session)
        return promotion.id

    @staticmethod
    async def get_by_id(
        promotion_id: int,
        session: Session | AsyncSession
    ) -> PromotionDTO | None:
        stmt = select(Promotion).where(Promotion.id == promotion_id)
        result = await session_execute(stmt, session)
        promotion = result.scalar()

        if promotion is None:
            return None

        return PromotionDTO.model_validate(promotion, from_attributes=True)

    @staticmethod
    async def get_active(
        now: datetime,
        session: Session | AsyncSession
    ) -> PromotionDTO | None:
        """
        Get the promotion running at `now`.

        When campaigns overlap the one that started most recently wins,
        ties broken by the newest record.

        Args:
            now: Point in time to evaluate the validity window against
            session: Database session

        Returns:
            PromotionDTO if a campaign is running, None otherwise
        """
        stmt = (
            select(Promotion)
            .where(Promotion.is_active == True)
            .where(Promotion.valid_from <= now)
            .where(Promotion.valid_to >= now)
            .order_by(Promotion.valid_from.desc(), Promotion.id.desc())
            .limit(1)
        )
        result = await session_execute(stmt, session)
        promotion = result.scalar()

        if promotion is None:
            return None

        return PromotionDTO.model_validate(promotion, from_attributes=True)

    @staticmethod
    async def get_all(
        session: Session | AsyncSession,
        include_inactive: bool = True
    ) -> list[PromotionDTO]:
        stmt = select(Promotion).order_by(Promotion.valid_from.desc())
        if not include_inactive:
            stmt = stmt.where(Promotion.is_active == True)
        result = await session_execute(stmt, session)
        return [PromotionDTO.model_validate(p, from_attributes=True) for p in result.scalars().all()]

    @staticmethod
    async def set_active(
        promotion_id: int,
        is_active: bool,
        session: Session | AsyncSession
    ) -> bool:
        """
        Toggle a promotion on or off.

        Returns:
            True if a row was updated, False if the promotion does not exist
        """
        stmt = (
            update(Promotion)
            .where(Promotion.id == promotion_id)
            .values(is_active=is_active, updated_at=datetime.utcnow())
        )
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def update(
        promotion_id: int,
        promotion_dto: PromotionDTO,
        session: Session | AsyncSession
    ) -> bool:
        """
        Overwrite a promotion's name, window, prices and flags.

        Returns:
            True if a row was updated, False if the promotion does not exist
        """
        values = promotion_dto.model_dump(exclude={"id", "created_at", "updated_at"})
        stmt = (
            update(Promotion)
            .where(Promotion.id == promotion_id)
            .values(**values, updated_at=datetime.utcnow())
        )
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def delete(
        promotion_id: int,
        session: Session | AsyncSession
    ) -> bool:
        """
        Returns:
            True if a row was deleted, False if the promotion does not exist
        """
        stmt = delete(Promotion).where(Promotion.id == promotion_id)
        result = await session_execute(stmt, session)
        return result.rowcount > 0
