from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.product import Product, ProductPricingDTO


class ProductRepository:
    """Read access to product pricing facts (the engine never writes products)."""

    @staticmethod
    async def get_by_id(
        product_id: int,
        session: Session | AsyncSession
    ) -> ProductPricingDTO | None:
        stmt = select(Product).where(Product.id == product_id)
        result = await session_execute(stmt, session)
        product = result.scalar()

        if product is None:
            return None

        return ProductPricingDTO.model_validate(product, from_attributes=True)

    @staticmethod
    async def get_by_ids(
        product_ids: list[int],
        session: Session | AsyncSession
    ) -> dict[int, ProductPricingDTO]:
        """
        Batch-load products for a cart (prevents N+1 queries).

        Returns:
            Dict mapping product_id to ProductPricingDTO. Unknown ids are absent.
        """
        if not product_ids:
            return {}

        stmt = select(Product).where(Product.id.in_(product_ids))
        result = await session_execute(stmt, session)
        return {
            product.id: ProductPricingDTO.model_validate(product, from_attributes=True)
            for product in result.scalars().all()
        }

    @staticmethod
    async def add(
        product_dto: ProductPricingDTO,
        session: Session | AsyncSession
    ) -> int:
        product = Product(**product_dto.model_dump(exclude={"id"}))
        session.add(product)
        await session_flush(session)
        return product.id
