from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core.database import generate_id, utcnow
from backend.app.core.errors import NotFoundError
from backend.app.models.catalog_model import FeaturedBanner


class BannersService:
    async def list_banners(self, db: AsyncSession) -> List[FeaturedBanner]:
        """Newest first, which is the order the home carousel shows them in."""
        result = await db.execute(select(FeaturedBanner).order_by(FeaturedBanner.created_at.desc()))
        return list(result.scalars().all())

    async def get_banner(self, db: AsyncSession, banner_id: str) -> FeaturedBanner:
        banner = await db.get(FeaturedBanner, banner_id)
        if not banner:
            raise NotFoundError("Banner not found.")
        return banner

    async def add_banner(self, db: AsyncSession, data: Dict[str, Any]) -> FeaturedBanner:
        banner = FeaturedBanner(id=generate_id("bnr"), created_at=utcnow(), **data)
        db.add(banner)
        await db.commit()
        return banner

    async def update_banner(self, db: AsyncSession, banner_id: str, data: Dict[str, Any]) -> FeaturedBanner:
        banner = await self.get_banner(db, banner_id)
        for field, value in data.items():
            setattr(banner, field, value)
        await db.commit()
        return banner

    async def delete_banner(self, db: AsyncSession, banner_id: str):
        banner = await self.get_banner(db, banner_id)
        await db.delete(banner)
        await db.commit()


banners_service = BannersService()
