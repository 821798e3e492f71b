from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.security import require_admin
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.catalog_schema import BannerCreate, BannerResponse, BannerUpdate
from backend.app.services.banners_service import banners_service

router = APIRouter()


@router.get("/", response_model=List[BannerResponse])
async def list_banners(db: AsyncSession = Depends(get_db)):
    return await banners_service.list_banners(db)


@router.post("/")
async def add_banner(payload: BannerCreate, db: AsyncSession = Depends(get_db), admin: PlayerProfile = Depends(require_admin)):
    banner = await banners_service.add_banner(db, payload.model_dump(mode="json"))
    return {"success": True, "id": banner.id}


@router.patch("/{banner_id}")
async def update_banner(
    banner_id: str,
    payload: BannerUpdate,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await banners_service.update_banner(db, banner_id, payload.model_dump(mode="json", exclude_unset=True))
    return {"success": True}


@router.delete("/{banner_id}")
async def delete_banner(banner_id: str, db: AsyncSession = Depends(get_db), admin: PlayerProfile = Depends(require_admin)):
    await banners_service.delete_banner(db, banner_id)
    return {"success": True}
