from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.errors import NotFoundError
from backend.app.core.security import get_current_user, require_admin
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.user_schema import (
    BalanceAdjustment,
    PlayerProfileResponse,
    ProfileUpdate,
    PublicPlayerResponse,
    StatusUpdate,
)
from backend.app.services.users_service import users_service

router = APIRouter()


@router.get("/", response_model=List[PlayerProfileResponse])
async def list_users(db: AsyncSession = Depends(get_db), admin: PlayerProfile = Depends(require_admin)):
    return await users_service.list_users(db)


@router.get("/top", response_model=List[PublicPlayerResponse])
async def top_players(count: Optional[int] = None, db: AsyncSession = Depends(get_db)):
    return await users_service.list_top_players(db, count)


@router.get("/leaderboard", response_model=List[PublicPlayerResponse])
async def leaderboard(db: AsyncSession = Depends(get_db)):
    return await users_service.list_players(db)


@router.patch("/me")
async def update_profile(
    payload: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    profile = await users_service.update_user_profile(db, user.id, payload.model_dump(exclude_unset=True))
    return {"success": True, "user": PlayerProfileResponse.model_validate(profile)}


@router.get("/by-gamer-id/{gamer_id}", response_model=PublicPlayerResponse)
async def find_by_gamer_id(gamer_id: str, db: AsyncSession = Depends(get_db)):
    user = await users_service.find_user_by_gamer_id(db, gamer_id)
    if not user:
        raise NotFoundError(f"No player found with Gamer ID {gamer_id}.")
    return user


@router.get("/{user_id}", response_model=PublicPlayerResponse)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    return await users_service.get_user(db, user_id)


# --- Admin ---

@router.patch("/{user_id}/balance")
async def adjust_balance(
    user_id: str,
    payload: BalanceAdjustment,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    user = await users_service.update_user_balance(db, user_id, payload.amount)
    return {"success": True, "balance": user.balance}


@router.patch("/{user_id}/status")
async def update_status(
    user_id: str,
    payload: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    user = await users_service.update_user_status(db, user_id, payload.status)
    return {"success": True, "status": user.status}


@router.post("/{user_id}/password-reset")
async def send_password_reset(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await users_service.send_password_reset_for_user(db, user_id)
    return {"success": True}
