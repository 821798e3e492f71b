from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.security import get_current_user
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.user_schema import (
    AuthResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    PlayerProfileResponse,
    SignInRequest,
    SignUpRequest,
)
from backend.app.services.auth_service import auth_service

router = APIRouter()


@router.post("/sign-up", response_model=AuthResponse)
async def sign_up(payload: SignUpRequest, db: AsyncSession = Depends(get_db)):
    token, profile = await auth_service.sign_up(db, payload.email, payload.password, payload.full_name)
    return AuthResponse(access_token=token, user=PlayerProfileResponse.model_validate(profile))


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in(payload: SignInRequest, db: AsyncSession = Depends(get_db)):
    token, profile = await auth_service.sign_in(db, payload.email, payload.password)
    return AuthResponse(access_token=token, user=PlayerProfileResponse.model_validate(profile))


@router.post("/password-reset")
async def send_password_reset(payload: PasswordResetRequest, db: AsyncSession = Depends(get_db)):
    # Same answer whether or not the address is registered
    await auth_service.send_password_reset(db, payload.email)
    return {"success": True}


@router.post("/password-reset/confirm")
async def reset_password(payload: PasswordResetConfirm, db: AsyncSession = Depends(get_db)):
    await auth_service.reset_password(db, payload.token, payload.password)
    return {"success": True}


@router.get("/me", response_model=PlayerProfileResponse)
async def current_profile(user: PlayerProfile = Depends(get_current_user)):
    return user
