import logging
from datetime import timedelta
from typing import Optional

import bcrypt
from fastapi import Depends, Request
from jose import jwt, JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core import config
from backend.app.core.database import get_db, utcnow
from backend.app.core.errors import AuthenticationError, PermissionDeniedError
from backend.app.models.enums import UserRole, UserStatus
from backend.app.models.user_model import PlayerProfile

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def create_token(user_id: str, purpose: str = "access", minutes: Optional[int] = None) -> str:
    if minutes is None:
        minutes = config.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": user_id,
        "purpose": purpose,
        "exp": utcnow() + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str, purpose: str = "access") -> str:
    """Returns the user id carried by a valid token of the given purpose."""
    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token.")
    if payload.get("purpose") != purpose or not payload.get("sub"):
        raise AuthenticationError("Invalid or expired token.")
    return payload["sub"]


def _bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise AuthenticationError("Not authenticated.")
    return auth_header[7:]


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> PlayerProfile:
    user_id = decode_token(_bearer_token(request))
    result = await db.execute(select(PlayerProfile).where(PlayerProfile.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise AuthenticationError("User profile not found.")
    if user.status == UserStatus.BANNED:
        raise PermissionDeniedError("This account has been banned.")
    return user


async def require_admin(user: PlayerProfile = Depends(get_current_user)) -> PlayerProfile:
    if user.role != UserRole.ADMIN:
        raise PermissionDeniedError("Admin access required.")
    return user
