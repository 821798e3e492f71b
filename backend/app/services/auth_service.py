"""
Auth Service - e-mail/password accounts backed by the users table.

Tokens are JWTs (see core/security.py); a reset token carries the purpose
"reset" so it can never be used as an access token.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.errors import AuthenticationError, ConflictError, PermissionDeniedError
from backend.app.core.security import create_token, decode_token, hash_password, verify_password
from backend.app.models.enums import UserStatus
from backend.app.models.user_model import PlayerProfile
from backend.app.services.users_service import users_service

logger = logging.getLogger(__name__)


class AuthService:
    async def sign_up(self, db: AsyncSession, email: str, password: str, full_name: str) -> Tuple[str, PlayerProfile]:
        if await users_service.get_user_by_email(db, email):
            raise ConflictError("An account with this e-mail already exists.")

        profile = await users_service.create_user_profile(
            db, name=full_name, email=email, password_hash=hash_password(password)
        )
        await db.commit()
        logger.info("New account %s (%s)", profile.id, profile.gamer_id)
        return create_token(profile.id), profile

    async def sign_in(self, db: AsyncSession, email: str, password: str) -> Tuple[str, PlayerProfile]:
        profile = await users_service.get_user_by_email(db, email)
        if not profile or not verify_password(password, profile.password_hash):
            raise AuthenticationError("Invalid e-mail or password.")
        if profile.status == UserStatus.BANNED:
            raise PermissionDeniedError("This account has been banned.")
        return create_token(profile.id), profile

    async def send_password_reset(self, db: AsyncSession, email: str) -> Optional[str]:
        """Returns the token when the account exists; callers never reveal which."""
        profile = await users_service.get_user_by_email(db, email)
        if not profile:
            logger.info("Password reset requested for unknown address %s", email)
            return None
        return users_service.issue_reset_token(profile)

    async def reset_password(self, db: AsyncSession, token: str, password: str) -> PlayerProfile:
        user_id = decode_token(token, purpose="reset")
        profile = await users_service.get_user(db, user_id)
        profile.password_hash = hash_password(password)
        await db.commit()
        return profile

    async def ensure_user_profile(self, db: AsyncSession, user_id: str, email: str, name: Optional[str] = None) -> PlayerProfile:
        """Fetches the profile for an authenticated identity, creating it on first sight."""
        existing = await db.get(PlayerProfile, user_id)
        if existing:
            return existing
        profile = await users_service.create_user_profile(
            db, name=name or "New Player", email=email, user_id=user_id
        )
        await db.commit()
        return profile


auth_service = AuthService()
