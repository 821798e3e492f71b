import logging
import secrets
import string
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core import config
from backend.app.core.database import generate_id, utcnow
from backend.app.core.errors import ConflictError, NotFoundError, ServiceError
from backend.app.core.registry import registry
from backend.app.core.security import create_token
from backend.app.models.enums import TransactionType, UserRole, UserStatus
from backend.app.models.user_model import PlayerProfile
from backend.app.models.wallet_model import Transaction

logger = logging.getLogger(__name__)

GAMER_ID_ALPHABET = string.ascii_lowercase + string.digits
PROFILE_FIELDS = ("name", "game_name", "gamer_id", "avatar", "banner")


def generate_gamer_id() -> str:
    return "player_" + "".join(secrets.choice(GAMER_ID_ALPHABET) for _ in range(7))


class UsersService:
    async def create_user_profile(
        self,
        db: AsyncSession,
        name: str,
        email: str,
        password_hash: Optional[str] = None,
        role: str = UserRole.PLAYER,
        avatar: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> PlayerProfile:
        """Staged only; the caller commits."""
        gamer_id = generate_gamer_id()
        while await self.find_user_by_gamer_id(db, gamer_id):
            gamer_id = generate_gamer_id()

        defaults = registry.defaults
        profile = PlayerProfile(
            id=user_id or generate_id("usr"),
            name=name,
            email=email.lower(),
            password_hash=password_hash,
            avatar=avatar or defaults.user_avatar,
            banner=defaults.user_banner,
            game_name="Not Set",
            gamer_id=gamer_id,
            joined=utcnow(),
            role=role,
            status=UserStatus.ACTIVE,
            winrate=0.0,
            games=0,
            wins=0,
            balance=defaults.welcome_bonus,
            pending_balance=0.0,
            team_id=None,
        )
        db.add(profile)
        return profile

    async def get_user(self, db: AsyncSession, user_id: str) -> PlayerProfile:
        result = await db.execute(select(PlayerProfile).where(PlayerProfile.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found.")
        return user

    async def get_user_by_email(self, db: AsyncSession, email: str) -> Optional[PlayerProfile]:
        result = await db.execute(select(PlayerProfile).where(PlayerProfile.email == email.lower()))
        return result.scalar_one_or_none()

    async def find_user_by_gamer_id(self, db: AsyncSession, gamer_id: str) -> Optional[PlayerProfile]:
        result = await db.execute(select(PlayerProfile).where(PlayerProfile.gamer_id == gamer_id))
        return result.scalar_one_or_none()

    async def list_users(self, db: AsyncSession) -> List[PlayerProfile]:
        result = await db.execute(select(PlayerProfile).order_by(PlayerProfile.joined.desc()))
        return list(result.scalars().all())

    async def list_players(self, db: AsyncSession, limit: Optional[int] = None) -> List[PlayerProfile]:
        """Leaderboard order: best winrate first."""
        query = (
            select(PlayerProfile)
            .where(PlayerProfile.role == UserRole.PLAYER)
            .order_by(PlayerProfile.winrate.desc(), PlayerProfile.wins.desc())
        )
        if limit:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def list_top_players(self, db: AsyncSession, count: Optional[int] = None) -> List[PlayerProfile]:
        return await self.list_players(db, limit=count or registry.defaults.top_players_count)

    async def update_user_profile(self, db: AsyncSession, user_id: str, data: Dict[str, Any]) -> PlayerProfile:
        user = await self.get_user(db, user_id)

        new_gamer_id = data.get("gamer_id")
        if new_gamer_id and new_gamer_id != user.gamer_id:
            owner = await self.find_user_by_gamer_id(db, new_gamer_id)
            if owner and owner.id != user.id:
                raise ConflictError("This Gamer ID is already taken.")

        for field in PROFILE_FIELDS:
            if data.get(field) is not None:
                setattr(user, field, data[field])

        await db.commit()
        return user

    async def update_user_balance(self, db: AsyncSession, user_id: str, amount: float) -> PlayerProfile:
        """Admin credit (positive) or debit (negative), recorded as an adjustment."""
        if not amount:
            raise ServiceError("Amount must not be zero.")

        result = await db.execute(select(PlayerProfile).where(PlayerProfile.id == user_id).with_for_update())
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found.")

        new_balance = (user.balance or 0) + amount
        if new_balance < 0:
            raise ServiceError("Balance cannot go negative.")
        user.balance = new_balance

        db.add(Transaction(
            id=generate_id("trx"),
            user_id=user.id,
            amount=amount,
            type=TransactionType.ADMIN_ADJUSTMENT,
            description="Balance adjusted by admin",
            date=utcnow(),
            status="completed",
        ))
        await db.commit()
        logger.info("Balance of %s adjusted by %s", user.id, amount)
        return user

    async def update_user_status(self, db: AsyncSession, user_id: str, status: str) -> PlayerProfile:
        user = await self.get_user(db, user_id)
        user.status = status
        await db.commit()
        logger.info("User %s is now %s", user.id, status)
        return user

    def issue_reset_token(self, user: PlayerProfile) -> str:
        # No mail transport: the token is written to the log for the operator.
        token = create_token(user.id, purpose="reset", minutes=config.RESET_TOKEN_EXPIRE_MINUTES)
        logger.info("Password reset token for %s: %s", user.email, token)
        return token

    async def send_password_reset_for_user(self, db: AsyncSession, user_id: str) -> str:
        user = await self.get_user(db, user_id)
        return self.issue_reset_token(user)


users_service = UsersService()
