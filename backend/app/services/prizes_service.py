import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core.database import generate_id, utcnow
from backend.app.core.errors import ConflictError, NotFoundError
from backend.app.models.enums import ReviewStatus, TransactionType
from backend.app.models.user_model import PlayerProfile
from backend.app.models.wallet_model import PendingPrize, Transaction
from backend.app.services.notifications_service import notifications_service
from backend.app.services.tournament_service import tournament_service

logger = logging.getLogger(__name__)


class PrizesService:
    async def _lock_user(self, db: AsyncSession, user_id: str) -> PlayerProfile:
        result = await db.execute(select(PlayerProfile).where(PlayerProfile.id == user_id).with_for_update())
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found.")
        return user

    async def award_prize(self, db: AsyncSession, user_id: str, tournament_id: str, amount: float, reason: str) -> PendingPrize:
        """Holds prize money in the winner's pending balance until an admin releases it."""
        tournament = await tournament_service.get_tournament(db, tournament_id)
        user = await self._lock_user(db, user_id)

        prize = PendingPrize(
            id=generate_id("prz"),
            user_id=user.id,
            user_name=user.name,
            user_gamer_id=user.gamer_id,
            amount=amount,
            tournament_id=tournament.id,
            tournament_name=tournament.name,
            reason=reason,
            status=ReviewStatus.PENDING,
            created_at=utcnow(),
        )
        db.add(prize)
        user.pending_balance = (user.pending_balance or 0) + amount
        await db.commit()
        return prize

    async def list_pending_prizes(self, db: AsyncSession) -> List[PendingPrize]:
        result = await db.execute(
            select(PendingPrize)
            .where(PendingPrize.status == ReviewStatus.PENDING)
            .order_by(PendingPrize.created_at.asc())
        )
        return list(result.scalars().all())

    async def process_pending_prize(self, db: AsyncSession, prize_id: str, status: str) -> PendingPrize:
        result = await db.execute(select(PendingPrize).where(PendingPrize.id == prize_id).with_for_update())
        prize = result.scalar_one_or_none()
        if not prize:
            raise NotFoundError("Prize request not found.")
        if prize.status != ReviewStatus.PENDING:
            raise ConflictError(f"Prize has already been {prize.status}.")

        user = await self._lock_user(db, prize.user_id)

        prize.status = status
        user.pending_balance = max((user.pending_balance or 0) - prize.amount, 0)
        if status == ReviewStatus.APPROVED:
            user.balance = (user.balance or 0) + prize.amount
            db.add(Transaction(
                id=generate_id("trx"),
                user_id=user.id,
                amount=prize.amount,
                type=TransactionType.PRIZE,
                description=f"Prize from {prize.tournament_name}: {prize.reason}",
                date=utcnow(),
                status="completed",
            ))

        note = notifications_service.build(
            db,
            user.id,
            title=f"Prize Money {status}",
            description=f"Your prize of {prize.amount:g} TK from {prize.tournament_name} has been {status}.",
            link="/wallet",
        )
        await db.commit()
        logger.info("Prize %s %s", prize.id, status)
        await notifications_service.announce([note])
        return prize


prizes_service = PrizesService()
