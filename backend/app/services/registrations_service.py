from typing import List, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core.database import generate_id, utcnow
from backend.app.models.enums import ReviewStatus
from backend.app.models.tournament_model import RegistrationLog


class RegistrationsService:
    def create_registration_log(
        self,
        db: AsyncSession,
        tournament_id: str,
        tournament_name: str,
        game: str,
        team_name: str,
        team_type: str,
        players: List[Dict],
    ) -> RegistrationLog:
        """Staged on the caller's session; committed together with the join."""
        log = RegistrationLog(
            id=generate_id("reg"),
            tournament_id=tournament_id,
            tournament_name=tournament_name,
            game=game,
            team_name=team_name,
            team_type=team_type,
            players=players,
            status=ReviewStatus.APPROVED,
            registered_at=utcnow(),
        )
        db.add(log)
        return log

    async def list_registrations(self, db: AsyncSession, tournament_id: str = None) -> List[RegistrationLog]:
        query = select(RegistrationLog).order_by(RegistrationLog.registered_at.desc())
        if tournament_id:
            query = query.where(RegistrationLog.tournament_id == tournament_id)
        result = await db.execute(query)
        return list(result.scalars().all())


registrations_service = RegistrationsService()
