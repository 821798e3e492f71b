import copy
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core.database import generate_id, utcnow
from backend.app.core.errors import ConflictError, NotFoundError, PermissionDeniedError, ServiceError
from backend.app.engine import bracket as bracket_engine
from backend.app.models.enums import ReviewStatus, SubmissionStatus
from backend.app.models.tournament_model import MatchResult
from backend.app.models.user_model import PlayerProfile
from backend.app.services.tournament_service import tournament_service

logger = logging.getLogger(__name__)


class ResultsService:
    async def add_match_result(
        self,
        db: AsyncSession,
        user: PlayerProfile,
        tournament_id: str,
        round_name: str,
        match_id: str,
        team_id: str,
        kills: int,
        position: int,
        screenshot_url: str,
    ) -> MatchResult:
        """Stores a pending result and flags the team as 'submitted' on the bracket match."""
        tournament = await tournament_service.get_for_update(db, tournament_id)
        bracket = copy.deepcopy(tournament.bracket or [])
        _, _, match = tournament_service.locate_match(bracket, round_name, match_id)

        team = next((t for t in match["teams"] if t and t.get("id") == team_id), None)
        if not team:
            raise NotFoundError("Team is not part of this match.")
        if user.id not in bracket_engine.member_uids(team) and user.gamer_id not in {
            m.get("gamer_id") for m in team.get("members") or []
        }:
            raise PermissionDeniedError("Only members of the team can submit its result.")

        submission = match.get("result_submission_status") or {}
        if submission.get(team_id) == SubmissionStatus.SUBMITTED:
            raise ConflictError("A result has already been submitted for this team.")

        points = None
        if tournament.point_system_enabled:
            points = bracket_engine.compute_points(tournament.point_system, kills, position)

        result = MatchResult(
            id=generate_id("res"),
            tournament_id=tournament.id,
            tournament_name=tournament.name,
            round_name=round_name,
            match_id=match_id,
            team_id=team_id,
            team_name=team.get("name"),
            user_id=user.id,
            kills=kills,
            position=position,
            points=points,
            screenshot_url=screenshot_url,
            status=ReviewStatus.PENDING,
            submitted_at=utcnow(),
        )
        db.add(result)

        submission[team_id] = SubmissionStatus.SUBMITTED.value
        match["result_submission_status"] = submission
        tournament_service.save_bracket(tournament, bracket)

        await tournament_service.commit(db)
        await tournament_service.announce(tournament)
        return result

    async def list_pending_results(self, db: AsyncSession) -> List[MatchResult]:
        result = await db.execute(
            select(MatchResult)
            .where(MatchResult.status == ReviewStatus.PENDING)
            .order_by(MatchResult.submitted_at.asc())
        )
        return list(result.scalars().all())

    async def _get_pending(self, db: AsyncSession, result_id: str) -> MatchResult:
        query = await db.execute(select(MatchResult).where(MatchResult.id == result_id).with_for_update())
        match_result = query.scalar_one_or_none()
        if not match_result:
            raise NotFoundError("Result not found.")
        if match_result.status != ReviewStatus.PENDING:
            raise ConflictError(f"Result has already been {match_result.status}.")
        return match_result

    async def approve_result(self, db: AsyncSession, result_id: str, team1_score: int, team2_score: int) -> MatchResult:
        """Applies the reviewed score to the match and advances the winner."""
        if team1_score == team2_score:
            raise ServiceError("Scores cannot be tied in an elimination match.")

        match_result = await self._get_pending(db, result_id)
        tournament = await tournament_service.get_for_update(db, match_result.tournament_id)
        bracket = copy.deepcopy(tournament.bracket or [])
        round_index, match_index, _ = tournament_service.locate_match(
            bracket, match_result.round_name, match_result.match_id
        )

        bracket_engine.complete_match(bracket, round_index, match_index, [team1_score, team2_score])
        tournament_service.save_bracket(tournament, bracket)
        match_result.status = ReviewStatus.APPROVED

        await tournament_service.commit(db)
        logger.info("Result %s approved for match %s", result_id, match_result.match_id)
        await tournament_service.announce(tournament)
        return match_result

    async def reject_result(self, db: AsyncSession, result_id: str) -> MatchResult:
        match_result = await self._get_pending(db, result_id)
        match_result.status = ReviewStatus.REJECTED
        await db.commit()
        return match_result


results_service = ResultsService()
