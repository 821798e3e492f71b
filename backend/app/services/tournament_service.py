"""
Tournament Service - tournaments, registration and bracket editing.

Every mutation is a single read-modify-write: the tournament row is loaded
FOR UPDATE, the bracket JSON is edited on a deep copy, and everything the
operation touches (wallet, registration log, notifications) is committed in
one transaction. Subscribers are told about the change after the commit.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm.attributes import flag_modified

from backend.app.core.database import generate_id, utcnow
from backend.app.core.errors import ConflictError, NotFoundError, ServiceError
from backend.app.core.events import change_events
from backend.app.core.registry import registry
from backend.app.engine import bracket as bracket_engine
from backend.app.models.enums import MatchStatus, ReviewStatus, SubmissionStatus, TournamentStatus, TransactionType
from backend.app.models.tournament_model import Tournament, MatchResult
from backend.app.models.user_model import PlayerProfile
from backend.app.models.wallet_model import Transaction, WithdrawRequest
from backend.app.schemas.tournament_schema import TournamentResponse
from backend.app.services.notifications_service import notifications_service
from backend.app.services.registrations_service import registrations_service

logger = logging.getLogger(__name__)


class TournamentService:
    async def add_tournament(self, db: AsyncSession, data: Dict[str, Any]) -> Tournament:
        """Creates an upcoming tournament with an empty bracket sized for max_teams."""
        defaults = registry.defaults
        tournament_id = generate_id("tour")

        point_system = data.get("point_system") or defaults.point_system.model_dump()

        tournament = Tournament(
            id=tournament_id,
            created_at=utcnow(),
            name=data["name"],
            game=data["game"],
            start_date=data["start_date"],
            status=TournamentStatus.UPCOMING,
            teams_count=0,
            max_teams=data["max_teams"],
            entry_fee=data.get("entry_fee") or 0,
            prize_pool=data["prize_pool"],
            rules=data["rules"],
            format=data["format"],
            per_kill_prize=data.get("per_kill_prize"),
            image=data.get("image") or defaults.tournament_image,
            data_ai_hint=data.get("data_ai_hint") or defaults.tournament_ai_hint,
            map=data.get("map") or defaults.tournament_map,
            version=data.get("version") or defaults.tournament_version,
            participants=[],
            bracket=bracket_engine.generate_bracket_structure(data["max_teams"], tournament_id),
            point_system_enabled=bool(data.get("point_system_enabled")),
            point_system=point_system,
        )
        db.add(tournament)
        await db.commit()

        logger.info("Tournament %s created (%s, %d slots)", tournament.id, tournament.name, tournament.max_teams)
        await self.announce(tournament)
        return tournament

    async def list_tournaments(self, db: AsyncSession, status: Optional[str] = None) -> List[Tournament]:
        query = select(Tournament).order_by(Tournament.start_date.desc())
        if status:
            query = query.where(Tournament.status == status)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_tournament(self, db: AsyncSession, tournament_id: str) -> Tournament:
        result = await db.execute(select(Tournament).where(Tournament.id == tournament_id))
        tournament = result.scalar_one_or_none()
        if not tournament:
            raise NotFoundError("Tournament not found.")
        return tournament

    async def get_for_update(self, db: AsyncSession, tournament_id: str) -> Tournament:
        """
        Load the tournament with row locking (FOR UPDATE) so concurrent bracket
        edits serialize on the row.
        """
        result = await db.execute(
            select(Tournament).where(Tournament.id == tournament_id).with_for_update()
        )
        tournament = result.scalar_one_or_none()
        if not tournament:
            raise NotFoundError("Tournament not found.")
        return tournament

    def save_bracket(self, tournament: Tournament, bracket: List[Dict[str, Any]]):
        tournament.bracket = bracket
        flag_modified(tournament, "bracket")  # Ensure SQLAlchemy detects JSON changes

    async def announce(self, tournament: Tournament):
        snapshot = TournamentResponse.model_validate(tournament).model_dump(mode="json")
        await change_events.publish(f"tournament:{tournament.id}", {"type": "TOURNAMENT_UPDATE", "tournament": snapshot})
        await change_events.publish("tournaments", {"type": "TOURNAMENTS_CHANGED", "id": tournament.id})

    async def commit(self, db: AsyncSession):
        try:
            await db.commit()
        except Exception as e:
            logger.exception("Tournament commit failed")
            await db.rollback()
            raise ServiceError(f"Failed to save tournament: {e}")

    # --- Admin editing ---

    async def update_tournament(self, db: AsyncSession, tournament_id: str, data: Dict[str, Any]) -> Tournament:
        tournament = await self.get_for_update(db, tournament_id)
        previous_status = tournament.status

        new_max = data.get("max_teams")
        if new_max is not None and new_max != tournament.max_teams:
            if new_max < tournament.teams_count:
                raise ConflictError(
                    f"Cannot lower the team limit below the {tournament.teams_count} registered teams."
                )
            # Teams are seated in the bracket, so only an untouched bracket is resized
            bracket = tournament.bracket or []
            if not bracket_engine.has_placed_teams(bracket):
                self.save_bracket(tournament, bracket_engine.generate_bracket_structure(new_max, tournament.id))
            else:
                slots = len(bracket[0]["matches"]) * 2 if bracket else 0
                if new_max > slots:
                    raise ConflictError(
                        f"Teams are already seated in a {slots}-team bracket; the limit cannot exceed {slots}."
                    )

        for field, value in data.items():
            if field == "point_system":
                tournament.point_system = value
                flag_modified(tournament, "point_system")
            else:
                setattr(tournament, field, value)

        if data.get("status") == TournamentStatus.LIVE and previous_status != TournamentStatus.LIVE:
            bracket = copy.deepcopy(tournament.bracket or [])
            byes = bracket_engine.process_byes(bracket)
            self.save_bracket(tournament, bracket)
            logger.info("Tournament %s is live (%d byes processed)", tournament.id, byes)

        await self.commit(db)
        await self.announce(tournament)
        return tournament

    async def delete_tournament(self, db: AsyncSession, tournament_id: str):
        tournament = await self.get_tournament(db, tournament_id)
        await db.execute(delete(MatchResult).where(MatchResult.tournament_id == tournament_id))
        await db.delete(tournament)
        await self.commit(db)
        await change_events.publish("tournaments", {"type": "TOURNAMENTS_CHANGED", "id": tournament_id})

    # --- Registration ---

    async def join_tournament(self, db: AsyncSession, tournament_id: str, team: Dict[str, Any], user_id: str) -> Tournament:
        tournament = await self.get_for_update(db, tournament_id)

        result = await db.execute(select(PlayerProfile).where(PlayerProfile.id == user_id).with_for_update())
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User profile not found.")

        if tournament.status != TournamentStatus.UPCOMING:
            raise ConflictError("Registration is closed for this tournament.")

        if tournament.teams_count >= tournament.max_teams:
            raise ConflictError("Tournament is already full.")

        required = bracket_engine.team_size_for_format(tournament.format)
        members = team.get("members") or []
        if len(members) != required:
            raise ServiceError(f"This tournament requires exactly {required} player(s) per team.")

        new_ids = [m["gamer_id"] for m in members]
        if len(set(new_ids)) != len(new_ids):
            raise ServiceError("Each player in the team must have a unique Gamer ID.")
        joined_ids = bracket_engine.gamer_ids_in(tournament.participants or [])
        already_joined = next((gid for gid in new_ids if gid in joined_ids), None)
        if already_joined:
            raise ConflictError(f"A player with Gamer ID {already_joined} is already part of this tournament.")

        entry_fee = tournament.entry_fee or 0
        if entry_fee > 0:
            if (user.balance or 0) < entry_fee:
                raise ServiceError("Insufficient balance.")
            user.balance = (user.balance or 0) - entry_fee
            db.add(Transaction(
                id=generate_id("trx"),
                user_id=user.id,
                amount=-entry_fee,
                type=TransactionType.FEE,
                description=f"Entry fee for {tournament.name}",
                date=utcnow(),
                status="completed",
            ))

        participant = {
            "id": team.get("id") or generate_id("team"),
            "name": team["name"],
            "avatar": team.get("avatar") or registry.defaults.team_avatar,
            "data_ai_hint": team.get("data_ai_hint"),
            "members": members,
        }

        bracket = copy.deepcopy(tournament.bracket or [])
        if bracket and not bracket_engine.place_team(bracket, participant):
            raise ConflictError("No free slot left in the bracket.")
        self.save_bracket(tournament, bracket)

        tournament.participants = list(tournament.participants or []) + [participant]
        flag_modified(tournament, "participants")
        tournament.teams_count = (tournament.teams_count or 0) + 1

        registrations_service.create_registration_log(
            db,
            tournament_id=tournament.id,
            tournament_name=tournament.name,
            game=tournament.game,
            team_name=participant["name"],
            team_type=bracket_engine.team_type_from_format(tournament.format),
            players=[{"name": m["name"], "gamer_id": m["gamer_id"]} for m in members],
        )

        await self.commit(db)
        logger.info("Team %s joined tournament %s", participant["name"], tournament.id)
        await self.announce(tournament)
        return tournament

    # --- Bracket editing ---

    def locate_match(self, bracket, round_name: str, match_id: str) -> Tuple[int, int, Dict[str, Any]]:
        if not any(r["name"] == round_name for r in bracket):
            raise NotFoundError("Round not found.")
        found = bracket_engine.find_match(bracket, round_name, match_id)
        if not found:
            raise NotFoundError("Match not found.")
        return found

    async def request_match_results(self, db: AsyncSession, tournament_id: str, round_name: str, match_id: str) -> Tournament:
        """Opens result submission for both teams and asks every member to report."""
        tournament = await self.get_for_update(db, tournament_id)
        bracket = copy.deepcopy(tournament.bracket or [])
        _, _, match = self.locate_match(bracket, round_name, match_id)

        team_1, team_2 = match["teams"]
        if not team_1 or not team_2:
            raise ServiceError("Both teams must be present to request results.")

        match["result_submission_status"] = {
            team_1["id"]: SubmissionStatus.PENDING.value,
            team_2["id"]: SubmissionStatus.PENDING.value,
        }
        self.save_bracket(tournament, bracket)

        notes = notifications_service.notify_many(
            db,
            bracket_engine.member_uids(team_1) + bracket_engine.member_uids(team_2),
            title="Match Result Submission",
            description=f'Please submit your results for match "{match["name"]}" in the "{tournament.name}" tournament.',
            link=f"/tournaments/{tournament.id}",
        )

        await self.commit(db)
        await notifications_service.announce(notes)
        await self.announce(tournament)
        return tournament

    async def set_match_winner(self, db: AsyncSession, tournament_id: str, round_name: str, match_id: str, winner_team_id: str) -> Tournament:
        tournament = await self.get_for_update(db, tournament_id)
        bracket = copy.deepcopy(tournament.bracket or [])
        round_index, match_index, match = self.locate_match(bracket, round_name, match_id)

        if not match["teams"][0] or not match["teams"][1]:
            raise ServiceError("Both teams must be present to set a winner.")

        winner_index = next(
            (i for i, t in enumerate(match["teams"]) if t and t.get("id") == winner_team_id), None
        )
        if winner_index is None:
            raise NotFoundError("Winner team not found in the match.")

        scores = [0, 0]
        scores[winner_index] = 1
        bracket_engine.complete_match(bracket, round_index, match_index, scores)
        self.save_bracket(tournament, bracket)

        await self.commit(db)
        await self.announce(tournament)
        return tournament

    async def undo_match_result(self, db: AsyncSession, tournament_id: str, round_name: str, match_id: str) -> Tournament:
        tournament = await self.get_for_update(db, tournament_id)
        bracket = copy.deepcopy(tournament.bracket or [])
        round_index, match_index, match = self.locate_match(bracket, round_name, match_id)

        old_winner = match["teams"][bracket_engine.match_winner_index(match)]

        match["status"] = MatchStatus.PENDING.value
        match["scores"] = [0, 0]
        if old_winner:
            bracket_engine.retract_winner(bracket, round_index, match_index, old_winner["id"])
        self.save_bracket(tournament, bracket)

        await self.commit(db)
        await self.announce(tournament)
        return tournament

    async def update_match_details(self, db: AsyncSession, tournament_id: str, match_id: str, room_id: str, room_pass: str) -> Tournament:
        tournament = await self.get_for_update(db, tournament_id)
        bracket = copy.deepcopy(tournament.bracket or [])
        found = bracket_engine.find_match_by_id(bracket, match_id)
        if not found:
            raise NotFoundError("Match not found in bracket.")

        _, _, match = found
        match["room_id"] = room_id
        match["room_pass"] = room_pass
        self.save_bracket(tournament, bracket)

        await self.commit(db)
        await self.announce(tournament)
        return tournament

    # --- Admin dashboard ---

    async def dashboard_counts(self, db: AsyncSession) -> Dict[str, int]:
        async def count(query) -> int:
            result = await db.execute(query)
            return result.scalar() or 0

        return {
            "users": await count(select(func.count(PlayerProfile.id))),
            "tournaments": await count(select(func.count(Tournament.id))),
            "live_tournaments": await count(
                select(func.count(Tournament.id)).where(Tournament.status == TournamentStatus.LIVE)
            ),
            "completed_tournaments": await count(
                select(func.count(Tournament.id)).where(Tournament.status == TournamentStatus.COMPLETED)
            ),
            "pending_withdrawals": await count(
                select(func.count(WithdrawRequest.id)).where(WithdrawRequest.status == ReviewStatus.PENDING)
            ),
            "pending_results": await count(
                select(func.count(MatchResult.id)).where(MatchResult.status == ReviewStatus.PENDING)
            ),
        }


tournament_service = TournamentService()
