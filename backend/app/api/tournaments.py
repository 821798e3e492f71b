from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.security import get_current_user, require_admin
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.tournament_schema import (
    JoinRequest,
    MatchDetailsUpdate,
    MatchRef,
    SetWinnerRequest,
    SummaryRequest,
    SummaryResponse,
    TournamentCreate,
    TournamentResponse,
    TournamentUpdate,
)
from backend.app.services.summary_service import summary_service, tournament_events
from backend.app.services.tournament_service import tournament_service

router = APIRouter()


@router.get("/", response_model=List[TournamentResponse])
async def list_tournaments(status: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return await tournament_service.list_tournaments(db, status)


@router.get("/{tournament_id}", response_model=TournamentResponse)
async def get_tournament(tournament_id: str, db: AsyncSession = Depends(get_db)):
    return await tournament_service.get_tournament(db, tournament_id)


@router.post("/{tournament_id}/join")
async def join_tournament(
    tournament_id: str,
    payload: JoinRequest,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    tournament = await tournament_service.join_tournament(db, tournament_id, payload.team.model_dump(), user.id)
    return {"success": True, "teams_count": tournament.teams_count}


@router.get("/{tournament_id}/events", response_model=List[str])
async def get_events(tournament_id: str, db: AsyncSession = Depends(get_db)):
    tournament = await tournament_service.get_tournament(db, tournament_id)
    return tournament_events(tournament.bracket)


@router.post("/{tournament_id}/summary", response_model=SummaryResponse)
async def summarize(
    tournament_id: str,
    payload: SummaryRequest,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    tournament = await tournament_service.get_tournament(db, tournament_id)
    events = payload.events if payload.events is not None else tournament_events(tournament.bracket)
    summary = await summary_service.summarize_tournament(tournament.name, events, payload.user_is_participating)
    return SummaryResponse(summary=summary)


# --- Admin ---

@router.post("/")
async def add_tournament(
    payload: TournamentCreate,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    data = payload.model_dump(exclude={"mode", "team_type"})
    data["format"] = payload.format
    tournament = await tournament_service.add_tournament(db, data)
    return {"success": True, "id": tournament.id}


@router.patch("/{tournament_id}")
async def update_tournament(
    tournament_id: str,
    payload: TournamentUpdate,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await tournament_service.update_tournament(db, tournament_id, payload.model_dump(exclude_unset=True))
    return {"success": True}


@router.delete("/{tournament_id}")
async def delete_tournament(
    tournament_id: str,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await tournament_service.delete_tournament(db, tournament_id)
    return {"success": True}


@router.post("/{tournament_id}/request-results")
async def request_match_results(
    tournament_id: str,
    payload: MatchRef,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await tournament_service.request_match_results(db, tournament_id, payload.round_name, payload.match_id)
    return {"success": True}


@router.post("/{tournament_id}/winner")
async def set_match_winner(
    tournament_id: str,
    payload: SetWinnerRequest,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await tournament_service.set_match_winner(
        db, tournament_id, payload.round_name, payload.match_id, payload.winner_team_id
    )
    return {"success": True}


@router.post("/{tournament_id}/undo")
async def undo_match_result(
    tournament_id: str,
    payload: MatchRef,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await tournament_service.undo_match_result(db, tournament_id, payload.round_name, payload.match_id)
    return {"success": True}


@router.patch("/{tournament_id}/matches/{match_id}")
async def update_match_details(
    tournament_id: str,
    match_id: str,
    payload: MatchDetailsUpdate,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await tournament_service.update_match_details(db, tournament_id, match_id, payload.room_id, payload.room_pass)
    return {"success": True}
