from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.security import get_current_user, require_admin
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.tournament_schema import MatchResultResponse, ResultApproval, ResultSubmission
from backend.app.services.results_service import results_service

router = APIRouter()


@router.post("/{tournament_id}")
async def submit_result(
    tournament_id: str,
    payload: ResultSubmission,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    result = await results_service.add_match_result(
        db,
        user,
        tournament_id,
        payload.round_name,
        payload.match_id,
        payload.team_id,
        payload.kills,
        payload.position,
        str(payload.screenshot_url),
    )
    return {"success": True, "id": result.id, "points": result.points}


@router.get("/pending", response_model=List[MatchResultResponse])
async def list_pending(db: AsyncSession = Depends(get_db), admin: PlayerProfile = Depends(require_admin)):
    return await results_service.list_pending_results(db)


@router.post("/{result_id}/approve")
async def approve_result(
    result_id: str,
    payload: ResultApproval,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await results_service.approve_result(db, result_id, payload.team1_score, payload.team2_score)
    return {"success": True}


@router.post("/{result_id}/reject")
async def reject_result(result_id: str, db: AsyncSession = Depends(get_db), admin: PlayerProfile = Depends(require_admin)):
    await results_service.reject_result(db, result_id)
    return {"success": True}
