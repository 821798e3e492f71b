from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.errors import NotFoundError, PermissionDeniedError
from backend.app.core.security import get_current_user
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.social_schema import InviteResponse, ManualMember, TeamCreate, TeamInvite, UserTeamResponse
from backend.app.services.teams_service import teams_service

router = APIRouter()


@router.post("/")
async def create_team(payload: TeamCreate, db: AsyncSession = Depends(get_db), user: PlayerProfile = Depends(get_current_user)):
    team = await teams_service.create_team(db, user, payload.name)
    return {"success": True, "team_id": team.id}


@router.get("/mine", response_model=UserTeamResponse)
async def my_team(db: AsyncSession = Depends(get_db), user: PlayerProfile = Depends(get_current_user)):
    if not user.team_id:
        raise NotFoundError("You are not in a team.")
    return await teams_service.get_team(db, user.team_id)


@router.post("/invite")
async def send_invite(payload: TeamInvite, db: AsyncSession = Depends(get_db), user: PlayerProfile = Depends(get_current_user)):
    invite = await teams_service.send_team_invite(db, user, payload.invitee_gamer_id)
    return {"success": True, "notification_id": invite.id}


@router.post("/invites/{notification_id}/respond")
async def respond_to_invite(
    notification_id: str,
    payload: InviteResponse,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    await teams_service.respond_to_invite(db, notification_id, user, payload.response)
    return {"success": True}


@router.post("/leave")
async def leave_team(db: AsyncSession = Depends(get_db), user: PlayerProfile = Depends(get_current_user)):
    await teams_service.leave_team(db, user)
    return {"success": True}


@router.get("/placeholder/{gamer_id}", response_model=UserTeamResponse)
async def find_placeholder_team(gamer_id: str, db: AsyncSession = Depends(get_db)):
    team = await teams_service.find_team_by_gamer_id_placeholder(db, gamer_id)
    if not team:
        raise NotFoundError("No team holds a placeholder for this Gamer ID.")
    return team


@router.get("/{team_id}", response_model=UserTeamResponse)
async def get_team(team_id: str, db: AsyncSession = Depends(get_db)):
    return await teams_service.get_team(db, team_id)


@router.post("/{team_id}/members")
async def add_member_manually(
    team_id: str,
    payload: ManualMember,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    team = await teams_service.get_team(db, team_id)
    if team.leader_id != user.id:
        raise PermissionDeniedError("Only the team leader can add members.")
    await teams_service.add_member_manually(db, team_id, payload.gamer_id, payload.name)
    return {"success": True}
