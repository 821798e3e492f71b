import logging
from typing import Dict, List, Optional, Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm.attributes import flag_modified

from backend.app.core.database import generate_id
from backend.app.core.errors import ConflictError, NotFoundError, PermissionDeniedError, ServiceError
from backend.app.core.events import change_events
from backend.app.core.registry import registry
from backend.app.models.enums import InviteStatus, NotificationType
from backend.app.models.team_model import UserTeam
from backend.app.models.user_model import PlayerProfile
from backend.app.services.notifications_service import notifications_service
from backend.app.services.users_service import users_service

logger = logging.getLogger(__name__)


class TeamsService:
    async def get_team(self, db: AsyncSession, team_id: str) -> UserTeam:
        result = await db.execute(select(UserTeam).where(UserTeam.id == team_id))
        team = result.scalar_one_or_none()
        if not team:
            raise NotFoundError("Team not found.")
        return team

    async def _get_team_for_update(self, db: AsyncSession, team_id: str) -> UserTeam:
        result = await db.execute(select(UserTeam).where(UserTeam.id == team_id).with_for_update())
        team = result.scalar_one_or_none()
        if not team:
            raise NotFoundError("Team not found.")
        return team

    def _set_members(self, team: UserTeam, members: List[Dict[str, Any]]):
        team.members = members
        team.member_gamer_ids = [m["gamer_id"] for m in members]
        flag_modified(team, "members")
        flag_modified(team, "member_gamer_ids")

    def _ensure_room(self, team: UserTeam, full_message: str):
        if len(team.members or []) >= registry.defaults.max_team_members:
            raise ConflictError(full_message)

    async def _announce(self, team_id: str):
        await change_events.publish(f"team:{team_id}", {"type": "TEAM_UPDATE", "id": team_id})

    async def create_team(self, db: AsyncSession, leader: PlayerProfile, name: str) -> UserTeam:
        if leader.team_id:
            raise ConflictError("User is already in a team.")

        team = UserTeam(
            id=generate_id("team"),
            name=name,
            leader_id=leader.id,
            avatar=leader.avatar or registry.defaults.team_avatar,
            data_ai_hint="team logo",
        )
        self._set_members(team, [{
            "uid": leader.id,
            "name": leader.name,
            "gamer_id": leader.gamer_id,
            "avatar": leader.avatar,
            "role": "Leader",
        }])
        db.add(team)
        leader.team_id = team.id

        await db.commit()
        logger.info("Team %s created by %s", team.id, leader.id)
        return team

    async def send_team_invite(self, db: AsyncSession, inviter: PlayerProfile, invitee_gamer_id: str):
        if not inviter.team_id:
            raise ServiceError("You are not in a team.")
        team = await self.get_team(db, inviter.team_id)

        invitee = await users_service.find_user_by_gamer_id(db, invitee_gamer_id)
        if not invitee:
            raise NotFoundError(f"No player found with Gamer ID {invitee_gamer_id}.")

        self._ensure_room(team, "The team is already full (max 5 members).")
        if any(m.get("uid") == invitee.id for m in team.members or []):
            raise ConflictError(f"{invitee.name} is already in the team.")
        if invitee.team_id:
            raise ConflictError(f"{invitee.name} is already in another team.")

        return await notifications_service.create_notification(
            db,
            invitee.id,
            title="Team Invitation",
            description=f'{inviter.name} has invited you to join team "{team.name}".',
            link="/profile",
            type=NotificationType.TEAM_INVITE,
            sender={"uid": inviter.id, "name": inviter.name},
            team={"id": team.id, "name": team.name},
            status=InviteStatus.PENDING,
        )

    async def respond_to_invite(self, db: AsyncSession, notification_id: str, user: PlayerProfile, response: str):
        invite = await notifications_service.get_owned(db, notification_id, user.id)
        if invite.type != NotificationType.TEAM_INVITE:
            raise ServiceError("This notification is not a team invitation.")
        if invite.status != InviteStatus.PENDING:
            raise ConflictError("This invitation has already been answered.")

        team_id = (invite.team or {}).get("id")
        if response == InviteStatus.ACCEPTED:
            if user.team_id:
                raise ConflictError("You are already in a team.")
            result = await db.execute(select(UserTeam).where(UserTeam.id == team_id).with_for_update())
            team = result.scalar_one_or_none()
            if not team:
                raise NotFoundError("Team no longer exists.")
            self._ensure_room(team, "The team is now full.")

            self._set_members(team, list(team.members or []) + [{
                "uid": user.id,
                "name": user.name,
                "gamer_id": user.gamer_id,
                "avatar": user.avatar,
                "role": "Member",
            }])
            user.team_id = team.id

        invite.status = response
        invite.read = True

        reply = None
        inviter_id = (invite.sender or {}).get("uid")
        if inviter_id:
            reply = notifications_service.build(
                db,
                inviter_id,
                title=f"Invite {response}",
                description=f"{user.name} has {response} your invitation.",
                link="/profile",
                type=NotificationType.INVITE_RESPONSE,
                response=response,
            )

        await db.commit()
        if reply:
            await notifications_service.announce([reply])
        if response == InviteStatus.ACCEPTED:
            await self._announce(team_id)
        return invite

    async def add_member_manually(self, db: AsyncSession, team_id: str, gamer_id: str, name: str) -> UserTeam:
        """Adds a placeholder member: a gamer id without an account behind it."""
        team = await self._get_team_for_update(db, team_id)
        self._ensure_room(team, "Team is already full (max 5 members).")
        if gamer_id in (team.member_gamer_ids or []):
            raise ConflictError("A player with this Gamer ID is already in the team.")

        self._set_members(team, list(team.members or []) + [
            {"name": name, "gamer_id": gamer_id, "role": "Member"}
        ])
        await db.commit()
        await self._announce(team.id)
        return team

    async def leave_team(self, db: AsyncSession, user: PlayerProfile) -> Optional[str]:
        """Returns the id of the team that was left."""
        if not user.team_id:
            raise ServiceError("You are not in a team.")
        team = await self._get_team_for_update(db, user.team_id)

        if not any(m.get("uid") == user.id for m in team.members or []):
            raise PermissionDeniedError("You are not a member of this team.")

        if team.leader_id == user.id:
            if len(team.members) > 1:
                raise ConflictError("Leader cannot leave. Please transfer leadership first.")
            await db.delete(team)
        else:
            self._set_members(team, [m for m in team.members if m.get("uid") != user.id])

        user.team_id = None
        await db.commit()
        await self._announce(team.id)
        return team.id

    async def find_team_by_gamer_id_placeholder(self, db: AsyncSession, gamer_id: str) -> Optional[UserTeam]:
        """The team holding gamer_id as a placeholder (uid-less) member, if any."""
        result = await db.execute(select(UserTeam))
        for team in result.scalars().all():
            if any(m.get("gamer_id") == gamer_id and not m.get("uid") for m in team.members or []):
                return team
        return None


teams_service = TeamsService()
