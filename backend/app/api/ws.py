from fastapi import APIRouter, WebSocket

from backend.app.api.websocket_manager import manager
from backend.app.core.database import AsyncSessionLocal
from backend.app.core.errors import ServiceError
from backend.app.core.security import decode_token
from backend.app.schemas.social_schema import NotificationResponse
from backend.app.schemas.tournament_schema import TournamentResponse
from backend.app.services.notifications_service import notifications_service
from backend.app.services.tournament_service import tournament_service

router = APIRouter()


@router.websocket("/tournaments")
async def tournaments_feed(websocket: WebSocket):
    async def snapshot():
        async with AsyncSessionLocal() as db:
            tournaments = await tournament_service.list_tournaments(db)
            return {
                "type": "TOURNAMENTS",
                "tournaments": [TournamentResponse.model_validate(t).model_dump(mode="json") for t in tournaments],
            }

    await manager.handle_channel(websocket, "tournaments", snapshot)


@router.websocket("/tournaments/{tournament_id}")
async def tournament_feed(websocket: WebSocket, tournament_id: str):
    async with AsyncSessionLocal() as db:
        try:
            tournament = await tournament_service.get_tournament(db, tournament_id)
        except ServiceError:
            await websocket.close(code=4004)  # Tournament not found
            return
        initial = TournamentResponse.model_validate(tournament).model_dump(mode="json")

    async def snapshot():
        return {"type": "TOURNAMENT_UPDATE", "tournament": initial}

    await manager.handle_channel(websocket, f"tournament:{tournament_id}", snapshot)


@router.websocket("/notifications")
async def notifications_feed(websocket: WebSocket):
    try:
        user_id = decode_token(websocket.query_params.get("token", ""))
    except ServiceError:
        await websocket.close(code=4401)
        return

    async def snapshot():
        async with AsyncSessionLocal() as db:
            notifications = await notifications_service.list_notifications(db, user_id)
            return {
                "type": "NOTIFICATIONS",
                "notifications": [NotificationResponse.model_validate(n).model_dump(mode="json") for n in notifications],
            }

    await manager.handle_channel(websocket, f"notifications:{user_id}", snapshot)
