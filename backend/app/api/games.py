from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.security import require_admin
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.catalog_schema import GameCreate, GameResponse, GameUpdate
from backend.app.services.games_service import games_service

router = APIRouter()


@router.get("/", response_model=List[GameResponse])
async def list_games(db: AsyncSession = Depends(get_db)):
    return await games_service.list_games(db)


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(game_id: str, db: AsyncSession = Depends(get_db)):
    return await games_service.get_game(db, game_id)


@router.post("/")
async def add_game(payload: GameCreate, db: AsyncSession = Depends(get_db), admin: PlayerProfile = Depends(require_admin)):
    game = await games_service.add_game(db, payload.model_dump(mode="json"))
    return {"success": True, "id": game.id}


@router.patch("/{game_id}")
async def update_game(
    game_id: str,
    payload: GameUpdate,
    db: AsyncSession = Depends(get_db),
    admin: PlayerProfile = Depends(require_admin),
):
    await games_service.update_game(db, game_id, payload.model_dump(mode="json", exclude_unset=True))
    return {"success": True}


@router.delete("/{game_id}")
async def delete_game(game_id: str, db: AsyncSession = Depends(get_db), admin: PlayerProfile = Depends(require_admin)):
    await games_service.delete_game(db, game_id)
    return {"success": True}
