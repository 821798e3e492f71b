from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core.database import generate_id, utcnow
from backend.app.core.errors import NotFoundError
from backend.app.models.catalog_model import GameCategory


class GamesService:
    async def list_games(self, db: AsyncSession) -> List[GameCategory]:
        result = await db.execute(select(GameCategory).order_by(GameCategory.name.asc()))
        return list(result.scalars().all())

    async def get_game(self, db: AsyncSession, game_id: str) -> GameCategory:
        game = await db.get(GameCategory, game_id)
        if not game:
            raise NotFoundError("Game not found.")
        return game

    async def add_game(self, db: AsyncSession, data: Dict[str, Any]) -> GameCategory:
        game = GameCategory(id=generate_id("game"), created_at=utcnow(), **data)
        db.add(game)
        await db.commit()
        return game

    async def update_game(self, db: AsyncSession, game_id: str, data: Dict[str, Any]) -> GameCategory:
        game = await self.get_game(db, game_id)
        for field, value in data.items():
            setattr(game, field, value)
        await db.commit()
        return game

    async def delete_game(self, db: AsyncSession, game_id: str):
        game = await self.get_game(db, game_id)
        await db.delete(game)
        await db.commit()


games_service = GamesService()
