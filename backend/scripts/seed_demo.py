#!/usr/bin/env python3
"""
Load demo data: games, banners, an admin, a few players, withdraw methods
and two tournaments (one open for registration, one live).

Usage:
    python backend/scripts/seed_demo.py

Every demo account uses the password "password123". Run against an empty
database; existing rows with the same e-mail are left untouched.
"""

import asyncio
import os
import sys
from datetime import timedelta

# Add parent directories to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from backend.app.core.database import AsyncSessionLocal, init_models, utcnow
from backend.app.core.security import hash_password
from backend.app.models.enums import TournamentStatus, UserRole
from backend.app.services.games_service import games_service
from backend.app.services.banners_service import banners_service
from backend.app.services.tournament_service import tournament_service
from backend.app.services.users_service import users_service
from backend.app.services.wallet_service import wallet_service

DEMO_PASSWORD = "password123"
RULES = (
    "Standard competitive rules apply. No emulators, no teaming with other squads, "
    "and every player must be present in the lobby ten minutes before start."
)

GAMES = [
    {"name": "Free Fire", "categories": "Battle Royale, Shooter", "image": "https://placehold.co/400x500.png",
     "data_ai_hint": "battle royale", "description": "Fast ten-minute survival matches on a shrinking island."},
    {"name": "PUBG Mobile", "categories": "Battle Royale", "image": "https://placehold.co/400x500.png",
     "data_ai_hint": "soldier shooting", "description": "One hundred players drop in, the last squad standing wins."},
    {"name": "Valorant", "categories": "Tactical Shooter", "image": "https://placehold.co/400x500.png",
     "data_ai_hint": "tactical shooter", "description": ""},
]

BANNERS = [
    {"game": "Free Fire", "name": "Free Fire Weekly Cup", "date": "10.11.2024 • 18:00",
     "image": "https://placehold.co/800x300.png", "data_ai_hint": "esports arena"},
]

PLAYERS = [
    ("Admin", "admin@example.com", UserRole.ADMIN),
    ("Shadow", "shadow@example.com", UserRole.PLAYER),
    ("Viper", "viper@example.com", UserRole.PLAYER),
    ("Blaze", "blaze@example.com", UserRole.PLAYER),
    ("Nova", "nova@example.com", UserRole.PLAYER),
]

METHODS = [
    {"name": "bKash", "image": "https://placehold.co/64x64.png", "receiver_info": "Personal: 01700000000",
     "fee_percentage": 1.5, "min_amount": 50, "max_amount": 25000, "status": "active"},
    {"name": "Nagad", "image": "https://placehold.co/64x64.png", "receiver_info": "Personal: 01800000000",
     "fee_percentage": 1.0, "min_amount": 50, "max_amount": 20000, "status": "active"},
]


async def seed():
    await init_models()

    async with AsyncSessionLocal() as db:
        for game in GAMES:
            await games_service.add_game(db, game)
        for banner in BANNERS:
            await banners_service.add_banner(db, banner)
        for method in METHODS:
            await wallet_service.add_withdraw_method(db, method)
        print(f"✓ {len(GAMES)} games, {len(BANNERS)} banners, {len(METHODS)} withdraw methods")

        players = []
        for name, email, role in PLAYERS:
            if await users_service.get_user_by_email(db, email):
                print(f"  skipping existing {email}")
                continue
            profile = await users_service.create_user_profile(
                db, name=name, email=email, password_hash=hash_password(DEMO_PASSWORD), role=role
            )
            profile.balance = 500.0
            await db.commit()
            players.append(profile)
        print(f"✓ {len(players)} accounts")

        open_cup = await tournament_service.add_tournament(db, {
            "name": "Free Fire Weekly Cup",
            "game": "Free Fire",
            "start_date": utcnow() + timedelta(days=3),
            "max_teams": 8,
            "entry_fee": 50,
            "prize_pool": "5000",
            "rules": RULES,
            "format": "BR_SOLO",
        })

        live_cup = await tournament_service.add_tournament(db, {
            "name": "PUBG Mobile Showdown",
            "game": "PUBG Mobile",
            "start_date": utcnow() - timedelta(hours=1),
            "max_teams": 4,
            "entry_fee": 0,
            "prize_pool": "2000",
            "rules": RULES,
            "format": "BR_SOLO",
            "point_system_enabled": True,
        })
        for player in players:
            if player.role == UserRole.PLAYER:
                await tournament_service.join_tournament(db, live_cup.id, {
                    "name": f"Team {player.name}",
                    "members": [{"name": player.name, "gamer_id": player.gamer_id, "uid": player.id}],
                }, player.id)
        await tournament_service.update_tournament(db, live_cup.id, {"status": TournamentStatus.LIVE})
        print(f"✓ tournaments {open_cup.id} (upcoming) and {live_cup.id} (live)")


if __name__ == "__main__":
    asyncio.run(seed())
