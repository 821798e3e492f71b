"""
Shared fixtures for the API tests.

Importing this module points the app at an in-memory SQLite database and a
throwaway upload directory, so it must be imported before backend.app.
"""

import os
import tempfile
import unittest
from types import SimpleNamespace

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="esports-hub-uploads-")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["RUPANTORPAY_ACCESS_TOKEN"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from backend.app.core.database import AsyncSessionLocal, engine  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.models.enums import UserRole  # noqa: E402
from backend.app.models.user_model import PlayerProfile  # noqa: E402

PASSWORD = "secret123"
RULES = "Be in the lobby ten minutes early. No emulators. Screenshots are required for every result."


class ApiTestCase(unittest.TestCase):
    """One fresh database per test: the lifespan creates the tables, tearDown drops the connection."""

    def setUp(self):
        self.client = TestClient(app)
        self.client.__enter__()

    def tearDown(self):
        # Disposing the static pool closes the only connection, which discards the in-memory database
        self.client.portal.call(engine.dispose)
        self.client.__exit__(None, None, None)

    # --- Helpers ---

    def db_call(self, fn, *args):
        """Run fn(db, *args) on the app's event loop with a fresh session."""
        async def runner():
            async with AsyncSessionLocal() as db:
                return await fn(db, *args)
        return self.client.portal.call(runner)

    def get_profile(self, user_id: str) -> PlayerProfile:
        async def load(db):
            return await db.get(PlayerProfile, user_id)
        return self.db_call(load)

    def sign_up(self, name: str, email: str = None, balance: float = 0.0, role: str = UserRole.PLAYER):
        email = email or f"{name.lower().replace(' ', '.')}@example.com"
        response = self.client.post(
            "/auth/sign-up", json={"email": email, "password": PASSWORD, "full_name": name}
        )
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        user_id = body["user"]["id"]

        if balance or role != UserRole.PLAYER:
            async def promote(db):
                user = await db.get(PlayerProfile, user_id)
                user.balance = balance
                user.role = role
                await db.commit()
            self.db_call(promote)

        return SimpleNamespace(
            id=user_id,
            name=name,
            email=email,
            gamer_id=body["user"]["gamer_id"],
            headers={"Authorization": f"Bearer {body['access_token']}"},
        )

    def sign_up_admin(self):
        return self.sign_up("Admin", role=UserRole.ADMIN)

    def tournament_payload(self, **overrides) -> dict:
        payload = {
            "name": "Weekend Cup",
            "game": "Free Fire",
            "start_date": "2030-01-01T18:00:00Z",
            "mode": "BR",
            "team_type": "SOLO",
            "max_teams": 4,
            "entry_fee": 0,
            "prize_pool": "1000",
            "rules": RULES,
        }
        payload.update(overrides)
        return payload

    def create_tournament(self, admin, **overrides) -> str:
        response = self.client.post("/tournaments/", json=self.tournament_payload(**overrides), headers=admin.headers)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["id"]

    def solo_team(self, user, name: str = None) -> dict:
        return {
            "name": name or f"Team {user.name}",
            "members": [{"name": user.name, "gamer_id": user.gamer_id, "uid": user.id}],
        }

    def join(self, tournament_id: str, user, team: dict = None):
        return self.client.post(
            f"/tournaments/{tournament_id}/join",
            json={"team": team or self.solo_team(user)},
            headers=user.headers,
        )

    def get_tournament(self, tournament_id: str) -> dict:
        response = self.client.get(f"/tournaments/{tournament_id}")
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()
