import unittest

from backend.tests.support import ApiTestCase

FREE_FIRE = {
    "name": "Free Fire",
    "categories": "Battle Royale",
    "image": "https://example.com/games/free-fire.png",
    "data_ai_hint": "battle royale",
    "description": "Fifty players drop onto an island and fight to be the last squad standing.",
}

BANNER = {
    "game": "Free Fire",
    "name": "Winter Clash",
    "date": "Dec 20 - Dec 22",
    "image": "https://example.com/banners/winter.png",
    "data_ai_hint": "winter esports",
}


class TestGames(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.sign_up_admin()

    def test_crud(self):
        game_id = self.client.post("/games/", json=FREE_FIRE, headers=self.admin.headers).json()["id"]
        self.client.post(
            "/games/", json={**FREE_FIRE, "name": "Call of Duty", "description": ""}, headers=self.admin.headers
        )

        self.assertEqual([g["name"] for g in self.client.get("/games/").json()], ["Call of Duty", "Free Fire"])

        self.client.patch(f"/games/{game_id}", json={"categories": "Battle Royale, Shooter"}, headers=self.admin.headers)
        self.assertEqual(self.client.get(f"/games/{game_id}").json()["categories"], "Battle Royale, Shooter")

        self.assertEqual(self.client.delete(f"/games/{game_id}", headers=self.admin.headers).json(), {"success": True})
        self.assertEqual(self.client.get(f"/games/{game_id}").status_code, 404)

    def test_short_description_rejected(self):
        response = self.client.post("/games/", json={**FREE_FIRE, "description": "Too short"}, headers=self.admin.headers)
        self.assertEqual(response.status_code, 422)

    def test_writes_are_admin_only(self):
        player = self.sign_up("Shadow")
        self.assertEqual(self.client.post("/games/", json=FREE_FIRE, headers=player.headers).status_code, 403)

    def test_unknown_game(self):
        response = self.client.patch("/games/nope", json={"name": "Renamed"}, headers=self.admin.headers)
        self.assertEqual(response.json(), {"success": False, "error": "Game not found."})


class TestBanners(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.sign_up_admin()

    def test_newest_first(self):
        self.client.post("/banners/", json=BANNER, headers=self.admin.headers)
        self.client.post("/banners/", json={**BANNER, "name": "Spring Series"}, headers=self.admin.headers)
        self.assertEqual([b["name"] for b in self.client.get("/banners/").json()], ["Spring Series", "Winter Clash"])

    def test_update_and_delete(self):
        banner_id = self.client.post("/banners/", json=BANNER, headers=self.admin.headers).json()["id"]
        self.client.patch(f"/banners/{banner_id}", json={"date": "Jan 5 - Jan 7"}, headers=self.admin.headers)
        self.assertEqual(self.client.get("/banners/").json()[0]["date"], "Jan 5 - Jan 7")

        self.client.delete(f"/banners/{banner_id}", headers=self.admin.headers)
        self.assertEqual(self.client.get("/banners/").json(), [])

        again = self.client.delete(f"/banners/{banner_id}", headers=self.admin.headers)
        self.assertEqual(again.json()["error"], "Banner not found.")


class TestAdminDashboard(ApiTestCase):
    def test_counts(self):
        admin = self.sign_up_admin()
        self.sign_up("Shadow")
        self.create_tournament(admin)
        live_id = self.create_tournament(admin, name="Night Cup")
        self.client.patch(f"/tournaments/{live_id}", json={"status": "live"}, headers=admin.headers)

        counts = self.client.get("/admin/dashboard", headers=admin.headers).json()
        self.assertEqual(counts["users"], 2)
        self.assertEqual(counts["tournaments"], 2)
        self.assertEqual(counts["live_tournaments"], 1)
        self.assertEqual(counts["pending_withdrawals"], 0)

    def test_available_models(self):
        models = self.client.get("/models").json()
        self.assertTrue(models)
        self.assertTrue(all({"id", "provider", "label"} <= set(m) for m in models))


if __name__ == "__main__":
    unittest.main()
