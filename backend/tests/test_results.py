import unittest

from backend.tests.support import ApiTestCase

SCREENSHOT = "https://example.com/shots/result.png"


class TestMatchResults(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.sign_up_admin()
        self.players = [self.sign_up(name) for name in ("Shadow", "Viper", "Blaze", "Nova")]
        self.tournament_id = self.create_tournament(self.admin)
        for player in self.players:
            self.join(self.tournament_id, player)
        self.client.patch(f"/tournaments/{self.tournament_id}", json={"status": "live"}, headers=self.admin.headers)

        participants = self.get_tournament(self.tournament_id)["participants"]
        self.team_ids = [p["id"] for p in participants]
        self.semi_1 = {"round_name": "Semi-finals", "match_id": f"{self.tournament_id}_Semi-finals_m1"}

    def submit(self, player, team_id, kills=3, position=1):
        return self.client.post(
            f"/results/{self.tournament_id}",
            json={**self.semi_1, "team_id": team_id, "kills": kills, "position": position, "screenshot_url": SCREENSHOT},
            headers=player.headers,
        )

    def pending(self):
        return self.client.get("/results/pending", headers=self.admin.headers).json()

    def test_request_results_notifies_both_teams(self):
        response = self.client.post(
            f"/tournaments/{self.tournament_id}/request-results", json=self.semi_1, headers=self.admin.headers
        )
        self.assertEqual(response.json(), {"success": True})

        match = self.get_tournament(self.tournament_id)["bracket"][0]["matches"][0]
        self.assertEqual(
            match["result_submission_status"],
            {self.team_ids[0]: "pending", self.team_ids[1]: "pending"},
        )

        for player in self.players[:2]:
            notes = self.client.get("/notifications/", headers=player.headers).json()
            self.assertEqual(len(notes), 1)
            self.assertEqual(notes[0]["title"], "Match Result Submission")
            self.assertIn("Semi-finals #1", notes[0]["description"])
        self.assertEqual(self.client.get("/notifications/", headers=self.players[2].headers).json(), [])

    def test_submit_marks_team_submitted(self):
        response = self.submit(self.players[0], self.team_ids[0], kills=4, position=2)
        body = response.json()
        self.assertTrue(body["success"])
        # Point system is off by default
        self.assertIsNone(body["points"])

        match = self.get_tournament(self.tournament_id)["bracket"][0]["matches"][0]
        self.assertEqual(match["result_submission_status"][self.team_ids[0]], "submitted")

        pending = self.pending()
        self.assertEqual(len(pending), 1)
        self.assertEqual(pending[0]["team_name"], "Team Shadow")
        self.assertEqual(pending[0]["screenshot_url"], SCREENSHOT)

    def test_points_computed_when_enabled(self):
        self.client.patch(
            f"/tournaments/{self.tournament_id}",
            json={"point_system_enabled": True, "point_system": {
                "per_kill_points": 2, "placement_points": [{"place": 1, "points": 15}]
            }},
            headers=self.admin.headers,
        )
        body = self.submit(self.players[0], self.team_ids[0], kills=5, position=1).json()
        self.assertEqual(body["points"], 25)

    def test_duplicate_submission_rejected(self):
        self.submit(self.players[0], self.team_ids[0])
        response = self.submit(self.players[0], self.team_ids[0])
        self.assertEqual(response.status_code, 409)
        self.assertEqual(len(self.pending()), 1)

    def test_only_members_may_submit(self):
        response = self.submit(self.players[1], self.team_ids[0])
        self.assertEqual(response.status_code, 403)

    def test_team_outside_match(self):
        response = self.submit(self.players[2], self.team_ids[2])
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "Team is not part of this match.")

    def test_approve_sets_scores_and_advances(self):
        self.submit(self.players[1], self.team_ids[1])
        result_id = self.pending()[0]["id"]

        response = self.client.post(
            f"/results/{result_id}/approve", json={"team1_score": 1, "team2_score": 3}, headers=self.admin.headers
        )
        self.assertEqual(response.json(), {"success": True})

        bracket = self.get_tournament(self.tournament_id)["bracket"]
        self.assertEqual(bracket[0]["matches"][0]["scores"], [1, 3])
        self.assertEqual(bracket[0]["matches"][0]["status"], "completed")
        self.assertEqual(bracket[1]["matches"][0]["teams"][0]["id"], self.team_ids[1])
        self.assertEqual(self.pending(), [])

    def test_tied_scores_rejected(self):
        self.submit(self.players[0], self.team_ids[0])
        result_id = self.pending()[0]["id"]

        response = self.client.post(
            f"/results/{result_id}/approve", json={"team1_score": 2, "team2_score": 2}, headers=self.admin.headers
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(len(self.pending()), 1)

    def test_reject_result(self):
        self.submit(self.players[0], self.team_ids[0])
        result_id = self.pending()[0]["id"]

        response = self.client.post(f"/results/{result_id}/reject", headers=self.admin.headers)
        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(self.pending(), [])

        again = self.client.post(f"/results/{result_id}/reject", headers=self.admin.headers)
        self.assertEqual(again.status_code, 409)

    def test_review_is_admin_only(self):
        self.assertEqual(self.client.get("/results/pending", headers=self.players[0].headers).status_code, 403)


if __name__ == "__main__":
    unittest.main()
