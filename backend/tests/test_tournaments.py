import unittest

from backend.tests.support import ApiTestCase


class TestTournamentAdmin(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.sign_up_admin()

    def test_create_tournament_applies_defaults(self):
        tournament_id = self.create_tournament(self.admin, max_teams=6)
        tournament = self.get_tournament(tournament_id)

        self.assertEqual(tournament["status"], "upcoming")
        self.assertEqual(tournament["format"], "BR_SOLO")
        self.assertEqual(tournament["teams_count"], 0)
        self.assertEqual(tournament["map"], "TBD")
        self.assertEqual(tournament["version"], "Mobile")
        self.assertEqual(tournament["participants"], [])
        self.assertEqual([r["name"] for r in tournament["bracket"]], ["Quarter-finals", "Semi-finals", "Finals"])
        self.assertEqual(tournament["point_system"]["per_kill_points"], 1)

    def test_create_requires_admin(self):
        player = self.sign_up("Shadow")
        response = self.client.post("/tournaments/", json=self.tournament_payload(), headers=player.headers)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"success": False, "error": "Admin access required."})

    def test_create_validates_fields(self):
        response = self.client.post(
            "/tournaments/",
            json={"name": "Cup", "game": "Free Fire", "start_date": "2030-01-01T00:00:00Z", "mode": "BR",
                  "team_type": "SOLO", "max_teams": 4, "prize_pool": "1", "rules": "short"},
            headers=self.admin.headers,
        )
        self.assertEqual(response.status_code, 422)

    def test_list_is_sorted_by_start_date_desc(self):
        older = self.create_tournament(self.admin, name="Older Cup", start_date="2030-01-01T00:00:00Z")
        newer = self.create_tournament(self.admin, name="Newer Cup", start_date="2031-01-01T00:00:00Z")

        ids = [t["id"] for t in self.client.get("/tournaments/").json()]
        self.assertEqual(ids, [newer, older])

    def test_get_unknown_tournament(self):
        response = self.client.get("/tournaments/missing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "Tournament not found.")

    def test_resizing_untouched_bracket_regenerates_it(self):
        tournament_id = self.create_tournament(self.admin, max_teams=4)
        response = self.client.patch(f"/tournaments/{tournament_id}", json={"max_teams": 16}, headers=self.admin.headers)
        self.assertEqual(response.json(), {"success": True})

        tournament = self.get_tournament(tournament_id)
        self.assertEqual(tournament["max_teams"], 16)
        self.assertEqual(tournament["bracket"][0]["name"], "Round of 16")

    def test_max_teams_cannot_drop_below_registered(self):
        tournament_id = self.create_tournament(self.admin, max_teams=8)
        players = [self.sign_up(f"Player {i}") for i in range(5)]
        for player in players:
            self.assertEqual(self.join(tournament_id, player).status_code, 200)

        response = self.client.patch(f"/tournaments/{tournament_id}", json={"max_teams": 4}, headers=self.admin.headers)
        self.assertEqual(response.status_code, 409)
        self.assertFalse(response.json()["success"])

    def test_max_teams_cannot_outgrow_seated_bracket(self):
        tournament_id = self.create_tournament(self.admin, max_teams=4)
        self.join(tournament_id, self.sign_up("Shadow"))

        response = self.client.patch(f"/tournaments/{tournament_id}", json={"max_teams": 8}, headers=self.admin.headers)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(self.get_tournament(tournament_id)["max_teams"], 4)

        # Every advertised slot can still be filled
        for name in ("Viper", "Blaze", "Nova"):
            self.assertEqual(self.join(tournament_id, self.sign_up(name)).status_code, 200)
        self.assertEqual(self.get_tournament(tournament_id)["teams_count"], 4)

    def test_max_teams_can_shrink_within_seated_bracket(self):
        tournament_id = self.create_tournament(self.admin, max_teams=4)
        self.join(tournament_id, self.sign_up("Shadow"))

        response = self.client.patch(f"/tournaments/{tournament_id}", json={"max_teams": 2}, headers=self.admin.headers)
        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(self.get_tournament(tournament_id)["max_teams"], 2)

        response = self.client.patch(f"/tournaments/{tournament_id}", json={"max_teams": 1}, headers=self.admin.headers)
        self.assertEqual(response.status_code, 422)

    def test_going_live_processes_byes(self):
        tournament_id = self.create_tournament(self.admin, max_teams=4)
        for name in ("Shadow", "Viper", "Blaze"):
            self.join(tournament_id, self.sign_up(name))

        self.client.patch(f"/tournaments/{tournament_id}", json={"status": "live"}, headers=self.admin.headers)

        tournament = self.get_tournament(tournament_id)
        self.assertEqual(tournament["status"], "live")
        bye = tournament["bracket"][0]["matches"][1]
        self.assertEqual(bye["status"], "completed")
        self.assertEqual(bye["scores"], [1, 0])
        self.assertEqual(tournament["bracket"][1]["matches"][0]["teams"][1]["name"], "Team Blaze")

    def test_delete_tournament(self):
        tournament_id = self.create_tournament(self.admin)
        response = self.client.delete(f"/tournaments/{tournament_id}", headers=self.admin.headers)
        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(self.client.get(f"/tournaments/{tournament_id}").status_code, 404)


class TestJoinTournament(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.sign_up_admin()
        self.player = self.sign_up("Shadow", balance=100)

    def test_join_debits_fee_and_places_team(self):
        tournament_id = self.create_tournament(self.admin, entry_fee=30)

        response = self.join(tournament_id, self.player)
        self.assertEqual(response.json(), {"success": True, "teams_count": 1})

        tournament = self.get_tournament(tournament_id)
        self.assertEqual(tournament["participants"][0]["name"], "Team Shadow")
        self.assertEqual(tournament["bracket"][0]["matches"][0]["teams"][0]["name"], "Team Shadow")
        self.assertEqual(self.get_profile(self.player.id).balance, 70)

        transactions = self.client.get("/wallet/transactions", headers=self.player.headers).json()
        self.assertEqual(len(transactions), 1)
        self.assertEqual(transactions[0]["type"], "fee")
        self.assertEqual(transactions[0]["amount"], -30)
        self.assertEqual(transactions[0]["description"], "Entry fee for Weekend Cup")

        logs = self.client.get("/admin/registrations", headers=self.admin.headers).json()
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0]["team_type"], "SOLO")
        self.assertEqual(logs[0]["players"], [{"name": "Shadow", "gamer_id": self.player.gamer_id}])

    def test_insufficient_balance(self):
        tournament_id = self.create_tournament(self.admin, entry_fee=500)

        response = self.join(tournament_id, self.player)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "Insufficient balance."})
        self.assertEqual(self.get_tournament(tournament_id)["teams_count"], 0)
        self.assertEqual(self.get_profile(self.player.id).balance, 100)

    def test_duplicate_gamer_id_rejected(self):
        tournament_id = self.create_tournament(self.admin)
        self.join(tournament_id, self.player)

        response = self.join(tournament_id, self.player, team=self.solo_team(self.player, name="Second Team"))

        self.assertEqual(response.status_code, 409)
        self.assertEqual(
            response.json()["error"],
            f"A player with Gamer ID {self.player.gamer_id} is already part of this tournament.",
        )

    def test_full_tournament(self):
        tournament_id = self.create_tournament(self.admin, max_teams=2)
        self.join(tournament_id, self.sign_up("Viper"))
        self.join(tournament_id, self.sign_up("Blaze"))

        response = self.join(tournament_id, self.player)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "Tournament is already full.")

    def test_team_size_must_match_format(self):
        tournament_id = self.create_tournament(self.admin, team_type="DUO")

        response = self.join(tournament_id, self.player)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "This tournament requires exactly 2 player(s) per team.")

    def test_duo_needs_distinct_gamer_ids(self):
        tournament_id = self.create_tournament(self.admin, team_type="DUO")
        team = {
            "name": "Twins",
            "members": [
                {"name": "One", "gamer_id": "same_id"},
                {"name": "Two", "gamer_id": "same_id"},
            ],
        }
        response = self.join(tournament_id, self.player, team=team)
        self.assertEqual(response.json()["error"], "Each player in the team must have a unique Gamer ID.")

    def test_cannot_join_live_tournament(self):
        tournament_id = self.create_tournament(self.admin)
        self.client.patch(f"/tournaments/{tournament_id}", json={"status": "live"}, headers=self.admin.headers)

        response = self.join(tournament_id, self.player)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "Registration is closed for this tournament.")

    def test_join_requires_sign_in(self):
        tournament_id = self.create_tournament(self.admin)
        response = self.client.post(f"/tournaments/{tournament_id}/join", json={"team": self.solo_team(self.player)})
        self.assertEqual(response.status_code, 401)


class TestBracketEditing(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.sign_up_admin()
        self.players = [self.sign_up(name) for name in ("Shadow", "Viper", "Blaze", "Nova")]
        self.tournament_id = self.create_tournament(self.admin)
        for player in self.players:
            self.join(self.tournament_id, player)
        self.semi_1 = {"round_name": "Semi-finals", "match_id": f"{self.tournament_id}_Semi-finals_m1"}

    def team_id(self, index):
        return self.get_tournament(self.tournament_id)["participants"][index]["id"]

    def test_set_winner_advances_to_final(self):
        winner = self.team_id(1)
        response = self.client.post(
            f"/tournaments/{self.tournament_id}/winner",
            json={**self.semi_1, "winner_team_id": winner},
            headers=self.admin.headers,
        )
        self.assertEqual(response.json(), {"success": True})

        bracket = self.get_tournament(self.tournament_id)["bracket"]
        self.assertEqual(bracket[0]["matches"][0]["scores"], [0, 1])
        self.assertEqual(bracket[0]["matches"][0]["status"], "completed")
        self.assertEqual(bracket[1]["matches"][0]["teams"][0]["id"], winner)

    def test_set_winner_unknown_team(self):
        response = self.client.post(
            f"/tournaments/{self.tournament_id}/winner",
            json={**self.semi_1, "winner_team_id": "team_nobody"},
            headers=self.admin.headers,
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "Winner team not found in the match.")

    def test_unknown_round_and_match(self):
        response = self.client.post(
            f"/tournaments/{self.tournament_id}/undo",
            json={"round_name": "Grand Finals", "match_id": "x"},
            headers=self.admin.headers,
        )
        self.assertEqual(response.json()["error"], "Round not found.")

        response = self.client.post(
            f"/tournaments/{self.tournament_id}/undo",
            json={"round_name": "Finals", "match_id": "x"},
            headers=self.admin.headers,
        )
        self.assertEqual(response.json()["error"], "Match not found.")

    def test_undo_retracts_winner(self):
        winner = self.team_id(0)
        self.client.post(
            f"/tournaments/{self.tournament_id}/winner",
            json={**self.semi_1, "winner_team_id": winner},
            headers=self.admin.headers,
        )

        response = self.client.post(f"/tournaments/{self.tournament_id}/undo", json=self.semi_1, headers=self.admin.headers)
        self.assertEqual(response.json(), {"success": True})

        bracket = self.get_tournament(self.tournament_id)["bracket"]
        self.assertEqual(bracket[0]["matches"][0]["status"], "pending")
        self.assertEqual(bracket[0]["matches"][0]["scores"], [0, 0])
        self.assertIsNone(bracket[1]["matches"][0]["teams"][0])

    def test_set_winner_needs_both_teams(self):
        response = self.client.post(
            f"/tournaments/{self.tournament_id}/winner",
            json={"round_name": "Finals", "match_id": f"{self.tournament_id}_Finals_m1", "winner_team_id": "x"},
            headers=self.admin.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Both teams must be present to set a winner.")

    def test_update_match_details(self):
        response = self.client.patch(
            f"/tournaments/{self.tournament_id}/matches/{self.semi_1['match_id']}",
            json={"room_id": "ROOM-77", "room_pass": "hunter2"},
            headers=self.admin.headers,
        )
        self.assertEqual(response.json(), {"success": True})

        match = self.get_tournament(self.tournament_id)["bracket"][0]["matches"][0]
        self.assertEqual((match["room_id"], match["room_pass"]), ("ROOM-77", "hunter2"))

    def test_update_details_of_unknown_match(self):
        response = self.client.patch(
            f"/tournaments/{self.tournament_id}/matches/nope",
            json={"room_id": "1", "room_pass": "2"},
            headers=self.admin.headers,
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "Match not found in bracket.")


if __name__ == "__main__":
    unittest.main()
