import unittest

from starlette.websockets import WebSocketDisconnect

from backend.tests.support import ApiTestCase


class TestLiveFeeds(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.sign_up_admin()
        self.player = self.sign_up("Shadow")
        self.tournament_id = self.create_tournament(self.admin)

    def test_tournament_feed_pushes_updates(self):
        with self.client.websocket_connect(f"/ws/tournaments/{self.tournament_id}") as ws:
            snapshot = ws.receive_json()
            self.assertEqual(snapshot["type"], "TOURNAMENT_UPDATE")
            self.assertEqual(snapshot["tournament"]["teams_count"], 0)

            self.join(self.tournament_id, self.player)

            update = ws.receive_json()
            self.assertEqual(update["type"], "TOURNAMENT_UPDATE")
            self.assertEqual(update["tournament"]["teams_count"], 1)
            self.assertEqual(update["tournament"]["participants"][0]["name"], "Team Shadow")

    def test_unknown_tournament_closes(self):
        with self.assertRaises(WebSocketDisconnect) as ctx:
            with self.client.websocket_connect("/ws/tournaments/nope") as ws:
                ws.receive_json()
        self.assertEqual(ctx.exception.code, 4004)

    def test_list_feed(self):
        with self.client.websocket_connect("/ws/tournaments") as ws:
            snapshot = ws.receive_json()
            self.assertEqual([t["name"] for t in snapshot["tournaments"]], ["Weekend Cup"])

            self.client.delete(f"/tournaments/{self.tournament_id}", headers=self.admin.headers)
            self.assertEqual(ws.receive_json(), {"type": "TOURNAMENTS_CHANGED", "id": self.tournament_id})

    def test_notifications_feed(self):
        token = self.player.headers["Authorization"].split()[1]
        with self.client.websocket_connect(f"/ws/notifications?token={token}") as ws:
            self.assertEqual(ws.receive_json(), {"type": "NOTIFICATIONS", "notifications": []})

            self.client.post("/teams/", json={"name": "Admins"}, headers=self.admin.headers)
            self.client.post("/teams/invite", json={"invitee_gamer_id": self.player.gamer_id}, headers=self.admin.headers)

            pushed = ws.receive_json()
            self.assertEqual(pushed["type"], "NOTIFICATION")
            self.assertEqual(pushed["notification"]["type"], "team_invite")

    def test_notifications_feed_needs_valid_token(self):
        with self.assertRaises(WebSocketDisconnect) as ctx:
            with self.client.websocket_connect("/ws/notifications?token=garbage") as ws:
                ws.receive_json()
        self.assertEqual(ctx.exception.code, 4401)


if __name__ == "__main__":
    unittest.main()
