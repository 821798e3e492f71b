import unittest

from backend.tests.support import ApiTestCase
from backend.app.engine import bracket as bracket_engine
from backend.app.engine.ai_factory import resolve_model
from backend.app.services.summary_service import TournamentSummary, summary_service, tournament_events


def team(name):
    return {"id": name.lower(), "name": name, "members": []}


class StubChain:
    """Stands in for prompt | llm and records what it was asked."""

    def __init__(self, summary="A thrilling night of upsets.", error=None):
        self.summary = summary
        self.error = error
        self.calls = []

    async def ainvoke(self, inputs):
        self.calls.append(inputs)
        if self.error:
            raise self.error
        return TournamentSummary(summary=self.summary)


class TestTournamentEvents(unittest.TestCase):
    def test_completed_matches_and_byes(self):
        bracket = bracket_engine.generate_bracket_structure(4, "t1")
        for name in ("Owls", "Vipers", "Blaze"):
            bracket_engine.place_team(bracket, team(name))
        bracket_engine.process_byes(bracket)
        bracket_engine.complete_match(bracket, 0, 0, [1, 3])

        self.assertEqual(
            tournament_events(bracket),
            ["Semi-finals: Vipers beat Owls 3-1.", "Semi-finals: Blaze advanced with a bye."],
        )

    def test_no_bracket(self):
        self.assertEqual(tournament_events([]), [])
        self.assertEqual(tournament_events(None), [])


class TestModelResolution(unittest.TestCase):
    def test_catalogue_entry_with_api_name_override(self):
        entry = resolve_model("claude-haiku-4.5")
        self.assertEqual((entry.provider, entry.model_id), ("anthropic", "claude-haiku-4-5-20251001"))

    def test_unlisted_model_routed_by_name(self):
        self.assertEqual(resolve_model("gpt-4.1").provider, "openai")
        self.assertEqual(resolve_model("gemini-3-pro").provider, "google")

    def test_unknown_model(self):
        with self.assertRaises(ValueError):
            resolve_model("llama-3")


class TestSummaryApi(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.stub = StubChain()
        summary_service.chain = self.stub
        admin = self.sign_up_admin()
        self.tournament_id = self.create_tournament(admin)
        self.player = self.sign_up("Shadow")

    def tearDown(self):
        summary_service.chain = None
        super().tearDown()

    def summarize(self, **payload):
        return self.client.post(
            f"/tournaments/{self.tournament_id}/summary", json=payload, headers=self.player.headers
        )

    def test_summary_requires_sign_in(self):
        response = self.client.post(f"/tournaments/{self.tournament_id}/summary", json={"events": ["Vipers won."]})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.stub.calls, [])

    def test_nothing_played_yet(self):
        body = self.summarize().json()
        self.assertEqual(body["summary"], "No matches have been completed in Weekend Cup yet.")
        self.assertEqual(self.stub.calls, [])

    def test_summary_from_given_events(self):
        body = self.summarize(events=["Vipers beat Owls 3-1."], user_is_participating=True).json()

        self.assertEqual(body["summary"], "A thrilling night of upsets.")
        inputs = self.stub.calls[0]
        self.assertEqual(inputs["tournament_name"], "Weekend Cup")
        self.assertEqual(inputs["events"], "- Vipers beat Owls 3-1.")
        self.assertTrue(inputs["participation_note"])

    def test_model_failure(self):
        self.stub.error = RuntimeError("quota exceeded")
        response = self.summarize(events=["Vipers beat Owls 3-1."])
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["error"], "Could not generate a tournament summary right now.")


if __name__ == "__main__":
    unittest.main()
