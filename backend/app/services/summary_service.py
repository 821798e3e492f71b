import logging
from typing import Any, Dict, List, Optional

from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field

from backend.app.core import config
from backend.app.core.errors import GatewayError
from backend.app.engine import bracket as bracket_engine
from backend.app.engine.ai_factory import get_llm
from backend.app.models.enums import MatchStatus

logger = logging.getLogger(__name__)


class TournamentSummary(BaseModel):
    summary: str = Field(
        description="A concise summary of the tournament events, highlighting key moments like match wins, upsets, and schedule changes."
    )


SYSTEM_PROMPT = """You are an AI assistant specialized in summarizing esports tournaments.

Given the tournament name and recent events, generate a concise summary that highlights key moments such as match wins, upsets, and schedule changes. Focus on delivering essential information to users who are either participating in or closely following the tournament."""

USER_TEMPLATE = """Tournament Name: {tournament_name}
Recent Events:
{events}
{participation_note}"""

PARTICIPATION_NOTE = "Include a special note regarding the user's participation and upcoming matches, if applicable."

prompt = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("user", USER_TEMPLATE),
])


def tournament_events(bracket: List[Dict[str, Any]]) -> List[str]:
    """One line per completed match, in bracket order."""
    events = []
    for rnd in bracket or []:
        for match in rnd["matches"]:
            if match.get("status") != MatchStatus.COMPLETED:
                continue
            winner_index = bracket_engine.match_winner_index(match)
            winner = match["teams"][winner_index]
            if not winner:
                continue
            loser = match["teams"][1 - winner_index]
            if loser:
                score = f"{max(match['scores'])}-{min(match['scores'])}"
                events.append(f"{rnd['name']}: {winner['name']} beat {loser['name']} {score}.")
            else:
                events.append(f"{rnd['name']}: {winner['name']} advanced with a bye.")
    return events


class SummaryService:
    def __init__(self, model_name: Optional[str] = None):
        self.model_name = model_name or config.SUMMARY_MODEL
        self._chain = None

    @property
    def chain(self):
        # Built lazily so the app starts without provider credentials
        if self._chain is None:
            llm = get_llm(self.model_name)
            self._chain = prompt | llm.with_structured_output(TournamentSummary)
        return self._chain

    @chain.setter
    def chain(self, value):
        self._chain = value

    async def summarize_tournament(self, tournament_name: str, events: List[str], user_is_participating: bool = False) -> str:
        if not events:
            return f"No matches have been completed in {tournament_name} yet."

        try:
            result = await self.chain.ainvoke({
                "tournament_name": tournament_name,
                "events": "\n".join(f"- {e}" for e in events),
                "participation_note": PARTICIPATION_NOTE if user_is_participating else "",
            })
        except Exception as e:
            logger.error("Summary model %s failed: %s", self.model_name, e)
            raise GatewayError("Could not generate a tournament summary right now.")

        if not result or not getattr(result, "summary", None):
            raise GatewayError("Summary model returned an empty answer.")
        return result.summary


summary_service = SummaryService()
