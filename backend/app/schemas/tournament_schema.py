from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from typing import List, Optional, Dict, Literal
from datetime import datetime

# --- Embedded documents ---

class TeamMemberEntry(BaseModel):
    model_config = ConfigDict(extra='ignore')

    name: str = Field(min_length=1)
    gamer_id: str = Field(min_length=3, max_length=30)
    uid: Optional[str] = None

class TeamEntry(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: Optional[str] = None
    name: str = Field(min_length=2)
    avatar: Optional[str] = None
    data_ai_hint: Optional[str] = None
    members: List[TeamMemberEntry] = Field(min_length=1)

class MatchOut(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str
    name: str
    teams: List[Optional[TeamEntry]]
    scores: List[int]
    status: str
    result_submission_status: Dict[str, str] = {}
    room_id: str = ""
    room_pass: str = ""

class RoundOut(BaseModel):
    name: str
    matches: List[MatchOut]

class PlacementPointIn(BaseModel):
    place: int = Field(ge=1)
    points: float = Field(ge=0)

class PointSystemIn(BaseModel):
    per_kill_points: float = Field(ge=0)
    placement_points: List[PlacementPointIn] = []

# --- Requests ---

class TournamentCreate(BaseModel):
    name: str = Field(min_length=5)
    game: str = Field(min_length=1)
    image: Optional[str] = None
    data_ai_hint: Optional[str] = None
    start_date: datetime
    mode: Literal["BR", "CS", "LONE WOLF"]
    team_type: Literal["SOLO", "DUO", "SQUAD"]
    max_teams: int = Field(ge=2, le=64)
    entry_fee: float = Field(default=0, ge=0)
    prize_pool: str = Field(min_length=1)
    rules: str = Field(min_length=50)
    map: Optional[str] = None
    per_kill_prize: Optional[float] = Field(default=None, ge=0)
    version: Optional[str] = None
    point_system_enabled: bool = False
    point_system: Optional[PointSystemIn] = None

    @property
    def format(self) -> str:
        return f"{self.mode}_{self.team_type}"

class TournamentUpdate(BaseModel):
    """Partial update; only fields that are sent are applied."""
    name: Optional[str] = Field(default=None, min_length=5)
    game: Optional[str] = Field(default=None, min_length=1)
    image: Optional[str] = None
    data_ai_hint: Optional[str] = None
    start_date: Optional[datetime] = None
    status: Optional[Literal["upcoming", "live", "completed"]] = None
    max_teams: Optional[int] = Field(default=None, ge=2, le=64)
    entry_fee: Optional[float] = Field(default=None, ge=0)
    prize_pool: Optional[str] = Field(default=None, min_length=1)
    rules: Optional[str] = Field(default=None, min_length=50)
    map: Optional[str] = None
    per_kill_prize: Optional[float] = Field(default=None, ge=0)
    version: Optional[str] = None
    point_system_enabled: Optional[bool] = None
    point_system: Optional[PointSystemIn] = None

class JoinRequest(BaseModel):
    team: TeamEntry

class MatchRef(BaseModel):
    round_name: str
    match_id: str

class SetWinnerRequest(MatchRef):
    winner_team_id: str

class MatchDetailsUpdate(BaseModel):
    room_id: str = ""
    room_pass: str = ""

class ResultSubmission(MatchRef):
    team_id: str
    kills: int = Field(ge=0)
    position: int = Field(ge=1)
    screenshot_url: HttpUrl

class ResultApproval(BaseModel):
    team1_score: int = Field(ge=0)
    team2_score: int = Field(ge=0)

class SummaryRequest(BaseModel):
    events: Optional[List[str]] = None
    user_is_participating: bool = False

# --- Responses ---

class TournamentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    game: str
    start_date: datetime
    status: str
    teams_count: int
    max_teams: int
    entry_fee: float
    prize_pool: str
    rules: str
    format: str
    image: Optional[str] = None
    data_ai_hint: Optional[str] = None
    map: Optional[str] = None
    version: Optional[str] = None
    per_kill_prize: Optional[float] = None
    created_at: Optional[datetime] = None
    participants: List[TeamEntry] = []
    bracket: List[RoundOut] = []
    point_system_enabled: bool = False
    point_system: Optional[Dict] = None

class MatchResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tournament_id: str
    tournament_name: Optional[str] = None
    round_name: str
    match_id: str
    team_id: str
    team_name: Optional[str] = None
    user_id: str
    kills: int
    position: int
    points: Optional[float] = None
    screenshot_url: str
    status: str
    submitted_at: datetime

class RegistrationLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tournament_id: str
    tournament_name: str
    game: str
    team_name: str
    team_type: str
    players: List[Dict]
    status: str
    registered_at: datetime

class SummaryResponse(BaseModel):
    summary: str
