from sqlalchemy import Column, Integer, String, Float, Boolean, Text, DateTime, ForeignKey

from backend.app.core.database import Base, JSONType, utcnow

class Tournament(Base):
    __tablename__ = "tournaments"

    id = Column(String, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    name = Column(String, nullable=False)
    game = Column(String, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(String, default="upcoming", index=True) # upcoming, live, completed

    teams_count = Column(Integer, default=0)
    max_teams = Column(Integer, nullable=False)
    entry_fee = Column(Float, default=0.0)
    prize_pool = Column(String, default="0")
    per_kill_prize = Column(Float, nullable=True)
    rules = Column(Text, default="")

    # Format is MODE_TEAMTYPE, e.g. "BR_SQUAD"
    format = Column(String, default="BR_SQUAD")
    map = Column(String, default="TBD")
    version = Column(String, default="Mobile")
    image = Column(String, nullable=True)
    data_ai_hint = Column(String, nullable=True)

    # Embedded documents, see engine/bracket.py for the shapes
    participants = Column(JSONType, default=list)
    bracket = Column(JSONType, default=list)

    point_system_enabled = Column(Boolean, default=False)
    point_system = Column(JSONType, default=dict)


class MatchResult(Base):
    """A team's self-reported result for one bracket match, awaiting review."""
    __tablename__ = "match_results"

    id = Column(String, primary_key=True, index=True)
    tournament_id = Column(String, ForeignKey("tournaments.id"), index=True)
    tournament_name = Column(String)
    round_name = Column(String)
    match_id = Column(String, index=True)
    team_id = Column(String)
    team_name = Column(String)
    user_id = Column(String, index=True)

    kills = Column(Integer, default=0)
    position = Column(Integer, default=1)
    points = Column(Float, nullable=True)
    screenshot_url = Column(String)

    status = Column(String, default="pending", index=True)
    submitted_at = Column(DateTime(timezone=True), default=utcnow)


class RegistrationLog(Base):
    __tablename__ = "registration_logs"

    id = Column(String, primary_key=True, index=True)
    tournament_id = Column(String, index=True)
    tournament_name = Column(String)
    game = Column(String)
    team_name = Column(String)
    team_type = Column(String)
    players = Column(JSONType, default=list)
    status = Column(String, default="approved")
    registered_at = Column(DateTime(timezone=True), default=utcnow)
