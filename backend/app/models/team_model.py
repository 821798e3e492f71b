from sqlalchemy import Column, String
from backend.app.core.database import Base, JSONType

class UserTeam(Base):
    __tablename__ = "teams"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    avatar = Column(String)
    data_ai_hint = Column(String, default="team logo")
    leader_id = Column(String, index=True)

    # [{uid?, name, gamer_id, avatar?, role}]. Placeholder members have no uid.
    members = Column(JSONType, default=list)
    member_gamer_ids = Column(JSONType, default=list)
