from sqlalchemy import Column, String, Boolean, DateTime
from backend.app.core.database import Base, JSONType, utcnow

class AppNotification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, index=True)
    type = Column(String, default="general") # general, team_invite, invite_response
    title = Column(String)
    description = Column(String)
    link = Column(String, nullable=True)
    read = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    # Team invite bookkeeping
    status = Column(String, nullable=True) # pending, accepted, rejected
    sender = Column(JSONType, nullable=True) # {uid, name}
    team = Column(JSONType, nullable=True) # {id, name}
    response = Column(String, nullable=True)
