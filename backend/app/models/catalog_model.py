from sqlalchemy import Column, String, Text, DateTime
from backend.app.core.database import Base, utcnow

class GameCategory(Base):
    __tablename__ = "games"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    categories = Column(String, default="")
    image = Column(String)
    data_ai_hint = Column(String, nullable=True)
    description = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow)

class FeaturedBanner(Base):
    __tablename__ = "featured_banners"

    id = Column(String, primary_key=True, index=True)
    game = Column(String)
    name = Column(String)
    date = Column(String) # Display string, e.g. "10.11.2024 • 18:00"
    image = Column(String)
    data_ai_hint = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
