from sqlalchemy import Column, Integer, String, Float, DateTime
from backend.app.core.database import Base, utcnow

class PlayerProfile(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=True)

    avatar = Column(String, default="https://placehold.co/96x96.png")
    banner = Column(String, default="https://placehold.co/800x300.png")
    game_name = Column(String, default="Not Set")
    gamer_id = Column(String, unique=True, index=True, nullable=False)

    joined = Column(DateTime(timezone=True), default=utcnow)
    role = Column(String, default="Player") # Player, Admin
    status = Column(String, default="active") # active, banned

    # --- Stats ---
    winrate = Column(Float, default=0.0)
    games = Column(Integer, default=0)
    wins = Column(Integer, default=0)

    # --- Wallet ---
    balance = Column(Float, default=0.0)
    pending_balance = Column(Float, default=0.0)

    team_id = Column(String, nullable=True)
