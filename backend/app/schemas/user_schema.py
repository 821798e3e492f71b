from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import datetime

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

class SignUpRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=2, max_length=50)

class SignInRequest(BaseModel):
    email: str
    password: str

class PasswordResetRequest(BaseModel):
    email: str

class PasswordResetConfirm(BaseModel):
    token: str
    password: str = Field(min_length=6)

class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=50)
    game_name: Optional[str] = Field(default=None, max_length=50)
    gamer_id: Optional[str] = Field(default=None, min_length=3, max_length=30)
    avatar: Optional[str] = None
    banner: Optional[str] = None

class BalanceAdjustment(BaseModel):
    amount: float

class StatusUpdate(BaseModel):
    status: Literal["active", "banned"]

class PlayerProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    banner: Optional[str] = None
    game_name: Optional[str] = None
    gamer_id: str
    joined: datetime
    role: str
    status: str
    winrate: float
    games: int
    wins: int
    balance: float
    pending_balance: float
    team_id: Optional[str] = None

class PublicPlayerResponse(BaseModel):
    """Leaderboard view: no e-mail, no wallet."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    avatar: Optional[str] = None
    game_name: Optional[str] = None
    gamer_id: str
    winrate: float
    games: int
    wins: int

class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: PlayerProfileResponse
