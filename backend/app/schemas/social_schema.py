from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Literal
from datetime import datetime

class TeamCreate(BaseModel):
    name: str = Field(min_length=2, max_length=50)

class TeamInvite(BaseModel):
    invitee_gamer_id: str

class InviteResponse(BaseModel):
    response: Literal["accepted", "rejected"]

class NotificationStatusUpdate(BaseModel):
    status: Literal["pending", "accepted", "rejected"]

class ManualMember(BaseModel):
    gamer_id: str = Field(min_length=3, max_length=30)
    name: str = Field(min_length=1)

class TeamMemberOut(BaseModel):
    model_config = ConfigDict(extra='ignore')

    uid: Optional[str] = None
    name: str
    gamer_id: str
    avatar: Optional[str] = None
    role: str

class UserTeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    avatar: Optional[str] = None
    data_ai_hint: Optional[str] = None
    leader_id: str
    members: List[TeamMemberOut]
    member_gamer_ids: List[str]

class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: str
    title: str
    description: str
    link: Optional[str] = None
    read: bool
    created_at: datetime
    status: Optional[str] = None
    sender: Optional[Dict] = None
    team: Optional[Dict] = None
    response: Optional[str] = None
