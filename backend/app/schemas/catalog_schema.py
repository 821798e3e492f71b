from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator
from typing import Optional
from datetime import datetime

class GameCreate(BaseModel):
    name: str = Field(min_length=2)
    categories: str = Field(min_length=3)
    image: HttpUrl
    data_ai_hint: Optional[str] = None
    description: Optional[str] = ""

    @field_validator("description")
    @classmethod
    def description_length(cls, value):
        if value and len(value) < 20:
            raise ValueError("Description must be at least 20 characters.")
        return value or ""

class GameUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2)
    categories: Optional[str] = Field(default=None, min_length=3)
    image: Optional[HttpUrl] = None
    data_ai_hint: Optional[str] = None
    description: Optional[str] = None

class GameResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    categories: str
    image: Optional[str] = None
    data_ai_hint: Optional[str] = None
    description: Optional[str] = ""

class BannerCreate(BaseModel):
    game: str = Field(min_length=2)
    name: str = Field(min_length=5)
    date: str = Field(min_length=5)
    image: HttpUrl
    data_ai_hint: str = Field(min_length=2)

class BannerUpdate(BaseModel):
    game: Optional[str] = Field(default=None, min_length=2)
    name: Optional[str] = Field(default=None, min_length=5)
    date: Optional[str] = Field(default=None, min_length=5)
    image: Optional[HttpUrl] = None
    data_ai_hint: Optional[str] = Field(default=None, min_length=2)

class BannerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    game: str
    name: str
    date: str
    image: Optional[str] = None
    data_ai_hint: Optional[str] = None
    created_at: Optional[datetime] = None
