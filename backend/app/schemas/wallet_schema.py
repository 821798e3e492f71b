from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator
from typing import Optional, Literal
from datetime import datetime

class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    amount: float
    type: str
    description: str
    date: datetime
    status: Optional[str] = None

class WithdrawMethodCreate(BaseModel):
    name: str = Field(min_length=2)
    image: HttpUrl
    receiver_info: str = Field(min_length=5)
    fee_percentage: float = Field(ge=0, le=100)
    min_amount: float = Field(ge=0)
    max_amount: float = Field(ge=1)
    status: Literal["active", "inactive"] = "active"

    @model_validator(mode="after")
    def check_range(self):
        if self.max_amount < self.min_amount:
            raise ValueError("Maximum amount must not be below the minimum amount.")
        return self

class WithdrawMethodUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2)
    image: Optional[HttpUrl] = None
    receiver_info: Optional[str] = Field(default=None, min_length=5)
    fee_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    min_amount: Optional[float] = Field(default=None, ge=0)
    max_amount: Optional[float] = Field(default=None, ge=1)
    status: Optional[Literal["active", "inactive"]] = None

class WithdrawMethodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    image: Optional[str] = None
    receiver_info: str
    fee_percentage: float
    min_amount: float
    max_amount: float
    status: str

class WithdrawRequestCreate(BaseModel):
    amount: float = Field(gt=0)
    method: str = Field(min_length=2)
    account_number: str = Field(min_length=5)

class ReviewDecision(BaseModel):
    status: Literal["approved", "rejected"]

class WithdrawRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    user_name: str
    user_gamer_id: str
    amount: float
    method: str
    account_number: str
    status: str
    requested_at: datetime

class PrizeAward(BaseModel):
    user_id: str
    tournament_id: str
    amount: float = Field(gt=0)
    reason: str = Field(min_length=2)

class PendingPrizeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    user_name: Optional[str] = None
    user_gamer_id: Optional[str] = None
    amount: float
    tournament_id: str
    tournament_name: Optional[str] = None
    reason: str
    status: str
    created_at: datetime

class GatewaySettings(BaseModel):
    name: str = ""
    access_token: str = ""
    checkout_url: str = ""
    verify_url: str = ""

class GatewaySettingsUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2)
    access_token: Optional[str] = Field(default=None, min_length=10)
    checkout_url: Optional[HttpUrl] = None
    verify_url: Optional[HttpUrl] = None

class PaymentCreate(BaseModel):
    amount: float = Field(gt=0)
    customer_name: str = Field(min_length=1)
    customer_email: str = Field(min_length=3)
    customer_phone: str = Field(min_length=5)

class PaymentVerify(BaseModel):
    transaction_id: str = Field(min_length=1)
