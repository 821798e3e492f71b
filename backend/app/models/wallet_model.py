from sqlalchemy import Column, String, Float, DateTime
from backend.app.core.database import Base, utcnow

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, index=True)
    amount = Column(Float) # Signed: negative leaves the wallet
    type = Column(String) # deposit, withdrawal, prize, fee, admin_adjustment
    description = Column(String, default="")
    date = Column(DateTime(timezone=True), default=utcnow, index=True)
    status = Column(String, default="completed")
    # External id (payment gateway transaction) used for idempotent deposits
    reference = Column(String, nullable=True, unique=True, index=True)

class WithdrawMethod(Base):
    __tablename__ = "withdraw_methods"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True)
    image = Column(String)
    receiver_info = Column(String)
    fee_percentage = Column(Float, default=0.0)
    min_amount = Column(Float, default=0.0)
    max_amount = Column(Float, default=0.0)
    status = Column(String, default="active")

class WithdrawRequest(Base):
    __tablename__ = "withdraw_requests"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, index=True)
    user_name = Column(String)
    user_gamer_id = Column(String)
    amount = Column(Float)
    method = Column(String)
    account_number = Column(String)
    status = Column(String, default="pending", index=True)
    requested_at = Column(DateTime(timezone=True), default=utcnow)

class PendingPrize(Base):
    __tablename__ = "pending_prizes"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, index=True)
    user_name = Column(String)
    user_gamer_id = Column(String)
    amount = Column(Float)
    tournament_id = Column(String)
    tournament_name = Column(String)
    reason = Column(String)
    status = Column(String, default="pending", index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
