from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.security import get_current_user
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.wallet_schema import (
    PaymentCreate,
    PaymentVerify,
    TransactionResponse,
    WithdrawMethodResponse,
    WithdrawRequestCreate,
    WithdrawRequestResponse,
)
from backend.app.services.payment_service import payment_service
from backend.app.services.wallet_service import wallet_service

router = APIRouter()


@router.get("/transactions", response_model=List[TransactionResponse])
async def list_transactions(db: AsyncSession = Depends(get_db), user: PlayerProfile = Depends(get_current_user)):
    return await wallet_service.list_transactions(db, user.id)


@router.get("/withdraw-methods", response_model=List[WithdrawMethodResponse])
async def list_active_methods(db: AsyncSession = Depends(get_db)):
    return await wallet_service.list_active_withdraw_methods(db)


@router.get("/withdraw-requests", response_model=List[WithdrawRequestResponse])
async def my_withdraw_requests(db: AsyncSession = Depends(get_db), user: PlayerProfile = Depends(get_current_user)):
    return await wallet_service.list_user_withdraw_requests(db, user.id)


@router.post("/withdraw-requests")
async def create_withdraw_request(
    payload: WithdrawRequestCreate,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    request = await wallet_service.create_withdrawal_request(
        db, user.id, payload.amount, payload.method, payload.account_number
    )
    return {"success": True, "id": request.id}


@router.post("/deposits")
async def create_deposit(
    payload: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    checkout = await payment_service.create_payment_url(
        db, user, payload.amount, payload.customer_name, payload.customer_email, payload.customer_phone
    )
    return {"success": True, **checkout}


@router.post("/deposits/verify")
async def verify_deposit(
    payload: PaymentVerify,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    outcome = await payment_service.verify_payment(db, payload.transaction_id, user)
    return {"success": True, **outcome}
