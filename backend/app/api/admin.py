from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.security import require_admin
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.tournament_schema import RegistrationLogResponse
from backend.app.schemas.wallet_schema import (
    GatewaySettings,
    GatewaySettingsUpdate,
    PendingPrizeResponse,
    PrizeAward,
    ReviewDecision,
    WithdrawMethodCreate,
    WithdrawMethodResponse,
    WithdrawMethodUpdate,
    WithdrawRequestResponse,
)
from backend.app.services.gateway_service import gateway_service
from backend.app.services.prizes_service import prizes_service
from backend.app.services.registrations_service import registrations_service
from backend.app.services.tournament_service import tournament_service
from backend.app.services.wallet_service import wallet_service

# Every route here is admin-only
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/dashboard")
async def dashboard(db: AsyncSession = Depends(get_db)):
    """Counters for the admin dashboard cards."""
    return await tournament_service.dashboard_counts(db)


# --- Withdraw methods ---

@router.get("/withdraw-methods", response_model=List[WithdrawMethodResponse])
async def list_withdraw_methods(db: AsyncSession = Depends(get_db)):
    return await wallet_service.list_withdraw_methods(db)


@router.post("/withdraw-methods")
async def add_withdraw_method(payload: WithdrawMethodCreate, db: AsyncSession = Depends(get_db)):
    method = await wallet_service.add_withdraw_method(db, payload.model_dump(mode="json"))
    return {"success": True, "id": method.id}


@router.patch("/withdraw-methods/{method_id}")
async def update_withdraw_method(method_id: str, payload: WithdrawMethodUpdate, db: AsyncSession = Depends(get_db)):
    await wallet_service.update_withdraw_method(db, method_id, payload.model_dump(mode="json", exclude_unset=True))
    return {"success": True}


@router.delete("/withdraw-methods/{method_id}")
async def delete_withdraw_method(method_id: str, db: AsyncSession = Depends(get_db)):
    await wallet_service.delete_withdraw_method(db, method_id)
    return {"success": True}


# --- Withdraw requests ---

@router.get("/withdraw-requests", response_model=List[WithdrawRequestResponse])
async def list_withdraw_requests(db: AsyncSession = Depends(get_db)):
    return await wallet_service.list_pending_withdraw_requests(db)


@router.post("/withdraw-requests/{request_id}/process")
async def process_withdraw_request(request_id: str, payload: ReviewDecision, db: AsyncSession = Depends(get_db)):
    await wallet_service.process_withdraw_request(db, request_id, payload.status)
    return {"success": True}


# --- Prizes ---

@router.get("/prizes", response_model=List[PendingPrizeResponse])
async def list_pending_prizes(db: AsyncSession = Depends(get_db)):
    return await prizes_service.list_pending_prizes(db)


@router.post("/prizes")
async def award_prize(payload: PrizeAward, db: AsyncSession = Depends(get_db)):
    prize = await prizes_service.award_prize(db, payload.user_id, payload.tournament_id, payload.amount, payload.reason)
    return {"success": True, "id": prize.id}


@router.post("/prizes/{prize_id}/process")
async def process_pending_prize(prize_id: str, payload: ReviewDecision, db: AsyncSession = Depends(get_db)):
    await prizes_service.process_pending_prize(db, prize_id, payload.status)
    return {"success": True}


# --- Payment gateway ---

@router.get("/gateway", response_model=GatewaySettings)
async def get_gateway(db: AsyncSession = Depends(get_db)):
    return await gateway_service.get_gateway_settings(db)


@router.patch("/gateway")
async def update_gateway(payload: GatewaySettingsUpdate, db: AsyncSession = Depends(get_db)):
    await gateway_service.update_gateway_settings(db, payload.model_dump(mode="json", exclude_unset=True))
    return {"success": True}


# --- Registrations ---

@router.get("/registrations", response_model=List[RegistrationLogResponse])
async def list_registrations(tournament_id: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return await registrations_service.list_registrations(db, tournament_id)
