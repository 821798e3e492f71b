from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.security import get_current_user
from backend.app.models.user_model import PlayerProfile
from backend.app.schemas.social_schema import NotificationResponse, NotificationStatusUpdate
from backend.app.services.notifications_service import notifications_service

router = APIRouter()


@router.get("/", response_model=List[NotificationResponse])
async def list_notifications(
    limit: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    return await notifications_service.list_notifications(db, user.id, limit)


@router.post("/{notification_id}/read")
async def mark_as_read(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    await notifications_service.mark_notification_as_read(db, notification_id, user.id)
    return {"success": True}


@router.patch("/{notification_id}/status")
async def update_status(
    notification_id: str,
    payload: NotificationStatusUpdate,
    db: AsyncSession = Depends(get_db),
    user: PlayerProfile = Depends(get_current_user),
):
    await notifications_service.update_notification_status(db, notification_id, user.id, payload.status)
    return {"success": True}
