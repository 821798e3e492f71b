import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from backend.app.core.security import get_current_user
from backend.app.models.user_model import PlayerProfile
from backend.app.services.storage_service import storage_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/")
async def upload_image(
    file: UploadFile = File(...),
    path: str = Form("images"),
    user: PlayerProfile = Depends(get_current_user),
):
    url = await storage_service.upload_image(
        file, path, on_progress=lambda p: logger.debug("Upload by %s: %.0f%%", user.id, p)
    )
    return {"success": True, "url": url}
