import logging
import os
import re
from pathlib import Path
from typing import Callable, Optional
from uuid import uuid4

from fastapi import UploadFile

from backend.app.core import config
from backend.app.core.errors import ServiceError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9_-]+$")


class StorageService:
    def __init__(self, upload_dir: Optional[str] = None, max_bytes: Optional[int] = None):
        self.upload_dir = Path(upload_dir or config.UPLOAD_DIR)
        self.max_bytes = max_bytes or config.MAX_UPLOAD_BYTES

    def _target_dir(self, path: str) -> Path:
        segments = [s for s in (path or "").strip("/").split("/") if s]
        if not segments or not all(SAFE_SEGMENT.match(s) for s in segments):
            raise ServiceError("Invalid upload path.")
        return self.upload_dir.joinpath(*segments)

    def public_url(self, relative: str) -> str:
        return f"{config.PUBLIC_BASE_URL.rstrip('/')}/uploads/{relative}"

    async def upload_image(
        self,
        file: UploadFile,
        path: str,
        on_progress: Optional[Callable[[float], None]] = None,
    ) -> str:
        """
        Streams an image into UPLOAD_DIR/<path>/<uuid><ext> and returns its
        public URL. on_progress receives 0..100; it reaches 100 only once the
        file is completely written.
        """
        report = on_progress or (lambda progress: None)
        report(0)

        extension = IMAGE_EXTENSIONS.get(file.content_type or "")
        if not extension:
            raise ServiceError("Only PNG, JPEG, GIF or WEBP images can be uploaded.")

        target_dir = self._target_dir(path)
        target_dir.mkdir(parents=True, exist_ok=True)
        filename = f"{uuid4().hex}{extension}"
        target = target_dir / filename

        expected = file.size or 0
        if expected > self.max_bytes:
            raise ServiceError(f"File is too large (max {self.max_bytes // (1024 * 1024)} MB).")

        written = 0
        try:
            with open(target, "wb") as out:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise ServiceError(f"File is too large (max {self.max_bytes // (1024 * 1024)} MB).")
                    out.write(chunk)
                    if expected:
                        report(min(written / expected * 99, 99))
        except ServiceError:
            os.remove(target)
            raise

        if written == 0:
            os.remove(target)
            raise ServiceError("Uploaded file is empty.")

        report(100)
        relative = target.relative_to(self.upload_dir).as_posix()
        logger.info("Stored upload %s (%d bytes)", relative, written)
        return self.public_url(relative)


storage_service = StorageService()
