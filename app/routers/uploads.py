# app/routers/uploads.py

import logging
import time
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from app.core.auth import get_current_user
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.schemas.transfer import UploadResponse

router = APIRouter(prefix="/uploads", tags=["Uploads"])

logger = logging.getLogger("app.uploads")


@router.post("/photo", response_model=UploadResponse)
@limiter.limit("20/minute")
def upload_photo(
    request: Request,
    file: UploadFile = File(...),
    current_user=Depends(get_current_user),
):
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only image files can be uploaded",
        )

    original_name = Path(file.filename or "").name
    if not original_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    content = file.file.read(settings.MAX_UPLOAD_BYTES + 1)

    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File is too large",
        )

    filename = f"{int(time.time() * 1000)}-{original_name.replace(' ', '_')}"
    upload_dir = Path(settings.UPLOAD_DIR)

    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        (upload_dir / filename).write_bytes(content)
    except OSError as exc:
        logger.error(f"Upload of {original_name} failed: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Upload failed",
        )

    return {
        "success": True,
        "filename": filename,
        "url": f"/uploads/{filename}",
    }
