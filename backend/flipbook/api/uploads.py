# backend/flipbook/api/uploads.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..schemas.upload import UploadResult
from ..services.images import ImageService, build_image_url
from ..utils.logging import api_logger
from ..utils.validation import parse_positive_id

router = APIRouter(prefix="/api/uploads", tags=["uploads"])

IMMUTABLE_CACHE = "public, max-age=31536000, immutable"


def get_image_service(db: Session = Depends(get_db)) -> ImageService:
    return ImageService(db)


@router.post("", response_model=UploadResult, status_code=status.HTTP_201_CREATED)
async def upload_image(
        request: Request,
        image: Optional[UploadFile] = File(None),
        service: ImageService = Depends(get_image_service)
):
    api_logger.info(
        "Receiving image upload",
        extra={
            "file_name": image.filename if image else None,
            "content_type": image.content_type if image else None
        }
    )

    stored = await service.upload(image)
    base_url = settings.PUBLIC_BASE_URL or str(request.base_url)
    return UploadResult(url=build_image_url(stored.id, base_url))


@router.get("/{image_id}")
async def get_image(image_id: str, service: ImageService = Depends(get_image_service)):
    image_id = parse_positive_id(image_id, "invalid image id")
    image = service.get(image_id)

    # Header values must be latin-1
    file_name = image.file_name.replace('"', "").encode("latin-1", "replace").decode("latin-1")
    return Response(
        content=image.image_data,
        media_type=image.mime_type,
        headers={
            "Content-Disposition": f'inline; filename="{file_name}"',
            "Cache-Control": IMMUTABLE_CACHE
        }
    )
