# backend/flipbook/services/images.py
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import InvalidInput, NotFound, PayloadTooLarge, UnsupportedMediaType
from ..models import UploadedImage
from ..utils.logging import service_logger

CHUNK_SIZE = 64 * 1024

# Room for multipart boundaries, part headers and other form fields
MULTIPART_OVERHEAD = 64 * 1024


def exceeds_upload_ceiling(content_length: Optional[str], limit: int) -> bool:
    """Whether a declared request size is beyond any acceptable upload.

    Only a cheap pre-check; the file itself is measured by ``read_limited``.
    """
    if not content_length or not content_length.isdigit():
        return False
    return int(content_length) > limit + MULTIPART_OVERHEAD


async def read_limited(upload_file: UploadFile, limit: int) -> bytes:
    """Read an upload into memory, raising PayloadTooLarge past ``limit`` bytes"""
    buffer = bytearray()
    while True:
        chunk = await upload_file.read(CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > limit:
            raise PayloadTooLarge("File too large")
    return bytes(buffer)


def build_image_url(image_id: int, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/api/uploads/{image_id}"


class ImageService:
    def __init__(self, db: Session, max_size: Optional[int] = None):
        self.db = db
        self.max_size = max_size if max_size is not None else settings.MAX_UPLOAD_SIZE

    async def upload(self, upload_file: Optional[UploadFile]) -> UploadedImage:
        if upload_file is None:
            raise InvalidInput("image file is required")

        content_type = (upload_file.content_type or "").lower()
        if not content_type.startswith("image/"):
            raise UnsupportedMediaType("Only image files are allowed")

        data = await read_limited(upload_file, self.max_size)

        image = UploadedImage(
            mime_type=upload_file.content_type,
            file_name=upload_file.filename or "image",
            image_data=data
        )
        self.db.add(image)
        self.db.commit()
        self.db.refresh(image)

        service_logger.info(
            "Stored uploaded image",
            extra={"image_id": image.id, "mime_type": image.mime_type, "size": len(data)}
        )
        return image

    def get(self, image_id: int) -> UploadedImage:
        image = self.db.query(UploadedImage).filter(UploadedImage.id == image_id).first()
        if not image:
            raise NotFound("image not found")
        return image
