# backend/flipbook/schemas/upload.py
from .base import BaseSchema


class UploadResult(BaseSchema):
    url: str
