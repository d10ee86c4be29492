# backend/flipbook/models/__init__.py
from ..database import Base
from .page import Page
from .block import Block, BlockType
from .image import UploadedImage
from .legacy import legacy_metadata, page_items

__all__ = [
    "Base",
    "Page",
    "Block",
    "BlockType",
    "UploadedImage",
    "legacy_metadata",
    "page_items"
]
