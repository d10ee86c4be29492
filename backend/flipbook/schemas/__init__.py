# backend/flipbook/schemas/__init__.py
from .page import Page, PageCreate, PageUpdate
from .block import Block, BlockWrite
from .upload import UploadResult

__all__ = [
    "Page", "PageCreate", "PageUpdate",
    "Block", "BlockWrite",
    "UploadResult"
]
