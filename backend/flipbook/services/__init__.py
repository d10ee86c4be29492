# backend/flipbook/services/__init__.py
from .schema import SchemaService
from .pages import PageService
from .blocks import BlockService
from .images import ImageService

__all__ = ["SchemaService", "PageService", "BlockService", "ImageService"]
