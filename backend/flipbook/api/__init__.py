# backend/flipbook/api/__init__.py
from .health import router as health_router
from .uploads import router as uploads_router
from .pages import router as pages_router
from .blocks import router as blocks_router

__all__ = ["health_router", "uploads_router", "pages_router", "blocks_router"]
