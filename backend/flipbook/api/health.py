# backend/flipbook/api/health.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..database import Store, get_store
from ..utils.logging import api_logger

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health(store: Store = Depends(get_store)):
    try:
        store.ping()
    except Exception as e:
        api_logger.error("Health check failed", extra={"error": str(e)})
        return JSONResponse(status_code=500, content={"ok": False})
    return {"ok": True}
