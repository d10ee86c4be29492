# backend/flipbook/main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import health_router, uploads_router, pages_router, blocks_router
from .config import settings
from .database import Store
from .errors import FlipbookError
from .services.images import exceeds_upload_ceiling
from .services.schema import SchemaService
from .utils.logging import api_logger


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FlipbookError)
    async def flipbook_error_handler(request: Request, exc: FlipbookError):
        api_logger.warning(
            f"{request.method} {request.url.path} failed: {exc.message}",
            extra={"status_code": exc.status_code, "error_type": type(exc).__name__}
        )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "invalid request") if errors else "invalid request"
        api_logger.warning(f"Rejected request body for {request.url.path}", extra={"errors": str(errors)})
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        api_logger.error(
            f"Unhandled error on {request.method} {request.url.path}",
            extra={"error_type": type(exc).__name__, "error_message": str(exc)},
            exc_info=exc
        )
        return error_response(500, "internal server error")


def create_app(store: Optional[Store] = None) -> FastAPI:
    """Build the API around a store; one is opened from settings if not given"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.store is None
        if owns_store:
            app.state.store = Store()

        # Failures here abort startup
        SchemaService(app.state.store).initialize()
        api_logger.info("Flipbook API ready")
        yield

        if owns_store:
            app.state.store.dispose()
            app.state.store = None

    app = FastAPI(title="Flipbook API", version=__version__, lifespan=lifespan)
    app.state.store = store

    @app.middleware("http")
    async def reject_oversized_uploads(request: Request, call_next):
        # Refuse before the body is spooled
        if request.method == "POST" and request.url.path.rstrip("/") == "/api/uploads" and \
                exceeds_upload_ceiling(request.headers.get("content-length"), settings.MAX_UPLOAD_SIZE):
            api_logger.warning(
                "Rejected upload by Content-Length",
                extra={"content_length": request.headers.get("content-length")}
            )
            return error_response(400, "File too large")
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(uploads_router)
    app.include_router(pages_router)
    app.include_router(blocks_router)

    return app


app = create_app()
