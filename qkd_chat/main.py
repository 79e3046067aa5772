from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from qkd_chat.core.config import settings
from qkd_chat.core.errors import QKDError
from qkd_chat.utils.logging import setup_logging
from qkd_chat.modules.session.registry import SessionRegistry

from qkd_chat.modules.bb84.router import router as bb84_router
from qkd_chat.modules.channel.router import router as channel_router
from qkd_chat.api.schemas import HealthResponse

logger = logging.getLogger(__name__)

def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()

def create_app(registry: Optional[SessionRegistry] = None) -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION)
    app.state.registry = registry or SessionRegistry()

    # The browser client is served from its own origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(QKDError)
    async def qkd_error_handler(request: Request, exc: QKDError) -> JSONResponse:
        logger.warning("qkd_error", extra={"error": type(exc).__name__, "path": request.url.path})
        return JSONResponse(
            status_code=exc.code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    app.include_router(bb84_router)
    app.include_router(channel_router)

    if settings.STATIC_DIR is not None and settings.STATIC_DIR.is_dir():
        app.mount("/ui", StaticFiles(directory=settings.STATIC_DIR, html=True), name="ui")
        logger.info("static_mounted", extra={"static_dir": settings.STATIC_DIR.as_posix()})

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    def health() -> HealthResponse:
        return HealthResponse(
            project=settings.PROJECT_NAME,
            version=settings.VERSION,
            initialized=app.state.registry.initialized,
            timestamp_utc=utc_now(),
        )

    return app

app = create_app()

def run() -> None:
    uvicorn.run("qkd_chat.main:app", host=settings.HOST, port=settings.PORT,
                log_level=settings.LOG_LEVEL.lower())

if __name__ == "__main__":
    run()
