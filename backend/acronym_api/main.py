"""
Acronym API: FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn acronym_api.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │ Req ID   │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  GET/POST /acronym   PATCH/DELETE /acronym/{id}     │
    │  GET /health         static files   catch-all 404   │
    │                                                     │
    │  Exception Handlers → {status, message, data}       │
    │  Validation→400 │ NotFound→404 │ Conflict→409 │ 500 │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from acronym_api import __version__
from acronym_api.config import Settings, settings as default_settings
from acronym_api.exceptions import AcronymAPIError
from acronym_api.middleware.logging import RequestLoggingMiddleware
from acronym_api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from acronym_api.routes import acronyms, health
from acronym_api.routes.acronyms import MORE_RESULTS_HEADER
from acronym_api.schemas.acronym import Envelope

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "We couldn't find what you were looking for."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] acronym_api.access: GET /acronym 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our RequestLoggingMiddleware replaces the access log; the driver logs
    # every heartbeat at DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup logging only: MongoDB clients are opened and closed per request,
    so there is no pool to dispose of on shutdown.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("Acronym API %s starting up...", __version__)
    logger.info(
        "Collection: %s.%s (search index '%s')",
        app_settings.database_name,
        app_settings.collection_name,
        app_settings.search_index,
    )
    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Acronym API shut down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _envelope(status: int, message: Optional[str], data=None) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content=Envelope(status=status, message=message, data=jsonable_encoder(data)).model_dump(),
    )


def _request_id(request: Request) -> str:
    # The fallback 500 handler runs outside the middleware's context, where
    # the ContextVar is unset; request.state travels with the scope
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to envelope responses.

    Handler hierarchy:
        AcronymAPIError         → its own status_code (400/404/409/500)
        RequestValidationError  → 400 (unparseable JSON, wrong field types)
        HTTPException 404/405   → 404 catch-all (unknown path or method)
        HTTPException (other)   → its status code
        Exception (fallback)    → 500
    """

    @app.exception_handler(AcronymAPIError)
    async def handle_app_error(request: Request, exc: AcronymAPIError):
        rid = _request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.warning("[%s] %s", rid, exc.message)
        return _envelope(exc.status_code, exc.message, exc.data)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = _request_id(request)
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return _envelope(
            400,
            "Bad request: the request could not be parsed.",
            {"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return _envelope(404, NOT_FOUND_MESSAGE)
        return _envelope(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _envelope(500, "An unexpected error occurred. Please try again.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-loaded
                  singleton. Stored on `app.state.settings` for dependencies.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Acronym API",
        description="List, fuzzy-search, add, update and delete acronym definitions.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
        expose_headers=[MORE_RESULTS_HEADER, REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(acronyms.router)
    app.include_router(health.router)

    # Static assets last: anything the API routes don't claim falls through
    # to the directory, and a miss there becomes the catch-all 404
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
    else:
        logger.warning("Static directory %s not found; not serving static files", static_dir)

    return app


app = create_app()
