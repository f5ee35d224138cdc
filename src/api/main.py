"""
FastAPI Application Factory

Assembles routes, CORS and exception handlers. The same factory is used by
main_asyncio.py and by the test suite (with a test ServiceContainer set
through api.dependencies).

FastAPI serves OpenAPI docs at /docs and ReDoc at /redoc.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import List, Optional

from api.routes import export, frames, playback, session, system
from api.middleware.error_handler import register_exception_handlers
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",      # React dev server
    "http://localhost:5173",      # Vite dev server
    "http://localhost",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("FastAPI app starting up")
    yield
    log.info("FastAPI app shutting down")


def create_app(
    title: str = "FlipFrame",
    description: str = "REST API for the frame-by-frame animation editor",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        title: API title (shown in docs)
        description: API description
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: local dev servers)

    Returns:
        Configured FastAPI application ready to run
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    log.info(f"Creating FastAPI app: {title} v{version}")

    # =========================================================================
    # CORS Configuration
    # =========================================================================

    if cors_origins is None:
        cors_origins = DEFAULT_CORS_ORIGINS

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Frame-Count"],
    )

    log.debug(f"CORS enabled for origins: {cors_origins}")

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routes
    # =========================================================================

    for module in (session, frames, playback, export, system):
        app.include_router(module.router, prefix="/api/v1")

    log.debug("Routes registered: session, frames, playback, export, system (/api/v1)")

    @app.get(
        "/api/health",
        tags=["System"],
        summary="Health check",
        description="Check if API is running and responding"
    )
    async def health_check():
        return {
            "status": "healthy",
            "service": "flipframe-api",
            "version": version
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return JSONResponse(
            {
                "message": f"{title} API",
                "docs": "/docs",
                "health": "/api/health"
            }
        )

    log.info(f"FastAPI app created successfully: {title}")

    return app
