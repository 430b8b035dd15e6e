"""
FastAPI Application Factory

Creates and configures the dashboard API application.
"""

from typing import Any, Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from cinedash.config import get_settings
from .middleware import WarehouseRequestMiddleware
from .routes import dashboard_router, health_router, warehouse_router

settings = get_settings()


def create_api_app(lifespan: Optional[Callable[[FastAPI], Any]] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        lifespan: Optional lifespan context manager (database setup/teardown)

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="CineDash Analytics API",
        description="Movie warehouse tables and dashboard aggregates",
        version=settings.version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(WarehouseRequestMiddleware)

    app.include_router(health_router, prefix="/api", tags=["Health"])
    app.include_router(warehouse_router, prefix="/api", tags=["Warehouse"])
    app.include_router(dashboard_router, prefix="/api/dashboard", tags=["Dashboard"])

    @app.get("/api/info")
    async def api_info():
        """API information endpoint."""
        return {
            "name": "CineDash Analytics API",
            "version": settings.version,
            "environment": settings.app_env,
        }

    return app
