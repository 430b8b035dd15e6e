"""
FastAPI Production Application

Main entry point for the CineDash Analytics API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from cinedash.config.logging import configure_logging
from cinedash.database.connection import init_database, close_database
from cinedash.serving.api.main import create_api_app

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()

    logger.info("Starting CineDash Analytics API")

    # Table endpoints answer 503 until the database is reachable
    try:
        await init_database()
        logger.info("Database initialized")
    except Exception as e:
        logger.warning("Database init failed", error=str(e))

    yield

    logger.info("Shutting down...")
    await close_database()


app = create_api_app(lifespan=lifespan)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
