"""
Warehouse Table Endpoints

One GET endpoint per warehouse table, each returning the full table as a
JSON array of rows.
"""

from typing import Any, Dict, List, Type

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from cinedash.database.connection import get_db_dependency
from cinedash.database.models import Base
from cinedash.database.warehouse import WAREHOUSE_TABLES, fetch_table

router = APIRouter()
logger = structlog.get_logger(__name__)


async def _serve_table(name: str, model: Type[Base], db: AsyncSession) -> List[Dict[str, Any]]:
    logger.info("Serving warehouse table", table=name)
    try:
        return await fetch_table(db, model)
    except SQLAlchemyError as e:
        logger.error("Warehouse query failed", table=name, error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=503, detail=f"Failed to read {name}")


@router.get("/customers", response_model=None)
async def list_customers(db: AsyncSession = Depends(get_db_dependency)) -> List[Dict[str, Any]]:
    """All customer rows."""
    return await _serve_table("customers", WAREHOUSE_TABLES["customers"], db)


@router.get("/movies", response_model=None)
async def list_movies(db: AsyncSession = Depends(get_db_dependency)) -> List[Dict[str, Any]]:
    """All movie rows."""
    return await _serve_table("movies", WAREHOUSE_TABLES["movies"], db)


@router.get("/theaters", response_model=None)
async def list_theaters(db: AsyncSession = Depends(get_db_dependency)) -> List[Dict[str, Any]]:
    """All theater rows."""
    return await _serve_table("theaters", WAREHOUSE_TABLES["theaters"], db)


@router.get("/dates", response_model=None)
async def list_dates(db: AsyncSession = Depends(get_db_dependency)) -> List[Dict[str, Any]]:
    """All date dimension rows."""
    return await _serve_table("dates", WAREHOUSE_TABLES["dates"], db)


@router.get("/facts", response_model=None)
async def list_facts(db: AsyncSession = Depends(get_db_dependency)) -> List[Dict[str, Any]]:
    """All ticket sale facts."""
    return await _serve_table("facts", WAREHOUSE_TABLES["facts"], db)
