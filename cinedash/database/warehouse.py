"""
Warehouse Table Access

Full-table reads for the five warehouse tables. No filtering, paging or
projection: every row is returned with every column.
"""

from typing import Any, Dict, List, Type

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinedash.analytics.records import WarehouseSnapshot
from .models import Base, DimCustomer, DimDate, DimMovie, DimTheater, FactTicketSale

logger = structlog.get_logger(__name__)

WAREHOUSE_TABLES: Dict[str, Type[Base]] = {
    "customers": DimCustomer,
    "movies": DimMovie,
    "theaters": DimTheater,
    "dates": DimDate,
    "facts": FactTicketSale,
}


async def fetch_table(db: AsyncSession, model: Type[Base]) -> List[Dict[str, Any]]:
    """SELECT * from one table, in storage order."""
    result = await db.execute(select(model))
    rows = [row.to_dict() for row in result.scalars().all()]
    logger.debug("Table fetched", table=model.__tablename__, rows=len(rows))
    return rows


async def load_snapshot(db: AsyncSession) -> WarehouseSnapshot:
    """Read all five tables into an immutable snapshot."""
    tables = {name: await fetch_table(db, model) for name, model in WAREHOUSE_TABLES.items()}
    return WarehouseSnapshot.from_records(**tables)
