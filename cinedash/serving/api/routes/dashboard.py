"""
Dashboard Endpoint

Runs the aggregation engine server-side over a fresh snapshot of the
warehouse for the requested selections.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from cinedash.analytics import (
    REGION_OPTIONS,
    DashboardSelections,
    DashboardView,
    Period,
    build_dashboard,
)
from cinedash.config import get_settings
from cinedash.exceptions import SelectionError
from cinedash.database.connection import get_db_dependency
from cinedash.database.warehouse import load_snapshot

settings = get_settings()
router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("", response_model=DashboardView)
async def get_dashboard(
    period: Period = Query(Period(settings.dashboard.default_period)),
    year: Optional[str] = Query(None, description="Year to chart; defaults to the earliest available"),
    region: str = Query(settings.dashboard.default_region, description=f"One of {REGION_OPTIONS}"),
    db: AsyncSession = Depends(get_db_dependency),
) -> DashboardView:
    """Aggregated dashboard view."""
    logger.info("get_dashboard called", period=period.value, year=year, region=region)

    try:
        selections = DashboardSelections(period=period, year=year, region=region)
    except SelectionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        snapshot = await load_snapshot(db)
    except SQLAlchemyError as e:
        logger.error("Failed to load warehouse snapshot", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=503, detail="Failed to read warehouse")

    view = build_dashboard(snapshot, selections)
    logger.info(
        "Dashboard returned",
        facts=len(snapshot.facts),
        chart_points=len(view.chart_data),
        selected_year=view.selected_year,
    )
    return view
