"""
Dashboard Session

Owns the mutable dashboard state: one slot per warehouse table, the UI
selections, and the fetch tasks that fill the slots.

The five tables are fetched as independent tasks that complete in any
order; each task writes only its own slot. Closing the session cancels
pending fetches and discards any result that still arrives afterwards.
Every call to ``view()`` recomputes the dashboard from an immutable
snapshot of the slots.
"""

import asyncio
from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional, Tuple

import structlog

from cinedash.analytics import (
    DashboardSelections,
    DashboardView,
    Period,
    WarehouseSnapshot,
    available_years,
    build_dashboard,
)
from cinedash.analytics.records import WarehouseRecord, parse_rows
from cinedash.config import get_settings
from cinedash.exceptions import ProviderError, SelectionError
from .provider import TABLE_ENDPOINTS, DataProviderClient

logger = structlog.get_logger(__name__)


class DashboardSession:
    """
    Client-side dashboard state bound to one view lifetime.

    Example:
        async with DataProviderClient() as client:
            async with DashboardSession(client) as session:
                await session.load()
                session.select_period("quarterly")
                view = session.view()
    """

    def __init__(
        self,
        client: DataProviderClient,
        today: Optional[date] = None,
        top_n: Optional[int] = None,
    ):
        defaults = get_settings().dashboard
        self._client = client
        self._today = today
        self._top_n = top_n
        self._slots: Dict[str, Tuple[WarehouseRecord, ...]] = {}
        self._tasks: Dict[str, asyncio.Task] = {}
        self._closed = False
        self.errors: Dict[str, ProviderError] = {}
        self.selections = DashboardSelections(
            period=defaults.default_period,
            region=defaults.default_region,
        )

    async def __aenter__(self) -> "DashboardSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def loaded_tables(self) -> List[str]:
        return [table for table in TABLE_ENDPOINTS if table in self._slots]

    @property
    def pending_tables(self) -> List[str]:
        return [table for table, task in self._tasks.items() if not task.done()]

    def start(self) -> None:
        """Issue all table fetches concurrently."""
        if self._closed:
            raise RuntimeError("Session is closed")
        for table in TABLE_ENDPOINTS:
            task = self._tasks.get(table)
            if task is None or task.done():
                self._tasks[table] = asyncio.create_task(self._load_table(table), name=f"fetch-{table}")

    async def wait(self) -> None:
        """Wait for every issued fetch to finish, successfully or not."""
        if not self._tasks:
            return
        # Let every fetch settle before surfacing an unexpected failure
        results = await asyncio.gather(*self._tasks.values(), return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                raise result

    async def load(self) -> "DashboardSession":
        """Fetch all tables and wait for them."""
        self.start()
        await self.wait()
        if self.errors:
            logger.error("Dashboard data incomplete", failed=sorted(self.errors))
        return self

    async def _load_table(self, table: str) -> None:
        try:
            rows = await self._client.fetch_table(table)
        except ProviderError as e:
            if self._closed:
                return
            logger.error("Table fetch failed", table=table, error=str(e), status_code=e.status_code)
            self.errors[table] = e
            return

        if self._closed:
            logger.debug("Discarding fetch result after close", table=table)
            return

        self._slots[table] = parse_rows(table, rows)
        self.errors.pop(table, None)
        logger.info("Table loaded", table=table, rows=len(rows))

        if table == "dates" and self.selections.year is None:
            years = available_years(self.snapshot())
            if years:
                self.selections = replace(self.selections, year=years[0])

    async def close(self) -> None:
        """Cancel pending fetches; later completions are discarded."""
        if self._closed:
            return
        self._closed = True
        pending = [task for task in self._tasks.values() if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info("Cancelled pending fetches", count=len(pending))

    # -------------------------------------------------------------------------
    # Selections
    # -------------------------------------------------------------------------

    # DashboardSelections validates on construction and raises SelectionError

    def select_period(self, period: Period) -> None:
        self.selections = replace(self.selections, period=period)

    def select_region(self, region: str) -> None:
        self.selections = replace(self.selections, region=region)

    def select_year(self, year: str) -> None:
        years = available_years(self.snapshot())
        if years and str(year) not in years:
            raise SelectionError(f"Year {year!r} not in available years {years}")
        self.selections = replace(self.selections, year=str(year))

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def snapshot(self) -> WarehouseSnapshot:
        """Immutable copy of the tables loaded so far; missing tables are empty."""
        return WarehouseSnapshot(**{table: self._slots.get(table, ()) for table in TABLE_ENDPOINTS})

    def view(self) -> DashboardView:
        """Recompute the dashboard for the current selections."""
        return build_dashboard(
            self.snapshot(),
            self.selections,
            today=self._today,
            top_n=self._top_n,
        )
