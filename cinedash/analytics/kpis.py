"""
KPI Summary & Year-over-Year Growth
"""

from datetime import date
from typing import List, Optional
import math

import polars as pl

from .locations import location_revenue
from .records import WarehouseSnapshot
from .views import KPISummary, LocationRevenue

NO_LOCATION = "-"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def top_revenue_location(locations: List[LocationRevenue]) -> str:
    """City with the highest revenue; the first one wins ties. Null cities never win."""
    best: Optional[LocationRevenue] = None
    for entry in locations:
        if entry.location is None:
            continue
        if best is None or entry.revenue > best.revenue:
            best = entry
    if best is None:
        return NO_LOCATION
    return best.location


def summarize(snapshot: WarehouseSnapshot) -> KPISummary:
    """
    Headline KPIs over all facts.

    Totals include facts whose dimension keys do not resolve; only the top
    location depends on theater lookups.
    """
    totals = snapshot.fact_frame.select(
        pl.col("totalamount").sum().alias("revenue"),
        pl.col("ticketsold").sum().alias("tickets"),
        pl.col("discount").sum().alias("discounts"),
    ).row(0, named=True)

    revenue = float(totals["revenue"] or 0)
    tickets = int(totals["tickets"] or 0)
    discounts = float(totals["discounts"] or 0)

    return KPISummary(
        total_revenue=revenue,
        tickets_sold=tickets,
        total_discounts=discounts,
        avg_ticket_price=round_half_up(revenue / tickets) if tickets > 0 else 0,
        top_revenue_location=top_revenue_location(location_revenue(snapshot)),
        discount_share=safe_ratio(discounts, revenue) * 100,
    )


def revenue_for_year(snapshot: WarehouseSnapshot, year: int) -> float:
    """Revenue of facts whose date row falls in the given year."""
    total = (
        snapshot.resolve("date")
        .filter(pl.col("year") == year)
        .select(pl.col("totalamount").sum())
        .item()
    )
    return float(total or 0)


def growth_rate(current: float, previous: float) -> float:
    """Percentage change; 0 when there is no previous revenue."""
    if previous <= 0:
        return 0.0
    return ((current - previous) / previous) * 100


def year_over_year_growth(snapshot: WarehouseSnapshot, today: Optional[date] = None) -> float:
    """
    Revenue growth of the current calendar year over the previous one.

    The years come from the wall clock (``today``), not from the year
    selected on the dashboard.
    """
    current_year = (today or date.today()).year
    return growth_rate(
        revenue_for_year(snapshot, current_year),
        revenue_for_year(snapshot, current_year - 1),
    )


def available_years(snapshot: WarehouseSnapshot) -> List[str]:
    """Distinct years of the date dimension as sorted strings."""
    return sorted({str(row.year) for row in snapshot.dates if row.year is not None})
