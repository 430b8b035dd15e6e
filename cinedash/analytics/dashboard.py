"""
Dashboard Assembly

Recomputes every derived view from a snapshot and the current selections.
Nothing is cached between calls.
"""

from datetime import date
from typing import Dict, Optional

import structlog

from .formatting import (
    axis_interval,
    format_axis_label,
    format_currency,
    format_growth,
    format_number,
    format_percent,
)
from .kpis import available_years, summarize, year_over_year_growth
from .locations import filter_by_region, location_revenue
from .periods import bucket_revenue
from .rankings import top_movies, top_theaters
from .records import REGION_OPTIONS, DashboardSelections, WarehouseSnapshot
from .views import DashboardView, KPISummary

logger = structlog.get_logger(__name__)


def _display(kpis: KPISummary, growth: float) -> Dict[str, str]:
    return {
        "total_revenue": format_currency(kpis.total_revenue),
        "tickets_sold": format_number(kpis.tickets_sold),
        "avg_ticket_price": format_currency(kpis.avg_ticket_price),
        "total_discounts": format_currency(kpis.total_discounts),
        "discount_share": format_percent(kpis.discount_share),
        "top_revenue_location": kpis.top_revenue_location,
        "growth": format_growth(growth),
    }


def build_dashboard(
    snapshot: WarehouseSnapshot,
    selections: DashboardSelections,
    today: Optional[date] = None,
    top_n: Optional[int] = None,
) -> DashboardView:
    """
    Build the full dashboard view.

    When no year is selected the earliest available year is used, as the
    dashboard does once the date dimension has loaded.
    """
    years = available_years(snapshot)
    year = selections.year or (years[0] if years else None)

    kpis = summarize(snapshot)
    growth = year_over_year_growth(snapshot, today=today)
    locations = filter_by_region(location_revenue(snapshot), selections.region)
    chart_data = bucket_revenue(snapshot, selections.period, year) if year else []

    logger.debug(
        "Dashboard computed",
        facts=len(snapshot.facts),
        period=selections.period.value,
        year=year,
        region=selections.region,
        chart_points=len(chart_data),
        locations=len(locations),
    )

    return DashboardView(
        kpis=kpis,
        growth=growth,
        period=selections.period.value,
        selected_year=year,
        region=selections.region,
        chart_data=chart_data,
        chart_labels=[format_axis_label(p.label, selections.period.value) for p in chart_data],
        chart_label_interval=axis_interval(len(chart_data)),
        location_revenue=locations,
        location_count=len(locations),
        top_movies=top_movies(snapshot, top_n),
        top_theaters=top_theaters(snapshot, top_n),
        available_years=years,
        region_options=list(REGION_OPTIONS),
        display=_display(kpis, growth),
    )
