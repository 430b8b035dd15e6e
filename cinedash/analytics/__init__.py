"""
Aggregation Engine
"""
from .dashboard import build_dashboard
from .kpis import available_years, summarize, year_over_year_growth
from .locations import CITY_REGION_MAP, filter_by_region, location_revenue
from .periods import bucket_revenue
from .rankings import top_movies, top_theaters
from .records import (
    ALL_REGIONS,
    REGION_OPTIONS,
    DashboardSelections,
    Period,
    WarehouseSnapshot,
)
from .views import DashboardView

__all__ = [
    "build_dashboard",
    "available_years",
    "summarize",
    "year_over_year_growth",
    "CITY_REGION_MAP",
    "filter_by_region",
    "location_revenue",
    "bucket_revenue",
    "top_movies",
    "top_theaters",
    "ALL_REGIONS",
    "REGION_OPTIONS",
    "DashboardSelections",
    "Period",
    "WarehouseSnapshot",
    "DashboardView",
]
