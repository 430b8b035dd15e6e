"""
Location / Region Revenue

Revenue per theater city, with a static city to region lookup.
"""

from typing import Dict, List, Optional

import polars as pl

from cinedash.exceptions import SelectionError

from .records import ALL_REGIONS, REGION_OPTIONS, WarehouseSnapshot
from .views import LocationRevenue

CITY_REGION_MAP: Dict[str, str] = {
    "Delhi": "North", "Chandigarh": "North", "Lucknow": "North",
    "Jaipur": "North", "Noida": "North", "Gurgaon": "North",
    "Mumbai": "West", "Pune": "West", "Ahmedabad": "West",
    "Surat": "West", "Vadodara": "West",
    "Bangalore": "South", "Chennai": "South", "Hyderabad": "South",
    "Coimbatore": "South", "Visakhapatnam": "South", "Kochi": "South",
    "Kolkata": "East", "Ranchi": "East", "Guwahati": "East",
    "Bhopal": "Central", "Indore": "Central",
}


def region_for_city(city: Optional[str]) -> Optional[str]:
    return CITY_REGION_MAP.get(city) if city is not None else None


def location_revenue(snapshot: WarehouseSnapshot) -> List[LocationRevenue]:
    """Sum revenue per theater city, in first-seen order."""
    totals = (
        snapshot.resolve("theater")
        .group_by("location", maintain_order=True)
        .agg(pl.col("totalamount").sum().alias("revenue"))
    )
    return [
        LocationRevenue(location=row["location"], revenue=float(row["revenue"]))
        for row in totals.iter_rows(named=True)
    ]


def filter_by_region(locations: List[LocationRevenue], region: str = ALL_REGIONS) -> List[LocationRevenue]:
    """
    Keep the cities of one region.

    "All" keeps every city, including unmapped ones; any other region keeps
    only cities the lookup table assigns to it.
    """
    if region not in REGION_OPTIONS:
        raise SelectionError(f"Unknown region: {region!r}")
    if region == ALL_REGIONS:
        return list(locations)
    return [entry for entry in locations if region_for_city(entry.location) == region]
