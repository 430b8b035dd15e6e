"""
Dashboard View Models

Derived, read-only results of the aggregation functions.
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel


class ChartPoint(BaseModel):
    """Revenue for one period bucket"""
    label: str
    revenue: float


class LocationRevenue(BaseModel):
    """Revenue summed per theater city"""
    location: Optional[str]
    revenue: float


class MovieRanking(BaseModel):
    """Top movie entry"""
    title: Optional[str]
    genre: Optional[str]
    language: Optional[str]
    duration: Optional[int]
    rating: Optional[float]
    release_date: Optional[date]
    tickets_sold: int
    total_amount: float


class TheaterRanking(BaseModel):
    """Top theater entry"""
    name: Optional[str]
    location: Optional[str]
    total_seats: Optional[int]
    tickets_sold: int
    total_amount: float


class KPISummary(BaseModel):
    """Headline numbers across all facts"""
    total_revenue: float
    tickets_sold: int
    total_discounts: float
    avg_ticket_price: int
    top_revenue_location: str
    discount_share: float


class DashboardView(BaseModel):
    """Everything the dashboard renders for one set of selections"""
    kpis: KPISummary
    growth: float
    period: str
    selected_year: Optional[str]
    region: str
    chart_data: List[ChartPoint]
    chart_labels: List[str]
    chart_label_interval: int
    location_revenue: List[LocationRevenue]
    location_count: int
    top_movies: List[MovieRanking]
    top_theaters: List[TheaterRanking]
    available_years: List[str]
    region_options: List[str]
    display: Dict[str, str]
