"""
Warehouse Records

Pydantic models for the rows served by the data provider, plus the
immutable snapshot and selection objects the aggregation functions consume.

Rows arrive as JSON (NUMERIC columns as strings, dates as ISO strings) or
straight from the ORM, so every field is coerced leniently: measures fall
back to 0, keys and optional attributes fall back to None.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import cached_property
from typing import Annotated, Any, Dict, Iterable, Mapping, Optional, Tuple
import math

import polars as pl
from pydantic import BaseModel, BeforeValidator, ConfigDict

from cinedash.exceptions import SelectionError


# =============================================================================
# COERCION
# =============================================================================

def coerce_number(value: Any) -> float:
    """Parse a measure, treating missing or non-numeric values as 0."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def coerce_count(value: Any) -> int:
    return int(coerce_number(value))


def coerce_optional_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def coerce_optional_int(value: Any) -> Optional[int]:
    """Whole-number attribute such as minutes or seats; fractions are rounded."""
    number = coerce_optional_number(value)
    return None if number is None else int(round(number))


def coerce_key(value: Any) -> Optional[int]:
    """Parse an id; anything unparseable becomes an unresolvable key."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (float, Decimal)):
        if not math.isfinite(value) or value != int(value):
            return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def coerce_calendar_date(value: Any) -> Optional[date]:
    """Accept date, datetime or ISO strings ("2024-01-05", "2024-01-05T00:00:00.000Z")."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def coerce_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


Amount = Annotated[float, BeforeValidator(coerce_number)]
Count = Annotated[int, BeforeValidator(coerce_count)]
Key = Annotated[Optional[int], BeforeValidator(coerce_key)]
OptionalNumber = Annotated[Optional[float], BeforeValidator(coerce_optional_number)]
OptionalInt = Annotated[Optional[int], BeforeValidator(coerce_optional_int)]
CalendarDate = Annotated[Optional[date], BeforeValidator(coerce_calendar_date)]
Text = Annotated[Optional[str], BeforeValidator(coerce_text)]


# =============================================================================
# RECORDS
# =============================================================================

class WarehouseRecord(BaseModel):
    """Base class for warehouse rows"""
    model_config = ConfigDict(frozen=True, extra="ignore")


class Fact(WarehouseRecord):
    """One ticket-sale transaction"""
    id: Key = None
    c_id: Key = None
    m_id: Key = None
    t_id: Key = None
    d_id: Key = None
    ticketsold: Count = 0
    totalamount: Amount = 0.0
    discount: Amount = 0.0


class Movie(WarehouseRecord):
    m_id: Key = None
    title: Text = None
    genre: Text = None
    release_date: CalendarDate = None
    duration: OptionalInt = None
    rating: OptionalNumber = None
    language: Text = None


class Theater(WarehouseRecord):
    t_id: Key = None
    t_name: Text = None
    location: Text = None
    totalseats: OptionalInt = None
    showtime: Text = None
    showdate: CalendarDate = None


class DateRow(WarehouseRecord):
    d_id: Key = None
    date: CalendarDate = None
    day: Text = None
    month: Text = None
    quater: Key = None
    year: Key = None
    isweekend: Optional[bool] = None


class Customer(WarehouseRecord):
    """Customer dimension; carried through but not aggregated"""
    model_config = ConfigDict(frozen=True, extra="allow")

    c_id: Key = None


TABLE_MODELS: Dict[str, type] = {
    "customers": Customer,
    "movies": Movie,
    "theaters": Theater,
    "dates": DateRow,
    "facts": Fact,
}


def parse_rows(table: str, rows: Iterable[Mapping[str, Any]]) -> Tuple[WarehouseRecord, ...]:
    """Validate raw rows of one table into records."""
    model = TABLE_MODELS[table]
    return tuple(model.model_validate(row) for row in rows)


# =============================================================================
# FRAME SCHEMAS
# =============================================================================

FACT_SCHEMA: Dict[str, Any] = {
    "m_id": pl.Int64,
    "t_id": pl.Int64,
    "d_id": pl.Int64,
    "ticketsold": pl.Int64,
    "totalamount": pl.Float64,
    "discount": pl.Float64,
}

MOVIE_SCHEMA: Dict[str, Any] = {
    "m_id": pl.Int64,
    "title": pl.Utf8,
    "genre": pl.Utf8,
    "release_date": pl.Date,
    "duration": pl.Int64,
    "rating": pl.Float64,
    "language": pl.Utf8,
}

THEATER_SCHEMA: Dict[str, Any] = {
    "t_id": pl.Int64,
    "t_name": pl.Utf8,
    "location": pl.Utf8,
    "totalseats": pl.Int64,
}

DATE_SCHEMA: Dict[str, Any] = {
    "d_id": pl.Int64,
    "date": pl.Date,
    "month": pl.Utf8,
    "year": pl.Int64,
}


def _frame(records: Iterable[WarehouseRecord], schema: Dict[str, Any]) -> pl.DataFrame:
    rows = [record.model_dump(include=set(schema)) for record in records]
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema)


def _dimension_frame(records: Iterable[WarehouseRecord], schema: Dict[str, Any], key: str) -> pl.DataFrame:
    # Id -> row index; the first row wins when an id repeats
    return (
        _frame(records, schema)
        .filter(pl.col(key).is_not_null())
        .unique(subset=[key], keep="first", maintain_order=True)
    )


# =============================================================================
# SNAPSHOT & SELECTIONS
# =============================================================================

@dataclass(frozen=True)
class WarehouseSnapshot:
    """
    Immutable view of the five warehouse tables.

    Frames are derived once per snapshot; the aggregation functions only
    read them.
    """
    customers: Tuple[Customer, ...] = ()
    movies: Tuple[Movie, ...] = ()
    theaters: Tuple[Theater, ...] = ()
    dates: Tuple[DateRow, ...] = ()
    facts: Tuple[Fact, ...] = ()

    @classmethod
    def from_records(
        cls,
        customers: Iterable[Mapping[str, Any]] = (),
        movies: Iterable[Mapping[str, Any]] = (),
        theaters: Iterable[Mapping[str, Any]] = (),
        dates: Iterable[Mapping[str, Any]] = (),
        facts: Iterable[Mapping[str, Any]] = (),
    ) -> "WarehouseSnapshot":
        """Build a snapshot from raw row mappings (JSON or ORM dicts)."""
        return cls(
            customers=parse_rows("customers", customers),
            movies=parse_rows("movies", movies),
            theaters=parse_rows("theaters", theaters),
            dates=parse_rows("dates", dates),
            facts=parse_rows("facts", facts),
        )

    @cached_property
    def fact_frame(self) -> pl.DataFrame:
        return _frame(self.facts, FACT_SCHEMA).with_row_index("_row")

    @cached_property
    def movie_index(self) -> pl.DataFrame:
        return _dimension_frame(self.movies, MOVIE_SCHEMA, "m_id")

    @cached_property
    def theater_index(self) -> pl.DataFrame:
        return _dimension_frame(self.theaters, THEATER_SCHEMA, "t_id")

    @cached_property
    def date_index(self) -> pl.DataFrame:
        return _dimension_frame(self.dates, DATE_SCHEMA, "d_id")

    def resolve(self, dimension: str) -> pl.DataFrame:
        """
        Join facts to one dimension ("movie", "theater" or "date").

        Facts whose key matches no row are dropped; fact order is kept.
        """
        index, key = {
            "movie": (self.movie_index, "m_id"),
            "theater": (self.theater_index, "t_id"),
            "date": (self.date_index, "d_id"),
        }[dimension]
        return self.fact_frame.join(index, on=key, how="inner").sort("_row")


class Period(str, Enum):
    """Revenue chart granularity"""
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    QUARTERLY = "quarterly"


ALL_REGIONS = "All"
REGION_OPTIONS = [ALL_REGIONS, "North", "South", "East", "West", "Central"]


@dataclass(frozen=True)
class DashboardSelections:
    """UI selections that parameterize a dashboard view"""
    period: Period = Period.MONTHLY
    year: Optional[str] = None
    region: str = ALL_REGIONS

    def __post_init__(self):
        try:
            object.__setattr__(self, "period", Period(self.period))
        except ValueError:
            raise SelectionError(f"Unknown period: {self.period!r}") from None
        if self.region not in REGION_OPTIONS:
            raise SelectionError(f"Unknown region: {self.region!r}. Expected one of {REGION_OPTIONS}")
        if self.year is not None:
            object.__setattr__(self, "year", str(self.year))
