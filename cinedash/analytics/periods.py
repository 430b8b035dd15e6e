"""
Period Bucketing

Groups one year of fact revenue into monthly, weekly or quarterly buckets.
"""

from typing import List, Union

import polars as pl
import structlog

from .records import Period, WarehouseSnapshot
from .views import ChartPoint

logger = structlog.get_logger(__name__)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def quarter_for_month(month: str) -> int:
    """1-based quarter of an English month name, 0 when unknown."""
    try:
        return MONTH_NAMES.index(month) // 3 + 1
    except ValueError:
        return 0


_MONTH_ORDER = pl.DataFrame(
    {
        "month": MONTH_NAMES,
        "month_index": list(range(len(MONTH_NAMES))),
        "quarter": [quarter_for_month(month) for month in MONTH_NAMES],
    },
    schema={"month": pl.Utf8, "month_index": pl.Int64, "quarter": pl.Int64},
)


def _with_month_index(df: pl.DataFrame) -> pl.DataFrame:
    return df.join(_MONTH_ORDER, on="month", how="left")


def _label_monthly(df: pl.DataFrame) -> pl.DataFrame:
    # Unknown month names sort ahead of January
    return _with_month_index(df).filter(pl.col("month").is_not_null()).with_columns(
        pl.col("month").alias("label"),
        pl.col("month_index").fill_null(-1).alias("sort_key"),
    )


def _label_quarterly(df: pl.DataFrame) -> pl.DataFrame:
    df = _with_month_index(df).with_columns(pl.col("quarter").fill_null(0).alias("sort_key"))
    return df.with_columns(pl.format("Q{}", pl.col("sort_key")).alias("label"))


def _label_weekly(df: pl.DataFrame) -> pl.DataFrame:
    # ceil((days since Jan 1 + weekday of Jan 1 + 1) / 7), Sunday = 0
    jan1_weekday = pl.date(pl.col("date").dt.year(), 1, 1).dt.weekday().cast(pl.Int64) % 7
    ordinal_day = pl.col("date").dt.ordinal_day().cast(pl.Int64)
    df = df.filter(pl.col("date").is_not_null()).with_columns(
        ((ordinal_day + jan1_weekday + 6) // 7).alias("sort_key")
    )
    return df.with_columns(pl.format("W{}", pl.col("sort_key")).alias("label"))


_LABELLERS = {
    Period.MONTHLY: _label_monthly,
    Period.WEEKLY: _label_weekly,
    Period.QUARTERLY: _label_quarterly,
}


def bucket_revenue(
    snapshot: WarehouseSnapshot,
    period: Union[Period, str],
    year: str,
) -> List[ChartPoint]:
    """
    Sum fact revenue per period label for one year.

    Args:
        snapshot: Warehouse snapshot
        period: monthly, weekly or quarterly
        year: Selected year as a string numeral; compared against str(year)

    Returns:
        Chart points in natural period order (calendar months, ascending
        week and quarter numbers). Empty when the year has no facts.
    """
    period = Period(period)
    if year is None:
        return []

    in_year = snapshot.resolve("date").filter(
        pl.col("year").cast(pl.Utf8) == str(year)
    )
    if in_year.is_empty():
        logger.debug("No facts for selected year", year=year, period=period.value)
        return []

    labelled = _LABELLERS[period](in_year)
    buckets = (
        labelled.group_by("label", maintain_order=True)
        .agg(
            pl.col("totalamount").sum().alias("revenue"),
            pl.col("sort_key").first(),
        )
        .sort("sort_key", maintain_order=True)
    )

    return [
        ChartPoint(label=row["label"], revenue=float(row["revenue"]))
        for row in buckets.iter_rows(named=True)
    ]
