"""
Top-N Rankings

Ranks movies and theaters by revenue accumulated over all facts.
"""

from typing import List, Optional, Sequence

import polars as pl
import structlog

from cinedash.config import get_settings
from .records import WarehouseSnapshot
from .views import MovieRanking, TheaterRanking

logger = structlog.get_logger(__name__)

MOVIE_ATTRIBUTES = ["genre", "language", "duration", "rating", "release_date"]
THEATER_ATTRIBUTES = ["location", "totalseats"]


def _warn_on_conflicts(joined: pl.DataFrame, key: str, attributes: Sequence[str]) -> None:
    """Log keys whose dimension rows disagree; the first-seen row is kept."""
    conflicts = (
        joined.group_by(key)
        .agg([pl.col(a).n_unique().alias(a) for a in attributes])
        .filter(pl.any_horizontal([pl.col(a) > 1 for a in attributes]))
    )
    if not conflicts.is_empty():
        logger.warning(
            "Conflicting dimension attributes for ranking key",
            key=key,
            values=sorted(str(v) for v in conflicts[key].to_list()),
        )


def _rank(
    joined: pl.DataFrame,
    key: str,
    attributes: Sequence[str],
    limit: int,
) -> pl.DataFrame:
    _warn_on_conflicts(joined, key, attributes)
    return (
        joined.group_by(key, maintain_order=True)
        .agg(
            [pl.col(a).first() for a in attributes]
            + [
                pl.col("ticketsold").sum().alias("tickets_sold"),
                pl.col("totalamount").sum().alias("total_amount"),
            ]
        )
        .sort("total_amount", descending=True, maintain_order=True)
        .head(limit)
    )


def _limit(n: Optional[int]) -> int:
    return get_settings().dashboard.top_n if n is None else n


def top_movies(snapshot: WarehouseSnapshot, n: Optional[int] = None) -> List[MovieRanking]:
    """
    Top movies by total revenue, grouped by title.

    Ties keep the order in which titles were first seen in the fact table.
    """
    ranked = _rank(snapshot.resolve("movie"), "title", MOVIE_ATTRIBUTES, _limit(n))
    return [
        MovieRanking(
            title=row["title"],
            genre=row["genre"],
            language=row["language"],
            duration=row["duration"],
            rating=row["rating"],
            release_date=row["release_date"],
            tickets_sold=row["tickets_sold"],
            total_amount=row["total_amount"],
        )
        for row in ranked.iter_rows(named=True)
    ]


def top_theaters(snapshot: WarehouseSnapshot, n: Optional[int] = None) -> List[TheaterRanking]:
    """Top theaters by total revenue, grouped by theater name."""
    ranked = _rank(snapshot.resolve("theater"), "t_name", THEATER_ATTRIBUTES, _limit(n))
    return [
        TheaterRanking(
            name=row["t_name"],
            location=row["location"],
            total_seats=row["totalseats"],
            tickets_sold=row["tickets_sold"],
            total_amount=row["total_amount"],
        )
        for row in ranked.iter_rows(named=True)
    ]
