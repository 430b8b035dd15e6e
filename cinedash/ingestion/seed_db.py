"""
Database Seeder

Creates the warehouse tables and fills them with generated demo data.

Usage:
    cinedash-seed --facts 5000
    python -m cinedash.ingestion.seed_db --start-year 2023
"""

import argparse
import asyncio
from typing import Any, Dict, List, Optional, Sequence

import polars as pl
import structlog
from sqlalchemy.dialects.postgresql import insert

from cinedash.config.logging import configure_logging
from cinedash.data.generators import DataGenerator
from cinedash.database.connection import close_database, get_db, get_engine, init_database
from cinedash.database.models import Base
from cinedash.database.warehouse import WAREHOUSE_TABLES

logger = structlog.get_logger(__name__)

CHUNK_SIZE = 1000

# Dimensions before facts
SEED_ORDER = ["customers", "movies", "theaters", "dates", "facts"]


def frame_records(df: pl.DataFrame, model: Any) -> List[Dict[str, Any]]:
    """Rows of a generated frame restricted to the model's columns"""
    columns = [column.key for column in model.__table__.columns if column.key in df.columns]
    return df.select(columns).to_dicts()


async def execute_batch_insert(model: Any, records: List[Dict[str, Any]]) -> int:
    """Insert records in chunks, skipping rows whose primary key already exists"""
    if not records:
        return 0

    async with get_db() as db:
        for i in range(0, len(records), CHUNK_SIZE):
            chunk = records[i:i + CHUNK_SIZE]
            stmt = insert(model).values(chunk).on_conflict_do_nothing()
            await db.execute(stmt)
        await db.commit()

    logger.info("Inserted records", table=model.__tablename__, count=len(records))
    return len(records)


async def create_tables() -> None:
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed(tables: Dict[str, pl.DataFrame]) -> Dict[str, int]:
    """Insert generated tables; returns rows submitted per table"""
    counts = {}
    for table in SEED_ORDER:
        model = WAREHOUSE_TABLES[table]
        counts[table] = await execute_batch_insert(model, frame_records(tables[table], model))
    return counts


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the movie warehouse with demo data")
    parser.add_argument("--customers", type=int, default=200, help="Number of customers (default: 200)")
    parser.add_argument("--movies", type=int, default=30, help="Number of movies (default: 30)")
    parser.add_argument("--theaters", type=int, default=25, help="Number of theaters (default: 25)")
    parser.add_argument("--facts", type=int, default=5000, help="Number of ticket sales (default: 5000)")
    parser.add_argument("--start-year", type=int, default=None, help="First calendar year")
    parser.add_argument("--end-year", type=int, default=None, help="Last calendar year (default: current)")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> Dict[str, int]:
    logger.info("Starting database seeding...")
    await init_database(args.database_url)

    try:
        await create_tables()
        tables = DataGenerator().generate_all(
            n_customers=args.customers,
            n_movies=args.movies,
            n_theaters=args.theaters,
            n_facts=args.facts,
            start_year=args.start_year,
            end_year=args.end_year,
        )
        counts = await seed(tables)
        logger.info("Database seeding completed", **counts)
        return counts
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        raise
    finally:
        await close_database()


def main(argv: Optional[Sequence[str]] = None) -> None:
    configure_logging()
    asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    main()
