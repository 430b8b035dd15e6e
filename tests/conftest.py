"""
Test Suite Configuration
"""
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator, Dict, List

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cinedash.analytics import WarehouseSnapshot
from cinedash.config import Settings
from cinedash.database.connection import get_db_dependency
from cinedash.database.models import (
    Base,
    DimCustomer,
    DimDate,
    DimMovie,
    DimTheater,
    FactTicketSale,
)
from cinedash.serving.api.main import create_api_app


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(app_env="testing")


# =============================================================================
# SAMPLE WAREHOUSE
# =============================================================================

@pytest.fixture
def sample_rows() -> Dict[str, List[dict]]:
    """
    Small warehouse in provider JSON shape.

    Fact 5 references theater 99, which does not exist.
    """
    return {
        "customers": [
            {"c_id": 1, "c_name": "Asha Rao", "gender": "F", "age": 29, "city": "Mumbai", "email": "asha@example.com"},
            {"c_id": 2, "c_name": "Vikram Das", "gender": "M", "age": 41, "city": "Delhi", "email": "vikram@example.com"},
        ],
        "movies": [
            {"m_id": 1, "title": "Jawan", "genre": "Action", "release_date": "2023-09-07T00:00:00.000Z",
             "duration": 169, "rating": "7.0", "language": "Hindi"},
            {"m_id": 2, "title": "Leo", "genre": "Thriller", "release_date": "2023-10-19",
             "duration": 164, "rating": "7.2", "language": "Tamil"},
            {"m_id": 3, "title": "Dunki", "genre": "Drama", "release_date": "2023-12-21",
             "duration": 161, "rating": "6.7", "language": "Hindi"},
        ],
        "theaters": [
            {"t_id": 1, "t_name": "PVR Phoenix", "location": "Mumbai", "totalseats": 300,
             "showtime": "19:00", "showdate": "2024-01-05"},
            {"t_id": 2, "t_name": "INOX Forum", "location": "Bangalore", "totalseats": 240,
             "showtime": "16:45", "showdate": "2024-02-10"},
            {"t_id": 3, "t_name": "Carnival Cinemas", "location": "Delhi", "totalseats": 180,
             "showtime": "13:30", "showdate": "2024-04-15"},
        ],
        "dates": [
            {"d_id": 1, "date": "2024-01-05", "day": "Friday", "month": "January", "quater": 1, "year": 2024, "isweekend": False},
            {"d_id": 2, "date": "2024-02-10", "day": "Saturday", "month": "February", "quater": 1, "year": 2024, "isweekend": True},
            {"d_id": 3, "date": "2024-04-15", "day": "Monday", "month": "April", "quater": 2, "year": 2024, "isweekend": False},
            {"d_id": 4, "date": "2023-12-25", "day": "Monday", "month": "December", "quater": 4, "year": 2023, "isweekend": False},
        ],
        "facts": [
            {"id": 1, "c_id": 1, "m_id": 1, "t_id": 1, "d_id": 1, "ticketsold": 4, "totalamount": "1000.00", "discount": "50.00"},
            {"id": 2, "c_id": 2, "m_id": 2, "t_id": 2, "d_id": 2, "ticketsold": 2, "totalamount": "600.00", "discount": "0.00"},
            {"id": 3, "c_id": 1, "m_id": 1, "t_id": 3, "d_id": 3, "ticketsold": 3, "totalamount": "900.00", "discount": "30.00"},
            {"id": 4, "c_id": 2, "m_id": 3, "t_id": 1, "d_id": 4, "ticketsold": 5, "totalamount": "1500.00", "discount": "100.00"},
            {"id": 5, "c_id": 1, "m_id": 2, "t_id": 99, "d_id": 1, "ticketsold": 1, "totalamount": "200.00", "discount": "0.00"},
        ],
    }


@pytest.fixture
def snapshot(sample_rows) -> WarehouseSnapshot:
    return WarehouseSnapshot.from_records(**sample_rows)


@pytest.fixture
def mumbai_snapshot() -> WarehouseSnapshot:
    """One fact: 10 tickets for 1000 in Mumbai, January 2024"""
    return WarehouseSnapshot.from_records(
        movies=[{"m_id": 1, "title": "Jawan", "genre": "Action"}],
        theaters=[{"t_id": 1, "t_name": "PVR Phoenix", "location": "Mumbai"}],
        dates=[{"d_id": 1, "date": "2024-01-15", "month": "January", "year": 2024}],
        facts=[{"id": 1, "m_id": 1, "t_id": 1, "d_id": 1, "ticketsold": 10, "totalamount": 1000, "discount": 0}],
    )


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
async def test_engine():
    """In-memory warehouse shared by every connection of one test"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session"""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_db(test_db, sample_rows) -> AsyncSession:
    """Test session with the sample warehouse loaded"""
    rows = sample_rows
    test_db.add_all([DimCustomer(**row) for row in rows["customers"]])
    test_db.add_all([
        DimMovie(
            m_id=row["m_id"],
            title=row["title"],
            genre=row["genre"],
            release_date=date.fromisoformat(row["release_date"][:10]),
            duration=row["duration"],
            rating=Decimal(row["rating"]),
            language=row["language"],
        )
        for row in rows["movies"]
    ])
    test_db.add_all([
        DimTheater(**{**row, "showdate": date.fromisoformat(row["showdate"])})
        for row in rows["theaters"]
    ])
    test_db.add_all([
        DimDate(**{**row, "date": date.fromisoformat(row["date"])})
        for row in rows["dates"]
    ])
    test_db.add_all([
        FactTicketSale(
            **{**row, "totalamount": Decimal(row["totalamount"]), "discount": Decimal(row["discount"])}
        )
        for row in rows["facts"]
    ])
    await test_db.commit()
    return test_db


# =============================================================================
# API
# =============================================================================

@pytest.fixture
async def api_client(seeded_db) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client against the API, backed by the seeded test database"""
    app = create_api_app()

    async def override_db():
        yield seeded_db

    app.dependency_overrides[get_db_dependency] = override_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def offline_api_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client against an API whose database was never initialized"""
    transport = httpx.ASGITransport(app=create_api_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
