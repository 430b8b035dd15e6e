"""
Database Models - Movie Warehouse Star Schema

Fact Table:
- FactTicketSale: ticket sales with tickets sold, amount and discount

Dimension Tables:
- DimCustomer: customers (served, not aggregated)
- DimMovie: movie catalog
- DimTheater: theaters and their city
- DimDate: calendar attributes

Table and column names follow the warehouse as it is loaded; the API
serves rows under these names verbatim.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import (
    Boolean,
    Date,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models"""

    def to_dict(self) -> Dict[str, Any]:
        """Row as a column-name -> value mapping"""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}


# =============================================================================
# DIMENSION TABLES
# =============================================================================

class DimCustomer(Base):
    """Customer Dimension Table"""
    __tablename__ = "customer"

    c_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    c_name: Mapped[Optional[str]] = mapped_column(String(100))
    gender: Mapped[Optional[str]] = mapped_column(String(10))
    age: Mapped[Optional[int]] = mapped_column(Integer)
    city: Mapped[Optional[str]] = mapped_column(String(100))
    email: Mapped[Optional[str]] = mapped_column(String(255))


class DimMovie(Base):
    """Movie Dimension Table"""
    __tablename__ = "movie"

    m_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    genre: Mapped[Optional[str]] = mapped_column(String(50))
    release_date: Mapped[Optional[dt.date]] = mapped_column(Date)
    duration: Mapped[Optional[int]] = mapped_column(Integer)  # minutes
    rating: Mapped[Optional[Decimal]] = mapped_column(Numeric(3, 1))
    language: Mapped[Optional[str]] = mapped_column(String(50))


class DimTheater(Base):
    """Theater Dimension Table"""
    __tablename__ = "theater"

    t_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    t_name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(100))
    totalseats: Mapped[Optional[int]] = mapped_column(Integer)
    showtime: Mapped[Optional[str]] = mapped_column(String(20))
    showdate: Mapped[Optional[dt.date]] = mapped_column(Date)


class DimDate(Base):
    """
    Date Dimension Table

    ``quater`` keeps the warehouse's column spelling.
    """
    __tablename__ = "date"

    d_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    day: Mapped[Optional[str]] = mapped_column(String(20))
    month: Mapped[Optional[str]] = mapped_column(String(20))
    quater: Mapped[Optional[int]] = mapped_column(Integer)
    year: Mapped[Optional[int]] = mapped_column(Integer)
    isweekend: Mapped[bool] = mapped_column(Boolean, default=False)

    __table_args__ = (
        Index("ix_date_year_month", "year", "month"),
    )


# =============================================================================
# FACT TABLE
# =============================================================================

class FactTicketSale(Base):
    """Ticket sales fact table"""
    __tablename__ = "fact_table"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # Dimension keys are not enforced as foreign keys
    c_id: Mapped[Optional[int]] = mapped_column(Integer)
    m_id: Mapped[Optional[int]] = mapped_column(Integer)
    t_id: Mapped[Optional[int]] = mapped_column(Integer)
    d_id: Mapped[Optional[int]] = mapped_column(Integer)
    ticketsold: Mapped[int] = mapped_column(Integer, default=0)
    totalamount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    discount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)

    __table_args__ = (
        Index("ix_fact_table_d_id", "d_id"),
        Index("ix_fact_table_t_id", "t_id"),
        Index("ix_fact_table_m_id", "m_id"),
    )
