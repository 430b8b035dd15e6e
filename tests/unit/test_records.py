"""
Unit Tests - Warehouse Records & Snapshot
"""
from datetime import date, datetime
from decimal import Decimal

import polars as pl
import pytest

from cinedash.analytics import DashboardSelections, Period, WarehouseSnapshot
from cinedash.analytics.records import (
    DateRow,
    Fact,
    Movie,
    Theater,
    coerce_calendar_date,
    coerce_key,
    coerce_number,
    coerce_optional_int,
    parse_rows,
)
from cinedash.exceptions import SelectionError


class TestCoercion:
    """Lenient parsing of provider values"""

    @pytest.mark.parametrize("value,expected", [
        ("1000.00", 1000.0),
        (Decimal("12.50"), 12.5),
        (7, 7.0),
        (None, 0.0),
        ("not a number", 0.0),
        ("NaN", 0.0),
        (float("inf"), 0.0),
    ])
    def test_coerce_number(self, value, expected):
        """Test measures fall back to 0 when missing or not finite"""
        assert coerce_number(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (7, 7),
        ("7", 7),
        (7.0, 7),
        (7.5, None),
        (float("nan"), None),
        (True, None),
        ("abc", None),
        (None, None),
    ])
    def test_coerce_key(self, value, expected):
        """Test only whole numbers become join keys"""
        assert coerce_key(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (169, 169),
        ("240", 240),
        (164.6, 165),
        ("", None),
        ("ninety", None),
        (None, None),
    ])
    def test_coerce_optional_int(self, value, expected):
        """Test whole-number attributes round and keep missing as None"""
        assert coerce_optional_int(value) == expected

    def test_coerce_calendar_date(self):
        """Test ISO dates and timestamps reduce to calendar dates"""
        assert coerce_calendar_date("2024-01-05") == date(2024, 1, 5)
        assert coerce_calendar_date("2024-01-05T00:00:00.000Z") == date(2024, 1, 5)
        assert coerce_calendar_date(datetime(2024, 1, 5, 18, 30)) == date(2024, 1, 5)
        assert coerce_calendar_date("05/01/2024") is None
        assert coerce_calendar_date(None) is None


class TestRecords:
    """Row models"""

    def test_fact_coerces_json_strings(self):
        """Test JSON strings parse into fact measures"""
        fact = Fact.model_validate({"id": 1, "ticketsold": "10", "totalamount": "1000.00", "discount": None})

        assert fact.ticketsold == 10
        assert fact.totalamount == 1000.0
        assert fact.discount == 0.0
        assert fact.m_id is None

    def test_integer_attributes(self):
        """Test durations and seat counts parse as integers"""
        movie = Movie.model_validate({"m_id": 1, "title": "Jawan", "duration": "169"})
        theater = Theater.model_validate({"t_id": 1, "t_name": "PVR", "totalseats": 300.0})

        assert movie.duration == 169
        assert isinstance(movie.duration, int)
        assert theater.totalseats == 300
        assert isinstance(theater.totalseats, int)
        assert Theater.model_validate({"t_id": 2}).totalseats is None

    def test_unknown_columns_ignored(self):
        """Test columns outside the model are dropped"""
        theater = Theater.model_validate({"t_id": 1, "t_name": "PVR", "screens": 8})
        assert not hasattr(theater, "screens")

    def test_date_row_keeps_warehouse_spelling(self):
        """Test the quater column keeps its warehouse name"""
        row = DateRow.model_validate({"d_id": 1, "quater": "2", "year": "2024", "month": "April"})
        assert row.quater == 2
        assert row.year == 2024

    def test_parse_rows_returns_tuple(self, sample_rows):
        """Test parsed tables are immutable tuples"""
        facts = parse_rows("facts", sample_rows["facts"])
        assert isinstance(facts, tuple)
        assert len(facts) == 5

    def test_records_are_frozen(self):
        """Test records cannot be mutated"""
        fact = Fact(id=1)
        with pytest.raises(Exception):
            fact.ticketsold = 3


class TestWarehouseSnapshot:
    """Dimension lookups and fact resolution"""

    def test_resolve_drops_unknown_keys(self, snapshot):
        """Test facts with unresolvable keys drop out of the join"""
        resolved = snapshot.resolve("theater")

        # Fact 5 points at theater 99
        assert resolved.height == 4
        assert 99 not in resolved["t_id"].to_list()

    def test_resolve_keeps_fact_order(self, snapshot):
        """Test resolved rows keep fact table order"""
        resolved = snapshot.resolve("movie")
        assert resolved["title"].to_list() == ["Jawan", "Leo", "Jawan", "Dunki", "Leo"]

    def test_integer_dimension_columns(self, snapshot):
        """Test duration and seat columns are integer typed"""
        assert snapshot.resolve("movie")["duration"].dtype == pl.Int64
        assert snapshot.resolve("theater")["totalseats"].dtype == pl.Int64

    def test_first_dimension_row_wins(self):
        """Test duplicate dimension ids resolve to the first row"""
        snapshot = WarehouseSnapshot.from_records(
            movies=[
                {"m_id": 1, "title": "Original"},
                {"m_id": 1, "title": "Duplicate"},
            ],
            facts=[{"id": 1, "m_id": 1, "totalamount": 100}],
        )

        assert snapshot.resolve("movie")["title"].to_list() == ["Original"]

    def test_empty_snapshot(self):
        """Test an empty snapshot resolves to empty frames"""
        snapshot = WarehouseSnapshot()

        assert snapshot.fact_frame.is_empty()
        assert snapshot.resolve("date").is_empty()


class TestDashboardSelections:
    """Selection validation"""

    def test_defaults(self):
        """Test monthly, All regions and no year by default"""
        selections = DashboardSelections()
        assert selections.period is Period.MONTHLY
        assert selections.region == "All"
        assert selections.year is None

    def test_period_string_is_converted(self):
        """Test period strings convert to Period"""
        assert DashboardSelections(period="weekly").period is Period.WEEKLY

    def test_year_is_stringified(self):
        """Test years are stored as strings"""
        assert DashboardSelections(year=2024).year == "2024"

    def test_invalid_period(self):
        """Test an unknown period raises SelectionError"""
        with pytest.raises(SelectionError):
            DashboardSelections(period="yearly")

    def test_invalid_region(self):
        """Test an unknown region raises SelectionError"""
        with pytest.raises(SelectionError):
            DashboardSelections(region="Atlantis")
