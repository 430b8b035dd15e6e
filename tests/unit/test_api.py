"""
Unit Tests - Warehouse & Dashboard API
"""
import pytest

from cinedash.client import TABLE_ENDPOINTS
from cinedash.serving.api import resource_for_path


class TestWarehouseEndpoints:
    """Full-table endpoints"""

    @pytest.mark.parametrize("table,count", [
        ("customers", 2),
        ("movies", 3),
        ("theaters", 3),
        ("dates", 4),
        ("facts", 5),
    ])
    async def test_table_row_counts(self, api_client, table, count):
        """Test each endpoint serves every row of its table"""
        response = await api_client.get(TABLE_ENDPOINTS[table])

        assert response.status_code == 200
        assert len(response.json()) == count

    async def test_rows_keep_warehouse_columns(self, api_client):
        """Test rows keep the warehouse column names and values"""
        facts = (await api_client.get("/api/facts")).json()
        dates = (await api_client.get("/api/dates")).json()

        assert set(facts[0]) == {"id", "c_id", "m_id", "t_id", "d_id", "ticketsold", "totalamount", "discount"}
        assert float(facts[0]["totalamount"]) == 1000.0
        # Facts are served even when their theater does not exist
        assert facts[4]["t_id"] == 99
        assert dates[0]["date"] == "2024-01-05"
        assert dates[0]["quater"] == 1

    async def test_database_unavailable(self, offline_api_client):
        """Test table endpoints answer 503 without a database"""
        response = await offline_api_client.get("/api/facts")
        assert response.status_code == 503


class TestDashboardEndpoint:
    """Server-side dashboard"""

    async def test_default_selections(self, api_client):
        """Test the dashboard with default selections"""
        response = await api_client.get("/api/dashboard")

        assert response.status_code == 200
        body = response.json()
        assert body["period"] == "monthly"
        assert body["region"] == "All"
        assert body["selected_year"] == "2023"
        assert body["kpis"]["total_revenue"] == 4200.0
        assert body["kpis"]["avg_ticket_price"] == 280
        assert body["kpis"]["top_revenue_location"] == "Mumbai"
        assert body["display"]["discount_share"] == "4.3%"

    async def test_rankings_carry_integer_counts(self, api_client):
        """Test seat counts and durations are served as integers"""
        body = (await api_client.get("/api/dashboard")).json()

        theater = body["top_theaters"][0]
        movie = body["top_movies"][0]
        assert theater["name"] == "PVR Phoenix"
        assert theater["total_seats"] == 300
        assert isinstance(theater["total_seats"], int)
        assert movie["duration"] == 169
        assert isinstance(movie["duration"], int)

    async def test_quarterly_for_year(self, api_client):
        """Test period and year query parameters"""
        response = await api_client.get("/api/dashboard", params={"period": "quarterly", "year": "2024"})

        chart = response.json()["chart_data"]
        assert [(p["label"], p["revenue"]) for p in chart] == [("Q1", 1800.0), ("Q2", 900.0)]

    async def test_region_filter(self, api_client):
        """Test the region query parameter filters location revenue"""
        response = await api_client.get("/api/dashboard", params={"region": "West"})

        locations = response.json()["location_revenue"]
        assert locations == [{"location": "Mumbai", "revenue": 2500.0}]

    async def test_unknown_region(self, api_client):
        """Test an unknown region is rejected"""
        response = await api_client.get("/api/dashboard", params={"region": "Atlantis"})
        assert response.status_code == 422

    async def test_unknown_period(self, api_client):
        """Test an unknown period is rejected"""
        response = await api_client.get("/api/dashboard", params={"period": "yearly"})
        assert response.status_code == 422


class TestHealth:
    """Health and probes"""

    async def test_liveness(self, offline_api_client):
        """Test liveness does not need the database"""
        response = await offline_api_client.get("/api/health/live")
        assert response.json() == {"status": "alive"}

    async def test_readiness_without_database(self, offline_api_client):
        """Test readiness fails without the database"""
        response = await offline_api_client.get("/api/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"

    async def test_health_degraded_without_database(self, offline_api_client):
        """Test health reports a degraded database check"""
        body = (await offline_api_client.get("/api/health")).json()

        assert body["status"] == "degraded"
        assert body["checks"]["database"]["status"] == "unhealthy"


class TestRequestMiddleware:
    """Request ids and response headers"""

    async def test_response_headers(self, offline_api_client):
        """Test every response carries request id, timing and hardening headers"""
        response = await offline_api_client.get("/api/info")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"] == "no-store"
        assert response.headers["X-Response-Time"].endswith("ms")
        assert len(response.headers["X-Request-ID"]) == 32

    async def test_request_id_passthrough(self, api_client):
        """Test a caller-supplied request id is echoed back"""
        response = await api_client.get("/api/facts", headers={"X-Request-ID": "load-42"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "load-42"

    async def test_headers_on_error_response(self, offline_api_client):
        """Test error responses still carry a request id"""
        response = await offline_api_client.get("/api/theaters")

        assert response.status_code == 503
        assert "X-Request-ID" in response.headers

    @pytest.mark.parametrize("path,expected", [
        ("/api/facts", "facts"),
        ("/api/dashboard", "dashboard"),
        ("/api/health/ready", "health"),
        ("/api/", None),
        ("/docs", None),
    ])
    def test_resource_for_path(self, path, expected):
        """Test the resource bound to a request is its first /api segment"""
        assert resource_for_path(path) == expected
