"""
Tests for health check endpoints.
"""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from leavesync.main import app

client = TestClient(app)


def test_healthz_endpoint():
    """Test the basic health check endpoint."""
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


def test_readyz_endpoint_database_healthy():
    db_health = {
        "healthy": True,
        "service": "database_pool",
        "connection_time_ms": 1.2,
        "pool_stats": {"pool_size": 2, "pool_available": 2, "requests_waiting": 0},
    }
    with patch("leavesync.routes.health.db_health_check", AsyncMock(return_value=db_health)):
        response = client.get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is True
    assert data["checks"]["database"]["ok"] is True
    assert data["checks"]["database"]["pool_stats"]["pool_size"] == 2
    assert data["checks"]["configuration"]["ok"] is True


def test_readyz_endpoint_database_unhealthy():
    db_health = {"healthy": False, "error": "Pool not initialized", "service": "database_pool"}
    with patch("leavesync.routes.health.db_health_check", AsyncMock(return_value=db_health)):
        response = client.get("/readyz")

    # Still 200, but overall_ok reflects the failing dependency
    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["database"]["error"] == "Pool not initialized"


def test_readyz_endpoint_database_check_raises():
    with patch(
        "leavesync.routes.health.db_health_check", AsyncMock(side_effect=RuntimeError("down"))
    ):
        response = client.get("/readyz")

    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["database"]["error"] == "RuntimeError: down"


def test_readyz_reports_holiday_source_state():
    db_health = {"healthy": True, "service": "database_pool"}
    with (
        patch("leavesync.routes.health.db_health_check", AsyncMock(return_value=db_health)),
        patch("leavesync.routes.health.settings.CALENDARIFIC_API_KEY", None),
    ):
        response = client.get("/readyz")

    data = response.json()
    assert data["overall_ok"] is True
    assert data["checks"]["configuration"]["holiday_source_enabled"] is False


def test_database_health_endpoint_uninitialized_pool():
    response = client.get("/health/database")

    assert response.status_code == 200
    assert response.json()["healthy"] is False
