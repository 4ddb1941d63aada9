from __future__ import annotations

from unittest.mock import patch

from starlette.testclient import TestClient

from ems.core.database import database
from ems.main import app


def test_health_reports_database(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["services"]["database"] == "ok"


def test_health_without_database_is_not_configured(monkeypatch):
    from ems.core.config import settings

    monkeypatch.setattr(settings, "DATABASE_URL", "")
    with TestClient(app) as c:
        data = c.get("/api/health").json()
        ready = c.get("/api/health/ready").json()

    assert data["status"] == "healthy"
    assert data["services"]["database"] == "not_configured"
    assert ready["ready"] is False
    assert database.initialized is False


def test_endpoints_return_503_without_database(monkeypatch):
    from ems.core.config import settings

    monkeypatch.setattr(settings, "DATABASE_URL", "")
    with TestClient(app) as c:
        response = c.get("/api/setup/status")

    assert response.status_code == 503
    assert response.json()["detail"] == "Database not available"


def test_health_degraded_when_connection_fails(client):
    with patch.object(database, "check_connection", return_value=False):
        data = client.get("/api/health").json()

    assert data["status"] == "degraded"
    assert data["services"]["database"] == "error"


def test_readiness_probe(client):
    response = client.get("/api/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["ready"] is True


def test_health_protected_requires_auth(client):
    response = client.get("/api/health/protected")
    assert response.status_code == 401


def test_health_protected_with_auth(authenticated_client):
    response = authenticated_client.get("/api/health/protected")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["user"]["role"] == "ADMIN"
    assert data["user"]["email"] == "admin@ems.test"
