import pytest


def test_root_returns_message(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Employee Management API"


def test_health_returns_status(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] in ("healthy", "degraded")
    assert data["version"] == "0.1.0"
    assert "services" in data


def test_unknown_route_is_404(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404


@pytest.mark.anyio
async def test_setup_status_over_async_client(async_client):
    response = await async_client.get("/api/setup/status")
    assert response.status_code == 200
    assert response.json() == {"needsSetup": True}


@pytest.mark.anyio
async def test_cors_preflight(async_client):
    response = await async_client.options(
        "/api/employees",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 200
