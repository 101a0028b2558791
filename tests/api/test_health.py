"""Health & Readiness — liveness always up, readiness tracks configuration and connectivity."""

from printdesk.core.errors import ConnectivityError


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_not_ready_before_first_load(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "backend_unavailable"


async def test_ready_after_successful_load(client):
    await client.get("/api/v1/orders")
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["orders"] == 3


async def test_not_ready_after_failed_load(client, repository):
    repository.fail_next("list", ConnectivityError("dns failure", "list"))
    await client.get("/api/v1/orders")
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["error"] == "dns failure"


async def test_not_ready_when_not_configured(unconfigured_client):
    res = await unconfigured_client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "not_configured"
