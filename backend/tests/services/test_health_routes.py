"""Liveness and readiness probes."""

import cityinfo.infrastructure.database as database


class _Manager:
    def __init__(self, healthy: bool):
        self.healthy = healthy

    async def health_check(self) -> bool:
        return self.healthy


async def test_liveness_is_always_200(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_database_is_503(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_with_healthy_database(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", _Manager(True))
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy"}
