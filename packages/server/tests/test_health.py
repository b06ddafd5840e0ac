"""
Health endpoints, route registration, settings and logging setup.
"""

import pytest
import structlog
from structlog.testing import capture_logs
from httpx import AsyncClient, ASGITransport

from elevate.core.config import Settings
from elevate.core.logging import configure_logging, level_number
from elevate.main import app


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
@pytest.mark.parametrize("path,expected", [("/health", "ok"), ("/ready", "ready")])
async def test_health_endpoints(client: AsyncClient, path, expected):
    response = await client.get(path)
    assert response.status_code == 200
    assert response.json() == {"status": expected}


@pytest.mark.asyncio
async def test_api_root_lists_owner_endpoints(client: AsyncClient):
    response = await client.get("/api/v1/")
    assert response.status_code == 200
    data = response.json()
    assert data["api"] == "v1"
    assert "/teams/{team_key}/owners" in data["endpoints"]


@pytest.mark.asyncio
async def test_openapi_exposes_owner_routes(client: AsyncClient):
    paths = (await client.get("/openapi.json")).json()["paths"]
    for entity, key in (("organizations", "organization_key"), ("arts", "art_key"), ("teams", "team_key")):
        assert set(paths[f"/api/v1/{entity}/{{{key}}}/owners"]) == {"get", "put"}
    assert "delete" in paths["/api/v1/teams/{team_key}/members/{employee_key}"]


def test_settings_read_prefixed_env(monkeypatch):
    monkeypatch.setenv("EL_LOG_FORMAT", "text")
    monkeypatch.setenv("EL_JWT_EXPIRE_MINUTES", "5")
    settings = Settings()
    assert settings.log_format == "text"
    assert settings.jwt_expire_minutes == 5


def test_configure_logging_filters_below_level():
    configure_logging("WARNING", "json")
    try:
        with capture_logs() as events:
            log = structlog.get_logger()
            log.info("ownership.reconciled", entity="team")
            log.warning("actor.unresolved", reason="missing_token")
    finally:
        structlog.reset_defaults()

    assert [e["event"] for e in events] == ["actor.unresolved"]
    assert events[0]["log_level"] == "warning"
    assert events[0]["reason"] == "missing_token"


@pytest.mark.parametrize("name,number", [("debug", 10), ("Error", 40), ("verbose", 20)])
def test_level_number(name, number):
    assert level_number(name) == number
