"""Smoke tests for application health and configuration."""

import httpx
import pytest
from pydantic import ValidationError

from coursekit.config import Settings


def test_settings_defaults() -> None:
    """Defaults match the course widgets' behaviour."""
    settings = Settings(_env_file=None)
    assert settings.default_seed == 42
    assert settings.default_grid_steps == 100
    assert settings.score_floor == 0.01
    assert settings.score_ceiling == 0.99


def test_settings_env_override(monkeypatch) -> None:
    """COURSEKIT_-prefixed environment variables override defaults."""
    monkeypatch.setenv("COURSEKIT_DEFAULT_SEED", "7")
    monkeypatch.setenv("COURSEKIT_BEHIND_PROXY", "true")
    settings = Settings(_env_file=None)
    assert settings.default_seed == 7
    assert settings.behind_proxy is True


def test_settings_reject_zero_grid_steps(monkeypatch) -> None:
    """A grid needs at least one step between its endpoints."""
    monkeypatch.setenv("COURSEKIT_DEFAULT_GRID_STEPS", "0")
    with pytest.raises(ValidationError, match="default_grid_steps"):
        Settings(_env_file=None)


def test_app_includes_all_routers() -> None:
    """The application exposes both routers and the health check."""
    from coursekit.main import app

    paths = set(app.openapi()["paths"])
    assert {
        "/health",
        "/classifier/evaluate",
        "/classifier/samples/import",
        "/widgets/nedocs/trend",
        "/widgets/line-fit",
        "/widgets/multivariable-regression",
        "/widgets/convolution",
    } <= paths


async def test_main_app_serves_health() -> None:
    """The production app answers through its ASGI interface."""
    from coursekit.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")
    assert response.status_code == 200


async def test_health_endpoint(app_client) -> None:
    """GET /health returns status ok."""
    response = await app_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
