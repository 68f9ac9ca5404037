"""Shared pytest fixtures for coursekit tests."""

from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coursekit.config import Settings
from coursekit.dependencies import get_app_settings
from coursekit.models.classifier import Sample, SampleSet
from coursekit.plugins.registry import PluginRegistry
from coursekit.routers import classifier, widgets


def make_sample_set(pairs: list[tuple[float, bool]]) -> SampleSet:
    """Build a SampleSet from (score, label) pairs."""
    return SampleSet(samples=tuple(Sample(score=s, label=lbl) for s, lbl in pairs))


@pytest.fixture()
def sample_data_dir(tmp_path: Path) -> Path:
    """Directory that relative import paths resolve against."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture()
def settings(sample_data_dir: Path) -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        plugin_dir=Path("/nonexistent/plugins"),
        sample_data_dir=sample_data_dir,
        max_samples=5_000,
    )


@pytest.fixture()
def plugin_registry() -> PluginRegistry:
    """Empty registry; tests register plugins explicitly."""
    return PluginRegistry()


@pytest.fixture()
def separable_samples() -> SampleSet:
    """Two positives above two negatives: a perfect classifier."""
    return make_sample_set([(0.9, True), (0.8, True), (0.3, False), (0.1, False)])


@pytest.fixture()
async def app_client(
    settings: Settings, plugin_registry: PluginRegistry
) -> httpx.AsyncClient:
    """Create a FastAPI test app with both routers and yield an async HTTP client."""

    test_app = FastAPI()

    test_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @test_app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    test_app.state.plugin_registry = plugin_registry
    test_app.dependency_overrides[get_app_settings] = lambda: settings

    test_app.include_router(classifier.router)
    test_app.include_router(widgets.router)

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=test_app),
        base_url="http://testserver",
    ) as client:
        yield client
