"""Coursekit FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coursekit.config import get_settings
from coursekit.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown.

    On startup:
    - Create the PluginRegistry and discover plugins from the configured
      plugin directory.
    - Store the registry on app.state for dependency injection.

    On shutdown:
    - Shut down the plugin registry.
    """
    settings = get_settings()

    # Plugin registry
    plugin_registry = PluginRegistry()
    plugin_dir = Path(settings.plugin_dir)
    discovered = plugin_registry.discover_plugins(plugin_dir)
    if discovered:
        logger.info("Loaded plugins: %s", ", ".join(discovered))
    app.state.plugin_registry = plugin_registry

    yield

    # Shutdown
    plugin_registry.shutdown()


settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Coursekit",
    description="Interactive widget engines for the clinical ML course",
    version="0.1.0",
    lifespan=lifespan,
)

# Behind a same-origin reverse proxy: no CORS needed.
# In local dev: allow the frontend dev server origin.
if not settings.behind_proxy:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Router includes
from coursekit.routers import classifier, widgets  # noqa: E402

app.include_router(classifier.router)
app.include_router(widgets.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "ok"}
