"""FastAPI dependency injection for settings, plugins, and presets."""

from fastapi import Depends, Request

from coursekit.config import Settings, get_settings
from coursekit.models.classifier import SampleConfig
from coursekit.plugins.registry import PluginRegistry
from coursekit.services.sample_generation import available_presets


def get_plugin_registry(request: Request) -> PluginRegistry:
    """Return the application-wide PluginRegistry stored on app.state."""
    return request.app.state.plugin_registry


def get_presets(
    plugin_registry: PluginRegistry = Depends(get_plugin_registry),
) -> dict[str, SampleConfig]:
    """Built-in presets merged with those contributed by plugins."""
    return available_presets(plugin_registry.collect_presets())


def get_app_settings() -> Settings:
    """Settings dependency; tests override this via ``dependency_overrides``."""
    return get_settings()
