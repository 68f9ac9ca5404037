"""Plugin registry: discovery, preset collection, and hook dispatch.

Plugins live in packages under a plugin directory. Every call into plugin
code goes through :meth:`PluginRegistry._call`, which logs and swallows the
plugin's exception so a broken plugin never fails a widget request.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType
from typing import Any

from coursekit.models.classifier import SampleConfig
from coursekit.plugins.base_plugin import BasePlugin
from coursekit.plugins.hooks import HOOK_PROVIDE_PRESETS

logger = logging.getLogger(__name__)

_FAILED = object()


def _plugin_packages(plugin_dir: Path) -> Iterator[Path]:
    """Yield sub-directories of *plugin_dir* that are importable packages."""
    if not plugin_dir.is_dir():
        return
    for child in sorted(plugin_dir.iterdir()):
        if (child / "__init__.py").is_file():
            yield child


def _load_package(package_dir: Path) -> ModuleType:
    """Import *package_dir* as ``plugins.<name>`` and return the module."""
    module_name = f"plugins.{package_dir.name}"
    spec = importlib.util.spec_from_file_location(
        module_name, package_dir / "__init__.py"
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"no module spec for {package_dir.name}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def _plugin_classes(module: ModuleType) -> list[type[BasePlugin]]:
    """Concrete BasePlugin subclasses defined or imported in *module*."""
    return [
        cls
        for _, cls in inspect.getmembers(module, inspect.isclass)
        if issubclass(cls, BasePlugin)
        and cls is not BasePlugin
        and not inspect.isabstract(cls)
    ]


class PluginRegistry:
    """Holds plugin instances by name and fans hook calls out to them."""

    def __init__(self) -> None:
        self._plugins: dict[str, BasePlugin] = {}

    def _call(self, plugin: BasePlugin, hook_name: str, **kwargs: Any) -> Any:
        """Run one hook on one plugin, returning ``_FAILED`` if it raises."""
        try:
            return getattr(plugin, hook_name)(**kwargs)
        except Exception:
            logger.exception("Plugin %s raised in %s", plugin.name, hook_name)
            return _FAILED

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def discover_plugins(self, plugin_dir: Path) -> list[str]:
        """Load every plugin package under *plugin_dir* and register it.

        A package that fails to import, or a plugin class that fails to
        construct, is logged and skipped. Returns the registered names.
        """
        discovered: list[str] = []
        for package_dir in _plugin_packages(plugin_dir):
            try:
                classes = _plugin_classes(_load_package(package_dir))
            except Exception:
                logger.exception("Failed to load plugin package %s", package_dir.name)
                continue

            for cls in classes:
                try:
                    plugin = cls()
                except Exception:
                    logger.exception("Failed to instantiate plugin %s", cls.__name__)
                    continue
                self.register_plugin(plugin)
                discovered.append(plugin.name)
                logger.info("Discovered plugin: %s", plugin.name)

        return discovered

    def register_plugin(self, plugin: BasePlugin) -> None:
        """Add *plugin* and activate it."""
        self._plugins[plugin.name] = plugin
        self._call(plugin, "on_activate")

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def trigger_hook(self, hook_name: str, **kwargs: Any) -> list[Any]:
        """Invoke *hook_name* on every plugin that defines it.

        Returns one result per plugin that did not raise, in registration
        order.
        """
        results = (
            self._call(plugin, hook_name, **kwargs)
            for plugin in self._plugins.values()
            if hasattr(plugin, hook_name)
        )
        return [result for result in results if result is not _FAILED]

    def collect_presets(self) -> dict[str, SampleConfig]:
        """Merge plugin-contributed presets; later plugins win on clashes.

        Contributions that are not a dict of :class:`SampleConfig` are
        dropped with a warning.
        """
        presets: dict[str, SampleConfig] = {}
        for contributed in self.trigger_hook(HOOK_PROVIDE_PRESETS):
            if not isinstance(contributed, dict):
                logger.warning("Ignoring non-dict preset contribution: %r", contributed)
                continue
            for name, config in contributed.items():
                if isinstance(config, SampleConfig):
                    presets[name] = config
                else:
                    logger.warning("Ignoring preset %s: not a SampleConfig", name)
        return presets

    def get_plugin(self, name: str) -> BasePlugin | None:
        return self._plugins.get(name)

    def list_plugins(self) -> list[str]:
        return list(self._plugins)

    def shutdown(self) -> None:
        """Deactivate every plugin; one failure does not stop the rest."""
        for plugin in self._plugins.values():
            self._call(plugin, "on_deactivate")
