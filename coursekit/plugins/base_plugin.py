"""BasePlugin abstract class and PluginContext dataclass.

Defines the plugin contract for coursekit. Plugins can contribute extra
sample presets for the ROC widgets and observe generated sample sets and
evaluation results. Hooks use keyword-only arguments so new parameters can
be added without breaking existing plugins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from coursekit.models.classifier import EvaluationResult, SampleConfig, SampleSet


@dataclass
class PluginContext:
    """Context passed to observation hooks.

    ``widget`` names the endpoint that produced the event, e.g.
    ``"classifier.evaluate"``.
    """

    widget: str
    seed: int | None = None
    preset: str | None = None
    metadata: dict[str, Any] | None = field(default=None)


class BasePlugin(ABC):
    """Abstract base class for all coursekit plugins.

    Subclass this and override the hooks you need.

    Class Variables:
        api_version: Protocol version for future compatibility checks.
    """

    api_version: int = 1

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique plugin name. Must be implemented by subclasses."""
        ...

    @property
    def description(self) -> str:
        return ""

    # ------------------------------------------------------------------
    # Preset hooks
    # ------------------------------------------------------------------

    def provide_presets(self) -> dict[str, SampleConfig]:
        """Return extra named sample presets. Default contributes none."""
        return {}

    # ------------------------------------------------------------------
    # Observation hooks (keyword-only arguments)
    # ------------------------------------------------------------------

    def on_samples_generated(
        self, *, context: PluginContext, sample_set: SampleSet
    ) -> None:
        """Called after a sample set is generated or imported."""

    def on_evaluation_complete(
        self, *, context: PluginContext, result: EvaluationResult
    ) -> None:
        """Called after a full classifier evaluation."""

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def on_activate(self) -> None:
        """Called when the plugin is registered/activated."""

    def on_deactivate(self) -> None:
        """Called when the plugin is being shut down."""
