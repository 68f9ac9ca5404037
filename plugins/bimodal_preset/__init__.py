"""Example plugin contributing extra ROC widget presets.

Adds a near-random and a well-separated sample recipe, and logs
evaluation events.  It serves as both a reference implementation and a
smoke-test for the plugin system.
"""

from __future__ import annotations

import logging

from coursekit.models.classifier import (
    DistributionSpec,
    EvaluationResult,
    SampleConfig,
    SampleSet,
)
from coursekit.plugins.base_plugin import BasePlugin, PluginContext

logger = logging.getLogger(__name__)


class BimodalPresetPlugin(BasePlugin):
    """Contributes balanced presets at the two ends of the AUC range."""

    @property
    def name(self) -> str:
        return "bimodal_preset"

    @property
    def description(self) -> str:
        return "Balanced presets for an uninformative and a strong classifier"

    # ------------------------------------------------------------------
    # Preset hooks
    # ------------------------------------------------------------------

    def provide_presets(self) -> dict[str, SampleConfig]:
        return {
            # Identical class distributions: AUC near 0.5
            "coin_flip": SampleConfig(
                positive_count=500,
                negative_count=500,
                positive=DistributionSpec(kind="logit_normal", mean=0.0, std=1.0),
                negative=DistributionSpec(kind="logit_normal", mean=0.0, std=1.0),
            ),
            "well_separated": SampleConfig(
                positive_count=500,
                negative_count=500,
                positive=DistributionSpec(kind="logit_normal", mean=2.0, std=0.7),
                negative=DistributionSpec(kind="logit_normal", mean=-2.0, std=0.7),
            ),
        }

    # ------------------------------------------------------------------
    # Observation hooks
    # ------------------------------------------------------------------

    def on_samples_generated(
        self, *, context: PluginContext, sample_set: SampleSet
    ) -> None:
        logger.info(
            "Bimodal plugin: %s produced %d samples (preset=%s)",
            context.widget,
            len(sample_set),
            context.preset,
        )

    def on_evaluation_complete(
        self, *, context: PluginContext, result: EvaluationResult
    ) -> None:
        logger.info(
            "Bimodal plugin: %s AUC=%.3f at threshold %.2f",
            context.widget,
            result.auc,
            result.threshold,
        )

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def on_activate(self) -> None:
        logger.info("Bimodal preset plugin activated")

    def on_deactivate(self) -> None:
        logger.info("Bimodal preset plugin deactivated")
