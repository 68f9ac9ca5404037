"""Pydantic models for the binary classifier evaluation widgets.

Core records (Sample, SampleSet, ConfusionMatrix, RocPoint, RocCurve) are
frozen: they are recomputed from their inputs, never edited in place.
"""

from __future__ import annotations

from typing import Literal

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Sample(BaseModel):
    """A single (predicted score, true label) pair. ``label=True`` is positive."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=1.0)
    label: bool


class SampleSet(BaseModel):
    """Ordered, immutable collection of samples.

    Order never affects the computed metrics but is kept stable so that
    seeded generation is reproducible.
    """

    model_config = ConfigDict(frozen=True)

    samples: tuple[Sample, ...] = ()

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def positive_count(self) -> int:
        return sum(1 for s in self.samples if s.label)

    @property
    def negative_count(self) -> int:
        return len(self.samples) - self.positive_count

    @property
    def has_both_classes(self) -> bool:
        """True when sensitivity and specificity are both defined."""
        return self.positive_count > 0 and self.negative_count > 0

    def scores(self) -> np.ndarray:
        return np.fromiter((s.score for s in self.samples), dtype=float, count=len(self.samples))

    def labels(self) -> np.ndarray:
        return np.fromiter((s.label for s in self.samples), dtype=bool, count=len(self.samples))

    @classmethod
    def from_arrays(cls, scores: np.ndarray, labels: np.ndarray) -> SampleSet:
        """Build a SampleSet from parallel score/label arrays."""
        return cls(
            samples=tuple(
                Sample(score=float(s), label=bool(lbl))
                for s, lbl in zip(scores, labels, strict=True)
            )
        )


class ConfusionMatrix(BaseModel):
    """2x2 tally of predicted vs. actual class at one threshold."""

    model_config = ConfigDict(frozen=True)

    tp: int = Field(0, ge=0)
    fp: int = Field(0, ge=0)
    tn: int = Field(0, ge=0)
    fn: int = Field(0, ge=0)

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn


class RateMetrics(BaseModel):
    """Rates derived from a confusion matrix.

    A rate whose denominator is zero is reported as ``0.0`` and its name is
    listed in ``undefined_rates`` so the caller can render "N/A" instead.
    """

    sensitivity: float
    specificity: float
    accuracy: float
    ppv: float
    npv: float
    undefined_rates: list[str] = []


class RocPoint(BaseModel):
    """One (false positive rate, true positive rate) pair and its cut."""

    model_config = ConfigDict(frozen=True)

    fpr: float
    tpr: float
    threshold: float


class RocCurve(BaseModel):
    """ROC points ordered by ascending fpr (ties: threshold descending)."""

    model_config = ConfigDict(frozen=True)

    points: tuple[RocPoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def fprs(self) -> np.ndarray:
        return np.array([p.fpr for p in self.points], dtype=float)

    def tprs(self) -> np.ndarray:
        return np.array([p.tpr for p in self.points], dtype=float)


class SweepConfig(BaseModel):
    """How thresholds are chosen for an ROC sweep.

    ``grid`` sweeps ``steps + 1`` evenly spaced cuts over [0, 1];
    ``exact`` cuts at every distinct observed score.
    """

    strategy: Literal["grid", "exact"] = "grid"
    steps: int = Field(100, ge=1, le=10_000)
    inclusive: bool = True


# ---------------------------------------------------------------------------
# Sample generation configuration
# ---------------------------------------------------------------------------


class DistributionSpec(BaseModel):
    """Parametric score distribution for one class.

    ``logit_normal`` draws on the log-odds scale and applies the logistic
    squash; ``normal`` draws directly on the probability scale.
    """

    kind: Literal["logit_normal", "normal"] = "logit_normal"
    mean: float
    std: float = Field(gt=0.0)


class SampleConfig(BaseModel):
    """Recipe for a synthetic sample set."""

    positive_count: int = Field(gt=0)
    negative_count: int = Field(gt=0)
    positive: DistributionSpec
    negative: DistributionSpec
    shuffle: bool = True


class SampleSource(BaseModel):
    """Where a request's samples come from.

    Either an explicit sample list, or a preset name / explicit config
    regenerated from ``seed``. With none given, the default preset is used.
    """

    samples: list[Sample] | None = None
    preset: str | None = None
    config: SampleConfig | None = None
    seed: int | None = None

    @model_validator(mode="after")
    def _one_source(self) -> SampleSource:
        given = [
            name
            for name, value in (
                ("samples", self.samples),
                ("preset", self.preset),
                ("config", self.config),
            )
            if value is not None
        ]
        if len(given) > 1:
            raise ValueError(
                f"Provide at most one of samples, preset, config (got {', '.join(given)})"
            )
        return self


# ---------------------------------------------------------------------------
# Request / response payloads
# ---------------------------------------------------------------------------


class PresetInfo(BaseModel):
    """A named sample recipe available to the widgets."""

    name: str
    config: SampleConfig


class PresetListResponse(BaseModel):
    presets: list[PresetInfo]


class GenerateSamplesRequest(SampleSource):
    """Request body for POST /classifier/samples."""


class ImportSamplesRequest(BaseModel):
    """Request body for POST /classifier/samples/import."""

    path: str
    format: Literal["csv", "jsonl"] | None = None  # Inferred from suffix if omitted


class SampleSetResponse(BaseModel):
    """A generated or imported sample set."""

    samples: list[Sample]
    positive_count: int
    negative_count: int
    seed: int | None = None
    preset: str | None = None


class ConfusionMatrixRequest(SampleSource):
    """Request body for POST /classifier/confusion-matrix."""

    threshold: float = 0.5
    inclusive: bool = True


class ConfusionMatrixResponse(BaseModel):
    threshold: float
    inclusive: bool
    confusion_matrix: ConfusionMatrix
    rates: RateMetrics


class RocRequest(SampleSource):
    """Request body for POST /classifier/roc."""

    sweep: SweepConfig = SweepConfig()


class RocResponse(BaseModel):
    roc_curve: RocCurve
    auc: float
    sweep: SweepConfig


class EvaluateRequest(SampleSource):
    """Request body for POST /classifier/evaluate."""

    threshold: float = 0.5
    sweep: SweepConfig = SweepConfig()


class EvaluationResult(BaseModel):
    """Everything a ROC widget renders for one threshold position."""

    threshold: float
    confusion_matrix: ConfusionMatrix
    rates: RateMetrics
    operating_point: RocPoint
    nearest_curve_point: RocPoint | None
    roc_curve: RocCurve
    auc: float
    positive_count: int
    negative_count: int
    sweep: SweepConfig
