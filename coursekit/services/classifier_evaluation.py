"""Binary classifier evaluation engine.

Computes confusion matrices, derived rates, ROC curves, and trapezoidal AUC
for a fixed set of (score, label) samples. Every function here is pure:
calling it twice with the same inputs yields bit-identical results.

Threshold rule: a sample is predicted positive iff ``score >= threshold``
(inclusive, the default) or ``score > threshold`` (exclusive). Both
variants exist in the course widgets, so both are kept.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from coursekit.models.classifier import (
    ConfusionMatrix,
    EvaluationResult,
    RateMetrics,
    RocCurve,
    RocPoint,
    SampleSet,
    SweepConfig,
)

# Leading cut of an exact sweep: above every valid score, so the curve
# starts at (0, 0).
UPPER_SENTINEL = 1.01


def confusion_matrix(
    samples: SampleSet,
    threshold: float,
    inclusive: bool = True,
) -> ConfusionMatrix:
    """Partition *samples* into a 2x2 confusion matrix at *threshold*.

    An empty sample set yields all-zero counts. Thresholds outside [0, 1]
    are accepted and simply classify everything one way.
    """
    scores = samples.scores()
    labels = samples.labels()
    predicted = _predicted_positive(scores, threshold, inclusive)

    tp = int(np.count_nonzero(predicted & labels))
    fp = int(np.count_nonzero(predicted & ~labels))
    fn = int(np.count_nonzero(~predicted & labels))
    tn = len(samples) - tp - fp - fn

    return ConfusionMatrix(tp=tp, fp=fp, tn=tn, fn=fn)


def compute_rates(matrix: ConfusionMatrix) -> RateMetrics:
    """Derive sensitivity, specificity, accuracy, PPV and NPV.

    A zero denominator gives ``0.0`` rather than NaN; the affected rate is
    named in ``undefined_rates``.
    """
    tp, fp, tn, fn = matrix.tp, matrix.fp, matrix.tn, matrix.fn
    ratios = (
        ("sensitivity", tp, tp + fn),
        ("specificity", tn, tn + fp),
        ("accuracy", tp + tn, matrix.total),
        ("ppv", tp, tp + fp),
        ("npv", tn, tn + fn),
    )

    values: dict[str, float] = {}
    undefined: list[str] = []
    for name, numerator, denominator in ratios:
        if denominator == 0:
            undefined.append(name)
        values[name] = _ratio(numerator, denominator)

    return RateMetrics(**values, undefined_rates=undefined)


def grid_thresholds(steps: int = 100) -> np.ndarray:
    """Return ``steps + 1`` evenly spaced cuts ``0/steps .. steps/steps``."""
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")
    return np.arange(steps + 1, dtype=float) / steps


def exact_thresholds(samples: SampleSet, inclusive: bool = True) -> np.ndarray:
    """Return a sentinel cut followed by every distinct score, descending.

    In exclusive mode each cut sits one ulp below its score, so the same
    samples flip to positive and the curve still reaches (1, 1).
    """
    distinct = np.unique(samples.scores())[::-1]
    if not inclusive:
        distinct = np.nextafter(distinct, -np.inf)
    return np.concatenate(([UPPER_SENTINEL], distinct))


def sweep_thresholds(samples: SampleSet, sweep: SweepConfig) -> np.ndarray:
    """Dispatch on the sweep strategy."""
    if sweep.strategy == "exact":
        return exact_thresholds(samples, inclusive=sweep.inclusive)
    return grid_thresholds(sweep.steps)


def roc_curve(
    samples: SampleSet,
    thresholds: Sequence[float] | np.ndarray,
    inclusive: bool = True,
) -> RocCurve:
    """Compute one ROC point per threshold, sorted for integration.

    Points are ordered by ascending fpr, ties by descending threshold.
    Plateaus (repeated fpr) are kept; they contribute zero width to the
    trapezoidal sum.
    """
    cuts = np.asarray(thresholds, dtype=float)
    if cuts.size == 0:
        return RocCurve()

    scores = samples.scores()
    labels = samples.labels()
    positive_scores = np.sort(scores[labels])
    negative_scores = np.sort(scores[~labels])

    tp = _count_predicted_positive(positive_scores, cuts, inclusive)
    fp = _count_predicted_positive(negative_scores, cuts, inclusive)
    tpr = tp / positive_scores.size if positive_scores.size else np.zeros_like(cuts)
    fpr = fp / negative_scores.size if negative_scores.size else np.zeros_like(cuts)

    # lexsort: last key is primary; stable for full ties
    order = np.lexsort((-cuts, fpr))
    points = tuple(
        RocPoint(fpr=float(fpr[i]), tpr=float(tpr[i]), threshold=float(cuts[i]))
        for i in order
    )
    return RocCurve(points=points)


def compute_auc(curve: RocCurve) -> float:
    """Trapezoidal area under an fpr-sorted ROC curve.

    A curve that never reaches fpr=1 (e.g. a coarse grid) is integrated
    as-is and underestimates the true area.
    """
    if len(curve) < 2:
        return 0.0
    fpr = curve.fprs()
    tpr = curve.tprs()
    return float(np.sum(np.diff(fpr) * (tpr[1:] + tpr[:-1]) / 2.0))


def operating_point(
    samples: SampleSet,
    threshold: float,
    inclusive: bool = True,
) -> RocPoint:
    """ROC coordinates of the confusion matrix at *threshold*."""
    matrix = confusion_matrix(samples, threshold, inclusive)
    return RocPoint(
        fpr=_ratio(matrix.fp, matrix.fp + matrix.tn),
        tpr=_ratio(matrix.tp, matrix.tp + matrix.fn),
        threshold=threshold,
    )


def nearest_point(curve: RocCurve, threshold: float) -> RocPoint | None:
    """Return the curve point whose cut is closest to *threshold*.

    Ties resolve to the earliest point in curve order.
    """
    if not curve.points:
        return None
    return min(curve.points, key=lambda p: abs(p.threshold - threshold))


def evaluate(
    samples: SampleSet,
    threshold: float,
    sweep: SweepConfig | None = None,
) -> EvaluationResult:
    """Full payload for one slider position: matrix, rates, curve, AUC."""
    sweep = sweep or SweepConfig()
    matrix = confusion_matrix(samples, threshold, sweep.inclusive)
    curve = roc_curve(
        samples, sweep_thresholds(samples, sweep), inclusive=sweep.inclusive
    )

    return EvaluationResult(
        threshold=threshold,
        confusion_matrix=matrix,
        rates=compute_rates(matrix),
        operating_point=operating_point(samples, threshold, sweep.inclusive),
        nearest_curve_point=nearest_point(curve, threshold),
        roc_curve=curve,
        auc=compute_auc(curve),
        positive_count=samples.positive_count,
        negative_count=samples.negative_count,
        sweep=sweep,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def _predicted_positive(
    scores: np.ndarray, threshold: float, inclusive: bool
) -> np.ndarray:
    return scores >= threshold if inclusive else scores > threshold


def _count_predicted_positive(
    sorted_scores: np.ndarray, cuts: np.ndarray, inclusive: bool
) -> np.ndarray:
    """Vectorised count of ``score >= cut`` (or ``>``) per cut."""
    # side="left" counts scores < cut; side="right" counts scores <= cut
    side = "left" if inclusive else "right"
    below = np.searchsorted(sorted_scores, cuts, side=side)
    return sorted_scores.size - below
