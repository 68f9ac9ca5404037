"""Regression teaching widgets: logistic link, sum of squares, line fitting.

All functions are closed-form recomputations over a handful of points.
"""

from __future__ import annotations

import math

import numpy as np

from coursekit.models.regression import (
    LinkCurvePoint,
    LogisticLinkResponse,
    MultivariableRegressionResponse,
    Point,
    RegressionComparisonResponse,
    ResidualPoint,
    SumOfSquaresResponse,
)

# Norepinephrine dose (x) vs. mean arterial pressure (y)
DEFAULT_MAP_POINTS: tuple[tuple[float, float], ...] = (
    (3, 51), (5, 48), (8, 55), (11, 58), (14, 54),
    (17, 62), (19, 59), (23, 67), (27, 63), (30, 70),
    (33, 68), (37, 74), (39, 71), (42, 77), (46, 75),
)

# Fitted line for DEFAULT_MAP_POINTS
MAP_TARGET_SLOPE = 0.6
MAP_TARGET_INTERCEPT = 50.0

# Two points the line-fitting game asks the student to hit
LINE_FIT_POINTS: tuple[tuple[float, float], ...] = ((2, 3), (4, 1))


def logistic(x):
    """Numerically stable logistic function ``1 / (1 + exp(-x))``.

    Accepts scalars or arrays; returns the same kind.
    """
    arr = np.asarray(x, dtype=float)
    out = np.exp(-np.logaddexp(0.0, -arr))
    return float(out) if arr.ndim == 0 else out


def logit(p: float) -> float:
    """Log-odds ``log(p / (1 - p))``; *p* must lie strictly inside (0, 1)."""
    if not 0.0 < p < 1.0:
        raise ValueError(f"logit is undefined for p={p}")
    return math.log(p / (1.0 - p))


def logistic_link_curve(
    intercept: float = -6.0,
    slope: float = 0.1,
    start: float = 0.0,
    stop: float = 100.0,
    step: float = 2.0,
) -> LogisticLinkResponse:
    """Trace ``logit(p) = intercept + slope * x`` and its probability curve."""
    if step <= 0:
        raise ValueError("step must be positive")
    if stop < start:
        raise ValueError("stop must not be below start")

    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    xs = start + step * np.arange(count, dtype=float)
    linear = intercept + slope * xs
    probabilities = logistic(linear)

    return LogisticLinkResponse(
        intercept=intercept,
        slope=slope,
        points=[
            LinkCurvePoint(x=float(x), logit=float(lo), probability=float(p))
            for x, lo, p in zip(xs, linear, probabilities)
        ],
    )


def sum_of_squares(
    points: list[Point] | None,
    slope: float,
    intercept: float,
) -> SumOfSquaresResponse:
    """Residuals of ``y = intercept + slope * x`` and their squared sum."""
    if points is None:
        points = [Point(x=x, y=y) for x, y in DEFAULT_MAP_POINTS]

    residuals: list[ResidualPoint] = []
    total = 0.0
    for point in points:
        predicted = intercept + slope * point.x
        residual = point.y - predicted
        total += residual * residual
        residuals.append(
            ResidualPoint(
                x=point.x, y=point.y, predicted=predicted, residual=residual
            )
        )

    return SumOfSquaresResponse(
        slope=slope,
        intercept=intercept,
        residuals=residuals,
        sum_of_squares=total,
    )


def line_passes_through(
    points: list[Point],
    slope: float,
    intercept: float,
    tolerance: float = 0.05,
) -> bool:
    """True when every point lies within *tolerance* of the line (strictly)."""
    return all(
        abs(slope * p.x + intercept - p.y) < tolerance for p in points
    )


def regression_comparison(dose: float) -> RegressionComparisonResponse:
    """Linear MAP prediction vs. logistic outcome probability at *dose*."""
    return RegressionComparisonResponse(
        dose=dose,
        predicted_map=50.0 + 0.6 * dose,
        outcome_probability=logistic(0.2 * (dose - 15.0)),
    )


def multivariable_regression(dose: float) -> MultivariableRegressionResponse:
    """MAP as a plane in norepinephrine dose and pH, sliced at *dose*.

    ``MAP = 45 + 0.6 * dose - (7.3 - pH) * 30`` on a 20x20 grid spanning
    0-20 mcg/min and pH 6.9-7.5. The univariable model drops the pH term.
    """
    norepinephrine = np.linspace(0.0, 20.0, 20)
    ph = np.linspace(6.9, 7.5, 20)
    ph_effect = (7.3 - ph) * 30.0

    surface = 45.0 + 0.6 * norepinephrine[np.newaxis, :] - ph_effect[:, np.newaxis]
    dose_line = 45.0 + 0.6 * dose - ph_effect

    return MultivariableRegressionResponse(
        dose=dose,
        norepinephrine=norepinephrine.tolist(),
        ph=ph.tolist(),
        surface=surface.tolist(),
        dose_line=dose_line.tolist(),
        univariable_map=45.0 + 0.6 * dose,
    )
