"""Request and response models for the regression widgets."""

from pydantic import BaseModel, Field


class Point(BaseModel):
    """A plain (x, y) data point."""

    x: float
    y: float


class LinkCurvePoint(BaseModel):
    """One x position on the logistic link demo."""

    x: float
    logit: float
    probability: float


class LogisticLinkResponse(BaseModel):
    intercept: float
    slope: float
    points: list[LinkCurvePoint]


class SumOfSquaresRequest(BaseModel):
    """Request body for POST /widgets/sum-of-squares.

    ``points`` defaults to the norepinephrine/MAP teaching data.
    """

    slope: float = 0.0
    intercept: float = 70.0
    points: list[Point] | None = None


class ResidualPoint(BaseModel):
    x: float
    y: float
    predicted: float
    residual: float


class SumOfSquaresResponse(BaseModel):
    slope: float
    intercept: float
    residuals: list[ResidualPoint]
    sum_of_squares: float


class LineFitRequest(BaseModel):
    """Request body for POST /widgets/line-fit."""

    slope: float
    intercept: float
    points: list[Point] | None = None
    tolerance: float = Field(0.05, gt=0.0)


class LineFitResponse(BaseModel):
    slope: float
    intercept: float
    passes_through_all: bool


class RegressionComparisonResponse(BaseModel):
    """Linear vs. logistic prediction at one vasopressor dose."""

    dose: float
    predicted_map: float
    outcome_probability: float


class MultivariableRegressionResponse(BaseModel):
    """MAP surface over norepinephrine dose and pH, plus the current-dose slice.

    ``surface[i][j]`` is the prediction at ``ph[i]`` and ``norepinephrine[j]``.
    """

    dose: float
    norepinephrine: list[float]
    ph: list[float]
    surface: list[list[float]]
    dose_line: list[float]
    univariable_map: float
