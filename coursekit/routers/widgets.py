"""Widget calculator API router.

Endpoints:
- POST /widgets/nedocs                 -- NEDOCS score and crowding level
- POST /widgets/nedocs/trend           -- score across patient counts
- POST /widgets/crowding-linear        -- synthetic linear crowding model
- POST /widgets/gi-bleed-mortality     -- synthetic logistic mortality model
- GET  /widgets/logistic-link          -- logit and probability curves
- POST /widgets/sum-of-squares         -- residuals for a candidate line
- POST /widgets/line-fit               -- does the line hit every point?
- GET  /widgets/regression-comparison  -- linear vs. logistic at one dose
- GET  /widgets/multivariable-regression -- MAP surface over dose and pH
- POST /widgets/neural-network         -- 2-2-1 forward pass
- POST /widgets/convolution            -- cross-correlation sweep
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from coursekit.models.convolution import ConvolutionRequest, ConvolutionResponse
from coursekit.models.neural_network import ForwardPassRequest, ForwardPassResponse
from coursekit.models.regression import (
    LineFitRequest,
    LineFitResponse,
    LogisticLinkResponse,
    MultivariableRegressionResponse,
    Point,
    RegressionComparisonResponse,
    SumOfSquaresRequest,
    SumOfSquaresResponse,
)
from coursekit.models.risk_scores import (
    CrowdingRequest,
    CrowdingResponse,
    GIBleedInputs,
    GIBleedResponse,
    NedocsInputs,
    NedocsResponse,
    NedocsTrendResponse,
)
from coursekit.services.convolution import (
    S_KERNEL,
    as_matrix,
    cross_correlation,
    cross_correlation_sweep,
    sentence_to_grid,
)
from coursekit.services.neural_network import forward_pass
from coursekit.services.regression import (
    LINE_FIT_POINTS,
    line_passes_through,
    logistic_link_curve,
    multivariable_regression,
    regression_comparison,
    sum_of_squares,
)
from coursekit.services.risk_scores import (
    crowding_linear_score,
    gi_bleed_mortality,
    nedocs_score,
    nedocs_trend,
)

router = APIRouter(prefix="/widgets", tags=["widgets"])


# ------------------------------------------------------------------ #
# Risk scores
# ------------------------------------------------------------------ #


@router.post("/nedocs", response_model=NedocsResponse)
def get_nedocs(inputs: NedocsInputs) -> NedocsResponse:
    """NEDOCS score, crowding level, and per-term contributions."""
    return nedocs_score(inputs)


@router.post("/nedocs/trend", response_model=NedocsTrendResponse)
def get_nedocs_trend(
    inputs: NedocsInputs,
    start: int = Query(0, ge=0),
    stop: int = Query(150, ge=0, le=1000),
    step: int = Query(5, ge=1),
) -> NedocsTrendResponse:
    """NEDOCS score as the patient count varies, other inputs held fixed."""
    if stop < start:
        raise HTTPException(status_code=400, detail="stop must not be below start")
    return nedocs_trend(inputs, start=start, stop=stop, step=step)


@router.post("/crowding-linear", response_model=CrowdingResponse)
def get_crowding_linear(request: CrowdingRequest) -> CrowdingResponse:
    """Synthetic linear crowding score with optional residual."""
    return crowding_linear_score(
        request.inputs, request.coefficients, request.observed_score
    )


@router.post("/gi-bleed-mortality", response_model=GIBleedResponse)
def get_gi_bleed_mortality(inputs: GIBleedInputs) -> GIBleedResponse:
    """Synthetic GI-bleed mortality probability and risk band."""
    return gi_bleed_mortality(inputs)


# ------------------------------------------------------------------ #
# Regression
# ------------------------------------------------------------------ #


@router.get("/logistic-link", response_model=LogisticLinkResponse)
def get_logistic_link(
    intercept: float = Query(-6.0),
    slope: float = Query(0.1),
    start: float = Query(0.0),
    stop: float = Query(100.0),
    step: float = Query(2.0, gt=0),
) -> LogisticLinkResponse:
    """Trace ``logit(p) = intercept + slope * x`` and its probability."""
    if (stop - start) / step > 10_000:
        raise HTTPException(status_code=400, detail="Too many points requested")
    try:
        return logistic_link_curve(intercept, slope, start, stop, step)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/sum-of-squares", response_model=SumOfSquaresResponse)
def get_sum_of_squares(request: SumOfSquaresRequest) -> SumOfSquaresResponse:
    """Residuals and their squared sum for a candidate line."""
    return sum_of_squares(request.points, request.slope, request.intercept)


@router.post("/line-fit", response_model=LineFitResponse)
def check_line_fit(request: LineFitRequest) -> LineFitResponse:
    """Line-fitting game check: defaults to the points (2, 3) and (4, 1)."""
    points = request.points or [Point(x=x, y=y) for x, y in LINE_FIT_POINTS]
    return LineFitResponse(
        slope=request.slope,
        intercept=request.intercept,
        passes_through_all=line_passes_through(
            points, request.slope, request.intercept, request.tolerance
        ),
    )


@router.get("/regression-comparison", response_model=RegressionComparisonResponse)
def get_regression_comparison(
    dose: float = Query(10.0, ge=0, le=100),
) -> RegressionComparisonResponse:
    """MAP prediction and outcome probability at one vasopressor dose."""
    return regression_comparison(dose)


@router.get(
    "/multivariable-regression", response_model=MultivariableRegressionResponse
)
def get_multivariable_regression(
    dose: float = Query(10.0, ge=0, le=20),
) -> MultivariableRegressionResponse:
    """MAP surface over norepinephrine and pH, sliced at the chosen dose."""
    return multivariable_regression(dose)


# ------------------------------------------------------------------ #
# Neural network and convolution
# ------------------------------------------------------------------ #


@router.post("/neural-network", response_model=ForwardPassResponse)
def get_forward_pass(request: ForwardPassRequest) -> ForwardPassResponse:
    """Forward pass of the 2-2-1 toy network."""
    try:
        return forward_pass(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/convolution", response_model=ConvolutionResponse)
def get_convolution(request: ConvolutionRequest) -> ConvolutionResponse:
    """Cross-correlation of a kernel swept across a glyph grid."""
    try:
        if request.grid is not None:
            grid = as_matrix(request.grid, "grid")
        else:
            grid = sentence_to_grid(request.sentence)
        kernel = as_matrix(request.kernel or S_KERNEL, "kernel")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    responses = cross_correlation_sweep(grid, kernel)
    best = max(range(len(responses)), key=responses.__getitem__) if responses else None
    value = (
        cross_correlation(grid, kernel, request.position)
        if request.position is not None
        else None
    )

    return ConvolutionResponse(
        kernel=kernel.tolist(),
        responses=responses,
        value_at_position=value,
        best_position=best,
    )
