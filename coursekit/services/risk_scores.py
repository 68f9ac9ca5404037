"""Weighted-sum risk calculators used by the ED-crowding and GI-bleed widgets.

Each calculator returns its per-term contributions so the widget can draw a
signed bar per term. None of these models is clinically validated.

- NEDOCS: published five-term crowding formula, rounded to an integer.
- Linear crowding demo: synthetic NEDOCS-like linear model with tunable
  coefficients and an optional observed value for residuals.
- GI-bleed mortality: synthetic logistic model (Vizient-like, not Vizient).
"""

from __future__ import annotations

import math

from coursekit.models.risk_scores import (
    Contribution,
    CrowdingCoefficients,
    CrowdingInputs,
    CrowdingResponse,
    GIBleedInputs,
    GIBleedResponse,
    NedocsInputs,
    NedocsResponse,
    NedocsTrendPoint,
    NedocsTrendResponse,
)
from coursekit.services.regression import logistic

# (upper bound exclusive, label); the last band has no upper bound
NEDOCS_LEVELS: list[tuple[float, str]] = [
    (50, "Not Busy"),
    (100, "Busy"),
    (150, "Overcrowded"),
    (200, "Severely Overcrowded"),
]
NEDOCS_TOP_LEVEL = "Dangerously Overcrowded"

CROWDING_BANDS: list[tuple[float, str]] = [
    (60, "Low"),
    (100, "Moderate"),
    (140, "High"),
]
CROWDING_TOP_BAND = "Severe"

# Percent mortality bands
GI_BLEED_RISK_LEVELS: list[tuple[float, str, str]] = [
    (5, "Very Low", "Minimal risk"),
    (15, "Low", "Low risk"),
    (30, "Moderate", "Moderate risk"),
    (50, "High", "High risk"),
]
GI_BLEED_TOP_RISK = ("Very High", "Very high risk - intensive monitoring needed")

GI_BLEED_INTERCEPT = -7.0
# field name -> (display label, coefficient)
GI_BLEED_COEFFICIENTS: dict[str, tuple[str, float]] = {
    "age": ("Age", 0.055),
    "male": ("Male", 0.20),
    "emergency": ("Emergency admission", 0.60),
    "icu_24h": ("ICU first 24h", 0.90),
    "elixhauser_score": ("Elixhauser score", 0.08),
    "chf_poa": ("CHF (POA)", 0.70),
    "ckd_poa": ("CKD (POA)", 0.55),
    "sepsis_poa": ("Sepsis (POA)", 1.10),
    "vent_24h": ("Ventilation 24h", 1.40),
    "creatinine_high": ("Creatinine high", 0.65),
    "lactate_high": ("Lactate high", 0.85),
}


def max_abs_contribution(contributions: list[Contribution]) -> float:
    """Bar-scaling denominator: largest |term|, never below 1."""
    return max([abs(c.value) for c in contributions] + [1.0])


# ---------------------------------------------------------------------------
# NEDOCS
# ---------------------------------------------------------------------------


def nedocs_contributions(inputs: NedocsInputs) -> list[Contribution]:
    return [
        Contribution(label="Patients per ED bed", value=inputs.total_patients / inputs.ed_beds * 85.8),
        Contribution(label="Admits per hospital bed", value=inputs.admits / inputs.hospital_beds * 600),
        Contribution(label="Wait time to bed", value=inputs.wait_time_to_bed_hours * 5.64),
        Contribution(label="Longest admit wait", value=inputs.longest_admit_wait_hours * 0.93),
        Contribution(label="Ventilator patients", value=inputs.ventilator_patients * 13.4),
    ]


def nedocs_level(score: float) -> str:
    for upper, label in NEDOCS_LEVELS:
        if score < upper:
            return label
    return NEDOCS_TOP_LEVEL


def nedocs_score(inputs: NedocsInputs) -> NedocsResponse:
    """Compute the rounded NEDOCS score and its crowding level."""
    contributions = nedocs_contributions(inputs)
    score = _round_half_up(sum(c.value for c in contributions))
    return NedocsResponse(
        score=score,
        crowding_level=nedocs_level(score),
        contributions=contributions,
        max_abs_contribution=max_abs_contribution(contributions),
    )


def nedocs_trend(
    inputs: NedocsInputs,
    start: int = 0,
    stop: int = 150,
    step: int = 5,
) -> NedocsTrendResponse:
    """Recompute the score across patient counts, holding other inputs fixed.

    Points within 3 patients of the current count are flagged ``current``.
    """
    if step <= 0:
        raise ValueError("step must be positive")

    points: list[NedocsTrendPoint] = []
    for patients in range(start, stop + 1, step):
        varied = inputs.model_copy(update={"total_patients": patients})
        score = _round_half_up(sum(c.value for c in nedocs_contributions(varied)))
        points.append(
            NedocsTrendPoint(
                patients=patients,
                score=score,
                current=abs(patients - inputs.total_patients) < 3,
            )
        )
    return NedocsTrendResponse(points=points)


# ---------------------------------------------------------------------------
# Linear crowding demo
# ---------------------------------------------------------------------------


def crowding_linear_score(
    inputs: CrowdingInputs,
    coefficients: CrowdingCoefficients,
    observed_score: float | None = None,
) -> CrowdingResponse:
    """Predicted crowding score with per-term contributions and residual."""
    contributions = [
        Contribution(label="Intercept", value=coefficients.intercept),
        Contribution(
            label="Beds occupied (%)",
            value=coefficients.beds_occupied_pct * inputs.beds_occupied_pct,
        ),
        Contribution(label="Admitted boarders", value=coefficients.boarders * inputs.boarders),
        Contribution(label="Waiting room", value=coefficients.waiting_room * inputs.waiting_room),
        Contribution(
            label="Longest wait (min)",
            value=coefficients.longest_wait_min * inputs.longest_wait_min,
        ),
    ]
    predicted = sum(c.value for c in contributions)

    band = CROWDING_TOP_BAND
    for upper, label in CROWDING_BANDS:
        if predicted < upper:
            band = label
            break

    return CrowdingResponse(
        predicted_score=predicted,
        band=band,
        contributions=contributions,
        max_abs_contribution=max_abs_contribution(contributions),
        residual=None if observed_score is None else observed_score - predicted,
    )


# ---------------------------------------------------------------------------
# GI-bleed mortality
# ---------------------------------------------------------------------------


def gi_bleed_mortality(inputs: GIBleedInputs) -> GIBleedResponse:
    """Logistic mortality estimate with per-term log-odds contributions."""
    contributions = [Contribution(label="Intercept", value=GI_BLEED_INTERCEPT)]
    for field_name, (label, coefficient) in GI_BLEED_COEFFICIENTS.items():
        # bools count as 0/1
        contributions.append(
            Contribution(label=label, value=coefficient * float(getattr(inputs, field_name)))
        )

    logit_value = sum(c.value for c in contributions)
    probability = logistic(logit_value)

    pct = probability * 100
    level, description = GI_BLEED_TOP_RISK
    for upper, band_label, band_description in GI_BLEED_RISK_LEVELS:
        if pct < upper:
            level, description = band_label, band_description
            break

    return GIBleedResponse(
        logit=logit_value,
        probability=probability,
        risk_level=level,
        risk_description=description,
        contributions=contributions,
        max_abs_contribution=max_abs_contribution(contributions),
    )


def _round_half_up(value: float) -> int:
    # Half-up, not round()'s half-to-even
    return math.floor(value + 0.5)
