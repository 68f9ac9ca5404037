"""Request and response models for the risk-score calculators.

All models are synthetic teaching examples, not validated clinical tools.
"""

from pydantic import BaseModel, Field


class Contribution(BaseModel):
    """One additive term of a weighted-sum model."""

    label: str
    value: float


class NedocsInputs(BaseModel):
    """Emergency department state for the NEDOCS formula."""

    total_patients: float = Field(30, ge=0)
    ed_beds: float = Field(20, gt=0)
    hospital_beds: float = Field(200, gt=0)
    admits: float = Field(8, ge=0)
    ventilator_patients: float = Field(2, ge=0)
    wait_time_to_bed_hours: float = Field(2, ge=0)
    longest_admit_wait_hours: float = Field(4, ge=0)


class NedocsResponse(BaseModel):
    score: int
    crowding_level: str
    contributions: list[Contribution]
    max_abs_contribution: float


class NedocsTrendPoint(BaseModel):
    patients: int
    score: int
    current: bool


class NedocsTrendResponse(BaseModel):
    points: list[NedocsTrendPoint]


class CrowdingInputs(BaseModel):
    """Features of the linear crowding-score demo."""

    beds_occupied_pct: float = Field(85, ge=0, le=100)
    boarders: float = Field(10, ge=0)
    waiting_room: float = Field(18, ge=0)
    longest_wait_min: float = Field(120, ge=0)


class CrowdingCoefficients(BaseModel):
    """Tunable coefficients of the linear crowding-score demo."""

    intercept: float = 20.0
    beds_occupied_pct: float = 0.8
    boarders: float = 3.0
    waiting_room: float = 1.2
    longest_wait_min: float = 0.15


class CrowdingRequest(BaseModel):
    """Request body for POST /widgets/crowding-linear."""

    inputs: CrowdingInputs = CrowdingInputs()
    coefficients: CrowdingCoefficients = CrowdingCoefficients()
    observed_score: float | None = None


class CrowdingResponse(BaseModel):
    predicted_score: float
    band: str
    contributions: list[Contribution]
    max_abs_contribution: float
    residual: float | None = None


class GIBleedInputs(BaseModel):
    """Patient characteristics for the GI-bleed mortality demo."""

    age: float = Field(75, ge=0, le=120)
    male: bool = True
    emergency: bool = True
    icu_24h: bool = False
    elixhauser_score: float = Field(8, ge=0)
    chf_poa: bool = True
    ckd_poa: bool = False
    sepsis_poa: bool = True
    vent_24h: bool = False
    creatinine_high: bool = True
    lactate_high: bool = False


class GIBleedResponse(BaseModel):
    logit: float
    probability: float
    risk_level: str
    risk_description: str
    contributions: list[Contribution]
    max_abs_contribution: float
