"""Classifier evaluation API router.

Endpoints:
- GET  /classifier/presets           -- named sample recipes
- POST /classifier/samples           -- generate a seeded sample set
- POST /classifier/samples/import    -- load a sample set from CSV/JSONL
- POST /classifier/confusion-matrix  -- matrix and rates at one threshold
- POST /classifier/roc               -- ROC curve and AUC for a sweep
- POST /classifier/evaluate          -- everything a ROC widget renders

Every endpoint is a pure recomputation. Generated sample sets are not
stored: the caller keeps the seed and sends it back to get the same set.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from coursekit.config import Settings
from coursekit.dependencies import get_app_settings, get_plugin_registry, get_presets
from coursekit.models.classifier import (
    ConfusionMatrixRequest,
    ConfusionMatrixResponse,
    EvaluateRequest,
    EvaluationResult,
    GenerateSamplesRequest,
    ImportSamplesRequest,
    PresetInfo,
    PresetListResponse,
    RocRequest,
    RocResponse,
    SampleConfig,
    SampleSet,
    SampleSetResponse,
    SampleSource,
    SweepConfig,
)
from coursekit.plugins.base_plugin import PluginContext
from coursekit.plugins.hooks import HOOK_EVALUATION_COMPLETE, HOOK_SAMPLES_GENERATED
from coursekit.plugins.registry import PluginRegistry
from coursekit.services.classifier_evaluation import (
    compute_auc,
    compute_rates,
    confusion_matrix,
    evaluate,
    roc_curve,
    sweep_thresholds,
)
from coursekit.services.sample_generation import resolve_sample_set
from coursekit.services.sample_import import import_samples

router = APIRouter(prefix="/classifier", tags=["classifier"])


@router.get("/presets", response_model=PresetListResponse)
def list_presets(
    presets: dict[str, SampleConfig] = Depends(get_presets),
) -> PresetListResponse:
    """Return every available preset, built-in and plugin-contributed."""
    return PresetListResponse(
        presets=[
            PresetInfo(name=name, config=config)
            for name, config in sorted(presets.items())
        ]
    )


@router.post("/samples", response_model=SampleSetResponse)
def generate_sample_set(
    request: GenerateSamplesRequest,
    presets: dict[str, SampleConfig] = Depends(get_presets),
    settings: Settings = Depends(get_app_settings),
    plugin_registry: PluginRegistry = Depends(get_plugin_registry),
) -> SampleSetResponse:
    """Generate (or echo) a sample set.

    The response carries the seed actually used so the widget can
    regenerate the identical set later.
    """
    sample_set, seed, preset = _resolve_samples(request, presets, settings)

    plugin_registry.trigger_hook(
        HOOK_SAMPLES_GENERATED,
        context=PluginContext(widget="classifier.samples", seed=seed, preset=preset),
        sample_set=sample_set,
    )

    return _sample_set_response(sample_set, seed=seed, preset=preset)


@router.post("/samples/import", response_model=SampleSetResponse)
def import_sample_set(
    request: ImportSamplesRequest,
    settings: Settings = Depends(get_app_settings),
    plugin_registry: PluginRegistry = Depends(get_plugin_registry),
) -> SampleSetResponse:
    """Load an externally scored sample set from a CSV or JSONL file.

    Paths resolve under the configured sample data directory and may not
    leave it.
    """
    try:
        sample_set = import_samples(
            request.path, settings.sample_data_dir, fmt=request.format
        )
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if len(sample_set) > settings.max_samples:
        raise HTTPException(
            status_code=400,
            detail=f"Sample set of {len(sample_set)} exceeds the limit of {settings.max_samples}",
        )

    plugin_registry.trigger_hook(
        HOOK_SAMPLES_GENERATED,
        context=PluginContext(
            widget="classifier.samples.import", metadata={"path": request.path}
        ),
        sample_set=sample_set,
    )

    return _sample_set_response(sample_set)


@router.post("/confusion-matrix", response_model=ConfusionMatrixResponse)
def get_confusion_matrix(
    request: ConfusionMatrixRequest,
    presets: dict[str, SampleConfig] = Depends(get_presets),
    settings: Settings = Depends(get_app_settings),
) -> ConfusionMatrixResponse:
    """Confusion matrix and derived rates at a single threshold."""
    sample_set, _seed, _preset = _resolve_samples(request, presets, settings)
    matrix = confusion_matrix(sample_set, request.threshold, request.inclusive)

    return ConfusionMatrixResponse(
        threshold=request.threshold,
        inclusive=request.inclusive,
        confusion_matrix=matrix,
        rates=compute_rates(matrix),
    )


@router.post("/roc", response_model=RocResponse)
def get_roc_curve(
    request: RocRequest,
    presets: dict[str, SampleConfig] = Depends(get_presets),
    settings: Settings = Depends(get_app_settings),
) -> RocResponse:
    """ROC curve and trapezoidal AUC for the requested sweep."""
    sample_set, _seed, _preset = _resolve_samples(request, presets, settings)
    sweep = _with_default_steps(request.sweep, settings)

    curve = roc_curve(
        sample_set, sweep_thresholds(sample_set, sweep), inclusive=sweep.inclusive
    )
    return RocResponse(roc_curve=curve, auc=compute_auc(curve), sweep=sweep)


@router.post("/evaluate", response_model=EvaluationResult)
def evaluate_classifier(
    request: EvaluateRequest,
    presets: dict[str, SampleConfig] = Depends(get_presets),
    settings: Settings = Depends(get_app_settings),
    plugin_registry: PluginRegistry = Depends(get_plugin_registry),
) -> EvaluationResult:
    """Full evaluation payload for one threshold slider position."""
    sample_set, seed, preset = _resolve_samples(request, presets, settings)
    sweep = _with_default_steps(request.sweep, settings)

    result = evaluate(sample_set, request.threshold, sweep)

    plugin_registry.trigger_hook(
        HOOK_EVALUATION_COMPLETE,
        context=PluginContext(widget="classifier.evaluate", seed=seed, preset=preset),
        result=result,
    )
    return result


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _resolve_samples(
    source: SampleSource,
    presets: dict[str, SampleConfig],
    settings: Settings,
) -> tuple[SampleSet, int | None, str | None]:
    try:
        return resolve_sample_set(
            source,
            presets,
            default_seed=settings.default_seed,
            floor=settings.score_floor,
            ceiling=settings.score_ceiling,
            max_samples=settings.max_samples,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _with_default_steps(sweep: SweepConfig, settings: Settings) -> SweepConfig:
    """Use the configured grid resolution unless the caller chose one."""
    if "steps" in sweep.model_fields_set:
        return sweep
    return sweep.model_copy(update={"steps": settings.default_grid_steps})


def _sample_set_response(
    sample_set: SampleSet,
    seed: int | None = None,
    preset: str | None = None,
) -> SampleSetResponse:
    return SampleSetResponse(
        samples=list(sample_set.samples),
        positive_count=sample_set.positive_count,
        negative_count=sample_set.negative_count,
        seed=seed,
        preset=preset,
    )
