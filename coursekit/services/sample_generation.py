"""Synthetic sample-set generation for the ROC widgets.

Scores are drawn per class from a parametric distribution, clamped away
from 0 and 1 so log-odds stay finite, and optionally shuffled. Randomness
always comes from an explicit ``numpy.random.Generator``: the same seed
reproduces the same sample set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

import numpy as np

from coursekit.models.classifier import (
    DistributionSpec,
    SampleConfig,
    SampleSet,
    SampleSource,
)
from coursekit.services.regression import logistic

logger = logging.getLogger(__name__)

# (rng, size) -> raw scores
Distribution = Callable[[np.random.Generator, int], np.ndarray]

DEFAULT_PRESET = "logit_imbalanced"

BUILTIN_PRESETS: dict[str, SampleConfig] = {
    # 10:1 imbalance on the logit scale, AUC around 0.8
    "logit_imbalanced": SampleConfig(
        positive_count=100,
        negative_count=1000,
        positive=DistributionSpec(kind="logit_normal", mean=-0.5, std=0.9),
        negative=DistributionSpec(kind="logit_normal", mean=-1.5, std=0.8),
        shuffle=True,
    ),
    # 10:1 imbalance directly on the probability scale, AUC around 0.8
    "normal_imbalanced": SampleConfig(
        positive_count=100,
        negative_count=1000,
        positive=DistributionSpec(kind="normal", mean=0.65, std=0.22),
        negative=DistributionSpec(kind="normal", mean=0.35, std=0.22),
        shuffle=False,
    ),
}


def logit_normal(mean: float, std: float) -> Distribution:
    """Normal draw on the log-odds scale, squashed through the logistic."""

    def draw(rng: np.random.Generator, size: int) -> np.ndarray:
        return logistic(mean + std * rng.standard_normal(size))

    return draw


def normal(mean: float, std: float) -> Distribution:
    """Normal draw directly on the probability scale."""

    def draw(rng: np.random.Generator, size: int) -> np.ndarray:
        return mean + std * rng.standard_normal(size)

    return draw


def build_distribution(spec: DistributionSpec) -> Distribution:
    if spec.kind == "logit_normal":
        return logit_normal(spec.mean, spec.std)
    return normal(spec.mean, spec.std)


def draw_samples(
    positive_count: int,
    negative_count: int,
    positive_distribution: Distribution,
    negative_distribution: Distribution,
    rng: np.random.Generator,
    *,
    shuffle: bool = True,
    floor: float = 0.01,
    ceiling: float = 0.99,
) -> SampleSet:
    """Draw a labelled sample set from two per-class distributions.

    Counts below one are the caller's responsibility: the resulting set
    then lacks a class and its rates fall back to the zero policy.
    """
    positive = np.clip(positive_distribution(rng, positive_count), floor, ceiling)
    negative = np.clip(negative_distribution(rng, negative_count), floor, ceiling)

    scores = np.concatenate([positive, negative])
    labels = np.concatenate(
        [np.ones(positive_count, dtype=bool), np.zeros(negative_count, dtype=bool)]
    )
    if shuffle:
        order = rng.permutation(scores.size)
        scores = scores[order]
        labels = labels[order]

    return SampleSet.from_arrays(scores, labels)


def generate_samples(
    config: SampleConfig,
    rng: np.random.Generator,
    *,
    floor: float = 0.01,
    ceiling: float = 0.99,
) -> SampleSet:
    """Generate a sample set from a declarative :class:`SampleConfig`."""
    return draw_samples(
        config.positive_count,
        config.negative_count,
        build_distribution(config.positive),
        build_distribution(config.negative),
        rng,
        shuffle=config.shuffle,
        floor=floor,
        ceiling=ceiling,
    )


def available_presets(
    extra: Mapping[str, SampleConfig] | None = None,
) -> dict[str, SampleConfig]:
    """Built-in presets merged with plugin-contributed ones.

    Built-in names win over plugin names.
    """
    presets = dict(extra or {})
    presets.update(BUILTIN_PRESETS)
    return presets


def resolve_sample_set(
    source: SampleSource,
    presets: Mapping[str, SampleConfig],
    *,
    default_seed: int,
    floor: float = 0.01,
    ceiling: float = 0.99,
    max_samples: int | None = None,
) -> tuple[SampleSet, int | None, str | None]:
    """Materialise the samples a request refers to.

    Returns ``(sample_set, seed, preset_name)``; seed and preset are
    ``None`` for an explicit sample list.

    Raises:
        ValueError: Unknown preset, or more samples than *max_samples*.
    """
    if source.samples is not None:
        _check_size(len(source.samples), max_samples)
        return SampleSet(samples=tuple(source.samples)), None, None

    preset_name: str | None = None
    if source.config is not None:
        config = source.config
    else:
        preset_name = source.preset or DEFAULT_PRESET
        if preset_name not in presets:
            raise ValueError(
                f"Unknown preset '{preset_name}'. Must be one of: {sorted(presets)}"
            )
        config = presets[preset_name]

    _check_size(config.positive_count + config.negative_count, max_samples)

    seed = source.seed if source.seed is not None else default_seed
    sample_set = generate_samples(
        config, np.random.default_rng(seed), floor=floor, ceiling=ceiling
    )
    logger.info(
        "Generated %d samples (preset=%s, seed=%d)",
        len(sample_set),
        preset_name or "custom",
        seed,
    )
    return sample_set, seed, preset_name


def _check_size(count: int, max_samples: int | None) -> None:
    if max_samples is not None and count > max_samples:
        raise ValueError(
            f"Sample set of {count} exceeds the limit of {max_samples}"
        )
