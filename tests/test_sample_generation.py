"""Tests for seeded sample-set generation and preset resolution."""

from __future__ import annotations

import numpy as np
import pytest

from coursekit.models.classifier import (
    DistributionSpec,
    Sample,
    SampleConfig,
    SampleSource,
)
from coursekit.services.sample_generation import (
    BUILTIN_PRESETS,
    DEFAULT_PRESET,
    available_presets,
    draw_samples,
    generate_samples,
    logit_normal,
    normal,
    resolve_sample_set,
)

SMALL_CONFIG = SampleConfig(
    positive_count=5,
    negative_count=15,
    positive=DistributionSpec(kind="logit_normal", mean=1.0, std=1.0),
    negative=DistributionSpec(kind="logit_normal", mean=-1.0, std=1.0),
)


class TestGenerateSamples:
    def test_counts_match_config(self) -> None:
        sample_set = generate_samples(SMALL_CONFIG, np.random.default_rng(0))
        assert len(sample_set) == 20
        assert sample_set.positive_count == 5
        assert sample_set.negative_count == 15
        assert sample_set.has_both_classes

    def test_same_seed_same_samples(self) -> None:
        first = generate_samples(SMALL_CONFIG, np.random.default_rng(42))
        second = generate_samples(SMALL_CONFIG, np.random.default_rng(42))
        assert first == second

    def test_different_seed_different_samples(self) -> None:
        first = generate_samples(SMALL_CONFIG, np.random.default_rng(1))
        second = generate_samples(SMALL_CONFIG, np.random.default_rng(2))
        assert first != second

    @pytest.mark.parametrize("preset", sorted(BUILTIN_PRESETS))
    def test_scores_are_clamped(self, preset: str) -> None:
        sample_set = generate_samples(BUILTIN_PRESETS[preset], np.random.default_rng(7))
        scores = sample_set.scores()
        assert scores.min() >= 0.01
        assert scores.max() <= 0.99

    def test_custom_clamp(self) -> None:
        sample_set = generate_samples(
            SMALL_CONFIG, np.random.default_rng(3), floor=0.2, ceiling=0.8
        )
        scores = sample_set.scores()
        assert scores.min() >= 0.2
        assert scores.max() <= 0.8

    def test_unshuffled_keeps_positives_first(self) -> None:
        sample_set = generate_samples(
            BUILTIN_PRESETS["normal_imbalanced"], np.random.default_rng(0)
        )
        labels = sample_set.labels()
        assert labels[:100].all()
        assert not labels[100:].any()

    def test_shuffled_mixes_classes(self) -> None:
        sample_set = generate_samples(
            BUILTIN_PRESETS["logit_imbalanced"], np.random.default_rng(0)
        )
        assert not sample_set.labels()[:100].all()

    def test_draw_samples_with_callables(self) -> None:
        sample_set = draw_samples(
            3,
            2,
            normal(0.9, 0.01),
            logit_normal(-3.0, 0.1),
            np.random.default_rng(0),
            shuffle=False,
        )
        assert [s.label for s in sample_set.samples] == [True, True, True, False, False]
        assert all(s.score > 0.8 for s in sample_set.samples[:3])
        assert all(s.score < 0.1 for s in sample_set.samples[3:])


class TestPresets:
    def test_builtins_win_name_clashes(self) -> None:
        override = {DEFAULT_PRESET: SMALL_CONFIG, "extra": SMALL_CONFIG}
        presets = available_presets(override)
        assert presets[DEFAULT_PRESET] == BUILTIN_PRESETS[DEFAULT_PRESET]
        assert presets["extra"] == SMALL_CONFIG

    def test_available_presets_without_extras(self) -> None:
        assert available_presets() == BUILTIN_PRESETS


class TestResolveSampleSet:
    def test_default_preset_and_seed(self) -> None:
        sample_set, seed, preset = resolve_sample_set(
            SampleSource(), BUILTIN_PRESETS, default_seed=42
        )
        assert seed == 42
        assert preset == DEFAULT_PRESET
        assert len(sample_set) == 1100

    def test_explicit_seed_reproduces(self) -> None:
        source = SampleSource(preset="normal_imbalanced", seed=9)
        first, _, _ = resolve_sample_set(source, BUILTIN_PRESETS, default_seed=42)
        second, _, _ = resolve_sample_set(source, BUILTIN_PRESETS, default_seed=0)
        assert first == second

    def test_explicit_samples_pass_through(self) -> None:
        samples = [Sample(score=0.7, label=True), Sample(score=0.2, label=False)]
        sample_set, seed, preset = resolve_sample_set(
            SampleSource(samples=samples), BUILTIN_PRESETS, default_seed=42
        )
        assert list(sample_set.samples) == samples
        assert seed is None
        assert preset is None

    def test_explicit_config(self) -> None:
        sample_set, seed, preset = resolve_sample_set(
            SampleSource(config=SMALL_CONFIG, seed=5), BUILTIN_PRESETS, default_seed=42
        )
        assert len(sample_set) == 20
        assert seed == 5
        assert preset is None

    def test_unknown_preset(self) -> None:
        with pytest.raises(ValueError, match="Unknown preset"):
            resolve_sample_set(
                SampleSource(preset="nope"), BUILTIN_PRESETS, default_seed=42
            )

    def test_size_limit(self) -> None:
        with pytest.raises(ValueError, match="exceeds the limit"):
            resolve_sample_set(
                SampleSource(), BUILTIN_PRESETS, default_seed=42, max_samples=100
            )

    def test_source_rejects_two_origins(self) -> None:
        with pytest.raises(ValueError, match="at most one"):
            SampleSource(preset=DEFAULT_PRESET, config=SMALL_CONFIG)
