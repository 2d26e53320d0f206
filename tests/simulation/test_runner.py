"""
Tests for PairSimulationRunner: trial pipeline, aggregation, progress,
cancellation and failure handling.
"""

import threading

import numpy as np
import pytest

from pysimstudy.core.exceptions import DegenerateSampleError, JobCancelledError
from pysimstudy.simulation import (
    GlobalSettings,
    PairSimulationRunner,
    PopulationParams,
    RunnerState,
    SamplePairSpec,
    simulate_pair,
)


# ═══════════════════════════════════════════════════════════════════════
# Per-trial results
# ═══════════════════════════════════════════════════════════════════════


class TestTrials:

    def test_one_result_per_trial(self, medium_pair, small_settings):
        result = simulate_pair(medium_pair, small_settings)
        assert len(result.individual_results) == 200
        assert result.pair_id == "medium"
        assert result.pair_name == "Medium effect"

    def test_trial_invariants(self, medium_pair, small_settings):
        result = simulate_pair(medium_pair, small_settings)
        alpha = small_settings.primary_alpha
        for trial in result.individual_results:
            assert 0.0 <= trial.p_value <= 1.0
            lo, hi = trial.confidence_interval
            assert lo <= trial.effect_size <= hi
            assert trial.significant == (trial.p_value < alpha)
            assert trial.s_value == pytest.approx(-np.log2(trial.p_value))

    @pytest.mark.parametrize("test_type", ["welch", "pooled", "mann_whitney"])
    def test_every_test_type(self, medium_pair, test_type):
        settings = GlobalSettings.for_settings(50, test_type=test_type, random_seed=3)
        result = simulate_pair(medium_pair, settings)
        assert result.aggregated_stats.total_count == 50

    def test_seed_determinism(self, medium_pair, small_settings):
        a = simulate_pair(medium_pair, small_settings, seed=99)
        b = simulate_pair(medium_pair, small_settings, seed=99)
        assert a.p_values == b.p_values
        assert a == b

    def test_settings_seed_used_by_default(self, medium_pair, small_settings):
        a = simulate_pair(medium_pair, small_settings)
        b = simulate_pair(medium_pair, small_settings)
        assert a.effect_sizes == b.effect_sizes


# ═══════════════════════════════════════════════════════════════════════
# Aggregation
# ═══════════════════════════════════════════════════════════════════════


class TestAggregation:

    def test_counts(self, medium_pair, small_settings):
        result = simulate_pair(medium_pair, small_settings)
        stats = result.aggregated_stats
        assert stats.total_count == 200
        assert stats.significant_count == sum(t.significant for t in result.individual_results)
        assert sum(b.count for b in stats.p_value_histogram) == 200
        assert len(stats.p_value_histogram) == small_settings.histogram_bins

    def test_effect_size_summary(self, medium_pair, small_settings):
        result = simulate_pair(medium_pair, small_settings)
        stats = result.aggregated_stats
        d = np.array(result.effect_sizes)
        assert stats.mean_effect_size == pytest.approx(d.mean())
        lo, hi = stats.effect_size_ci
        assert lo <= stats.mean_effect_size <= hi
        assert stats.true_effect_size == pytest.approx(0.5)
        assert result.effect_size_analysis.mean == pytest.approx(stats.mean_effect_size)

    def test_coverage_near_nominal(self, medium_pair):
        settings = GlobalSettings.for_settings(1000, random_seed=11)
        stats = simulate_pair(medium_pair, settings).aggregated_stats
        assert 0.9 <= stats.ci_coverage <= 0.99
        assert stats.mean_ci_width > 0.0

    def test_significance_analysis_thresholds(self, medium_pair, small_settings):
        analysis = simulate_pair(medium_pair, small_settings).significance_analysis
        assert [r.threshold for r in analysis.by_threshold] == [0.01, 0.05, 0.1]
        counts = [r.significant_count for r in analysis.by_threshold]
        assert counts == sorted(counts)
        assert analysis.threshold_sensitivity.type2_error_rate is not None

    def test_custom_histogram_bins(self, medium_pair):
        settings = GlobalSettings.for_settings(30, histogram_bins=5, random_seed=1)
        stats = simulate_pair(medium_pair, settings).aggregated_stats
        assert len(stats.p_value_histogram) == 5


# ═══════════════════════════════════════════════════════════════════════
# State machine, progress, cancellation, failure
# ═══════════════════════════════════════════════════════════════════════


class TestLifecycle:

    def test_states(self, medium_pair, small_settings):
        runner = PairSimulationRunner(medium_pair, small_settings)
        assert runner.state is RunnerState.IDLE
        assert runner.timing is None
        runner.run()
        assert runner.state is RunnerState.AGGREGATED
        assert set(runner.timing) >= {'total_seconds', 'trials', 'aggregation'}

    def test_single_use(self, medium_pair, small_settings):
        runner = PairSimulationRunner(medium_pair, small_settings)
        runner.run()
        with pytest.raises(RuntimeError):
            runner.run()

    def test_progress_interval_and_last(self, medium_pair):
        settings = GlobalSettings.for_settings(250, random_seed=1, progress_interval=100)
        calls = []
        PairSimulationRunner(medium_pair, settings).run(
            on_progress=lambda done, total: calls.append((done, total)),
        )
        assert calls == [(100, 250), (200, 250), (250, 250)]

    def test_cancel_before_start(self, medium_pair, small_settings):
        token = threading.Event()
        token.set()
        runner = PairSimulationRunner(medium_pair, small_settings)
        with pytest.raises(JobCancelledError):
            runner.run(cancel_token=token)
        assert runner.state is RunnerState.FAILED

    def test_cancel_mid_run(self, medium_pair, small_settings):
        token = threading.Event()

        def on_progress(done, total):
            if done >= 50:
                token.set()

        with pytest.raises(JobCancelledError):
            PairSimulationRunner(medium_pair, small_settings).run(
                on_progress=on_progress, cancel_token=token,
            )

    def test_degenerate_sample_carries_pair_and_trial(self, small_settings, monkeypatch):
        pair = SamplePairSpec.for_pair(
            "flat", "Flat",
            PopulationParams.for_population(1.0, 1.0),
            PopulationParams.for_population(0.0, 1.0),
            5,
        )
        runner = PairSimulationRunner(pair, small_settings)
        monkeypatch.setattr(
            runner._generator, "sample_pair",
            lambda p: (np.ones(5), np.zeros(5)),
        )
        with pytest.raises(DegenerateSampleError) as exc_info:
            runner.run()
        assert exc_info.value.pair_id == "flat"
        assert exc_info.value.trial == 0
        assert runner.state is RunnerState.FAILED
