"""
Tests for cross-pair analysis: effect-size comparisons, power, required
sample size, significance correlation and recommendations.
"""

import math

import numpy as np
import pytest

from pysimstudy.comparison import (
    CrossPairAnalyzer,
    analyze_power,
    compare_effect_sizes,
    correlate_significance,
    observed_power,
    recommend,
    required_sample_size,
)
from pysimstudy.simulation import (
    GlobalSettings,
    PairResult,
    TrialResult,
    analyze_effect_sizes,
    analyze_significance,
)
from pysimstudy.simulation._common import AggregatedStats


SETTINGS = GlobalSettings.for_settings(4, (0.01, 0.05))


def make_result(pair_id, p_values, effect_sizes, coverage=0.95):
    """PairResult built directly from trial p-values and effect sizes."""
    trials = tuple(
        TrialResult(
            p_value=p, effect_size=d, confidence_interval=(d - 0.5, d + 0.5),
            s_value=-math.log2(p), significant=p < 0.01,
        )
        for p, d in zip(p_values, effect_sizes)
    )
    stats = AggregatedStats(
        significant_count=sum(t.significant for t in trials),
        total_count=len(trials),
        mean_effect_size=float(np.mean(effect_sizes)),
        effect_size_ci=(min(effect_sizes), max(effect_sizes)),
        true_effect_size=0.5,
        ci_coverage=coverage,
        mean_ci_width=1.0,
        p_value_histogram=(),
    )
    return PairResult(
        pair_id=pair_id,
        pair_name=f"Pair {pair_id}",
        aggregated_stats=stats,
        significance_analysis=analyze_significance(p_values, (0.01, 0.05), 0.5),
        effect_size_analysis=analyze_effect_sizes(effect_sizes),
        individual_results=trials,
    )


@pytest.fixture
def strong():
    return make_result("strong", [0.001, 0.002, 0.003, 0.04], [1.0, 1.1, 0.9, 1.0])


@pytest.fixture
def weak():
    return make_result("weak", [0.3, 0.6, 0.02, 0.9], [0.05, 0.1, 0.0, 0.05])


# ═══════════════════════════════════════════════════════════════════════
# Effect-size comparison
# ═══════════════════════════════════════════════════════════════════════


class TestCompareEffectSizes:

    def test_all_unordered_pairs(self, strong, weak):
        third = make_result("third", [0.5] * 4, [0.4] * 4)
        comparisons = compare_effect_sizes([strong, weak, third])
        assert [(c.pair1_id, c.pair2_id) for c in comparisons] == [
            ("strong", "weak"), ("strong", "third"), ("weak", "third"),
        ]

    def test_difference_and_flags(self, strong, weak):
        (c,) = compare_effect_sizes([strong, weak])
        assert c.effect_size_difference == pytest.approx(0.95)
        assert c.statistical_significance
        assert c.practical_significance == "large"

    @pytest.mark.parametrize("delta, label, flagged", [
        (0.05, "negligible", False),
        (0.15, "small", False),
        (0.25, "small", True),
        (0.4, "medium", True),
        (0.6, "large", True),
    ])
    def test_buckets(self, delta, label, flagged):
        a = make_result("a", [0.5] * 2, [0.0, 0.0])
        b = make_result("b", [0.5] * 2, [delta, delta])
        (c,) = compare_effect_sizes([a, b])
        assert c.practical_significance == label
        assert c.statistical_significance is flagged

    def test_single_pair_has_no_comparisons(self, strong):
        assert compare_effect_sizes([strong]) == ()


# ═══════════════════════════════════════════════════════════════════════
# Power
# ═══════════════════════════════════════════════════════════════════════


class TestPower:

    @pytest.mark.parametrize("d, n", [(0.5, 32), (0.8, 13), (-0.5, 32), (2.0, 2)])
    def test_required_sample_size(self, d, n):
        assert required_sample_size(d) == n

    def test_required_sample_size_zero_effect(self):
        assert required_sample_size(0.0) == math.inf

    def test_observed_power_from_trials(self, strong, weak):
        assert observed_power(strong) == 1.0
        assert observed_power(weak) == 0.25

    def test_power_counts_trials_below_005(self):
        result = make_result("x", [0.03, 0.2], [0.5, 0.5])
        assert observed_power(result) == 0.5

    def test_entries(self, strong, weak):
        entries = analyze_power([strong, weak], 0.95)
        assert [e.pair_id for e in entries] == ["strong", "weak"]
        assert entries[0].effect_size == pytest.approx(1.0)
        assert entries[0].required_sample_size == 8
        assert entries[1].confidence_level == 0.95


# ═══════════════════════════════════════════════════════════════════════
# Significance correlation
# ═══════════════════════════════════════════════════════════════════════


class TestCorrelateSignificance:

    def test_phi_coefficient(self):
        a = make_result("a", [0.001, 0.001, 0.5, 0.5], [0.5] * 4)
        b = make_result("b", [0.001, 0.5, 0.001, 0.5], [0.5] * 4)
        c = make_result("c", [0.001, 0.001, 0.5, 0.5], [0.5] * 4)
        corr = correlate_significance([a, b, c], (0.01,))
        matrix = corr.correlation_matrix[0.01]
        assert matrix["a"]["a"] == 1.0
        assert matrix["a"]["b"] == pytest.approx(0.0)
        assert matrix["a"]["c"] == pytest.approx(1.0)
        assert matrix["b"]["a"] == matrix["a"]["b"]

    def test_constant_indicator_is_none(self, strong, weak):
        corr = correlate_significance([strong, weak], (0.05,))
        # strong is significant in every trial at 0.05
        assert corr.correlation_matrix[0.05]["strong"]["weak"] is None

    def test_p_value_correlation(self):
        a = make_result("a", [0.1, 0.2, 0.3, 0.4], [0.5] * 4)
        b = make_result("b", [0.4, 0.3, 0.2, 0.1], [0.5] * 4)
        corr = correlate_significance([a, b], (0.05,))
        assert corr.p_value_correlation["a"]["b"] == pytest.approx(-1.0)

    def test_stability(self, strong, weak):
        corr = correlate_significance([strong, weak], (0.01, 0.05))
        # rates at 0.01: 75% and 0%; at 0.05: 100% and 25%
        assert corr.threshold_stability[0.01] == pytest.approx(1 - 37.5 / 100)
        assert corr.threshold_stability[0.05] == pytest.approx(1 - 37.5 / 100)
        assert corr.overall_consistency == pytest.approx(0.625)

    def test_single_pair_fully_stable(self, strong):
        corr = correlate_significance([strong], (0.01, 0.05))
        assert corr.overall_consistency == 1.0


# ═══════════════════════════════════════════════════════════════════════
# Recommendations
# ═══════════════════════════════════════════════════════════════════════


class TestRecommendations:

    def test_low_power_high_priority(self, weak):
        recs = recommend([weak], SETTINGS)
        sample = [r for r in recs if r.type == "sample_size"]
        assert len(sample) == 1
        assert sample[0].priority == "high"
        assert sample[0].pair_id == "weak"
        assert "25.0%" in sample[0].message
        assert sample[0].actionable

    def test_medium_priority_between_50_and_80(self):
        result = make_result("m", [0.01, 0.02, 0.03, 0.5], [0.6] * 4)
        (rec,) = [r for r in recommend([result], SETTINGS) if r.type == "sample_size"]
        assert rec.priority == "medium"

    def test_negligible_effect(self, weak):
        types = [r.type for r in recommend([weak], SETTINGS)]
        assert "effect_size" in types

    def test_high_overall_significance(self, strong):
        recs = recommend([strong], SETTINGS)
        assert [r.type for r in recs] == ["significance_level"]
        assert recs[0].priority == "low"
        assert recs[0].pair_id is None

    def test_low_coverage(self):
        result = make_result("c", [0.001] * 4, [1.0] * 4, coverage=0.80)
        recs = recommend([result], SETTINGS)
        assert "methodology" in [r.type for r in recs]

    def test_order_by_rule(self, strong, weak):
        types = [r.type for r in recommend([weak, strong], SETTINGS)]
        assert types == ["sample_size", "effect_size", "significance_level"]


class TestCrossPairAnalyzer:

    def test_bundle(self, strong, weak):
        analysis = CrossPairAnalyzer(SETTINGS).analyze([strong, weak])
        assert len(analysis.effect_size_comparison) == 1
        assert len(analysis.power_analysis) == 2
        assert set(analysis.significance_correlation.threshold_stability) == {0.01, 0.05}
        assert analysis.recommendations
