"""
Common data structures for pair simulation.

TrialResult is produced once per simulated trial; the remaining records
are the per-pair aggregates wrapped into PairResult.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrialResult:
    """
    Outcome of one simulated trial.

    - p_value: two-sided p-value in [0, 1]
    - effect_size: Cohen's d, sign of mean1 - mean2
    - confidence_interval: (lower, upper) around effect_size
    - s_value: -log2(p_value); inf when p_value == 0, 0 when p_value == 1
    - significant: p_value < primary alpha
    """
    p_value: float
    effect_size: float
    confidence_interval: tuple[float, float]
    s_value: float
    significant: bool


@dataclass(frozen=True)
class HistogramBin:
    """One p-value histogram bin, [bin_start, bin_end) except the last."""
    bin_start: float
    bin_end: float
    count: int
    significant: bool


@dataclass(frozen=True)
class AggregatedStats:
    """
    Per-pair aggregate of all trials.

    - effect_size_ci: 2.5 / 97.5 percentiles of the simulated effect sizes
    - ci_coverage: fraction of trial intervals containing true_effect_size
    - p_value_histogram: bin counts sum to total_count
    """
    significant_count: int
    total_count: int
    mean_effect_size: float
    effect_size_ci: tuple[float, float]
    true_effect_size: float
    ci_coverage: float
    mean_ci_width: float
    p_value_histogram: tuple[HistogramBin, ...]


@dataclass(frozen=True)
class SignificanceResult:
    """Significance at one threshold. percentage and its CI are in [0, 100]."""
    threshold: float
    significant_count: int
    percentage: float
    confidence_interval: tuple[float, float]


@dataclass(frozen=True)
class SensitivityPoint:
    threshold: float
    sensitivity: float


@dataclass(frozen=True)
class ThresholdSensitivity:
    """
    How the significance rate responds to the threshold.

    - optimal_threshold: threshold whose rate is closest to 80%
    - type1_error_rate: rate at the primary alpha when the true effect
      is zero, otherwise None
    - type2_error_rate: 1 - rate at the primary alpha when the true
      effect is non-zero, otherwise None
    """
    optimal_threshold: float
    sensitivity_curve: tuple[SensitivityPoint, ...]
    type1_error_rate: float | None
    type2_error_rate: float | None


@dataclass(frozen=True)
class SignificanceAnalysis:
    by_threshold: tuple[SignificanceResult, ...]
    threshold_sensitivity: ThresholdSensitivity

    def at(self, threshold: float) -> SignificanceResult | None:
        """Result for an exact configured threshold, or None."""
        for result in self.by_threshold:
            if result.threshold == threshold:
                return result
        return None


@dataclass(frozen=True)
class EffectSizeAnalysis:
    """
    Distribution of the simulated effect sizes of one pair.

    interpretation uses Cohen's cut points on |mean|:
    negligible < 0.2 <= small < 0.5 <= medium < 0.8 <= large.
    """
    mean: float
    median: float
    standard_deviation: float
    confidence_interval: tuple[float, float]
    interpretation: str
    practical_significance: str


@dataclass(frozen=True)
class PairResult:
    """Everything produced for one sample pair."""
    pair_id: str
    pair_name: str
    aggregated_stats: AggregatedStats
    significance_analysis: SignificanceAnalysis
    effect_size_analysis: EffectSizeAnalysis
    individual_results: tuple[TrialResult, ...]

    @property
    def p_values(self) -> list[float]:
        return [t.p_value for t in self.individual_results]

    @property
    def effect_sizes(self) -> list[float]:
        return [t.effect_size for t in self.individual_results]
