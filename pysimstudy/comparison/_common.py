"""
Common data structures for cross-pair analysis.
"""

from __future__ import annotations

from dataclasses import dataclass

CorrelationMatrix = dict[str, dict[str, float | None]]


@dataclass(frozen=True)
class EffectSizeComparison:
    """
    Difference of mean effect sizes between two pairs.

    statistical_significance is a heuristic (difference > 0.2), not a test.
    """
    pair1_id: str
    pair2_id: str
    effect_size_difference: float
    statistical_significance: bool
    practical_significance: str


@dataclass(frozen=True)
class PowerEntry:
    """
    Observed power of one pair.

    - statistical_power: fraction of trials with p < 0.05
    - required_sample_size: per-group n for 80% power at the observed
      |d|; math.inf when the observed effect is exactly zero
    """
    pair_id: str
    statistical_power: float
    required_sample_size: int | float
    effect_size: float
    confidence_level: float


@dataclass(frozen=True)
class SignificanceCorrelation:
    """
    Agreement of significance outcomes across pairs.

    - correlation_matrix: per threshold, pair-by-pair phi coefficient of
      the per-trial significance indicators (None where undefined)
    - p_value_correlation: pair-by-pair Pearson correlation of the
      per-trial p-values
    - threshold_stability: per threshold, 1 - sd(percentages) / 100
    - overall_consistency: mean of threshold_stability
    """
    correlation_matrix: dict[float, CorrelationMatrix]
    p_value_correlation: CorrelationMatrix
    overall_consistency: float
    threshold_stability: dict[float, float]


@dataclass(frozen=True)
class Recommendation:
    """A suggested change to the study design."""
    type: str
    priority: str
    message: str
    actionable: bool = True
    suggested_action: str | None = None
    pair_id: str | None = None


@dataclass(frozen=True)
class CrossPairAnalysis:
    effect_size_comparison: tuple[EffectSizeComparison, ...]
    power_analysis: tuple[PowerEntry, ...]
    significance_correlation: SignificanceCorrelation
    recommendations: tuple[Recommendation, ...]
