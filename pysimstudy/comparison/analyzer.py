"""
Cross-pair analysis of finished pair results.

Compares effect sizes between pairs, estimates observed power and the
sample size needed for 80% power, measures how consistently pairs reach
significance, and turns the findings into recommendations.
"""

from __future__ import annotations

import logging
import math
from itertools import combinations
from typing import Sequence

import numpy as np

from pysimstudy.core.constants import (
    COVERAGE_TOLERANCE,
    DIFFERENCE_CUTS,
    DIFFERENCE_SIGNIFICANCE_CUT,
    HIGH_SIGNIFICANCE_RATE,
    LOW_POWER_HIGH_PRIORITY,
    POWER_ALPHA,
    STRICT_ALPHA,
    TARGET_POWER,
    Z_ALPHA_HALF,
    Z_BETA,
)
from pysimstudy.core.exceptions import ValidationError
from pysimstudy.comparison._common import (
    CorrelationMatrix,
    CrossPairAnalysis,
    EffectSizeComparison,
    PowerEntry,
    Recommendation,
    SignificanceCorrelation,
)
from pysimstudy.simulation._common import PairResult
from pysimstudy.simulation.design import GlobalSettings

logger = logging.getLogger(__name__)


def _difference_category(diff: float) -> str:
    negligible, small, medium = DIFFERENCE_CUTS
    if diff < negligible:
        return 'negligible'
    if diff < small:
        return 'small'
    if diff < medium:
        return 'medium'
    return 'large'


def compare_effect_sizes(results: Sequence[PairResult]) -> tuple[EffectSizeComparison, ...]:
    """One comparison per unordered pair (i < j), in input order."""
    comparisons = []
    for first, second in combinations(results, 2):
        diff = abs(first.effect_size_analysis.mean - second.effect_size_analysis.mean)
        comparisons.append(EffectSizeComparison(
            pair1_id=first.pair_id,
            pair2_id=second.pair_id,
            effect_size_difference=diff,
            statistical_significance=diff > DIFFERENCE_SIGNIFICANCE_CUT,
            practical_significance=_difference_category(diff),
        ))
    return tuple(comparisons)


def required_sample_size(effect_size: float) -> int | float:
    """
    Per-group n for 80% power at two-sided alpha 0.05.

    n = ceil(((z_{alpha/2} + z_beta) / |d|)^2); inf when d == 0.
    """
    d = abs(effect_size)
    if d == 0.0:
        return math.inf
    return math.ceil(((Z_ALPHA_HALF + Z_BETA) / d) ** 2)


def observed_power(result: PairResult, alpha: float = POWER_ALPHA) -> float:
    """Fraction of the pair's trials with p < alpha."""
    p = np.asarray(result.p_values, dtype=np.float64)
    if len(p) == 0:
        return 0.0
    return float(np.mean(p < alpha))


def analyze_power(
    results: Sequence[PairResult], confidence_level: float,
) -> tuple[PowerEntry, ...]:
    entries = []
    for result in results:
        d = abs(result.effect_size_analysis.mean)
        entries.append(PowerEntry(
            pair_id=result.pair_id,
            statistical_power=observed_power(result),
            required_sample_size=required_sample_size(d),
            effect_size=d,
            confidence_level=confidence_level,
        ))
    return tuple(entries)


def _pearson(x: np.ndarray, y: np.ndarray) -> float | None:
    """Pearson r, or None when either vector is constant or lengths differ."""
    if len(x) != len(y) or len(x) < 2:
        return None
    xc = x - x.mean()
    yc = y - y.mean()
    denom = math.sqrt(float(np.dot(xc, xc)) * float(np.dot(yc, yc)))
    if denom == 0.0:
        return None
    return float(np.clip(np.dot(xc, yc) / denom, -1.0, 1.0))


def _matrix(ids: list[str], vectors: list[np.ndarray]) -> CorrelationMatrix:
    matrix: CorrelationMatrix = {pid: {} for pid in ids}
    for i, a in enumerate(ids):
        matrix[a][a] = 1.0
        for j in range(i + 1, len(ids)):
            r = _pearson(vectors[i], vectors[j])
            matrix[a][ids[j]] = r
            matrix[ids[j]][a] = r
    return matrix


def correlate_significance(
    results: Sequence[PairResult], thresholds: Sequence[float],
) -> SignificanceCorrelation:
    """
    Per-threshold agreement of significance outcomes across pairs.

    Trial vectors are aligned by trial index, so every pair must have
    run the same number of trials.
    """
    if not results:
        raise ValidationError("results: must not be empty")
    ids = [r.pair_id for r in results]
    p_vectors = [np.asarray(r.p_values, dtype=np.float64) for r in results]

    matrices: dict[float, CorrelationMatrix] = {}
    stability: dict[float, float] = {}
    for threshold in thresholds:
        indicators = [(p < threshold).astype(np.float64) for p in p_vectors]
        matrices[threshold] = _matrix(ids, indicators)

        percentages = np.array([
            100.0 * float(np.mean(ind)) if len(ind) else 0.0 for ind in indicators
        ])
        stability[threshold] = 1.0 - float(np.std(percentages)) / 100.0

    consistency = float(np.mean(list(stability.values()))) if stability else 1.0

    return SignificanceCorrelation(
        correlation_matrix=matrices,
        p_value_correlation=_matrix(ids, p_vectors),
        overall_consistency=consistency,
        threshold_stability=stability,
    )


def recommend(
    results: Sequence[PairResult], settings: GlobalSettings,
) -> tuple[Recommendation, ...]:
    """Design recommendations, grouped by rule in a fixed order."""
    recommendations: list[Recommendation] = []

    powers = [observed_power(r) for r in results]

    for result, power in zip(results, powers):
        if power < TARGET_POWER:
            n = required_sample_size(result.effect_size_analysis.mean)
            recommendations.append(Recommendation(
                type='sample_size',
                priority='high' if power < LOW_POWER_HIGH_PRIORITY else 'medium',
                message=(
                    f"{result.pair_name}: Low statistical power ({100 * power:.1f}%). "
                    f"Consider increasing sample size to {n} per group."
                ),
                suggested_action=f"Increase sample size to {n} per group for 80% power",
                pair_id=result.pair_id,
            ))

    for result in results:
        if result.effect_size_analysis.interpretation == 'negligible':
            recommendations.append(Recommendation(
                type='effect_size',
                priority='medium',
                message=(
                    f"{result.pair_name}: Effect size is negligible. "
                    "Consider if this comparison is practically meaningful."
                ),
                suggested_action=(
                    "Review whether this comparison is necessary for your research question"
                ),
                pair_id=result.pair_id,
            ))

    if powers and 100.0 * float(np.mean(powers)) > HIGH_SIGNIFICANCE_RATE:
        recommendations.append(Recommendation(
            type='significance_level',
            priority='low',
            message=(
                "High overall significance rate. Consider using more stringent "
                f"thresholds (alpha = {STRICT_ALPHA}) to control Type I errors."
            ),
            suggested_action=f"Use alpha = {STRICT_ALPHA} for more conservative testing",
        ))

    floor = settings.confidence_level - COVERAGE_TOLERANCE
    for result in results:
        coverage = result.aggregated_stats.ci_coverage
        if coverage < floor:
            recommendations.append(Recommendation(
                type='methodology',
                priority='medium',
                message=(
                    f"{result.pair_name}: Confidence intervals cover the true effect in "
                    f"{100 * coverage:.1f}% of trials, below the nominal "
                    f"{100 * settings.confidence_level:.0f}%."
                ),
                suggested_action=(
                    "Check the distributional assumptions or switch to a rank-based test"
                ),
                pair_id=result.pair_id,
            ))

    return tuple(recommendations)


class CrossPairAnalyzer:
    """
    Runs every cross-pair analysis over a job's pair results.

    Usage:
        analysis = CrossPairAnalyzer(settings).analyze(pair_results)
    """

    def __init__(self, settings: GlobalSettings):
        self._settings = settings

    def analyze(self, results: Sequence[PairResult]) -> CrossPairAnalysis:
        settings = self._settings
        logger.debug("cross-pair analysis over %d pairs", len(results))
        return CrossPairAnalysis(
            effect_size_comparison=compare_effect_sizes(results),
            power_analysis=analyze_power(results, settings.confidence_level),
            significance_correlation=correlate_significance(
                results, settings.significance_levels,
            ),
            recommendations=recommend(results, settings),
        )
