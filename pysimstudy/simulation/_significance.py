"""
Significance classification and p-value histograms.

- classify: per-threshold significant counts with a CI for the percentage
- histogram: fixed-width bins over [0, 1], last bin right-inclusive
- threshold_sensitivity: significance rate as a function of threshold
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike

from pysimstudy.core.constants import DEFAULT_HISTOGRAM_BINS, TARGET_POWER, Z_95
from pysimstudy.core.exceptions import ValidationError
from pysimstudy.core.validation import check_array, check_strictly_ascending
from pysimstudy.simulation._common import (
    HistogramBin,
    SensitivityPoint,
    SignificanceAnalysis,
    SignificanceResult,
    ThresholdSensitivity,
)

CI_METHODS = ("wald", "wilson")


def s_value(p_value: float) -> float:
    """Shannon information -log2(p); inf at p = 0, 0 at p = 1."""
    if p_value <= 0.0:
        return math.inf
    if p_value >= 1.0:
        return 0.0
    return -math.log2(p_value)


def proportion_ci(
    successes: int, n: int, z: float = Z_95, method: str = "wald",
) -> tuple[float, float]:
    """
    Confidence interval for a binomial proportion, clamped to [0, 1].

    method="wald" is the normal approximation p +/- z*sqrt(p(1-p)/n);
    method="wilson" is the Wilson score interval.
    """
    if n <= 0:
        raise ValidationError(f"n: must be > 0, got {n}")
    p = successes / n

    if method == "wald":
        half = z * math.sqrt(p * (1.0 - p) / n)
        lo, hi = p - half, p + half
    elif method == "wilson":
        z2 = z * z
        denom = 1.0 + z2 / n
        center = (p + z2 / (2.0 * n)) / denom
        half = z * math.sqrt(p * (1.0 - p) / n + z2 / (4.0 * n * n)) / denom
        lo, hi = center - half, center + half
    else:
        raise ValidationError(f"method must be one of {CI_METHODS}, got {method!r}")

    return (max(0.0, lo), min(1.0, hi))


def classify(
    p_values: ArrayLike,
    thresholds: Sequence[float],
    method: str = "wald",
) -> tuple[SignificanceResult, ...]:
    """
    Count p-values strictly below each threshold.

    Returns one SignificanceResult per threshold, in threshold order.
    Counts are monotone non-decreasing in the threshold.
    """
    p = _check_p_values(p_values)
    n = len(p)
    results = []
    for threshold in thresholds:
        count = int(np.sum(p < threshold))
        lo, hi = proportion_ci(count, n, method=method)
        results.append(SignificanceResult(
            threshold=float(threshold),
            significant_count=count,
            percentage=100.0 * count / n,
            confidence_interval=(100.0 * lo, 100.0 * hi),
        ))
    return tuple(results)


def histogram(
    p_values: ArrayLike,
    num_bins: int = DEFAULT_HISTOGRAM_BINS,
    primary_alpha: float = 0.05,
) -> tuple[HistogramBin, ...]:
    """
    Equal-width histogram of p-values over [0, 1].

    Bin i covers [i/k, (i+1)/k); the last bin also includes 1.0. A bin is
    flagged significant when its upper edge is <= primary_alpha. Counts
    always sum to len(p_values).
    """
    if num_bins < 1:
        raise ValidationError(f"num_bins: must be >= 1, got {num_bins}")
    p = _check_p_values(p_values, allow_empty=True)

    edges = np.arange(num_bins + 1, dtype=np.float64) / num_bins
    idx = np.searchsorted(edges, p, side='right') - 1
    idx = np.minimum(idx, num_bins - 1)
    counts = np.bincount(idx, minlength=num_bins)

    return tuple(
        HistogramBin(
            bin_start=float(edges[i]),
            bin_end=float(edges[i + 1]),
            count=int(counts[i]),
            significant=bool(edges[i + 1] <= primary_alpha),
        )
        for i in range(num_bins)
    )


def threshold_sensitivity(
    p_values: ArrayLike,
    thresholds: Sequence[float],
    true_effect_size: float,
    primary_alpha: float,
) -> ThresholdSensitivity:
    """
    Sensitivity curve and error rates against the known true effect.

    The optimal threshold is the one whose significance rate is closest
    to the target power; ties keep the smaller threshold.
    """
    p = _check_p_values(p_values)
    n = len(p)

    curve = tuple(
        SensitivityPoint(
            threshold=float(t),
            sensitivity=100.0 * float(np.sum(p < t)) / n,
        )
        for t in thresholds
    )

    optimal = curve[0]
    for point in curve[1:]:
        if abs(point.sensitivity / 100.0 - TARGET_POWER) < abs(optimal.sensitivity / 100.0 - TARGET_POWER):
            optimal = point

    rate = float(np.sum(p < primary_alpha)) / n
    if math.isclose(true_effect_size, 0.0, abs_tol=1e-12):
        type1, type2 = rate, None
    else:
        type1, type2 = None, 1.0 - rate

    return ThresholdSensitivity(
        optimal_threshold=optimal.threshold,
        sensitivity_curve=curve,
        type1_error_rate=type1,
        type2_error_rate=type2,
    )


def analyze_significance(
    p_values: ArrayLike,
    thresholds: Sequence[float],
    true_effect_size: float,
    method: str = "wald",
) -> SignificanceAnalysis:
    """Per-threshold classification plus threshold sensitivity."""
    check_strictly_ascending(list(thresholds), "thresholds")
    return SignificanceAnalysis(
        by_threshold=classify(p_values, thresholds, method=method),
        threshold_sensitivity=threshold_sensitivity(
            p_values, thresholds, true_effect_size, thresholds[0],
        ),
    )


def _check_p_values(p_values: ArrayLike, allow_empty: bool = False) -> np.ndarray:
    p = check_array(p_values, "p_values").ravel()
    if len(p) == 0 and not allow_empty:
        raise ValidationError("p_values: must not be empty")
    if np.any(np.isnan(p)) or np.any((p < 0.0) | (p > 1.0)):
        raise ValidationError("p_values: all values must lie in [0, 1]")
    return p
