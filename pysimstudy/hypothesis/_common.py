"""
Common types for two-sample hypothesis testing.

Defines TwoSampleParams, the payload every two-sample backend returns.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TwoSampleParams:
    """
    Parameter payload for two-sample tests.

    Attributes
    ----------
    statistic : float
        Test statistic ("t" for t-tests, "U" for Mann-Whitney).
    statistic_name : str
        Name of the test statistic.
    p_value : float
        Two-sided p-value, clamped to [0, 1].
    effect_size : float
        Cohen's d = (mean1 - mean2) / pooled_sd. Sign follows mean1 - mean2.
    df : float or None
        Degrees of freedom (Welch-Satterthwaite for welch, n1+n2-2 for
        pooled). None for rank tests.
    mean1, mean2 : float
        Sample means.
    pooled_sd : float
        sqrt(((n1-1)var1 + (n2-1)var2) / (n1+n2-2)).
    n1, n2 : int
        Sample sizes.
    test_type : str
        "welch", "pooled" or "mann_whitney".
    method : str
        Human-readable method name.
    """
    statistic: float
    statistic_name: str
    p_value: float
    effect_size: float
    df: float | None
    mean1: float
    mean2: float
    pooled_sd: float
    n1: int
    n2: int
    test_type: str
    method: str
