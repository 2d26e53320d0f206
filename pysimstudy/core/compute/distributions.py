"""
Student-t and standard normal distribution functions.

The t-distribution is expressed through the regularized incomplete beta
function I_x(a, b):

    P(|T| > t) = I_{df / (df + t^2)}(df / 2, 1 / 2)

which is accurate for small and fractional degrees of freedom (Welch)
and in the far tails. The inverse uses the inverse incomplete beta
function. Both come from scipy.special.
"""

from __future__ import annotations

import math

from scipy import special as sp_special


def t_two_sided_p(t_stat: float, df: float) -> float:
    """
    Two-sided p-value P(|T| >= |t_stat|) for a Student-t with df degrees.

    Returns NaN for NaN input or non-positive df. The result is clamped
    to [0, 1].
    """
    if math.isnan(t_stat) or math.isnan(df) or df <= 0:
        return math.nan
    if math.isinf(t_stat):
        return 0.0
    x = df / (df + t_stat * t_stat)
    p = float(sp_special.betainc(0.5 * df, 0.5, x))
    return min(max(p, 0.0), 1.0)


def t_cdf(t_stat: float, df: float) -> float:
    """Cumulative distribution function of the Student-t distribution."""
    if math.isnan(t_stat) or math.isnan(df) or df <= 0:
        return math.nan
    tail = 0.5 * t_two_sided_p(t_stat, df)
    return 1.0 - tail if t_stat > 0 else tail


def t_sf(t_stat: float, df: float) -> float:
    """Survival function 1 - CDF of the Student-t distribution."""
    cdf = t_cdf(t_stat, df)
    return 1.0 - cdf if not math.isnan(cdf) else math.nan


def t_ppf(q: float, df: float) -> float:
    """
    Quantile function (inverse CDF) of the Student-t distribution.

    Args:
        q: Probability in (0, 1)
        df: Degrees of freedom, > 0 (fractional allowed)

    Returns:
        t such that CDF(t) = q
    """
    if math.isnan(q) or math.isnan(df) or df <= 0:
        return math.nan
    if q <= 0.0:
        return -math.inf
    if q >= 1.0:
        return math.inf
    if q == 0.5:
        return 0.0

    # Two-sided tail mass beyond |t|
    tail = 2.0 * min(q, 1.0 - q)
    x = float(sp_special.betaincinv(0.5 * df, 0.5, tail))
    if x <= 0.0:
        magnitude = math.inf
    else:
        magnitude = math.sqrt(df * (1.0 - x) / x)
    return magnitude if q > 0.5 else -magnitude


def t_critical(confidence_level: float, df: float) -> float:
    """Two-sided critical value t_{1 - (1 - confidence_level) / 2, df}."""
    alpha = 1.0 - confidence_level
    return t_ppf(1.0 - alpha / 2.0, df)


def norm_sf(z: float) -> float:
    """Standard normal survival function."""
    return float(sp_special.ndtr(-z))


def norm_ppf(q: float) -> float:
    """Standard normal quantile function."""
    return float(sp_special.ndtri(q))
