"""
Confidence interval for Cohen's d.

Large-sample standard error of d (Hedges & Olkin):

    SE(d) = sqrt((n1 + n2) / (n1 * n2) + d^2 / (2 * (n1 + n2)))

The interval is d +/- t_{1 - alpha/2, n1 + n2 - 2} * SE(d).
"""

from __future__ import annotations

import math

from pysimstudy.core.compute.distributions import t_critical
from pysimstudy.core.exceptions import InvalidParameterError
from pysimstudy.core.validation import check_confidence_level


def effect_size_se(effect_size: float, n1: int, n2: int) -> float:
    """Approximate standard error of Cohen's d."""
    return math.sqrt(
        (n1 + n2) / (n1 * n2) + effect_size ** 2 / (2.0 * (n1 + n2))
    )


def effect_size_ci(
    effect_size: float,
    n1: int,
    n2: int,
    confidence_level: float = 0.95,
) -> tuple[float, float]:
    """
    Two-sided confidence interval around an effect-size estimate.

    Args:
        effect_size: Cohen's d estimate.
        n1, n2: Group sizes, each >= 2.
        confidence_level: Coverage probability in (0, 1).

    Returns:
        (lower, upper) with lower <= upper.

    Raises:
        InvalidConfidenceLevelError: If confidence_level is outside (0, 1).
        InvalidParameterError: If a group has fewer than 2 observations
            or effect_size is not finite.
    """
    confidence_level = check_confidence_level(confidence_level)
    if n1 < 2 or n2 < 2:
        raise InvalidParameterError(
            f"group sizes must be >= 2, got n1={n1}, n2={n2}",
            parameter="n", value=(n1, n2),
        )
    if not math.isfinite(effect_size):
        raise InvalidParameterError(
            f"effect_size must be finite, got {effect_size}",
            parameter="effect_size", value=effect_size,
        )

    df = float(n1 + n2 - 2)
    margin = t_critical(confidence_level, df) * effect_size_se(effect_size, n1, n2)
    return (effect_size - margin, effect_size + margin)
