"""
Effect-size distribution summary and Cohen's interpretation.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from pysimstudy.core.constants import EFFECT_SIZE_CUTS, Z_95
from pysimstudy.core.exceptions import ValidationError
from pysimstudy.core.validation import check_array, check_finite
from pysimstudy.simulation._common import EffectSizeAnalysis

_NARRATIVE = {
    'negligible': 'Effect is too small to be practically meaningful',
    'small': 'Small but potentially meaningful effect',
    'medium': 'Medium effect with practical significance',
    'large': 'Large effect with strong practical significance',
}


def interpret_effect_size(d: float) -> str:
    """Cohen's category of |d|: negligible, small, medium or large."""
    small, medium, large = EFFECT_SIZE_CUTS
    magnitude = abs(d)
    if magnitude < small:
        return 'negligible'
    if magnitude < medium:
        return 'small'
    if magnitude < large:
        return 'medium'
    return 'large'


def analyze_effect_sizes(effect_sizes: ArrayLike) -> EffectSizeAnalysis:
    """
    Mean, median, SD and normal 95% CI of the mean effect size.

    The SD is the population SD of the simulated values, so a single
    trial yields SD 0 rather than NaN.
    """
    d = check_array(effect_sizes, "effect_sizes").ravel()
    if len(d) == 0:
        raise ValidationError("effect_sizes: must not be empty")
    check_finite(d, "effect_sizes")

    mean = float(np.mean(d))
    sd = float(np.std(d))
    se = sd / math.sqrt(len(d))
    label = interpret_effect_size(mean)

    return EffectSizeAnalysis(
        mean=mean,
        median=float(np.median(d)),
        standard_deviation=sd,
        confidence_interval=(mean - Z_95 * se, mean + Z_95 * se),
        interpretation=label,
        practical_significance=_NARRATIVE[label],
    )
