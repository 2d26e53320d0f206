"""
Shared compute infrastructure for pysimstudy.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    distributions: Student-t and normal distribution functions
"""

from pysimstudy.core.compute.timing import Timer, timed
from pysimstudy.core.compute.distributions import (
    t_cdf,
    t_sf,
    t_ppf,
    t_two_sided_p,
    t_critical,
    norm_sf,
    norm_ppf,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Distributions
    "t_cdf",
    "t_sf",
    "t_ppf",
    "t_two_sided_p",
    "t_critical",
    "norm_sf",
    "norm_ppf",
]
