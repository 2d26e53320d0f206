"""
Two-sample hypothesis testing.

Public API:
    two_sample_test(x, y, test_type)   - Welch, pooled or Mann-Whitney test
    effect_size_ci(d, n1, n2, level)   - Confidence interval for Cohen's d
"""

from pysimstudy.hypothesis.solvers import two_sample_test
from pysimstudy.hypothesis._ci import effect_size_ci, effect_size_se
from pysimstudy.hypothesis.design import TwoSampleDesign
from pysimstudy.hypothesis._common import TwoSampleParams
from pysimstudy.hypothesis.solution import TwoSampleSolution

__all__ = [
    "two_sample_test",
    "effect_size_ci",
    "effect_size_se",
    "TwoSampleDesign",
    "TwoSampleParams",
    "TwoSampleSolution",
]
