"""
Solver dispatch for two-sample tests.

Provides two_sample_test() and re-exports effect_size_ci() for
convenience.
"""

from __future__ import annotations

from typing import Literal
from numpy.typing import ArrayLike

from pysimstudy.core.exceptions import ValidationError
from pysimstudy.hypothesis.design import TwoSampleDesign
from pysimstudy.hypothesis.solution import TwoSampleSolution
from pysimstudy.hypothesis.backends.cpu import CPUTwoSampleBackend
from pysimstudy.hypothesis._ci import effect_size_ci  # re-export


def _get_backend(backend: str = 'cpu'):
    """Select backend for two-sample tests."""
    if backend in ('cpu', 'auto'):
        return CPUTwoSampleBackend()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'cpu'."
    )


def two_sample_test(
    x: ArrayLike | TwoSampleDesign,
    y: ArrayLike | None = None,
    test_type: Literal["welch", "pooled", "mann_whitney"] = "welch",
    *,
    exact: bool | None = None,
    correct: bool = True,
    backend: str = 'cpu',
) -> TwoSampleSolution:
    """
    Two-sided two-sample test with Cohen's d.

    Parameters
    ----------
    x : array-like or TwoSampleDesign
        Group 1 sample, or a pre-built design.
    y : array-like
        Group 2 sample. Required unless x is a TwoSampleDesign.
    test_type : str
        "welch" (default, unequal variances), "pooled" (equal
        variances) or "mann_whitney" (rank-sum).
    exact : bool or None
        Mann-Whitney only; see TwoSampleDesign.
    correct : bool
        Mann-Whitney only; continuity correction. Default True.
    backend : str
        'cpu' (default).

    Returns
    -------
    TwoSampleSolution
        statistic, p_value, effect_size, df, method, warnings.

    Raises
    ------
    UnsupportedTestTypeError
        If test_type is not implemented.
    DegenerateSampleError
        If the pooled standard error is zero.
    """
    if isinstance(x, TwoSampleDesign):
        design = x
    else:
        if y is None:
            raise ValidationError("y: a second sample is required")
        design = TwoSampleDesign.for_two_sample(
            x, y, test_type, exact=exact, correct=correct,
        )

    be = _get_backend(backend)
    result = be.solve(design)
    return TwoSampleSolution(_result=result, _design=design)
