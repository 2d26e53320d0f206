"""
TwoSampleDesign: validated inputs for a two-sample test.

Immutable after construction. Use the for_two_sample() factory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray, ArrayLike

from pysimstudy.core.constants import VALID_TEST_TYPES
from pysimstudy.core.exceptions import UnsupportedTestTypeError
from pysimstudy.core.validation import (
    check_array, check_finite, check_1d, check_min_samples,
)


@dataclass(frozen=True)
class TwoSampleDesign:
    """
    Frozen design for a two-sample test.

    Attributes:
        x: Group 1 sample, shape (n1,).
        y: Group 2 sample, shape (n2,).
        test_type: "welch", "pooled" or "mann_whitney".
        exact: Mann-Whitney only. True forces the exact distribution,
            False forces the normal approximation, None picks exact for
            small samples without ties.
        correct: Mann-Whitney only. Continuity correction for the normal
            approximation.
    """
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    test_type: str
    exact: bool | None
    correct: bool

    @classmethod
    def for_two_sample(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        test_type: str = "welch",
        *,
        exact: bool | None = None,
        correct: bool = True,
    ) -> TwoSampleDesign:
        """
        Create a two-sample design with validation.

        Raises:
            UnsupportedTestTypeError: If test_type is not implemented.
            ValidationError: If x or y is not a finite 1D numeric sample
                with at least 2 observations.
        """
        if test_type not in VALID_TEST_TYPES:
            raise UnsupportedTestTypeError(
                f"test_type must be one of {VALID_TEST_TYPES}, got {test_type!r}",
                test_type=test_type,
                supported=VALID_TEST_TYPES,
            )

        x_arr = check_array(x, "x").copy()
        y_arr = check_array(y, "y").copy()
        for arr, name in ((x_arr, "x"), (y_arr, "y")):
            check_1d(arr, name)
            check_finite(arr, name)
            check_min_samples(arr, 2, name)

        return cls(
            x=x_arr,
            y=y_arr,
            test_type=test_type,
            exact=exact,
            correct=correct,
        )
