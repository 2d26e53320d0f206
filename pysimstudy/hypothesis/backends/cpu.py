"""
CPU reference backend for two-sample tests.

Dispatches to test-specific submodules based on design.test_type.
"""

from __future__ import annotations

from pysimstudy.core.constants import VALID_TEST_TYPES
from pysimstudy.core.exceptions import UnsupportedTestTypeError
from pysimstudy.core.result import Result
from pysimstudy.hypothesis._common import TwoSampleParams
from pysimstudy.hypothesis.backends._t_test import t_welch, t_pooled
from pysimstudy.hypothesis.backends._mann_whitney import mann_whitney
from pysimstudy.hypothesis.design import TwoSampleDesign


class CPUTwoSampleBackend:
    """CPU reference backend for two-sample tests."""

    @property
    def name(self) -> str:
        return 'cpu_two_sample'

    def solve(self, design: TwoSampleDesign) -> Result[TwoSampleParams]:
        """Dispatch to the implementation for design.test_type."""
        test_type = design.test_type

        if test_type == "welch":
            params, warnings_list = t_welch(design)
        elif test_type == "pooled":
            params, warnings_list = t_pooled(design)
        elif test_type == "mann_whitney":
            params, warnings_list = mann_whitney(design)
        else:
            raise UnsupportedTestTypeError(
                f"Unknown test_type: {test_type!r}",
                test_type=test_type,
                supported=VALID_TEST_TYPES,
            )

        return Result(
            params=params,
            info={
                'test_type': test_type,
                'n1': params.n1,
                'n2': params.n2,
            },
            timing=None,
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
