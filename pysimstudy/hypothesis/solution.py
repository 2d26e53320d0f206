"""
Two-sample test solution type.

TwoSampleSolution wraps Result[TwoSampleParams] and provides an
htest-style text summary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from pysimstudy.core.result import Result
from pysimstudy.hypothesis._common import TwoSampleParams

if TYPE_CHECKING:
    from pysimstudy.hypothesis.design import TwoSampleDesign


@dataclass
class TwoSampleSolution:
    """
    User-facing two-sample test results.

    Wraps Result[TwoSampleParams]; all fields are available as properties.
    """
    _result: Result[TwoSampleParams]
    _design: 'TwoSampleDesign | None'

    @property
    def statistic(self) -> float:
        """Test statistic value (t or U)."""
        return self._result.params.statistic

    @property
    def statistic_name(self) -> str:
        return self._result.params.statistic_name

    @property
    def p_value(self) -> float:
        """Two-sided p-value in [0, 1]."""
        return self._result.params.p_value

    @property
    def effect_size(self) -> float:
        """Cohen's d."""
        return self._result.params.effect_size

    @property
    def df(self) -> float | None:
        """Degrees of freedom, None for rank tests."""
        return self._result.params.df

    @property
    def test_type(self) -> str:
        return self._result.params.test_type

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def params(self) -> TwoSampleParams:
        return self._result.params

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Formatting ---

    def summary(self) -> str:
        """
        Format as htest-style output.

        Produces output like:
            Welch Two Sample t-test

        t = 2.2345, df = 17.43, p-value = 0.03891
        effect size (Cohen's d) = 0.9992
        sample estimates:
             mean of x      mean of y
              5.123456       2.789012
        """
        p = self._result.params
        lines = [f"\t{p.method}", ""]

        parts = [f"{p.statistic_name} = {p.statistic:.5g}"]
        if p.df is not None:
            parts.append(f"df = {p.df:.5g}")
        parts.append(f"p-value = {_format_pvalue(p.p_value)}")
        lines.append(", ".join(parts))
        lines.append(f"effect size (Cohen's d) = {p.effect_size:.4g}")
        lines.append("sample estimates:")
        lines.append(f"{'mean of x':>14s} {'mean of y':>14s}")
        lines.append(f"{p.mean1:14.7g} {p.mean2:14.7g}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"TwoSampleSolution(method={p.method!r}, "
            f"{p.statistic_name}={p.statistic:.4g}, "
            f"p_value={p.p_value:.4g}, d={p.effect_size:.4g})"
        )


def _format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if math.isnan(p):
        return "NA"
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"
