"""
Result envelope returned by every computational backend.

Backends return Result[P] where P is their own frozen parameter record
(for the two-sample tests, TwoSampleParams). Callers normally see the
envelope only through a solution wrapper such as TwoSampleSolution.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen output of one backend call.

    Attributes:
        params: Backend payload (statistic, p-value, effect size, ...).
        info: Inputs echoed for reporting, e.g. {'test_type': 'welch',
            'n1': 30, 'n2': 30}.
        timing: Timer.result() of the call, or None when not measured.
        backend_name: Name of the producing backend, e.g. 'cpu_two_sample'.
        warnings: Statistical caveats that did not stop the computation
            (ties in a rank test, exact p unavailable).
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        return any(substring in message for message in self.warnings)
