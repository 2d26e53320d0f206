"""
Wall-clock phase timing.

A simulation job is timed as a whole and per phase (trials, aggregation,
cross-pair analysis). The resulting dict feeds PerformanceMetrics.
"""

import time
from contextlib import contextmanager
from typing import Iterator

TOTAL_KEY = 'total_seconds'


class Timer:
    """
    Overall stopwatch plus named, accumulating phase sections.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('simulation'):
            pair_results = [runner.run() for runner in runners]
        timer.stop()
        timer.result()   # {'total_seconds': 0.05, 'simulation': 0.045}
    """

    def __init__(self):
        self._phases: dict[str, float] = {}
        self._t0: float | None = None
        self._total: float | None = None

    def _require_started(self, caller: str) -> float:
        if self._t0 is None:
            raise RuntimeError(f"Timer.{caller}() called before start()")
        return self._t0

    def start(self) -> None:
        self._t0 = time.perf_counter()
        self._total = None

    def stop(self) -> None:
        self._total = time.perf_counter() - self._require_started('stop')

    def elapsed(self) -> float:
        """Seconds since start(); the timer keeps running."""
        return time.perf_counter() - self._require_started('elapsed')

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Add the duration of the with-block to phase `name`.

        The phase is recorded even when the block raises.
        """
        begin = time.perf_counter()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + (time.perf_counter() - begin)

    def result(self) -> dict[str, float]:
        """{'total_seconds': ..., <phase>: ...}; only valid after stop()."""
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {TOTAL_KEY: self._total, **self._phases}


@contextmanager
def timed() -> Iterator[Timer]:
    """Started Timer that is stopped when the with-block exits."""
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
