"""
Multi-pair job execution.

Usage:
    from pysimstudy.execution import run_simulation, ExecutionCoordinator

    results = run_simulation(pairs, settings)

    with ExecutionCoordinator() as coord:
        handle = coord.submit(pairs, settings, on_progress=print)
        results = handle.result()
"""

from pysimstudy.execution.messages import (
    Request,
    Cancel,
    Progress,
    Success,
    Error,
)
from pysimstudy.execution.aggregator import (
    GlobalStatistics,
    PerformanceMetrics,
    ExecutionMetadata,
    MultiPairResults,
    ResultAggregator,
)
from pysimstudy.execution.engine import MultiPairEngine
from pysimstudy.execution.coordinator import (
    ExecutionCoordinator,
    JobHandle,
    JobState,
    CoordinatorState,
)
from pysimstudy.execution.solvers import run_simulation

__all__ = [
    "Request",
    "Cancel",
    "Progress",
    "Success",
    "Error",
    "GlobalStatistics",
    "PerformanceMetrics",
    "ExecutionMetadata",
    "MultiPairResults",
    "ResultAggregator",
    "MultiPairEngine",
    "ExecutionCoordinator",
    "JobHandle",
    "JobState",
    "CoordinatorState",
    "run_simulation",
]
