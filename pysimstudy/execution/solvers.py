"""
Synchronous entry point for multi-pair simulation.

Provides run_simulation(); for background execution with a progress
channel use ExecutionCoordinator.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pysimstudy.execution.aggregator import MultiPairResults
from pysimstudy.execution.engine import MultiPairEngine, ProgressHandler
from pysimstudy.simulation.design import GlobalSettings, SamplePairSpec, SimulationDesign
from pysimstudy.simulation.runner import CancelToken


def run_simulation(
    pairs: Sequence[SamplePairSpec | Mapping[str, Any]],
    settings: GlobalSettings | Mapping[str, Any],
    *,
    on_progress: ProgressHandler | None = None,
    cancel_token: CancelToken | None = None,
    max_workers: int = 1,
) -> MultiPairResults:
    """
    Simulate every enabled sample pair and analyze across pairs.

    Parameters
    ----------
    pairs : sequence of SamplePairSpec or dict
        Pairs to simulate; dicts go through SamplePairSpec.from_dict.
    settings : GlobalSettings or dict
        Global settings; dicts go through GlobalSettings.from_dict.
    on_progress : callable, optional
        Receives Progress messages in order, in the calling thread.
    cancel_token : threading.Event, optional
        Set it from another thread to abort.
    max_workers : int
        Pairs simulated concurrently. Default 1 (serial).

    Returns
    -------
    MultiPairResults

    Raises
    ------
    ValidationError
        On invalid input, before any trial runs.
    DegenerateSampleError
        If some trial had zero pooled variance.
    JobCancelledError
        If cancel_token was set.
    """
    design = SimulationDesign.for_simulation(pairs, settings)
    engine = MultiPairEngine(max_workers=max_workers)
    return engine.run(design, on_progress=on_progress, cancel_token=cancel_token)
