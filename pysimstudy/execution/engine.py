"""
Synchronous multi-pair simulation engine.

MultiPairEngine runs every enabled pair of a SimulationDesign, performs
the cross-pair analysis and aggregates the final MultiPairResults. Pairs
run serially by default; with max_workers > 1 they run on a thread pool.
Each pair draws from its own child seed spawned from the root seed, so
results are identical whatever the worker count.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Callable

import numpy as np

from pysimstudy.comparison.analyzer import CrossPairAnalyzer
from pysimstudy.core.compute.timing import Timer
from pysimstudy.core.constants import PHASE_ANALYZING, PHASE_RUNNING
from pysimstudy.core.validation import check_int_at_least
from pysimstudy.execution.aggregator import MultiPairResults, ResultAggregator
from pysimstudy.execution.messages import Progress
from pysimstudy.sampling.generator import spawn_seeds
from pysimstudy.simulation._common import PairResult
from pysimstudy.simulation.design import SamplePairSpec, SimulationDesign
from pysimstudy.simulation.runner import CancelToken, PairSimulationRunner

logger = logging.getLogger(__name__)

ProgressHandler = Callable[[Progress], None]


class _EitherSet:
    """Cancel token that is set when any of its members is set."""

    def __init__(self, *tokens: CancelToken | None):
        self._tokens = [t for t in tokens if t is not None]

    def is_set(self) -> bool:
        return any(t.is_set() for t in self._tokens)


class MultiPairEngine:
    """
    Runs a whole multi-pair job in the calling thread.

    Args:
        max_workers: Number of pairs simulated concurrently. 1 runs the
            pairs one after another in the calling thread.

    Usage:
        engine = MultiPairEngine()
        results = engine.run(design, on_progress=print)
    """

    def __init__(self, max_workers: int = 1):
        self._max_workers = check_int_at_least(max_workers, 1, "max_workers")

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def run(
        self,
        design: SimulationDesign,
        on_progress: ProgressHandler | None = None,
        cancel_token: CancelToken | None = None,
        job_id: str = "local",
    ) -> MultiPairResults:
        """
        Run every enabled pair, analyze and aggregate.

        Args:
            design: Validated job design.
            on_progress: Receives Progress messages in order.
            cancel_token: Checked before every trial.
            job_id: Id stamped on the Progress messages.

        Raises:
            JobCancelledError: cancel_token was set before the job finished.
            DegenerateSampleError: A trial of some pair was degenerate.
        """
        pairs = design.enabled_pairs
        settings = design.settings
        started_at = datetime.now(timezone.utc)
        logger.info(
            "job %s: %d pairs x %d trials (%s, max_workers=%d)",
            job_id, len(pairs), settings.num_simulations,
            settings.test_type, self._max_workers,
        )

        emit = _ProgressEmitter(job_id, pairs, settings.num_simulations, on_progress)
        seeds = spawn_seeds(settings.random_seed, len(pairs))

        timer = Timer()
        timer.start()

        with timer.section('simulation'):
            if self._max_workers == 1 or len(pairs) == 1:
                results = self._run_serial(design, seeds, emit, cancel_token)
            else:
                results = self._run_parallel(design, seeds, emit, cancel_token)

        emit.analyzing()

        with timer.section('analysis'):
            cross = CrossPairAnalyzer(settings).analyze(results)

        aggregator = ResultAggregator(design)
        with timer.section('aggregation'):
            global_stats = aggregator.global_statistics(results, 1000.0 * timer.elapsed())

        timer.stop()
        metadata = aggregator.metadata(
            timer.result(), global_stats.total_simulations, started_at,
        )

        logger.info(
            "job %s: finished in %.1f ms, overall significance %.2f%%",
            job_id, metadata.duration_ms, global_stats.overall_significance_rate,
        )
        return aggregator.build(results, cross, global_stats, metadata)

    def _run_serial(
        self,
        design: SimulationDesign,
        seeds: list[np.random.SeedSequence],
        emit: _ProgressEmitter,
        cancel_token: CancelToken | None,
    ) -> list[PairResult]:
        results = []
        for index, (pair, seed) in enumerate(zip(design.enabled_pairs, seeds)):
            runner = PairSimulationRunner(pair, design.settings, seed=seed)
            results.append(runner.run(
                on_progress=emit.for_pair(index),
                cancel_token=cancel_token,
            ))
        return results

    def _run_parallel(
        self,
        design: SimulationDesign,
        seeds: list[np.random.SeedSequence],
        emit: _ProgressEmitter,
        cancel_token: CancelToken | None,
    ) -> list[PairResult]:
        pairs = design.enabled_pairs
        abort = threading.Event()
        token = _EitherSet(cancel_token, abort)
        results: list[PairResult | None] = [None] * len(pairs)

        def run_pair(index: int) -> PairResult:
            runner = PairSimulationRunner(pairs[index], design.settings, seed=seeds[index])
            return runner.run(cancel_token=token)

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {executor.submit(run_pair, i): i for i in range(len(pairs))}
            try:
                for future in as_completed(futures):
                    index = futures[future]
                    results[index] = future.result()
                    emit.pair_finished(index)
            except BaseException:
                abort.set()
                for future in futures:
                    future.cancel()
                raise

        return [r for r in results if r is not None]


class _ProgressEmitter:
    """
    Turns per-pair trial counts into job-wide Progress messages.

    completed counts trials over all pairs and never decreases.
    """

    def __init__(
        self,
        job_id: str,
        pairs: tuple[SamplePairSpec, ...],
        trials_per_pair: int,
        handler: ProgressHandler | None,
    ):
        self._job_id = job_id
        self._pairs = pairs
        self._trials = trials_per_pair
        self._total = trials_per_pair * len(pairs)
        self._handler = handler
        self._completed = 0

    def _send(self, phase: str, pair_index: int, trial_index: int) -> None:
        if self._handler is None:
            return
        self._handler(Progress(
            id=self._job_id,
            completed=self._completed,
            total=self._total,
            pair_index=pair_index,
            total_pairs=len(self._pairs),
            trial_index=trial_index,
            total_trials=self._trials,
            phase=phase,
            pair_name=self._pairs[pair_index].name,
        ))

    def for_pair(self, index: int) -> Callable[[int, int], None]:
        offset = index * self._trials

        def on_trials(completed: int, total: int) -> None:
            self._completed = offset + completed
            self._send(PHASE_RUNNING, index, completed - 1)

        return on_trials

    def pair_finished(self, index: int) -> None:
        self._completed += self._trials
        self._send(PHASE_RUNNING, index, self._trials - 1)

    def analyzing(self) -> None:
        self._completed = self._total
        self._send(PHASE_ANALYZING, len(self._pairs) - 1, self._trials - 1)
