"""
Repeated simulated trials for one sample pair.

PairSimulationRunner drives num_simulations trials of

    sample -> two-sample test -> effect-size CI -> s-value -> significance

and aggregates them into a PairResult. A runner is single use:

    IDLE -> RUNNING -> AGGREGATED
                    '-> FAILED

Any failing trial aborts the pair (no partial aggregate is returned).
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Protocol

import numpy as np

from pysimstudy.core.compute.timing import Timer
from pysimstudy.core.constants import EMPIRICAL_CI_PERCENTILES
from pysimstudy.core.exceptions import DegenerateSampleError, JobCancelledError
from pysimstudy.hypothesis._ci import effect_size_ci
from pysimstudy.hypothesis.solvers import two_sample_test
from pysimstudy.sampling.generator import SampleGenerator, SeedLike
from pysimstudy.simulation._common import AggregatedStats, PairResult, TrialResult
from pysimstudy.simulation._effect_size import analyze_effect_sizes
from pysimstudy.simulation._significance import analyze_significance, histogram, s_value
from pysimstudy.simulation.design import GlobalSettings, SamplePairSpec

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


class RunnerState(enum.Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    AGGREGATED = 'aggregated'
    FAILED = 'failed'


class PairSimulationRunner:
    """
    Runs and aggregates all trials of one sample pair.

    Args:
        pair: The pair to simulate.
        settings: Global settings (trials, thresholds, test type, ...).
        seed: Seed for this pair's sample stream; defaults to
            settings.random_seed.
    """

    def __init__(
        self,
        pair: SamplePairSpec,
        settings: GlobalSettings,
        seed: SeedLike = None,
    ):
        self._pair = pair
        self._settings = settings
        self._generator = SampleGenerator(settings.random_seed if seed is None else seed)
        self._state = RunnerState.IDLE
        self._timing: dict[str, float] | None = None

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def timing(self) -> dict[str, float] | None:
        """Section timings of the last run, None before it finished."""
        return self._timing

    def run(
        self,
        on_progress: ProgressCallback | None = None,
        cancel_token: CancelToken | None = None,
    ) -> PairResult:
        """
        Run every trial and aggregate.

        Args:
            on_progress: Called as on_progress(completed, total) every
                settings.progress_interval trials and after the last one.
            cancel_token: Checked before every trial.

        Raises:
            DegenerateSampleError: A trial produced zero pooled variance.
            JobCancelledError: cancel_token was set.
            RuntimeError: The runner was already used.
        """
        if self._state is not RunnerState.IDLE:
            raise RuntimeError(
                f"PairSimulationRunner.run() called in state {self._state.value!r}"
            )
        self._state = RunnerState.RUNNING
        logger.debug("pair %r: starting %d trials", self._pair.id,
                     self._settings.num_simulations)

        timer = Timer()
        timer.start()
        try:
            with timer.section('trials'):
                trials = self._run_trials(on_progress, cancel_token)
            with timer.section('aggregation'):
                result = self._aggregate(trials)
        except Exception:
            self._state = RunnerState.FAILED
            raise
        timer.stop()

        self._timing = timer.result()
        self._state = RunnerState.AGGREGATED
        logger.debug(
            "pair %r: %d/%d significant in %.3fs", self._pair.id,
            result.aggregated_stats.significant_count,
            result.aggregated_stats.total_count,
            self._timing['total_seconds'],
        )
        return result

    def _run_trials(
        self,
        on_progress: ProgressCallback | None,
        cancel_token: CancelToken | None,
    ) -> list[TrialResult]:
        pair = self._pair
        settings = self._settings
        total = settings.num_simulations
        interval = settings.progress_interval
        alpha = settings.primary_alpha
        n = pair.sample_size_per_group

        trials: list[TrialResult] = []
        for i in range(total):
            if cancel_token is not None and cancel_token.is_set():
                raise JobCancelledError(f"pair {pair.id!r} cancelled at trial {i}")

            group1, group2 = self._generator.sample_pair(pair)
            try:
                test = two_sample_test(group1, group2, settings.test_type)
            except DegenerateSampleError as e:
                raise DegenerateSampleError(
                    f"pair {pair.id!r}, trial {i}: {e}",
                    pair_id=pair.id, trial=i,
                ) from e

            p = min(max(test.p_value, 0.0), 1.0)
            d = test.effect_size
            trials.append(TrialResult(
                p_value=p,
                effect_size=d,
                confidence_interval=effect_size_ci(d, n, n, settings.confidence_level),
                s_value=s_value(p),
                significant=p < alpha,
            ))

            completed = i + 1
            if on_progress is not None and (completed % interval == 0 or completed == total):
                on_progress(completed, total)

        return trials

    def _aggregate(self, trials: list[TrialResult]) -> PairResult:
        pair = self._pair
        settings = self._settings
        true_d = pair.true_effect_size

        p_values = np.array([t.p_value for t in trials])
        effects = np.array([t.effect_size for t in trials])
        lower = np.array([t.confidence_interval[0] for t in trials])
        upper = np.array([t.confidence_interval[1] for t in trials])

        lo_pct, hi_pct = np.percentile(effects, EMPIRICAL_CI_PERCENTILES)
        stats = AggregatedStats(
            significant_count=sum(1 for t in trials if t.significant),
            total_count=len(trials),
            mean_effect_size=float(np.mean(effects)),
            effect_size_ci=(float(lo_pct), float(hi_pct)),
            true_effect_size=true_d,
            ci_coverage=float(np.mean((lower <= true_d) & (true_d <= upper))),
            mean_ci_width=float(np.mean(upper - lower)),
            p_value_histogram=histogram(
                p_values, settings.histogram_bins, settings.primary_alpha,
            ),
        )

        return PairResult(
            pair_id=pair.id,
            pair_name=pair.name,
            aggregated_stats=stats,
            significance_analysis=analyze_significance(
                p_values, settings.significance_levels, true_d,
            ),
            effect_size_analysis=analyze_effect_sizes(effects),
            individual_results=tuple(trials),
        )


def simulate_pair(
    pair: SamplePairSpec,
    settings: GlobalSettings,
    *,
    seed: SeedLike = None,
    on_progress: ProgressCallback | None = None,
) -> PairResult:
    """Convenience wrapper: run one pair with a fresh runner."""
    return PairSimulationRunner(pair, settings, seed=seed).run(on_progress=on_progress)
