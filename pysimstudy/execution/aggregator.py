"""
Assembly of the final multi-pair result.

ResultAggregator computes GlobalStatistics over all pair results, builds
ExecutionMetadata (timestamp, duration, echoed parameters, engine
version, performance metrics) and wraps everything into the immutable
MultiPairResults returned to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence

import numpy as np

from pysimstudy.comparison._common import CrossPairAnalysis
from pysimstudy.core.constants import ENGINE_VERSION
from pysimstudy.core.exceptions import ValidationError
from pysimstudy.core.serialization import dumps, to_jsonable
from pysimstudy.simulation._common import PairResult
from pysimstudy.simulation.design import SimulationDesign


@dataclass(frozen=True)
class GlobalStatistics:
    """
    Job-wide figures.

    - overall_significance_rate: percentage of all trials significant at
      the primary alpha
    - average_effect_size: mean over pairs of the mean effect size
    - effect_size_variability: population SD of the pair means
    """
    total_simulations: int
    total_pairs: int
    overall_significance_rate: float
    average_effect_size: float
    effect_size_variability: float
    execution_time_ms: float


@dataclass(frozen=True)
class PerformanceMetrics:
    simulations_per_second: float
    average_pair_duration_ms: float
    phase_timing: dict[str, float]


@dataclass(frozen=True)
class ExecutionMetadata:
    timestamp: datetime
    duration_ms: float
    parameters: dict[str, Any]
    version: str
    performance_metrics: PerformanceMetrics


@dataclass(frozen=True)
class MultiPairResults:
    """
    Terminal artifact of a multi-pair job.

    Usage:
        results = run_simulation(pairs, settings)
        print(results.summary())
        payload = results.to_json()
    """
    pairs_results: tuple[PairResult, ...]
    cross_pair_analysis: CrossPairAnalysis
    global_statistics: GlobalStatistics
    execution_metadata: ExecutionMetadata

    def pair(self, pair_id: str) -> PairResult:
        for result in self.pairs_results:
            if result.pair_id == pair_id:
                return result
        raise KeyError(pair_id)

    def to_dict(self) -> dict[str, Any]:
        return to_jsonable(self)

    def to_json(self, indent: int | None = None) -> str:
        return dumps(self, indent=indent)

    def summary(self) -> str:
        """
        Human-readable overview.

        Produces output like:
            Multi-pair simulation (2 pairs, 2000 trials)

            pair                  power   mean d   95% CI              coverage
            Control vs A          0.052   0.0031   [-0.4912, 0.5127]   0.951
            ...
        """
        g = self.global_statistics
        lines = [
            f"Multi-pair simulation ({g.total_pairs} pairs, "
            f"{g.total_simulations} trials)",
            "",
            f"{'pair':<20s} {'power':>7s} {'mean d':>8s}   {'95% CI':<20s} {'coverage':>8s}",
        ]
        for r in self.pairs_results:
            s = r.aggregated_stats
            power = s.significant_count / s.total_count if s.total_count else 0.0
            ci = f"[{s.effect_size_ci[0]:.4f}, {s.effect_size_ci[1]:.4f}]"
            lines.append(
                f"{r.pair_name[:20]:<20s} {power:7.3f} {s.mean_effect_size:8.4f}   "
                f"{ci:<20s} {s.ci_coverage:8.3f}"
            )
        lines.append("")
        lines.append(
            f"overall significance rate = {g.overall_significance_rate:.2f}%, "
            f"average effect size = {g.average_effect_size:.4f} "
            f"(sd {g.effect_size_variability:.4f})"
        )
        recs = self.cross_pair_analysis.recommendations
        if recs:
            lines.append("recommendations:")
            for rec in recs:
                lines.append(f"  [{rec.priority}] {rec.message}")
        lines.append(f"elapsed: {g.execution_time_ms:.1f} ms")
        lines.append("")
        return "\n".join(lines)


class ResultAggregator:
    """Builds the job-wide statistics and the final MultiPairResults."""

    def __init__(self, design: SimulationDesign):
        self._design = design

    def global_statistics(
        self, results: Sequence[PairResult], execution_time_ms: float,
    ) -> GlobalStatistics:
        if not results:
            raise ValidationError("results: must not be empty")

        total = sum(r.aggregated_stats.total_count for r in results)
        significant = sum(r.aggregated_stats.significant_count for r in results)
        means = np.array([r.effect_size_analysis.mean for r in results])

        return GlobalStatistics(
            total_simulations=total,
            total_pairs=len(results),
            overall_significance_rate=100.0 * significant / total if total else 0.0,
            average_effect_size=float(np.mean(means)),
            effect_size_variability=float(np.std(means)),
            execution_time_ms=execution_time_ms,
        )

    def metadata(
        self,
        timing: dict[str, float],
        total_simulations: int,
        started_at: datetime | None = None,
    ) -> ExecutionMetadata:
        """
        Args:
            timing: Timer.result() of the job.
            total_simulations: Trials run over all pairs.
            started_at: Job start; defaults to now (UTC).
        """
        seconds = timing['total_seconds']
        num_pairs = len(self._design.enabled_pairs)
        phases = {k: v for k, v in timing.items() if k != 'total_seconds'}

        return ExecutionMetadata(
            timestamp=started_at or datetime.now(timezone.utc),
            duration_ms=1000.0 * seconds,
            parameters=self._design.to_dict(),
            version=ENGINE_VERSION,
            performance_metrics=PerformanceMetrics(
                simulations_per_second=total_simulations / seconds if seconds > 0 else float('inf'),
                average_pair_duration_ms=1000.0 * seconds / num_pairs,
                phase_timing=phases,
            ),
        )

    def build(
        self,
        results: Sequence[PairResult],
        cross_pair_analysis: CrossPairAnalysis,
        global_statistics: GlobalStatistics,
        metadata: ExecutionMetadata,
    ) -> MultiPairResults:
        return MultiPairResults(
            pairs_results=tuple(results),
            cross_pair_analysis=cross_pair_analysis,
            global_statistics=global_statistics,
            execution_metadata=metadata,
        )
