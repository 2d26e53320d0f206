"""
Repeated-trial simulation of sample pairs.

Usage:
    from pysimstudy.simulation import (
        GlobalSettings, PopulationParams, SamplePairSpec, simulate_pair,
    )

    pair = SamplePairSpec.for_pair(
        "a", "Control vs treatment",
        PopulationParams.for_population(0.0, 1.0),
        PopulationParams.for_population(0.5, 1.0),
        sample_size_per_group=30,
    )
    settings = GlobalSettings.for_settings(1000, (0.01, 0.05), random_seed=42)
    result = simulate_pair(pair, settings)
"""

from pysimstudy.simulation.design import (
    PopulationParams,
    SamplePairSpec,
    GlobalSettings,
    SimulationDesign,
)
from pysimstudy.simulation._common import (
    TrialResult,
    HistogramBin,
    AggregatedStats,
    SignificanceResult,
    SensitivityPoint,
    ThresholdSensitivity,
    SignificanceAnalysis,
    EffectSizeAnalysis,
    PairResult,
)
from pysimstudy.simulation._significance import (
    classify,
    histogram,
    threshold_sensitivity,
    analyze_significance,
    proportion_ci,
    s_value,
)
from pysimstudy.simulation._effect_size import (
    analyze_effect_sizes,
    interpret_effect_size,
)
from pysimstudy.simulation.runner import (
    PairSimulationRunner,
    RunnerState,
    simulate_pair,
)

__all__ = [
    "PopulationParams",
    "SamplePairSpec",
    "GlobalSettings",
    "SimulationDesign",
    "TrialResult",
    "HistogramBin",
    "AggregatedStats",
    "SignificanceResult",
    "SensitivityPoint",
    "ThresholdSensitivity",
    "SignificanceAnalysis",
    "EffectSizeAnalysis",
    "PairResult",
    "classify",
    "histogram",
    "threshold_sensitivity",
    "analyze_significance",
    "proportion_ci",
    "s_value",
    "analyze_effect_sizes",
    "interpret_effect_size",
    "PairSimulationRunner",
    "RunnerState",
    "simulate_pair",
]
