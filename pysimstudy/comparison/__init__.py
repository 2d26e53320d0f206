"""
Cross-pair comparison of simulation results.

Usage:
    from pysimstudy.comparison import CrossPairAnalyzer

    analysis = CrossPairAnalyzer(settings).analyze(pair_results)
    for rec in analysis.recommendations:
        print(rec.priority, rec.message)
"""

from pysimstudy.comparison._common import (
    EffectSizeComparison,
    PowerEntry,
    SignificanceCorrelation,
    Recommendation,
    CrossPairAnalysis,
)
from pysimstudy.comparison.analyzer import (
    CrossPairAnalyzer,
    compare_effect_sizes,
    analyze_power,
    observed_power,
    required_sample_size,
    correlate_significance,
    recommend,
)

__all__ = [
    "EffectSizeComparison",
    "PowerEntry",
    "SignificanceCorrelation",
    "Recommendation",
    "CrossPairAnalysis",
    "CrossPairAnalyzer",
    "compare_effect_sizes",
    "analyze_power",
    "observed_power",
    "required_sample_size",
    "correlate_significance",
    "recommend",
]
