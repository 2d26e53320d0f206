"""
PySimStudy: multi-pair statistical simulation for study design.

Simulates repeated two-sample experiments for several population pairs,
and reports how often each reaches significance, how well effect-size
intervals cover the true effect, and what that implies for power and
sample size.

Submodules:
    sampling: Seeded population sampling
    hypothesis: Two-sample tests and effect-size intervals
    simulation: Per-pair repeated-trial simulation
    comparison: Cross-pair analysis and recommendations
    execution: Multi-pair jobs, synchronous or on a background thread
"""

import logging

__version__ = "0.1.0"

from pysimstudy import sampling
from pysimstudy import hypothesis
from pysimstudy import simulation
from pysimstudy import comparison
from pysimstudy import execution

from pysimstudy.simulation import GlobalSettings, PopulationParams, SamplePairSpec
from pysimstudy.execution import ExecutionCoordinator, MultiPairEngine, run_simulation

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "sampling",
    "hypothesis",
    "simulation",
    "comparison",
    "execution",
    "GlobalSettings",
    "PopulationParams",
    "SamplePairSpec",
    "ExecutionCoordinator",
    "MultiPairEngine",
    "run_simulation",
]
