"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pysimstudy.simulation import GlobalSettings, PopulationParams, SamplePairSpec


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def null_pair():
    """Two identical normal populations (true effect 0)."""
    return SamplePairSpec.for_pair(
        "null", "No difference",
        PopulationParams.for_population(0.0, 1.0),
        PopulationParams.for_population(0.0, 1.0),
        sample_size_per_group=30,
    )


@pytest.fixture
def medium_pair():
    """Group 1 half an SD above group 2 (true effect 0.5)."""
    return SamplePairSpec.for_pair(
        "medium", "Medium effect",
        PopulationParams.for_population(0.5, 1.0),
        PopulationParams.for_population(0.0, 1.0),
        sample_size_per_group=30,
    )


@pytest.fixture
def large_pair():
    """Group 1 two SDs above group 2 (true effect 2)."""
    return SamplePairSpec.for_pair(
        "large", "Large effect",
        PopulationParams.for_population(2.0, 1.0),
        PopulationParams.for_population(0.0, 1.0),
        sample_size_per_group=30,
    )


@pytest.fixture
def small_settings():
    """Fast settings for unit tests: 200 trials, fixed seed."""
    return GlobalSettings.for_settings(
        200, (0.01, 0.05, 0.1), random_seed=1234, progress_interval=50,
    )
