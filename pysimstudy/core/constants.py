"""
Engine-wide constants for pysimstudy.

This module is the SINGLE SOURCE OF TRUTH for defaults and cut points.
Import from here, never repeat the literals.

Usage:
    from pysimstudy.core.constants import DEFAULT_HISTOGRAM_BINS

    bins = histogram(p_values, num_bins=DEFAULT_HISTOGRAM_BINS)
"""

ENGINE_VERSION = '2.0.0'

# Test types
TEST_WELCH = 'welch'
TEST_POOLED = 'pooled'
TEST_MANN_WHITNEY = 'mann_whitney'
VALID_TEST_TYPES = (TEST_WELCH, TEST_POOLED, TEST_MANN_WHITNEY)

# Population distributions
DIST_NORMAL = 'normal'
DIST_UNIFORM = 'uniform'
DIST_EXPONENTIAL = 'exponential'
VALID_DISTRIBUTIONS = (DIST_NORMAL, DIST_UNIFORM, DIST_EXPONENTIAL)

# Progress phases
PHASE_RUNNING = 'running_simulations'
PHASE_ANALYZING = 'analyzing_results'

# Simulation defaults (overridable through GlobalSettings)
DEFAULT_HISTOGRAM_BINS = 20
DEFAULT_PROGRESS_INTERVAL = 100
DEFAULT_SIGNIFICANCE_LEVELS = (0.01, 0.05)
DEFAULT_CONFIDENCE_LEVEL = 0.95

# Percentiles for the empirical effect-size interval
EMPIRICAL_CI_PERCENTILES = (2.5, 97.5)

# Normal quantile used for 95% intervals around proportions and means
Z_95 = 1.96

# Power analysis (two-sided alpha = 0.05, 80% power)
POWER_ALPHA = 0.05
TARGET_POWER = 0.8
Z_ALPHA_HALF = 1.96
Z_BETA = 0.84

# Cohen's d interpretation cut points: negligible < 0.2 <= small < 0.5 <= medium < 0.8 <= large
EFFECT_SIZE_CUTS = (0.2, 0.5, 0.8)

# Cross-pair effect-size difference buckets and heuristic significance cut
DIFFERENCE_CUTS = (0.1, 0.3, 0.5)
DIFFERENCE_SIGNIFICANCE_CUT = 0.2

# Recommendation rules
LOW_POWER_HIGH_PRIORITY = 0.5
HIGH_SIGNIFICANCE_RATE = 50.0
STRICT_ALPHA = 0.01
COVERAGE_TOLERANCE = 0.05

# Effect-size categories
CATEGORIES = ('negligible', 'small', 'medium', 'large')
