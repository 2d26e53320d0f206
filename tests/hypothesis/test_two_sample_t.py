"""
Tests for two_sample_test() with the Welch and pooled t-tests.

scipy.stats.ttest_ind is the independent reference for statistic and
p-value; Cohen's d is checked against hand-computed values.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import stats

from pysimstudy.core.exceptions import (
    DegenerateSampleError,
    UnsupportedTestTypeError,
    ValidationError,
)
from pysimstudy.hypothesis import TwoSampleDesign, two_sample_test


X = [1.0, 2.0, 3.0, 4.0, 5.0]
Y = [4.0, 5.0, 6.0, 7.0, 8.0]


class TestWelch:

    def test_textbook_values(self):
        result = two_sample_test(X, Y)
        assert result.statistic == pytest.approx(-3.0, rel=1e-12)
        assert result.df == pytest.approx(8.0, rel=1e-12)
        assert result.method == "Welch Two Sample t-test"
        assert result.test_type == "welch"

    def test_matches_scipy(self, rng):
        x = rng.normal(0.0, 1.0, 23)
        y = rng.normal(0.4, 2.5, 31)
        result = two_sample_test(x, y, "welch")
        ref = stats.ttest_ind(x, y, equal_var=False)
        assert result.statistic == pytest.approx(ref.statistic, rel=1e-10)
        assert result.p_value == pytest.approx(ref.pvalue, rel=1e-9)

    def test_default_is_welch(self, rng):
        x, y = rng.normal(size=10), rng.normal(size=12)
        assert two_sample_test(x, y).test_type == "welch"


class TestPooled:

    def test_textbook_values(self):
        result = two_sample_test(X, Y, "pooled")
        assert result.df == 8.0
        assert result.method == "Two Sample t-test"

    def test_matches_scipy(self, rng):
        x = rng.normal(1.0, 1.0, 15)
        y = rng.normal(0.0, 1.0, 40)
        result = two_sample_test(x, y, "pooled")
        ref = stats.ttest_ind(x, y, equal_var=True)
        assert result.statistic == pytest.approx(ref.statistic, rel=1e-10)
        assert result.p_value == pytest.approx(ref.pvalue, rel=1e-9)
        assert result.df == 53.0


class TestEffectSize:

    def test_cohens_d(self):
        # means 3 and 6, pooled SD sqrt(2.5)
        result = two_sample_test(X, Y)
        assert result.effect_size == pytest.approx(-3.0 / np.sqrt(2.5), rel=1e-12)

    def test_same_d_for_every_test_type(self):
        d = [two_sample_test(X, Y, t).effect_size for t in ("welch", "pooled", "mann_whitney")]
        assert_allclose(d, d[0], rtol=1e-14)

    def test_sign_follows_mean_difference(self, rng):
        x = rng.normal(3.0, 1.0, 20)
        y = rng.normal(0.0, 1.0, 20)
        assert two_sample_test(x, y).effect_size > 0
        assert two_sample_test(y, x).effect_size < 0


class TestEdgeCases:

    def test_p_value_in_unit_interval(self, rng):
        for _ in range(50):
            x, y = rng.normal(size=5), rng.normal(size=5)
            p = two_sample_test(x, y).p_value
            assert 0.0 <= p <= 1.0

    def test_identical_samples(self):
        result = two_sample_test(X, X)
        assert result.statistic == 0.0
        assert result.p_value == pytest.approx(1.0)

    @pytest.mark.parametrize("test_type", ["welch", "pooled", "mann_whitney"])
    def test_both_constant_is_degenerate(self, test_type):
        with pytest.raises(DegenerateSampleError):
            two_sample_test([2.0, 2.0, 2.0], [1.0, 1.0, 1.0], test_type)

    def test_one_constant_group_is_fine(self):
        result = two_sample_test([2.0, 2.0, 2.0], [1.0, 2.0, 3.0])
        assert np.isfinite(result.p_value)

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedTestTypeError) as exc_info:
            two_sample_test(X, Y, "kruskal")
        assert exc_info.value.test_type == "kruskal"
        assert "welch" in exc_info.value.supported

    def test_too_few_observations(self):
        with pytest.raises(ValidationError, match="at least 2"):
            two_sample_test([1.0], Y)

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="non-finite"):
            two_sample_test([1.0, np.nan, 3.0], Y)

    def test_missing_y(self):
        with pytest.raises(ValidationError):
            two_sample_test(X)

    def test_prebuilt_design(self):
        design = TwoSampleDesign.for_two_sample(X, Y, "pooled")
        assert two_sample_test(design).df == 8.0


class TestSolution:

    def test_summary(self):
        s = two_sample_test(X, Y).summary()
        assert "Welch Two Sample t-test" in s
        assert "p-value" in s
        assert "Cohen's d" in s

    def test_metadata(self):
        result = two_sample_test(X, Y)
        assert result.backend_name == "cpu_two_sample"
        assert result.info == {"test_type": "welch", "n1": 5, "n2": 5}
        assert result.warnings == ()
        assert "Welch" in repr(result)
