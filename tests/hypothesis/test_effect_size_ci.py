"""
Tests for the Cohen's d confidence interval.
"""

import math

import pytest
from scipy import stats

from pysimstudy.core.exceptions import InvalidConfidenceLevelError, InvalidParameterError
from pysimstudy.hypothesis import effect_size_ci, effect_size_se


class TestStandardError:

    def test_formula(self):
        se = effect_size_se(0.5, 30, 30)
        assert se == pytest.approx(math.sqrt(60 / 900 + 0.25 / 120))

    def test_zero_effect(self):
        assert effect_size_se(0.0, 10, 10) == pytest.approx(math.sqrt(0.2))


class TestInterval:

    def test_symmetric_around_estimate(self):
        lo, hi = effect_size_ci(0.5, 30, 30)
        assert (lo + hi) / 2 == pytest.approx(0.5)
        assert lo < 0.5 < hi

    def test_uses_t_critical(self):
        lo, hi = effect_size_ci(0.0, 30, 30, 0.95)
        expected = stats.t.ppf(0.975, 58) * effect_size_se(0.0, 30, 30)
        assert hi == pytest.approx(expected, rel=1e-8)
        assert lo == pytest.approx(-expected, rel=1e-8)

    def test_wider_at_higher_confidence(self):
        lo95, hi95 = effect_size_ci(0.3, 20, 20, 0.95)
        lo99, hi99 = effect_size_ci(0.3, 20, 20, 0.99)
        assert hi99 - lo99 > hi95 - lo95

    def test_narrower_with_more_data(self):
        lo_small, hi_small = effect_size_ci(0.3, 10, 10)
        lo_big, hi_big = effect_size_ci(0.3, 100, 100)
        assert hi_big - lo_big < hi_small - lo_small

    def test_negative_effect(self):
        lo, hi = effect_size_ci(-1.2, 15, 15)
        assert lo < -1.2 < hi
        assert hi < 0.0


class TestErrors:

    @pytest.mark.parametrize("level", [0.0, 1.0, -0.1, 1.1])
    def test_bad_confidence(self, level):
        with pytest.raises(InvalidConfidenceLevelError):
            effect_size_ci(0.5, 30, 30, level)

    def test_small_groups(self):
        with pytest.raises(InvalidParameterError):
            effect_size_ci(0.5, 1, 30)

    def test_non_finite_effect(self):
        with pytest.raises(InvalidParameterError):
            effect_size_ci(math.inf, 30, 30)
