"""
Random sample generation from parametric populations.

SampleGenerator wraps a numpy Generator so that every draw of a
simulation run comes from one seeded stream. Uniform and exponential
populations are parameterised by the same (mean, std) pair as normal
ones:

    uniform:      U(mean - std*sqrt(3), mean + std*sqrt(3))
    exponential:  (mean - std) + Exp(scale=std)
"""

from __future__ import annotations

import math
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pysimstudy.core.constants import (
    DIST_NORMAL, DIST_UNIFORM, DIST_EXPONENTIAL, VALID_DISTRIBUTIONS,
)
from pysimstudy.core.exceptions import InvalidParameterError
from pysimstudy.core.validation import check_finite_scalar

if TYPE_CHECKING:
    from pysimstudy.simulation.design import SamplePairSpec


SeedLike = int | np.random.SeedSequence | np.random.Generator | None


class SampleGenerator:
    """
    Draws i.i.d. samples from normal, uniform or exponential populations.

    Args:
        seed: Integer seed, SeedSequence, existing Generator, or None for
            fresh OS entropy.
    """

    def __init__(self, seed: SeedLike = None):
        if isinstance(seed, np.random.Generator):
            self._rng = seed
        else:
            self._rng = np.random.default_rng(seed)

    @property
    def rng(self) -> np.random.Generator:
        return self._rng

    def sample(
        self,
        mean: float,
        std: float,
        n: int,
        distribution: str = DIST_NORMAL,
    ) -> NDArray[np.floating[Any]]:
        """
        Draw n i.i.d. values.

        Raises:
            InvalidParameterError: If std <= 0, n <= 0, mean or std not
                finite, or distribution unknown. Nothing is clamped.
        """
        mean = check_finite_scalar(mean, "mean")
        std = check_finite_scalar(std, "std")
        if std <= 0.0:
            raise InvalidParameterError(
                f"std must be > 0, got {std}", parameter="std", value=std,
            )
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
            raise InvalidParameterError(
                f"n must be a positive integer, got {n!r}", parameter="n", value=n,
            )

        if distribution == DIST_NORMAL:
            return self._rng.normal(mean, std, int(n))
        if distribution == DIST_UNIFORM:
            half_width = std * math.sqrt(3.0)
            return self._rng.uniform(mean - half_width, mean + half_width, int(n))
        if distribution == DIST_EXPONENTIAL:
            return (mean - std) + self._rng.exponential(std, int(n))
        raise InvalidParameterError(
            f"distribution must be one of {VALID_DISTRIBUTIONS}, got {distribution!r}",
            parameter="distribution", value=distribution,
        )

    def sample_pair(
        self, pair: 'SamplePairSpec',
    ) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
        """Draw (group1, group2) for one trial of a sample pair."""
        n = pair.sample_size_per_group
        g1, g2 = pair.group1, pair.group2
        group1 = self.sample(g1.mean, g1.std, n, g1.distribution)
        group2 = self.sample(g2.mean, g2.std, n, g2.distribution)
        return group1, group2


def spawn_seeds(seed: int | None, k: int) -> list[np.random.SeedSequence]:
    """
    Derive k statistically independent child seeds from one root seed.

    Each pair of a multi-pair job draws from its own child stream, so the
    per-pair results do not depend on execution order or parallelism.
    """
    return np.random.SeedSequence(seed).spawn(k)
