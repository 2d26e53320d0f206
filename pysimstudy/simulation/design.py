"""
Design classes for multi-pair simulation.

PopulationParams, SamplePairSpec, GlobalSettings and SimulationDesign
encapsulate all inputs of a simulation job. Immutable, validated at
construction through factory classmethods. Validation failures raise
ValidationError before any trial runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from pysimstudy.core.constants import (
    DEFAULT_CONFIDENCE_LEVEL,
    DEFAULT_HISTOGRAM_BINS,
    DEFAULT_PROGRESS_INTERVAL,
    DIST_NORMAL,
    VALID_DISTRIBUTIONS,
    VALID_TEST_TYPES,
)
from pysimstudy.core.exceptions import UnsupportedTestTypeError, ValidationError
from pysimstudy.core.serialization import to_jsonable
from pysimstudy.core.validation import (
    check_choice,
    check_confidence_level,
    check_finite_scalar,
    check_int_at_least,
    check_open_unit_interval,
    check_positive,
    check_strictly_ascending,
)


@dataclass(frozen=True)
class PopulationParams:
    """
    One hypothetical population.

    Attributes:
        mean: Population mean.
        std: Population standard deviation, > 0.
        distribution: "normal" (default), "uniform" or "exponential".
    """
    mean: float
    std: float
    distribution: str = DIST_NORMAL

    @classmethod
    def for_population(
        cls, mean: float, std: float, distribution: str = DIST_NORMAL,
    ) -> PopulationParams:
        return cls(
            mean=check_finite_scalar(mean, "mean"),
            std=check_positive(std, "std"),
            distribution=check_choice(distribution, VALID_DISTRIBUTIONS, "distribution"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PopulationParams:
        return cls.for_population(
            data["mean"],
            data["std"],
            data.get("distribution", data.get("distribution_type", DIST_NORMAL)),
        )


@dataclass(frozen=True)
class SamplePairSpec:
    """
    Two populations compared by repeated simulated tests.

    Attributes:
        id: Identifier, unique within a job.
        name: Display name.
        group1: Population for group 1.
        group2: Population for group 2.
        sample_size_per_group: Observations drawn per group per trial, >= 2.
        enabled: Disabled pairs are skipped.
        description: Optional free text.
    """
    id: str
    name: str
    group1: PopulationParams
    group2: PopulationParams
    sample_size_per_group: int
    enabled: bool = True
    description: str | None = None

    @classmethod
    def for_pair(
        cls,
        id: str,
        name: str,
        group1: PopulationParams | Mapping[str, Any],
        group2: PopulationParams | Mapping[str, Any],
        sample_size_per_group: int,
        *,
        enabled: bool = True,
        description: str | None = None,
    ) -> SamplePairSpec:
        """
        Create a validated sample pair.

        Raises:
            ValidationError: If id or name is empty, a population is
                invalid, or sample_size_per_group < 2.
        """
        if not isinstance(id, str) or not id:
            raise ValidationError(f"id: must be a non-empty string, got {id!r}")
        if not isinstance(name, str) or not name:
            raise ValidationError(f"name: must be a non-empty string, got {name!r}")

        return cls(
            id=id,
            name=name,
            group1=_population(group1),
            group2=_population(group2),
            sample_size_per_group=check_int_at_least(
                sample_size_per_group, 2, "sample_size_per_group"
            ),
            enabled=bool(enabled),
            description=description,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SamplePairSpec:
        return cls.for_pair(
            data["id"],
            data["name"],
            data["group1"],
            data["group2"],
            data["sample_size_per_group"],
            enabled=data.get("enabled", True),
            description=data.get("description"),
        )

    @property
    def true_effect_size(self) -> float:
        """Analytic effect (mu1 - mu2) / sqrt((sigma1^2 + sigma2^2) / 2)."""
        g1, g2 = self.group1, self.group2
        return (g1.mean - g2.mean) / ((g1.std ** 2 + g2.std ** 2) / 2.0) ** 0.5


@dataclass(frozen=True)
class GlobalSettings:
    """
    Settings shared by every pair of a job.

    Attributes:
        num_simulations: Trials per pair, > 0.
        significance_levels: Thresholds in (0, 1), strictly ascending.
            The first (smallest) is the primary alpha.
        confidence_level: Level of per-trial effect-size intervals.
        test_type: "welch", "pooled" or "mann_whitney".
        random_seed: Root seed; None draws fresh entropy.
        histogram_bins: Number of p-value histogram bins.
        progress_interval: Trials between progress notifications.
    """
    num_simulations: int
    significance_levels: tuple[float, ...]
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL
    test_type: str = "welch"
    random_seed: int | None = None
    histogram_bins: int = DEFAULT_HISTOGRAM_BINS
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    @classmethod
    def for_settings(
        cls,
        num_simulations: int,
        significance_levels: Sequence[float] = (0.01, 0.05),
        confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
        test_type: str = "welch",
        *,
        random_seed: int | None = None,
        histogram_bins: int = DEFAULT_HISTOGRAM_BINS,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ) -> GlobalSettings:
        """
        Create validated global settings.

        Raises:
            ValidationError: On any out-of-range value.
            InvalidConfidenceLevelError: If confidence_level is outside (0, 1).
            UnsupportedTestTypeError: If test_type is not implemented.
        """
        levels = tuple(
            check_open_unit_interval(a, "significance_levels")
            for a in significance_levels
        )
        check_strictly_ascending(levels, "significance_levels")

        if test_type not in VALID_TEST_TYPES:
            raise UnsupportedTestTypeError(
                f"test_type must be one of {VALID_TEST_TYPES}, got {test_type!r}",
                test_type=test_type,
                supported=VALID_TEST_TYPES,
            )

        if random_seed is not None:
            random_seed = check_int_at_least(random_seed, 0, "random_seed")

        return cls(
            num_simulations=check_int_at_least(num_simulations, 1, "num_simulations"),
            significance_levels=levels,
            confidence_level=check_confidence_level(confidence_level),
            test_type=test_type,
            random_seed=random_seed,
            histogram_bins=check_int_at_least(histogram_bins, 1, "histogram_bins"),
            progress_interval=check_int_at_least(progress_interval, 1, "progress_interval"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GlobalSettings:
        return cls.for_settings(
            data["num_simulations"],
            data["significance_levels"],
            data.get("confidence_level", DEFAULT_CONFIDENCE_LEVEL),
            data.get("test_type", "welch"),
            random_seed=data.get("random_seed"),
            histogram_bins=data.get("histogram_bins", DEFAULT_HISTOGRAM_BINS),
            progress_interval=data.get("progress_interval", DEFAULT_PROGRESS_INTERVAL),
        )

    @property
    def primary_alpha(self) -> float:
        return self.significance_levels[0]


@dataclass(frozen=True)
class SimulationDesign:
    """
    Frozen request payload of one multi-pair job.

    Attributes:
        pairs: All pairs as supplied, enabled or not.
        settings: Global settings.
    """
    pairs: tuple[SamplePairSpec, ...]
    settings: GlobalSettings

    @classmethod
    def for_simulation(
        cls,
        pairs: Sequence[SamplePairSpec | Mapping[str, Any]],
        settings: GlobalSettings | Mapping[str, Any],
    ) -> SimulationDesign:
        """
        Create a validated job design.

        Raises:
            ValidationError: If pair ids repeat or no pair is enabled.
        """
        pair_specs = tuple(
            p if isinstance(p, SamplePairSpec) else SamplePairSpec.from_dict(p)
            for p in pairs
        )
        if not isinstance(settings, GlobalSettings):
            settings = GlobalSettings.from_dict(settings)

        ids = [p.id for p in pair_specs]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValidationError(f"pairs: duplicate ids {duplicates}")

        if not any(p.enabled for p in pair_specs):
            raise ValidationError("No sample pairs enabled for simulation")

        return cls(pairs=pair_specs, settings=settings)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SimulationDesign:
        return cls.for_simulation(data["pairs"], data["global_settings"])

    @property
    def enabled_pairs(self) -> tuple[SamplePairSpec, ...]:
        return tuple(p for p in self.pairs if p.enabled)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pairs": to_jsonable(self.pairs),
            "global_settings": to_jsonable(self.settings),
        }


def _population(value: PopulationParams | Mapping[str, Any]) -> PopulationParams:
    if isinstance(value, PopulationParams):
        return PopulationParams.for_population(value.mean, value.std, value.distribution)
    return PopulationParams.from_dict(value)
