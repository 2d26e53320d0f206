"""
Validators for user-facing inputs.

Every check either returns the cleaned value or raises a ValidationError
subclass naming the offending parameter and the value it received.
Nothing is clamped, rounded or defaulted on the caller's behalf: a
negative std or an unsorted threshold list is an error, not a hint.
"""

import math
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysimstudy.core.exceptions import (
    InvalidConfidenceLevelError,
    InvalidParameterError,
    ValidationError,
)

FloatArray = NDArray[np.floating[Any]]


def check_array(array: ArrayLike, name: str) -> FloatArray:
    """
    Convert a sample to a float ndarray.

    Integer and boolean samples are promoted to float64; strings, objects
    and ragged input are rejected.
    """
    try:
        out = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: not convertible to an array ({e})") from e

    if out.dtype == object or not np.issubdtype(out.dtype, np.number):
        raise ValidationError(f"{name}: expected numeric data, got dtype {out.dtype}")

    return out if np.issubdtype(out.dtype, np.floating) else out.astype(np.float64)


def check_finite(array: FloatArray, name: str) -> None:
    bad = ~np.isfinite(array)
    if bad.any():
        raise ValidationError(
            f"{name}: {int(bad.sum())} non-finite value(s) "
            f"({int(np.isnan(array).sum())} NaN, {int(np.isinf(array).sum())} Inf)"
        )


def check_1d(array: FloatArray, name: str) -> None:
    if array.ndim != 1:
        raise ValidationError(f"{name}: expected a 1-D sample, got shape {array.shape}")


def check_min_samples(array: FloatArray, min_samples: int, name: str) -> None:
    if len(array) < min_samples:
        raise ValidationError(
            f"{name}: need at least {min_samples} observations, got {len(array)}"
        )


def check_finite_scalar(value: float, name: str) -> float:
    """
    Verify a scalar is a finite real number.

    Raises:
        InvalidParameterError: If value is not a finite real
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise InvalidParameterError(
            f"{name}: expected a real number, got {type(value).__name__}",
            parameter=name, value=value,
        )
    if not math.isfinite(float(value)):
        raise InvalidParameterError(
            f"{name}: must be finite, got {value}",
            parameter=name, value=value,
        )
    return float(value)


def check_positive(value: float, name: str) -> float:
    """
    Verify a scalar is finite and strictly positive.

    Raises:
        InvalidParameterError: If value <= 0 or not finite
    """
    value = check_finite_scalar(value, name)
    if value <= 0.0:
        raise InvalidParameterError(
            f"{name}: must be > 0, got {value}",
            parameter=name, value=value,
        )
    return value


def check_int_at_least(value: int, minimum: int, name: str) -> int:
    """
    Verify value is an integer no smaller than minimum.

    Booleans are rejected even though they subclass int.

    Raises:
        InvalidParameterError: If value is not an int or below minimum
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(
            f"{name}: expected an integer, got {type(value).__name__}",
            parameter=name, value=value,
        )
    if value < minimum:
        raise InvalidParameterError(
            f"{name}: must be >= {minimum}, got {value}",
            parameter=name, value=value,
        )
    return int(value)


def check_open_unit_interval(value: float, name: str) -> float:
    """
    Verify value lies strictly inside (0, 1).

    Raises:
        ValidationError: If value is outside (0, 1)
    """
    value = check_finite_scalar(value, name)
    if not (0.0 < value < 1.0):
        raise ValidationError(f"{name}: must be in (0, 1), got {value}")
    return value


def check_confidence_level(confidence_level: float) -> float:
    """
    Verify a confidence level lies strictly inside (0, 1).

    Raises:
        InvalidConfidenceLevelError: If outside (0, 1) or not finite
    """
    try:
        value = float(confidence_level)
    except (TypeError, ValueError) as e:
        raise InvalidConfidenceLevelError(
            f"confidence_level: expected a real number, got {confidence_level!r}",
            confidence_level=None,
        ) from e
    if not (0.0 < value < 1.0):
        raise InvalidConfidenceLevelError(
            f"confidence_level must be in (0, 1), got {confidence_level}",
            confidence_level=value,
        )
    return value


def check_strictly_ascending(values: Sequence[float], name: str) -> None:
    """
    Verify a non-empty sequence is sorted ascending without duplicates.

    Raises:
        ValidationError: If empty, unsorted or containing duplicates
    """
    if len(values) == 0:
        raise ValidationError(f"{name}: must not be empty")
    if len(set(values)) != len(values):
        raise ValidationError(f"{name}: values must be unique, got {list(values)}")
    if any(b <= a for a, b in zip(values, values[1:])):
        raise ValidationError(
            f"{name}: must be sorted ascending, got {list(values)}"
        )


def check_choice(value: str, choices: Sequence[str], name: str) -> str:
    """
    Verify value is one of the allowed string choices.

    Raises:
        ValidationError: If value is not in choices
    """
    if value not in choices:
        raise ValidationError(
            f"{name} must be one of {tuple(choices)}, got {value!r}"
        )
    return value
