"""
Core infrastructure for pysimstudy.

This module provides shared abstractions and utilities used by all
domain-specific submodules (sampling, hypothesis, simulation, comparison,
execution).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    constants: Engine-wide defaults and cut points
    serialization: JSON conversion
    compute: Timing and distribution functions
"""

from pysimstudy.core.result import Result
from pysimstudy.core.exceptions import (
    PySimStudyError,
    ValidationError,
    InvalidParameterError,
    InvalidConfidenceLevelError,
    NumericalError,
    DegenerateSampleError,
    UnsupportedTestTypeError,
    ExecutionError,
    TransportError,
    JobCancelledError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PySimStudyError",
    "ValidationError",
    "InvalidParameterError",
    "InvalidConfidenceLevelError",
    "NumericalError",
    "DegenerateSampleError",
    "UnsupportedTestTypeError",
    "ExecutionError",
    "TransportError",
    "JobCancelledError",
]
