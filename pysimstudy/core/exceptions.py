"""
Exception hierarchy for pysimstudy.

All exceptions inherit from PySimStudyError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PySimStudyError(Exception):
    """Base exception for all pysimstudy errors."""
    pass


class ValidationError(PySimStudyError):
    """
    Input validation failed.

    Raised synchronously, before any simulated trial runs, when
    user-provided pairs or settings fail validation checks.
    """
    pass


class InvalidParameterError(ValidationError):
    """
    A population or sampling parameter is out of range.

    Attributes:
        parameter: Name of the offending parameter (e.g. 'std', 'n')
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class InvalidConfidenceLevelError(ValidationError):
    """
    Confidence level is not strictly between 0 and 1.

    Attributes:
        confidence_level: The rejected value
    """

    def __init__(self, message: str, confidence_level: float | None = None):
        super().__init__(message)
        self.confidence_level = confidence_level


class NumericalError(PySimStudyError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DegenerateSampleError(NumericalError):
    """
    A simulated sample has zero pooled variance.

    The test statistic and Cohen's d are undefined when the pooled
    standard error is zero. Aborts the run of the pair being simulated.

    Attributes:
        pair_id: Identifier of the pair being simulated, if known
        trial: Zero-based trial index at which the sample degenerated
    """

    def __init__(
        self,
        message: str,
        pair_id: str | None = None,
        trial: int | None = None,
    ):
        super().__init__(message)
        self.pair_id = pair_id
        self.trial = trial


class UnsupportedTestTypeError(PySimStudyError):
    """
    Requested test type has no implementation.

    Never silently substituted with another test.

    Attributes:
        test_type: The requested test type
        supported: Test types that are implemented
    """

    def __init__(
        self,
        message: str,
        test_type: str | None = None,
        supported: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.test_type = test_type
        self.supported = supported


class ExecutionError(PySimStudyError):
    """
    Background execution failed.

    Base class for failures of the execution context itself rather than
    of the statistics computed inside it.
    """
    pass


class TransportError(ExecutionError):
    """
    The background execution context failed or is unavailable.

    Attributes:
        job_id: Correlation id of the affected job, if any
    """

    def __init__(self, message: str, job_id: str | None = None):
        super().__init__(message)
        self.job_id = job_id


class JobCancelledError(ExecutionError):
    """
    A submitted job was cancelled before it completed.

    Attributes:
        job_id: Correlation id of the cancelled job, if any
    """

    def __init__(self, message: str = "cancelled", job_id: str | None = None):
        super().__init__(message)
        self.job_id = job_id
