"""
Messages exchanged between a caller and the background simulation worker.

Request and Cancel travel caller -> worker. Progress, Success and Error
travel worker -> caller. For one request id, every Progress precedes
exactly one terminal Success or Error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from pysimstudy.simulation.design import SimulationDesign

if TYPE_CHECKING:
    from pysimstudy.execution.aggregator import MultiPairResults


@dataclass(frozen=True)
class Request:
    id: str
    payload: SimulationDesign


@dataclass(frozen=True)
class Cancel:
    """Abort every outstanding request."""


@dataclass(frozen=True)
class Progress:
    """
    Progress of one request.

    completed / total count trials over all enabled pairs. pair_index and
    trial_index are 0-based positions of the most recent trial; during
    the analyzing_results phase they point at the last pair and trial.
    """
    id: str
    completed: int
    total: int
    pair_index: int
    total_pairs: int
    trial_index: int
    total_trials: int
    phase: str
    pair_name: str | None = None

    @property
    def fraction(self) -> float:
        return self.completed / self.total if self.total else 1.0


@dataclass(frozen=True)
class Success:
    id: str
    result: MultiPairResults


@dataclass(frozen=True)
class Error:
    id: str
    message: str
    error: BaseException | None = None


Inbound = Union[Request, Cancel]
Outbound = Union[Progress, Success, Error]
