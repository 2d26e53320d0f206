"""
Background execution of multi-pair jobs.

ExecutionCoordinator owns one worker thread that runs jobs one after
another and one dispatcher thread that delivers everything the worker
produces:

    caller --submit()--> inbox --> worker --> outbox --> dispatcher
                                                         |-> on_progress(Progress)
                                                         '-> future.set_result / set_exception

All outgoing messages for every job pass through the single FIFO outbox,
so progress for one job arrives in order and its terminal Success or
Error is always the last message delivered for it. Progress callbacks run
on the dispatcher thread, so a slow callback never stalls the
simulation.

Coordinator lifecycle:

    UNINITIALIZED --start()--> READY --cancel()/shutdown()--> TERMINATED
                                 ^                               |
                                 '------------start()------------'

Job lifecycle:

    DISPATCHED -> RUNNING -> COMPLETED | FAILED | CANCELLED
"""

from __future__ import annotations

import enum
import logging
import queue
import threading
import uuid
from concurrent.futures import Future, InvalidStateError
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from pysimstudy.core.exceptions import JobCancelledError, TransportError
from pysimstudy.execution.aggregator import MultiPairResults
from pysimstudy.execution.engine import MultiPairEngine
from pysimstudy.execution.messages import Cancel, Error, Progress, Request, Success
from pysimstudy.simulation.design import GlobalSettings, SamplePairSpec, SimulationDesign

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Progress], None]

_STOP = object()


class CoordinatorState(enum.Enum):
    UNINITIALIZED = 'uninitialized'
    READY = 'ready'
    TERMINATED = 'terminated'


class JobState(enum.Enum):
    DISPATCHED = 'dispatched'
    RUNNING = 'running'
    COMPLETED = 'completed'
    FAILED = 'failed'
    CANCELLED = 'cancelled'

    @property
    def terminal(self) -> bool:
        return self in (JobState.COMPLETED, JobState.FAILED, JobState.CANCELLED)


@dataclass
class _Job:
    id: str
    future: Future
    on_progress: ProgressCallback | None
    state: JobState = JobState.DISPATCHED


@dataclass
class _Session:
    """Queues, cancel flag and threads of one start() .. cancel()/shutdown() span."""
    inbox: queue.Queue = field(default_factory=queue.Queue)
    outbox: queue.Queue = field(default_factory=queue.Queue)
    cancelled: threading.Event = field(default_factory=threading.Event)
    worker: threading.Thread | None = None
    dispatcher: threading.Thread | None = None


class JobHandle:
    """
    Caller-side view of one submitted job.

    Usage:
        handle = coord.submit(pairs, settings)
        results = handle.result(timeout=60)
    """

    def __init__(self, job: _Job, lock: threading.Lock):
        self._job = job
        self._lock = lock

    @property
    def id(self) -> str:
        return self._job.id

    @property
    def future(self) -> Future:
        return self._job.future

    @property
    def state(self) -> JobState:
        with self._lock:
            return self._job.state

    def done(self) -> bool:
        return self._job.future.done()

    def result(self, timeout: float | None = None) -> MultiPairResults:
        """
        Block until the job finishes.

        Raises:
            JobCancelledError: The coordinator was cancelled first.
            TimeoutError: timeout elapsed.
            PySimStudyError: Whatever failed the job.
        """
        return self._job.future.result(timeout)

    def __repr__(self) -> str:
        return f"JobHandle(id={self.id!r}, state={self.state.value!r})"


class ExecutionCoordinator:
    """
    Runs multi-pair jobs on a background thread.

    Args:
        max_workers: Pairs simulated concurrently inside one job.

    Usage:
        with ExecutionCoordinator() as coord:
            handle = coord.submit(pairs, settings, on_progress=print)
            results = handle.result()
    """

    def __init__(self, max_workers: int = 1):
        self._engine = MultiPairEngine(max_workers=max_workers)
        self._lock = threading.Lock()
        self._state = CoordinatorState.UNINITIALIZED
        self._jobs: dict[str, _Job] = {}
        self._session: _Session | None = None

    @property
    def state(self) -> CoordinatorState:
        with self._lock:
            return self._state

    @property
    def active_jobs(self) -> int:
        """Jobs submitted but not yet settled. Settled jobs are forgotten."""
        with self._lock:
            return len(self._jobs)

    def start(self) -> None:
        """Start the worker and dispatcher threads. No-op when READY."""
        with self._lock:
            if self._state is CoordinatorState.READY:
                return
            session = _Session()
            session.worker = threading.Thread(
                target=self._work, args=(session,),
                name='pysimstudy-worker', daemon=True,
            )
            session.dispatcher = threading.Thread(
                target=self._dispatch, args=(session,),
                name='pysimstudy-dispatcher', daemon=True,
            )
            self._session = session
            self._state = CoordinatorState.READY
        session.worker.start()
        session.dispatcher.start()
        logger.info("coordinator started")

    def submit(
        self,
        pairs: Sequence[SamplePairSpec | Mapping[str, Any]],
        settings: GlobalSettings | Mapping[str, Any],
        on_progress: ProgressCallback | None = None,
    ) -> JobHandle:
        """
        Validate a job and queue it for the worker.

        Raises:
            ValidationError: Invalid pairs or settings (nothing is queued).
            TransportError: The coordinator is not READY.
        """
        design = SimulationDesign.for_simulation(pairs, settings)

        with self._lock:
            session = self._session
            if self._state is not CoordinatorState.READY or session is None:
                raise TransportError(
                    f"coordinator is {self._state.value}; call start() first"
                )
            job = _Job(id=uuid.uuid4().hex, future=Future(), on_progress=on_progress)
            self._jobs[job.id] = job
            session.inbox.put(Request(id=job.id, payload=design))

        logger.debug("job %s dispatched (%d pairs)", job.id, len(design.enabled_pairs))
        return JobHandle(job, self._lock)

    def cancel(self) -> None:
        """
        Abort every outstanding job and terminate.

        Each outstanding handle is rejected with JobCancelledError. Call
        start() to use the coordinator again.
        """
        with self._lock:
            session = self._session
            if self._state is not CoordinatorState.READY or session is None:
                return
            self._state = CoordinatorState.TERMINATED
            session.cancelled.set()
            outstanding = [j.id for j in self._jobs.values() if not j.state.terminal]
            for job_id in outstanding:
                session.outbox.put(Error(
                    id=job_id, message="cancelled",
                    error=JobCancelledError("cancelled", job_id=job_id),
                ))
            session.inbox.put(Cancel())
            session.inbox.put(_STOP)
        logger.info("coordinator cancelled (%d outstanding jobs)", len(outstanding))

    def shutdown(self, wait: bool = True) -> None:
        """Finish queued jobs, then stop the threads."""
        with self._lock:
            session = self._session
            if self._state is CoordinatorState.READY and session is not None:
                self._state = CoordinatorState.TERMINATED
                session.inbox.put(_STOP)
        if wait and session is not None:
            current = threading.current_thread()
            for thread in (session.worker, session.dispatcher):
                if thread is not None and thread is not current:
                    thread.join()

    def __enter__(self) -> ExecutionCoordinator:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    # -- background threads ------------------------------------------------

    def _work(self, session: _Session) -> None:
        while True:
            message = session.inbox.get()
            if message is _STOP:
                break
            if isinstance(message, Cancel) or session.cancelled.is_set():
                continue
            self._run_job(session, message)
        session.outbox.put(_STOP)

    def _run_job(self, session: _Session, request: Request) -> None:
        with self._lock:
            job = self._jobs.get(request.id)
            if job is None or job.state.terminal:
                return
            job.state = JobState.RUNNING

        try:
            result = self._engine.run(
                request.payload,
                on_progress=session.outbox.put,
                cancel_token=session.cancelled,
                job_id=request.id,
            )
        except JobCancelledError as e:
            session.outbox.put(Error(id=request.id, message="cancelled", error=e))
        except Exception as e:
            logger.error("job %s failed: %s", request.id, e)
            session.outbox.put(Error(id=request.id, message=str(e), error=e))
        else:
            session.outbox.put(Success(id=request.id, result=result))

    def _dispatch(self, session: _Session) -> None:
        while True:
            message = session.outbox.get()
            if message is _STOP:
                break
            with self._lock:
                job = self._jobs.get(message.id)
            if job is None:
                continue

            if isinstance(message, Progress):
                if job.on_progress is not None and not job.state.terminal:
                    try:
                        job.on_progress(message)
                    except Exception:
                        logger.warning(
                            "progress callback for job %s raised", job.id, exc_info=True,
                        )
            elif isinstance(message, Success):
                self._settle(job, JobState.COMPLETED, result=message.result)
            elif isinstance(message, Error):
                if isinstance(message.error, JobCancelledError):
                    self._settle(job, JobState.CANCELLED, error=message.error)
                else:
                    error = message.error or TransportError(message.message, job_id=job.id)
                    self._settle(job, JobState.FAILED, error=error)

    def _settle(
        self,
        job: _Job,
        state: JobState,
        result: MultiPairResults | None = None,
        error: BaseException | None = None,
    ) -> None:
        with self._lock:
            if job.state.terminal:
                return
            job.state = state
            self._jobs.pop(job.id, None)
        try:
            if error is not None:
                job.future.set_exception(error)
            else:
                job.future.set_result(result)
        except InvalidStateError:
            # the caller cancelled the future directly
            logger.debug("job %s future already settled", job.id)
        logger.debug("job %s %s", job.id, state.value)
