"""
Runtime management of the live session state.

This module owns the single current SessionState and coordinates background
computations against it. Every publication is one reference swap under a
lock, so readers always see a complete state.
"""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..logging.config import get_session_logger, log_notification
from .models import NotificationVariant, SessionState

logger = get_session_logger(__name__)

Compute = Callable[[], Any]
Publish = Callable[[SessionState, Any], SessionState]


@dataclass
class _Request:
    generation: int
    compute: Compute
    publish: Publish


class ComputationRunner:
    """
    Runs computations against a session, at most one per kind at a time.

    Each submission of a kind gets a new generation number. A submission that
    arrives while the kind is already running is parked as pending, replacing
    any older pending request, and runs when the current worker finishes. A
    finished computation publishes only if its generation is still the latest
    for its kind; superseded results are dropped. Nothing is cancelled.
    """

    def __init__(self, state: SessionState):
        self._state = state
        self._lock = threading.Lock()
        self._generations: dict[str, int] = {}
        self._workers: dict[str, threading.Thread] = {}
        self._pending: dict[str, _Request] = {}
        self._idle: dict[str, threading.Event] = {}

    @property
    def state(self) -> SessionState:
        """Latest published session state."""
        with self._lock:
            return self._state

    def apply(self, command: Callable[..., SessionState], *args, **kwargs) -> SessionState:
        """
        Run a synchronous command against the current state and publish it.

        Args:
            command: Function taking the state first and returning a new state

        Returns:
            The published state
        """
        def step(state: SessionState) -> tuple[SessionState, SessionState]:
            new_state = command(state, *args, **kwargs)
            return new_state, new_state

        return self.transact(step)

    def transact(self, command: Callable[..., tuple[SessionState, Any]], *args, **kwargs) -> Any:
        """
        Run a command outside the lock and publish it by compare-and-swap.

        The command sees a snapshot of the current state. If another
        publication lands while it runs, the command is re-run against the
        newer state, so no published result is overwritten.

        Args:
            command: Function taking the state first and returning
                ``(new_state, value)``

        Returns:
            The value returned alongside the published state
        """
        while True:
            base = self.state
            new_state, value = command(base, *args, **kwargs)

            with self._lock:
                if self._state is base:
                    self._state = new_state
                    return value

            logger.debug("Session changed while command ran, retrying",
                         command=getattr(command, "__name__", type(command).__name__))

    def generation(self, kind: str) -> int:
        """Latest generation number submitted for a kind (0 if never)."""
        with self._lock:
            return self._generations.get(kind, 0)

    def is_running(self, kind: str) -> bool:
        """Whether a worker for the kind is currently alive."""
        with self._lock:
            worker = self._workers.get(kind)
            return worker is not None and worker.is_alive()

    def submit(self, kind: str, compute: Compute, publish: Publish) -> int:
        """
        Schedule a background computation.

        Args:
            kind: Computation kind; one worker per kind at a time
            compute: Zero-argument callable producing the result
            publish: Combines the current state with the result

        Returns:
            Generation number assigned to this submission
        """
        with self._lock:
            generation = self._generations.get(kind, 0) + 1
            self._generations[kind] = generation
            request = _Request(generation=generation, compute=compute, publish=publish)

            worker = self._workers.get(kind)
            if worker is not None and worker.is_alive():
                self._pending[kind] = request
                logger.debug("Computation queued behind running worker",
                             kind=kind, generation=generation)
                return generation

            self._start_worker(kind, request)
            return generation

    def wait(self, kind: Optional[str] = None, timeout: Optional[float] = None) -> bool:
        """
        Block until the kind (or every kind) has no running or pending work.

        Returns:
            True if idle, False if the timeout expired first
        """
        with self._lock:
            kinds = [kind] if kind is not None else list(self._idle)
            events = [self._idle[k] for k in kinds if k in self._idle]

        return all(event.wait(timeout) for event in events)

    def _start_worker(self, kind: str, request: _Request) -> None:
        """Start a worker thread for a kind. Caller holds the lock."""
        idle = self._idle.setdefault(kind, threading.Event())
        idle.clear()

        worker = threading.Thread(
            target=self._run,
            args=(kind, request),
            name=f"quantdash-{kind}",
            daemon=True,
        )
        self._workers[kind] = worker
        worker.start()

    def _run(self, kind: str, request: _Request) -> None:
        while request is not None:
            self._execute(kind, request)

            with self._lock:
                request = self._pending.pop(kind, None)
                if request is None:
                    self._workers.pop(kind, None)
                    self._idle[kind].set()

    def _execute(self, kind: str, request: _Request) -> None:
        logger.debug("Computation started", kind=kind, generation=request.generation)

        try:
            result = request.compute()
        except Exception as e:
            self._record_failure(kind, request, e)
            return

        with self._lock:
            latest = self._generations.get(kind)
            if latest != request.generation:
                logger.info("Superseded result discarded", kind=kind,
                            generation=request.generation, latest_generation=latest)
                return
            try:
                self._state = request.publish(self._state, result)
            except Exception as e:
                self._notify_failure(kind, request, e)
                return

        logger.debug("Computation published", kind=kind, generation=request.generation)

    def _record_failure(self, kind: str, request: _Request, error: Exception) -> None:
        with self._lock:
            if self._generations.get(kind) == request.generation:
                self._notify_failure(kind, request, error)

    def _notify_failure(self, kind: str, request: _Request, error: Exception) -> None:
        """Surface a failed run as a destructive notification. Caller holds the lock."""
        logger.error("Computation failed", kind=kind, generation=request.generation,
                     error=str(error), error_type=type(error).__name__)
        self._state = self._state.notify(
            "Computation Failed", str(error), NotificationVariant.DESTRUCTIVE
        )
        log_notification(logger, self._state.latest_notification, context={"kind": kind})
