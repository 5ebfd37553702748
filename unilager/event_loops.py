"""Event loops that a store can schedule its updates and effects on."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from concurrent.futures import Executor
from typing import NoReturn

EventFn = Callable[[], object]


class UnsupportedOperationError(RuntimeError):
    """The event loop does not offer the requested operation."""


def _refuse(loop_name: str, operation: str) -> NoReturn:
    raise UnsupportedOperationError(f"{loop_name} does not support {operation}")


class ManualEventLoop:
    """Runs posted work right away, deferring work posted from inside it.

    Work posted while another piece of work runs is queued and run, in order,
    once the outermost call to ``post`` gets to it.  The ``finished`` and
    ``paused`` flags only record requests; they do not hold back posted work.
    """

    def __init__(self) -> None:
        self._queue: deque[EventFn] = deque()
        self._running = False
        self.finished = False
        self.paused = False

    def post(self, fn: EventFn) -> None:
        """Run ``fn`` now, or after the work currently running."""
        self._queue.append(fn)
        if self._running:
            return
        self._running = True
        try:
            while self._queue:
                self._queue.popleft()()
        finally:
            self._queue.clear()
            self._running = False

    def run_async(self, fn: EventFn) -> None:
        """Not offered: this loop has no background execution."""
        _refuse("manual event loop", "async work")

    def finish(self) -> None:
        """Record that the loop was asked to finish."""
        self.finished = True

    def pause(self) -> None:
        """Record that the loop was asked to pause."""
        self.paused = True

    def resume(self) -> None:
        """Record that the loop was asked to resume."""
        self.paused = False


class QueueEventLoop:
    """Collects posted work until ``step`` runs it."""

    _name = "queue event loop"

    def __init__(self) -> None:
        self._queue: deque[EventFn] = deque()

    def post(self, fn: EventFn) -> None:
        """Queue ``fn`` to run on the next ``step``."""
        self._queue.append(fn)

    def step(self) -> None:
        """Run all queued work, including work queued while it runs."""
        try:
            while self._queue:
                self._queue.popleft()()
        finally:
            self._queue.clear()

    def run_async(self, fn: EventFn) -> None:
        """Not offered: raises UnsupportedOperationError."""
        _refuse(self._name, "async work")

    def finish(self) -> None:
        """Not offered: raises UnsupportedOperationError."""
        _refuse(self._name, "finish")

    def pause(self) -> None:
        """Not offered: raises UnsupportedOperationError."""
        _refuse(self._name, "pause")

    def resume(self) -> None:
        """Not offered: raises UnsupportedOperationError."""
        _refuse(self._name, "resume")


class SafeQueueEventLoop:
    """A queue loop that accepts work from any thread.

    Work is run by ``step`` on the owning thread: the one that created the loop
    or last called ``adopt``.
    """

    _name = "safe queue event loop"

    def __init__(self) -> None:
        self._thread_id = threading.get_ident()
        self._lock = threading.Lock()
        self._shared: deque[EventFn] = deque()
        self._local: deque[EventFn] = deque()

    def post(self, fn: EventFn) -> None:
        """Queue ``fn``; safe to call from any thread."""
        if threading.get_ident() == self._thread_id:
            self._local.append(fn)
        else:
            with self._lock:
                self._shared.append(fn)

    def step(self) -> None:
        """Run local work, then the work posted from other threads."""
        if threading.get_ident() != self._thread_id:
            raise RuntimeError("step() must be called from the owning thread")
        self._run_local()
        with self._lock:
            self._local, self._shared = self._shared, self._local
        self._run_local()

    def adopt(self) -> None:
        """Make the calling thread the owner of this loop."""
        if self._local:
            raise RuntimeError("cannot adopt a loop with pending local work")
        self._thread_id = threading.get_ident()

    def _run_local(self) -> None:
        try:
            while self._local:
                self._local.popleft()()
        finally:
            self._local.clear()

    def run_async(self, fn: EventFn) -> None:
        """Not offered: raises UnsupportedOperationError."""
        _refuse(self._name, "async work")

    def finish(self) -> None:
        """Not offered: raises UnsupportedOperationError."""
        _refuse(self._name, "finish")

    def pause(self) -> None:
        """Not offered: raises UnsupportedOperationError."""
        _refuse(self._name, "pause")

    def resume(self) -> None:
        """Not offered: raises UnsupportedOperationError."""
        _refuse(self._name, "resume")


class ExecutorEventLoop:
    """Posts work to an executor and runs async work on its own thread.

    The executor must run its work serially (a single worker), since the
    store evaluating the posted work is not thread safe.  The ``paused`` flag
    only records requests; it does not hold back posted work.
    """

    def __init__(self, executor: Executor, stop: Callable[[], object] | None = None) -> None:
        self.executor = executor
        self.stop: Callable[[], object] = stop if stop is not None else (lambda: None)
        self.paused = False

    def post(self, fn: EventFn) -> None:
        """Submit ``fn`` to the executor."""
        self.executor.submit(fn)

    def run_async(self, fn: EventFn) -> None:
        """Run ``fn`` on a new background thread."""
        threading.Thread(target=fn, daemon=True).start()

    def finish(self) -> None:
        """Call the stop callback."""
        self.stop()

    def pause(self) -> None:
        """Record that the loop was asked to pause."""
        self.paused = True

    def resume(self) -> None:
        """Record that the loop was asked to resume."""
        self.paused = False