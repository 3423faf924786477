from __future__ import annotations

import threading
import time

from moneytransfer.core.errors import DeadlineExceededError, OperationCancelledError


class OperationContext:
    """Cancellation flag and optional deadline carried through one operation.

    The deadline is expressed on the `time.monotonic()` clock.
    """

    def __init__(self, *, timeout: float | None = None, deadline: float | None = None) -> None:
        if timeout is not None:
            candidate = time.monotonic() + timeout
            deadline = candidate if deadline is None else min(deadline, candidate)
        self.deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> OperationContext:
        return cls()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        if self._cancelled.is_set():
            raise OperationCancelledError()
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise DeadlineExceededError()

    def wait(self, seconds: float) -> None:
        """Sleep for `seconds`, returning early with an error on cancellation."""

        self.check()
        remaining = self.remaining()
        timeout = seconds if remaining is None else min(seconds, remaining)
        if self._cancelled.wait(timeout):
            raise OperationCancelledError()
        self.check()
