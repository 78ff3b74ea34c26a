"""Cancellation and deadline carrier attached to requests."""

from __future__ import annotations

import threading
import time

from .errors import ContextCancelledError, ContextError, DeadlineExceededError


class Context:
    """Cooperative cancellation scope with an optional monotonic deadline.

    Children created with :meth:`with_cancel`, :meth:`with_timeout` or
    :meth:`with_deadline` observe the parent's cancellation and never outlive
    its deadline. Cancelling a child leaves the parent untouched.
    """

    def __init__(
        self,
        *,
        deadline: float | None = None,
        parent: "Context | None" = None,
    ) -> None:
        self._parent = parent
        self._own_deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "Context":
        return cls()

    def with_cancel(self) -> "Context":
        return Context(parent=self)

    def with_deadline(self, deadline: float) -> "Context":
        """Return a child context that expires at ``deadline`` (``time.monotonic`` clock)."""
        return Context(deadline=deadline, parent=self)

    def with_timeout(self, seconds: float) -> "Context":
        return self.with_deadline(time.monotonic() + seconds)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self._parent.cancelled if self._parent is not None else False

    @property
    def deadline(self) -> float | None:
        parent_deadline = self._parent.deadline if self._parent is not None else None
        candidates = [d for d in (self._own_deadline, parent_deadline) if d is not None]
        return min(candidates) if candidates else None

    def remaining(self) -> float | None:
        """Seconds left before the deadline, clamped at zero; ``None`` without a deadline."""
        deadline = self.deadline
        if deadline is None:
            return None
        return max(deadline - time.monotonic(), 0.0)

    def err(self) -> ContextError | None:
        if self.cancelled:
            return ContextCancelledError("context cancelled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            return DeadlineExceededError("context deadline exceeded")
        return None

    def __repr__(self) -> str:
        return f"Context(deadline={self.deadline!r}, cancelled={self.cancelled!r})"


__all__ = ["Context"]
