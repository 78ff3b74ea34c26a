"""Tests for cancellation and deadline contexts."""

from __future__ import annotations

import time

from hyperreq import Context, ContextCancelledError, DeadlineExceededError


def test_background_never_expires() -> None:
    ctx = Context.background()

    assert ctx.deadline is None
    assert ctx.remaining() is None
    assert ctx.err() is None


def test_parent_cancellation_reaches_children_only_downwards() -> None:
    parent = Context.background().with_cancel()
    child = parent.with_cancel()
    sibling = parent.with_cancel()

    child.cancel()
    assert child.cancelled
    assert not parent.cancelled
    assert not sibling.cancelled

    parent.cancel()
    assert sibling.cancelled
    assert isinstance(sibling.err(), ContextCancelledError)


def test_child_cannot_outlive_parent_deadline() -> None:
    parent = Context.background().with_timeout(1.0)
    child = parent.with_timeout(60.0)

    assert child.deadline == parent.deadline
    remaining = child.remaining()
    assert remaining is not None and 0 < remaining <= 1.0


def test_expired_deadline_reports_error() -> None:
    ctx = Context.background().with_deadline(time.monotonic() - 0.5)

    assert ctx.remaining() == 0.0
    assert isinstance(ctx.err(), DeadlineExceededError)


def test_cancellation_takes_precedence_over_deadline() -> None:
    ctx = Context.background().with_deadline(time.monotonic() - 0.5)
    ctx.cancel()

    assert isinstance(ctx.err(), ContextCancelledError)
