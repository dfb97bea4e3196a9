"""Dependency tracking engine — the heart of tendril.

A single TrackingContext holds the stack of currently-executing effects.
Signal.get() consults the top of that stack to learn which effect is
reading it, building the dependency graph without explicit wiring.

The stack lives in a contextvars.ContextVar, so pushes and pops never
leak between threads or asyncio tasks. The runtime enters an effect only
through TrackingContext.running(), which restores the previous stack even
when the effect raises.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator, TypeVar

if TYPE_CHECKING:
    from tendril.effect import Effect
    from tendril.signal import Signal

T = TypeVar("T")


class TrackingContext:
    """Stack of running effects. Top of stack = innermost running effect."""

    __slots__ = ("_stack",)

    def __init__(self) -> None:
        self._stack: contextvars.ContextVar[tuple] = contextvars.ContextVar(
            "tendril_stack", default=()
        )

    @property
    def active(self) -> Effect | None:
        """The effect that a signal read right now would subscribe, if any."""
        stack = self._stack.get()
        return stack[-1] if stack else None

    @property
    def depth(self) -> int:
        """Number of effects currently executing. Untracked frames do not count."""
        return sum(1 for frame in self._stack.get() if frame is not None)

    # A None frame marks an untracked region.
    def push(self, frame: Effect | None) -> contextvars.Token:
        return self._stack.set(self._stack.get() + (frame,))

    def pop(self, token: contextvars.Token) -> None:
        self._stack.reset(token)

    @contextmanager
    def running(self, effect: Effect) -> Iterator[None]:
        """Make effect the active subscriber for the duration of the block."""
        token = self.push(effect)
        try:
            yield
        finally:
            self.pop(token)

    @contextmanager
    def untracked(self) -> Iterator[None]:
        """Suspend tracking: reads inside the block subscribe no effect."""
        token = self.push(None)
        try:
            yield
        finally:
            self.pop(token)


# The process-wide tracking context consulted by every Signal.get().
context = TrackingContext()


def link(signal: Signal, effect: Effect) -> None:
    """Subscribe effect to signal. Both sides are updated together."""
    if effect._disposed:
        return
    signal._subscribers.add(effect)
    effect._dependencies.add(signal)


def unlink_all(effect: Effect) -> None:
    """Remove effect from every signal it depends on, then forget them."""
    for signal in effect._dependencies:
        signal._subscribers.discard(effect)
    effect._dependencies.clear()


def untrack(fn: Callable[[], T]) -> T:
    """Call fn without subscribing the current effect to anything it reads.

    Usage:
        count, set_count = create_signal(0)
        label, set_label = create_signal("total")

        create_effect(lambda: print(label(), untrack(count)))
        set_count(5)      # no re-run, count was read untracked
        set_label("sum")  # re-runs, prints "sum 5"
    """
    with context.untracked():
        return fn()


def get_tracking_depth() -> int:
    """Current nesting depth of effect executions. Useful for testing."""
    return context.depth
