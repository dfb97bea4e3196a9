"""Signals — mutable cells that track their readers.

When a Signal is read while an Effect is running, the two are linked.
When the Signal is written, every linked Effect re-runs synchronously,
before set() returns.

Thread safety: call set_scheduler() once from the owning thread. After
that, any set() from another thread is marshaled through the scheduler.
Owning-thread set() remains synchronous.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable, Generic, TypeVar, Union

from tendril._tracking import context, link

if TYPE_CHECKING:
    from tendril.effect import Effect

T = TypeVar("T")

Getter = Callable[[], T]
Setter = Callable[[T], None]
Equals = Union[bool, Callable[[T, T], bool], None]

logger = logging.getLogger("tendril.signal")

# ─── Auto-marshal ────────────────────────────────────────────────────────────
_scheduler = None
_scheduler_thread = None


def set_scheduler(scheduler) -> None:
    """Set the global scheduler for cross-thread Signal writes.

    Call once from the thread that owns the reactive graph:
        tendril.set_scheduler(loop.call_soon_threadsafe)

    After this, any Signal.set() from another thread is handed to
    scheduler(fn) instead of running in place. Pass None to clear.
    """
    global _scheduler, _scheduler_thread
    _scheduler = scheduler
    _scheduler_thread = threading.current_thread() if scheduler is not None else None


def _identical(old, new) -> bool:
    return old is new or old == new


def _resolve_equals(equals: Equals) -> Callable[[T, T], bool] | None:
    if equals is None or equals is False:
        return None
    if equals is True:
        return _identical
    if callable(equals):
        return equals
    raise TypeError(f"equals must be a bool, a callable or None, got {equals!r}")


class Signal(Generic[T]):
    """A single mutable value with automatic dependency tracking."""

    __slots__ = ("_value", "_subscribers", "_equals")

    def __init__(self, value: T, *, equals: Equals = None) -> None:
        self._value = value
        self._subscribers: set[Effect] = set()
        self._equals = _resolve_equals(equals)

    def get(self) -> T:
        """Read the value. If an effect is running, subscribes it."""
        effect = context.active
        if effect is not None:
            link(self, effect)
        return self._value

    def peek(self) -> T:
        """Read the value without subscribing anything."""
        return self._value

    def set(self, value: T) -> None:
        """Write a new value. Marshals through the scheduler off-thread."""
        if _scheduler is not None and threading.current_thread() is not _scheduler_thread:
            logger.debug("Marshaling write to %r from thread %s", self, threading.current_thread().name)
            _scheduler(lambda v=value: self._set_direct(v))
        else:
            self._set_direct(value)

    def _set_direct(self, value: T) -> None:
        old = self._value
        self._value = value
        if self._equals is not None and self._equals(old, value):
            return
        self._notify()

    def _notify(self) -> None:
        """Re-run every subscriber. Iterates a snapshot; runs relink the live set."""
        for effect in list(self._subscribers):
            effect.run()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"Signal({self._value!r})"


def create_signal(initial: T, *, equals: Equals = None) -> tuple[Getter[T], Setter[T]]:
    """Create a Signal and return its (getter, setter) pair.

    Usage:
        count, set_count = create_signal(0)
        create_effect(lambda: print(count()))  # prints 0
        set_count(1)                           # prints 1

    By default every write notifies. Pass equals=True to skip writes equal
    to the current value, or a callable (old, new) -> bool.
    """
    signal = Signal(initial, equals=equals)
    return signal.get, signal.set
