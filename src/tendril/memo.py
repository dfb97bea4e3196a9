"""Memos — derived values built from a Signal and an Effect.

A Memo owns one Signal and one Effect. The Effect computes fn() and writes
the result into the Signal, so the value is recomputed eagerly whenever a
signal fn reads changes. Reading a Memo tracks like reading a Signal.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from tendril.effect import Effect
from tendril.signal import Equals, Getter, Signal

T = TypeVar("T")


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"


# Value held by a memo whose first computation has not completed.
UNSET = _Unset()


class Memo(Generic[T]):
    """A derived value kept in sync with the signals its function reads."""

    __slots__ = ("_fn", "_signal", "_effect")

    def __init__(self, fn: Callable[[], T], *, equals: Equals = None) -> None:
        self._fn = fn
        self._signal: Signal[T] = Signal(UNSET, equals=equals)
        self._effect = Effect(self._recompute)
        self._effect.run()

    def _recompute(self) -> None:
        # Direct write: the recompute runs on whichever thread triggered it.
        self._signal._set_direct(self._fn())

    def get(self) -> T:
        return self._signal.get()

    def peek(self) -> T:
        return self._signal.peek()

    def dispose(self) -> None:
        """Stop recomputing. The last computed value stays readable."""
        self._effect.dispose()

    @property
    def disposed(self) -> bool:
        return self._effect.disposed

    def __repr__(self) -> str:
        name = getattr(self._fn, "__name__", repr(self._fn))
        return f"Memo({name}, {self._signal.peek()!r})"


def create_memo(fn: Callable[[], T], *, equals: Equals = None) -> Getter[T]:
    """Create a derived value and return its getter.

    Usage:
        count, set_count = create_signal(1)
        doubled = create_memo(lambda: count() * 2)

        doubled()     # 2
        set_count(5)
        doubled()     # 10
    """
    return Memo(fn, equals=equals).get
