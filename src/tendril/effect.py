"""Effects — side effects that re-run when the signals they read change.

An Effect runs its function once on creation. Every signal read during a
run subscribes the effect; writing any of those signals runs it again.
Each run starts by dropping all existing subscriptions, so the dependency
set always reflects the latest run only.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from tendril._tracking import context, unlink_all

if TYPE_CHECKING:
    from tendril.signal import Signal

logger = logging.getLogger("tendril.effect")


class Effect:
    """A re-runnable unit of work that subscribes to what it reads."""

    __slots__ = ("_fn", "_dependencies", "_disposed")

    def __init__(self, fn: Callable[[], None]) -> None:
        self._fn = fn
        self._dependencies: set[Signal] = set()
        self._disposed = False

    def run(self) -> None:
        """Drop old subscriptions, then run fn as the active effect.

        If fn raises, the exception propagates after the tracking stack is
        restored. Signals read before the failure stay subscribed.
        """
        if self._disposed:
            return

        unlink_all(self)

        with context.running(self):
            try:
                self._fn()
            except Exception:
                logger.debug(
                    "Effect %s raised with %d dependencies collected",
                    _name(self._fn), len(self._dependencies),
                )
                raise

    def dispose(self) -> None:
        """Stop this effect. Unsubscribes from every signal; later runs are no-ops."""
        if self._disposed:
            return
        self._disposed = True
        unlink_all(self)
        logger.debug("Disposed effect %s", _name(self._fn))

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def dependencies(self) -> frozenset[Signal]:
        """Snapshot of the signals this effect is currently subscribed to."""
        return frozenset(self._dependencies)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else f"{len(self._dependencies)} deps"
        return f"Effect({_name(self._fn)}, {state})"


def _name(fn) -> str:
    return getattr(fn, "__name__", repr(fn))


def create_effect(fn: Callable[[], None]) -> Effect:
    """Run fn immediately, then re-run it whenever a signal it read changes.

    Returns the Effect (call .dispose() to stop). Works as a decorator.

    An effect created inside another effect is not owned by it: every run of
    the outer effect creates a fresh inner one, and earlier inner effects keep
    reacting. Keep the handle and call .dispose() on it before creating the
    next one to avoid piling them up.

    Usage:
        count, set_count = create_signal(0)
        log = []

        effect = create_effect(lambda: log.append(count()))
        # log == [0] — ran immediately

        set_count(1)
        # log == [0, 1] — re-ran because count changed

        effect.dispose()
        set_count(2)
        # log == [0, 1] — stopped
    """
    effect = Effect(fn)
    effect.run()
    return effect
