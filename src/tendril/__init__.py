"""tendril: a fine-grained reactive runtime for Python.

Signals hold state, effects subscribe to exactly the signals they read,
and memos derive state from both.
"""

from importlib.metadata import version as _version

__version__ = _version("tendril")

from tendril._tracking import get_tracking_depth, untrack
from tendril.signal import Signal, create_signal, set_scheduler
from tendril.effect import Effect, create_effect
from tendril.memo import Memo, UNSET, create_memo

__all__ = [
    "Signal",
    "create_signal",
    "set_scheduler",
    "Effect",
    "create_effect",
    "Memo",
    "create_memo",
    "UNSET",
    "untrack",
    "get_tracking_depth",
]
