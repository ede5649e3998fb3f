"""timerkit: pausable, serializable elapsed-time timers."""

from .core.errors import DecodeError, InvalidArgument, TimerkitError
from .hrtimer import HRTimer
from .timer import Timer, TimerState, benchmark, breakdown, deserialize

__version__ = "0.1.0"

__all__ = [
    "Timer",
    "TimerState",
    "HRTimer",
    "benchmark",
    "deserialize",
    "breakdown",
    "TimerkitError",
    "InvalidArgument",
    "DecodeError",
]
