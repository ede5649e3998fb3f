"""Pausable elapsed-time timer.

A ``Timer`` tracks wall-clock milliseconds across start / pause / resume /
stop transitions and can be frozen into a JSON snapshot and rebuilt from
one. Snapshots coming from outside are normalized on load: fields that
would describe an impossible timer (a start in the future, an end before
the start, ...) are dropped rather than rejected.
"""
from __future__ import annotations

import enum
import functools
import json
import math
import time
from typing import Any, Callable, Mapping, Optional

from .config import load_settings
from .core.errors import DecodeError, InvalidArgument
from .core.schemas import TimeBreakdown, TimerSnapshot
from .telemetry.logging import get_logger
from .telemetry.prom import Counter, Histogram

log = get_logger(__name__)

Clock = Callable[[], int]


def wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class TimerState(str, enum.Enum):
    UNSTARTED = "unstarted"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass; never a timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def _as_count(value: Any) -> int:
    v = _as_int(value)
    if v is None or v < 0:
        return 0
    return v


def breakdown(ms: int) -> TimeBreakdown:
    """Split a millisecond count into days, hours, minutes, seconds and ms."""
    ms = max(0, int(ms))
    s = ms // 1000
    m = s // 60
    h = m // 60
    d = h // 24
    return TimeBreakdown(d=d, h=h % 24, m=m % 60, s=s % 60, ms=ms % 1000)


def _callable_name(fn: Callable[..., Any]) -> str:
    if isinstance(fn, functools.partial):
        return _callable_name(fn.func)
    return getattr(fn, "__name__", "") or ""


class Timer:
    """Stateful timer: unstarted -> running <-> paused -> stopped.

    Every mutator returns ``self`` so calls can be chained, and reads the
    clock at most once. Transitions that do not apply to the current state
    are silent no-ops.

    ``clock`` is a zero-argument callable returning integer epoch
    milliseconds; it defaults to the wall clock.
    """

    def __init__(
        self,
        label: Optional[str] = "",
        start_timestamp: Any = None,
        current_start_timestamp: Any = None,
        end_timestamp: Any = None,
        pause_count: Any = 0,
        accumulated_ms: Any = 0,
        clock: Optional[Clock] = None,
    ) -> None:
        self._clock: Clock = clock or wall_clock_ms
        now = self._clock()

        start = _as_int(start_timestamp)
        if start is not None and not 0 <= start < now:
            log.debug("dropping start timestamp %r (now=%d)", start_timestamp, now)
            start = None

        end = _as_int(end_timestamp)
        if end is not None and (start is None or end <= 0 or end <= start):
            log.debug("dropping end timestamp %r (start=%r)", end_timestamp, start)
            end = None

        raw_current = _as_int(current_start_timestamp)
        current = raw_current
        if current is None or start is None or current < start or (end is not None and current >= end):
            current = start

        count = _as_count(pause_count)
        # A snapshot without a current interval is paused only if it ever paused
        paused = start is not None and raw_current is None and count > 0

        self._label = "" if label is None else str(label)
        self._start: Optional[int] = start
        self._current_start: Optional[int] = None if paused else current
        self._end: Optional[int] = end
        self._pause_count = count
        self._accumulated_ms = _as_count(accumulated_ms)

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, Any], clock: Optional[Clock] = None) -> "Timer":
        return cls(
            label=snapshot.get("label", ""),
            start_timestamp=snapshot.get("startTimestamp"),
            current_start_timestamp=snapshot.get("currentStartTimestamp"),
            end_timestamp=snapshot.get("endTimestamp"),
            pause_count=snapshot.get("pauseCount", 0),
            accumulated_ms=snapshot.get("accumulatedMs", 0),
            clock=clock,
        )

    def __repr__(self) -> str:
        return f"Timer(label={self._label!r}, state={self.state.value}, ms={self.ms()})"

    # -- state queries -------------------------------------------------

    @property
    def label(self) -> str:
        return self._label

    def get_label(self) -> str:
        return self._label

    def is_started(self) -> bool:
        return self._start is not None

    def is_paused(self) -> bool:
        return self._start is not None and self._current_start is None

    def is_stopped(self) -> bool:
        return self._end is not None

    def is_running(self) -> bool:
        return self.is_started() and not self.is_paused() and not self.is_stopped()

    @property
    def state(self) -> TimerState:
        if not self.is_started():
            return TimerState.UNSTARTED
        if self.is_stopped():
            return TimerState.STOPPED
        if self.is_paused():
            return TimerState.PAUSED
        return TimerState.RUNNING

    # -- transitions ---------------------------------------------------

    def start(self) -> "Timer":
        if self.is_started() and not self.is_stopped():
            return self
        self.clear()
        self._start = self._clock()
        self._current_start = self._start
        log.debug("timer %r started at %d", self._label, self._start)
        return self

    def pause(self) -> "Timer":
        if self.is_paused() or not self.is_started() or self.is_stopped():
            return self
        assert self._current_start is not None
        self._accumulated_ms += self._clock() - self._current_start
        self._pause_count += 1
        self._current_start = None
        return self

    def resume(self) -> "Timer":
        if not self.is_paused() or self.is_stopped():
            return self
        self._current_start = self._clock()
        return self

    def stop(self) -> "Timer":
        if not self.is_started() or self.is_stopped():
            return self
        # end must follow every start so the snapshot reloads as stopped
        floor = self._start if self._current_start is None else max(self._start, self._current_start)
        self._end = max(self._clock(), floor + 1)
        log.debug("timer %r stopped at %d", self._label, self._end)
        return self

    def clear(self) -> "Timer":
        self._start = None
        self._current_start = None
        self._end = None
        self._accumulated_ms = 0
        self._pause_count = 0
        return self

    # -- measurements --------------------------------------------------

    def _ms_at(self, now: int) -> int:
        if self._start is None:
            return 0
        if self._current_start is None:
            return self._accumulated_ms
        end = self._end if self._end is not None else now
        return end - self._current_start + self._accumulated_ms

    def ms(self) -> int:
        """Milliseconds spent running, excluding pauses."""
        return self._ms_at(self._clock())

    def pause_ms(self) -> int:
        """Milliseconds spent paused since the timer was started."""
        if self._start is None:
            return 0
        now = self._end if self._end is not None else self._clock()
        return now - self._start - self._ms_at(now)

    def time(self) -> TimeBreakdown:
        return breakdown(self.ms())

    def pause_time(self) -> TimeBreakdown:
        return breakdown(self.pause_ms())

    def pause_count(self) -> int:
        return self._pause_count

    def started_at(self) -> Optional[int]:
        return self._start

    def stopped_at(self) -> Optional[int]:
        return self._end

    def format(self, template: Optional[str] = None) -> str:
        """Render the running time into ``template``.

        Placeholders ``%label``, ``%ms``, ``%s``, ``%m``, ``%h`` and ``%d``
        are each replaced once, first occurrence only. ``%label`` renders as
        ``"<label>: "`` or nothing when the label is empty.
        """
        if template is None:
            template = load_settings().template
        t = self.time()
        return (
            template.replace("%label", f"{self._label}: " if self._label else "", 1)
            .replace("%ms", str(t["ms"]), 1)
            .replace("%s", str(t["s"]), 1)
            .replace("%m", str(t["m"]), 1)
            .replace("%h", str(t["h"]), 1)
            .replace("%d", str(t["d"]), 1)
        )

    # -- snapshots -----------------------------------------------------

    def to_snapshot(self) -> TimerSnapshot:
        snap: dict[str, Any] = {}
        if self._start is not None:
            snap["startTimestamp"] = self._start
        if self._current_start is not None:
            snap["currentStartTimestamp"] = self._current_start
        if self._end is not None:
            snap["endTimestamp"] = self._end
        snap["accumulatedMs"] = self._accumulated_ms
        snap["pauseCount"] = self._pause_count
        snap["label"] = self._label
        return snap  # type: ignore[return-value]

    def serialize(self) -> str:
        return json.dumps(self.to_snapshot())

    @staticmethod
    def deserialize(snapshot: str | bytes | bytearray, clock: Optional[Clock] = None) -> "Timer":
        """Rebuild a timer from ``serialize()`` output.

        Raises ``DecodeError`` if ``snapshot`` is not JSON text holding an
        object. Field values inside the object are normalized, never rejected.
        """
        try:
            data = json.loads(snapshot)
        except (TypeError, ValueError, RecursionError) as e:
            _count_decode_error()
            raise DecodeError(f"invalid timer snapshot: {e}") from e
        if not isinstance(data, dict):
            _count_decode_error()
            raise DecodeError(f"timer snapshot must be a JSON object, got {type(data).__name__}")
        return Timer.from_snapshot(data, clock=clock)

    @staticmethod
    def benchmark(fn: Callable[[], Any], clock: Optional[Clock] = None) -> "Timer":
        """Time one synchronous call of ``fn`` and return the stopped timer."""
        if not callable(fn):
            raise InvalidArgument("Timer.benchmark expects a callable")
        timer = Timer(label=_callable_name(fn), clock=clock).start()
        fn()
        timer.stop()
        if load_settings().metrics:
            Histogram("timerkit_benchmark_seconds", "Duration of benchmarked calls").observe(timer.ms() / 1000.0)
        log.debug("benchmark %r took %d ms", timer.label, timer.ms())
        return timer


def _count_decode_error() -> None:
    if load_settings().metrics:
        Counter("timerkit_decode_errors_total", "Rejected timer snapshots").inc()


benchmark = Timer.benchmark
deserialize = Timer.deserialize
