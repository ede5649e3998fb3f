"""High-resolution one-shot stopwatch.

Unlike ``Timer`` there is no pause or snapshot support: ``HRTimer`` measures
a single start/stop span on the monotonic performance counter and reports
it down to the nanosecond.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from .config import DEFAULT_HR_TEMPLATE

_NS_PER_S = 1_000_000_000


class HRTimer:
    def __init__(self, label: str = "", clock: Optional[Callable[[], int]] = None) -> None:
        self._label = label or ""
        self._clock = clock or time.perf_counter_ns
        self._running = False
        self._start_ns: Optional[int] = None
        self._elapsed_ns: Optional[int] = None

    def start(self) -> "HRTimer":
        if not self._running:
            self._start_ns = self._clock()
            self._running = True
        return self

    def stop(self) -> "HRTimer":
        if self._running and self._start_ns is not None:
            self._elapsed_ns = max(0, self._clock() - self._start_ns)
            self._running = False
        return self

    def clear(self) -> "HRTimer":
        self._start_ns = None
        self._elapsed_ns = None
        self._running = False
        return self

    def is_running(self) -> bool:
        return self._running

    def is_stopped(self) -> bool:
        return self._elapsed_ns is not None

    def seconds(self) -> Optional[int]:
        if self._elapsed_ns is None:
            return None
        return self._elapsed_ns // _NS_PER_S

    def milliseconds(self) -> Optional[int]:
        if self._elapsed_ns is None:
            return None
        return (self._elapsed_ns % _NS_PER_S) // 1_000_000

    def microseconds(self) -> Optional[int]:
        if self._elapsed_ns is None:
            return None
        return (self._elapsed_ns % _NS_PER_S) // 1_000 % 1_000

    def nanoseconds(self) -> Optional[int]:
        if self._elapsed_ns is None:
            return None
        return self._elapsed_ns % 1_000

    def format(self, template: Optional[str] = None) -> Optional[str]:
        """Render the recorded span, or ``None`` if nothing was recorded yet.

        ``%label``, ``%s``, ``%ms``, ``%us`` and ``%ns`` are replaced once
        each, in that order.
        """
        if self._elapsed_ns is None:
            return None
        template = template or DEFAULT_HR_TEMPLATE
        return (
            template.replace("%label", self._label, 1)
            .replace("%s", str(self.seconds()), 1)
            .replace("%ms", str(self.milliseconds()), 1)
            .replace("%us", str(self.microseconds()), 1)
            .replace("%ns", str(self.nanoseconds()), 1)
        )
