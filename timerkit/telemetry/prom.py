"""Prometheus integration.

Thin wrappers over prometheus_client collectors. Created collectors are
cached by name so that constructing a wrapper twice (tests, re-imports)
does not trip duplicate registration in the default registry.
"""
from __future__ import annotations

from typing import Optional

from prometheus_client import Counter as _PCounter, Histogram as _PHist

_COUNTERS: dict[str, _PCounter] = {}
_HISTS: dict[str, _PHist] = {}


class Counter:
    def __init__(self, name: str, desc: str = "") -> None:
        self._name = name
        if name in _COUNTERS:
            self._c = _COUNTERS[name]
        else:
            self._c = _PCounter(name, desc)
            _COUNTERS[name] = self._c

    def inc(self, amt: float = 1.0) -> None:
        self._c.inc(amt)


class Histogram:
    def __init__(self, name: str, desc: str = "", buckets: Optional[list[float]] = None) -> None:
        self._name = name
        if name in _HISTS:
            self._h = _HISTS[name]
        elif buckets is not None:
            self._h = _PHist(name, desc, buckets=buckets)
            _HISTS[name] = self._h
        else:
            self._h = _PHist(name, desc)
            _HISTS[name] = self._h

    def observe(self, val: float) -> None:
        self._h.observe(val)
