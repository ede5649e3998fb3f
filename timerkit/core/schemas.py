"""Shared record types for timer snapshots and time breakdowns.

Snapshot keys keep the camelCase spelling used on the wire so that
snapshots written by other producers load unchanged.
"""
from __future__ import annotations

from typing_extensions import NotRequired, TypedDict


class TimerSnapshot(TypedDict):
    startTimestamp: NotRequired[int]
    currentStartTimestamp: NotRequired[int]
    endTimestamp: NotRequired[int]
    accumulatedMs: int
    pauseCount: int
    label: str


class TimeBreakdown(TypedDict):
    d: int
    h: int
    m: int
    s: int
    ms: int
