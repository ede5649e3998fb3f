"""Telemetry subpackage (lightweight).

Exposes the logger factory and Prometheus wrappers.
"""

from .logging import get_logger
from .prom import Counter, Histogram

__all__ = [
    "get_logger",
    "Counter",
    "Histogram",
]
