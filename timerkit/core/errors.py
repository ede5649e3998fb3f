"""Common exceptions for timerkit."""
from __future__ import annotations


class TimerkitError(Exception):
    pass


class InvalidArgument(TimerkitError, TypeError):
    pass


class DecodeError(TimerkitError, ValueError):
    pass
