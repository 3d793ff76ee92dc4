"""
WordMaster – Scheduler error taxonomy
======================================
``InvalidInput`` is raised to the caller before any new state is produced.
``InvariantViolation`` describes a failed post-computation check; the engine
clamps and logs it instead of raising.
"""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the scheduling core."""


class InvalidInput(SchedulerError, ValueError):
    """A quality score, response, field or timestamp is outside its domain."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InvariantViolation(SchedulerError):
    """A computed record broke a declared invariant and had to be clamped."""

    def __init__(self, field: str, value, clamped) -> None:
        super().__init__(f"{field}={value!r} violates invariant, clamped to {clamped!r}")
        self.field = field
        self.value = value
        self.clamped = clamped
