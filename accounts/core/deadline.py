"""
Caller-supplied deadlines for store operations.

A Deadline is an absolute point on the monotonic clock. Repositories check it
before talking to the store and, for writes, once more before committing, so
an expired write is rolled back instead of landing late.
"""
from __future__ import annotations

import time
from typing import Optional


class Deadline:
    """Absolute monotonic deadline."""

    __slots__ = ("_expires_at",)

    def __init__(self, expires_at: float) -> None:
        self._expires_at = expires_at

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(time.monotonic() + seconds)

    @property
    def expires_at(self) -> float:
        return self._expires_at

    def remaining(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())

    def expired(self) -> bool:
        return time.monotonic() >= self._expires_at

    def __repr__(self) -> str:
        return f"Deadline(remaining={self.remaining():.3f}s)"


def resolve_deadline(deadline: Optional[Deadline], default_seconds: float) -> Optional[Deadline]:
    """Return the caller's deadline, or one built from the default timeout (0 disables)."""
    if deadline is not None:
        return deadline
    if default_seconds and default_seconds > 0:
        return Deadline.after(default_seconds)
    return None
