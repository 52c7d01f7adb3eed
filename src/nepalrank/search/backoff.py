"""Exponential backoff schedule for failed page requests."""

from __future__ import annotations


def backoff_delay(attempt: int, base: float = 1.0, cap: float = 30.0) -> float:
    """Seconds to wait after ``attempt`` consecutive failures.

    >>> backoff_delay(1), backoff_delay(3), backoff_delay(6)
    (2.0, 8.0, 30.0)
    """

    if attempt < 0:
        raise ValueError("attempt must be non-negative")
    return float(min(base * (2 ** attempt), cap))
