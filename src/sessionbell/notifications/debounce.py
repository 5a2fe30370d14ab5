"""
DebounceGate — drops repeats of the same key inside a short window.

Only exact repeats are throttled. The first occurrence of a key always
fires, and distinct keys never throttle each other.
"""

from __future__ import annotations

import time

DEBOUNCE_MS = 1000


def now_ms() -> float:
    """Wall-clock time in milliseconds, the unit the host uses for timestamps."""
    return time.time() * 1000


class DebounceGate:
    """Tracks the last successful trigger per key."""

    def __init__(self, window_ms: float = DEBOUNCE_MS) -> None:
        self.window_ms = window_ms
        self._last: dict[str, float] = {}

    def should_trigger(self, key: str, now: float, window_ms: float | None = None) -> bool:
        """Record ``now`` under ``key`` and return True unless it is a repeat."""
        window = self.window_ms if window_ms is None else window_ms
        last = self._last.get(key)
        if last is not None and now - last < window:
            return False
        self._last[key] = now
        return True

    def last_trigger(self, key: str) -> float | None:
        return self._last.get(key)
