"""Cooldown gating between accepted reasoning requests."""

from __future__ import annotations


class CooldownGate:
    """Reject requests issued within ``cooldown_s`` of the last accepted one.

    ``allow`` never mutates; the orchestrator calls ``record`` once when it
    accepts a trigger.
    """

    def __init__(self, cooldown_s: float = 20.0) -> None:
        self._cooldown_s = max(0.0, float(cooldown_s))
        self._last_request_at: float | None = None

    @property
    def cooldown_s(self) -> float:
        return self._cooldown_s

    @property
    def last_request_at(self) -> float | None:
        return self._last_request_at

    def allow(self, now: float) -> bool:
        if self._last_request_at is None:
            return True
        return (now - self._last_request_at) > self._cooldown_s

    def record(self, now: float) -> None:
        self._last_request_at = now

    def remaining(self, now: float) -> float:
        if self._last_request_at is None:
            return 0.0
        return max(0.0, self._cooldown_s - (now - self._last_request_at))
