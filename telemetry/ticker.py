"""Periodic tick driver feeding telemetry snapshots to listeners."""

from __future__ import annotations

import asyncio
from typing import Callable

from core.logging import logger as LOGGER
from telemetry.snapshot import TelemetrySnapshot

SnapshotProvider = Callable[[], TelemetrySnapshot]
TickHandler = Callable[[TelemetrySnapshot], object]


class TelemetryTicker:
    """Poll a snapshot provider on a fixed cadence and fan out each snapshot."""

    def __init__(self, provider: SnapshotProvider, *, interval_s: float = 1.0) -> None:
        self._provider = provider
        self._interval_s = max(0.0, float(interval_s))
        self._handlers: list[TickHandler] = []
        self._stop_event = asyncio.Event()
        self._ticks = 0
        self._errors = 0

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def errors(self) -> int:
        return self._errors

    def register_handler(self, handler: TickHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unregister_handler(self, handler: TickHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def stop(self) -> None:
        self._stop_event.set()

    def tick_once(self) -> TelemetrySnapshot | None:
        """Read one snapshot and deliver it to every handler in registration order."""

        try:
            snapshot = self._provider()
        except Exception as exc:
            self._errors += 1
            LOGGER.exception("[Telemetry] Snapshot provider failed (continuing): %s", exc)
            return None

        self._ticks += 1
        for handler in list(self._handlers):
            try:
                handler(snapshot)
            except Exception as exc:
                self._errors += 1
                LOGGER.exception("[Telemetry] Tick handler failed: %s", exc)
        return snapshot

    async def run(self, max_ticks: int | None = None) -> int:
        """Tick until stopped or ``max_ticks`` snapshots were delivered."""

        self._stop_event.clear()
        delivered = 0
        while not self._stop_event.is_set():
            if self.tick_once() is not None:
                delivered += 1
            if max_ticks is not None and delivered >= max_ticks:
                break
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval_s)
            except asyncio.TimeoutError:
                pass
        LOGGER.debug("[Telemetry] Ticker stopped after %s ticks.", delivered)
        return delivered
