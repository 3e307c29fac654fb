"""Display-only "thinking" progress while a reasoning request is outstanding."""

from __future__ import annotations

import asyncio
import random
from typing import Callable

from core.logging import logger

ProgressListener = Callable[[float], None]


class ThinkingProgressSimulator:
    """Advance a capped progress value on a fixed interval until stopped.

    Completion is signalled by ``stop()``, never by reaching the cap.
    """

    def __init__(
        self,
        *,
        interval_s: float = 0.2,
        max_step: float = 2.0,
        cap: float = 98.0,
        rng: random.Random | None = None,
        listener: ProgressListener | None = None,
    ) -> None:
        self._interval_s = max(0.01, float(interval_s))
        self._max_step = max(0.0, float(max_step))
        self._cap = min(100.0, max(0.0, float(cap)))
        self._rng = rng or random.Random()
        self._listener = listener
        self._value = 0.0
        self._task: asyncio.Task[None] | None = None

    @property
    def value(self) -> float:
        return self._value

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        self.stop()
        self._set(0.0)
        self._task = asyncio.create_task(self._run())

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._set(0.0)

    def advance(self) -> float:
        if self._value < self._cap:
            step = self._rng.uniform(0.0, self._max_step)
            self._set(min(self._cap, self._value + step))
        return self._value

    async def _run(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._interval_s)
                self.advance()
        except asyncio.CancelledError:
            return

    def _set(self, value: float) -> None:
        if value == self._value:
            return
        self._value = value
        if self._listener is None:
            return
        try:
            self._listener(value)
        except Exception:
            logger.exception("[Insight] Progress listener failed")
