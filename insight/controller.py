"""Insight request orchestrator driven by telemetry ticks."""

from __future__ import annotations

import asyncio
from dataclasses import replace
import random
import time
from typing import Awaitable, Callable

from core.logging import log_lifecycle_transition, log_mode_change, logger
from insight.classifier import build_trend_context, classify
from insight.errors import InsightError, MalformedResponse, TransportFailure
from insight.gates import CooldownGate
from insight.models import (
    ANALYZING_MODE,
    NEUTRAL_MODE,
    ControllerState,
    Insight,
    OrbMode,
    RequestLifecycle,
)
from insight.parsing import parse_insight
from insight.progress import ThinkingProgressSimulator
from insight.settings import InsightSettings
from services.reasoning.service import ReasoningService
from telemetry.snapshot import TelemetrySnapshot

ModeHandler = Callable[[OrbMode], Awaitable[None] | None]
AlertHook = Callable[[Insight], Awaitable[None] | None]


class InsightController:
    """Turn a telemetry stream into at most one outstanding reasoning request.

    ``on_tick`` is the single entry point for telemetry and must be called
    from the event loop thread. A request moves the controller through
    ``IDLE -> PENDING -> SETTLING -> IDLE``; the return to ``IDLE`` and the
    neutral mode happen on every exit path of the request task.
    """

    def __init__(
        self,
        service: ReasoningService,
        *,
        settings: InsightSettings | None = None,
        mode_handler: ModeHandler | None = None,
        alert_hook: AlertHook | None = None,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        self._service = service
        self.settings = settings or InsightSettings()
        self._mode_handler = mode_handler
        self._alert_hook = alert_hook
        self._clock = clock
        self._state = ControllerState()
        self._gate = CooldownGate(self.settings.cooldown_s)
        self._progress = ThinkingProgressSimulator(
            interval_s=self.settings.progress_interval_s,
            max_step=self.settings.progress_max_step,
            cap=self.settings.progress_cap,
            rng=rng,
            listener=self._on_progress,
        )
        self._request_task: asyncio.Task[None] | None = None
        self._handler_tasks: set[asyncio.Task[None]] = set()
        self._closed = False

    @property
    def lifecycle(self) -> RequestLifecycle:
        return self._state.lifecycle

    @property
    def mode(self) -> OrbMode:
        return self._state.mode

    @property
    def insight(self) -> Insight | None:
        return self._state.insight

    @property
    def progress(self) -> float:
        return self._state.progress

    @property
    def closed(self) -> bool:
        return self._closed

    def get_state(self) -> ControllerState:
        return replace(self._state)

    def cooldown_remaining(self, now: float | None = None) -> float:
        return self._gate.remaining(self._clock() if now is None else now)

    def on_tick(self, snapshot: TelemetrySnapshot, now: float | None = None) -> bool:
        """Observe one snapshot; return True when it issued a request."""

        if self._closed:
            return False
        now = self._clock() if now is None else now

        prev_health = self._state.prev_health
        self._state.prev_health = snapshot.health
        if prev_health is None:
            prev_health = snapshot.health

        if self._state.lifecycle is not RequestLifecycle.IDLE:
            self._state.suppressed_ticks += 1
            logger.debug(
                "[Insight] Tick ignored while %s.", self._state.lifecycle.value
            )
            return False

        verdict = classify(snapshot, prev_health, self.settings.thresholds)
        if not verdict.triggered:
            return False
        if not self._gate.allow(now):
            logger.debug(
                "[Insight] Trigger held by cooldown: %.2fs remaining.",
                self._gate.remaining(now),
            )
            return False

        trend_context = build_trend_context(verdict, self.settings.context_priority)
        self._accept(snapshot, trend_context, now)
        return True

    def close(self) -> None:
        """Stop observing telemetry; a late response will be discarded."""

        if self._closed:
            return
        self._closed = True
        self._progress.stop()
        logger.info("[Insight] Controller closed (lifecycle=%s).", self._state.lifecycle.value)

    async def wait_until_idle(self) -> None:
        """Wait for the outstanding request, if any, and for dispatched hooks."""

        task = self._request_task
        if task is not None and not task.done():
            await asyncio.wait({task})
        if self._handler_tasks:
            await asyncio.wait(set(self._handler_tasks))

    def _accept(self, snapshot: TelemetrySnapshot, trend_context: str, now: float) -> None:
        # Raises before any state is touched when no loop is running.
        asyncio.get_running_loop()

        self._gate.record(now)
        self._state.last_request_at = now
        self._state.requests_issued += 1
        self._state.last_trend_context = trend_context
        self._set_lifecycle(RequestLifecycle.PENDING, reason=trend_context)
        self._set_mode(ANALYZING_MODE)
        self._progress.start()
        self._request_task = asyncio.create_task(self._run_request(snapshot, trend_context))

    async def _run_request(self, snapshot: TelemetrySnapshot, trend_context: str) -> None:
        started = time.monotonic()
        try:
            raw = await self._call_service(snapshot, trend_context)
            self._set_lifecycle(RequestLifecycle.SETTLING, reason="response received")
            if raw is None:
                logger.info("[Insight] Reasoning service produced no insight.")
                return
            insight = parse_insight(raw)
        except InsightError as exc:
            self._set_lifecycle(RequestLifecycle.SETTLING, reason="request failed")
            self._record_failure(exc)
        else:
            self._publish(insight)
        finally:
            self._settle(time.monotonic() - started)

    async def _call_service(self, snapshot: TelemetrySnapshot, trend_context: str) -> str | None:
        timeout_s = self.settings.request_timeout_s
        call = asyncio.to_thread(self._service.request_insight, snapshot, trend_context)
        try:
            if timeout_s is None:
                return await call
            return await asyncio.wait_for(call, timeout=timeout_s)
        except asyncio.TimeoutError as exc:
            raise TransportFailure(f"timed out after {timeout_s}s", cause=exc) from exc
        except Exception as exc:
            raise TransportFailure(str(exc) or type(exc).__name__, cause=exc) from exc

    def _record_failure(self, exc: InsightError) -> None:
        self._state.failures += 1
        if isinstance(exc, MalformedResponse):
            logger.warning("[Insight] Discarding malformed response: %s (raw=%r)", exc, exc.raw)
        else:
            logger.warning("[Insight] Reasoning request failed: %s", exc)

    def _publish(self, insight: Insight) -> None:
        if self._closed:
            logger.info("[Insight] Controller closed; discarding late insight.")
            return
        self._state.insight = insight
        logger.info(
            "[Insight] New insight: alert=%s recommendation=%s",
            insight.alert,
            insight.recommendation,
        )
        if self._alert_hook is not None:
            self._dispatch_handler(self._alert_hook, insight, "alert hook")

    def _settle(self, duration_s: float) -> None:
        self._progress.stop()
        self._state.progress = 0.0
        self._set_mode(NEUTRAL_MODE)
        self._set_lifecycle(RequestLifecycle.IDLE, reason=f"settled in {duration_s:.2f}s")

    def _set_lifecycle(self, lifecycle: RequestLifecycle, reason: str | None = None) -> None:
        if lifecycle is self._state.lifecycle:
            return
        previous = self._state.lifecycle
        self._state.lifecycle = lifecycle
        log_lifecycle_transition(previous, lifecycle, reason=reason)

    def _set_mode(self, mode: OrbMode) -> None:
        if mode is self._state.mode:
            return
        previous = self._state.mode
        self._state.mode = mode
        if self._closed:
            return
        log_mode_change(previous, mode)
        if self._mode_handler is not None:
            self._dispatch_handler(self._mode_handler, mode, "mode handler")

    def _on_progress(self, value: float) -> None:
        self._state.progress = value

    def _dispatch_handler(self, handler: Callable, value: object, label: str) -> None:
        try:
            result = handler(value)
            if asyncio.iscoroutine(result):
                task = asyncio.create_task(self._guard_handler(result, label))
                self._handler_tasks.add(task)
                task.add_done_callback(self._handler_tasks.discard)
        except Exception:
            logger.exception("[Insight] Failed to dispatch %s", label)

    async def _guard_handler(self, coro: Awaitable[None], label: str) -> None:
        try:
            await coro
        except Exception:
            logger.exception("[Insight] %s raised", label.capitalize())
