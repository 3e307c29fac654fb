"""Reasoning service interface, prompt builder, and null implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
import json

from core.logging import logger as LOGGER
from telemetry.snapshot import TelemetrySnapshot


INSIGHT_PROMPT_TEMPLATE = (
    "Context: {trend_context}\n"
    "Identify anomalies in the system health telemetry below and propose one action.\n"
    "State: {state}\n"
    'Return ONLY JSON: {{"alert": "string", "recommendation": "string"}}'
)

SYSTEM_INSTRUCTIONS = (
    "You are a concise telemetry analyst. Ground every alert in the provided "
    "metrics and answer with the requested JSON object only."
)


def build_insight_prompt(snapshot: TelemetrySnapshot, trend_context: str) -> str:
    state = json.dumps(snapshot.to_payload(), ensure_ascii=False, sort_keys=True, default=str)
    return INSIGHT_PROMPT_TEMPLATE.format(trend_context=trend_context, state=state)


class ReasoningService(ABC):
    """Interface for external reasoning providers.

    Implementations block; callers run them on a worker thread.
    """

    @abstractmethod
    def request_insight(self, snapshot: TelemetrySnapshot, trend_context: str) -> str | None:
        """Return the raw response body, or None when nothing was produced."""


class NullReasoningService(ReasoningService):
    """Safe default implementation that does not perform any network activity."""

    def request_insight(self, snapshot: TelemetrySnapshot, trend_context: str) -> str | None:
        LOGGER.info(
            "[Reasoning] Null service skipped request",
            extra={"event": "reasoning_disabled", "trend_context": trend_context},
        )
        return None
