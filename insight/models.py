"""Data models for the insight trigger controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RequestLifecycle(str, Enum):
    """Lifecycle of the single reasoning request a controller may own."""

    IDLE = "idle"
    PENDING = "pending"
    SETTLING = "settling"


class OrbMode(str, Enum):
    """Visual mode signal consumed by the rendering layer."""

    STANDBY = "STANDBY"
    ANALYSIS = "ANALYSIS"
    SYNTHESIS = "SYNTHESIS"
    REPAIR = "REPAIR"
    GROUNDING = "GROUNDING"
    CONCORDANCE = "CONCORDANCE"
    OFFLINE = "OFFLINE"


NEUTRAL_MODE = OrbMode.STANDBY
ANALYZING_MODE = OrbMode.ANALYSIS


@dataclass(frozen=True)
class TriggerVerdict:
    critical: bool
    degrading: bool

    @property
    def triggered(self) -> bool:
        return self.critical or self.degrading


@dataclass(frozen=True)
class Insight:
    """Structured verdict returned by the reasoning service."""

    alert: str | None = None
    recommendation: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"alert": self.alert, "recommendation": self.recommendation}


@dataclass
class ControllerState:
    """The one mutable record owned by an InsightController."""

    lifecycle: RequestLifecycle = RequestLifecycle.IDLE
    last_request_at: float | None = None
    progress: float = 0.0
    insight: Insight | None = None
    mode: OrbMode = NEUTRAL_MODE
    prev_health: float | None = None
    last_trend_context: str | None = None
    requests_issued: int = 0
    failures: int = 0
    suppressed_ticks: int = 0
