"""Trend classification for telemetry snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from insight.models import TriggerVerdict
from telemetry.snapshot import TelemetrySnapshot


DEGRADING_CONTEXT = "Degrading trend: decoherence detected in local lattice."
CRITICAL_CONTEXT = "Critical threshold crossed: heuristic scan requested."

CONTEXT_PRIORITIES = ("degrading", "critical")


@dataclass(frozen=True)
class TrendThresholds:
    """Threshold set for critical and degrading classification."""

    critical_health: float = 0.6
    critical_lesions: int = 1
    critical_decoherence: float = 0.55
    degrading_delta: float = -0.005
    degrading_decoherence: float = 0.3
    degrading_coherence: float = 0.8

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> "TrendThresholds":
        if not isinstance(config, Mapping):
            return cls()
        defaults = cls()
        return cls(
            critical_health=float(config.get("critical_health", defaults.critical_health)),
            critical_lesions=int(config.get("critical_lesions", defaults.critical_lesions)),
            critical_decoherence=float(
                config.get("critical_decoherence", defaults.critical_decoherence)
            ),
            degrading_delta=float(config.get("degrading_delta", defaults.degrading_delta)),
            degrading_decoherence=float(
                config.get("degrading_decoherence", defaults.degrading_decoherence)
            ),
            degrading_coherence=float(
                config.get("degrading_coherence", defaults.degrading_coherence)
            ),
        )


DEFAULT_THRESHOLDS = TrendThresholds()


def classify(
    curr: TelemetrySnapshot,
    prev_health: float,
    thresholds: TrendThresholds = DEFAULT_THRESHOLDS,
) -> TriggerVerdict:
    """Classify a snapshot as critical and/or degrading.

    ``prev_health`` is the health of the immediately preceding tick, whether
    or not that tick triggered a request.
    """

    critical = (
        curr.health < thresholds.critical_health
        or curr.lesion_count > thresholds.critical_lesions
        or curr.decoherence > thresholds.critical_decoherence
    )
    health_delta = curr.health - prev_health
    degrading = health_delta < thresholds.degrading_delta or (
        curr.decoherence > thresholds.degrading_decoherence
        and curr.coherence_factor < thresholds.degrading_coherence
    )
    return TriggerVerdict(critical=critical, degrading=degrading)


def build_trend_context(verdict: TriggerVerdict, priority: str = "degrading") -> str:
    """Return the framing sent with a request; ``priority`` picks the label when both apply."""

    if priority not in CONTEXT_PRIORITIES:
        raise ValueError(f"Unknown context priority: {priority!r}")
    if verdict.critical and verdict.degrading:
        return DEGRADING_CONTEXT if priority == "degrading" else CRITICAL_CONTEXT
    if verdict.degrading:
        return DEGRADING_CONTEXT
    return CRITICAL_CONTEXT
