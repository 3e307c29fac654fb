"""Immutable per-tick telemetry snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


_KEY_ALIASES = {
    "health": "health",
    "decoherence": "decoherence",
    "lesion_count": "lesion_count",
    "lesionCount": "lesion_count",
    "lesions": "lesion_count",
    "coherence_factor": "coherence_factor",
    "coherenceFactor": "coherence_factor",
}


def _unit_interval(name: str, value: float) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")
    return value


@dataclass(frozen=True)
class TelemetrySnapshot:
    """System health metrics observed on a single UI tick.

    Attributes:
        health: Overall health in ``[0, 1]``.
        decoherence: Decoherence level in ``[0, 1]``.
        lesion_count: Number of active lesions.
        coherence_factor: Coherence factor in ``[0, 1]``.
        extra: Additional metrics forwarded untouched to the reasoning service.
    """

    health: float
    decoherence: float
    lesion_count: int = 0
    coherence_factor: float = 1.0
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "health", _unit_interval("health", self.health))
        object.__setattr__(self, "decoherence", _unit_interval("decoherence", self.decoherence))
        object.__setattr__(
            self,
            "coherence_factor",
            _unit_interval("coherence_factor", self.coherence_factor),
        )
        lesion_count = int(self.lesion_count)
        if lesion_count < 0:
            raise ValueError(f"lesion_count must be >= 0, got {lesion_count}")
        object.__setattr__(self, "lesion_count", lesion_count)
        object.__setattr__(self, "extra", dict(self.extra))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TelemetrySnapshot":
        """Build a snapshot from a dict, accepting camelCase or snake_case keys.

        Unknown keys are kept in ``extra``.
        """

        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in data.items():
            target = _KEY_ALIASES.get(key)
            if target is None:
                extra[key] = value
            else:
                known[target] = value
        if "health" not in known or "decoherence" not in known:
            raise ValueError("telemetry requires 'health' and 'decoherence'")
        return cls(extra=extra, **known)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-serialisable view sent to the reasoning service."""

        payload: dict[str, Any] = dict(self.extra)
        payload.update(
            {
                "health": self.health,
                "decoherence": self.decoherence,
                "lesionCount": self.lesion_count,
                "coherenceFactor": self.coherence_factor,
            }
        )
        return payload
