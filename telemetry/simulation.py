"""Seeded random-walk telemetry source for the demo dashboard loop."""

from __future__ import annotations

import random

from telemetry.snapshot import TelemetrySnapshot


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class SimulatedTelemetrySource:
    """Produce drifting health metrics with occasional decoherence spikes and lesions."""

    def __init__(
        self,
        *,
        decoherence_chance: float = 0.05,
        lesion_chance: float = 0.02,
        repair_rate: float = 0.01,
        seed: int | None = None,
    ) -> None:
        self._decoherence_chance = _clamp(decoherence_chance)
        self._lesion_chance = _clamp(lesion_chance)
        self._repair_rate = max(0.0, repair_rate)
        self._rng = random.Random(seed)
        self._health = 0.95
        self._decoherence = 0.05
        self._lesions = 0
        self._coherence = 0.9
        self._ticks = 0

    def next_snapshot(self) -> TelemetrySnapshot:
        self._ticks += 1
        rng = self._rng

        if rng.random() < self._decoherence_chance:
            self._decoherence = _clamp(self._decoherence + rng.uniform(0.1, 0.3))
        else:
            self._decoherence = _clamp(self._decoherence - self._repair_rate + rng.uniform(-0.01, 0.01))

        if rng.random() < self._lesion_chance:
            self._lesions += 1
        elif self._lesions and rng.random() < self._repair_rate * 10:
            self._lesions -= 1

        self._coherence = _clamp(self._coherence + rng.uniform(-0.03, 0.03) - self._decoherence * 0.02)
        if self._coherence < 0.5:
            self._coherence = _clamp(self._coherence + 0.05)

        damage = self._decoherence * 0.02 + self._lesions * 0.01
        self._health = _clamp(self._health - damage + self._repair_rate + rng.uniform(-0.005, 0.005))

        return TelemetrySnapshot(
            health=self._health,
            decoherence=self._decoherence,
            lesion_count=self._lesions,
            coherence_factor=self._coherence,
            extra={"tick": self._ticks, "repairRate": self._repair_rate},
        )

    __call__ = next_snapshot
