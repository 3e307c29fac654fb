"""Controller settings derived from the ``insight`` config block."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from insight.classifier import CONTEXT_PRIORITIES, TrendThresholds


@dataclass(frozen=True)
class InsightSettings:
    """Timing and policy knobs for an InsightController."""

    cooldown_s: float = 20.0
    request_timeout_s: float | None = None
    context_priority: str = "degrading"
    progress_interval_s: float = 0.2
    progress_max_step: float = 2.0
    progress_cap: float = 98.0
    thresholds: TrendThresholds = field(default_factory=TrendThresholds)

    def __post_init__(self) -> None:
        if self.context_priority not in CONTEXT_PRIORITIES:
            raise ValueError(
                f"context_priority must be one of {CONTEXT_PRIORITIES}, got {self.context_priority!r}"
            )
        if self.cooldown_s < 0.0:
            raise ValueError("cooldown_s must be >= 0")
        if self.request_timeout_s is not None and self.request_timeout_s <= 0.0:
            raise ValueError("request_timeout_s must be positive when set")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "InsightSettings":
        insight_cfg = config.get("insight") if isinstance(config, Mapping) else None
        if not isinstance(insight_cfg, Mapping):
            return cls()
        defaults = cls()
        progress_cfg = insight_cfg.get("progress") or {}
        timeout = insight_cfg.get("request_timeout_s", defaults.request_timeout_s)
        return cls(
            cooldown_s=float(insight_cfg.get("cooldown_s", defaults.cooldown_s)),
            request_timeout_s=float(timeout) if timeout is not None else None,
            context_priority=str(
                insight_cfg.get("context_priority", defaults.context_priority)
            ).strip().lower(),
            progress_interval_s=float(
                progress_cfg.get("interval_s", defaults.progress_interval_s)
            ),
            progress_max_step=float(progress_cfg.get("max_step", defaults.progress_max_step)),
            progress_cap=float(progress_cfg.get("cap", defaults.progress_cap)),
            thresholds=TrendThresholds.from_config(insight_cfg.get("thresholds")),
        )
