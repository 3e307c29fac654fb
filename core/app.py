"""Application runtime wiring telemetry, controller, and terminal view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rich.text import Text

from core.logging import console, log_info, logger as LOGGER
from insight.controller import InsightController
from insight.models import Insight, OrbMode
from insight.projection import project, render_status_line
from insight.settings import InsightSettings
from services.reasoning import build_reasoning_service_or_null
from telemetry.simulation import SimulatedTelemetrySource
from telemetry.snapshot import TelemetrySnapshot
from telemetry.ticker import TelemetryTicker


@dataclass(frozen=True)
class AppConfig:
    """Configuration for the demo dashboard runtime.

    Attributes:
        ticks: Number of telemetry ticks to run; ``0`` runs until interrupted.
        tick_interval_s: Seconds between telemetry ticks.
        seed: Optional seed for the simulated telemetry source.
        show_status: Print a status line after every tick.
    """

    ticks: int = 0
    tick_interval_s: float = 1.0
    seed: int | None = None
    show_status: bool = True


def _print_line(line: Any) -> None:
    if console is not None:
        console.print(line)
    else:
        print(str(line))


async def run(app_config: AppConfig, config: dict[str, Any]) -> int:
    """Run the dashboard loop with the provided configuration.

    Args:
        app_config: Runtime options from the CLI.
        config: Normalized configuration mapping.

    Returns:
        Process exit code (0 for success).
    """

    settings = InsightSettings.from_config(config)
    service = build_reasoning_service_or_null(config)
    log_info(f"Reasoning service: {type(service).__name__}", style="bold cyan")

    def _on_mode(mode: OrbMode) -> None:
        LOGGER.debug("Mode signal -> %s", mode.value)

    def _on_insight(insight: Insight) -> None:
        _print_line(f"🔔 {insight.alert or 'Insight'}: {insight.recommendation or '-'}")

    controller = InsightController(
        service,
        settings=settings,
        mode_handler=_on_mode,
        alert_hook=_on_insight,
    )
    source = SimulatedTelemetrySource(seed=app_config.seed)
    ticker = TelemetryTicker(source, interval_s=app_config.tick_interval_s)

    def _on_tick(snapshot: TelemetrySnapshot) -> None:
        controller.on_tick(snapshot)
        if app_config.show_status:
            view = project(controller.get_state(), controller.cooldown_remaining())
            line = Text(
                f"h={snapshot.health:.3f} d={snapshot.decoherence:.2f} l={snapshot.lesion_count} ",
                style="dim",
            )
            line.append_text(render_status_line(view))
            _print_line(line)

    ticker.register_handler(_on_tick)

    try:
        await ticker.run(max_ticks=app_config.ticks or None)
    finally:
        ticker.stop()
        await controller.wait_until_idle()
        controller.close()
        state = controller.get_state()
        LOGGER.info(
            "Dashboard stopped: ticks=%s requests=%s failures=%s suppressed=%s",
            ticker.ticks,
            state.requests_issued,
            state.failures,
            state.suppressed_ticks,
        )
    return 0

