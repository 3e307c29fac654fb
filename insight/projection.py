"""One-way projection of controller state for the rendering layer."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from insight.models import ControllerState, Insight, OrbMode, RequestLifecycle


@dataclass(frozen=True)
class DashboardView:
    mode: OrbMode
    progress: float
    insight: Insight | None
    busy: bool
    cooldown_remaining_s: float = 0.0


def project(state: ControllerState, cooldown_remaining_s: float = 0.0) -> DashboardView:
    return DashboardView(
        mode=state.mode,
        progress=state.progress,
        insight=state.insight,
        busy=state.lifecycle is not RequestLifecycle.IDLE,
        cooldown_remaining_s=max(0.0, cooldown_remaining_s),
    )


_MODE_STYLES = {
    OrbMode.STANDBY: "bold green",
    OrbMode.ANALYSIS: "bold yellow",
    OrbMode.OFFLINE: "dim",
}


def render_status_line(view: DashboardView, bar_width: int = 20) -> Text:
    """Render a single terminal line: mode, progress bar while busy, latest insight."""

    line = Text()
    line.append(f"[{view.mode.value}]", style=_MODE_STYLES.get(view.mode, "bold white"))
    if view.busy:
        filled = int(round(bar_width * view.progress / 100.0))
        bar = "█" * filled + "░" * (bar_width - filled)
        line.append(f" {bar} {view.progress:3.0f}%", style="yellow")
    elif view.cooldown_remaining_s > 0.0:
        line.append(f" cooldown {view.cooldown_remaining_s:4.1f}s", style="dim")

    if view.insight is not None and view.insight.alert and not view.busy:
        line.append(f"  ◈ {view.insight.alert}", style="bold magenta")
        if view.insight.recommendation:
            line.append(f' "{view.insight.recommendation}"', style="italic")
    return line
