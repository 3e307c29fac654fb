"""Diagnostics routines for the insight controller settings."""

from __future__ import annotations

from typing import Any, Mapping

from diagnostics.models import DiagnosticResult, DiagnosticStatus


def probe(config: Mapping[str, Any] | None = None) -> DiagnosticResult:
    """Validate that the ``insight`` config block builds usable settings.

    Args:
        config: Optional config mapping for offline testing.

    Returns:
        Diagnostic result indicating controller readiness.
    """

    name = "insight"
    from insight.settings import InsightSettings

    if config is None:
        from config import ConfigController

        try:
            config = ConfigController.get_instance().get_config()
        except OSError as exc:
            return DiagnosticResult(
                name=name,
                status=DiagnosticStatus.FAIL,
                details=f"Config unavailable: {exc}",
            )

    try:
        settings = InsightSettings.from_config(config)
    except (TypeError, ValueError) as exc:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"Invalid insight settings: {exc}",
        )

    if settings.cooldown_s < 1.0:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.WARN,
            details=f"Cooldown {settings.cooldown_s:.2f}s allows near-continuous requests",
        )
    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details=(
            f"cooldown={settings.cooldown_s:.1f}s priority={settings.context_priority} "
            f"timeout={settings.request_timeout_s}"
        ),
    )
