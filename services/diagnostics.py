"""Diagnostics routines for the reasoning services subsystem."""

from __future__ import annotations

import os
from typing import Any, Mapping

from diagnostics.models import DiagnosticResult, DiagnosticStatus


_PROVIDER_KEYS: dict[str, tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "gemini": ("GEMINI_API_KEY", "API_KEY"),
}


def probe(
    config: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> DiagnosticResult:
    """Check that the configured reasoning provider can authenticate.

    Args:
        config: Optional config mapping for offline testing.
        environ: Optional environment mapping for offline testing.

    Returns:
        Diagnostic result indicating reasoning service readiness.
    """

    name = "services"
    if config is None:
        from config import ConfigController

        config = ConfigController.get_instance().get_config()
    env = os.environ if environ is None else environ

    reasoning_cfg = config.get("reasoning") or {}
    if not bool(reasoning_cfg.get("enabled", False)):
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.WARN,
            details="Reasoning disabled; insights will never be produced",
        )

    provider = str(reasoning_cfg.get("provider") or "null").strip().lower()
    key_names = _PROVIDER_KEYS.get(provider)
    if key_names is None:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"Unknown reasoning provider: {provider}",
        )

    if not any(str(env.get(key, "")).strip() for key in key_names):
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"{provider} enabled but {' / '.join(key_names)} not set",
        )

    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details=f"Reasoning provider {provider} configured",
    )
