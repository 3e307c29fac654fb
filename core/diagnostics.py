"""Diagnostics routines for the core subsystem."""

from __future__ import annotations

import importlib.util

from diagnostics.models import DiagnosticResult, DiagnosticStatus


def probe() -> DiagnosticResult:
    """Run a core probe to validate logging readiness.

    Returns:
        Diagnostic result indicating core readiness.
    """

    name = "core"
    from core import logging as core_logging

    logger = core_logging.logger
    if logger is None or not logger.handlers:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details="Insight logger failed to initialize",
        )
    if importlib.util.find_spec("rich") is None:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.WARN,
            details="Rich not installed; plain stream logging in use",
        )
    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details=f"Rich logging enabled (level={logger.getEffectiveLevel()})",
    )
