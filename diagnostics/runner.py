"""Diagnostics runner utilities."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from core.logging import logger as LOGGER
from diagnostics.models import DiagnosticResult, DiagnosticStatus

Probe = Callable[[], DiagnosticResult]


def format_results(results: Iterable[DiagnosticResult]) -> str:
    """Return a human-friendly diagnostics report."""

    lines = ["Insight dashboard diagnostics", "-" * 60]
    for result in results:
        lines.append(f"[{result.status.value}] {result.name}: {result.details}")
    lines.append("-" * 60)
    return "\n".join(lines)


def run_diagnostics(probes: Iterable[Probe]) -> list[DiagnosticResult]:
    """Run diagnostics probes and return results; a raising probe counts as FAIL."""

    results: list[DiagnosticResult] = []
    for probe in probes:
        try:
            result = probe()
        except Exception as exc:  # noqa: BLE001 - diagnostics must keep running
            LOGGER.exception("Probe failed: %s", probe)
            result = DiagnosticResult(
                name=getattr(probe, "__module__", None) or getattr(probe, "__name__", "unknown_probe"),
                status=DiagnosticStatus.FAIL,
                details=f"Probe raised exception: {exc}",
            )
        results.append(result)
    return results


def exit_code(results: Iterable[DiagnosticResult]) -> int:
    return 1 if any(result.failed for result in results) else 0
