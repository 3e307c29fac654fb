"""Tests for core diagnostics."""

from __future__ import annotations

from core import logging as core_logging
from core.diagnostics import probe
from diagnostics.models import DiagnosticStatus


def test_core_probe_passes_with_rich_logger() -> None:
    result = probe()

    assert result.status is DiagnosticStatus.PASS
    assert "level=" in result.details


def test_core_probe_warns_without_rich(monkeypatch) -> None:
    real_find_spec = core_logging.importlib.util.find_spec

    def _find_spec(name, *args, **kwargs):
        if name == "rich":
            return None
        return real_find_spec(name, *args, **kwargs)

    monkeypatch.setattr("core.diagnostics.importlib.util.find_spec", _find_spec)

    result = probe()

    assert result.status is DiagnosticStatus.WARN
    assert "Rich not installed" in result.details


def test_core_probe_fails_without_handlers(monkeypatch) -> None:
    monkeypatch.setattr(core_logging.logger, "handlers", [])

    result = probe()

    assert result.status is DiagnosticStatus.FAIL
