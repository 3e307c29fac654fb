"""Tests for insight settings diagnostics."""

from __future__ import annotations

from diagnostics.models import DiagnosticStatus
from insight.diagnostics import probe


def test_insight_probe_passes_with_defaults() -> None:
    assert probe({}).status is DiagnosticStatus.PASS


def test_insight_probe_warns_on_tiny_cooldown() -> None:
    result = probe({"insight": {"cooldown_s": 0.2}})

    assert result.status is DiagnosticStatus.WARN


def test_insight_probe_fails_on_invalid_priority() -> None:
    result = probe({"insight": {"context_priority": "loudest"}})

    assert result.status is DiagnosticStatus.FAIL
    assert "context_priority" in result.details
