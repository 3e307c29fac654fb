"""Tests for trend classification and context framing."""

from __future__ import annotations

import pytest

from insight.classifier import (
    CRITICAL_CONTEXT,
    DEGRADING_CONTEXT,
    TrendThresholds,
    build_trend_context,
    classify,
)
from insight.models import TriggerVerdict
from telemetry.snapshot import TelemetrySnapshot


def _snapshot(**overrides) -> TelemetrySnapshot:
    values = {"health": 0.9, "decoherence": 0.1, "lesion_count": 0, "coherence_factor": 0.95}
    values.update(overrides)
    return TelemetrySnapshot(**values)


@pytest.mark.parametrize(
    ("snapshot", "prev_health"),
    [
        (_snapshot(), 0.9),
        (_snapshot(health=0.6, lesion_count=1, decoherence=0.55, coherence_factor=0.9), 0.6),
        (_snapshot(decoherence=0.3, coherence_factor=0.5), 0.9),
        (_snapshot(decoherence=0.5, coherence_factor=0.8), 0.9),
        (_snapshot(health=0.9), 0.904),
    ],
)
def test_quiet_telemetry_never_triggers(snapshot, prev_health) -> None:
    verdict = classify(snapshot, prev_health)

    assert verdict == TriggerVerdict(critical=False, degrading=False)
    assert verdict.triggered is False


def test_scenario_a_no_trigger() -> None:
    verdict = classify(_snapshot(health=0.9, decoherence=0.1, lesion_count=0), 0.9)

    assert verdict.triggered is False


def test_scenario_b_low_health_is_critical() -> None:
    verdict = classify(_snapshot(health=0.5, decoherence=0.2, lesion_count=0), 0.9)

    assert verdict.critical is True


def test_scenario_c_decoherence_with_weak_coherence_is_degrading() -> None:
    verdict = classify(
        _snapshot(health=0.85, decoherence=0.35, coherence_factor=0.7),
        0.90,
    )

    assert verdict == TriggerVerdict(critical=False, degrading=True)


@pytest.mark.parametrize(
    "overrides",
    [{"health": 0.59}, {"lesion_count": 2}, {"decoherence": 0.56}],
)
def test_each_critical_condition_alone_triggers(overrides) -> None:
    verdict = classify(_snapshot(**overrides), overrides.get("health", 0.9))

    assert verdict.critical is True


def test_health_drop_just_past_threshold_is_degrading() -> None:
    verdict = classify(_snapshot(health=0.89), 0.9)

    assert verdict.degrading is True
    assert verdict.critical is False


def test_custom_thresholds_apply() -> None:
    thresholds = TrendThresholds(critical_health=0.95)

    assert classify(_snapshot(health=0.9), 0.9, thresholds).critical is True


def test_thresholds_from_config_keep_defaults_for_missing_keys() -> None:
    thresholds = TrendThresholds.from_config({"critical_decoherence": "0.7"})

    assert thresholds.critical_decoherence == 0.7
    assert thresholds.critical_health == 0.6
    assert TrendThresholds.from_config(None) == TrendThresholds()


def test_degrading_framing_wins_by_default_when_both_apply() -> None:
    both = TriggerVerdict(critical=True, degrading=True)

    assert build_trend_context(both) == DEGRADING_CONTEXT
    assert build_trend_context(both, priority="critical") == CRITICAL_CONTEXT


def test_single_condition_framing_ignores_priority() -> None:
    assert build_trend_context(TriggerVerdict(True, False), "degrading") == CRITICAL_CONTEXT
    assert build_trend_context(TriggerVerdict(False, True), "critical") == DEGRADING_CONTEXT


def test_unknown_priority_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_trend_context(TriggerVerdict(True, True), "loudest")
