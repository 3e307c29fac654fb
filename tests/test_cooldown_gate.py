"""Tests for cooldown gating between accepted requests."""

from __future__ import annotations

from insight.gates import CooldownGate


def test_gate_allows_first_request() -> None:
    gate = CooldownGate(cooldown_s=20.0)

    assert gate.allow(0.0) is True
    assert gate.remaining(0.0) == 0.0


def test_allow_is_side_effect_free() -> None:
    gate = CooldownGate(cooldown_s=20.0)

    for _ in range(3):
        assert gate.allow(5.0) is True
    assert gate.last_request_at is None


def test_gate_rejects_within_window_and_at_boundary() -> None:
    gate = CooldownGate(cooldown_s=20.0)
    gate.record(100.0)

    assert gate.allow(110.0) is False
    assert gate.allow(120.0) is False
    assert gate.allow(120.5) is True
    assert gate.remaining(110.0) == 10.0
    assert gate.remaining(130.0) == 0.0


def test_negative_window_is_clamped() -> None:
    gate = CooldownGate(cooldown_s=-5.0)
    gate.record(1.0)

    assert gate.cooldown_s == 0.0
    assert gate.allow(1.5) is True
