"""Tests for the display-only thinking progress simulator."""

from __future__ import annotations

import asyncio
import random

from insight.progress import ThinkingProgressSimulator


def test_advance_never_exceeds_cap() -> None:
    simulator = ThinkingProgressSimulator(max_step=10.0, rng=random.Random(1))

    values = [simulator.advance() for _ in range(200)]

    assert values == sorted(values)
    assert max(values) <= 98.0
    assert values[-1] > 90.0


def test_advance_respects_max_step() -> None:
    simulator = ThinkingProgressSimulator(max_step=2.0, rng=random.Random(3))

    previous = 0.0
    for _ in range(20):
        current = simulator.advance()
        assert 0.0 <= current - previous <= 2.0
        previous = current


def test_stop_resets_value_and_notifies_listener() -> None:
    seen: list[float] = []
    simulator = ThinkingProgressSimulator(rng=random.Random(5), listener=seen.append)

    simulator.advance()
    simulator.stop()

    assert simulator.value == 0.0
    assert seen[-1] == 0.0


def test_running_task_advances_until_stopped() -> None:
    async def scenario() -> tuple[float, bool, float, bool]:
        simulator = ThinkingProgressSimulator(interval_s=0.01, rng=random.Random(9))
        simulator.start()
        await asyncio.sleep(0.1)
        during = simulator.value
        running = simulator.running
        simulator.stop()
        await asyncio.sleep(0.03)
        return during, running, simulator.value, simulator.running

    during, running, after, still_running = asyncio.run(scenario())
    assert during > 0.0
    assert running is True
    assert after == 0.0
    assert still_running is False


def test_listener_errors_do_not_stop_progress() -> None:
    def _broken(value: float) -> None:
        raise RuntimeError("renderer gone")

    simulator = ThinkingProgressSimulator(rng=random.Random(2), listener=_broken)

    assert simulator.advance() > 0.0
