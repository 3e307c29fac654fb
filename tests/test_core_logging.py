"""Tests for shared logger helpers."""

from __future__ import annotations

import logging
import logging.handlers

from core import logging as core_logging
from insight.models import RequestLifecycle


def test_set_level_accepts_names_and_falls_back_to_info() -> None:
    original = core_logging.logger.level
    try:
        core_logging.set_level("debug")
        assert core_logging.logger.level == logging.DEBUG
        core_logging.set_level("chatty")
        assert core_logging.logger.level == logging.INFO
    finally:
        core_logging.logger.setLevel(original)


def test_file_logging_writes_and_detaches(tmp_path) -> None:
    log_path = tmp_path / "logs" / "insight.log"

    core_logging.enable_file_logging(log_path)
    try:
        core_logging.log_lifecycle_transition(
            RequestLifecycle.IDLE, RequestLifecycle.PENDING, reason="critical"
        )
    finally:
        core_logging.disable_file_logging()

    assert "lifecycle idle -> pending (critical)" in log_path.read_text(encoding="utf-8")
    assert not any(
        isinstance(h, logging.handlers.QueueHandler) for h in core_logging.logger.handlers
    )
