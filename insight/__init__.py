"""Heuristic insight trigger controller."""

from insight.classifier import TrendThresholds, build_trend_context, classify
from insight.controller import InsightController
from insight.errors import InsightError, MalformedResponse, TransportFailure
from insight.gates import CooldownGate
from insight.models import (
    ControllerState,
    Insight,
    OrbMode,
    RequestLifecycle,
    TriggerVerdict,
)
from insight.parsing import parse_insight
from insight.progress import ThinkingProgressSimulator
from insight.settings import InsightSettings

__all__ = [
    "ControllerState",
    "CooldownGate",
    "Insight",
    "InsightController",
    "InsightError",
    "InsightSettings",
    "MalformedResponse",
    "OrbMode",
    "RequestLifecycle",
    "ThinkingProgressSimulator",
    "TransportFailure",
    "TrendThresholds",
    "TriggerVerdict",
    "build_trend_context",
    "classify",
    "parse_insight",
]
