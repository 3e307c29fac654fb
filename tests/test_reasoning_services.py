"""Tests for reasoning providers, prompt building, and provider selection."""

from __future__ import annotations

import json

from services.reasoning import (
    GeminiReasoningService,
    NullReasoningService,
    OpenAIReasoningService,
    build_reasoning_service_or_null,
)
from services.reasoning.service import build_insight_prompt
from telemetry.snapshot import TelemetrySnapshot


def _snapshot() -> TelemetrySnapshot:
    return TelemetrySnapshot(
        health=0.42,
        decoherence=0.6,
        lesion_count=3,
        coherence_factor=0.7,
        extra={"uptime": 12},
    )


def test_prompt_embeds_context_and_full_state() -> None:
    prompt = build_insight_prompt(_snapshot(), "Critical threshold crossed: heuristic scan requested.")

    assert prompt.startswith("Context: Critical threshold crossed")
    state_line = next(line for line in prompt.splitlines() if line.startswith("State: "))
    state = json.loads(state_line[len("State: "):])
    assert state == {
        "health": 0.42,
        "decoherence": 0.6,
        "lesionCount": 3,
        "coherenceFactor": 0.7,
        "uptime": 12,
    }
    assert '"alert"' in prompt and '"recommendation"' in prompt


def test_null_service_returns_none() -> None:
    assert NullReasoningService().request_insight(_snapshot(), "ctx") is None


def test_openai_without_key_skips_network(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    svc = OpenAIReasoningService()

    def _boom(payload):
        raise AssertionError("network should not be used")

    monkeypatch.setattr(svc, "_chat_call", _boom)

    assert svc.configured is False
    assert svc.request_insight(_snapshot(), "ctx") is None


def test_openai_request_builds_json_mode_payload(monkeypatch) -> None:
    svc = OpenAIReasoningService(api_key="test-key", model="gpt-test", max_tokens=120)
    captured: dict = {}

    def _fake_chat_call(payload):
        captured.update(payload)
        return '{"alert": "a", "recommendation": "r"}'

    monkeypatch.setattr(svc, "_chat_call", _fake_chat_call)

    raw = svc.request_insight(_snapshot(), "Degrading trend: decoherence detected in local lattice.")

    assert raw == '{"alert": "a", "recommendation": "r"}'
    assert captured["model"] == "gpt-test"
    assert captured["max_tokens"] == 120
    assert captured["response_format"] == {"type": "json_object"}
    assert captured["messages"][0]["role"] == "system"
    assert "Degrading trend" in captured["messages"][1]["content"]


def test_openai_extract_text_handles_missing_content() -> None:
    svc = OpenAIReasoningService(api_key="k")

    assert svc._extract_text({"choices": []}) is None
    assert svc._extract_text({"choices": [{"message": {"content": "   "}}]}) is None
    assert svc._extract_text({"choices": [{"message": {"content": " {} "}}]}) == "{}"


def test_gemini_key_falls_back_to_api_key(monkeypatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "fallback")

    assert GeminiReasoningService().configured is True


def test_gemini_payload_requests_json_with_thinking_budget() -> None:
    svc = GeminiReasoningService(api_key="k", thinking_budget=512)

    payload = svc._build_payload("prompt text")

    assert payload["contents"][0]["parts"][0]["text"] == "prompt text"
    assert payload["generationConfig"]["responseMimeType"] == "application/json"
    assert payload["generationConfig"]["thinkingConfig"] == {"thinkingBudget": 512}
    assert "thinkingConfig" not in GeminiReasoningService(api_key="k", thinking_budget=0)._build_payload("p")[
        "generationConfig"
    ]


def test_gemini_extract_text_skips_thought_parts() -> None:
    svc = GeminiReasoningService(api_key="k")
    response = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"text": "weighing lesion counts", "thought": True},
                        {"text": '{"alert": "x", "recommendation": "y"}'},
                    ]
                }
            }
        ]
    }

    assert svc._extract_text(response) == '{"alert": "x", "recommendation": "y"}'
    assert svc._extract_text({"candidates": []}) is None


def test_factory_returns_null_when_disabled() -> None:
    config = {"reasoning": {"enabled": False, "provider": "openai"}}

    assert isinstance(build_reasoning_service_or_null(config), NullReasoningService)
    assert isinstance(build_reasoning_service_or_null({}), NullReasoningService)


def test_factory_selects_configured_provider() -> None:
    openai_cfg = {"reasoning": {"enabled": True, "provider": "OpenAI"}}
    gemini_cfg = {"reasoning": {"enabled": True, "provider": "gemini", "gemini": {"model": "g"}}}

    assert isinstance(build_reasoning_service_or_null(openai_cfg), OpenAIReasoningService)
    assert isinstance(build_reasoning_service_or_null(gemini_cfg), GeminiReasoningService)


def test_factory_falls_back_for_unknown_provider() -> None:
    config = {"reasoning": {"enabled": True, "provider": "oracle"}}

    assert isinstance(build_reasoning_service_or_null(config), NullReasoningService)
