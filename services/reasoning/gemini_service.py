"""Gemini generateContent backed reasoning service."""

from __future__ import annotations

import json
import os
from typing import Any
from urllib import parse, request

from core.logging import logger as LOGGER

from services.reasoning.service import (
    SYSTEM_INSTRUCTIONS,
    ReasoningService,
    build_insight_prompt,
)
from telemetry.snapshot import TelemetrySnapshot


GEMINI_ENDPOINT_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)


def _api_key_from_env() -> str:
    return (os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip()


class GeminiReasoningService(ReasoningService):
    """Request a JSON alert/recommendation pair with a thinking budget."""

    def __init__(
        self,
        *,
        model: str = "gemini-2.5-pro",
        timeout_s: float = 60.0,
        thinking_budget: int = 16000,
        api_key: str | None = None,
    ) -> None:
        self._api_key = (api_key if api_key is not None else _api_key_from_env()).strip()
        self._model = model
        self._timeout_s = max(1.0, float(timeout_s))
        self._thinking_budget = max(0, int(thinking_budget))

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def request_insight(self, snapshot: TelemetrySnapshot, trend_context: str) -> str | None:
        if not self._api_key:
            LOGGER.warning("[Reasoning] GEMINI_API_KEY missing; skipping insight request.")
            return None
        prompt = build_insight_prompt(snapshot, trend_context)
        LOGGER.debug("[Reasoning] Requesting insight from model=%s.", self._model)
        return self._generate(self._build_payload(prompt))

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        generation_config: dict[str, Any] = {"responseMimeType": "application/json"}
        if self._thinking_budget:
            generation_config["thinkingConfig"] = {"thinkingBudget": self._thinking_budget}
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTIONS}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    def _generate(self, payload: dict[str, Any]) -> str | None:
        endpoint = GEMINI_ENDPOINT_TEMPLATE.format(model=parse.quote(self._model, safe=""))
        req = request.Request(
            endpoint,
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "x-goog-api-key": self._api_key,
                "Content-Type": "application/json",
            },
            method="POST",
        )
        with request.urlopen(req, timeout=self._timeout_s) as response:
            body = response.read().decode("utf-8")
        return self._extract_text(json.loads(body))

    def _extract_text(self, response_payload: dict[str, Any]) -> str | None:
        chunks: list[str] = []
        for candidate in response_payload.get("candidates") or []:
            for part in (candidate.get("content") or {}).get("parts") or []:
                if part.get("thought"):
                    continue
                text = part.get("text")
                if isinstance(text, str) and text.strip():
                    chunks.append(text.strip())
            if chunks:
                break
        return "".join(chunks) or None
