"""OpenAI chat-completions backed reasoning service."""

from __future__ import annotations

import json
import os
from typing import Any
from urllib import request

from core.logging import logger as LOGGER

from services.reasoning.service import (
    SYSTEM_INSTRUCTIONS,
    ReasoningService,
    build_insight_prompt,
)
from telemetry.snapshot import TelemetrySnapshot


OPENAI_CHAT_ENDPOINT = "https://api.openai.com/v1/chat/completions"


class OpenAIReasoningService(ReasoningService):
    """Request a JSON alert/recommendation pair from the chat completions API."""

    def __init__(
        self,
        *,
        model: str = "gpt-4o-mini",
        timeout_s: float = 30.0,
        max_tokens: int = 300,
        temperature: float = 0.2,
        api_key: str | None = None,
        endpoint: str = OPENAI_CHAT_ENDPOINT,
    ) -> None:
        self._api_key = (api_key if api_key is not None else os.getenv("OPENAI_API_KEY", "")).strip()
        self._model = model
        self._timeout_s = max(1.0, float(timeout_s))
        self._max_tokens = max(32, int(max_tokens))
        self._temperature = float(temperature)
        self._endpoint = endpoint

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def request_insight(self, snapshot: TelemetrySnapshot, trend_context: str) -> str | None:
        if not self._api_key:
            LOGGER.warning("[Reasoning] OPENAI_API_KEY missing; skipping insight request.")
            return None
        prompt = build_insight_prompt(snapshot, trend_context)
        LOGGER.debug("[Reasoning] Requesting insight from model=%s.", self._model)
        return self._chat_call(self._build_payload(prompt))

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_INSTRUCTIONS},
                {"role": "user", "content": prompt},
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
            "response_format": {"type": "json_object"},
        }

    def _chat_call(self, payload: dict[str, Any]) -> str | None:
        data = json.dumps(payload).encode("utf-8")
        req = request.Request(
            self._endpoint,
            data=data,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            method="POST",
        )
        with request.urlopen(req, timeout=self._timeout_s) as response:
            body = response.read().decode("utf-8")
        return self._extract_text(json.loads(body))

    def _extract_text(self, response_payload: dict[str, Any]) -> str | None:
        choices = response_payload.get("choices") or []
        if not choices:
            return None
        content = (choices[0].get("message") or {}).get("content")
        if not isinstance(content, str) or not content.strip():
            return None
        return content.strip()
