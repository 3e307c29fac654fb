"""Select the configured reasoning provider."""

from __future__ import annotations

from typing import Any

from core.logging import log_warning

from services.reasoning.gemini_service import GeminiReasoningService
from services.reasoning.openai_service import OpenAIReasoningService
from services.reasoning.service import NullReasoningService, ReasoningService


def build_reasoning_service_or_null(config: dict[str, Any]) -> ReasoningService:
    """Construct the configured provider when enabled; otherwise return the null service."""

    reasoning_cfg = config.get("reasoning") or {}
    if not bool(reasoning_cfg.get("enabled", False)):
        return NullReasoningService()
    provider = str(reasoning_cfg.get("provider") or "null").strip().lower()

    if provider == "openai":
        openai_cfg = reasoning_cfg.get("openai") or {}
        return OpenAIReasoningService(
            model=str(openai_cfg.get("model", "gpt-4o-mini")),
            timeout_s=float(openai_cfg.get("timeout_s", 30.0)),
            max_tokens=int(openai_cfg.get("max_tokens", 300)),
        )
    if provider == "gemini":
        gemini_cfg = reasoning_cfg.get("gemini") or {}
        return GeminiReasoningService(
            model=str(gemini_cfg.get("model", "gemini-2.5-pro")),
            timeout_s=float(gemini_cfg.get("timeout_s", 60.0)),
            thinking_budget=int(gemini_cfg.get("thinking_budget", 16000)),
        )

    if provider != "null":
        log_warning(f"[Reasoning] Unknown provider {provider!r}; using null service.")
    return NullReasoningService()
