"""Reasoning boundary for insight requests."""

from services.reasoning.factory import build_reasoning_service_or_null
from services.reasoning.gemini_service import GeminiReasoningService
from services.reasoning.openai_service import OpenAIReasoningService
from services.reasoning.service import NullReasoningService, ReasoningService

__all__ = [
    "GeminiReasoningService",
    "NullReasoningService",
    "OpenAIReasoningService",
    "ReasoningService",
    "build_reasoning_service_or_null",
]
