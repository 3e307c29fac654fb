"""Service modules for external collaborators."""

from services.reasoning import ReasoningService, build_reasoning_service_or_null

__all__ = ["ReasoningService", "build_reasoning_service_or_null"]
