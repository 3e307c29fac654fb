"""Failure types raised around the reasoning boundary."""

from __future__ import annotations


class InsightError(Exception):
    """Base class for reasoning request failures."""


class TransportFailure(InsightError):
    """The reasoning call raised, returned nothing usable, or timed out."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class MalformedResponse(InsightError):
    """The reasoning call returned a body that is not an alert/recommendation object."""

    def __init__(self, message: str, *, raw: str | None = None, limit: int = 200) -> None:
        super().__init__(message)
        if raw is not None and len(raw) > limit:
            raw = f"{raw[:limit]}…"
        self.raw = raw
