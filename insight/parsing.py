"""Parse reasoning service bodies into Insight objects."""

from __future__ import annotations

import json

from insight.errors import MalformedResponse
from insight.models import Insight

INSIGHT_FIELDS = frozenset({"alert", "recommendation"})


def parse_insight(raw: object) -> Insight:
    """Parse a JSON body holding only ``alert`` and ``recommendation``.

    Each field may be a string, null, or absent. Any other shape raises
    MalformedResponse so that no partial result is ever applied.
    """

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedResponse("response is not UTF-8 text", raw=repr(raw)) from exc
    if raw is not None and not isinstance(raw, str):
        raise MalformedResponse(
            f"response body is a {type(raw).__name__}, expected text", raw=repr(raw)
        )
    if raw is None or not raw.strip():
        raise MalformedResponse("empty reasoning response", raw=raw)
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"response is not JSON: {exc.msg}", raw=raw) from exc
    if not isinstance(payload, dict):
        raise MalformedResponse(
            f"response is a {type(payload).__name__}, expected an object", raw=raw
        )

    unexpected = sorted(set(payload) - INSIGHT_FIELDS)
    if unexpected:
        raise MalformedResponse(f"unexpected fields: {', '.join(unexpected)}", raw=raw)

    values: dict[str, str | None] = {}
    for name in INSIGHT_FIELDS:
        value = payload.get(name)
        if value is not None and not isinstance(value, str):
            raise MalformedResponse(
                f"field {name!r} must be a string or null, got {type(value).__name__}",
                raw=raw,
            )
        values[name] = value
    return Insight(alert=values["alert"], recommendation=values["recommendation"])
