"""Tests for parsing reasoning bodies into insights."""

from __future__ import annotations

import pytest

from insight.errors import MalformedResponse
from insight.models import Insight
from insight.parsing import parse_insight


def test_parses_two_field_object() -> None:
    insight = parse_insight('{"alert":"Flux spike","recommendation":"Stabilize"}')

    assert insight == Insight(alert="Flux spike", recommendation="Stabilize")


def test_null_and_absent_fields_are_allowed() -> None:
    assert parse_insight('{"alert": null}') == Insight(alert=None, recommendation=None)
    assert parse_insight("{}") == Insight()


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "   ",
        "not json",
        "[1, 2]",
        '"just a string"',
        '{"alert": "x", "recommendation": "y", "confidence": 0.9}',
        '{"alert": ["x"]}',
        '{"recommendation": 42}',
        '```json\n{"alert": "x"}\n```',
        {"alert": "x", "recommendation": "y"},
        b"\xff\xfe",
    ],
)
def test_other_shapes_are_malformed(raw) -> None:
    with pytest.raises(MalformedResponse):
        parse_insight(raw)


def test_malformed_response_keeps_clipped_raw() -> None:
    raw = "x" * 500
    with pytest.raises(MalformedResponse) as excinfo:
        parse_insight(raw)

    assert excinfo.value.raw is not None
    assert len(excinfo.value.raw) <= 201


def test_utf8_bytes_body_is_decoded() -> None:
    assert parse_insight(b'{"alert": "x"}') == Insight(alert="x")
