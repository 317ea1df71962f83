"""
Tests for output — format negotiation and renderers
"""

import json

import pytest

from pkgdocs.output import (
    DEFAULT_FORMAT, OutputSpec, get_renderer, media_type_for,
    negotiate_format, parse_accept, render,
)


def make_spec(calls=None):
    """OutputSpec that records which shaper ran."""
    calls = calls if calls is not None else []

    def shaper(name, payload):
        def run():
            calls.append(name)
            return payload
        return run

    return OutputSpec(
        template="page",
        markup=shaper("markup", {"title": "<h1>T</h1>"}),
        structured=shaper("structured", {"name": "n", "_internal": 1, "items": [{"_x": 1, "y": 2}]}),
        text=shaper("text", ["line one", "line two"]),
    )


class TestNegotiateFormat:
    """Explicit request, then Accept, then default."""

    def test_default_when_nothing_requested(self):
        assert negotiate_format() == DEFAULT_FORMAT == "structured"

    @pytest.mark.parametrize("requested,expected", [
        ("markup", "markup"),
        ("html", "markup"),
        ("json", "structured"),
        ("structured", "structured"),
        ("text", "text"),
        ("PLAIN", "text"),
    ])
    def test_requested_aliases(self, requested, expected):
        assert negotiate_format(requested=requested) == expected

    def test_request_beats_accept(self):
        assert negotiate_format(requested="text", accept="text/html") == "text"

    def test_auto_defers_to_accept(self):
        assert negotiate_format(requested="auto", accept="text/html") == "markup"

    def test_unknown_request_raises(self):
        with pytest.raises(ValueError):
            negotiate_format(requested="xml")

    def test_accept_quality_order(self):
        accept = "text/html;q=0.5, text/plain;q=0.9, application/json;q=0.1"
        assert negotiate_format(accept=accept) == "text"

    def test_accept_skips_unknown_types(self):
        assert negotiate_format(accept="image/png, application/json") == "structured"

    def test_accept_wildcard_uses_default(self):
        assert negotiate_format(accept="*/*", default="markup") == "markup"

    def test_accept_nothing_usable(self):
        assert negotiate_format(accept="image/png", default="text") == "text"

    def test_invalid_default_falls_back(self):
        assert negotiate_format(default="auto") == "structured"


class TestParseAccept:

    def test_zero_quality_dropped(self):
        assert parse_accept("text/html;q=0, text/plain") == ["text/plain"]

    def test_ties_keep_header_order(self):
        assert parse_accept("text/plain, text/html") == ["text/plain", "text/html"]

    def test_bad_quality_treated_as_zero(self):
        assert parse_accept("text/html;q=abc") == []


class TestRenderers:
    """Exactly one shaper runs per render."""

    def test_markup_payload(self):
        calls = []
        payload = render(make_spec(calls), format="markup")
        assert payload == {"template": "page", "context": {"title": "<h1>T</h1>"}}
        assert calls == ["markup"]

    def test_structured_strips_internal_keys(self):
        calls = []
        payload = render(make_spec(calls), format="structured")
        assert json.loads(payload) == {"name": "n", "items": [{"y": 2}]}
        assert calls == ["structured"]

    def test_text_joins_lines(self):
        calls = []
        assert render(make_spec(calls), format="text") == "line one\nline two"
        assert calls == ["text"]

    def test_auto_renders_default(self):
        calls = []
        render(make_spec(calls))
        assert calls == ["structured"]

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            get_renderer("pdf")

    def test_media_types(self):
        assert media_type_for("markup") == "text/html"
        assert media_type_for("structured") == "application/json"
        assert media_type_for("text") == "text/plain"

    def test_text_none_is_empty(self):
        spec = OutputSpec(template="t", markup=dict, structured=list, text=lambda: None)
        assert render(spec, format="text") == ""
