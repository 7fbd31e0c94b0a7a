"""Tests for per-entry segment extraction."""

import json

import pytest

from content_l10n.extraction.extractor import SegmentExtractor, extract_segments
from content_l10n.models.entry import Entry

WHITELIST = {"page": ["title", "body", "form", "count", "location", "keywords"]}


def _entry(entry_id: str, fields: dict, content_type: str = "page") -> Entry:
    return Entry.from_raw({
        "sys": {"id": entry_id, "contentType": {"sys": {"id": content_type}}},
        "fields": {name: {"en-US": value} for name, value in fields.items()},
    })


def _document(*values: str) -> dict:
    return {
        "nodeType": "document",
        "data": {},
        "content": [
            {
                "nodeType": "paragraph",
                "data": {},
                "content": [{"nodeType": "text", "value": value, "marks": [], "data": {}}],
            }
            for value in values
        ],
    }


@pytest.fixture
def extractor() -> SegmentExtractor:
    return SegmentExtractor(WHITELIST)


class TestSegmentExtractor:
    def test_plain_text_scenario(self) -> None:
        raw = {
            "sys": {"id": "42", "contentType": {"sys": {"id": "page"}}},
            "fields": {"title": {"en-US": "Hello"}},
        }
        payload = extract_segments(raw, {"page": ["title"]})
        assert payload is not None
        assert json.loads(payload.to_json()) == {
            "segments": [
                {"sid": "title", "str": "Hello", "nid": "42", "mf": "text", "nstr": ["Hello"]}
            ]
        }

    def test_skips_fields_outside_whitelist(self, extractor: SegmentExtractor) -> None:
        entry = _entry("42", {"title": "Hello", "slug": "hello"})
        payload = extractor.extract(entry)
        assert payload is not None
        assert [s.sid for s in payload.segments] == ["title"]

    def test_components(
        self, extractor: SegmentExtractor, caplog: pytest.LogCaptureFixture
    ) -> None:
        form = [
            {"fieldName": "email", "title": "Email", "placeholder": "you@example.com"},
            {"fieldName": "submit", "type": "button"},
            {"fieldName": "name", "title": "Name"},
            {"title": "No id"},
            "not-a-component",
        ]
        payload = extractor.extract(_entry("42", {"form": form}))
        assert payload is not None
        assert [(s.sid, s.text, s.mf) for s in payload.segments] == [
            ("email-title", "Email", "text"),
            ("email-placeholder", "you@example.com", "text"),
            ("name-title", "Name", "text"),
        ]
        assert "has no fieldName" in caplog.text

    def test_custom_component_attributes(self) -> None:
        extractor = SegmentExtractor(
            WHITELIST, component_attributes=["label"], component_id_key="id"
        )
        form = [{"id": "email", "label": "Email", "title": "ignored"}]
        payload = extractor.extract(_entry("42", {"form": form}))
        assert payload is not None
        assert [s.sid for s in payload.segments] == ["email-label"]

    def test_rich_text_delegates_to_segmenter(self, extractor: SegmentExtractor) -> None:
        entry = _entry("42", {"body": _document("One", "Two")})
        payload = extractor.extract(entry)
        assert payload is not None
        assert [(s.sid, s.text, s.mf) for s in payload.segments] == [
            ("body-0", "<p>One</p>", "html"),
            ("body-1", "<p>Two</p>", "html"),
        ]

    def test_field_order_preserved(self, extractor: SegmentExtractor) -> None:
        entry = _entry(
            "42",
            {
                "body": _document("Body"),
                "title": "Title",
                "form": [{"fieldName": "q", "title": "Question"}],
            },
        )
        payload = extractor.extract(entry)
        assert payload is not None
        assert [s.sid for s in payload.segments] == ["body-0", "title", "q-title"]

    def test_all_segments_owned_by_entry(self, extractor: SegmentExtractor) -> None:
        entry = _entry("42", {"title": "Hi", "body": _document("One")})
        payload = extractor.extract(entry)
        assert payload is not None
        assert {s.nid for s in payload.segments} == {"42"}

    def test_nothing_to_translate_returns_none(
        self, extractor: SegmentExtractor, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level("INFO")
        entry = _entry(
            "42",
            {"title": "", "count": 5, "body": _document(""), "form": [], "slug": "x"},
        )
        assert extractor.extract(entry) is None
        assert "no translatable content" in caplog.text

    def test_unknown_content_type_returns_none(self, extractor: SegmentExtractor) -> None:
        assert extractor.extract(_entry("1", {"title": "Hi"}, content_type="other")) is None

    def test_unrecognized_value_is_skipped(
        self, extractor: SegmentExtractor, caplog: pytest.LogCaptureFixture
    ) -> None:
        entry = _entry("42", {"title": "Hi", "location": {"lat": 1.0}})
        payload = extractor.extract(entry)
        assert payload is not None
        assert [s.sid for s in payload.segments] == ["title"]
        assert "Unrecognized value in page-42.location" in caplog.text

    def test_string_list_skipped_quietly(
        self, extractor: SegmentExtractor, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level("WARNING")
        entry = _entry("42", {"title": "Hi", "keywords": ["news", "sport"]})
        payload = extractor.extract(entry)
        assert payload is not None
        assert [s.sid for s in payload.segments] == ["title"]
        assert "Unrecognized value" not in caplog.text

    def test_duplicate_sids_keep_first(
        self, extractor: SegmentExtractor, caplog: pytest.LogCaptureFixture
    ) -> None:
        form = [
            {"fieldName": "email", "title": "Email"},
            {"fieldName": "email", "title": "Email again"},
        ]
        payload = extractor.extract(_entry("42", {"form": form}))
        assert payload is not None
        assert [(s.sid, s.text) for s in payload.segments] == [("email-title", "Email")]
        assert "Duplicate segment id email-title" in caplog.text

    def test_ids_are_deterministic(self, extractor: SegmentExtractor) -> None:
        entry = _entry(
            "42",
            {
                "title": "Hi",
                "body": _document("One", "", "Two"),
                "form": [{"fieldName": "q", "title": "Q", "placeholder": "P"}],
            },
        )
        first = extractor.extract(entry)
        second = extractor.extract(entry)
        assert first is not None and second is not None
        assert [s.sid for s in first.segments] == [s.sid for s in second.segments]
        assert first.to_json() == second.to_json()
