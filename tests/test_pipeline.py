"""Tests for the localization pipeline facade."""

import copy
import json
from pathlib import Path

import pytest

from content_l10n.config import AppConfig, SourceConfig, TargetConfig
from content_l10n.extraction.whitelist import localized_fields
from content_l10n.pipeline import LocalizationPipeline

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def space() -> dict:
    return json.loads((FIXTURES_DIR / "sample_space.json").read_text(encoding="utf-8"))


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        source=SourceConfig(project="website", dnt_tags=["doNotTranslate"]),
        target=TargetConfig(locale_map={"fr": "fr-FR"}),
    )


@pytest.fixture
def pipeline(config: AppConfig, space: dict) -> LocalizationPipeline:
    pipeline = LocalizationPipeline(config)
    pipeline.load(space["items"], space["contentTypes"])
    return pipeline


def _home(space: dict) -> dict:
    return copy.deepcopy(next(i for i in space["items"] if i["sys"]["id"] == "home"))


class TestLocalizedFields:
    def test_whitelist_from_content_types(self, space: dict) -> None:
        assert localized_fields(space["contentTypes"]) == {
            "page": ["title", "body", "form"],
            "hero": ["heading"],
            "quote": ["text"],
            "settings": [],
        }

    def test_content_type_without_id_skipped(self) -> None:
        assert localized_fields([{"fields": [{"id": "a", "localized": True}]}]) == {}


class TestLoad:
    def test_resources(self, pipeline: LocalizationPipeline) -> None:
        assert [r.id for r in pipeline.resources] == ["hero-hero1", "page-home", "quote-q1"]

    def test_record_metadata(self, pipeline: LocalizationPipeline) -> None:
        record = pipeline.resources[1]
        assert record.model_dump(by_alias=True) == {
            "id": "page-home",
            "sourceLang": "en-US",
            "prj": "website",
            "modified": "2024-05-01T10:00:00.000Z",
            "resourceFormat": "MNFv1",
        }

    def test_without_dnt_tags(self, space: dict) -> None:
        pipeline = LocalizationPipeline(AppConfig())
        resources = pipeline.load(space["items"], space["contentTypes"])
        assert "quote-q2" in [r.id for r in resources]

    def test_root_content_type_filter(self, space: dict) -> None:
        config = AppConfig(source=SourceConfig(content_types=["quote"]))
        pipeline = LocalizationPipeline(config)
        resources = pipeline.load(space["items"], space["contentTypes"])
        assert [r.id for r in resources] == ["quote-q1", "quote-q2"]


class TestFetchResource:
    def test_page_payload(self, pipeline: LocalizationPipeline) -> None:
        payload = pipeline.fetch_resource("page-home")
        assert payload is not None
        segments = json.loads(payload)["segments"]
        assert [(s["sid"], s["str"], s["mf"]) for s in segments] == [
            ("title", "Welcome", "text"),
            ("body-0", "<p>Read our <b>story</b></p>", "html"),
            ("body-1", "<li><p>Fast</p></li>", "html"),
            ("email-title", "Email", "text"),
            ("email-placeholder", "you@example.com", "text"),
        ]
        assert all(s["nid"] == "home" for s in segments)
        assert all(s["nstr"] == [s["str"]] for s in segments)

    def test_nested_entry_payload(self, pipeline: LocalizationPipeline) -> None:
        payload = pipeline.fetch_resource("hero-hero1")
        assert payload is not None
        assert json.loads(payload) == {
            "segments": [
                {
                    "sid": "heading",
                    "str": "Fresh ideas",
                    "nid": "hero1",
                    "mf": "text",
                    "nstr": ["Fresh ideas"],
                }
            ]
        }

    def test_unknown_resource(self, pipeline: LocalizationPipeline) -> None:
        with pytest.raises(KeyError, match="quote-q2"):
            pipeline.fetch_resource("quote-q2")

    def test_iter_resources(self, pipeline: LocalizationPipeline) -> None:
        ids = [record.id for record, _ in pipeline.iter_resources()]
        assert ids == ["hero-hero1", "page-home", "quote-q1"]


class TestCommitTranslatedResource:
    def _translated(self) -> str:
        return json.dumps({
            "segments": [
                {"sid": "title", "str": "Bienvenue", "nstr": ["Bienvenue"]},
                {"sid": "body-0", "nstr": ["<p>Lisez notre <b>histoire</b></p>"]},
                {"sid": "email-title", "str": "Courriel"},
            ]
        })

    def test_applies_mapped_locale(self, pipeline: LocalizationPipeline, space: dict) -> None:
        result = pipeline.commit_translated_resource("fr", _home(space), self._translated())

        assert result.needs_write_back is True
        assert result.fields["title"]["fr-FR"] == "Bienvenue"
        paragraph = result.fields["body"]["fr-FR"]["content"][0]
        assert [t["value"] for t in paragraph["content"]] == ["Lisez notre ", "histoire"]
        assert result.fields["form"]["fr-FR"][0]["title"] == "Courriel"
        assert result.missing == ["body-1", "email-placeholder"]

    def test_non_localized_fields_untouched(
        self, pipeline: LocalizationPipeline, space: dict
    ) -> None:
        home = _home(space)
        result = pipeline.commit_translated_resource("fr", home, self._translated())
        assert result.fields["slug"] == home["fields"]["slug"]
        assert result.fields["hero"] == home["fields"]["hero"]

    def test_unmapped_language_passes_through(
        self, pipeline: LocalizationPipeline, space: dict
    ) -> None:
        result = pipeline.commit_translated_resource("de", _home(space), self._translated())
        assert result.fields["title"]["de"] == "Bienvenue"

    def test_accepts_bytes(self, pipeline: LocalizationPipeline, space: dict) -> None:
        data = self._translated().encode("utf-8")
        result = pipeline.commit_translated_resource("fr", _home(space), data)
        assert result.fields["title"]["fr-FR"] == "Bienvenue"

    def test_second_commit_is_a_no_op(
        self, pipeline: LocalizationPipeline, space: dict
    ) -> None:
        home = _home(space)
        first = pipeline.commit_translated_resource("fr", home, self._translated())
        home["fields"] = first.fields
        second = pipeline.commit_translated_resource("fr", home, self._translated())
        assert second.needs_write_back is False

    def test_empty_payload(self, pipeline: LocalizationPipeline, space: dict) -> None:
        home = _home(space)
        result = pipeline.commit_translated_resource("fr", home, '{"segments": []}')
        assert result.needs_write_back is False
        assert result.fields == home["fields"]

    def test_stale_values_cleared_when_configured(self, space: dict) -> None:
        config = AppConfig(target=TargetConfig(clear_stale_translations=True))
        pipeline = LocalizationPipeline(config)
        pipeline.load(space["items"], space["contentTypes"])

        home = _home(space)
        home["fields"]["title"] = {"fr": "Ancien titre"}
        result = pipeline.commit_translated_resource("fr", home, self._translated())
        assert result.fields["title"] == {}
