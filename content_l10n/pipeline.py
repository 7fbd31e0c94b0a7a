"""Source and target roles over already-fetched content."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from content_l10n.config import AppConfig
from content_l10n.extraction.extractor import SegmentExtractor
from content_l10n.extraction.segmenter import DocumentSegmenter
from content_l10n.extraction.walker import EntryGraphWalker
from content_l10n.extraction.whitelist import localized_fields
from content_l10n.models.entry import Entry, as_entry
from content_l10n.models.resource import ResourceRecord, TranslatedPayload
from content_l10n.reinsertion.engine import ReinsertionEngine, ReinsertionResult
from content_l10n.richtext.render import RichTextRenderer

logger = logging.getLogger(__name__)


class LocalizationPipeline:
    """Lists resources, serves their payloads, and applies translations.

    Fetching entries and writing them back are left to the caller: this
    class only transforms the JSON it is given.

    Args:
        config: Application configuration.
        renderer: Optional renderer shared by extraction and reinsertion.
    """

    def __init__(self, config: AppConfig, renderer: RichTextRenderer | None = None) -> None:
        self._config = config
        self._renderer = renderer or RichTextRenderer()
        self._whitelist: dict[str, list[str]] = {}
        self._entries: dict[str, Entry] = {}
        self._resources: list[ResourceRecord] = []

    @property
    def resources(self) -> list[ResourceRecord]:
        return list(self._resources)

    def load(
        self,
        entries: Iterable[dict[str, Any]],
        content_types: Iterable[dict[str, Any]],
    ) -> list[ResourceRecord]:
        """Index fetched entries and return the translatable resources.

        Args:
            entries: Entry JSON objects, all locales included.
            content_types: Content-type JSON objects.

        Returns:
            ResourceRecords sorted by id.
        """
        source = self._config.source
        self._whitelist = localized_fields(content_types)

        walker = EntryGraphWalker(
            self._whitelist,
            source.dnt_tags,
            source_locale=source.locale,
            project=source.project,
            resource_format=source.resource_format,
            content_types=source.content_types,
            component_attributes=source.component_attributes,
            segmenter=DocumentSegmenter(self._renderer),
        )
        result = walker.walk(entries)
        self._entries = result.entries
        self._resources = result.resources
        return self.resources

    def fetch_resource(self, resource_id: str) -> str | None:
        """Return the serialized segment payload of a listed resource.

        Args:
            resource_id: Composite ``{contentType}-{entryId}`` id.

        Returns:
            Payload JSON, or None when the entry has nothing to translate.

        Raises:
            KeyError: If the resource was not listed by ``load``.
        """
        entry = self._entries.get(resource_id)
        if entry is None:
            raise KeyError(f"Unknown resource: {resource_id}")

        payload = self._extractor().extract(entry)
        return payload.to_json() if payload is not None else None

    def iter_resources(self) -> Iterator[tuple[ResourceRecord, str]]:
        """Yield ``(record, payload)`` for every resource with segments."""
        for record in self._resources:
            payload = self.fetch_resource(record.id)
            if payload is not None:
                yield record, payload

    def commit_translated_resource(
        self,
        language: str,
        entry: Entry | dict[str, Any],
        translated: str | bytes,
    ) -> ReinsertionResult:
        """Apply a translated payload to an entry.

        Args:
            language: Translation language tag, mapped through
                      ``target.locale_map``.
            entry: The current entry, as fetched for update.
            translated: Translated ``{"segments": [...]}`` payload.

        Returns:
            ReinsertionResult; write back ``fields`` only when
            ``needs_write_back`` is True.
        """
        locale = self._config.target.locale_map.get(language, language)
        current = as_entry(entry, self._config.source.locale)
        units = TranslatedPayload.from_json(translated).segments

        result = self._engine().reinsert(current, locale, units)
        if result.needs_write_back:
            logger.info(
                "Updating %s (%s): %s",
                current.resource_id,
                locale,
                ", ".join(result.changed),
            )
        else:
            logger.debug("No change: %s", current.resource_id)
        return result

    def _extractor(self) -> SegmentExtractor:
        source = self._config.source
        return SegmentExtractor(
            self._whitelist,
            segmenter=DocumentSegmenter(self._renderer),
            component_attributes=source.component_attributes,
            component_id_key=source.component_id_key,
        )

    def _engine(self) -> ReinsertionEngine:
        source = self._config.source
        return ReinsertionEngine(
            self._whitelist or None,
            renderer=self._renderer,
            component_attributes=source.component_attributes,
            component_id_key=source.component_id_key,
            clear_stale_translations=self._config.target.clear_stale_translations,
        )
