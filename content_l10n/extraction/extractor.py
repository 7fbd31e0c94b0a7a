"""Per-entry extraction of translatable segments."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from content_l10n.extraction.segmenter import DocumentSegmenter
from content_l10n.models.entry import Entry, FieldKind, as_entry
from content_l10n.models.resource import ResourcePayload
from content_l10n.models.segment import Segment, SegmentFormat

logger = logging.getLogger(__name__)


class SegmentExtractor:
    """Builds the ordered segment list of one entry.

    Dispatch per whitelisted field:
    1. Text: one ``text`` segment keyed by the field name
    2. Component list: ``{id}-{attribute}`` segments for each component
       attribute present on an element
    3. Rich text: ``html`` segments from the DocumentSegmenter, keyed
       ``{field}-{n}``

    Args:
        whitelist: Content type id -> localized field names.
        segmenter: DocumentSegmenter for rich-text fields.
        component_attributes: Component attributes that carry text.
        component_id_key: Component attribute holding the element id.
    """

    def __init__(
        self,
        whitelist: Mapping[str, Sequence[str]],
        *,
        segmenter: DocumentSegmenter | None = None,
        component_attributes: Sequence[str] = ("title", "placeholder"),
        component_id_key: str = "fieldName",
    ) -> None:
        self._whitelist = whitelist
        self._segmenter = segmenter or DocumentSegmenter()
        self._component_attributes = tuple(component_attributes)
        self._component_id_key = component_id_key

    def extract(self, entry: Entry) -> ResourcePayload | None:
        """Extract the segments of an entry.

        Args:
            entry: The entry to extract from.

        Returns:
            The payload, or None when the entry has nothing to translate.
        """
        localized = set(self._whitelist.get(entry.content_type, ()))
        if not localized:
            logger.debug("No localized fields for content type %s", entry.content_type)

        segments: list[Segment] = []
        for name in entry.fields:
            if name not in localized:
                continue

            kind = entry.kinds.get(name, FieldKind.UNKNOWN)
            value = entry.source_value(name)

            if kind is FieldKind.TEXT:
                if value:
                    segments.append(
                        Segment(sid=name, text=value, nid=entry.id, mf=SegmentFormat.TEXT)
                    )
            elif kind is FieldKind.COMPONENT_LIST:
                self._extract_components(entry, name, value, segments)
            elif kind is FieldKind.RICH_TEXT:
                self._segmenter.segment(value, name, entry.id, segments)
            elif kind is FieldKind.TEXT_LIST:
                logger.debug("Skipping string list %s.%s", entry.resource_id, name)
            elif kind is FieldKind.UNKNOWN:
                logger.warning(
                    "Unrecognized value in %s.%s (%s); skipped",
                    entry.resource_id,
                    name,
                    type(value).__name__,
                )

        segments = self._drop_duplicates(entry, segments)
        if not segments:
            logger.info("Skipping resource %s - no translatable content", entry.resource_id)
            return None

        return ResourcePayload(segments=segments)

    def _extract_components(
        self, entry: Entry, name: str, items: list[Any], segments: list[Segment]
    ) -> None:
        for item in items:
            if not isinstance(item, dict):
                continue
            attributes = [attr for attr in self._component_attributes if item.get(attr)]
            if not attributes:
                continue

            element_id = item.get(self._component_id_key)
            if not element_id:
                logger.warning(
                    "Component in %s.%s has no %s; skipped",
                    entry.resource_id,
                    name,
                    self._component_id_key,
                )
                continue

            for attr in attributes:
                segments.append(
                    Segment(
                        sid=f"{element_id}-{attr}",
                        text=str(item[attr]),
                        nid=entry.id,
                        mf=SegmentFormat.TEXT,
                    )
                )

    def _drop_duplicates(self, entry: Entry, segments: list[Segment]) -> list[Segment]:
        """Keep the first segment for each sid."""
        seen: set[str] = set()
        unique: list[Segment] = []
        for segment in segments:
            if segment.sid in seen:
                logger.warning("Duplicate segment id %s in %s", segment.sid, entry.resource_id)
                continue
            seen.add(segment.sid)
            unique.append(segment)
        return unique


def extract_segments(
    entry: Entry | dict[str, Any],
    whitelist: Mapping[str, Sequence[str]],
    **options: Any,
) -> ResourcePayload | None:
    """Extract the segment payload of one entry.

    Args:
        entry: Entry object or raw entry JSON.
        whitelist: Content type id -> localized field names.
        **options: Extra SegmentExtractor keyword arguments.

    Returns:
        The payload, or None when there is nothing to translate.
    """
    return SegmentExtractor(whitelist, **options).extract(as_entry(entry))
