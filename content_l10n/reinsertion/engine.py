"""Reinsertion of translated segments into a copy of an entry's fields."""

import copy
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from content_l10n.models.entry import Entry, FieldKind, as_entry
from content_l10n.models.segment import TranslationUnit
from content_l10n.reinsertion.changes import changed_fields
from content_l10n.richtext.nodes import BLOCK_TYPES, HEADINGS, PARAGRAPH, NodeRole
from content_l10n.richtext.parser import parse_html
from content_l10n.richtext.render import RichTextRenderer
from content_l10n.richtext.traversal import SegmentCursor, iter_block_leaves

logger = logging.getLogger(__name__)

# Leaves whose content is inline only; a translated wrapper block of another
# type is unwrapped into them
_INLINE_CONTENT_TYPES = frozenset({PARAGRAPH, *HEADINGS})


class ReinsertionResult(BaseModel):
    """Outcome of reinserting one entry's translations."""

    fields: dict[str, dict[str, Any]]
    needs_write_back: bool = False
    changed: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)  # sids without a translation


class ReinsertionEngine:
    """Writes translations into a deep copy of an entry's fields.

    The traversal mirrors SegmentExtractor field by field, and rich text
    is walked with the same ``iter_block_leaves`` traversal and running
    index as the DocumentSegmenter, so each translation lands on the
    node it was extracted from.

    Args:
        whitelist: Content type id -> localized field names. When None,
                   every field is considered.
        renderer: Renderer used to locate block-leaves.
        parser: Markup-to-document parser for translated HTML.
        component_attributes: Component attributes that carry text.
        component_id_key: Component attribute holding the element id.
        clear_stale_translations: Remove the target value of a localized
                                  field whose source value is absent.
    """

    def __init__(
        self,
        whitelist: Mapping[str, Sequence[str]] | None = None,
        *,
        renderer: RichTextRenderer | None = None,
        parser: Callable[[str], dict[str, Any]] = parse_html,
        component_attributes: Sequence[str] = ("title", "placeholder"),
        component_id_key: str = "fieldName",
        clear_stale_translations: bool = False,
    ) -> None:
        self._whitelist = whitelist
        self._renderer = renderer or RichTextRenderer()
        self._parser = parser
        self._component_attributes = tuple(component_attributes)
        self._component_id_key = component_id_key
        self._clear_stale = clear_stale_translations

    def reinsert(
        self, entry: Entry, language: str, units: Iterable[TranslationUnit]
    ) -> ReinsertionResult:
        """Apply translations for ``language`` to a copy of the entry's fields.

        Args:
            entry: The entry whose fields are translated. Not modified.
            language: Target locale key written into each field.
            units: Translated segments, matched to positions by sid.

        Returns:
            ReinsertionResult with the new fields and write-back decision.
        """
        fields = copy.deepcopy(entry.fields)
        lookup: dict[str, TranslationUnit] = {}
        for unit in units:
            lookup.setdefault(unit.sid, unit)

        if not lookup:
            logger.info("No translation for %s", entry.resource_id)
            return ReinsertionResult(fields=fields)

        localized = (
            set(self._whitelist.get(entry.content_type, ()))
            if self._whitelist is not None
            else None
        )
        missing: list[str] = []

        for name, locales in fields.items():
            if localized is not None and name not in localized:
                continue

            kind = entry.kinds.get(name, FieldKind.UNKNOWN)
            source = locales.get(entry.source_locale)

            if kind is FieldKind.TEXT:
                if not source:
                    continue
                unit = self._lookup(lookup, name, missing)
                if unit is not None:
                    locales[language] = unit.translated_text
            elif kind is FieldKind.COMPONENT_LIST:
                target = copy.deepcopy(source)
                locales[language] = target
                self._reinsert_components(target, lookup, missing)
            elif kind is FieldKind.RICH_TEXT:
                target = copy.deepcopy(source)
                locales[language] = target
                self.reinsert_document(target, name, lookup, missing)
            elif kind is FieldKind.MISSING and self._clear_stale and language in locales:
                logger.info(
                    "Clearing stale %s value of %s.%s", language, entry.resource_id, name
                )
                del locales[language]

        changed = changed_fields(entry.fields, fields)
        return ReinsertionResult(
            fields=fields,
            needs_write_back=bool(changed),
            changed=changed,
            missing=missing,
        )

    def reinsert_document(
        self,
        document: dict[str, Any],
        base_id: str,
        lookup: Mapping[str, TranslationUnit],
        missing: list[str],
        index: int = 0,
    ) -> int:
        """Replace the content of each translated block-leaf in place.

        Args:
            document: The cloned document to mutate.
            base_id: Segment id prefix, normally the field name.
            lookup: Translations keyed by sid.
            missing: Receives sids with no translation.
            index: First index, matching the segmenter's.

        Returns:
            The next unused index.
        """
        cursor = SegmentCursor(base_id=base_id, index=index)
        for visit in iter_block_leaves(document, self._renderer):
            if visit.role is not NodeRole.LEAF:
                continue
            sid = cursor.next_sid()
            unit = self._lookup(lookup, sid, missing)
            if unit is not None:
                self._replace_leaf(visit.node, visit.markup, unit)
        return cursor.index

    def _reinsert_components(
        self,
        items: list[Any],
        lookup: Mapping[str, TranslationUnit],
        missing: list[str],
    ) -> None:
        for item in items:
            if not isinstance(item, dict):
                continue
            element_id = item.get(self._component_id_key)
            if not element_id:
                continue
            for attr in self._component_attributes:
                if not item.get(attr):
                    continue
                unit = self._lookup(lookup, f"{element_id}-{attr}", missing)
                if unit is not None:
                    item[attr] = unit.translated_text

    def _replace_leaf(
        self, node: dict[str, Any], source_markup: str, unit: TranslationUnit
    ) -> None:
        markup = unit.to_markup()
        if markup == source_markup:
            return

        content = self._parser(markup).get("content") or []
        if len(content) == 1 and content[0].get("nodeType") in BLOCK_TYPES:
            wrapper = content[0]
            if (
                wrapper.get("nodeType") == node.get("nodeType")
                or node.get("nodeType") in _INLINE_CONTENT_TYPES
            ):
                content = wrapper.get("content") or []

        if not content:
            logger.warning("Translation for %s parsed to nothing; keeping source", unit.sid)
            return
        node["content"] = content

    def _lookup(
        self, lookup: Mapping[str, TranslationUnit], sid: str, missing: list[str]
    ) -> TranslationUnit | None:
        unit = lookup.get(sid)
        if unit is None:
            logger.info("No translation for segment %s", sid)
            missing.append(sid)
        return unit


def reinsert_translations(
    entry: Entry | dict[str, Any],
    language: str,
    units: Iterable[TranslationUnit | dict[str, Any]],
    **options: Any,
) -> ReinsertionResult:
    """Reinsert translations into a copy of an entry's fields.

    Args:
        entry: Entry object or raw entry JSON.
        language: Target locale key.
        units: TranslationUnits or their ``{"sid", "str", "nstr"}`` dicts.
        **options: Extra ReinsertionEngine keyword arguments.

    Returns:
        ReinsertionResult with the new fields and write-back decision.
    """
    parsed = [
        unit if isinstance(unit, TranslationUnit) else TranslationUnit.model_validate(unit)
        for unit in units
    ]
    return ReinsertionEngine(**options).reinsert(as_entry(entry), language, parsed)
