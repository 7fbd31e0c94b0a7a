"""Entry graph walker: discovers entries that carry translatable content."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from content_l10n.extraction.segmenter import DocumentSegmenter
from content_l10n.models.entry import Entry, FieldKind, as_entry, is_entry_like, is_entry_link
from content_l10n.models.resource import ResourceRecord
from content_l10n.richtext.nodes import embedded_target
from content_l10n.richtext.traversal import iter_embedded_entries

logger = logging.getLogger(__name__)


class WalkResult(BaseModel):
    """Resources found by one walk and the entries behind them."""

    resources: list[ResourceRecord] = Field(default_factory=list)
    entries: dict[str, Entry] = Field(default_factory=dict)  # keyed by resource id


class _WalkState:
    """Per-walk bookkeeping; never shared between walks."""

    def __init__(self, index: dict[str, Entry]) -> None:
        self.index = index  # entry id -> Entry, for resolving links
        self.verdicts: dict[str, bool] = {}  # resource id -> qualifies
        self.registered: dict[str, Entry] = {}


class EntryGraphWalker:
    """Walks root entries depth-first and registers every entry with
    localizable content as its own resource.

    Nested entries are evaluated before their parent finishes, and each
    entry is evaluated at most once per walk (by composite id), so shared
    references produce a single resource. Entries tagged with a
    do-not-translate tag are neither registered nor expanded.

    Args:
        whitelist: Content type id -> localized field names.
        dnt_tags: Tag ids that exclude an entry from translation.
        source_locale: Locale holding the source text.
        project: Project identifier stamped on resource records.
        resource_format: Format tag stamped on resource records.
        content_types: Root content types to walk; empty means all.
        component_attributes: Component attributes that carry text.
        segmenter: DocumentSegmenter used to test rich text for content.
    """

    def __init__(
        self,
        whitelist: Mapping[str, Sequence[str]],
        dnt_tags: Iterable[str] = (),
        *,
        source_locale: str = "en-US",
        project: str = "",
        resource_format: str = "MNFv1",
        content_types: Iterable[str] = (),
        component_attributes: Sequence[str] = ("title", "placeholder"),
        segmenter: DocumentSegmenter | None = None,
    ) -> None:
        self._whitelist = whitelist
        self._dnt_tags = frozenset(dnt_tags)
        self._source_locale = source_locale
        self._project = project
        self._resource_format = resource_format
        self._content_types = frozenset(content_types)
        self._component_attributes = tuple(component_attributes)
        self._segmenter = segmenter or DocumentSegmenter()

    def walk(self, root_entries: Iterable[Entry | dict[str, Any]]) -> WalkResult:
        """Walk the given root entries.

        Args:
            root_entries: Entries as raw JSON or Entry objects.

        Returns:
            WalkResult with resources sorted by id.
        """
        roots = [as_entry(raw, self._source_locale) for raw in root_entries]
        state = _WalkState(index={entry.id: entry for entry in roots})

        for entry in roots:
            if self._content_types and entry.content_type not in self._content_types:
                logger.debug("Root %s not in content type whitelist", entry.resource_id)
                continue
            self._visit(entry, state)

        resources = sorted(
            (self._make_record(entry) for entry in state.registered.values()),
            key=lambda record: record.id,
        )
        logger.info("Found %d translatable resources", len(resources))
        return WalkResult(resources=resources, entries=dict(state.registered))

    def _visit(self, entry: Entry, state: _WalkState) -> bool:
        """Evaluate an entry once per walk and register it if it qualifies."""
        resource_id = entry.resource_id
        if resource_id in state.verdicts:
            return state.verdicts[resource_id]

        dnt = self._dnt_tags.intersection(entry.tags)
        if dnt:
            logger.debug("DNT: %s (%s)", resource_id, ", ".join(sorted(dnt)))
            state.verdicts[resource_id] = False
            return False

        # Provisional verdict breaks reference cycles
        state.verdicts[resource_id] = False
        qualifies = self._has_localizable_content(entry, state)
        state.verdicts[resource_id] = qualifies

        if qualifies:
            state.registered[resource_id] = entry
        return qualifies

    def _visit_value(self, value: Any, state: _WalkState) -> bool:
        """Visit a nested entry given as resolved JSON or as a link."""
        if is_entry_link(value):
            entry_id = value["sys"].get("id")
            linked = state.index.get(entry_id)
            if linked is None:
                logger.debug("Unresolved entry link %s", entry_id)
                return False
            return self._visit(linked, state)

        try:
            entry = as_entry(value, self._source_locale)
        except ValueError:
            logger.warning("Skipping nested entry without id")
            return False
        return self._visit(entry, state)

    def _has_localizable_content(self, entry: Entry, state: _WalkState) -> bool:
        localized = set(self._whitelist.get(entry.content_type, ()))
        has_content = False

        for name, kind in entry.kinds.items():
            value = entry.source_value(name)

            if kind is FieldKind.TEXT:
                if name in localized and value:
                    has_content = True
            elif kind is FieldKind.ENTRY:
                self._visit_value(value, state)
            elif kind is FieldKind.ENTRY_LIST:
                for item in value:
                    if is_entry_like(item):
                        self._visit_value(item, state)
            elif kind is FieldKind.COMPONENT_LIST:
                if name in localized and any(
                    self._component_has_text(item) for item in value
                ):
                    has_content = True
            elif kind is FieldKind.RICH_TEXT:
                for embed in iter_embedded_entries(value):
                    target = embedded_target(embed)
                    if target is not None and self._visit_value(target, state):
                        has_content = True
                if name in localized and self._segmenter.segment(
                    value, name, entry.id, []
                ):
                    has_content = True
            elif kind is FieldKind.TEXT_LIST and name in localized:
                logger.debug("Skipping string list %s.%s", entry.resource_id, name)
            elif kind is FieldKind.UNKNOWN and name in localized:
                logger.warning(
                    "Unrecognized value in %s.%s (%s); skipped",
                    entry.resource_id,
                    name,
                    type(value).__name__,
                )

        return has_content

    def _component_has_text(self, item: Any) -> bool:
        return isinstance(item, dict) and any(
            item.get(attr) for attr in self._component_attributes
        )

    def _make_record(self, entry: Entry) -> ResourceRecord:
        return ResourceRecord(
            id=entry.resource_id,
            source_lang=self._source_locale,
            project=self._project,
            modified=entry.updated_at,
            resource_format=self._resource_format,
        )


def list_translatable_resources(
    root_entries: Iterable[Entry | dict[str, Any]],
    whitelist: Mapping[str, Sequence[str]],
    dnt_tags: Iterable[str] = (),
    **options: Any,
) -> list[ResourceRecord]:
    """Return the sorted, deduplicated resource records for a set of roots.

    Args:
        root_entries: Root entries as raw JSON or Entry objects.
        whitelist: Content type id -> localized field names.
        dnt_tags: Do-not-translate tag ids.
        **options: Extra EntryGraphWalker keyword arguments.

    Returns:
        ResourceRecords sorted by composite id.
    """
    return EntryGraphWalker(whitelist, dnt_tags, **options).walk(root_entries).resources
