"""Content entry model and field-kind classification."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FieldKind(str, Enum):
    """Shape of a field's source-locale value, decided once per entry."""

    TEXT = "text"
    ENTRY = "entry"
    ENTRY_LIST = "entry_list"
    COMPONENT_LIST = "component_list"
    RICH_TEXT = "rich_text"
    TEXT_LIST = "text_list"  # lists of plain strings, e.g. keywords
    SCALAR = "scalar"  # numbers, booleans
    MISSING = "missing"  # no value in the source locale
    UNKNOWN = "unknown"


def is_entry_link(value: Any) -> bool:
    """Return True for an unresolved ``{"sys": {"type": "Link", "linkType": "Entry"}}``."""
    if not isinstance(value, dict):
        return False
    sys = value.get("sys")
    return (
        isinstance(sys, dict)
        and sys.get("type") == "Link"
        and sys.get("linkType") == "Entry"
        and "fields" not in value
    )


def is_entry_like(value: Any) -> bool:
    """Return True for a resolved entry or an entry link."""
    if not isinstance(value, dict):
        return False
    return ("sys" in value and isinstance(value.get("fields"), dict)) or is_entry_link(
        value
    )


def is_document(value: Any) -> bool:
    """Return True for a rich-text node carrying a ``content`` list."""
    return (
        isinstance(value, dict)
        and "nodeType" in value
        and isinstance(value.get("content"), list)
    )


def classify_value(value: Any) -> FieldKind:
    """Classify one source-locale field value.

    Args:
        value: The raw JSON value of a field in the source locale.

    Returns:
        The FieldKind tag used for all later dispatch.
    """
    if value is None:
        return FieldKind.MISSING
    if isinstance(value, str):
        return FieldKind.TEXT
    if isinstance(value, (bool, int, float)):
        return FieldKind.SCALAR
    if isinstance(value, list):
        if any(is_entry_like(item) for item in value):
            return FieldKind.ENTRY_LIST
        if not value or any(isinstance(item, dict) for item in value):
            return FieldKind.COMPONENT_LIST
        if all(isinstance(item, str) for item in value):
            return FieldKind.TEXT_LIST
        return FieldKind.UNKNOWN
    if is_document(value):
        return FieldKind.RICH_TEXT
    if is_entry_like(value):
        return FieldKind.ENTRY
    return FieldKind.UNKNOWN


class Entry(BaseModel):
    """A node in the content graph.

    ``fields`` keeps the raw locale maps (``{name: {locale: value}}``);
    ``kinds`` holds the classification of each field's source-locale value.
    """

    id: str
    content_type: str
    updated_at: str | None = None
    tags: list[str] = Field(default_factory=list)
    fields: dict[str, dict[str, Any]] = Field(default_factory=dict)
    kinds: dict[str, FieldKind] = Field(default_factory=dict)
    source_locale: str = "en-US"

    @property
    def resource_id(self) -> str:
        """Composite id ``{contentType}-{entryId}``."""
        return f"{self.content_type}-{self.id}"

    def source_value(self, name: str) -> Any:
        """Return the source-locale value of a field, or None."""
        return self.fields.get(name, {}).get(self.source_locale)

    @classmethod
    def from_raw(cls, raw: dict[str, Any], source_locale: str = "en-US") -> Entry:
        """Build an Entry from its delivery/management API JSON.

        Args:
            raw: Entry JSON with ``sys``, ``fields`` and optional ``metadata``.
            source_locale: Locale whose values drive classification.

        Returns:
            A classified Entry.

        Raises:
            ValueError: If the JSON carries no ``sys.id``.
        """
        sys = raw.get("sys") or {}
        entry_id = sys.get("id")
        if not entry_id:
            raise ValueError(f"Entry has no sys.id: {sorted(raw.keys())}")

        content_type = ((sys.get("contentType") or {}).get("sys") or {}).get("id", "")

        tags: list[str] = []
        for tag in (raw.get("metadata") or {}).get("tags") or []:
            tag_sys = tag.get("sys") or {}
            if tag_sys.get("linkType") == "Tag" and tag_sys.get("id"):
                tags.append(tag_sys["id"])

        fields = {
            name: dict(locales) if isinstance(locales, dict) else {}
            for name, locales in (raw.get("fields") or {}).items()
        }
        kinds = {
            name: classify_value(locales.get(source_locale))
            for name, locales in fields.items()
        }

        return cls(
            id=entry_id,
            content_type=content_type,
            updated_at=sys.get("updatedAt"),
            tags=tags,
            fields=fields,
            kinds=kinds,
            source_locale=source_locale,
        )


def as_entry(value: Entry | dict[str, Any], source_locale: str = "en-US") -> Entry:
    """Return ``value`` as an Entry, building it from raw JSON if needed."""
    if isinstance(value, Entry):
        return value
    return Entry.from_raw(value, source_locale=source_locale)
