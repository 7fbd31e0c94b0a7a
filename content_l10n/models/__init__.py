"""Data models for the content localization pipeline."""

from content_l10n.models.entry import Entry, FieldKind, classify_value
from content_l10n.models.resource import (
    ResourcePayload,
    ResourceRecord,
    TranslatedPayload,
)
from content_l10n.models.segment import Segment, SegmentFormat, TranslationUnit

__all__ = [
    "Entry",
    "FieldKind",
    "ResourcePayload",
    "ResourceRecord",
    "Segment",
    "SegmentFormat",
    "TranslatedPayload",
    "TranslationUnit",
    "classify_value",
]
