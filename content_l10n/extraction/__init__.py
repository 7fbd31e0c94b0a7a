"""Extraction: graph walking, document segmentation and segment extraction."""

from content_l10n.extraction.extractor import SegmentExtractor, extract_segments
from content_l10n.extraction.segmenter import DocumentSegmenter
from content_l10n.extraction.walker import (
    EntryGraphWalker,
    WalkResult,
    list_translatable_resources,
)
from content_l10n.extraction.whitelist import localized_fields

__all__ = [
    "DocumentSegmenter",
    "EntryGraphWalker",
    "SegmentExtractor",
    "WalkResult",
    "extract_segments",
    "list_translatable_resources",
    "localized_fields",
]
