"""Extraction and reinsertion of translatable text in structured content."""

from content_l10n.extraction import (
    DocumentSegmenter,
    EntryGraphWalker,
    SegmentExtractor,
    extract_segments,
    list_translatable_resources,
    localized_fields,
)
from content_l10n.pipeline import LocalizationPipeline
from content_l10n.reinsertion import (
    ReinsertionEngine,
    ReinsertionResult,
    needs_write_back,
    reinsert_translations,
)

__all__ = [
    "DocumentSegmenter",
    "EntryGraphWalker",
    "LocalizationPipeline",
    "ReinsertionEngine",
    "ReinsertionResult",
    "SegmentExtractor",
    "extract_segments",
    "list_translatable_resources",
    "localized_fields",
    "needs_write_back",
    "reinsert_translations",
]
