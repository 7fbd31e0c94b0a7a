"""Reinsertion of translated segments and change detection."""

from content_l10n.reinsertion.changes import changed_fields, needs_write_back
from content_l10n.reinsertion.engine import (
    ReinsertionEngine,
    ReinsertionResult,
    reinsert_translations,
)

__all__ = [
    "ReinsertionEngine",
    "ReinsertionResult",
    "changed_fields",
    "needs_write_back",
    "reinsert_translations",
]
