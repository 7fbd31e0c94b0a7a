"""Rich-text node roles, rendering, parsing and shared traversal."""

from content_l10n.richtext.nodes import NodeRole, node_role
from content_l10n.richtext.parser import parse_html
from content_l10n.richtext.render import RichTextRenderer
from content_l10n.richtext.traversal import (
    BlockVisit,
    SegmentCursor,
    iter_block_leaves,
    iter_embedded_entries,
)

__all__ = [
    "BlockVisit",
    "NodeRole",
    "RichTextRenderer",
    "SegmentCursor",
    "iter_block_leaves",
    "iter_embedded_entries",
    "node_role",
    "parse_html",
]
