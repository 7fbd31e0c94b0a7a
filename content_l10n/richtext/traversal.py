"""Shared block traversal for segmentation and reinsertion.

Both passes consume ``iter_block_leaves`` so they visit exactly the same
block-leaves in the same order, and number them with a ``SegmentCursor``.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from content_l10n.richtext.nodes import EMBEDDED_ENTRY_TYPES, NodeRole, node_role
from content_l10n.richtext.render import RichTextRenderer

logger = logging.getLogger(__name__)


@dataclass
class BlockVisit:
    """A node reached by the traversal.

    ``markup`` is the rendered HTML for leaves and empty for embeds.
    """

    node: dict[str, Any]
    role: NodeRole
    markup: str = ""


@dataclass
class SegmentCursor:
    """Running segment index for one field's traversal."""

    base_id: str
    index: int = 0

    def next_sid(self) -> str:
        sid = f"{self.base_id}-{self.index}"
        self.index += 1
        return sid


def iter_block_leaves(
    root: dict[str, Any], renderer: RichTextRenderer
) -> Iterator[BlockVisit]:
    """Yield segmentable leaves and entry embeds in document order.

    Containers and inline wrappers are descended into without being
    yielded. Leaves whose markup or plain text renders empty are skipped.

    Args:
        root: Node whose ``content`` is traversed.
        renderer: Renderer used to decide whether a leaf carries text.

    Yields:
        BlockVisit for each embed and each non-empty leaf.
    """
    for child in root.get("content") or []:
        if not isinstance(child, dict):
            continue
        role = node_role(child)
        if role is NodeRole.EMBEDDED:
            yield BlockVisit(node=child, role=role)
        elif role is NodeRole.LEAF:
            markup = renderer.to_markup(child)
            plain = renderer.to_plain_text(child)
            if markup and plain.strip():
                yield BlockVisit(node=child, role=role, markup=markup)
            else:
                logger.debug("Skipping empty %s node", child.get("nodeType"))
        elif child.get("content"):
            yield from iter_block_leaves(child, renderer)


def iter_embedded_entries(root: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield every entry embed node anywhere under ``root``, inline or block."""
    for child in root.get("content") or []:
        if not isinstance(child, dict):
            continue
        if child.get("nodeType") in EMBEDDED_ENTRY_TYPES:
            yield child
        if child.get("content"):
            yield from iter_embedded_entries(child)
