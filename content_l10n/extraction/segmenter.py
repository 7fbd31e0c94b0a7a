"""Rich-text document segmenter."""

import logging
from typing import Any

from content_l10n.models.segment import Segment, SegmentFormat
from content_l10n.richtext.nodes import NodeRole
from content_l10n.richtext.render import RichTextRenderer
from content_l10n.richtext.traversal import SegmentCursor, iter_block_leaves

logger = logging.getLogger(__name__)


class DocumentSegmenter:
    """Emits one HTML segment per non-empty block-leaf of a document.

    Containers (lists, tables, rows, cells) only contribute their
    children. Entry embeds are left to the graph walker and consume no
    index.

    Args:
        renderer: Renderer for markup and plain text. Defaults to
                  RichTextRenderer.
    """

    def __init__(self, renderer: RichTextRenderer | None = None) -> None:
        self._renderer = renderer or RichTextRenderer()

    @property
    def renderer(self) -> RichTextRenderer:
        return self._renderer

    def segment(
        self,
        node: dict[str, Any],
        base_id: str,
        nid: str,
        segments: list[Segment],
        index: int = 0,
    ) -> int:
        """Append segments for every block-leaf under ``node``.

        Segment ids are ``{base_id}-{n}`` with ``n`` running across the
        whole traversal, starting at ``index``.

        Args:
            node: Document (or any node with ``content``) to segment.
            base_id: Segment id prefix, normally the field name.
            nid: Owning entry id.
            segments: List the new segments are appended to.
            index: First index to assign.

        Returns:
            The next unused index, for continuing numbering in a later call.
        """
        cursor = SegmentCursor(base_id=base_id, index=index)
        for visit in iter_block_leaves(node, self._renderer):
            if visit.role is NodeRole.EMBEDDED:
                logger.debug("Embedded entry under %s left to the graph walker", base_id)
                continue
            segments.append(
                Segment(
                    sid=cursor.next_sid(),
                    text=visit.markup,
                    nid=nid,
                    mf=SegmentFormat.HTML,
                )
            )
        return cursor.index
