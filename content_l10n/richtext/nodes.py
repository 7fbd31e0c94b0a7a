"""Rich-text node types and their roles in segmentation."""

from enum import Enum
from typing import Any

DOCUMENT = "document"
PARAGRAPH = "paragraph"
HEADINGS = tuple(f"heading-{level}" for level in range(1, 7))
OL_LIST = "ordered-list"
UL_LIST = "unordered-list"
LIST_ITEM = "list-item"
HR = "hr"
QUOTE = "blockquote"
EMBEDDED_ENTRY = "embedded-entry-block"
EMBEDDED_ASSET = "embedded-asset-block"
EMBEDDED_RESOURCE = "embedded-resource-block"
TABLE = "table"
TABLE_ROW = "table-row"
TABLE_CELL = "table-cell"
TABLE_HEADER_CELL = "table-header-cell"

HYPERLINK = "hyperlink"
ENTRY_HYPERLINK = "entry-hyperlink"
ASSET_HYPERLINK = "asset-hyperlink"
RESOURCE_HYPERLINK = "resource-hyperlink"
EMBEDDED_ENTRY_INLINE = "embedded-entry-inline"
EMBEDDED_RESOURCE_INLINE = "embedded-resource-inline"

TEXT = "text"

BLOCK_TYPES: frozenset[str] = frozenset({
    DOCUMENT,
    PARAGRAPH,
    *HEADINGS,
    OL_LIST,
    UL_LIST,
    LIST_ITEM,
    HR,
    QUOTE,
    EMBEDDED_ENTRY,
    EMBEDDED_ASSET,
    EMBEDDED_RESOURCE,
    TABLE,
    TABLE_ROW,
    TABLE_CELL,
    TABLE_HEADER_CELL,
})

# Structural wrappers: never segmented themselves, their children are
CONTAINER_TYPES: frozenset[str] = frozenset({
    DOCUMENT,
    OL_LIST,
    UL_LIST,
    TABLE,
    TABLE_ROW,
    TABLE_CELL,
    TABLE_HEADER_CELL,
})

# Inline nodes that point at another entry or asset through data.target
LINK_TYPES: frozenset[str] = frozenset({
    ENTRY_HYPERLINK,
    ASSET_HYPERLINK,
    RESOURCE_HYPERLINK,
    EMBEDDED_ENTRY_INLINE,
    EMBEDDED_RESOURCE_INLINE,
})

EMBEDDED_ENTRY_TYPES: frozenset[str] = frozenset({EMBEDDED_ENTRY, EMBEDDED_ENTRY_INLINE})


class NodeRole(str, Enum):
    """How the segmentation traversal treats a node."""

    CONTAINER = "container"
    LEAF = "leaf"
    EMBEDDED = "embedded"
    INLINE = "inline"


def node_role(node: dict[str, Any]) -> NodeRole:
    """Classify a node for segmentation.

    Args:
        node: A rich-text node.

    Returns:
        EMBEDDED for block-level entry embeds, CONTAINER for structural
        wrappers, LEAF for every other block, INLINE for the rest.
    """
    node_type = node.get("nodeType")
    if node_type == EMBEDDED_ENTRY:
        return NodeRole.EMBEDDED
    if node_type in CONTAINER_TYPES:
        return NodeRole.CONTAINER
    if node_type in BLOCK_TYPES:
        return NodeRole.LEAF
    return NodeRole.INLINE


def embedded_target(node: dict[str, Any]) -> dict[str, Any] | None:
    """Return the entry (or entry link) referenced by an embed node."""
    target = (node.get("data") or {}).get("target")
    return target if isinstance(target, dict) else None
