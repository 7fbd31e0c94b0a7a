"""HTML and plain-text renderers for rich-text nodes."""

import html
from typing import Any

from content_l10n.richtext.nodes import (
    BLOCK_TYPES,
    EMBEDDED_ASSET,
    EMBEDDED_ENTRY,
    EMBEDDED_RESOURCE,
    HR,
    HYPERLINK,
    LINK_TYPES,
    TEXT,
)

MARK_TAGS: dict[str, str] = {
    "bold": "b",
    "italic": "i",
    "underline": "u",
    "code": "code",
    "superscript": "sup",
    "subscript": "sub",
    "strikethrough": "s",
}

BLOCK_TAGS: dict[str, str] = {
    "paragraph": "p",
    "heading-1": "h1",
    "heading-2": "h2",
    "heading-3": "h3",
    "heading-4": "h4",
    "heading-5": "h5",
    "heading-6": "h6",
    "ordered-list": "ol",
    "unordered-list": "ul",
    "list-item": "li",
    "blockquote": "blockquote",
    "table": "table",
    "table-row": "tr",
    "table-cell": "td",
    "table-header-cell": "th",
}


class RichTextRenderer:
    """Renders rich-text nodes to HTML and to plain text.

    Marks are nested so that the first mark in a text node's ``marks``
    list is the outermost tag. Inline references render as ``<span>``
    elements carrying ``data-node-type``, ``data-target-id`` and
    ``data-link-type`` so the HTML parser can rebuild them.
    """

    def to_markup(self, node: dict[str, Any]) -> str:
        node_type = node.get("nodeType")

        if node_type == TEXT:
            return self._render_text(node)
        if node_type in (EMBEDDED_ENTRY, EMBEDDED_ASSET, EMBEDDED_RESOURCE):
            return ""
        if node_type == HR:
            return "<hr/>"

        inner = "".join(
            self.to_markup(child)
            for child in node.get("content") or []
            if isinstance(child, dict)
        )

        if node_type in BLOCK_TAGS:
            tag = BLOCK_TAGS[node_type]
            return f"<{tag}>{inner}</{tag}>"
        if node_type == HYPERLINK:
            uri = html.escape(str((node.get("data") or {}).get("uri", "")))
            return f'<a href="{uri}">{inner}</a>'
        if node_type in LINK_TYPES:
            return self._render_link(node, inner)
        return inner

    def to_plain_text(self, node: dict[str, Any]) -> str:
        if node.get("nodeType") == TEXT:
            return str(node.get("value", ""))

        parts: list[str] = []
        previous_is_block = False
        for child in node.get("content") or []:
            if not isinstance(child, dict):
                continue
            is_block = child.get("nodeType") in BLOCK_TYPES
            if parts and is_block and previous_is_block:
                parts.append(" ")
            parts.append(self.to_plain_text(child))
            previous_is_block = is_block
        return "".join(parts)

    def _render_text(self, node: dict[str, Any]) -> str:
        value = html.escape(str(node.get("value", "")), quote=False)
        value = value.replace("\n", "<br/>")
        for mark in reversed(node.get("marks") or []):
            tag = MARK_TAGS.get(mark.get("type", ""))
            if tag:
                value = f"<{tag}>{value}</{tag}>"
        return value

    def _render_link(self, node: dict[str, Any], inner: str) -> str:
        sys = ((node.get("data") or {}).get("target") or {}).get("sys") or {}
        target_id = html.escape(str(sys.get("id") or sys.get("urn") or ""))
        link_type = html.escape(str(sys.get("linkType") or ""))
        return (
            f'<span data-node-type="{node["nodeType"]}" '
            f'data-target-id="{target_id}" data-link-type="{link_type}">'
            f"{inner}</span>"
        )
