"""HTML-to-document parser used when reinserting translated markup."""

import logging
from typing import Any

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from content_l10n.richtext.nodes import BLOCK_TYPES, DOCUMENT, HR, HYPERLINK, PARAGRAPH, TEXT
from content_l10n.richtext.render import BLOCK_TAGS, MARK_TAGS

logger = logging.getLogger(__name__)

TAG_TO_BLOCK: dict[str, str] = {tag: node_type for node_type, tag in BLOCK_TAGS.items()}

TAG_TO_MARK: dict[str, str] = {tag: mark for mark, tag in MARK_TAGS.items()}
TAG_TO_MARK.update({"strong": "bold", "em": "italic", "del": "strikethrough"})

# Whitespace between children of these tags is formatting, not content
_STRUCTURAL_TAGS = frozenset({
    "[document]", "html", "body", "ul", "ol", "table", "thead", "tbody", "tr",
})


def parse_html(markup: str) -> dict[str, Any]:
    """Parse an HTML string into a rich-text document node.

    Unknown tags are unwrapped and their children kept. Each run of
    top-level text or inline nodes is gathered into a paragraph.

    Args:
        markup: HTML produced by translation of a rendered block.

    Returns:
        A ``document`` node; its content is empty for blank markup.
    """
    soup = BeautifulSoup(markup, "lxml")
    root = soup.body if soup.body is not None else soup
    content = _wrap_inline_runs(_convert_children(root, []))
    return {"nodeType": DOCUMENT, "data": {}, "content": content}


def _wrap_inline_runs(nodes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Group consecutive non-block nodes into paragraphs."""
    blocks: list[dict[str, Any]] = []
    run: list[dict[str, Any]] = []

    for node in nodes:
        if node["nodeType"] in BLOCK_TYPES:
            if run:
                blocks.append(_paragraph(run))
                run = []
            blocks.append(node)
        else:
            run.append(node)

    if run:
        blocks.append(_paragraph(run))
    return blocks


def _paragraph(content: list[dict[str, Any]]) -> dict[str, Any]:
    return {"nodeType": PARAGRAPH, "data": {}, "content": content}


def _convert_children(tag: Tag, marks: list[str]) -> list[dict[str, Any]]:
    nodes: list[dict[str, Any]] = []

    for child in tag.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            text = str(child)
            if not text or (not text.strip() and tag.name in _STRUCTURAL_TAGS):
                continue
            _append(nodes, _text_node(text, marks))
            continue
        if not isinstance(child, Tag):
            continue

        name = child.name
        if name == "br":
            _append(nodes, _text_node("\n", marks))
        elif name in TAG_TO_MARK:
            for node in _convert_children(child, marks + [TAG_TO_MARK[name]]):
                _append(nodes, node)
        elif name in TAG_TO_BLOCK:
            nodes.append({
                "nodeType": TAG_TO_BLOCK[name],
                "data": {},
                "content": _convert_children(child, []),
            })
        elif name == "hr":
            nodes.append({"nodeType": HR, "data": {}, "content": []})
        elif name == "a":
            nodes.append({
                "nodeType": HYPERLINK,
                "data": {"uri": child.get("href", "")},
                "content": _convert_children(child, marks),
            })
        elif name == "span" and child.get("data-node-type"):
            nodes.append(_link_node(child, marks))
        else:
            logger.debug("Unwrapping unsupported tag <%s>", name)
            for node in _convert_children(child, marks):
                _append(nodes, node)

    return nodes


def _text_node(value: str, marks: list[str]) -> dict[str, Any]:
    return {
        "nodeType": TEXT,
        "value": value,
        "marks": [{"type": mark} for mark in marks],
        "data": {},
    }


def _link_node(span: Tag, marks: list[str]) -> dict[str, Any]:
    node_type = str(span["data-node-type"])
    target_id = str(span.get("data-target-id", ""))
    link_type = str(span.get("data-link-type") or "Entry")

    if "resource" in node_type:
        sys = {"type": "ResourceLink", "linkType": link_type, "urn": target_id}
    else:
        sys = {"type": "Link", "linkType": link_type, "id": target_id}

    return {
        "nodeType": node_type,
        "data": {"target": {"sys": sys}},
        "content": _convert_children(span, marks),
    }


def _append(nodes: list[dict[str, Any]], node: dict[str, Any]) -> None:
    """Append a node, merging adjacent text nodes that carry the same marks."""
    if nodes and node["nodeType"] == TEXT:
        last = nodes[-1]
        if last["nodeType"] == TEXT and last["marks"] == node["marks"]:
            last["value"] += node["value"]
            return
    nodes.append(node)
