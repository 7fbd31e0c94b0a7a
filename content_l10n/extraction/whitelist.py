"""Localized-field whitelist built from content-type schemas."""

from collections.abc import Iterable
from typing import Any


def localized_fields(content_types: Iterable[dict[str, Any]]) -> dict[str, list[str]]:
    """Map each content type id to the ids of its localized fields.

    Args:
        content_types: Content-type JSON objects with ``sys.id`` and a
                       ``fields`` list of ``{"id", "localized"}`` items.

    Returns:
        Dict of content type id to field ids, in schema order.
    """
    whitelist: dict[str, list[str]] = {}
    for content_type in content_types:
        type_id = (content_type.get("sys") or {}).get("id")
        if not type_id:
            continue
        whitelist[type_id] = [
            field["id"]
            for field in content_type.get("fields") or []
            if field.get("localized") and field.get("id")
        ]
    return whitelist
