"""Change detection between original and reinserted field structures."""

from collections.abc import Mapping
from typing import Any


def changed_fields(original: Mapping[str, Any], updated: Mapping[str, Any]) -> list[str]:
    """List field names whose locale maps differ.

    Comparison is deep and ignores key order, so an added locale key is a
    change while reordered keys are not.

    Args:
        original: Field structure before reinsertion.
        updated: Field structure after reinsertion.

    Returns:
        Sorted names of fields that differ.
    """
    names = set(original) | set(updated)
    return sorted(name for name in names if original.get(name) != updated.get(name))


def needs_write_back(original: Mapping[str, Any], updated: Mapping[str, Any]) -> bool:
    """Return True when ``updated`` differs structurally from ``original``."""
    return bool(changed_fields(original, updated))
