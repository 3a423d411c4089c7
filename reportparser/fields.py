"""Typed lookups of dotted paths in a parsed JSON document."""

from typing import Any, NamedTuple, Optional

_MISSING = object()


def lookup(document: Any, path: str) -> Any:
    """
    Walk ``path`` (dot-separated keys) through nested objects.

    Returns:
        The value at the path, or ``None`` when a segment is missing, a
        segment is not an object, or the value itself is JSON ``null``
    """
    node = document
    for key in path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(key, _MISSING)
        if node is _MISSING:
            return None
    return node


def exists(document: Any, path: str) -> bool:
    return lookup(document, path) is not None


def get_string(document: Any, path: str) -> Optional[str]:
    value = lookup(document, path)
    return value if isinstance(value, str) else None


def get_float(document: Any, path: str) -> Optional[float]:
    value = lookup(document, path)
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class FieldSpec(NamedTuple):
    """One numeric field: its key in the point, its source path and its default.

    A ``default`` of ``None`` means the field is left out when absent.
    """

    key: str
    path: str
    default: Optional[float] = None


def extract_fields(document: Any, prefix: str, specs) -> dict:
    fields = {}
    for spec in specs:
        value = get_float(document, f"{prefix}.{spec.path}")
        if value is None:
            value = spec.default
        if value is not None:
            fields[spec.key] = value
    return fields
