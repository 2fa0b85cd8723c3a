"""GraphQL filter expression building."""

import json
from collections.abc import Mapping
from typing import Any

# Filter options accepted per object kind, in emission order
FILTER_ALLOW_LIST: dict[str, tuple[str, ...]] = {
    "issue": (
        "since",
        "createdBy",
        "assignee",
        "mentioned",
        "labels",
        "milestone",
        "states",
    ),
    "pull_request": ("baseRefName", "headRefName", "labels", "states"),
}

# Status values the GraphQL grammar expects as bare enum literals
ENUM_LITERALS = ("OPEN", "CLOSED", "MERGED")


def _filter_value(value: Any) -> str | list[str] | None:
    """Turn a raw option value into a scalar or a list, or None to skip it."""
    if isinstance(value, str):
        if not value:
            return None
        tokens = value.split(",")
        return tokens if len(tokens) > 1 else value
    if isinstance(value, (list, tuple)):
        values = [str(v) for v in value]
        return values or None
    return None


def encode_filter_value(value: str | list[str]) -> str:
    """Encode a filter value as compact JSON with enum literals unquoted.

    Example:
        >>> encode_filter_value(["OPEN", "CLOSED"])
        '[OPEN,CLOSED]'
    """
    encoded = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    for literal in ENUM_LITERALS:
        encoded = encoded.replace(f'"{literal}"', literal)
    return encoded


def build_filter(spec: Mapping[str, Any], kind: str) -> str:
    """Build the filterBy expression for an issues or pull requests query.

    Args:
        spec: Filter options keyed by GraphQL argument name. Values are strings
            (comma-separated for several values) or lists of strings.
        kind: Object kind, 'issue' or 'pull_request'

    Returns:
        Concatenation of ``key:value,`` for every allow-listed key present in
        ``spec``, in allow-list order. Empty string if none is present.

    Example:
        >>> build_filter({"labels": "bug,docs", "states": "OPEN"}, "issue")
        'labels:["bug","docs"],states:OPEN,'
    """
    parts = []
    for key in FILTER_ALLOW_LIST.get(kind, ()):
        value = _filter_value(spec.get(key))
        if value is None:
            continue
        parts.append(f"{key}:{encode_filter_value(value)},")
    return "".join(parts)
