"""
Text codec for cached values.

Cached values are JSON. JSON has no temporal type, so datetimes are tagged
before encoding and revived on decode:

    {"__type": "Date", "value": "2024-05-01T10:00:00+00:00"}

Only a closed set of node kinds is accepted: null, boolean, number, string,
datetime, sequence (list/tuple) and mapping (dict). Anything else is a
CodecError rather than a silently lossy string.

A caller-authored dict that happens to carry ``__type == "Date"`` and a
``value`` key is revived as a datetime. The tag is not escaped.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any

from .errors import CodecError

DATE_TAG = "Date"
TYPE_FIELD = "__type"
VALUE_FIELD = "value"


class NodeKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    TEMPORAL = "temporal"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: Any) -> NodeKind:
    if value is None:
        return NodeKind.NULL
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, datetime):
        return NodeKind.TEMPORAL
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    if isinstance(value, dict):
        return NodeKind.MAPPING
    raise CodecError(f"cannot cache value of type {type(value).__name__}")


def mark_dates(value: Any) -> Any:
    """Return a copy of ``value`` with every datetime replaced by its tag."""
    kind = kind_of(value)
    if kind is NodeKind.TEMPORAL:
        return {TYPE_FIELD: DATE_TAG, VALUE_FIELD: value.isoformat()}
    if kind is NodeKind.SEQUENCE:
        return [mark_dates(item) for item in value]
    if kind is NodeKind.MAPPING:
        return {key: mark_dates(item) for key, item in value.items()}
    return value


def _revive(node: dict[str, Any]) -> Any:
    if node.get(TYPE_FIELD) != DATE_TAG or VALUE_FIELD not in node:
        return node
    raw = node[VALUE_FIELD]
    if not isinstance(raw, str):
        raise CodecError(f"tagged date has non-string value: {raw!r}")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise CodecError(f"tagged date is not ISO-8601: {raw!r}") from exc


def encode(value: Any) -> str:
    try:
        return json.dumps(mark_dates(value), ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise CodecError(f"cannot encode value for cache: {exc}") from exc


def decode(text: str | bytes) -> Any:
    # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
    try:
        return json.loads(text, object_hook=_revive)
    except (ValueError, RecursionError) as exc:
        raise CodecError(f"malformed cached payload: {exc}") from exc
