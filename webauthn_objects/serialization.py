"""JSON renderings of ceremony object graphs."""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from fido2.utils import websafe_encode

from .codec import coerce_bytes, is_packed

__all__ = ["dumps", "make_json_safe"]


def make_json_safe(value: Any) -> Any:
    """Recursively convert bytes-like values into unpadded base64url text."""
    if isinstance(value, Mapping):
        return {key: make_json_safe(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [make_json_safe(item) for item in value]
    if not is_packed(value):
        return websafe_encode(coerce_bytes(value))
    return value


def dumps(graph: Mapping[str, Any], indent: Optional[int] = None) -> str:
    """Serialise ``graph`` as JSON text, preserving key order."""

    separators = None if indent is not None else (",", ":")
    return json.dumps(
        make_json_safe(graph),
        indent=indent,
        separators=separators,
        ensure_ascii=False,
    )
