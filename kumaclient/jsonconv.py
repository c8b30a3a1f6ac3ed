"""Conversion between model objects and plain JSON-compatible structures."""

from __future__ import annotations

import json
from typing import Any


def _default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _round_trip(value: Any) -> Any:
    try:
        text = json.dumps(value, default=_default, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"marshal source: {exc}") from exc
    return json.loads(text)


def to_json_object(value: Any) -> dict[str, Any]:
    """Return ``value`` as a fresh JSON object (a dict of plain values).

    Objects providing ``to_dict`` are serialized through it. Raises
    ``ValueError`` if the value cannot be serialized or is not an object.
    """
    result = _round_trip(value)
    if not isinstance(result, dict):
        raise ValueError(
            f"unmarshal to map: expected a JSON object, got {type(result).__name__}"
        )
    return result


def convert(data: Any, target: type) -> Any:
    """Convert ``data`` into an instance of ``target`` through its JSON form.

    ``target`` must provide a ``from_dict`` class method.
    """
    from_dict = getattr(target, "from_dict", None)
    if not callable(from_dict):
        raise TypeError(f"{target!r} cannot be built from a JSON object")
    normalized = _round_trip(data)
    try:
        return from_dict(normalized)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"unmarshal to struct: {exc}") from exc