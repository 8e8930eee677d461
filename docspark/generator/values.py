"""Literal parsing and default-value inference for generated examples."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from ..models import PropMetadata

DEFAULT_VALUES: Dict[str, Any] = {
    "string": "Example text",
    "number": 42,
    "children": "Button Text",
}

STRING_ARRAY_PLACEHOLDERS = ["Option 1", "Option 2", "Option 3"]
NUMBER_ARRAY_PLACEHOLDERS = [1, 2, 3]

_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_NODE_MARKERS = ("reactnode", "reactelement", "jsx.element", "children")


def parse_literal_value(value: str) -> Any:
    """Turn tag or default text into a value usable in an example.

    ``"true"``/``"false"`` become booleans and numeric text becomes a number;
    JSX-looking text (``<...>``) is returned untouched; anything else is
    trimmed and unquoted.
    """
    trimmed = value.strip()
    if trimmed.startswith("<") and trimmed.endswith(">"):
        return trimmed
    unquoted = _unquote(trimmed)
    if unquoted == "true":
        return True
    if unquoted == "false":
        return False
    number = _parse_number(unquoted)
    if number is not None:
        return number
    return unquoted


def infer_default_value(
    prop_name: str,
    meta: PropMetadata,
    default_values: Optional[Mapping[str, Any]] = None,
) -> Any:
    """Pick a representative value for a prop; the first matching rule wins."""
    defaults = default_values if default_values is not None else DEFAULT_VALUES
    if meta.example:
        return parse_literal_value(meta.example)
    if meta.default:
        return parse_literal_value(meta.default)
    if prop_name == "children":
        return defaults.get("children")

    type_text = (meta.type or "").lower()
    if _is_array_type(type_text):
        if "string" in type_text:
            return list(STRING_ARRAY_PLACEHOLDERS)
        if "number" in type_text:
            return list(NUMBER_ARRAY_PLACEHOLDERS)
        return []
    if "string" in type_text:
        return defaults.get("string")
    if "number" in type_text:
        return defaults.get("number")
    if "boolean" in type_text:
        return False
    if any(marker in type_text for marker in _NODE_MARKERS):
        return defaults.get("children")
    if meta.values:
        return meta.values[0]
    return None


def _is_array_type(type_text: str) -> bool:
    return type_text.endswith("[]") or type_text.startswith(("array<", "readonlyarray<", "readonly "))


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


def _parse_number(text: str) -> Optional[float | int]:
    if not _NUMBER.match(text):
        return None
    if any(marker in text for marker in ".eE"):
        return float(text)
    return int(text)


__all__ = [
    "DEFAULT_VALUES",
    "NUMBER_ARRAY_PLACEHOLDERS",
    "STRING_ARRAY_PLACEHOLDERS",
    "infer_default_value",
    "parse_literal_value",
]
