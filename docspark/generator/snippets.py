"""JSX usage snippets and human-readable titles for variant examples."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Sequence

from ..models import PropMetadata

DEFAULT_TITLE = "Default"


def render_code_snippet(component_name: str, props: Mapping[str, Any]) -> str:
    """Render ``props`` as a JSX element; ``children`` becomes nested text."""
    attributes = []
    for name, value in props.items():
        if name == "children":
            continue
        attribute = _format_attribute(name, value)
        if attribute:
            attributes.append(attribute)

    attrs = " " + " ".join(attributes) if attributes else ""
    children = props.get("children")
    if children:
        text = children if isinstance(children, str) else _to_json(children)
        return f"<{component_name}{attrs}>\n  {text}\n</{component_name}>"
    return f"<{component_name}{attrs} />"


def render_title(
    component_props: Mapping[str, PropMetadata],
    props: Mapping[str, Any],
    axes: Sequence[str],
) -> str:
    if not axes:
        return DEFAULT_TITLE
    for axis in axes:
        meta = component_props.get(axis)
        if meta is not None and meta.display_template:
            return apply_display_template(meta.display_template, props, axes)
    return " ".join(f'{axis}="{_display(props.get(axis))}"' for axis in axes)


def apply_display_template(template: str, props: Mapping[str, Any], axes: Sequence[str]) -> str:
    """Replace each ``{axis}`` placeholder once with the capitalised axis value."""
    result = template
    for axis in axes:
        value = props.get(axis)
        if value is None:
            continue
        text = _display(value)
        result = result.replace(f"{{{axis}}}", text[:1].upper() + text[1:], 1)
    return result


def _format_attribute(name: str, value: Any) -> Optional[str]:
    if isinstance(value, str):
        return f'{name}="{value}"'
    if isinstance(value, bool):
        return name if value else None
    # Numbers, arrays and objects are all JSX expressions.
    return f"{name}={{{_to_json(value)}}}"


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "undefined"
    return str(value)


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


__all__ = ["DEFAULT_TITLE", "apply_display_template", "render_code_snippet", "render_title"]
