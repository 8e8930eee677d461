"""Variant example generation from component metadata."""

from .snippets import apply_display_template, render_code_snippet, render_title
from .values import DEFAULT_VALUES, infer_default_value, parse_literal_value
from .variants import VariantGenerator

__all__ = [
    "DEFAULT_VALUES",
    "VariantGenerator",
    "apply_display_template",
    "infer_default_value",
    "parse_literal_value",
    "render_code_snippet",
    "render_title",
]
