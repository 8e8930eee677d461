"""Source parsing: component metadata, descriptions and stylesheet variables."""

from .component import ComponentParser, extract_union_values, find_props_declaration, is_host_carrier
from .description import resolve_description
from .source import SourceFile, SourceParseError, SourceProvider
from .style import StyleParser

__all__ = [
    "ComponentParser",
    "SourceFile",
    "SourceParseError",
    "SourceProvider",
    "StyleParser",
    "extract_union_values",
    "find_props_declaration",
    "is_host_carrier",
    "resolve_description",
]
