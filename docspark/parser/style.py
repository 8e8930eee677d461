"""CSS custom property extraction from component stylesheets."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List

from ..logging import get_logger
from ..models import CSSVariable, StyleMetadata

_DOC_BLOCK = re.compile(r"/\*\*.*?\*/", re.DOTALL)
_DOC_VARIABLE = re.compile(r"\*\s*(--[\w-]+)\s*:\s*(.+)")
_VAR_USAGE = re.compile(r"var\(\s*(--[\w-]+)\s*(?:,\s*([^)]+))?\)")


class StyleParser:
    """Reads CSS variables from documented comments and ``var()`` usages."""

    def __init__(self) -> None:
        self.logger = get_logger("style")

    def parse_style_file(self, file_path: Path | str) -> StyleMetadata:
        path = Path(file_path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.error("Error parsing style file %s: %s", path, exc)
            return StyleMetadata(file_path=str(path))
        return StyleMetadata(file_path=str(path), css_variables=self.extract_variables(content))

    def extract_variables(self, content: str) -> List[CSSVariable]:
        """Merge documented variables with the ones used in declarations.

        Comment descriptions are kept; the first ``var()`` fallback seen for a
        variable becomes its default.
        """
        variables: Dict[str, CSSVariable] = {}
        for block in _DOC_BLOCK.findall(content):
            for name, description in _DOC_VARIABLE.findall(block):
                description = description.strip().removesuffix("*/").strip()
                variables[name] = CSSVariable(name=name, description=description)

        for name, fallback in _VAR_USAGE.findall(content):
            default = fallback.strip() or None
            existing = variables.get(name)
            if existing is None:
                variables[name] = CSSVariable(name=name, default=default)
            elif existing.default is None:
                existing.default = default
        return list(variables.values())

    @staticmethod
    def resolve_style_path(component_path: Path | str, style_import: str) -> Path:
        return (Path(component_path).parent / style_import).resolve()


__all__ = ["StyleParser"]
