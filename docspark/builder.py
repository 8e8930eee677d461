"""Batch driver: enumerate component files, extract, generate and persist."""

from __future__ import annotations

import json
import re
from dataclasses import replace
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .config import DocSparkConfig
from .generator import VariantGenerator
from .logging import get_logger
from .models import BuildResult, ComponentDocumentation, CSSVariable
from .parser import ComponentParser, StyleParser

_BRACES = re.compile(r"\{([^{}]*)\}")

logger = get_logger("builder")


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` alternatives, which pathlib globbing does not support."""
    match = _BRACES.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: List[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def discover_component_files(config: DocSparkConfig) -> List[Path]:
    """Return component files matching the include globs, in a stable order."""
    root = config.root
    excludes = [expanded for pattern in config.source.exclude for expanded in expand_braces(pattern)]
    files: List[Path] = []
    seen: set[str] = set()
    for pattern in config.source.include:
        for expanded in expand_braces(pattern):
            relative_pattern = expanded[2:] if expanded.startswith("./") else expanded
            for path in sorted(root.glob(relative_pattern)):
                if not path.is_file():
                    continue
                rel_path = path.relative_to(root).as_posix()
                if rel_path in seen or _is_excluded(rel_path, excludes):
                    continue
                seen.add(rel_path)
                files.append(path)
    return files


def _is_excluded(rel_path: str, patterns: Sequence[str]) -> bool:
    for pattern in patterns:
        if fnmatchcase(rel_path, pattern):
            return True
        if pattern.startswith("**/") and fnmatchcase(rel_path, pattern[3:]):
            return True
    return False


def build_documentation(
    config: DocSparkConfig,
    *,
    component_parser: ComponentParser | None = None,
    variant_generator: VariantGenerator | None = None,
    style_parser: StyleParser | None = None,
) -> BuildResult:
    """Document every component under ``config`` and write the metadata files.

    Each file is handled independently; files that are not components or fail
    to parse are recorded in ``BuildResult.skipped`` and the batch continues.
    """
    parser = component_parser or ComponentParser(style_extensions=config.source.style_files)
    generator = variant_generator or VariantGenerator(
        max_permutations=config.variants.max_permutations,
        default_values=config.variants.default_values,
    )
    styles = style_parser or StyleParser()

    metadata_dir = config.output_dir / "metadata"
    metadata_dir.mkdir(parents=True, exist_ok=True)

    result = BuildResult()
    documented: List[ComponentDocumentation] = []

    files = discover_component_files(config)
    logger.info("Found %d candidate component files", len(files))

    for path in files:
        rel_path = path.relative_to(config.root).as_posix()
        logger.debug("Parsing %s", rel_path)
        component = parser.parse_component(path)
        if component is None:
            logger.debug("Skipped %s (no component found)", rel_path)
            result.skipped.append(rel_path)
            continue
        component = replace(component, file_path=rel_path)

        css_variables = _collect_css_variables(styles, path, component.style_files)
        if config.variants.auto_generate:
            variants = generator.generate_variants(component)
        else:
            variants = [generator.generate_default_example(component)]
        logger.debug("Generated %d variants for %s", len(variants), component.name)

        documentation = ComponentDocumentation(
            component=component, variants=variants, css_variables=css_variables
        )
        result.record(documentation)
        documented.append(documentation)

        metadata_file = metadata_dir / f"{component.name}.json"
        _write_json(metadata_file, documentation.to_dict())
        logger.debug("Saved metadata to %s", metadata_file)

    index_file = metadata_dir / "index.json"
    _write_json(index_file, _build_index(config, documented, result))
    logger.info(
        "Documented %d components (%d variants, %d CSS variables)",
        result.component_count,
        result.variant_count,
        result.css_variable_count,
    )
    return result


def _collect_css_variables(styles: StyleParser, component_path: Path, imports: Sequence[str]) -> List[CSSVariable]:
    variables: List[CSSVariable] = []
    for style_import in imports:
        style_path = styles.resolve_style_path(component_path, style_import)
        if not style_path.exists():
            logger.debug("Style file %s not found for %s", style_import, component_path.name)
            continue
        found = styles.parse_style_file(style_path).css_variables
        logger.debug("Found %d CSS variables in %s", len(found), style_import)
        variables.extend(found)
    return variables


def _build_index(
    config: DocSparkConfig, documented: Sequence[ComponentDocumentation], result: BuildResult
) -> Dict[str, Any]:
    return {
        "config": {
            "name": config.name,
            "description": config.description,
            "version": config.version,
            "baseUrl": config.output.base_url,
        },
        "components": [
            {
                "name": doc.component.name,
                "description": doc.component.description,
                "filePath": doc.component.file_path,
                "variantCount": len(doc.variants),
                "cssVariableCount": len(doc.css_variables),
            }
            for doc in documented
        ],
        "stats": result.to_dict(),
    }


def _write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


__all__ = ["build_documentation", "discover_component_files", "expand_braces"]
