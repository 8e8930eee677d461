"""Configuration loading for docspark (docspark.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = "docspark.yml"

DEFAULT_INCLUDE = ["src/components/**/*.{tsx,jsx}"]
DEFAULT_EXCLUDE = ["**/*.test.{tsx,jsx}", "**/*.stories.{tsx,jsx}"]
DEFAULT_STYLE_EXTENSIONS = [".css", ".scss", ".sass", ".module.css", ".module.scss"]
DEFAULT_MAX_PERMUTATIONS = 20


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed or is invalid."""


def _default_values() -> Dict[str, Any]:
    return {"string": "Example text", "number": 42, "children": "Button Text"}


@dataclass
class SourceConfig:
    """Which files are parsed as components."""

    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    style_files: List[str] = field(default_factory=lambda: list(DEFAULT_STYLE_EXTENSIONS))


@dataclass
class OutputConfig:
    """Where generated metadata is written."""

    directory: str = "./docs"
    base_url: str = "/"


@dataclass
class VariantsConfig:
    """Variant generation settings."""

    auto_generate: bool = True
    max_permutations: int = DEFAULT_MAX_PERMUTATIONS
    default_values: Dict[str, Any] = field(default_factory=_default_values)


@dataclass
class DocSparkConfig:
    """Represents the high-level settings defined in docspark.yml."""

    root: Path
    name: str = "Components"
    description: Optional[str] = None
    version: Optional[str] = None
    source: SourceConfig = field(default_factory=SourceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    variants: VariantsConfig = field(default_factory=VariantsConfig)

    @property
    def output_dir(self) -> Path:
        directory = Path(self.output.directory).expanduser()
        return directory if directory.is_absolute() else self.root / directory


def load_config(config_path: Path) -> DocSparkConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocSparkConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = DocSparkConfig(root=root)
    config.name = _as_str(data.get("name")) or config.name
    config.description = _as_str(data.get("description"))
    config.version = _as_str(data.get("version"))

    source_data = _as_dict(data.get("source"))
    if source_data:
        if "include" in source_data:
            config.source.include = _as_str_list(source_data.get("include"))
            if not config.source.include:
                raise ConfigError("source.include must list at least one pattern")
        if "exclude" in source_data:
            config.source.exclude = _as_str_list(source_data.get("exclude"))
        if "styleFiles" in source_data:
            config.source.style_files = _as_str_list(source_data.get("styleFiles"))

    output_data = _as_dict(data.get("output"))
    if output_data:
        directory = _as_str(output_data.get("directory"))
        if directory is not None:
            if not directory.strip():
                raise ConfigError("output.directory cannot be empty")
            config.output.directory = directory
        config.output.base_url = _as_str(output_data.get("baseUrl")) or config.output.base_url

    variants_data = _as_dict(data.get("variants"))
    if variants_data:
        auto_generate = _as_bool(variants_data.get("autoGenerate"))
        if auto_generate is not None:
            config.variants.auto_generate = auto_generate
        if "maxPermutations" in variants_data:
            max_permutations = _as_int(variants_data.get("maxPermutations"))
            if max_permutations is None or max_permutations <= 0:
                raise ConfigError("variants.maxPermutations must be a positive integer")
            config.variants.max_permutations = max_permutations
        defaults = _as_dict(variants_data.get("defaultValues"))
        for key in ("string", "children"):
            value = _as_str(defaults.get(key))
            if value is not None:
                config.variants.default_values[key] = value
        number = defaults.get("number")
        if isinstance(number, (int, float)) and not isinstance(number, bool):
            config.variants.default_values["number"] = number

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
