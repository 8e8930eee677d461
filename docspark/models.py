"""Core data models shared across docspark components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class PropMetadata:
    """Documentation model for a single component prop."""

    type: str
    optional: bool = False
    values: Optional[List[str]] = None
    default: Optional[str] = None
    description: str = ""
    render_variants: bool = False
    display_template: Optional[str] = None
    hide_in_docs: bool = False
    example: Optional[str] = None
    excluded_with: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "optional": self.optional}
        if self.values is not None:
            data["values"] = list(self.values)
        if self.default is not None:
            data["default"] = self.default
        data["description"] = self.description
        data["renderVariants"] = self.render_variants
        if self.display_template is not None:
            data["displayTemplate"] = self.display_template
        data["hideInDocs"] = self.hide_in_docs
        if self.example is not None:
            data["example"] = self.example
        data["excludedWith"] = list(self.excluded_with)
        return data


@dataclass(frozen=True)
class ComponentMetadata:
    """Everything recovered from one component source file."""

    name: str
    description: str
    file_path: str
    props: Dict[str, PropMetadata]
    style_files: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "filePath": self.file_path,
            "props": {name: meta.to_dict() for name, meta in self.props.items()},
            "styleFiles": list(self.style_files),
        }


@dataclass(frozen=True)
class VariantExample:
    """A concrete usage example generated for a component."""

    props: Dict[str, Any]
    code: str
    title: str
    is_permutation: bool = False
    combined_props: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "props": dict(self.props),
            "code": self.code,
            "title": self.title,
            "isPermutation": self.is_permutation,
            "combinedProps": list(self.combined_props),
        }


@dataclass
class CSSVariable:
    """CSS custom property exposed by a component stylesheet."""

    name: str
    description: str = ""
    default: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "description": self.description}
        if self.default is not None:
            data["default"] = self.default
        return data


@dataclass
class StyleMetadata:
    """CSS variables discovered in a single stylesheet."""

    file_path: str
    css_variables: List[CSSVariable] = field(default_factory=list)


@dataclass
class ComponentDocumentation:
    """Per-component record persisted by the build driver."""

    component: ComponentMetadata
    variants: List[VariantExample]
    css_variables: List[CSSVariable] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component.to_dict(),
            "variants": [variant.to_dict() for variant in self.variants],
            "cssVariables": [variable.to_dict() for variable in self.css_variables],
        }


@dataclass
class BuildResult:
    """Totals accumulated over one build run."""

    component_count: int = 0
    variant_count: int = 0
    css_variable_count: int = 0
    skipped: List[str] = field(default_factory=list)

    def record(self, documentation: ComponentDocumentation) -> None:
        self.component_count += 1
        self.variant_count += len(documentation.variants)
        self.css_variable_count += len(documentation.css_variables)

    def to_dict(self) -> Dict[str, int]:
        return {
            "componentCount": self.component_count,
            "variantCount": self.variant_count,
            "cssVariableCount": self.css_variable_count,
        }
