"""Component metadata extraction from TSX sources."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence

from ..config import DEFAULT_STYLE_EXTENSIONS
from ..logging import get_logger
from ..models import ComponentMetadata, PropMetadata
from .comments import parse_member_docs
from .defaults import find_default_values
from .description import resolve_description
from .source import (
    IntersectionType,
    LiteralType,
    ObjectType,
    PropertyMember,
    SourceFile,
    SourceParseError,
    SourceProvider,
    TypeNode,
    TypeReference,
    UnionType,
)

MAX_INHERITANCE_DEPTH = 10

_HOST_CARRIER = re.compile(
    r"^(ComponentProps\w*|\w*HTMLAttributes|\w*HTMLProps|SVGProps|SVGAttributes|DOMAttributes|"
    r"AriaAttributes|IntrinsicElements|PropsWithChildren|PropsWithRef|RefAttributes)$"
)
_HOST_ELEMENT = re.compile(r"^(HTML|SVG)\w*Element$")
_UTILITY_TYPES = {"Omit", "Pick", "Partial", "Readonly"}
_EMPTY_UNION_MEMBERS = {"null", "undefined"}
_LIST_SEPARATOR = re.compile(r"[\s,]+")

MemberFilter = Callable[[PropertyMember], Optional[PropertyMember]]


@dataclass
class PropsDeclaration:
    """Own members and heritage of the declaration describing a component's props."""

    name: str
    members: List[PropertyMember]
    extends: List[TypeNode] = field(default_factory=list)


def is_host_carrier(name: str) -> bool:
    """Return True for names of framework-provided attribute bags such as ``HTMLAttributes``."""
    simple = name.rsplit(".", 1)[-1]
    return bool(_HOST_CARRIER.match(simple) or _HOST_ELEMENT.match(simple))


def extract_union_values(type_node: Optional[TypeNode], source: SourceFile) -> Optional[List[str]]:
    """Return literal members of a closed union, following one alias at most."""
    values = _literal_union(type_node)
    if values is not None:
        return values
    if isinstance(type_node, TypeReference) and not type_node.arguments:
        alias = source.get_type_alias(type_node.name)
        if alias is not None:
            return _literal_union(alias.value)
    return None


def _literal_union(type_node: Optional[TypeNode]) -> Optional[List[str]]:
    if not isinstance(type_node, UnionType):
        return None
    values: List[str] = []
    for member in type_node.members:
        if member.text in _EMPTY_UNION_MEMBERS:
            continue
        if not isinstance(member, LiteralType):
            return None
        values.append(member.text.strip("'\"`"))
    return values or None


def find_props_declaration(source: SourceFile, component_name: str) -> Optional[PropsDeclaration]:
    return _declaration_named(source, f"{component_name}Props")


def _declaration_named(source: SourceFile, name: str) -> Optional[PropsDeclaration]:
    interface = source.get_interface(name)
    if interface is not None:
        return PropsDeclaration(name=name, members=list(interface.members), extends=list(interface.extends))
    alias = source.get_type_alias(name)
    if alias is None:
        return None
    if isinstance(alias.value, ObjectType):
        return PropsDeclaration(name=name, members=list(alias.value.members))
    if isinstance(alias.value, IntersectionType):
        declaration = PropsDeclaration(name=name, members=[])
        for part in alias.value.parts:
            if isinstance(part, ObjectType):
                declaration.members.extend(part.members)
            elif isinstance(part, TypeReference):
                declaration.extends.append(part)
        return declaration
    return None


class ComponentParser:
    """Builds :class:`ComponentMetadata` records from component source files."""

    def __init__(
        self,
        provider: SourceProvider | None = None,
        style_extensions: Sequence[str] | None = None,
    ) -> None:
        self._provider = provider or SourceProvider()
        extensions = style_extensions if style_extensions is not None else DEFAULT_STYLE_EXTENSIONS
        self._style_extensions = tuple(ext if ext.startswith(".") else f".{ext}" for ext in extensions)
        self.logger = get_logger("parser")

    def parse_component(self, file_path: Path | str) -> Optional[ComponentMetadata]:
        """Extract metadata, returning ``None`` for files that are not components."""
        path = Path(file_path)
        try:
            source = self._provider.load(path)
        except SourceParseError as exc:
            self.logger.error("Error parsing %s: %s", path, exc)
            return None
        return self.extract(source, path.stem)

    def parse_source(self, text: str, file_path: Path | str) -> Optional[ComponentMetadata]:
        """Like :meth:`parse_component` for source text that is already in memory."""
        path = Path(file_path)
        try:
            source = self._provider.parse(text, str(path))
        except SourceParseError as exc:
            self.logger.error("Error parsing %s: %s", path, exc)
            return None
        return self.extract(source, path.stem)

    def extract(self, source: SourceFile, component_name: str) -> Optional[ComponentMetadata]:
        declaration = find_props_declaration(source, component_name)
        if declaration is None:
            self.logger.info("Skipping %s: no %sProps declaration found", source.path, component_name)
            return None

        defaults = find_default_values(source, component_name, declaration.name)
        props: Dict[str, PropMetadata] = {}
        for member in self._flatten(source, declaration):
            props[member.name] = self._build_prop(source, member, defaults)

        return ComponentMetadata(
            name=component_name,
            description=resolve_description(source, component_name),
            file_path=source.path,
            props=props,
            style_files=self.find_style_imports(source),
        )

    def find_style_imports(self, source: SourceFile) -> List[str]:
        return [item.source for item in source.imports if item.source.endswith(self._style_extensions)]

    def _flatten(self, source: SourceFile, declaration: PropsDeclaration) -> List[PropertyMember]:
        merged: Dict[str, PropertyMember] = {}
        for member in declaration.members:
            merged.setdefault(member.name, member)
        ancestors = frozenset({declaration.name})
        for heritage in declaration.extends:
            for member in self._inherited(source, heritage, ancestors, 0):
                # Own and earlier ancestors' members always win.
                merged.setdefault(member.name, member)
        return list(merged.values())

    def _inherited(
        self, source: SourceFile, heritage: TypeNode, ancestors: FrozenSet[str], depth: int
    ) -> Iterator[PropertyMember]:
        """Yield members inherited through ``heritage``.

        ``ancestors`` holds the declarations on the current inheritance path only,
        so the same base can still be reached through a sibling utility type.
        """
        if depth >= MAX_INHERITANCE_DEPTH or not isinstance(heritage, TypeReference):
            return
        if heritage.name in _UTILITY_TYPES and heritage.arguments:
            member_filter = _utility_filter(heritage)
            for member in self._inherited(source, heritage.arguments[0], ancestors, depth + 1):
                kept = member_filter(member)
                if kept is not None:
                    yield kept
            return
        if heritage.name in ancestors:
            return
        ancestor = _declaration_named(source, heritage.name)
        if ancestor is None:
            if is_host_carrier(heritage.name):
                self.logger.debug("Ignoring host attribute carrier %s", heritage.name)
            else:
                self.logger.debug("Cannot resolve extended declaration %s in %s", heritage.name, source.path)
            return
        lineage = ancestors | {heritage.name}
        yield from ancestor.members
        for parent in ancestor.extends:
            yield from self._inherited(source, parent, lineage, depth + 1)

    def _build_prop(
        self, source: SourceFile, member: PropertyMember, defaults: Dict[str, str]
    ) -> PropMetadata:
        docs = parse_member_docs(member.comments)
        tags = docs.tags
        example = tags.get("example", tags.get("exampleValue"))
        return PropMetadata(
            type=member.type_text,
            optional=member.optional,
            values=extract_union_values(member.type, source),
            default=defaults.get(member.name),
            description=docs.description,
            render_variants=_is_true(tags.get("renderVariants")),
            display_template=tags.get("displayTemplate"),
            hide_in_docs=_is_true(tags.get("hideInDocs")),
            example=example,
            excluded_with=_split_names(tags.get("excludedWith", "")),
        )


def _utility_filter(reference: TypeReference) -> MemberFilter:
    keys = set(_key_names(reference.arguments[1:]))
    if reference.name == "Omit":
        return lambda member: None if member.name in keys else member
    if reference.name == "Pick":
        return lambda member: member if member.name in keys else None
    if reference.name == "Partial":
        return lambda member: replace(member, optional=True)
    return lambda member: member


def _key_names(arguments: Iterable[TypeNode]) -> Iterator[str]:
    for argument in arguments:
        if isinstance(argument, LiteralType):
            yield argument.text.strip("'\"`")
        elif isinstance(argument, UnionType):
            yield from _key_names(argument.members)


def _is_true(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "true"


def _split_names(value: str) -> List[str]:
    names: List[str] = []
    for name in _LIST_SEPARATOR.split(value.strip()):
        if name and name != "true" and name not in names:
            names.append(name)
    return names


__all__ = [
    "ComponentParser",
    "PropsDeclaration",
    "extract_union_values",
    "find_props_declaration",
    "is_host_carrier",
]
