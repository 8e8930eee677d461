"""Tree-sitter backed source provider for TSX component files.

The provider parses a file once and converts the parts of the syntax tree the
extractor cares about into a small, closed set of typed records: declarations
(interfaces, type aliases, functions, variables, imports), expressions
(identifiers, calls, inline functions) and type nodes (unions, literals,
references, object and intersection types). Everything else collapses into an
``Other*`` variant so callers can dispatch with plain ``isinstance`` checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

_FUNCTION_NODES = {"arrow_function", "function_expression", "function"}
_WRAPPED_EXPRESSIONS = {
    "parenthesized_expression",
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
}
_STRING_NODES = {"string", "template_string"}
_OPENING_TOKENS = {"{", "(", "["}


class SourceParseError(RuntimeError):
    """Raised when a source file cannot be read or contains syntax errors."""


@dataclass
class DocComment:
    """A comment attached to a declaration, as written in the source."""

    text: str

    @property
    def is_jsdoc(self) -> bool:
        return self.text.startswith("/**") and not self.text.startswith("/**/")


# Type nodes


@dataclass
class TypeNode:
    text: str


@dataclass
class LiteralType(TypeNode):
    pass


@dataclass
class UnionType(TypeNode):
    members: List[TypeNode] = field(default_factory=list)


@dataclass
class IntersectionType(TypeNode):
    parts: List[TypeNode] = field(default_factory=list)


@dataclass
class TypeReference(TypeNode):
    name: str = ""
    arguments: List[TypeNode] = field(default_factory=list)


@dataclass
class ObjectType(TypeNode):
    members: List["PropertyMember"] = field(default_factory=list)


@dataclass
class OtherType(TypeNode):
    pass


# Declarations


@dataclass
class PropertyMember:
    name: str
    type: Optional[TypeNode]
    optional: bool
    comments: List[DocComment] = field(default_factory=list)

    @property
    def type_text(self) -> str:
        return self.type.text if self.type is not None else "any"


@dataclass
class InterfaceDecl:
    name: str
    members: List[PropertyMember]
    extends: List[TypeNode] = field(default_factory=list)


@dataclass
class TypeAliasDecl:
    name: str
    value: Optional[TypeNode]


@dataclass
class Parameter:
    """A function parameter; ``bindings`` is set for destructured objects."""

    bindings: Optional[Dict[str, Optional[str]]]
    type_text: Optional[str] = None


@dataclass
class FunctionDecl:
    name: Optional[str]
    parameters: List[Parameter]
    comments: List[DocComment] = field(default_factory=list)


@dataclass
class VariableDecl:
    name: str
    type_text: Optional[str]
    initializer: Optional["Expression"]
    statement_comments: List[DocComment] = field(default_factory=list)
    declarator_comments: List[DocComment] = field(default_factory=list)


@dataclass
class ImportDecl:
    source: str


# Expressions


@dataclass
class Expression:
    text: str


@dataclass
class Identifier(Expression):
    name: str = ""


@dataclass
class CallExpression(Expression):
    callee: str = ""
    arguments: List[Expression] = field(default_factory=list)
    statement_comments: List[DocComment] = field(default_factory=list)


@dataclass
class FunctionExpression(Expression):
    function: Optional[FunctionDecl] = None


@dataclass
class OtherExpression(Expression):
    pass


DefaultExport = Union[FunctionDecl, Expression]


@dataclass
class SourceFile:
    """Top-level declarations of one parsed module."""

    path: str
    interfaces: Dict[str, InterfaceDecl] = field(default_factory=dict)
    type_aliases: Dict[str, TypeAliasDecl] = field(default_factory=dict)
    functions: List[FunctionDecl] = field(default_factory=list)
    variables: List[VariableDecl] = field(default_factory=list)
    imports: List[ImportDecl] = field(default_factory=list)
    default_export: Optional[DefaultExport] = None

    def get_interface(self, name: str) -> Optional[InterfaceDecl]:
        return self.interfaces.get(name)

    def get_type_alias(self, name: str) -> Optional[TypeAliasDecl]:
        return self.type_aliases.get(name)

    def get_function(self, name: str) -> Optional[FunctionDecl]:
        return next((func for func in self.functions if func.name == name), None)

    def get_variable(self, name: str) -> Optional[VariableDecl]:
        return next((var for var in self.variables if var.name == name), None)


class SourceProvider:
    """Parses TSX sources into :class:`SourceFile` records.

    A single provider (and its tree-sitter parser) can be reused for any number
    of files; each call builds a fresh record so nothing leaks between files.
    """

    def __init__(self) -> None:
        self._parser = Parser(TSX_LANGUAGE)

    def load(self, path: Path | str) -> SourceFile:
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceParseError(f"Unable to read {file_path}: {exc}") from exc
        return self.parse(text, str(file_path))

    def parse(self, text: str, path: str = "<memory>") -> SourceFile:
        source_bytes = text.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        root = tree.root_node
        if root.has_error:
            raise SourceParseError(f"Syntax error in {path} near {_first_error_location(root)}")
        return _SourceBuilder(source_bytes, path).build(root)


def _first_error_location(node: Node) -> str:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            row, column = current.start_point
            return f"line {row + 1}, column {column + 1}"
        stack.extend(reversed(current.children))
    return "unknown location"


class _SourceBuilder:
    def __init__(self, source_bytes: bytes, path: str) -> None:
        self._source = source_bytes
        self._file = SourceFile(path=path)

    def build(self, root: Node) -> SourceFile:
        for child in root.named_children:
            if child.type == "comment":
                continue
            comments = self._leading_comments(child)
            if child.type == "export_statement":
                self._visit_export(child, comments)
            else:
                self._visit_declaration(child, comments)
        return self._file

    def _visit_export(self, node: Node, comments: List[DocComment]) -> None:
        is_default = any(child.type == "default" for child in node.children)
        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            result = self._visit_declaration(declaration, comments)
            if is_default and isinstance(result, FunctionDecl):
                self._file.default_export = result
            return
        value = node.child_by_field_name("value")
        if not is_default or value is None:
            return
        if value.type in _FUNCTION_NODES:
            function = self._function(value, comments)
            if function.name:
                self._file.functions.append(function)
            self._file.default_export = function
        else:
            self._file.default_export = self._expression(value, comments)

    def _visit_declaration(self, node: Node, comments: List[DocComment]) -> Optional[FunctionDecl]:
        kind = node.type
        if kind == "interface_declaration":
            self._visit_interface(node)
        elif kind == "type_alias_declaration":
            name = self._field_text(node, "name")
            value = node.child_by_field_name("value")
            if name and name not in self._file.type_aliases:
                self._file.type_aliases[name] = TypeAliasDecl(
                    name=name, value=self._type(value) if value is not None else None
                )
        elif kind == "function_declaration":
            function = self._function(node, comments)
            self._file.functions.append(function)
            return function
        elif kind in {"lexical_declaration", "variable_declaration"}:
            for declarator in node.named_children:
                if declarator.type == "variable_declarator":
                    self._visit_variable(declarator, comments)
        elif kind == "import_statement":
            source = node.child_by_field_name("source")
            if source is not None:
                self._file.imports.append(ImportDecl(source=self._string_value(source)))
        return None

    def _visit_interface(self, node: Node) -> None:
        name = self._field_text(node, "name")
        if not name or name in self._file.interfaces:
            return
        extends: List[TypeNode] = []
        for child in node.named_children:
            if child.type in {"extends_type_clause", "extends_clause"}:
                extends.extend(self._heritage_type(item) for item in child.named_children if item.type != "comment")
        body = node.child_by_field_name("body")
        members = self._members(body) if body is not None else []
        self._file.interfaces[name] = InterfaceDecl(name=name, members=members, extends=extends)

    def _visit_variable(self, node: Node, statement_comments: List[DocComment]) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None or name_node.type != "identifier":
            return
        type_node = node.child_by_field_name("type")
        value = node.child_by_field_name("value")
        self._file.variables.append(
            VariableDecl(
                name=self._text(name_node),
                type_text=self._annotation_text(type_node),
                initializer=self._expression(value, statement_comments) if value is not None else None,
                statement_comments=statement_comments,
                declarator_comments=self._leading_comments(node),
            )
        )

    # members and types

    def _members(self, body: Node) -> List[PropertyMember]:
        members: List[PropertyMember] = []
        for child in body.named_children:
            if child.type not in {"property_signature", "method_signature"}:
                continue
            name_node = child.child_by_field_name("name")
            if name_node is None:
                continue
            optional = any(token.type == "?" for token in child.children)
            if child.type == "property_signature":
                type_node = self._annotation_type(child.child_by_field_name("type"))
            else:
                type_node = OtherType(text=self._method_type_text(child))
            members.append(
                PropertyMember(
                    name=self._string_value(name_node),
                    type=type_node,
                    optional=optional,
                    comments=self._leading_comments(child),
                )
            )
        return members

    def _method_type_text(self, node: Node) -> str:
        params = node.child_by_field_name("parameters")
        returns = self._annotation_type(node.child_by_field_name("return_type"))
        params_text = self._text(params) if params is not None else "()"
        return f"{params_text} => {returns.text if returns is not None else 'void'}"

    def _annotation_type(self, annotation: Optional[Node]) -> Optional[TypeNode]:
        if annotation is None:
            return None
        if annotation.type == "type_annotation":
            inner = [child for child in annotation.named_children if child.type != "comment"]
            return self._type(inner[0]) if inner else None
        return self._type(annotation)

    def _annotation_text(self, annotation: Optional[Node]) -> Optional[str]:
        type_node = self._annotation_type(annotation)
        return type_node.text if type_node is not None else None

    def _type(self, node: Node) -> TypeNode:
        kind = node.type
        text = _normalise_space(self._text(node))
        if kind in {"union_type", "intersection_type"}:
            # A leading separator is allowed before the first member.
            text = text.lstrip("|&").lstrip()
        if kind == "union_type":
            return UnionType(text=text, members=self._flatten(node, "union_type"))
        if kind == "intersection_type":
            return IntersectionType(text=text, parts=self._flatten(node, "intersection_type"))
        if kind == "literal_type":
            return LiteralType(text=text)
        if kind in {"type_identifier", "nested_type_identifier", "identifier"}:
            return TypeReference(text=text, name=text)
        if kind == "generic_type":
            name_node = node.child_by_field_name("name")
            args_node = node.child_by_field_name("type_arguments")
            arguments = []
            if args_node is not None:
                arguments = [self._type(arg) for arg in args_node.named_children if arg.type != "comment"]
            name = self._text(name_node) if name_node is not None else text.split("<", 1)[0]
            return TypeReference(text=text, name=name, arguments=arguments)
        if kind in {"object_type", "interface_body"}:
            return ObjectType(text=text, members=self._members(node))
        if kind == "parenthesized_type":
            inner = [child for child in node.named_children if child.type != "comment"]
            if inner:
                return self._type(inner[0])
        return OtherType(text=text)

    def _flatten(self, node: Node, kind: str) -> List[TypeNode]:
        items: List[TypeNode] = []
        for child in node.named_children:
            if child.type == "comment":
                continue
            if child.type == kind:
                items.extend(self._flatten(child, kind))
            else:
                items.append(self._type(child))
        return items

    def _heritage_type(self, node: Node) -> TypeNode:
        converted = self._type(node)
        if isinstance(converted, OtherType):
            name = converted.text.split("<", 1)[0].strip()
            return TypeReference(text=converted.text, name=name)
        return converted

    # functions and expressions

    def _function(self, node: Node, comments: List[DocComment]) -> FunctionDecl:
        name_node = node.child_by_field_name("name")
        parameters: List[Parameter] = []
        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            for param in params_node.named_children:
                if param.type in {"required_parameter", "optional_parameter"}:
                    parameters.append(self._parameter(param))
        elif node.child_by_field_name("parameter") is not None:
            parameters.append(Parameter(bindings=None))
        return FunctionDecl(
            name=self._text(name_node) if name_node is not None else None,
            parameters=parameters,
            comments=comments,
        )

    def _parameter(self, node: Node) -> Parameter:
        pattern = node.child_by_field_name("pattern")
        type_text = self._annotation_text(node.child_by_field_name("type"))
        if pattern is None or pattern.type != "object_pattern":
            return Parameter(bindings=None, type_text=type_text)
        bindings: Dict[str, Optional[str]] = {}
        for element in pattern.named_children:
            if element.type == "shorthand_property_identifier_pattern":
                bindings.setdefault(self._text(element), None)
            elif element.type == "object_assignment_pattern":
                left = element.child_by_field_name("left")
                right = element.child_by_field_name("right")
                if left is not None:
                    bindings.setdefault(self._text(left), self._default_text(right))
            elif element.type == "pair_pattern":
                key = element.child_by_field_name("key")
                value = element.child_by_field_name("value")
                if key is None:
                    continue
                default = None
                if value is not None and value.type == "assignment_pattern":
                    default = self._default_text(value.child_by_field_name("right"))
                bindings.setdefault(self._string_value(key), default)
        return Parameter(bindings=bindings, type_text=type_text)

    def _default_text(self, node: Optional[Node]) -> Optional[str]:
        if node is None:
            return None
        if node.type in _STRING_NODES and not any(
            child.type == "template_substitution" for child in node.named_children
        ):
            return self._string_value(node)
        return self._text(node)

    def _expression(self, node: Node, statement_comments: List[DocComment]) -> Expression:
        while node.type in _WRAPPED_EXPRESSIONS:
            inner = [child for child in node.named_children if child.type != "comment"]
            if not inner:
                break
            node = inner[0]
        text = self._text(node)
        if node.type == "identifier":
            return Identifier(text=text, name=text)
        if node.type == "call_expression":
            callee = node.child_by_field_name("function")
            args_node = node.child_by_field_name("arguments")
            arguments: List[Expression] = []
            if args_node is not None:
                arguments = [
                    self._expression(arg, statement_comments)
                    for arg in args_node.named_children
                    if arg.type != "comment"
                ]
            return CallExpression(
                text=text,
                callee=self._text(callee) if callee is not None else "",
                arguments=arguments,
                statement_comments=statement_comments,
            )
        if node.type in _FUNCTION_NODES:
            comments = self._leading_comments(node) or statement_comments
            return FunctionExpression(text=text, function=self._function(node, comments))
        return OtherExpression(text=text)

    # text helpers

    def _leading_comments(self, node: Node) -> List[DocComment]:
        nodes: List[Node] = []
        sibling = node.prev_sibling
        while sibling is not None and sibling.type == "comment":
            nodes.append(sibling)
            sibling = sibling.prev_sibling
        # A comment on the same line as the previous sibling trails that sibling.
        if (
            nodes
            and sibling is not None
            and sibling.type not in _OPENING_TOKENS
            and nodes[-1].start_point[0] == sibling.end_point[0]
        ):
            nodes.pop()
        nodes.reverse()
        return [DocComment(text=self._text(comment)) for comment in nodes]

    def _field_text(self, node: Node, name: str) -> str:
        child = node.child_by_field_name(name)
        return self._text(child) if child is not None else ""

    def _string_value(self, node: Node) -> str:
        text = self._text(node)
        if node.type in _STRING_NODES and len(text) >= 2:
            return text[1:-1]
        return text

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _normalise_space(text: str) -> str:
    return " ".join(text.split())


__all__ = [
    "CallExpression",
    "DocComment",
    "Expression",
    "FunctionDecl",
    "FunctionExpression",
    "Identifier",
    "ImportDecl",
    "InterfaceDecl",
    "IntersectionType",
    "LiteralType",
    "ObjectType",
    "OtherExpression",
    "OtherType",
    "Parameter",
    "PropertyMember",
    "SourceFile",
    "SourceParseError",
    "SourceProvider",
    "TypeAliasDecl",
    "TypeNode",
    "TypeReference",
    "UnionType",
    "VariableDecl",
]
