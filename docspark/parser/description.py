"""Heuristic resolution of a component's human-readable description.

Components are rarely documented where their name is declared: the JSDoc often
sits on an inner ``forwardRef`` body, a ``memo`` wrapper or a variable that is
later re-exported under another name. The resolver follows those hops from
several seeds and, as a last resort, scores every documented component-looking
variable in the file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Set

from .comments import jsdoc_description
from .source import (
    CallExpression,
    Expression,
    FunctionDecl,
    FunctionExpression,
    Identifier,
    SourceFile,
    VariableDecl,
)

MAX_RESOLUTION_DEPTH = 8

PASCAL_CASE_BONUS = 10
WRAPPER_TYPE_BONUS = 25
NAME_MATCH_BONUS = 100

_PASCAL_CASE = re.compile(r"^[A-Z][A-Za-z0-9]*$")
_WRAPPER_TYPE = re.compile(
    r"\b(FC|SFC|VFC|FunctionComponent|VoidFunctionComponent|ComponentType|"
    r"ExoticComponent|NamedExoticComponent|ForwardRefExoticComponent|MemoExoticComponent)\b"
)


@dataclass
class DescriptionCandidate:
    name: str
    description: str
    score: int


def is_pascal_case(name: str) -> bool:
    return bool(_PASCAL_CASE.match(name))


def is_component_wrapper_type(type_text: Optional[str]) -> bool:
    return bool(type_text and _WRAPPER_TYPE.search(type_text))


def score_candidate(variable: VariableDecl, description: str, component_name: str) -> int:
    """Rank an unseeded candidate; higher is better.

    score = len(description)
            + PASCAL_CASE_BONUS   if the variable name is PascalCase
            + WRAPPER_TYPE_BONUS  if annotated with a component wrapper type
            + NAME_MATCH_BONUS    if the name contains the file's component name
    """
    score = len(description)
    if is_pascal_case(variable.name):
        score += PASCAL_CASE_BONUS
    if is_component_wrapper_type(variable.type_text):
        score += WRAPPER_TYPE_BONUS
    if component_name and component_name in variable.name:
        score += NAME_MATCH_BONUS
    return score


def resolve_description(source: SourceFile, component_name: str) -> str:
    """Return the best description for ``component_name`` or an empty string."""
    return DescriptionResolver(source, component_name).resolve()


class DescriptionResolver:
    """Walks declarations of one source file looking for component docs."""

    def __init__(self, source: SourceFile, component_name: str) -> None:
        self._source = source
        self._name = component_name

    def resolve(self) -> str:
        for seed in (self._from_function, self._from_variable, self._from_default_export):
            description = seed()
            if description:
                return description
        best = self.best_candidate()
        return best.description if best is not None else ""

    def best_candidate(self) -> Optional[DescriptionCandidate]:
        best: Optional[DescriptionCandidate] = None
        for variable in self._source.variables:
            if not (is_pascal_case(variable.name) or is_component_wrapper_type(variable.type_text)):
                continue
            description = jsdoc_description(variable.statement_comments) or jsdoc_description(
                variable.declarator_comments
            )
            if not description:
                continue
            score = score_candidate(variable, description, self._name)
            # Strictly greater keeps the first-discovered candidate on ties.
            if best is None or score > best.score:
                best = DescriptionCandidate(name=variable.name, description=description, score=score)
        return best

    def _from_function(self) -> str:
        function = self._source.get_function(self._name)
        return jsdoc_description(function.comments) if function is not None else ""

    def _from_variable(self) -> str:
        variable = self._source.get_variable(self._name)
        if variable is None:
            return ""
        return self._describe_variable(variable, set(), 0)

    def _from_default_export(self) -> str:
        exported = self._source.default_export
        if exported is None:
            return ""
        if isinstance(exported, FunctionDecl):
            return jsdoc_description(exported.comments)
        if isinstance(exported, Identifier):
            return self._describe_identifier(exported.name, set(), 0)
        return self._describe_expression(exported, set(), 0)

    def _describe_variable(self, variable: VariableDecl, visited: Set[str], depth: int) -> str:
        if depth > MAX_RESOLUTION_DEPTH or variable.name in visited:
            return ""
        visited.add(variable.name)
        description = jsdoc_description(variable.statement_comments) or jsdoc_description(
            variable.declarator_comments
        )
        if description:
            return description
        return self._describe_expression(variable.initializer, visited, depth + 1)

    def _describe_identifier(self, name: str, visited: Set[str], depth: int) -> str:
        if depth > MAX_RESOLUTION_DEPTH or name in visited:
            return ""
        function = self._source.get_function(name)
        if function is not None:
            visited.add(name)
            return jsdoc_description(function.comments)
        variable = self._source.get_variable(name)
        if variable is not None:
            return self._describe_variable(variable, visited, depth)
        return ""

    def _describe_expression(self, expression: Optional[Expression], visited: Set[str], depth: int) -> str:
        if expression is None or depth > MAX_RESOLUTION_DEPTH:
            return ""
        if isinstance(expression, Identifier):
            return self._describe_identifier(expression.name, visited, depth + 1)
        if isinstance(expression, CallExpression):
            if not expression.arguments:
                return ""
            first = expression.arguments[0]
            if isinstance(first, FunctionExpression):
                own = jsdoc_description(first.function.comments) if first.function else ""
                return own or jsdoc_description(expression.statement_comments)
            return self._describe_expression(first, visited, depth + 1)
        if isinstance(expression, FunctionExpression) and expression.function is not None:
            return jsdoc_description(expression.function.comments)
        return ""


__all__ = [
    "DescriptionCandidate",
    "DescriptionResolver",
    "NAME_MATCH_BONUS",
    "PASCAL_CASE_BONUS",
    "WRAPPER_TYPE_BONUS",
    "is_component_wrapper_type",
    "is_pascal_case",
    "resolve_description",
    "score_candidate",
]
