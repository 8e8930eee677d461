"""Discovery of prop defaults from a component's destructured parameters."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Set

from .source import (
    CallExpression,
    Expression,
    FunctionDecl,
    FunctionExpression,
    Identifier,
    SourceFile,
)

MAX_FOLLOW_DEPTH = 8


def find_default_values(source: SourceFile, component_name: str, props_name: str) -> Dict[str, str]:
    """Return ``prop -> default text`` for the component implementing ``component_name``.

    The implementing function is found through the same indirections the
    description resolver follows (re-assignment, wrapper calls, default export).
    When that fails, the first function whose destructured parameter is typed
    with the props declaration is used instead.
    """
    function = implementing_function(source, component_name)
    if function is None or _destructured(function) is None:
        function = _annotated_function(source, props_name)
    if function is None:
        return {}
    bindings = _destructured(function) or {}
    return {name: default for name, default in bindings.items() if default is not None}


def implementing_function(source: SourceFile, component_name: str) -> Optional[FunctionDecl]:
    function = source.get_function(component_name)
    if function is not None:
        return function
    visited: Set[str] = set()
    variable = source.get_variable(component_name)
    if variable is not None:
        visited.add(variable.name)
        found = _from_expression(source, variable.initializer, visited, 0)
        if found is not None:
            return found
    exported = source.default_export
    if isinstance(exported, FunctionDecl):
        return exported
    if isinstance(exported, Expression):
        return _from_expression(source, exported, visited, 0)
    return None


def _from_expression(
    source: SourceFile, expression: Optional[Expression], visited: Set[str], depth: int
) -> Optional[FunctionDecl]:
    if expression is None or depth > MAX_FOLLOW_DEPTH:
        return None
    if isinstance(expression, FunctionExpression):
        return expression.function
    if isinstance(expression, CallExpression):
        if not expression.arguments:
            return None
        return _from_expression(source, expression.arguments[0], visited, depth + 1)
    if isinstance(expression, Identifier):
        if expression.name in visited:
            return None
        visited.add(expression.name)
        function = source.get_function(expression.name)
        if function is not None:
            return function
        variable = source.get_variable(expression.name)
        if variable is not None:
            return _from_expression(source, variable.initializer, visited, depth + 1)
    return None


def _annotated_function(source: SourceFile, props_name: str) -> Optional[FunctionDecl]:
    for function, context_type in _function_likes(source):
        for parameter in function.parameters:
            if parameter.bindings is None:
                continue
            annotation = parameter.type_text or context_type or ""
            if props_name in annotation:
                return function
    return None


def _function_likes(source: SourceFile) -> Iterator[tuple[FunctionDecl, Optional[str]]]:
    for function in source.functions:
        yield function, None
    for variable in source.variables:
        found = _from_expression(source, variable.initializer, {variable.name}, 0)
        if found is not None:
            yield found, variable.type_text


def _destructured(function: FunctionDecl) -> Optional[Dict[str, Optional[str]]]:
    for parameter in function.parameters:
        if parameter.bindings is not None:
            return parameter.bindings
    return None


__all__ = ["find_default_values", "implementing_function"]
