"""Tests for the tree-sitter source provider."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from docspark.parser.source import (
    CallExpression,
    FunctionDecl,
    FunctionExpression,
    Identifier,
    LiteralType,
    SourceParseError,
    SourceProvider,
    TypeReference,
    UnionType,
)


def _parse(provider: SourceProvider, content: str):
    return provider.parse(textwrap.dedent(content).lstrip("\n"), "Example.tsx")


def test_interface_members_capture_types_optionality_and_comments(provider: SourceProvider) -> None:
    source = _parse(
        provider,
        """
        export interface ExampleProps {
          /** Visual tone */
          tone?: 'info' | 'warning' | 'danger'
          // plain comment
          label: string
          onPick(value: string): void
        }
        """,
    )

    interface = source.get_interface("ExampleProps")
    assert interface is not None
    names = [member.name for member in interface.members]
    assert names == ["tone", "label", "onPick"]

    tone, label, on_pick = interface.members
    assert tone.optional is True
    assert isinstance(tone.type, UnionType)
    assert [member.text for member in tone.type.members] == ["'info'", "'warning'", "'danger'"]
    assert all(isinstance(member, LiteralType) for member in tone.type.members)
    assert [comment.text for comment in tone.comments] == ["/** Visual tone */"]
    assert tone.comments[0].is_jsdoc

    assert label.optional is False
    assert label.type_text == "string"
    assert [comment.text for comment in label.comments] == ["// plain comment"]
    assert not label.comments[0].is_jsdoc

    assert on_pick.type_text.startswith("(value: string)")


def test_trailing_comment_is_not_attached_to_next_member(provider: SourceProvider) -> None:
    source = _parse(
        provider,
        """
        interface RowProps {
          first: string; // about first
          second: number;
        }
        """,
    )
    interface = source.get_interface("RowProps")
    assert interface is not None
    assert interface.members[1].comments == []


def test_extends_clause_is_typed(provider: SourceProvider) -> None:
    source = _parse(
        provider,
        """
        interface BaseProps {
          id: string
        }
        interface CardProps extends BaseProps, React.HTMLAttributes<HTMLDivElement> {
          title: string
        }
        """,
    )
    interface = source.get_interface("CardProps")
    assert interface is not None
    assert all(isinstance(item, TypeReference) for item in interface.extends)
    assert [item.name for item in interface.extends] == ["BaseProps", "React.HTMLAttributes"]


def test_declarations_imports_and_default_export(provider: SourceProvider) -> None:
    source = _parse(
        provider,
        """
        import React from 'react'
        import styles from './Card.module.scss'
        import './global.css'

        type Tone = 'a' | 'b'

        /** Card docs */
        const Card = React.memo(function Card({ tone = 'a', title }: CardProps) {
          return <div>{title}</div>
        })

        export default Card
        """,
    )

    assert [item.source for item in source.imports] == ["react", "./Card.module.scss", "./global.css"]
    alias = source.get_type_alias("Tone")
    assert alias is not None and isinstance(alias.value, UnionType)

    variable = source.get_variable("Card")
    assert variable is not None
    assert [comment.text for comment in variable.statement_comments] == ["/** Card docs */"]
    assert isinstance(variable.initializer, CallExpression)
    assert variable.initializer.callee == "React.memo"
    inner = variable.initializer.arguments[0]
    assert isinstance(inner, FunctionExpression)
    assert inner.function is not None
    assert inner.function.parameters[0].bindings == {"tone": "a", "title": None}
    assert inner.function.parameters[0].type_text == "CardProps"

    assert isinstance(source.default_export, Identifier)
    assert source.default_export.name == "Card"


def test_exported_default_function_is_recorded(provider: SourceProvider) -> None:
    source = _parse(
        provider,
        """
        /** Badge docs */
        export default function Badge({ size = 2 }: BadgeProps) {
          return <span>{size}</span>
        }
        """,
    )
    assert isinstance(source.default_export, FunctionDecl)
    assert source.default_export.name == "Badge"
    assert source.get_function("Badge") is source.default_export
    assert source.default_export.parameters[0].bindings == {"size": "2"}


def test_syntax_errors_raise_source_parse_error(provider: SourceProvider) -> None:
    with pytest.raises(SourceParseError):
        provider.parse("interface BrokenProps {\n  label: string\n", "Broken.tsx")


def test_unreadable_file_raises_source_parse_error(provider: SourceProvider, tmp_path: Path) -> None:
    with pytest.raises(SourceParseError):
        provider.load(tmp_path / "Missing.tsx")


def test_provider_reuse_does_not_leak_declarations(provider: SourceProvider) -> None:
    first = provider.parse("interface AProps { a: string }\n", "A.tsx")
    second = provider.parse("interface BProps { b: string }\n", "B.tsx")

    assert set(first.interfaces) == {"AProps"}
    assert set(second.interfaces) == {"BProps"}
