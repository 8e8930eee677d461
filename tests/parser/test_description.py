from __future__ import annotations

import textwrap

from docspark.parser.description import (
    DescriptionResolver,
    is_component_wrapper_type,
    is_pascal_case,
    resolve_description,
    score_candidate,
)
from docspark.parser.source import SourceProvider, VariableDecl


def _describe(provider: SourceProvider, name: str, content: str) -> str:
    source = provider.parse(textwrap.dedent(content).lstrip("\n"), f"{name}.tsx")
    return resolve_description(source, name)


def test_function_declaration_docs_win(provider: SourceProvider) -> None:
    description = _describe(
        provider,
        "Message",
        """
        /** Shows an inline message. */
        export function Message() {
          return null
        }
        """,
    )
    assert description == "Shows an inline message."


def test_forward_ref_inner_function_docs(provider: SourceProvider) -> None:
    description = _describe(
        provider,
        "Input",
        """
        export const Input = forwardRef(
          /** Text input with a label. */
          function Input(props, ref) {
            return <input ref={ref} />
          }
        )
        """,
    )
    assert description == "Text input with a label."


def test_wrapper_call_falls_back_to_statement_docs(provider: SourceProvider) -> None:
    description = _describe(
        provider,
        "Avatar",
        """
        /** Round user picture. */
        export const Avatar = memo((props) => <img />)
        """,
    )
    assert description == "Round user picture."


def test_default_export_wrapper_is_followed(provider: SourceProvider) -> None:
    description = _describe(
        provider,
        "Widget",
        """
        /** Inner widget docs. */
        function Inner() {
          return null
        }

        export default memo(Inner)
        """,
    )
    assert description == "Inner widget docs."


def test_only_the_closest_jsdoc_is_used(provider: SourceProvider) -> None:
    description = _describe(
        provider,
        "Badge",
        """
        /** File header. */
        /** Small status badge. */
        export const Badge = () => null
        """,
    )
    assert description == "Small status badge."


def test_best_candidate_prefers_name_match_and_wrapper_type(provider: SourceProvider) -> None:
    source = provider.parse(
        textwrap.dedent(
            """
            /** A rather long description for an unrelated value */
            const helperThing = 1

            /** Alpha description text */
            const Alpha = () => null

            /** Beta */
            const WidgetBeta: React.FC = () => null
            """
        ),
        "Widget.tsx",
    )
    resolver = DescriptionResolver(source, "Widget")
    best = resolver.best_candidate()

    assert best is not None
    assert best.name == "WidgetBeta"
    assert best.score == len("Beta") + 10 + 25 + 100
    assert resolver.resolve() == "Beta"


def test_tied_candidates_keep_the_first_one(provider: SourceProvider) -> None:
    description = _describe(
        provider,
        "Zed",
        """
        /** First one */
        const One = () => null

        /** Other one */
        const Two = () => null
        """,
    )
    assert description == "First one"


def test_cyclic_references_resolve_to_empty(provider: SourceProvider) -> None:
    description = _describe(
        provider,
        "Loop",
        """
        const Loop = Other
        const Other = Loop
        export default Loop
        """,
    )
    assert description == ""


def test_undocumented_component_has_empty_description(provider: SourceProvider) -> None:
    assert _describe(provider, "Plain", "export const Plain = () => null\n") == ""


def test_score_candidate_components() -> None:
    variable = VariableDecl(name="ButtonBase", type_text="React.FC<ButtonProps>", initializer=None)
    assert score_candidate(variable, "abc", "Button") == 3 + 10 + 25 + 100

    lower = VariableDecl(name="thing", type_text=None, initializer=None)
    assert score_candidate(lower, "abc", "Button") == 3


def test_name_helpers() -> None:
    assert is_pascal_case("Button")
    assert not is_pascal_case("button")
    assert not is_pascal_case("Button_Base")
    assert is_component_wrapper_type("React.FC<Props>")
    assert is_component_wrapper_type("ForwardRefExoticComponent<Props>")
    assert not is_component_wrapper_type("string")
    assert not is_component_wrapper_type(None)
