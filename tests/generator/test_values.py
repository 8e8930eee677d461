from __future__ import annotations

import pytest

from docspark.generator.values import infer_default_value, parse_literal_value
from docspark.models import PropMetadata


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("'primary'", "primary"),
        ('"quoted"', "quoted"),
        ("true", True),
        ("false", False),
        ("42", 42),
        ("-1.5", -1.5),
        ("  padded  ", "padded"),
        ("<Icon name=\"star\" />", "<Icon name=\"star\" />"),
        ("'42'", 42),
    ],
)
def test_parse_literal_value(raw: str, expected: object) -> None:
    assert parse_literal_value(raw) == expected


def test_example_tag_wins_over_everything() -> None:
    meta = PropMetadata(type="number", default="3", example="7", values=["1"])
    assert infer_default_value("count", meta) == 7


def test_source_default_is_parsed() -> None:
    assert infer_default_value("variant", PropMetadata(type="Variant", default="primary")) == "primary"
    assert infer_default_value("disabled", PropMetadata(type="boolean", default="true")) is True


def test_empty_default_is_treated_as_absent() -> None:
    assert infer_default_value("label", PropMetadata(type="string", default="")) == "Example text"


def test_children_use_configured_text() -> None:
    meta = PropMetadata(type="React.ReactNode")
    assert infer_default_value("children", meta) == "Button Text"
    assert infer_default_value("children", meta, {"children": "Hello"}) == "Hello"


def test_array_types_get_placeholders() -> None:
    assert infer_default_value("items", PropMetadata(type="string[]")) == ["Option 1", "Option 2", "Option 3"]
    assert infer_default_value("ids", PropMetadata(type="Array<number>")) == [1, 2, 3]
    assert infer_default_value("rows", PropMetadata(type="Row[]")) == []


def test_primitive_types() -> None:
    assert infer_default_value("label", PropMetadata(type="string")) == "Example text"
    assert infer_default_value("count", PropMetadata(type="number")) == 42
    assert infer_default_value("open", PropMetadata(type="boolean")) is False


def test_node_types_fall_back_to_children_text() -> None:
    assert infer_default_value("icon", PropMetadata(type="ReactNode")) == "Button Text"
    assert infer_default_value("footer", PropMetadata(type="JSX.Element")) == "Button Text"


def test_union_values_and_unknown_types() -> None:
    assert infer_default_value("size", PropMetadata(type="Size", values=["sm", "lg"])) == "sm"
    assert infer_default_value("onClick", PropMetadata(type="() => void")) is None


def test_configured_defaults_override_builtins() -> None:
    meta = PropMetadata(type="string")
    assert infer_default_value("label", meta, {"string": "Custom"}) == "Custom"
