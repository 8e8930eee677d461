"""CLI parser behaviour tests."""

from __future__ import annotations

import json
import logging

import pytest

from docspark.cli import _build_parser, main
from tests._fixtures.component_builder import ComponentBuilder

BADGE_SOURCE = """
/** Small status label. */
export function Badge({ tone = 'info' }: BadgeProps) {
  return <span>{tone}</span>
}

interface BadgeProps {
  /**
   * @renderVariants true
   */
  tone?: 'info' | 'success'
}
"""


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "--verbose"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_output_override() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "site", "-o", "out"])
    assert args.path == "site"
    assert args.output == "out"


def test_cli_inspect_arguments() -> None:
    parser = _build_parser()
    args = parser.parse_args(["inspect", "Button.tsx", "--max-permutations", "3"])
    assert args.command == "inspect"
    assert args.file == "Button.tsx"
    assert args.max_permutations == 3


def test_build_command_writes_catalog(component_builder: ComponentBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    component_builder.write({"src/components/Badge.tsx": BADGE_SOURCE})
    root = component_builder.path()

    main(["build", str(root), "--output", "catalog"])

    out = capsys.readouterr().out
    assert "Documented 1 components (2 variants, 0 CSS variables)" in out
    assert (root / "catalog" / "metadata" / "Badge.json").exists()


def test_build_command_reports_invalid_config(component_builder: ComponentBuilder) -> None:
    component_builder.write({"docspark.yml": "variants:\n  maxPermutations: -1\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(component_builder.path())])
    assert excinfo.value.code == 1


def test_inspect_prints_component_json(
    component_builder: ComponentBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    path = component_builder.component("Badge.tsx", BADGE_SOURCE)

    main(["inspect", str(path)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["component"]["name"] == "Badge"
    assert payload["component"]["description"] == "Small status label."
    assert payload["component"]["props"]["tone"]["values"] == ["info", "success"]
    assert [variant["title"] for variant in payload["variants"]] == ['tone="info"', 'tone="success"']


def test_inspect_rejects_non_components(component_builder: ComponentBuilder) -> None:
    path = component_builder.component("util.tsx", "export const add = (a: number, b: number) => a + b\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["inspect", str(path)])
    assert excinfo.value.code == 1


def test_log_file_option_receives_build_progress(component_builder: ComponentBuilder) -> None:
    component_builder.write({"src/components/Badge.tsx": BADGE_SOURCE})
    root = component_builder.path()
    log_file = root / "build.log"

    main(["build", str(root), "--log-file", str(log_file)])

    logger = logging.getLogger("docspark")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    assert "Found 1 candidate component files" in log_file.read_text(encoding="utf-8")


def test_cli_accepts_log_file_before_command() -> None:
    args = _build_parser().parse_args(["--log-file", "docspark.log", "inspect", "Badge.tsx"])
    assert args.log_file == "docspark.log"
