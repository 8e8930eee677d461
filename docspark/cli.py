"""CLI entrypoints for docspark commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .builder import build_documentation
from .config import ConfigError, load_config
from .generator import VariantGenerator
from .logging import configure_logging
from .parser import ComponentParser


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    verbose_default: object = argparse.SUPPRESS if suppress_default else False
    log_file_default: object = argparse.SUPPRESS if suppress_default else None
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=verbose_default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=log_file_default,
        help="Also write log records to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docspark",
        description="Generate component documentation metadata and variant examples.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Extract metadata for every component and write the JSON catalog.",
    )
    _add_logging_options(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root or docspark.yml path (defaults to current directory).",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Override the output directory from the configuration.",
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the metadata and variants of a single component file.",
    )
    _add_logging_options(inspect_parser, suppress_default=True)
    inspect_parser.add_argument("file", help="Component source file to inspect.")
    inspect_parser.add_argument(
        "--max-permutations",
        type=int,
        default=20,
        help="Maximum number of variants to print.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docspark commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "build":
        try:
            config = load_config(Path(args.path))
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        if args.output:
            config.output.directory = args.output
        try:
            result = build_documentation(config)
        except OSError as exc:
            parser.exit(1, f"docspark build failed: {exc}\nRun with --verbose for more details.\n")
        print(
            f"Documented {result.component_count} components "
            f"({result.variant_count} variants, {result.css_variable_count} CSS variables) "
            f"in {_relativize(config.output_dir)}"
        )
    elif args.command == "inspect":
        file_path = Path(args.file)
        if not file_path.is_file():
            parser.exit(1, f"{file_path} does not exist\n")
        component = ComponentParser().parse_component(file_path)
        if component is None:
            parser.exit(1, f"No component found in {file_path}\n")
        variants = VariantGenerator(max_permutations=args.max_permutations).generate_variants(component)
        payload = {
            "component": component.to_dict(),
            "variants": [variant.to_dict() for variant in variants],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
