# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the luastubs command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from luastubs.config.settings import CONFIG_FILE_NAME, ConfigError, ExportConfig, default_config_text, load_config
from luastubs.export.dumper import ExportError, XLuaDumper
from luastubs.model.artifact import TypeModelError, read_type_model
from luastubs.model.declarations import TypeDeclaration
from luastubs.validation.checks import validate

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the luastubs CLI."""
    parser = argparse.ArgumentParser(
        prog="luastubs",
        description="luastubs - EmmyLua annotation stubs for xLua",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a default configuration file",
        description=f"Create a default {CONFIG_FILE_NAME} in a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration to (default: current directory)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Validate a type model",
        description="Load a type model and report consistency errors and warnings.",
    )
    check_parser.add_argument("model", help="Path to the JSON type model")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate Lua annotation files from a type model",
        description=(
            "Export every declaration of a type model as EmmyLua annotations, split into "
            "numbered files, plus an alias file for referenced types that were not exported."
        ),
    )
    generate_parser.add_argument("model", help="Path to the JSON type model")
    generate_parser.add_argument(
        "-o",
        "--output",
        help="Output directory (default: 'output-directory' from the configuration)",
    )
    generate_parser.add_argument(
        "-c",
        "--config",
        help=f"Configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    generate_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every written file and the traceback of failed declarations",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(default_config_text(), encoding="utf-8")
    print(f"Wrote default configuration to '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    declarations = _load_model(Path(args.model))
    if declarations is None:
        return 1

    print(f"Checking {len(declarations)} type declaration(s)...")
    if not _report_validation(declarations):
        return 1

    print("No issues found.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = _load_export_config(args.config)
    if config is None:
        return 1

    output = args.output or config.output_directory
    if not output:
        print(
            "Error: no output directory given. Use --output or set 'output-directory' in the configuration.",
            file=sys.stderr,
        )
        return 1

    declarations = _load_model(Path(args.model))
    if declarations is None:
        return 1

    if not _report_validation(declarations):
        return 1

    out_dir = Path(output).resolve()
    print(f"Exporting {len(declarations)} type declaration(s) to '{out_dir}'...")
    try:
        result = XLuaDumper(config).dump(declarations, out_dir)
    except ExportError as exc:
        print(f"Fatal error during export: {exc}", file=sys.stderr)
        return 1

    for failure in result.failures:
        print(f"Error dumping type '{failure.name}': {failure.message}", file=sys.stderr)

    print(f"Successfully generated {result.files_written} Lua definition file(s).")
    print(f"Found {result.unexported_count} unexported type(s) referenced in exported types.")
    if result.fallback_file is not None:
        print(f"Exported {result.unexported_count} unexported type alias(es) to {result.fallback_file.name}")
    return 0


def _load_export_config(config_arg: str | None) -> ExportConfig | None:
    """Load the explicit configuration file, or the one in the current directory when present."""
    if config_arg is not None:
        config_path = Path(config_arg)
    else:
        config_path = Path.cwd() / CONFIG_FILE_NAME
        if not config_path.exists():
            return ExportConfig()

    try:
        return load_config(config_path)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _load_model(model_path: Path) -> list[TypeDeclaration] | None:
    try:
        return read_type_model(model_path)
    except TypeModelError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _report_validation(declarations: list[TypeDeclaration]) -> bool:
    """Print validation findings; return False if the model has errors."""
    result = validate(declarations)
    for warning in result.warnings:
        print(f"Warning: {warning.message}")
    for error in result.errors:
        print(f"Error: {error.message}", file=sys.stderr)
    return not result.has_errors
