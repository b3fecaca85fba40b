# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point and orchestration for typetally commands."""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
from collections.abc import Callable, Sequence
from textwrap import dedent
from typing import TYPE_CHECKING, Final

from typetally import __version__
from typetally.analysis.classifier import CLASSIFICATION_ORDER
from typetally.cli.commands import report as report_command
from typetally.cli.helpers import echo, emit_output, register_argument, report_error
from typetally.core.categories import CATEGORY_LABELS
from typetally.core.model_types import LogComponent, LogFormat
from typetally.exceptions import TypetallyError
from typetally.logging import LOG_FORMAT_ENV, LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from typetally.report import report_json_schema

if TYPE_CHECKING:
    from typetally.cli.types import SubparserCollection

logger: logging.Logger = logging.getLogger("typetally.cli")

TYPETALLY_VERSION: Final[str] = __version__

CONFIG_TEMPLATE: Final[str] = dedent(
    """\
    # typetally configuration template
    # Save this file as typetally.toml next to the trace directories you analyse,
    # or move the tables under [tool.typetally] in pyproject.toml.
    config_version = 0

    [report]
    # Output format: text, json, or markdown.
    format = "text"
    # Unknown records kept as samples across the whole run.
    sample_limit = 5
    # Only files whose name starts with this prefix are read.
    trace_prefix = "types."

    [exclusions]
    # Records declared in these locations are counted in `total` but never classified.
    node_modules = true
    test_files = true          # *test.ts, *test.utils.ts, *integration.ts
    config_files = true        # *config.ts
    declaration_files = true   # *.d.ts
    # Record-level noise filters.
    arrow_functions = true     # display text contains "=>"
    global_this = true         # the globalThis symbol
    non_string_literals = true # number, boolean, enum, and bigint literals
    # Additional regular expressions searched in the declaring file path.
    extra_path_patterns = []
    # extra_path_patterns = ["/generated/", "\\\\.stories\\\\.ts$"]
    """,
)


def write_config_template(path: pathlib.Path, *, force: bool) -> int:
    """Write the typetally configuration template to a file.

    Args:
        path: Destination of the configuration file.
        force: Overwrite an existing file when True.

    Returns:
        int: Exit code (0 for success, 1 when the file exists and `force` is off).
    """
    if path.exists() and not force:
        echo(f"[typetally] Refusing to overwrite existing file: {path}", err=True)
        echo("Use --force if you want to replace it.", err=True)
        return 1
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    echo(f"[typetally] Wrote starter config to {path}")
    return 0


CommandHandler = Callable[[argparse.Namespace], int]


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for the typetally command-line interface.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: ``0`` on success, ``1`` when a typetally error stops the command.
        Usage errors exit with status ``2`` through argparse.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        echo(f"typetally {TYPETALLY_VERSION}")
        return 0
    if args.command is None:
        parser.error("No command provided.")
    _initialize_logging(args.log_format, args.log_level)
    handler = _command_handlers().get(args.command)
    if handler is None:
        parser.error(f"Unknown command {args.command}")
    try:
        return handler(args)
    except TypetallyError as exc:
        logger.debug(
            "Command %s failed",
            args.command,
            exc_info=True,
            extra=structured_extra(component=LogComponent.CLI, details={"command": args.command}),
        )
        return report_error(exc)


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with global options and every subcommand."""
    parser = argparse.ArgumentParser(
        prog="typetally",
        description="Classify and count the type records of TypeScript compiler traces.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        parser,
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Logging output format (default: $TYPETALLY_LOG_FORMAT or text).",
    )
    register_argument(
        parser,
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging verbosity (default: $TYPETALLY_LOG_LEVEL or warning).",
    )
    register_argument(
        parser,
        "--version",
        action="store_true",
        help="Print the typetally version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command")

    report_command.register_report_command(subparsers)
    _register_categories_command(subparsers)
    _register_schema_command(subparsers)
    _register_init_command(subparsers)
    return parser


def _register_categories_command(subparsers: SubparserCollection) -> None:
    categories = subparsers.add_parser(
        "categories",
        help="List categories in classification order",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        categories,
        "--json",
        action="store_true",
        help="Emit the list as JSON.",
    )


def _register_schema_command(subparsers: SubparserCollection) -> None:
    schema = subparsers.add_parser(
        "schema",
        help="Print the JSON Schema of `typetally report --format json`",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        schema,
        "-o",
        "--output",
        type=pathlib.Path,
        default=None,
        help="Write the schema to this file instead of stdout.",
    )


def _register_init_command(subparsers: SubparserCollection) -> None:
    """Register the ``init`` subcommand, which writes a starter ``typetally.toml``."""
    init = subparsers.add_parser(
        "init",
        help="Generate a starter configuration file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        init,
        "--path",
        dest="output",
        type=pathlib.Path,
        default=pathlib.Path("typetally.toml"),
        help="Destination for the generated configuration file.",
    )
    register_argument(
        init,
        "--force",
        action="store_true",
        help="Overwrite the output file if it already exists.",
    )


def _initialize_logging(log_format: str | None, log_level: str | None) -> None:
    try:
        _ = configure_logging(log_format, log_level=log_level)
    except ValueError as exc:
        echo(f"[typetally] Warning: {exc} in ${LOG_FORMAT_ENV}; falling back to text logs", err=True)
        _ = configure_logging(LogFormat.TEXT, log_level=log_level)


def _command_handlers() -> dict[str, CommandHandler]:
    return {
        "categories": _execute_categories,
        "init": _execute_init,
        "report": report_command.execute_report,
        "schema": _execute_schema,
    }


def _execute_categories(args: argparse.Namespace) -> int:
    rows = [
        {"position": index, "key": category.value, "label": CATEGORY_LABELS[category]}
        for index, category in enumerate(CLASSIFICATION_ORDER, start=1)
    ]
    if args.json:
        echo(json.dumps(rows, indent=2))
        return 0
    width = max(len(str(row["key"])) for row in rows)
    for row in rows:
        echo(f"{row['position']:>2}. {str(row['key']).ljust(width)}  {row['label']}")
    return 0


def _execute_schema(args: argparse.Namespace) -> int:
    emit_output(json.dumps(report_json_schema(), indent=2) + "\n", args.output)
    return 0


def _execute_init(args: argparse.Namespace) -> int:
    return write_config_template(args.output, force=args.force)


__all__ = ["CONFIG_TEMPLATE", "main", "write_config_template"]
