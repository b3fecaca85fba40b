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

"""``typetally report``: classify a trace directory and print the counters."""

from __future__ import annotations

import argparse
import logging
import pathlib
from typing import TYPE_CHECKING

from typetally.analysis.stats import TraceAggregator, UnknownSampleCollector
from typetally.cli.helpers import emit_output, open_output, register_argument
from typetally.config import load_config_with_metadata
from typetally.core.model_types import LogComponent, ReportFormat
from typetally.logging import structured_extra
from typetally.report import (
    build_report,
    ensure_trace_directory,
    iter_file_reports,
    render_report,
    render_text_file,
    render_text_samples,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typetally.cli.types import SubparserCollection
    from typetally.config import ReportSettings

logger: logging.Logger = logging.getLogger("typetally.cli")


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        msg = f"expected an integer, got {raw!r}"
        raise argparse.ArgumentTypeError(msg) from exc
    if value < 0:
        msg = f"must be >= 0 (got {value})"
        raise argparse.ArgumentTypeError(msg)
    return value


def register_report_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Attach the ``typetally report`` command to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying global options.
    """
    report = subparsers.add_parser(
        "report",
        help="Classify the type records of a tsc trace directory",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(
        report,
        "trace_dir",
        type=pathlib.Path,
        help="Directory written by `tsc --generateTrace`.",
    )
    register_argument(
        report,
        "-f",
        "--format",
        choices=[fmt.value for fmt in ReportFormat],
        default=None,
        help="Output format (default: the configured format, else text).",
    )
    register_argument(
        report,
        "-o",
        "--output",
        type=pathlib.Path,
        default=None,
        help="Write the report to this file instead of stdout.",
    )
    register_argument(
        report,
        "--sample-limit",
        type=_non_negative_int,
        default=None,
        help="Number of unknown records retained across the run (default: 5).",
    )
    register_argument(
        report,
        "--config",
        type=pathlib.Path,
        default=None,
        help="Configuration file to use instead of the standard search.",
    )


def _resolve_settings(args: argparse.Namespace, settings: ReportSettings) -> tuple[ReportFormat, int]:
    fmt = ReportFormat.from_str(args.format) if args.format else settings.format
    sample_limit = args.sample_limit if args.sample_limit is not None else settings.sample_limit
    return fmt, sample_limit


def _stream_text_report(
    trace_dir: pathlib.Path,
    *,
    aggregator: TraceAggregator,
    prefix: str,
    output: pathlib.Path | None,
) -> tuple[int, int, int]:
    """Print each file's counters as soon as the file is classified.

    Returns:
        Files processed, valid records, and excluded records.
    """
    files = total = excluded = 0
    directory = ensure_trace_directory(trace_dir)
    with open_output(output) as stream:
        for file_report in iter_file_reports(directory, aggregator=aggregator, prefix=prefix):
            if files:
                _ = stream.write("\n")
            _ = stream.write(render_text_file(file_report))
            files += 1
            total += file_report.stats.total
            excluded += file_report.stats.excluded
        collector = aggregator.collector
        samples = render_text_samples(collector.samples, collector.seen)
        if samples:
            _ = stream.write("\n" + samples)
    return files, total, excluded


def _emit_buffered_report(
    trace_dir: pathlib.Path,
    *,
    aggregator: TraceAggregator,
    prefix: str,
    fmt: ReportFormat,
    output: pathlib.Path | None,
) -> tuple[int, int, int]:
    report = build_report(trace_dir, aggregator=aggregator, prefix=prefix)
    emit_output(render_report(report, fmt), output)
    return (
        len(report.files),
        sum(entry.stats.total for entry in report.files),
        sum(entry.stats.excluded for entry in report.files),
    )


def execute_report(args: argparse.Namespace) -> int:
    """Execute the report command.

    Text reports are written file by file, so the counters of files already
    classified survive a later unreadable file. JSON and Markdown need the
    whole run and are rendered once every file has been processed.

    Args:
        args: Parsed CLI namespace.

    Returns:
        ``0`` once the report has been emitted.

    Raises:
        TypetallyError: If the configuration or the trace directory is unusable.
    """
    loaded = load_config_with_metadata(args.config)
    fmt, sample_limit = _resolve_settings(args, loaded.config.report)
    aggregator = TraceAggregator(
        policy=loaded.config.exclusions,
        collector=UnknownSampleCollector(sample_limit),
    )
    prefix = loaded.config.report.trace_prefix
    if fmt is ReportFormat.TEXT:
        files, total, excluded = _stream_text_report(
            args.trace_dir,
            aggregator=aggregator,
            prefix=prefix,
            output=args.output,
        )
    else:
        files, total, excluded = _emit_buffered_report(
            args.trace_dir,
            aggregator=aggregator,
            prefix=prefix,
            fmt=fmt,
            output=args.output,
        )
    logger.info(
        "Processed %d trace file(s) from %s",
        files,
        args.trace_dir,
        extra=structured_extra(
            component=LogComponent.CLI,
            path=args.trace_dir,
            total=total,
            excluded=excluded,
            details={"format": fmt.value, "unknown_seen": aggregator.collector.seen},
        ),
    )
    return 0


__all__ = ["execute_report", "register_report_command"]
