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

"""Report driver: run the classification pipeline over a trace directory."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typetally.analysis.stats import TraceAggregator
from typetally.core.model_types import LogComponent
from typetally.logging import structured_extra

from .discovery import TRACE_FILE_PREFIX, discover_trace_files, load_trace_records

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from typetally.analysis.stats import TraceStats
    from typetally.core.shapes import UnknownType

logger: logging.Logger = logging.getLogger("typetally.report")


@dataclass(frozen=True, slots=True)
class FileReport:
    """Statistics for a single trace file.

    Attributes:
        name: File name inside the trace directory.
        stats: Frozen per-file counters.
    """

    name: str
    stats: TraceStats


@dataclass(frozen=True, slots=True)
class TraceReport:
    """Result of a whole run over one trace directory.

    Attributes:
        directory: Trace directory that was processed.
        files: Per-file reports in processing order.
        unknown_samples: Retained unknown records (run-wide cap).
        unknown_seen: Unknown records encountered across the run.
    """

    directory: Path
    files: tuple[FileReport, ...]
    unknown_samples: tuple[UnknownType, ...]
    unknown_seen: int


def iter_file_reports(
    directory: Path,
    *,
    aggregator: TraceAggregator,
    prefix: str = TRACE_FILE_PREFIX,
) -> Iterator[FileReport]:
    """Yield one report per trace file, processing files sequentially.

    Each file is fully loaded, aggregated, and released before the next one
    is read. The aggregator's sample collector carries across files.

    Args:
        directory: Trace directory produced by the compiler.
        aggregator: Aggregator holding the exclusion policy and sample cap.
        prefix: File-name prefix identifying trace files.

    Yields:
        FileReport for each trace file in discovery order.

    Raises:
        TraceInputError: If the directory or any trace file cannot be used.
    """
    for path in discover_trace_files(directory, prefix=prefix):
        started = time.perf_counter()
        stats = aggregator.aggregate(load_trace_records(path), source=path)
        logger.info(
            "Classified %s: %d records, %d excluded",
            path.name,
            stats.total,
            stats.excluded,
            extra=structured_extra(
                component=LogComponent.REPORT,
                path=path,
                total=stats.total,
                excluded=stats.excluded,
                counts=stats.as_dict(),
                details={"duration_ms": round((time.perf_counter() - started) * 1000, 3)},
            ),
        )
        yield FileReport(name=path.name, stats=stats)


def build_report(
    directory: Path,
    *,
    aggregator: TraceAggregator | None = None,
    prefix: str = TRACE_FILE_PREFIX,
) -> TraceReport:
    """Process every trace file of `directory` and collect the results.

    Args:
        directory: Trace directory produced by the compiler.
        aggregator: Aggregator to use; a default one (standard exclusions,
            five unknown samples) is created when omitted.
        prefix: File-name prefix identifying trace files.

    Returns:
        TraceReport with per-file statistics and retained unknown samples.
    """
    active = aggregator if aggregator is not None else TraceAggregator()
    files = tuple(iter_file_reports(directory, aggregator=active, prefix=prefix))
    return TraceReport(
        directory=directory,
        files=files,
        unknown_samples=active.collector.samples,
        unknown_seen=active.collector.seen,
    )


__all__ = ["FileReport", "TraceReport", "build_report", "iter_file_reports"]
