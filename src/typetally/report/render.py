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

"""Render a ``TraceReport`` as text, JSON, or Markdown."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from typetally.core.categories import CATEGORY_LABELS, FILES_KEY, REPORT_CATEGORY_ORDER, TOTAL_KEY
from typetally.core.model_types import ReportFormat
from typetally.json import normalize_enums_for_json

from .models import report_to_model

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typetally.core.shapes import UnknownType

    from .builder import FileReport, TraceReport


def _sample_json(sample: UnknownType) -> str:
    return json.dumps(normalize_enums_for_json(dict(sample.record.raw)), indent=2, ensure_ascii=False)


def _samples_heading(samples: Sequence[UnknownType], seen: int) -> str:
    return f"Unknown type samples ({len(samples)} of {seen})"


def render_text_file(file_report: FileReport) -> str:
    """Render the counters of one trace file.

    The block is a ``name:`` header, a blank line, and one ``key: value``
    line per counter in report order. Blocks are separated by a blank line.
    """
    lines = [f"{file_report.name}:", ""]
    lines.extend(f"  {key}: {value}" for key, value in file_report.stats.as_dict().items())
    return "\n".join(lines) + "\n"


def render_text_samples(samples: Sequence[UnknownType], seen: int) -> str:
    """Render the retained unknown samples, or ``""`` when there are none."""
    if not samples:
        return ""
    body = "\n\n".join(_sample_json(sample) for sample in samples)
    return f"{_samples_heading(samples, seen)}:\n\n{body}\n"


def render_text(report: TraceReport) -> str:
    """Render per-file counters followed by the retained unknown samples."""
    blocks = [render_text_file(file_report) for file_report in report.files]
    samples = render_text_samples(report.unknown_samples, report.unknown_seen)
    if samples:
        blocks.append(samples)
    return "\n".join(blocks)


def render_json(report: TraceReport) -> str:
    """Render `report` as JSON validated against ``TraceReportModel``."""
    model = report_to_model(report)
    return model.model_dump_json(by_alias=True, indent=2) + "\n"


def _markdown_table(file_report: FileReport) -> list[str]:
    stats = file_report.stats
    lines = [
        f"## {file_report.name}",
        "",
        "| Counter | Key | Count |",
        "| --- | --- | ---: |",
        f"| Files | `{FILES_KEY}` | {stats.files} |",
        f"| Total | `{TOTAL_KEY}` | {stats.total} |",
    ]
    lines.extend(
        f"| {CATEGORY_LABELS[category]} | `{category.value}` | {stats.count(category)} |"
        for category in REPORT_CATEGORY_ORDER
    )
    lines.append("")
    return lines


def render_markdown(report: TraceReport) -> str:
    """Render one Markdown table per trace file plus the unknown samples."""
    lines = ["# Type trace report", "", f"Directory: `{report.directory}`", ""]
    if not report.files:
        lines.extend(["_No trace files found._", ""])
    for file_report in report.files:
        lines.extend(_markdown_table(file_report))
    if report.unknown_samples:
        lines.extend([f"## {_samples_heading(report.unknown_samples, report.unknown_seen)}", ""])
        for sample in report.unknown_samples:
            lines.extend(["```json", _sample_json(sample), "```", ""])
    return "\n".join(lines).rstrip("\n") + "\n"


def render_report(report: TraceReport, fmt: ReportFormat | str = ReportFormat.TEXT) -> str:
    """Render `report` in the requested format.

    Args:
        report: Report produced by ``build_report``.
        fmt: Output format (enum or string, ``md`` accepted for Markdown).

    Returns:
        Rendered report text, newline terminated (empty for an empty text
        report).

    Raises:
        ValueError: If `fmt` names an unsupported format.
    """
    selected = fmt if isinstance(fmt, ReportFormat) else ReportFormat.from_str(fmt)
    match selected:
        case ReportFormat.JSON:
            return render_json(report)
        case ReportFormat.MARKDOWN:
            return render_markdown(report)
        case _:
            return render_text(report)


__all__ = [
    "render_json",
    "render_markdown",
    "render_report",
    "render_text",
    "render_text_file",
    "render_text_samples",
]
