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

"""Unit tests for report building and rendering."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from tests.fixtures.builders import CATEGORY_EXAMPLES, trace_record, write_trace_dir
from typetally.analysis.stats import TraceAggregator, UnknownSampleCollector
from typetally.core.categories import Category
from typetally.core.model_types import ReportFormat
from typetally.report import (
    TraceReport,
    build_report,
    iter_file_reports,
    render_json,
    render_markdown,
    render_report,
    render_text,
    render_text_file,
    render_text_samples,
)

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


@pytest.fixture
def sample_report(tmp_path: Path) -> TraceReport:
    trace_dir = write_trace_dir(
        tmp_path / "trace",
        {
            "types.json": [
                CATEGORY_EXAMPLES[Category.UNION],
                CATEGORY_EXAMPLES[Category.UNKNOWN],
                trace_record(30, "NumberLiteral"),
            ],
            "trace.json": [{"ph": "X"}],
        },
    )
    return build_report(trace_dir)


def test_iter_file_reports_is_lazy(tmp_path: Path) -> None:
    trace_dir = write_trace_dir(tmp_path, {"types.1.json": [], "types.2.json": "not json"})
    reports = iter_file_reports(trace_dir, aggregator=TraceAggregator())
    first = next(reports)
    assert first.name == "types.1.json"
    assert first.stats.total == 0


def test_build_report_collects_files_and_samples(sample_report: TraceReport) -> None:
    assert [entry.name for entry in sample_report.files] == ["types.json"]
    stats = sample_report.files[0].stats
    assert stats.total == 3
    assert stats.excluded == 1
    assert [sample.id for sample in sample_report.unknown_samples] == [19]
    assert sample_report.unknown_seen == 1


def test_render_text_layout(sample_report: TraceReport) -> None:
    text = render_text(sample_report)
    lines = text.splitlines()
    assert lines[0] == "types.json:"
    assert lines[1] == ""
    assert lines[2] == "  files: 1"
    assert lines[3] == "  total: 3"
    assert "  unions: 1" in lines
    assert "  unknown: 1" in lines
    assert "Unknown type samples (1 of 1):" in lines
    assert '  "id": 19,' in lines
    assert text.endswith("\n")


def test_render_text_empty_report(tmp_path: Path) -> None:
    assert render_text(build_report(tmp_path)) == ""


def test_render_json_round_trips_through_schema(sample_report: TraceReport) -> None:
    payload = json.loads(render_json(sample_report))
    assert payload["schemaVersion"] == 1
    assert payload["files"][0]["name"] == "types.json"
    stats = payload["files"][0]["stats"]
    assert list(stats)[:3] == ["files", "total", "stringLiterals"]
    assert stats["unions"] == 1
    assert stats["propertiesAccessed"] == 0
    assert payload["unknownSamples"][0]["record"] == {"id": 19, "flags": ["Object"]}
    assert payload["unknownSeen"] == 1


def test_render_markdown_has_table_per_file(sample_report: TraceReport) -> None:
    markdown = render_markdown(sample_report)
    assert "## types.json" in markdown
    assert "| Union | `unions` | 1 |" in markdown
    assert "| Total | `total` | 3 |" in markdown
    assert "```json" in markdown


def test_render_report_dispatches(sample_report: TraceReport) -> None:
    assert render_report(sample_report, ReportFormat.TEXT) == render_text(sample_report)
    assert render_report(sample_report, "json") == render_json(sample_report)
    assert render_report(sample_report, "md") == render_markdown(sample_report)


def test_sample_limit_is_respected(tmp_path: Path) -> None:
    trace_dir = write_trace_dir(tmp_path, {"types.json": [trace_record(index, "Object") for index in range(4)]})
    report = build_report(trace_dir, aggregator=TraceAggregator(collector=UnknownSampleCollector(2)))
    assert len(report.unknown_samples) == 2
    assert report.unknown_seen == 4
    assert "Unknown type samples (2 of 4):" in render_text(report)


def test_render_text_is_file_blocks_then_samples(sample_report: TraceReport) -> None:
    block = render_text_file(sample_report.files[0])
    assert block.startswith("types.json:\n\n  files: 1\n")
    assert block.endswith("  unknown: 1\n")
    samples = render_text_samples(sample_report.unknown_samples, sample_report.unknown_seen)
    assert samples.startswith("Unknown type samples (1 of 1):\n\n{")
    assert render_text(sample_report) == block + "\n" + samples


def test_render_text_samples_empty() -> None:
    assert render_text_samples((), 3) == ""
