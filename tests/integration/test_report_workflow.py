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

"""End-to-end tests running the report pipeline over a trace directory."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from tests.fixtures.builders import CATEGORY_EXAMPLES, declared_in, trace_record, write_trace_dir
from typetally.cli import app
from typetally.core.categories import Category
from typetally.report import build_report, render_text

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.integration


def _project_trace(root: Path) -> Path:
    app_records = [
        *CATEGORY_EXAMPLES.values(),
        trace_record(200, "Object", display="(req: Request) => Response"),
        trace_record(201, "Object", symbolName="Array", firstDeclaration=declared_in("/ts/lib.es5.d.ts")),
        trace_record(202, "BooleanLiteral", intrinsicName="true"),
        trace_record(203, "Object", symbolName="globalThis"),
        {"id": 204},
        "garbage",
        *(trace_record(300 + index, "Object") for index in range(4)),
    ]
    lib_records = [
        trace_record(
            1,
            "Object",
            symbolName="Thing",
            firstDeclaration=declared_in("/project/node_modules/thing/index.ts"),
        ),
        *(trace_record(400 + index, "Object") for index in range(3)),
    ]
    return write_trace_dir(
        root / "trace",
        {
            "types.json": app_records,
            "types.1.json": lib_records,
            "trace.json": [{"ph": "B", "name": "checkSourceFile"}],
            "legend.json": [{"configFilePath": "/project/tsconfig.json"}],
        },
    )


def test_build_report_over_multiple_files(tmp_path: Path) -> None:
    report = build_report(_project_trace(tmp_path))
    assert [entry.name for entry in report.files] == ["types.1.json", "types.json"]

    lib_stats, app_stats = (entry.stats for entry in report.files)
    assert lib_stats.total == 4
    assert lib_stats.excluded == 1
    assert lib_stats.count(Category.UNKNOWN) == 3

    # 19 category examples + 4 excluded + 4 unknowns; the two malformed entries are dropped
    assert app_stats.total == 27
    assert app_stats.excluded == 4
    assert app_stats.count(Category.UNKNOWN) == 5
    for category in Category:
        if category is not Category.UNKNOWN:
            assert app_stats.count(category) == 1, category
    assert app_stats.files == 1

    # The sample cap spans the run: 3 from the first file, 2 from the second.
    assert [sample.id for sample in report.unknown_samples] == [400, 401, 402, 19, 300]
    assert report.unknown_seen == 8


def test_cli_json_report_validates(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    trace_dir = _project_trace(tmp_path)
    assert app.main(["report", str(trace_dir), "--format", "json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [entry["name"] for entry in payload["files"]] == ["types.1.json", "types.json"]
    assert payload["files"][1]["stats"]["total"] == 27
    assert len(payload["unknownSamples"]) == 5


def test_cli_honours_config_exclusions(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    _ = (tmp_path / "pyproject.toml").write_text(
        "[tool.typetally.exclusions]\nnode_modules = false\n",
        encoding="utf-8",
    )
    trace_dir = _project_trace(tmp_path)
    assert app.main(["report", str(trace_dir), "--format", "json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    lib_stats = payload["files"][0]["stats"]
    assert lib_stats["total"] == 4
    assert lib_stats["types"] == 1


def test_cli_text_report_keeps_files_before_unreadable_one(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    trace_dir = write_trace_dir(
        tmp_path / "trace",
        {"types.1.json": [trace_record(1, "Union")], "types.2.json": "{not json"},
    )
    assert app.main(["report", str(trace_dir)]) == 1
    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[:4] == ["types.1.json:", "", "  files: 1", "  total: 1"]
    assert "  unions: 1" in lines
    assert "types.2.json:" not in lines
    assert "(TT203)" in captured.err
    assert "types.2.json" in captured.err


def test_cli_text_report_to_file_keeps_partial_output(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    trace_dir = write_trace_dir(
        tmp_path / "trace",
        {"types.1.json": [trace_record(1, "Union")], "types.2.json": "{not json"},
    )
    destination = tmp_path / "out" / "report.txt"
    assert app.main(["report", str(trace_dir), "--output", str(destination)]) == 1
    assert destination.read_text(encoding="utf-8").startswith("types.1.json:\n\n  files: 1\n")
    assert "Wrote" not in capsys.readouterr().err


def test_cli_text_report_matches_buffered_rendering(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    trace_dir = _project_trace(tmp_path)
    assert app.main(["report", str(trace_dir)]) == 0
    assert capsys.readouterr().out == render_text(build_report(trace_dir))


def test_cli_missing_directory_does_not_create_output(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    destination = tmp_path / "report.txt"
    assert app.main(["report", str(tmp_path / "missing"), "--output", str(destination)]) == 1
    assert not destination.exists()
    assert "(TT201)" in capsys.readouterr().err
