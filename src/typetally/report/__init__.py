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

"""Report driver: discover trace files, aggregate them, and render results."""

from __future__ import annotations

from .builder import FileReport, TraceReport, build_report, iter_file_reports
from .discovery import TRACE_FILE_PREFIX, discover_trace_files, ensure_trace_directory, load_trace_records
from .models import TraceReportModel, report_json_schema, report_to_model
from .render import (
    render_json,
    render_markdown,
    render_report,
    render_text,
    render_text_file,
    render_text_samples,
)

__all__ = [
    "TRACE_FILE_PREFIX",
    "FileReport",
    "TraceReport",
    "TraceReportModel",
    "build_report",
    "discover_trace_files",
    "ensure_trace_directory",
    "iter_file_reports",
    "load_trace_records",
    "render_json",
    "render_markdown",
    "render_report",
    "render_text",
    "render_text_file",
    "render_text_samples",
    "report_json_schema",
    "report_to_model",
]
