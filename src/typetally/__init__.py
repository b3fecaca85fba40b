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

"""typetally - classify and count the type records of TypeScript compiler traces.

``tsc --generateTrace`` writes one ``types.json`` file per project describing
every type the checker created. typetally sorts each record into one of a
fixed set of categories (unions, conditionals, type aliases, ...) after
filtering out library and test noise, and reports the counts per file.
"""

from __future__ import annotations

from typetally.analysis import (
    DEFAULT_POLICY,
    ExclusionPolicy,
    TraceAggregator,
    TraceStats,
    UnknownSampleCollector,
    classify,
    finalize,
    is_excluded,
    is_type_record,
    narrow,
    new_stats,
    record,
)
from typetally.config import Config, load_config
from typetally.core.categories import Category
from typetally.core.flags import TypeFlag
from typetally.core.records import TypeRecord
from typetally.exceptions import (
    TraceInputError,
    TypetallyError,
    TypetallyTypeError,
    TypetallyValidationError,
)
from typetally.report import (
    FileReport,
    TraceReport,
    build_report,
    iter_file_reports,
    render_report,
    report_json_schema,
)

__all__ = [
    "DEFAULT_POLICY",
    "Category",
    "Config",
    "ExclusionPolicy",
    "FileReport",
    "TraceAggregator",
    "TraceInputError",
    "TraceReport",
    "TraceStats",
    "TypeFlag",
    "TypeRecord",
    "TypetallyError",
    "TypetallyTypeError",
    "TypetallyValidationError",
    "UnknownSampleCollector",
    "__version__",
    "build_report",
    "classify",
    "finalize",
    "is_excluded",
    "is_type_record",
    "iter_file_reports",
    "load_config",
    "narrow",
    "new_stats",
    "record",
    "render_report",
    "report_json_schema",
]

__version__ = "0.1.0"
