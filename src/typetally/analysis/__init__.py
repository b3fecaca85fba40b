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

"""Classification engine for type-trace records.

The pipeline for every decoded trace entry is: validity guard
(``is_type_record``) -> exclusion filter (``is_excluded``) -> classifier
(``classify``/``narrow``) -> per-file counters (``record``).
"""

from __future__ import annotations

from .classifier import CLASSIFICATION_ORDER, CLASSIFICATION_RULES, classify, matching_categories, narrow
from .exclusion import DEFAULT_POLICY, ExclusionPolicy, ExclusionReason, exclusion_reasons, is_excluded
from .stats import (
    DEFAULT_SAMPLE_LIMIT,
    TraceAggregator,
    TraceCounters,
    TraceStats,
    UnknownSampleCollector,
    finalize,
    new_stats,
    record,
)
from .validity import is_type_record, is_valid

__all__ = [
    "CLASSIFICATION_ORDER",
    "CLASSIFICATION_RULES",
    "DEFAULT_POLICY",
    "DEFAULT_SAMPLE_LIMIT",
    "ExclusionPolicy",
    "ExclusionReason",
    "TraceAggregator",
    "TraceCounters",
    "TraceStats",
    "UnknownSampleCollector",
    "classify",
    "exclusion_reasons",
    "finalize",
    "is_excluded",
    "is_type_record",
    "is_valid",
    "matching_categories",
    "narrow",
    "new_stats",
    "record",
]
