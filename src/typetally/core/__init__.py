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

"""Core type definitions for typetally.

- Flags: the ``ts.TypeFlags`` names that appear in trace records
- Records: the flat trace record view and its field names
- Shapes: narrow per-category dataclasses produced by classification
- Categories: the closed category enumeration and report layout
- Model types: enumerations for logging and report formats
"""

from __future__ import annotations

from . import categories, flags, model_types, records, shapes

__all__ = [
    "categories",
    "flags",
    "model_types",
    "records",
    "shapes",
]
