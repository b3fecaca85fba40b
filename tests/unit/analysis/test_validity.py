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

"""Unit tests for the trace record validity guard."""

from __future__ import annotations

import pytest

from typetally.analysis.validity import is_type_record

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "value",
    [
        {"id": 1, "flags": []},
        {"id": 1, "flags": ["Union"], "recursionId": 4},
        {"id": None, "flags": ["Object"]},
    ],
)
def test_accepts_mappings_with_id_and_flag_list(value: object) -> None:
    assert is_type_record(value)


@pytest.mark.parametrize(
    "value",
    [
        None,
        [],
        "types",
        42,
        {"flags": ["Union"]},
        {"id": 1},
        {"id": 1, "flags": None},
        {"id": 1, "flags": "Union"},
        {"id": 1, "flags": {"0": "Union"}},
    ],
)
def test_rejects_everything_else(value: object) -> None:
    assert not is_type_record(value)
