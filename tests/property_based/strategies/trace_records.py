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

"""Hypothesis strategies producing trace records and trace-file noise."""

from __future__ import annotations

from hypothesis import strategies as st

from typetally.core.flags import TypeFlag
from typetally.core.records import RecordField

__all__ = [
    "declaration_paths",
    "flag_lists",
    "raw_records",
    "trace_entries",
]

_TYPE_IDS = st.integers(min_value=1, max_value=10_000)
_ID_LISTS = st.lists(_TYPE_IDS, max_size=4)
_DISPLAYS = st.one_of(
    st.sampled_from(["{}", "() => void", "Array<T>", '"north"', "`a${string}`", "(x: number) => string"]),
    st.text(max_size=20),
)
_SYMBOLS = st.one_of(st.sampled_from(["__type", "globalThis", "T", "Point", "brand"]), st.text(max_size=12))


def flag_lists() -> st.SearchStrategy[list[str]]:
    """Lists of known flag names, occasionally mixed with unknown tags."""
    known = st.sampled_from([flag.value for flag in TypeFlag])
    return st.lists(st.one_of(known, known, st.text(max_size=12)), max_size=5)


def declaration_paths() -> st.SearchStrategy[str]:
    """Declaring-file paths, biased towards the ones exclusion rules care about."""
    fixed = st.sampled_from(
        [
            "/project/src/app.ts",
            "/project/src/app.test.ts",
            "/project/src/util.test.utils.ts",
            "/project/src/api.integration.ts",
            "/project/vite.config.ts",
            "/project/src/env.d.ts",
            "/project/node_modules/lib/index.ts",
            "/project/node_modules/lib/index.d.ts",
        ],
    )
    return st.one_of(fixed, st.text(max_size=30))


def _location() -> st.SearchStrategy[dict[str, object]]:
    return st.builds(lambda path: {"path": path}, declaration_paths())


_OPTIONAL_FIELDS: dict[str, st.SearchStrategy[object]] = {
    RecordField.DISPLAY.value: _DISPLAYS,
    RecordField.SYMBOL_NAME.value: _SYMBOLS,
    RecordField.INTRINSIC_NAME.value: st.sampled_from(["string", "any", "never"]),
    RecordField.FIRST_DECLARATION.value: _location(),
    RecordField.REFERENCE_LOCATION.value: _location(),
    RecordField.UNION_TYPES.value: _ID_LISTS,
    RecordField.INTERSECTION_TYPES.value: _ID_LISTS,
    RecordField.TYPE_ARGUMENTS.value: _ID_LISTS,
    RecordField.ALIAS_TYPE_ARGUMENTS.value: st.one_of(_ID_LISTS, st.none()),
    RecordField.INSTANTIATED_TYPE.value: _TYPE_IDS,
    RecordField.CONDITIONAL_CHECK_TYPE.value: _TYPE_IDS,
    RecordField.KEYOF_TYPE.value: _TYPE_IDS,
    RecordField.EVOLVING_ARRAY_ELEMENT_TYPE.value: _TYPE_IDS,
    RecordField.EVOLVING_ARRAY_FINAL_TYPE.value: _TYPE_IDS,
}


def raw_records() -> st.SearchStrategy[dict[str, object]]:
    """Valid trace records with a random subset of optional fields."""
    return st.builds(
        lambda type_id, flags, optional: {"id": type_id, "flags": flags, **optional},
        _TYPE_IDS,
        flag_lists(),
        st.fixed_dictionaries({}, optional=_OPTIONAL_FIELDS),
    )


def trace_entries() -> st.SearchStrategy[object]:
    """Top-level trace file entries: mostly records, some malformed values."""
    malformed = st.one_of(
        st.none(),
        st.integers(),
        st.text(max_size=5),
        st.builds(lambda type_id: {"id": type_id}, _TYPE_IDS),
        st.builds(lambda flags: {"flags": flags}, flag_lists()),
        st.builds(lambda type_id: {"id": type_id, "flags": None}, _TYPE_IDS),
    )
    return st.one_of(raw_records(), raw_records(), malformed)
