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

"""Canonical JSON types and helpers used across typetally.

Trace dumps are untrusted JSON, so the helpers here never raise on an
unexpected shape: they fall back to an empty value instead. This module has
no dependencies on logging, configuration, or the CLI.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TypeAlias, cast

from pydantic import JsonValue

__all__ = [
    "JSONList",
    "JSONMapping",
    "JSONValue",
    "as_int",
    "as_int_tuple",
    "as_mapping",
    "as_str",
    "normalize_enums_for_json",
]

JSONValue: TypeAlias = JsonValue
JSONMapping = dict[str, JsonValue]
JSONList = list[JsonValue]


def as_mapping(value: object) -> Mapping[str, JSONValue]:
    """Return `value` as a JSON mapping if it is one, else an empty mapping.

    Args:
        value: Arbitrary value to convert.

    Returns:
        The original mapping, or an empty mapping for any other value.
    """
    return cast("Mapping[str, JSONValue]", value) if isinstance(value, Mapping) else {}


def as_str(value: object) -> str | None:
    """Return `value` when it is a string, else ``None``."""
    return value if isinstance(value, str) else None


def as_int(value: object) -> int | None:
    """Return `value` when it is a JSON integer, else ``None``.

    Booleans are rejected even though ``bool`` subclasses ``int``; a trace
    never encodes a type id as ``true``.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def as_int_tuple(value: object) -> tuple[int, ...]:
    """Return the integer members of a JSON list as a tuple.

    Args:
        value: Arbitrary value, typically a list of type ids.

    Returns:
        Tuple of the integer entries in order; non-integers are skipped and
        non-list inputs yield an empty tuple.
    """
    if not isinstance(value, (list, tuple)):
        return ()
    items = cast("list[object]", value)
    return tuple(item for item in (as_int(entry) for entry in items) if item is not None)


def normalize_enums_for_json(value: object) -> JSONValue:
    """Recursively convert Enum keys/values to their string payloads.

    Args:
        value: Arbitrary Python object hierarchy that may include `Enum`
            instances, mappings, or sequences.

    Returns:
        A JSON-compatible structure with every enum replaced by its
        ``.value`` and unknown objects replaced by ``str(obj)``.
    """

    def _convert(obj: object) -> JSONValue:
        if isinstance(obj, Enum):
            return cast("JSONValue", obj.value)
        if isinstance(obj, Mapping):
            result: dict[str, JSONValue] = {}
            for key, raw_val in cast("Mapping[object, object]", obj).items():
                norm_key = str(key.value) if isinstance(key, Enum) else str(key)
                result[norm_key] = _convert(raw_val)
            return result
        if isinstance(obj, (list, tuple)):
            return [_convert(item) for item in cast("list[object]", obj)]
        if isinstance(obj, (str, int, float, bool)) or obj is None:
            return obj
        return str(obj)

    return _convert(value)
