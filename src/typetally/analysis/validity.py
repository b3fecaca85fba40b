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

"""Well-formedness check applied to every decoded trace entry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, TypeGuard, cast

from typetally.core.records import RecordField

if TYPE_CHECKING:
    from typetally.json import JSONValue


def is_type_record(value: object) -> TypeGuard[Mapping[str, JSONValue]]:
    """Return True when `value` has the minimal shape of a trace record.

    A record must be a mapping with an ``id`` key and a ``flags`` key holding
    a list. The ``id`` value itself is not inspected and no other key is
    required. Anything else is dropped before counting.

    Args:
        value: Decoded JSON value taken from a trace file.

    Returns:
        True if the value can be wrapped in a ``TypeRecord``.
    """
    if not isinstance(value, Mapping):
        return False
    mapping = cast("Mapping[object, object]", value)
    if RecordField.ID.value not in mapping or RecordField.FLAGS.value not in mapping:
        return False
    return isinstance(mapping[RecordField.FLAGS.value], (list, tuple))


is_valid = is_type_record

__all__ = ["is_type_record", "is_valid"]
