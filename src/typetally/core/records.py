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

"""Flat view over a single type-trace record.

A trace record is one JSON object written by ``tsc --generateTrace``. Every
record shares the same flat shape; which optional keys are present tells you
what kind of type it describes. ``TypeRecord`` wraps the decoded mapping
without copying it and answers the three questions the exclusion filter and
the classifier ask: is a field present, is a flag set, and does any flag
(outside an excluded set) match a predicate.

Presence is key presence. A key whose JSON value is ``null`` is present.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from typetally.compat import StrEnum
from typetally.json import as_mapping, as_str

if TYPE_CHECKING:
    from typetally.json import JSONValue


class RecordField(StrEnum):
    """Keys of the trace record schema."""

    ID = "id"
    FLAGS = "flags"
    RECURSION_ID = "recursionId"
    INTRINSIC_NAME = "intrinsicName"
    DISPLAY = "display"
    SYMBOL_NAME = "symbolName"
    FIRST_DECLARATION = "firstDeclaration"
    REFERENCE_LOCATION = "referenceLocation"
    DESTRUCTURING_PATTERN = "destructuringPattern"
    UNION_TYPES = "unionTypes"
    INTERSECTION_TYPES = "intersectionTypes"
    TYPE_ARGUMENTS = "typeArguments"
    INSTANTIATED_TYPE = "instantiatedType"
    ALIAS_TYPE_ARGUMENTS = "aliasTypeArguments"
    CONDITIONAL_CHECK_TYPE = "conditionalCheckType"
    CONDITIONAL_EXTENDS_TYPE = "conditionalExtendsType"
    CONDITIONAL_TRUE_TYPE = "conditionalTrueType"
    CONDITIONAL_FALSE_TYPE = "conditionalFalseType"
    IS_TUPLE = "isTuple"
    KEYOF_TYPE = "keyofType"
    INDEXED_ACCESS_OBJECT_TYPE = "indexedAccessObjectType"
    INDEXED_ACCESS_INDEX_TYPE = "indexedAccessIndexType"
    SUBSTITUTION_BASE_TYPE = "substitutionBaseType"
    CONSTRAINT_TYPE = "constraintType"
    EVOLVING_ARRAY_ELEMENT_TYPE = "evolvingArrayElementType"
    EVOLVING_ARRAY_FINAL_TYPE = "evolvingArrayFinalType"
    REVERSE_MAPPED_SOURCE_TYPE = "reverseMappedSourceType"
    REVERSE_MAPPED_MAPPED_TYPE = "reverseMappedMappedType"
    REVERSE_MAPPED_CONSTRAINT_TYPE = "reverseMappedConstraintType"


# Location fields consulted for the declaring file, in priority order.
DECLARATION_PATH_FIELDS: tuple[RecordField, ...] = (
    RecordField.FIRST_DECLARATION,
    RecordField.REFERENCE_LOCATION,
)


@dataclass(frozen=True, slots=True)
class TypeRecord:
    """Read-only wrapper around a decoded trace record.

    Attributes:
        raw: The decoded mapping, exactly as it appeared in the trace.
        flags: The string entries of the record's ``flags`` list, in order.
    """

    raw: Mapping[str, JSONValue]
    flags: tuple[str, ...]

    @classmethod
    def from_mapping(cls, value: Mapping[str, JSONValue]) -> TypeRecord:
        """Wrap a mapping that already passed the validity guard.

        Args:
            value: Decoded trace record.

        Returns:
            TypeRecord exposing the record's fields and flags.
        """
        raw_flags = value.get(RecordField.FLAGS.value)
        items = cast("list[object]", raw_flags) if isinstance(raw_flags, (list, tuple)) else []
        return cls(raw=value, flags=tuple(item for item in items if isinstance(item, str)))

    def has(self, field: RecordField | str) -> bool:
        """Return True when the record carries `field`, even if its value is null."""
        return str(field) in self.raw

    def get(self, field: RecordField | str) -> JSONValue:
        """Return the raw value of `field`, or ``None`` when absent."""
        return self.raw.get(str(field))

    def has_flag(self, flag: str) -> bool:
        """Return True when `flag` is listed in the record's flags."""
        return str(flag) in self.flags

    def find_flag(
        self,
        predicate: Callable[[str], bool],
        *,
        excluding: Collection[str] = (),
    ) -> str | None:
        """Return the first flag outside `excluding` that satisfies `predicate`.

        Args:
            predicate: Test applied to each remaining flag name.
            excluding: Flag names removed before searching.

        Returns:
            The first matching flag name, or ``None`` when nothing matches.
        """
        for flag in self.flags:
            if flag not in excluding and predicate(flag):
                return flag
        return None

    @property
    def id(self) -> JSONValue:
        return self.raw.get(RecordField.ID.value)

    @property
    def recursion_id(self) -> JSONValue:
        return self.raw.get(RecordField.RECURSION_ID.value)

    @property
    def display(self) -> str | None:
        return as_str(self.raw.get(RecordField.DISPLAY.value))

    @property
    def symbol_name(self) -> str | None:
        return as_str(self.raw.get(RecordField.SYMBOL_NAME.value))

    @property
    def intrinsic_name(self) -> str | None:
        return as_str(self.raw.get(RecordField.INTRINSIC_NAME.value))

    @property
    def declaration_path(self) -> str | None:
        """Path of the file that declares or references the type.

        ``firstDeclaration.path`` wins; ``referenceLocation.path`` is used
        when the first declaration or its path is missing.
        """
        for field in DECLARATION_PATH_FIELDS:
            path = as_str(as_mapping(self.raw.get(field.value)).get("path"))
            if path is not None:
                return path
        return None


__all__ = ["DECLARATION_PATH_FIELDS", "RecordField", "TypeRecord"]
