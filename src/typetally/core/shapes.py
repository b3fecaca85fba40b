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

"""Narrow per-category shapes produced by classification.

The flat ``TypeRecord`` is only used while deciding the category. Once the
classifier picks one, it builds the matching shape below, which carries just
the fields relevant to that category. Each shape is tagged with its
``Category`` through the ``kind`` class variable, so ``ClassifiedType`` works
as a discriminated union.

Type ids are kept as ``int | None``: the compiler always writes integers, but
trace data is untrusted and a present-but-null child must not break
classification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, TypeAlias

from typetally.core.categories import Category
from typetally.core.records import RecordField, TypeRecord
from typetally.json import as_int, as_int_tuple

if TYPE_CHECKING:
    from typetally.compat import Self
    from typetally.json import JSONValue


@dataclass(frozen=True, slots=True)
class TypeShape:
    """Base for every classified shape.

    Subclasses provide a ``from_record`` constructor used by the classifier.

    Attributes:
        id: Identifier of the record inside its trace file.
    """

    kind: ClassVar[Category]
    id: JSONValue


@dataclass(frozen=True, slots=True)
class UnstructuredType(TypeShape):
    kind: ClassVar[Category] = Category.UNSTRUCTURED
    display: str | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, display=record.display)


@dataclass(frozen=True, slots=True)
class TypeAliasType(TypeShape):
    kind: ClassVar[Category] = Category.TYPE_ALIAS
    alias_type_arguments: tuple[int, ...]
    symbol_name: str | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(
            id=record.id,
            alias_type_arguments=as_int_tuple(record.get(RecordField.ALIAS_TYPE_ARGUMENTS)),
            symbol_name=record.symbol_name,
        )


@dataclass(frozen=True, slots=True)
class TypeInstantiation(TypeShape):
    kind: ClassVar[Category] = Category.TYPE_INSTANTIATION
    instantiated_type: int | None
    type_arguments: tuple[int, ...]

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(
            id=record.id,
            instantiated_type=as_int(record.get(RecordField.INSTANTIATED_TYPE)),
            type_arguments=as_int_tuple(record.get(RecordField.TYPE_ARGUMENTS)),
        )


@dataclass(frozen=True, slots=True)
class StringLiteralType(TypeShape):
    kind: ClassVar[Category] = Category.STRING_LITERAL
    display: str | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, display=record.display)


@dataclass(frozen=True, slots=True)
class UnionType(TypeShape):
    kind: ClassVar[Category] = Category.UNION
    union_types: tuple[int, ...]

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, union_types=as_int_tuple(record.get(RecordField.UNION_TYPES)))


@dataclass(frozen=True, slots=True)
class IntersectionType(TypeShape):
    kind: ClassVar[Category] = Category.INTERSECTION
    intersection_types: tuple[int, ...]

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(
            id=record.id,
            intersection_types=as_int_tuple(record.get(RecordField.INTERSECTION_TYPES)),
        )


@dataclass(frozen=True, slots=True)
class SubstitutionType(TypeShape):
    kind: ClassVar[Category] = Category.SUBSTITUTION
    base_type: int | None
    constraint_type: int | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(
            id=record.id,
            base_type=as_int(record.get(RecordField.SUBSTITUTION_BASE_TYPE)),
            constraint_type=as_int(record.get(RecordField.CONSTRAINT_TYPE)),
        )


@dataclass(frozen=True, slots=True)
class TypeDefinition(TypeShape):
    kind: ClassVar[Category] = Category.TYPE_DEFINITION
    symbol_name: str | None
    declaration_path: str | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, symbol_name=record.symbol_name, declaration_path=record.declaration_path)


@dataclass(frozen=True, slots=True)
class ConditionalType(TypeShape):
    kind: ClassVar[Category] = Category.CONDITIONAL
    check_type: int | None
    extends_type: int | None
    true_type: int | None
    false_type: int | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(
            id=record.id,
            check_type=as_int(record.get(RecordField.CONDITIONAL_CHECK_TYPE)),
            extends_type=as_int(record.get(RecordField.CONDITIONAL_EXTENDS_TYPE)),
            true_type=as_int(record.get(RecordField.CONDITIONAL_TRUE_TYPE)),
            false_type=as_int(record.get(RecordField.CONDITIONAL_FALSE_TYPE)),
        )


@dataclass(frozen=True, slots=True)
class IntrinsicType(TypeShape):
    kind: ClassVar[Category] = Category.INTRINSIC
    intrinsic_name: str | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, intrinsic_name=record.intrinsic_name)


@dataclass(frozen=True, slots=True)
class TemplateLiteralType(TypeShape):
    kind: ClassVar[Category] = Category.TEMPLATE_LITERAL
    display: str | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, display=record.display)


@dataclass(frozen=True, slots=True)
class EmptyObjectType(TypeShape):
    kind: ClassVar[Category] = Category.EMPTY_OBJECT

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id)


@dataclass(frozen=True, slots=True)
class TypeParameter(TypeShape):
    kind: ClassVar[Category] = Category.TYPE_PARAMETER
    symbol_name: str | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, symbol_name=record.symbol_name)


@dataclass(frozen=True, slots=True)
class KeyType(TypeShape):
    kind: ClassVar[Category] = Category.KEY_TYPE
    keyof_type: int | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, keyof_type=as_int(record.get(RecordField.KEYOF_TYPE)))


@dataclass(frozen=True, slots=True)
class PropertyAccess(TypeShape):
    kind: ClassVar[Category] = Category.PROPERTY_ACCESS
    object_type: int | None
    index_type: int | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(
            id=record.id,
            object_type=as_int(record.get(RecordField.INDEXED_ACCESS_OBJECT_TYPE)),
            index_type=as_int(record.get(RecordField.INDEXED_ACCESS_INDEX_TYPE)),
        )


@dataclass(frozen=True, slots=True)
class OpaqueType(TypeShape):
    kind: ClassVar[Category] = Category.OPAQUE_TYPE
    display: str | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, display=record.display)


@dataclass(frozen=True, slots=True)
class EvolvingArray(TypeShape):
    kind: ClassVar[Category] = Category.EVOLVING_ARRAY
    element_type: int | None
    final_type: int | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(
            id=record.id,
            element_type=as_int(record.get(RecordField.EVOLVING_ARRAY_ELEMENT_TYPE)),
            final_type=as_int(record.get(RecordField.EVOLVING_ARRAY_FINAL_TYPE)),
        )


@dataclass(frozen=True, slots=True)
class UniqueSymbol(TypeShape):
    kind: ClassVar[Category] = Category.UNIQUE_SYMBOL
    symbol_name: str | None

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, symbol_name=record.symbol_name)


@dataclass(frozen=True, slots=True)
class UnknownType(TypeShape):
    """Record that matched no category; keeps the source for diagnostics."""

    kind: ClassVar[Category] = Category.UNKNOWN
    record: TypeRecord

    @classmethod
    def from_record(cls, record: TypeRecord) -> Self:
        return cls(id=record.id, record=record)


ClassifiedType: TypeAlias = (
    UnstructuredType
    | TypeAliasType
    | TypeInstantiation
    | StringLiteralType
    | UnionType
    | IntersectionType
    | SubstitutionType
    | TypeDefinition
    | ConditionalType
    | IntrinsicType
    | TemplateLiteralType
    | EmptyObjectType
    | TypeParameter
    | KeyType
    | PropertyAccess
    | OpaqueType
    | EvolvingArray
    | UniqueSymbol
    | UnknownType
)

__all__ = [
    "ClassifiedType",
    "ConditionalType",
    "EmptyObjectType",
    "EvolvingArray",
    "IntersectionType",
    "IntrinsicType",
    "KeyType",
    "OpaqueType",
    "PropertyAccess",
    "StringLiteralType",
    "SubstitutionType",
    "TemplateLiteralType",
    "TypeAliasType",
    "TypeDefinition",
    "TypeInstantiation",
    "TypeParameter",
    "TypeShape",
    "UnionType",
    "UniqueSymbol",
    "UnknownType",
    "UnstructuredType",
]
