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

"""Ordered discriminant chain that assigns each record a category.

The predicates overlap: an ``Object`` record with a ``display`` and evolving
array children satisfies both the opaque-type and the evolving-array tests,
and a union can also be an anonymous ``__type`` object. Rules are therefore
evaluated in the fixed order of ``CLASSIFICATION_RULES`` and the first match
wins. Reordering the table changes results for dual-matching records.

Classification is pure and total. Records that match nothing become
``UnknownType``; sampling them is the aggregator's job.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from typetally.core.categories import Category
from typetally.core.flags import TypeFlag
from typetally.core.records import RecordField, TypeRecord
from typetally.core.shapes import (
    ClassifiedType,
    ConditionalType,
    EmptyObjectType,
    EvolvingArray,
    IntersectionType,
    IntrinsicType,
    KeyType,
    OpaqueType,
    PropertyAccess,
    StringLiteralType,
    SubstitutionType,
    TemplateLiteralType,
    TypeAliasType,
    TypeDefinition,
    TypeInstantiation,
    TypeParameter,
    UnionType,
    UniqueSymbol,
    UnknownType,
    UnstructuredType,
)

ANONYMOUS_SYMBOL_NAME: Final[str] = "__type"
EMPTY_OBJECT_DISPLAY: Final[str] = "{}"


def _is_object(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.OBJECT)


def is_unstructured_type(record: TypeRecord) -> bool:
    return _is_object(record) and record.get(RecordField.SYMBOL_NAME) == ANONYMOUS_SYMBOL_NAME


def is_type_alias(record: TypeRecord) -> bool:
    return _is_object(record) and record.has(RecordField.ALIAS_TYPE_ARGUMENTS)


def is_type_instantiation(record: TypeRecord) -> bool:
    return _is_object(record) and record.has(RecordField.INSTANTIATED_TYPE)


def is_string_literal(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.STRING_LITERAL)


def is_union_type(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.UNION)


def is_intersection_type(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.INTERSECTION)


def is_substitution(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.SUBSTITUTION)


def is_type_definition(record: TypeRecord) -> bool:
    return (
        _is_object(record)
        and record.has(RecordField.SYMBOL_NAME)
        and record.has(RecordField.FIRST_DECLARATION)
    )


def is_conditional_type(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.CONDITIONAL) and record.has(RecordField.CONDITIONAL_CHECK_TYPE)


def is_intrinsic_type(record: TypeRecord) -> bool:
    # No flag check: intrinsicName alone identifies intrinsics.
    return record.has(RecordField.INTRINSIC_NAME)


def is_template_literal(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.TEMPLATE_LITERAL)


def is_empty_object(record: TypeRecord) -> bool:
    return _is_object(record) and record.get(RecordField.DISPLAY) == EMPTY_OBJECT_DISPLAY


def is_type_parameter(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.TYPE_PARAMETER)


def is_key_type(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.INDEX)


def is_property_access(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.INDEXED_ACCESS)


def is_opaque_type(record: TypeRecord) -> bool:
    return _is_object(record) and record.has(RecordField.DISPLAY)


def is_evolving_array(record: TypeRecord) -> bool:
    return (
        _is_object(record)
        and record.has(RecordField.EVOLVING_ARRAY_ELEMENT_TYPE)
        and record.has(RecordField.EVOLVING_ARRAY_FINAL_TYPE)
    )


def is_unique_symbol(record: TypeRecord) -> bool:
    return record.has_flag(TypeFlag.UNIQUE_ES_SYMBOL)


@dataclass(frozen=True, slots=True)
class ClassificationRule:
    """One link of the discriminant chain.

    Attributes:
        category: Category assigned when the rule matches.
        matches: Predicate over the flat record.
        build: Constructor for the category's narrow shape.
    """

    category: Category
    matches: Callable[[TypeRecord], bool]
    build: Callable[[TypeRecord], ClassifiedType]


CLASSIFICATION_RULES: Final[tuple[ClassificationRule, ...]] = (
    ClassificationRule(Category.UNSTRUCTURED, is_unstructured_type, UnstructuredType.from_record),
    ClassificationRule(Category.TYPE_ALIAS, is_type_alias, TypeAliasType.from_record),
    ClassificationRule(Category.TYPE_INSTANTIATION, is_type_instantiation, TypeInstantiation.from_record),
    ClassificationRule(Category.STRING_LITERAL, is_string_literal, StringLiteralType.from_record),
    ClassificationRule(Category.UNION, is_union_type, UnionType.from_record),
    ClassificationRule(Category.INTERSECTION, is_intersection_type, IntersectionType.from_record),
    ClassificationRule(Category.SUBSTITUTION, is_substitution, SubstitutionType.from_record),
    ClassificationRule(Category.TYPE_DEFINITION, is_type_definition, TypeDefinition.from_record),
    ClassificationRule(Category.CONDITIONAL, is_conditional_type, ConditionalType.from_record),
    ClassificationRule(Category.INTRINSIC, is_intrinsic_type, IntrinsicType.from_record),
    ClassificationRule(Category.TEMPLATE_LITERAL, is_template_literal, TemplateLiteralType.from_record),
    ClassificationRule(Category.EMPTY_OBJECT, is_empty_object, EmptyObjectType.from_record),
    ClassificationRule(Category.TYPE_PARAMETER, is_type_parameter, TypeParameter.from_record),
    ClassificationRule(Category.KEY_TYPE, is_key_type, KeyType.from_record),
    ClassificationRule(Category.PROPERTY_ACCESS, is_property_access, PropertyAccess.from_record),
    ClassificationRule(Category.OPAQUE_TYPE, is_opaque_type, OpaqueType.from_record),
    ClassificationRule(Category.EVOLVING_ARRAY, is_evolving_array, EvolvingArray.from_record),
    ClassificationRule(Category.UNIQUE_SYMBOL, is_unique_symbol, UniqueSymbol.from_record),
)

CLASSIFICATION_ORDER: Final[tuple[Category, ...]] = (
    *(rule.category for rule in CLASSIFICATION_RULES),
    Category.UNKNOWN,
)


def _first_rule(record: TypeRecord) -> ClassificationRule | None:
    for rule in CLASSIFICATION_RULES:
        if rule.matches(record):
            return rule
    return None


def classify(record: TypeRecord) -> Category:
    """Return the category of a valid, non-excluded record.

    Args:
        record: Trace record that passed the validity guard and the
            exclusion filter.

    Returns:
        The category of the first matching rule, or ``Category.UNKNOWN``.
    """
    rule = _first_rule(record)
    return Category.UNKNOWN if rule is None else rule.category


def narrow(record: TypeRecord) -> ClassifiedType:
    """Classify `record` and build the narrow shape for its category.

    Args:
        record: Trace record that passed the validity guard and the
            exclusion filter.

    Returns:
        Tagged shape whose ``kind`` equals ``classify(record)``.
    """
    rule = _first_rule(record)
    if rule is None:
        return UnknownType.from_record(record)
    return rule.build(record)


def matching_categories(record: TypeRecord) -> tuple[Category, ...]:
    """Return every category whose predicate holds, in chain order.

    Useful when investigating ambiguous records; ``classify`` always returns
    the first entry (or ``UNKNOWN`` when the tuple is empty).
    """
    return tuple(rule.category for rule in CLASSIFICATION_RULES if rule.matches(record))


__all__ = [
    "CLASSIFICATION_ORDER",
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "classify",
    "is_conditional_type",
    "is_empty_object",
    "is_evolving_array",
    "is_intersection_type",
    "is_intrinsic_type",
    "is_key_type",
    "is_opaque_type",
    "is_property_access",
    "is_string_literal",
    "is_substitution",
    "is_template_literal",
    "is_type_alias",
    "is_type_definition",
    "is_type_instantiation",
    "is_type_parameter",
    "is_union_type",
    "is_unique_symbol",
    "is_unstructured_type",
    "matching_categories",
    "narrow",
]
