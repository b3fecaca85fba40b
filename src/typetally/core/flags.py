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

"""Type flag tags emitted by the TypeScript compiler in type-trace dumps.

Each trace record lists the names of the ``ts.TypeFlags`` bits set on the
observed type. ``TypeFlag`` enumerates the names the compiler is known to
emit. Records keep their flags as plain strings, so tags outside this set
still participate in flag checks.
"""

from __future__ import annotations

from typing import Final

from typetally.compat import StrEnum


class TypeFlag(StrEnum):
    """Known ``ts.TypeFlags`` names, including the composite masks."""

    ANY = "Any"
    UNKNOWN = "Unknown"
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    ENUM = "Enum"
    BIG_INT = "BigInt"
    STRING_LITERAL = "StringLiteral"
    NUMBER_LITERAL = "NumberLiteral"
    BOOLEAN_LITERAL = "BooleanLiteral"
    ENUM_LITERAL = "EnumLiteral"
    BIG_INT_LITERAL = "BigIntLiteral"
    ES_SYMBOL = "ESSymbol"
    UNIQUE_ES_SYMBOL = "UniqueESSymbol"
    VOID = "Void"
    UNDEFINED = "Undefined"
    NULL = "Null"
    NEVER = "Never"
    TYPE_PARAMETER = "TypeParameter"
    OBJECT = "Object"
    UNION = "Union"  # T | U
    INTERSECTION = "Intersection"  # T & U
    INDEX = "Index"  # keyof T
    INDEXED_ACCESS = "IndexedAccess"  # T[K]
    CONDITIONAL = "Conditional"  # T extends U ? X : Y
    SUBSTITUTION = "Substitution"
    NON_PRIMITIVE = "NonPrimitive"
    TEMPLATE_LITERAL = "TemplateLiteral"
    STRING_MAPPING = "StringMapping"  # Uppercase<T>, Lowercase<T>
    RESERVED1 = "Reserved1"
    RESERVED2 = "Reserved2"
    ANY_OR_UNKNOWN = "AnyOrUnknown"
    NULLABLE = "Nullable"
    LITERAL = "Literal"
    UNIT = "Unit"
    FRESHABLE = "Freshable"
    STRING_OR_NUMBER_LITERAL = "StringOrNumberLiteral"
    STRING_OR_NUMBER_LITERAL_OR_UNIQUE = "StringOrNumberLiteralOrUnique"
    DEFINITELY_FALSY = "DefinitelyFalsy"
    POSSIBLY_FALSY = "PossiblyFalsy"
    INTRINSIC = "Intrinsic"
    STRING_LIKE = "StringLike"
    NUMBER_LIKE = "NumberLike"
    BIG_INT_LIKE = "BigIntLike"
    BOOLEAN_LIKE = "BooleanLike"
    ENUM_LIKE = "EnumLike"
    ES_SYMBOL_LIKE = "ESSymbolLike"
    VOID_LIKE = "VoidLike"
    PRIMITIVE = "Primitive"
    DEFINITELY_NON_NULLABLE = "DefinitelyNonNullable"
    DISJOINT_DOMAINS = "DisjointDomains"
    UNION_OR_INTERSECTION = "UnionOrIntersection"
    STRUCTURED_TYPE = "StructuredType"
    TYPE_VARIABLE = "TypeVariable"
    INSTANTIABLE_NON_PRIMITIVE = "InstantiableNonPrimitive"
    INSTANTIABLE_PRIMITIVE = "InstantiablePrimitive"
    INSTANTIABLE = "Instantiable"
    STRUCTURED_OR_INSTANTIABLE = "StructuredOrInstantiable"
    OBJECT_FLAGS_TYPE = "ObjectFlagsType"
    SIMPLIFIABLE = "Simplifiable"
    SINGLETON = "Singleton"
    NARROWABLE = "Narrowable"
    INCLUDES_MASK = "IncludesMask"
    INCLUDES_MISSING_TYPE = "IncludesMissingType"
    INCLUDES_NON_WIDENING_TYPE = "IncludesNonWideningType"
    INCLUDES_WILDCARD = "IncludesWildcard"
    INCLUDES_EMPTY_OBJECT = "IncludesEmptyObject"
    INCLUDES_INSTANTIABLE = "IncludesInstantiable"
    INCLUDES_CONSTRAINED_TYPE_VARIABLE = "IncludesConstrainedTypeVariable"
    INCLUDES_ERROR = "IncludesError"
    NON_PRIMITIVE_UNION = "NonPrimitiveUnion"


LITERAL_SUFFIX: Final[str] = "Literal"

# Literal tags that stay eligible for classification.
CLASSIFIED_LITERAL_FLAGS: Final[frozenset[str]] = frozenset(
    {TypeFlag.STRING_LITERAL.value, TypeFlag.TEMPLATE_LITERAL.value},
)

__all__ = ["CLASSIFIED_LITERAL_FLAGS", "LITERAL_SUFFIX", "TypeFlag"]
