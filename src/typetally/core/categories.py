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

"""Category metadata used throughout typetally.

A ``Category`` value doubles as its counter key in reports, so the enum is the
single source of truth for both classification results and report fields.
"""

from __future__ import annotations

from typing import Final

from typetally.compat import StrEnum


class Category(StrEnum):
    """Semantic bucket assigned to a trace record.

    Attributes:
        UNSTRUCTURED: Anonymous object literal type (``symbolName == "__type"``).
        TYPE_ALIAS: Object type reached through a generic type alias.
        TYPE_INSTANTIATION: Generic object type instantiated with arguments.
        STRING_LITERAL: String literal type.
        UNION: ``T | U``.
        INTERSECTION: ``T & U``.
        SUBSTITUTION: Type parameter substitution.
        TYPE_DEFINITION: Named object type with a declaration site.
        CONDITIONAL: ``T extends U ? X : Y``.
        INTRINSIC: Compiler intrinsic (``string``, ``any``, ``never``, ...).
        TEMPLATE_LITERAL: Template literal type.
        EMPTY_OBJECT: The ``{}`` type.
        TYPE_PARAMETER: Generic type parameter.
        KEY_TYPE: ``keyof T``.
        PROPERTY_ACCESS: ``T[K]``.
        OPAQUE_TYPE: Object type only known through its display text.
        EVOLVING_ARRAY: Array whose element type evolves during inference.
        UNIQUE_SYMBOL: ``unique symbol``.
        UNKNOWN: Nothing in the classification chain matched.
    """

    UNSTRUCTURED = "unstructured"
    TYPE_ALIAS = "typeAlias"
    TYPE_INSTANTIATION = "instantiations"
    STRING_LITERAL = "stringLiterals"
    UNION = "unions"
    INTERSECTION = "intersections"
    SUBSTITUTION = "substitutions"
    TYPE_DEFINITION = "types"
    CONDITIONAL = "conditionals"
    INTRINSIC = "intrinsics"
    TEMPLATE_LITERAL = "templateLiterals"
    EMPTY_OBJECT = "emptyObjects"
    TYPE_PARAMETER = "typeParameters"
    KEY_TYPE = "keyTypes"
    PROPERTY_ACCESS = "propertiesAccessed"
    OPAQUE_TYPE = "opaque"
    EVOLVING_ARRAY = "evolvingArrays"
    UNIQUE_SYMBOL = "uniqueSymbols"
    UNKNOWN = "unknown"

    @classmethod
    def from_str(cls, raw: str) -> Category:
        """Create a Category from its counter key or member name.

        Args:
            raw: Counter key (``"unions"``) or member name (``"UNION"``).

        Returns:
            Category enum value.

        Raises:
            ValueError: If the string matches neither form.
        """
        value = raw.strip()
        try:
            return cls(value)
        except ValueError:
            member = cls.__members__.get(value.upper())
        if member is None:
            msg = f"Unknown category '{raw}'"
            raise ValueError(msg)
        return member


FILES_KEY: Final[str] = "files"
TOTAL_KEY: Final[str] = "total"

# Counter layout of the per-file report.
REPORT_CATEGORY_ORDER: Final[tuple[Category, ...]] = (
    Category.STRING_LITERAL,
    Category.TYPE_DEFINITION,
    Category.TYPE_ALIAS,
    Category.UNION,
    Category.INTERSECTION,
    Category.SUBSTITUTION,
    Category.TYPE_INSTANTIATION,
    Category.CONDITIONAL,
    Category.INTRINSIC,
    Category.TEMPLATE_LITERAL,
    Category.EMPTY_OBJECT,
    Category.TYPE_PARAMETER,
    Category.KEY_TYPE,
    Category.PROPERTY_ACCESS,
    Category.OPAQUE_TYPE,
    Category.UNIQUE_SYMBOL,
    Category.EVOLVING_ARRAY,
    Category.UNSTRUCTURED,
    Category.UNKNOWN,
)

REPORT_KEYS: Final[tuple[str, ...]] = (FILES_KEY, TOTAL_KEY, *(category.value for category in REPORT_CATEGORY_ORDER))

CATEGORY_LABELS: Final[dict[Category, str]] = {
    Category.UNSTRUCTURED: "Unstructured",
    Category.TYPE_ALIAS: "Type alias",
    Category.TYPE_INSTANTIATION: "Type instantiation",
    Category.STRING_LITERAL: "String literal",
    Category.UNION: "Union",
    Category.INTERSECTION: "Intersection",
    Category.SUBSTITUTION: "Substitution",
    Category.TYPE_DEFINITION: "Type definition",
    Category.CONDITIONAL: "Conditional",
    Category.INTRINSIC: "Intrinsic",
    Category.TEMPLATE_LITERAL: "Template literal",
    Category.EMPTY_OBJECT: "Empty object",
    Category.TYPE_PARAMETER: "Type parameter",
    Category.KEY_TYPE: "Key type",
    Category.PROPERTY_ACCESS: "Property access",
    Category.OPAQUE_TYPE: "Opaque type",
    Category.EVOLVING_ARRAY: "Evolving array",
    Category.UNIQUE_SYMBOL: "Unique symbol",
    Category.UNKNOWN: "Unknown",
}

__all__ = [
    "CATEGORY_LABELS",
    "FILES_KEY",
    "REPORT_CATEGORY_ORDER",
    "REPORT_KEYS",
    "TOTAL_KEY",
    "Category",
]
