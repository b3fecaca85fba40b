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

"""Builders for trace records and trace directories used across the suite."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Final

from typetally.core.categories import Category
from typetally.core.records import TypeRecord

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

__all__ = [
    "CATEGORY_EXAMPLES",
    "declared_in",
    "referenced_in",
    "trace_record",
    "type_record",
    "write_trace_dir",
]


def trace_record(type_id: int, *flags: str, **fields: object) -> dict[str, object]:
    """Return a raw trace record with the given id, flags, and camelCase fields."""
    payload: dict[str, object] = {"id": type_id, "flags": list(flags)}
    payload.update(fields)
    return payload


def type_record(type_id: int, *flags: str, **fields: object) -> TypeRecord:
    """Return a ``TypeRecord`` wrapping ``trace_record(...)``."""
    return TypeRecord.from_mapping(trace_record(type_id, *flags, **fields))  # type: ignore[arg-type]


def declared_in(path: str) -> dict[str, object]:
    """Return a ``firstDeclaration`` location for `path`."""
    return {"path": path, "start": {"line": 1, "character": 1}, "end": {"line": 1, "character": 10}}


def referenced_in(path: str) -> dict[str, object]:
    """Return a ``referenceLocation`` location for `path`."""
    return {"path": path, "line": 3, "character": 5}


# One record per category that the classifier assigns to exactly that category
# and that the default exclusion policy keeps.
CATEGORY_EXAMPLES: Final[dict[Category, dict[str, object]]] = {
    Category.UNSTRUCTURED: trace_record(1, "Object", symbolName="__type"),
    Category.TYPE_ALIAS: trace_record(2, "Object", aliasTypeArguments=[40, 41]),
    Category.TYPE_INSTANTIATION: trace_record(3, "Object", instantiatedType=42, typeArguments=[43]),
    Category.STRING_LITERAL: trace_record(4, "StringLiteral", display='"north"'),
    Category.UNION: trace_record(5, "Union", unionTypes=[4, 44]),
    Category.INTERSECTION: trace_record(6, "Intersection", intersectionTypes=[45, 46]),
    Category.SUBSTITUTION: trace_record(7, "Substitution", substitutionBaseType=47, constraintType=48),
    Category.TYPE_DEFINITION: trace_record(
        8,
        "Object",
        symbolName="Point",
        firstDeclaration=declared_in("/project/src/geometry.ts"),
    ),
    Category.CONDITIONAL: trace_record(
        9,
        "Conditional",
        conditionalCheckType=49,
        conditionalExtendsType=50,
        conditionalTrueType=51,
        conditionalFalseType=52,
    ),
    Category.INTRINSIC: trace_record(10, "String", intrinsicName="string"),
    Category.TEMPLATE_LITERAL: trace_record(11, "TemplateLiteral", display="`id-${string}`"),
    Category.EMPTY_OBJECT: trace_record(12, "Object", display="{}"),
    Category.TYPE_PARAMETER: trace_record(13, "TypeParameter", symbolName="T"),
    Category.KEY_TYPE: trace_record(14, "Index", keyofType=8),
    Category.PROPERTY_ACCESS: trace_record(
        15,
        "IndexedAccess",
        indexedAccessObjectType=8,
        indexedAccessIndexType=4,
    ),
    Category.OPAQUE_TYPE: trace_record(16, "Object", display="Array<string>"),
    Category.EVOLVING_ARRAY: trace_record(
        17,
        "Object",
        evolvingArrayElementType=53,
        evolvingArrayFinalType=54,
    ),
    Category.UNIQUE_SYMBOL: trace_record(18, "UniqueESSymbol", symbolName="brand"),
    Category.UNKNOWN: trace_record(19, "Object"),
}


def write_trace_dir(root: Path, files: Mapping[str, object]) -> Path:
    """Write `files` (name -> JSON payload or raw text) into `root`.

    Returns:
        The trace directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, payload in files.items():
        text = payload if isinstance(payload, str) else json.dumps(payload)
        _ = (root / name).write_text(text, encoding="utf-8")
    return root
