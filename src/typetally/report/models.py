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

"""Pydantic models describing the machine-readable report.

The JSON renderer validates every payload through ``TraceReportModel`` and
``report_json_schema`` exports the same model as a JSON Schema, so consumers
of ``typetally report --format json`` can validate the output independently.
Field names are snake_case in Python and camelCase on the wire; counter keys
match the category values used everywhere else.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, Final, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, JsonValue, NonNegativeInt

from typetally.json import normalize_enums_for_json

if TYPE_CHECKING:
    from .builder import FileReport, TraceReport

REPORT_SCHEMA_VERSION: Final[int] = 1
STRICT_MODEL_CONFIG: ConfigDict = ConfigDict(extra="forbid", populate_by_name=True)


def alias_field(
    camel_name: str,
    *,
    default: object = ...,
    default_factory: Callable[[], object] | None = None,
) -> Any:  # noqa: ANN401 # JUSTIFIED: Must return Any to work with Pydantic field annotations
    """Return a Field whose validation and serialization aliases match the wire name.

    Args:
        camel_name: camelCase key used in the JSON report.
        default: Default value for the field (use ... for required fields).
        default_factory: Factory function to generate default values.

    Returns:
        FieldInfo exposing a snake_case attribute for the camelCase key.
    """
    aliases = AliasChoices(camel_name)
    if default_factory is not None:
        return Field(
            default_factory=default_factory,
            validation_alias=aliases,
            serialization_alias=camel_name,
        )
    return Field(default=default, validation_alias=aliases, serialization_alias=camel_name)


class TraceStatsModel(BaseModel):
    """Counters of one trace file, in report order.

    ``total`` counts every valid record, excluded ones included, so the
    category counters sum to ``total`` minus the excluded records.
    """

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    files: NonNegativeInt
    total: NonNegativeInt
    string_literals: NonNegativeInt = alias_field("stringLiterals")
    types: NonNegativeInt
    type_alias: NonNegativeInt = alias_field("typeAlias")
    unions: NonNegativeInt
    intersections: NonNegativeInt
    substitutions: NonNegativeInt
    instantiations: NonNegativeInt
    conditionals: NonNegativeInt
    intrinsics: NonNegativeInt
    template_literals: NonNegativeInt = alias_field("templateLiterals")
    empty_objects: NonNegativeInt = alias_field("emptyObjects")
    type_parameters: NonNegativeInt = alias_field("typeParameters")
    key_types: NonNegativeInt = alias_field("keyTypes")
    properties_accessed: NonNegativeInt = alias_field("propertiesAccessed")
    opaque: NonNegativeInt
    unique_symbols: NonNegativeInt = alias_field("uniqueSymbols")
    evolving_arrays: NonNegativeInt = alias_field("evolvingArrays")
    unstructured: NonNegativeInt
    unknown: NonNegativeInt


class FileReportModel(BaseModel):
    """Statistics for one ``types.*`` file."""

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    name: str
    stats: TraceStatsModel


class UnknownSampleModel(BaseModel):
    """A retained record that matched no category.

    Attributes:
        id: Identifier of the record inside its trace file.
        flags: String flags carried by the record.
        record: The raw record exactly as decoded.
    """

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    id: JsonValue
    flags: list[str]
    record: dict[str, JsonValue]


def _empty_samples() -> list[UnknownSampleModel]:
    return []


class TraceReportModel(BaseModel):
    """Top-level JSON report for one trace directory."""

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    schema_version: Literal[1] = alias_field("schemaVersion", default=REPORT_SCHEMA_VERSION)
    directory: str
    files: list[FileReportModel]
    unknown_samples: list[UnknownSampleModel] = alias_field("unknownSamples", default_factory=_empty_samples)
    unknown_seen: NonNegativeInt = alias_field("unknownSeen", default=0)


def _file_payload(file_report: FileReport) -> dict[str, JsonValue]:
    return {"name": file_report.name, "stats": dict(file_report.stats.as_dict())}


def report_payload(report: TraceReport) -> dict[str, JsonValue]:
    """Return the camelCase JSON payload for `report` (not yet validated)."""
    samples: list[JsonValue] = [
        {
            "id": sample.id,
            "flags": list(sample.record.flags),
            "record": normalize_enums_for_json(dict(sample.record.raw)),
        }
        for sample in report.unknown_samples
    ]
    return {
        "schemaVersion": REPORT_SCHEMA_VERSION,
        "directory": str(report.directory),
        "files": [_file_payload(entry) for entry in report.files],
        "unknownSamples": samples,
        "unknownSeen": report.unknown_seen,
    }


def report_to_model(report: TraceReport) -> TraceReportModel:
    """Validate `report` through ``TraceReportModel``.

    Raises:
        pydantic.ValidationError: If the report violates the schema.
    """
    return TraceReportModel.model_validate(report_payload(report))


def report_json_schema() -> dict[str, Any]:
    """Return the JSON Schema of the machine-readable report.

    Returns:
        Schema generated from ``TraceReportModel`` using wire (camelCase) names.
    """
    schema = TraceReportModel.model_json_schema(by_alias=True)
    schema["$schema"] = "https://json-schema.org/draft-07/schema#"
    schema.setdefault("$id", "https://typetally.dev/schema/report.json")
    schema.setdefault("additionalProperties", False)
    return schema


__all__ = [
    "REPORT_SCHEMA_VERSION",
    "FileReportModel",
    "TraceReportModel",
    "TraceStatsModel",
    "UnknownSampleModel",
    "report_json_schema",
    "report_payload",
    "report_to_model",
]
