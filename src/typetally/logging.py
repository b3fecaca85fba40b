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

"""Structured logging utilities shared across typetally components."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Final, Literal, cast

from typetally.compat import UTC, TypedDict, Unpack, override
from typetally.core.model_types import LogComponent, LogFormat
from typetally.json import normalize_enums_for_json

ROOT_LOGGER_NAME: Final[str] = "typetally"
LOG_FORMAT_ENV: Final[str] = "TYPETALLY_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "TYPETALLY_LOG_LEVEL"

LOG_FORMATS: Final[tuple[Literal["text", "json"], ...]] = ("text", "json")
LOG_LEVELS: Final[tuple[Literal["debug", "info", "warning", "error"], ...]] = (
    "debug",
    "info",
    "warning",
    "error",
)
STRUCTURED_FIELDS: Final[tuple[str, ...]] = (
    "component",
    "path",
    "total",
    "counts",
    "excluded",
    "category",
    "details",
)
CHILD_LOGGERS: Final[tuple[str, ...]] = (
    "typetally.cli",
    "typetally.config",
    "typetally.report",
    "typetally.analysis",
)


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Resolved logging configuration for diagnostics and debugging."""

    format: LogFormat
    level: int
    level_name: str


class JSONLogFormatter(logging.Formatter):
    """Render log records as structured JSON objects."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON string.

        Args:
            record: Log record to serialise.

        Returns:
            JSON-formatted string containing standard and structured fields.
        """
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }
        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_enums_for_json(payload), ensure_ascii=False)


class TextLogFormatter(logging.Formatter):
    """Readable, single-line formatter for CLI output."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")


def _coerce_log_format(log_format: LogFormat | str) -> LogFormat:
    if isinstance(log_format, LogFormat):
        return log_format
    return LogFormat.from_str(log_format)


def _coerce_log_level(level: str | int) -> tuple[int, str]:
    if isinstance(level, int):
        return level, logging.getLevelName(level).lower()
    value = str(level).strip().lower()
    match value:
        case "debug":
            return logging.DEBUG, "debug"
        case "warning":
            return logging.WARNING, "warning"
        case "error":
            return logging.ERROR, "error"
        case _:
            return logging.INFO, "info"


def _select_format(preferred: LogFormat | str | None) -> LogFormat:
    if preferred is not None:
        return _coerce_log_format(preferred)
    env_value = os.getenv(LOG_FORMAT_ENV)
    return _coerce_log_format(env_value) if env_value else LogFormat.TEXT


def _select_level(level: str | int | None) -> tuple[int, str]:
    if level is not None:
        return _coerce_log_level(level)
    env_value = os.getenv(LOG_LEVEL_ENV)
    if env_value:
        return _coerce_log_level(env_value)
    return _coerce_log_level("warning")


def _configure_handler(log_format: LogFormat) -> logging.Handler:
    handler = logging.StreamHandler()
    if log_format is LogFormat.JSON:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(TextLogFormatter())
    return handler


def _apply_child_levels(level: int, children: Iterable[str]) -> None:
    for child in children:
        logging.getLogger(child).setLevel(level)


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Configure typetally logging according to the requested format and level.

    Log records go to stderr so report output on stdout stays clean.

    Args:
        log_format: Desired log output format. ``None`` falls back to the
            ``TYPETALLY_LOG_FORMAT`` environment variable or ``text``.
        log_level: Preferred verbosity (string or numeric). ``None`` consults
            ``TYPETALLY_LOG_LEVEL`` or defaults to ``warning``.

    Returns:
        A ``LogConfig`` describing the selected formatter and resolved numeric
        log level, which is also applied to the root and child loggers.
    """
    selected_format = _select_format(log_format)
    level_value, level_name = _select_level(log_level)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(_configure_handler(selected_format))
    root_logger.setLevel(level_value)
    root_logger.propagate = False

    _apply_child_levels(level_value, CHILD_LOGGERS)
    return LogConfig(format=selected_format, level=level_value, level_name=level_name)


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Structured logging extras accepted by typetally log records."""

    path: str
    total: int
    counts: Mapping[str, int]
    excluded: int
    category: str
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    path: str | os.PathLike[str]
    total: int
    counts: Mapping[str, int]
    excluded: int
    category: str
    details: Mapping[str, object]


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Return a consistently typed ``logging.extra`` payload.

    ``None`` values and empty mappings are dropped so the JSON formatter only
    emits fields that carry information.

    Args:
        component: Logical logging component for the record.
        **kwargs: Optional structured fields (path, total, counts, etc.).

    Returns:
        Mapping suitable for the ``extra`` parameter when emitting log records.
    """
    extra: StructuredLogExtra = {"component": component}
    payload = cast("dict[str, object]", kwargs)
    path = payload.get("path")
    if path is not None:
        extra["path"] = os.fspath(cast("str | os.PathLike[str]", path))
    total = payload.get("total")
    if total is not None:
        extra["total"] = int(cast("int", total))
    counts = payload.get("counts")
    if isinstance(counts, Mapping) and counts:
        extra["counts"] = {str(key): int(value) for key, value in cast("Mapping[str, int]", counts).items()}
    excluded = payload.get("excluded")
    if excluded is not None:
        extra["excluded"] = int(cast("int", excluded))
    category = payload.get("category")
    if category is not None:
        extra["category"] = str(category)
    details = payload.get("details")
    if isinstance(details, Mapping) and details:
        extra["details"] = dict(cast("Mapping[str, object]", details))
    return extra


__all__ = [
    "LOG_FORMATS",
    "LOG_FORMAT_ENV",
    "LOG_LEVELS",
    "LOG_LEVEL_ENV",
    "LogConfig",
    "StructuredLogExtra",
    "configure_logging",
    "structured_extra",
]
