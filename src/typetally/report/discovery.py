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

"""Locate and load trace files inside a ``tsc --generateTrace`` directory.

The compiler writes ``trace.json`` (events) and ``types.json`` (type records);
in build mode it writes one numbered pair per project. Only files whose name
starts with ``types.`` hold type records.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Final

from typetally.core.model_types import LogComponent
from typetally.exceptions import (
    NotATraceDirectoryError,
    TraceDirectoryNotFoundError,
    TraceFormatError,
    TraceReadError,
)
from typetally.logging import structured_extra

if TYPE_CHECKING:
    from typetally.json import JSONValue

logger: logging.Logger = logging.getLogger("typetally.report")

TRACE_FILE_PREFIX: Final[str] = "types."


def ensure_trace_directory(path: Path) -> Path:
    """Return `path` when it names an existing directory.

    Args:
        path: Directory passed by the operator.

    Returns:
        The same path, unchanged.

    Raises:
        TraceDirectoryNotFoundError: If nothing exists at `path`.
        NotATraceDirectoryError: If `path` exists but is not a directory.
    """
    if not path.exists():
        raise TraceDirectoryNotFoundError(path)
    if not path.is_dir():
        raise NotATraceDirectoryError(path)
    return path


def discover_trace_files(directory: Path, *, prefix: str = TRACE_FILE_PREFIX) -> list[Path]:
    """List the trace files of `directory` in file-name order.

    Args:
        directory: Trace directory produced by the compiler.
        prefix: File-name prefix identifying trace files (case-sensitive).

    Returns:
        Paths of regular files whose name starts with `prefix`.

    Raises:
        TraceDirectoryNotFoundError: If `directory` does not exist.
        NotATraceDirectoryError: If `directory` is not a directory.
    """
    ensure_trace_directory(directory)
    files = sorted(
        (entry for entry in directory.iterdir() if entry.name.startswith(prefix) and entry.is_file()),
        key=lambda entry: entry.name,
    )
    logger.info(
        "Found %d trace file(s) in %s",
        len(files),
        directory,
        extra=structured_extra(component=LogComponent.REPORT, path=directory, total=len(files)),
    )
    return files


def load_trace_records(path: Path) -> list[JSONValue]:
    """Decode a trace file into its list of raw entries.

    Entries are returned untouched; the validity guard decides later which of
    them are records.

    Args:
        path: Trace file to read.

    Returns:
        The decoded top-level JSON array.

    Raises:
        TraceReadError: If the file cannot be read or is not valid JSON.
        TraceFormatError: If the top-level JSON value is not an array.
    """
    try:
        payload: JSONValue = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TraceReadError(path, exc) from exc
    if not isinstance(payload, list):
        raise TraceFormatError(path, type(payload).__name__)
    logger.debug(
        "Loaded %d entries from %s",
        len(payload),
        path.name,
        extra=structured_extra(component=LogComponent.REPORT, path=path, total=len(payload)),
    )
    return payload


__all__ = [
    "TRACE_FILE_PREFIX",
    "discover_trace_files",
    "ensure_trace_directory",
    "load_trace_records",
]
