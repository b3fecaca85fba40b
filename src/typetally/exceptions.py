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

"""Common exception hierarchy for typetally.

Only the report driver and the configuration layer raise these. The
classification core is total: malformed records are dropped and
unclassifiable ones land in the ``unknown`` bucket.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "NotATraceDirectoryError",
    "TraceDirectoryNotFoundError",
    "TraceFormatError",
    "TraceInputError",
    "TraceReadError",
    "TypetallyError",
    "TypetallyTypeError",
    "TypetallyValidationError",
]


class TypetallyError(Exception):
    """Base error for all typetally exceptions."""


class TypetallyValidationError(TypetallyError, ValueError):
    """Raised when input data fails validation checks."""


class TypetallyTypeError(TypetallyError, TypeError):
    """Raised when input data has an unexpected type."""


class TraceInputError(TypetallyError):
    """Raised when a trace directory or trace file cannot be used."""

    def __init__(self, path: Path, message: str) -> None:
        """Initialise the error with the offending path.

        Args:
            path: Trace directory or file that triggered the failure.
            message: Human-readable description of the failure.
        """
        self.path = path
        super().__init__(message)


class TraceDirectoryNotFoundError(TraceInputError):
    """Raised when the trace directory does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Path does not exist: {path}")


class NotATraceDirectoryError(TraceInputError):
    """Raised when the trace path exists but is not a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Path is not a directory: {path}")


class TraceReadError(TraceInputError):
    """Raised when a trace file cannot be read or decoded."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialise the error with the underlying IO or decode failure.

        Args:
            path: Trace file that could not be loaded.
            error: Exception raised while reading or parsing the file.
        """
        self.error = error
        super().__init__(path, f"Unable to read trace file {path}: {error}")


class TraceFormatError(TraceInputError):
    """Raised when a trace file does not hold a JSON array of records."""

    def __init__(self, path: Path, found: str) -> None:
        self.found = found
        super().__init__(path, f"Trace file {path} must contain a JSON array (found {found})")
