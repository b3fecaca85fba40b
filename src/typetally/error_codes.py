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

"""Stable error code registry used across typetally."""

from __future__ import annotations

from typing import TYPE_CHECKING, NewType

from typetally.config.models import (
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    InvalidExclusionPatternError,
    UnsupportedConfigVersionError,
)
from typetally.exceptions import (
    NotATraceDirectoryError,
    TraceDirectoryNotFoundError,
    TraceFormatError,
    TraceInputError,
    TraceReadError,
    TypetallyError,
    TypetallyTypeError,
    TypetallyValidationError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

ErrorCode = NewType("ErrorCode", str)

_ERROR_CODES: dict[type[BaseException], ErrorCode] = {
    TypetallyError: ErrorCode("TT000"),
    TypetallyValidationError: ErrorCode("TT100"),
    TypetallyTypeError: ErrorCode("TT101"),
    ConfigValidationError: ErrorCode("TT110"),
    ConfigReadError: ErrorCode("TT111"),
    InvalidConfigFileError: ErrorCode("TT112"),
    UnsupportedConfigVersionError: ErrorCode("TT113"),
    InvalidExclusionPatternError: ErrorCode("TT114"),
    TraceInputError: ErrorCode("TT200"),
    TraceDirectoryNotFoundError: ErrorCode("TT201"),
    NotATraceDirectoryError: ErrorCode("TT202"),
    TraceReadError: ErrorCode("TT203"),
    TraceFormatError: ErrorCode("TT204"),
}


def error_code_for(exc: BaseException) -> ErrorCode:
    """Return a stable error code for a structured typetally exception.

    Args:
        exc: Exception instance raised by typetally code paths.

    Returns:
        Error code mapped from the exception's class hierarchy.
    """
    for cls in type(exc).__mro__:
        code = _ERROR_CODES.get(cls)
        if code:
            return code
    return ErrorCode("TT000")


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Return a mapping of fully-qualified exception names to error codes.

    Returns:
        Mapping of ``<module>.<ExceptionName>`` strings to error codes.
    """
    return {f"{exc_type.__module__}.{exc_type.__name__}": code for exc_type, code in _ERROR_CODES.items()}


__all__ = ["ErrorCode", "error_code_catalog", "error_code_for"]
