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

"""Configuration models, runtime dataclasses, and configuration errors.

TOML data is validated with the pydantic ``ConfigModel`` and then converted
to the plain ``Config`` dataclass the rest of typetally consumes. The
defaults reproduce the built-in behaviour exactly, so a missing config file
and an empty one are equivalent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator

from typetally.analysis.exclusion import ExclusionPolicy, ExclusionReason
from typetally.analysis.stats import DEFAULT_SAMPLE_LIMIT
from typetally.core.model_types import ReportFormat
from typetally.exceptions import TypetallyValidationError
from typetally.report.discovery import TRACE_FILE_PREFIX

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_VERSION: Final[int] = 0
STRICT_CONFIG: ConfigDict = ConfigDict(extra="forbid")


class ConfigValidationError(TypetallyValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read or parsed as TOML."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The configuration file that could not be read.
            error: The underlying exception that caused the failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid typetally configuration in {path}: {error}")


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: object, expected: int) -> None:
        """Initialize the exception with version information.

        Args:
            provided: The config_version value found in the file.
            expected: The config_version understood by this release.
        """
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided!r}; expected {expected}")


class InvalidExclusionPatternError(ConfigValidationError):
    """Raised when an extra exclusion pattern is not a valid regular expression."""

    def __init__(self, pattern: str, error: re.error) -> None:
        """Initialize the exception with the offending pattern.

        Args:
            pattern: Pattern taken from ``exclusions.extra_path_patterns``.
            error: Compilation error reported by :mod:`re`.
        """
        self.pattern = pattern
        self.error = error
        super().__init__(f"Invalid exclusion pattern {pattern!r}: {error}")


class ReportSettingsModel(BaseModel):
    """Pydantic model for the ``[report]`` table."""

    model_config: ClassVar[ConfigDict] = STRICT_CONFIG

    format: ReportFormat = ReportFormat.TEXT
    sample_limit: NonNegativeInt = DEFAULT_SAMPLE_LIMIT
    trace_prefix: str = Field(default=TRACE_FILE_PREFIX, min_length=1)

    @field_validator("format", mode="before")
    @classmethod
    def _coerce_format(cls, value: object) -> object:
        if isinstance(value, str):
            return ReportFormat.from_str(value)
        return value


def _default_patterns() -> list[str]:
    return []


class ExclusionSettingsModel(BaseModel):
    """Pydantic model for the ``[exclusions]`` table.

    Every switch defaults to on; ``extra_path_patterns`` adds regexes searched
    in the record's declaring path.
    """

    model_config: ClassVar[ConfigDict] = STRICT_CONFIG

    node_modules: bool = True
    test_files: bool = True
    config_files: bool = True
    declaration_files: bool = True
    arrow_functions: bool = True
    global_this: bool = True
    non_string_literals: bool = True
    extra_path_patterns: list[str] = Field(default_factory=_default_patterns)


class ConfigModel(BaseModel):
    """Pydantic model for a whole typetally configuration file.

    Attributes:
        config_version: Schema version of the configuration file. The loader
            rejects unsupported versions before validation so they surface
            as ``UnsupportedConfigVersionError``.
        report: Report settings.
        exclusions: Exclusion filter switches.
    """

    model_config: ClassVar[ConfigDict] = STRICT_CONFIG

    config_version: int = Field(default=CONFIG_VERSION)
    report: ReportSettingsModel = Field(default_factory=ReportSettingsModel)
    exclusions: ExclusionSettingsModel = Field(default_factory=ExclusionSettingsModel)


@dataclass(slots=True)
class ReportSettings:
    """Runtime report settings; CLI flags override these values."""

    format: ReportFormat = ReportFormat.TEXT
    sample_limit: int = DEFAULT_SAMPLE_LIMIT
    trace_prefix: str = TRACE_FILE_PREFIX


@dataclass(slots=True)
class Config:
    """Runtime configuration used by the CLI and report driver."""

    report: ReportSettings = field(default_factory=ReportSettings)
    exclusions: ExclusionPolicy = field(default_factory=ExclusionPolicy)


_PATH_SWITCHES: Final[tuple[tuple[str, ExclusionReason], ...]] = (
    ("node_modules", ExclusionReason.NODE_MODULES),
    ("test_files", ExclusionReason.TEST_FILES),
    ("config_files", ExclusionReason.CONFIG_FILES),
    ("declaration_files", ExclusionReason.DECLARATION_FILES),
)


def compile_patterns(patterns: list[str]) -> tuple[re.Pattern[str], ...]:
    """Compile user-supplied exclusion patterns.

    Raises:
        InvalidExclusionPatternError: If any pattern fails to compile.
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise InvalidExclusionPatternError(pattern, exc) from exc
    return tuple(compiled)


def exclusion_policy_from_model(model: ExclusionSettingsModel) -> ExclusionPolicy:
    """Convert validated exclusion settings to an ``ExclusionPolicy``.

    Args:
        model: Validated ``[exclusions]`` table.

    Returns:
        Policy with the selected rules switched on.

    Raises:
        InvalidExclusionPatternError: If an extra pattern is not a valid regex.
    """
    return ExclusionPolicy(
        path_rules=frozenset(reason for name, reason in _PATH_SWITCHES if getattr(model, name)),
        extra_path_patterns=compile_patterns(model.extra_path_patterns),
        arrow_functions=model.arrow_functions,
        global_this=model.global_this,
        non_string_literals=model.non_string_literals,
    )


def config_from_model(model: ConfigModel) -> Config:
    """Convert a validated ``ConfigModel`` into the runtime ``Config``."""
    report = ReportSettings(
        format=model.report.format,
        sample_limit=model.report.sample_limit,
        trace_prefix=model.report.trace_prefix,
    )
    return Config(report=report, exclusions=exclusion_policy_from_model(model.exclusions))


__all__ = [
    "CONFIG_VERSION",
    "Config",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "ExclusionSettingsModel",
    "InvalidConfigFileError",
    "InvalidExclusionPatternError",
    "ReportSettings",
    "ReportSettingsModel",
    "UnsupportedConfigVersionError",
    "compile_patterns",
    "config_from_model",
    "exclusion_policy_from_model",
]
