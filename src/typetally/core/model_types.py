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

"""Enumerations shared by the logging, reporting, and CLI layers."""

from __future__ import annotations

from typetally.compat import StrEnum


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Single-line human-readable records.
        JSON: One JSON object per record.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Logical component attached to structured log records."""

    CLI = "cli"
    CONFIG = "config"
    REPORT = "report"
    ANALYSIS = "analysis"


class ReportFormat(StrEnum):
    """Output formats supported by the report renderer.

    Attributes:
        TEXT: Plain per-file counter listing.
        JSON: Machine-readable report validated against the report schema.
        MARKDOWN: One Markdown table per trace file.
    """

    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"

    @classmethod
    def from_str(cls, raw: str) -> ReportFormat:
        """Create a ReportFormat enum from a string value.

        Args:
            raw: String representation of the format (``md`` is accepted).

        Returns:
            ReportFormat enum value.

        Raises:
            ValueError: If the string does not match any ReportFormat value.
        """
        value = raw.strip().lower()
        if value == "md":
            value = cls.MARKDOWN.value
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown report format '{raw}'"
            raise ValueError(msg) from exc


__all__ = ["LogComponent", "LogFormat", "ReportFormat"]
