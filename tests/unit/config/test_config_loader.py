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

"""Unit tests for configuration discovery, validation, and conversion."""

from __future__ import annotations

from pathlib import Path

import pytest

from typetally.analysis.exclusion import DEFAULT_POLICY, ExclusionReason
from typetally.cli.app import CONFIG_TEMPLATE
from typetally.config import (
    Config,
    ConfigReadError,
    InvalidConfigFileError,
    InvalidExclusionPatternError,
    UnsupportedConfigVersionError,
    load_config,
    load_config_with_metadata,
)
from typetally.core.model_types import ReportFormat
from typetally.error_codes import error_code_for

pytestmark = pytest.mark.unit


def _write(path: Path, text: str) -> Path:
    _ = path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_config_file(tmp_path: Path) -> None:
    loaded = load_config_with_metadata(base_dir=tmp_path)
    assert loaded.path is None
    assert loaded.config == Config()
    assert loaded.config.exclusions == DEFAULT_POLICY
    assert loaded.config.report.sample_limit == 5
    assert loaded.config.report.trace_prefix == "types."


def test_template_reproduces_defaults(tmp_path: Path) -> None:
    _ = _write(tmp_path / "typetally.toml", CONFIG_TEMPLATE)
    loaded = load_config_with_metadata(base_dir=tmp_path)
    assert loaded.path == (tmp_path / "typetally.toml").resolve()
    assert loaded.config == Config()


def test_standalone_file_settings(tmp_path: Path) -> None:
    _ = _write(
        tmp_path / "typetally.toml",
        """
config_version = 0

[report]
format = "md"
sample_limit = 0

[exclusions]
node_modules = false
arrow_functions = false
extra_path_patterns = ["/generated/"]
""",
    )
    config = load_config(base_dir=tmp_path)
    assert config.report.format is ReportFormat.MARKDOWN
    assert config.report.sample_limit == 0
    policy = config.exclusions
    assert ExclusionReason.NODE_MODULES not in policy.path_rules
    assert ExclusionReason.DECLARATION_FILES in policy.path_rules
    assert policy.arrow_functions is False
    assert policy.global_this is True
    assert [pattern.pattern for pattern in policy.extra_path_patterns] == ["/generated/"]


def test_search_order_prefers_standalone_files(tmp_path: Path) -> None:
    _ = _write(tmp_path / ".typetally.toml", "[report]\nsample_limit = 2\n")
    _ = _write(tmp_path / "pyproject.toml", "[tool.typetally.report]\nsample_limit = 9\n")
    loaded = load_config_with_metadata(base_dir=tmp_path)
    assert loaded.path is not None
    assert loaded.path.name == ".typetally.toml"
    assert loaded.config.report.sample_limit == 2


def test_pyproject_tool_table(tmp_path: Path) -> None:
    _ = _write(tmp_path / "pyproject.toml", '[project]\nname = "web"\n\n[tool.typetally.report]\nformat = "json"\n')
    assert load_config(base_dir=tmp_path).report.format is ReportFormat.JSON


def test_pyproject_without_tool_table_is_skipped(tmp_path: Path) -> None:
    _ = _write(tmp_path / "pyproject.toml", '[project]\nname = "web"\n')
    assert load_config_with_metadata(base_dir=tmp_path).path is None


def test_explicit_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigReadError):
        _ = load_config(tmp_path / "missing.toml")


def test_explicit_pyproject_without_settings_is_invalid(tmp_path: Path) -> None:
    path = _write(tmp_path / "pyproject.toml", '[project]\nname = "web"\n')
    with pytest.raises(InvalidConfigFileError, match="does not define typetally configuration"):
        _ = load_config(path)


def test_malformed_toml(tmp_path: Path) -> None:
    _ = _write(tmp_path / "typetally.toml", "[report\nformat = ")
    with pytest.raises(ConfigReadError):
        _ = load_config(base_dir=tmp_path)


@pytest.mark.parametrize(
    "text",
    [
        "[report]\nformat = \"html\"\n",
        "[report]\nsample_limit = -1\n",
        "[exclusions]\nnode_module = true\n",
        "unknown_table = 1\n",
        "[tool.typetally]\nreport = 3\n",
    ],
)
def test_invalid_settings_are_rejected(tmp_path: Path, text: str) -> None:
    _ = _write(tmp_path / "typetally.toml", text)
    with pytest.raises(InvalidConfigFileError):
        _ = load_config(base_dir=tmp_path)


def test_unsupported_config_version(tmp_path: Path) -> None:
    _ = _write(tmp_path / "typetally.toml", "config_version = 3\n")
    with pytest.raises(UnsupportedConfigVersionError) as excinfo:
        _ = load_config(base_dir=tmp_path)
    assert excinfo.value.expected == 0
    assert error_code_for(excinfo.value) == "TT113"


def test_unsupported_version_in_pyproject_table(tmp_path: Path) -> None:
    _ = _write(tmp_path / "pyproject.toml", "[tool.typetally]\nconfig_version = 1\n")
    with pytest.raises(UnsupportedConfigVersionError, match="Unsupported config_version 1"):
        _ = load_config(base_dir=tmp_path)


def test_invalid_extra_pattern(tmp_path: Path) -> None:
    _ = _write(tmp_path / "typetally.toml", '[exclusions]\nextra_path_patterns = ["(unclosed"]\n')
    with pytest.raises(InvalidExclusionPatternError, match="unclosed"):
        _ = load_config(base_dir=tmp_path)
