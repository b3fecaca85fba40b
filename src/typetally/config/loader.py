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

"""Configuration discovery and loading for typetally.

Candidates are checked in order: an explicit ``--config`` path, then
``typetally.toml``, ``.typetally.toml``, and ``pyproject.toml`` in the base
directory. Standalone files hold the settings at the top level;
``pyproject.toml`` holds them under ``[tool.typetally]`` and is skipped when
that table is absent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final, cast

from pydantic import ValidationError

from typetally.compat import tomllib
from typetally.core.model_types import LogComponent
from typetally.logging import structured_extra

from .models import (
    CONFIG_VERSION,
    Config,
    ConfigModel,
    ConfigReadError,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
    config_from_model,
)

logger: logging.Logger = logging.getLogger("typetally.config")

CONFIG_FILENAMES: Final[tuple[str, ...]] = ("typetally.toml", ".typetally.toml", "pyproject.toml")
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Parsed configuration instance.
        path: File the configuration was loaded from, or None when defaults
            are used.
    """

    config: Config
    path: Path | None


def load_config(explicit_path: Path | None = None, *, base_dir: Path | None = None) -> Config:
    """Load typetally configuration from a TOML file or use defaults.

    Args:
        explicit_path: Optional explicit configuration file.
        base_dir: Directory searched for standard file names (default: cwd).

    Returns:
        The runtime configuration.
    """
    return load_config_with_metadata(explicit_path, base_dir=base_dir).config


def load_config_with_metadata(
    explicit_path: Path | None = None,
    *,
    base_dir: Path | None = None,
) -> LoadedConfig:
    """Load typetally configuration together with the file it came from.

    When `explicit_path` is given it must exist and contain typetally
    settings. Otherwise the first standard file that carries settings wins
    and defaults are returned when none does.

    Args:
        explicit_path: Optional explicit configuration file.
        base_dir: Directory searched for standard file names (default: cwd).

    Returns:
        LoadedConfig with the parsed configuration and its source path.

    Raises:
        ConfigReadError: If a candidate cannot be read or is not valid TOML.
        InvalidConfigFileError: If a candidate fails validation.
        UnsupportedConfigVersionError: If ``config_version`` is not supported.
        InvalidExclusionPatternError: If an extra pattern is not a valid regex.
    """
    root = base_dir if base_dir is not None else Path.cwd()
    for candidate in _config_search_order(root, explicit_path):
        loaded = _load_candidate_config(candidate, explicit=explicit_path is not None)
        if loaded is not None:
            logger.info(
                "Loaded configuration from %s",
                loaded.path,
                extra=structured_extra(component=LogComponent.CONFIG, path=loaded.path),
            )
            return loaded
    logger.debug(
        "No configuration file found; using defaults",
        extra=structured_extra(component=LogComponent.CONFIG, path=root),
    )
    return LoadedConfig(config=Config(), path=None)


def _config_search_order(base_dir: Path, explicit_path: Path | None) -> list[Path]:
    if explicit_path is not None:
        return [explicit_path if explicit_path.is_absolute() else (Path.cwd() / explicit_path)]
    return [base_dir / name for name in CONFIG_FILENAMES]


def _load_candidate_config(candidate: Path, *, explicit: bool) -> LoadedConfig | None:
    if not candidate.exists():
        if explicit:
            raise ConfigReadError(candidate, FileNotFoundError("file does not exist"))
        return None
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = (
                f"{candidate.name} does not define typetally configuration; "
                "add [report]/[exclusions] tables or a [tool.typetally] section"
            )
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None

    _ensure_supported_version(payload)
    try:
        model = ConfigModel.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc
    return LoadedConfig(config=config_from_model(model), path=candidate.resolve())


def _ensure_supported_version(payload: dict[str, object]) -> None:
    version = payload.get("config_version", CONFIG_VERSION)
    if isinstance(version, bool) or version != CONFIG_VERSION:
        raise UnsupportedConfigVersionError(version, CONFIG_VERSION)


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    """Extract the typetally settings from a parsed TOML document.

    Args:
        candidate: Source configuration path.
        raw_map: Data parsed from the TOML document.

    Returns:
        Mapping to validate, or None when a ``pyproject.toml`` carries no
        ``[tool.typetally]`` table.

    Raises:
        InvalidConfigFileError: If ``[tool.typetally]`` exists but is not a table.
    """
    is_pyproject = candidate.name == PYPROJECT_FILENAME
    tool_section = raw_map.get("tool")
    if isinstance(tool_section, dict):
        section = cast("dict[str, object]", tool_section).get("typetally")
        if section is not None and not isinstance(section, dict):
            message = "[tool.typetally] must be a TOML table"
            raise InvalidConfigFileError(candidate, ValueError(message))
        if isinstance(section, dict):
            return cast("dict[str, object]", section)
    if is_pyproject:
        return None
    # standalone files ignore unrelated [tool] tables
    return {key: value for key, value in raw_map.items() if key != "tool"}


__all__ = ["CONFIG_FILENAMES", "LoadedConfig", "load_config", "load_config_with_metadata"]
