# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings for locating and provisioning Packer.

Settings are resolved in three layers, later layers winning:

1. model defaults,
2. the ``[tool.packerwrap]`` table of ``pyproject.toml`` in the project root,
3. ``PACKERWRAP_*`` environment variables.

Relative paths are anchored at the project root.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import PackerConfigError
from .installer import DEFAULT_PACKER_VERSION

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "packerwrap"
ENV_PREFIX: Final[str] = "PACKERWRAP_"

_PATH_FIELDS: Final[tuple[str, ...]] = ("executable", "working_dir", "install_dir")


class PackerSettings(BaseModel):
    """Resolved wrapper configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    executable: Path | None = None
    working_dir: Path | None = None
    version: str = DEFAULT_PACKER_VERSION
    install_dir: Path = Path(".")
    auto_install: bool = False


def load_settings(root: Path | None = None, *, env: Mapping[str, str] | None = None) -> PackerSettings:
    """Return settings merged from ``pyproject.toml`` and the environment.

    Args:
        root: Project root holding ``pyproject.toml``; defaults to the current directory.
        env: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        PackerSettings: Validated settings with absolute paths.

    Raises:
        PackerConfigError: If the TOML is malformed or a value fails validation.
    """

    project_root = (root or Path.cwd()).resolve()
    values: dict[str, Any] = {}
    values.update(_load_pyproject(project_root / PYPROJECT_FILENAME))
    values.update(_load_env(os.environ if env is None else env))
    for key in _PATH_FIELDS:
        if values.get(key) not in (None, ""):
            values[key] = _anchor(Path(str(values[key])).expanduser(), project_root)
    values.setdefault("install_dir", project_root)
    try:
        return PackerSettings(**values)
    except ValidationError as exc:
        raise PackerConfigError(str(exc)) from exc


def _load_pyproject(path: Path) -> dict[str, Any]:
    """Return the ``[tool.packerwrap]`` table of ``path`` with normalised keys.

    Args:
        path: Location of ``pyproject.toml``; a missing file yields no settings.

    Returns:
        dict[str, Any]: Raw setting values keyed by field name.

    Raises:
        PackerConfigError: If the file is not valid TOML or the section is not a table.
    """

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise PackerConfigError(f"{path}: {exc}") from exc
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise PackerConfigError(f"{path}: [tool.{PYPROJECT_SECTION_KEY}] must be a table")
    return {str(key).replace("-", "_"): value for key, value in section.items()}


def _load_env(env: Mapping[str, str]) -> dict[str, str]:
    """Collect non-empty ``PACKERWRAP_<FIELD>`` overrides from ``env``."""

    values: dict[str, str] = {}
    for field_name in PackerSettings.model_fields:
        raw = env.get(f"{ENV_PREFIX}{field_name.upper()}")
        if raw is not None and raw != "":
            values[field_name] = raw
    return values


def _anchor(path: Path, root: Path) -> Path:
    return path if path.is_absolute() else root / path


__all__ = [
    "ENV_PREFIX",
    "PYPROJECT_SECTION_KEY",
    "PackerSettings",
    "load_settings",
]
