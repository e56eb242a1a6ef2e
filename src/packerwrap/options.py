# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Option models describing a ``packer build`` invocation."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

VariablePair = tuple[str, str]


class BuildOptions(BaseModel):
    """Fully-defaulted flags and variables for ``packer build``.

    Attributes:
        parallel_builds: Cap on concurrently running builds, ``None`` for no cap.
        debug: Enable Packer's step-by-step debug mode.
        force: Overwrite artifacts left over from previous builds.
        timestamp_ui: Prefix UI output with RFC3339 timestamps.
        color: Leave coloured output enabled; ``False`` emits ``-color=false``.
        vars: Ordered ``(key, value)`` variable overrides; duplicates are kept.
        var_files: Ordered variable-file paths, rendered verbatim.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    parallel_builds: int | None = None
    debug: bool = False
    force: bool = False
    timestamp_ui: bool = False
    color: bool = True
    vars: tuple[VariablePair, ...] = Field(default_factory=tuple)
    var_files: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("vars", mode="before")
    @classmethod
    def coerce_vars(cls, value: Any) -> Any:
        """Accept a mapping of variables, keeping its iteration order."""

        if isinstance(value, Mapping):
            return tuple((str(key), str(item)) for key, item in value.items())
        return value

    @field_validator("var_files", mode="before")
    @classmethod
    def coerce_var_files(cls, value: Any) -> Any:
        """Accept a single path or any iterable of paths, stored as strings."""

        if isinstance(value, (str, os.PathLike)):
            return (os.fspath(value),)
        if isinstance(value, Iterable):
            return tuple(os.fspath(item) for item in value)
        return value


class BuildOptionsBuilder:
    """Fluent builder producing :class:`BuildOptions` values.

    Unset fields fall back to the model defaults. A builder may be reused; each
    :meth:`build` call returns an independent, immutable value.
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}
        self._vars: list[VariablePair] | None = None
        self._var_files: list[str] | None = None

    def parallel_builds(self, value: int | None) -> BuildOptionsBuilder:
        """Cap concurrently running builds.

        Args:
            value: Maximum parallel builds; ``None`` removes the cap.

        Returns:
            BuildOptionsBuilder: ``self`` for chaining.
        """

        self._fields["parallel_builds"] = value
        return self

    def debug(self, value: bool = True) -> BuildOptionsBuilder:
        """Toggle ``-debug``, which pauses between build steps."""

        self._fields["debug"] = value
        return self

    def force(self, value: bool = True) -> BuildOptionsBuilder:
        """Toggle ``-force`` so stale artifacts are overwritten."""

        self._fields["force"] = value
        return self

    def timestamp_ui(self, value: bool = True) -> BuildOptionsBuilder:
        """Toggle ``-timestamp-ui`` prefixes on Packer's output."""

        self._fields["timestamp_ui"] = value
        return self

    def color(self, value: bool) -> BuildOptionsBuilder:
        """Keep coloured output (``True``) or pass ``-color=false``.

        Args:
            value: Whether Packer may colourise its output.

        Returns:
            BuildOptionsBuilder: ``self`` for chaining.
        """

        self._fields["color"] = value
        return self

    def vars(self, pairs: Iterable[VariablePair]) -> BuildOptionsBuilder:
        """Replace the variable list with ``pairs``, preserving their order."""

        self._vars = [(str(key), str(value)) for key, value in pairs]
        return self

    def var(self, key: str, value: str) -> BuildOptionsBuilder:
        """Append a single ``key=value`` override."""

        if self._vars is None:
            self._vars = []
        self._vars.append((key, value))
        return self

    def var_files(self, paths: Iterable[str | os.PathLike[str]]) -> BuildOptionsBuilder:
        """Replace the variable-file list with ``paths``, preserving their order."""

        self._var_files = [os.fspath(path) for path in paths]
        return self

    def var_file(self, path: str | os.PathLike[str]) -> BuildOptionsBuilder:
        """Append a single variable-file path."""

        if self._var_files is None:
            self._var_files = []
        self._var_files.append(os.fspath(path))
        return self

    def build(self) -> BuildOptions:
        """Return a new :class:`BuildOptions` from the values set so far."""

        values = dict(self._fields)
        if self._vars is not None:
            values["vars"] = tuple(self._vars)
        if self._var_files is not None:
            values["var_files"] = tuple(self._var_files)
        return BuildOptions(**values)


__all__ = ["BuildOptions", "BuildOptionsBuilder", "VariablePair"]
