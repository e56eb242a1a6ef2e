# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Argument-vector construction for Packer subcommands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .options import BuildOptions

PathArg = str | os.PathLike[str]


@dataclass(frozen=True, slots=True)
class Subcommand:
    """Fixed subcommand tokens and the way their result is reported.

    Attributes:
        tokens: Leading argv tokens naming the subcommand.
        captures_output: ``True`` when stdout is captured and returned to the caller;
            ``False`` when the child inherits stdio and only its exit status matters.
    """

    tokens: tuple[str, ...]
    captures_output: bool

    @property
    def name(self) -> str:
        return " ".join(self.tokens)


BUILD: Final[Subcommand] = Subcommand(("build",), captures_output=False)
INIT: Final[Subcommand] = Subcommand(("init",), captures_output=False)
VALIDATE: Final[Subcommand] = Subcommand(("validate",), captures_output=False)
CONSOLE: Final[Subcommand] = Subcommand(("console",), captures_output=False)
PLUGIN_INSTALL: Final[Subcommand] = Subcommand(("plugin", "install"), captures_output=False)
PLUGIN_REMOVE: Final[Subcommand] = Subcommand(("plugin", "remove"), captures_output=False)
INSPECT: Final[Subcommand] = Subcommand(("inspect",), captures_output=True)
FIX: Final[Subcommand] = Subcommand(("fix",), captures_output=True)
VERSION: Final[Subcommand] = Subcommand(("version",), captures_output=True)
PLUGIN_LIST: Final[Subcommand] = Subcommand(("plugin", "list"), captures_output=True)
HCL2_UPGRADE: Final[Subcommand] = Subcommand(("hcl2_upgrade",), captures_output=True)


def build_arguments(template: PathArg, options: BuildOptions | None = None) -> list[str]:
    """Return the argv (without executable) for ``packer build``.

    Flags appear in a fixed order and only when they differ from the defaults, so
    equal options always yield identical vectors. Variables and variable files keep
    the caller's order; duplicate keys are forwarded untouched.

    Args:
        template: Template path, always the final argument.
        options: Build flags; defaults apply when omitted.

    Returns:
        list[str]: Ordered argument tokens.
    """

    resolved = options or BuildOptions()
    args = list(BUILD.tokens)
    if resolved.debug:
        args.append("-debug")
    if resolved.force:
        args.append("-force")
    if resolved.parallel_builds is not None:
        args.append(f"-parallel-builds={resolved.parallel_builds}")
    if not resolved.color:
        args.append("-color=false")
    if resolved.timestamp_ui:
        args.append("-timestamp-ui")
    args.extend(f"-var={key}={value}" for key, value in resolved.vars)
    args.extend(f"-var-file={path}" for path in resolved.var_files)
    args.append(os.fspath(template))
    return args


def subcommand_arguments(subcommand: Subcommand, positional: PathArg | None = None) -> list[str]:
    """Return the argv (without executable) for a non-build ``subcommand``.

    Args:
        subcommand: Subcommand descriptor supplying the leading tokens.
        positional: Optional template path or plugin name appended last.

    Returns:
        list[str]: Ordered argument tokens.
    """

    args = list(subcommand.tokens)
    if positional is not None:
        args.append(os.fspath(positional))
    return args


__all__ = [
    "BUILD",
    "CONSOLE",
    "FIX",
    "HCL2_UPGRADE",
    "INIT",
    "INSPECT",
    "PLUGIN_INSTALL",
    "PLUGIN_LIST",
    "PLUGIN_REMOVE",
    "PathArg",
    "Subcommand",
    "VALIDATE",
    "VERSION",
    "build_arguments",
    "subcommand_arguments",
]
