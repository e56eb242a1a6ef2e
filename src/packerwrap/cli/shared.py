# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared CLI option declarations and facade wiring."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from ..config import PackerSettings, load_settings
from ..errors import PackerError, PackerExecutionError, PackerNotFoundError
from ..installer import ensure_installed
from ..logging import fail, info, warn
from ..packer import Packer

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root holding pyproject.toml settings."),
]
WORKING_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--working-dir", "-C", help="Directory the packer process runs in."),
]
AUTO_INSTALL_OPTION = Annotated[
    bool,
    typer.Option("--auto-install/--no-auto-install", help="Download packer first when it is missing."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI output."),
]
TEMPLATE_ARGUMENT = Annotated[
    str,
    typer.Argument(help="Path to the packer template or template directory."),
]
PLUGIN_ARGUMENT = Annotated[
    str,
    typer.Argument(help="Plugin source address, e.g. github.com/hashicorp/amazon."),
]


@dataclass(slots=True)
class FacadeCLIOptions:
    """Normalised CLI inputs needed to obtain a :class:`Packer` facade."""

    root: Path
    working_dir: Path | None
    auto_install: bool
    use_emoji: bool


def build_facade_options(
    root: Path,
    working_dir: Path | None,
    auto_install: bool,
    emoji: bool,
) -> FacadeCLIOptions:
    """Normalise raw Typer inputs, resolving ``root`` to an absolute path."""

    return FacadeCLIOptions(
        root=root.resolve(),
        working_dir=working_dir,
        auto_install=auto_install,
        use_emoji=emoji,
    )


def resolve_packer(options: FacadeCLIOptions) -> Packer:
    """Return the facade described by ``options``, provisioning packer when asked.

    Args:
        options: Normalised CLI options.

    Returns:
        Packer: Facade ready to run subcommands.

    Raises:
        typer.Exit: When settings, provisioning or discovery fail.
    """

    try:
        settings = load_settings(options.root)
        if options.auto_install or settings.auto_install:
            if settings.executable is None:
                _provision(settings, use_emoji=options.use_emoji)
            else:
                warn(
                    f"Ignoring auto-install; packer executable is pinned to {settings.executable}",
                    use_emoji=options.use_emoji,
                )
        packer = Packer.from_settings(settings)
    except PackerError as exc:
        exit_with_error(exc, use_emoji=options.use_emoji)
    if options.working_dir is not None:
        packer = packer.with_working_dir(options.working_dir.resolve())
    return packer


def _provision(settings: PackerSettings, *, use_emoji: bool) -> None:
    result = ensure_installed(settings.install_dir, settings.version)
    if result.downloaded:
        info(f"Installed packer {result.version} at {result.path}", use_emoji=use_emoji)


def exit_code_for(exc: PackerError) -> int:
    """Return the process exit code that represents ``exc``."""

    if isinstance(exc, PackerExecutionError) and exc.returncode is not None and exc.returncode > 0:
        return exc.returncode
    return 1


def exit_with_error(exc: PackerError, *, use_emoji: bool) -> NoReturn:
    """Report ``exc`` on the console and terminate the command."""

    message = str(exc)
    if isinstance(exc, PackerNotFoundError):
        message = f"{message}; run 'packerwrap install' or pass --auto-install"
    fail(message, use_emoji=use_emoji)
    raise typer.Exit(code=exit_code_for(exc)) from exc


__all__ = [
    "AUTO_INSTALL_OPTION",
    "EMOJI_OPTION",
    "FacadeCLIOptions",
    "PLUGIN_ARGUMENT",
    "ROOT_OPTION",
    "TEMPLATE_ARGUMENT",
    "WORKING_DIR_OPTION",
    "build_facade_options",
    "exit_code_for",
    "exit_with_error",
    "resolve_packer",
]
