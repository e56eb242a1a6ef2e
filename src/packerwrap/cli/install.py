# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``packerwrap install`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..config import load_settings
from ..errors import PackerError
from ..installer import InstallResult, ensure_installed
from ..logging import info, ok
from .shared import EMOJI_OPTION, ROOT_OPTION, exit_with_error

VERSION_OPTION = Annotated[
    str | None,
    typer.Option("--packer-version", help="Release to install; defaults to the configured version."),
]
DESTINATION_OPTION = Annotated[
    Path | None,
    typer.Option("--dest", "-d", help="Directory receiving the packer binary."),
]


def install_command(
    root: ROOT_OPTION = Path("."),
    packer_version: VERSION_OPTION = None,
    dest: DESTINATION_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Download packer unless a working binary is already present."""

    resolved_root = root.resolve()
    try:
        settings = load_settings(resolved_root)
        version = packer_version or settings.version
        destination = dest.resolve() if dest is not None else settings.install_dir
        info(f"Ensuring packer {version} in {destination}", use_emoji=emoji)
        result: InstallResult = ensure_installed(destination, version)
    except PackerError as exc:
        exit_with_error(exc, use_emoji=emoji)

    if result.downloaded:
        ok(f"Installed packer {result.version} at {result.path}", use_emoji=emoji)
    else:
        ok(f"packer already available at {result.path}", use_emoji=emoji)


__all__ = ["install_command"]
