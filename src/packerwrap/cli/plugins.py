# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``packerwrap plugin`` sub-commands."""

from __future__ import annotations

from pathlib import Path

import typer

from ..errors import PackerError
from ..logging import ok, plain
from .shared import (
    AUTO_INSTALL_OPTION,
    EMOJI_OPTION,
    PLUGIN_ARGUMENT,
    ROOT_OPTION,
    WORKING_DIR_OPTION,
    build_facade_options,
    exit_with_error,
    resolve_packer,
)

plugin_app = typer.Typer(help="Manage packer plugins.", no_args_is_help=True)


@plugin_app.command("install")
def plugin_install_command(
    plugin: PLUGIN_ARGUMENT,
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Install a plugin."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    packer = resolve_packer(options)
    try:
        packer.plugin_install(plugin)
    except PackerError as exc:
        exit_with_error(exc, use_emoji=emoji)
    ok(f"Installed plugin {plugin}.", use_emoji=emoji)


@plugin_app.command("remove")
def plugin_remove_command(
    plugin: PLUGIN_ARGUMENT,
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Remove a plugin."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    packer = resolve_packer(options)
    try:
        packer.plugin_remove(plugin)
    except PackerError as exc:
        exit_with_error(exc, use_emoji=emoji)
    ok(f"Removed plugin {plugin}.", use_emoji=emoji)


@plugin_app.command("list")
def plugin_list_command(
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """List installed plugins."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    packer = resolve_packer(options)
    try:
        output = packer.plugin_list()
    except PackerError as exc:
        exit_with_error(exc, use_emoji=emoji)
    plain(output)


__all__ = ["plugin_app"]
