# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Template-oriented commands: init, validate, console, inspect, fix, hcl2-upgrade, version."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..errors import PackerError
from ..logging import ok, plain
from ..packer import Packer
from .shared import (
    AUTO_INSTALL_OPTION,
    EMOJI_OPTION,
    ROOT_OPTION,
    TEMPLATE_ARGUMENT,
    WORKING_DIR_OPTION,
    FacadeCLIOptions,
    build_facade_options,
    exit_with_error,
    resolve_packer,
)


def _run_status(options: FacadeCLIOptions, action: Callable[[Packer], None], success: str) -> None:
    packer = resolve_packer(options)
    try:
        action(packer)
    except PackerError as exc:
        exit_with_error(exc, use_emoji=options.use_emoji)
    ok(success, use_emoji=options.use_emoji)


def _run_capture(options: FacadeCLIOptions, action: Callable[[Packer], str]) -> None:
    packer = resolve_packer(options)
    try:
        output = action(packer)
    except PackerError as exc:
        exit_with_error(exc, use_emoji=options.use_emoji)
    plain(output)


def init_command(
    template: TEMPLATE_ARGUMENT,
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Install the plugins a template requires."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    _run_status(options, lambda packer: packer.init(template), f"Initialised {template}.")


def validate_command(
    template: TEMPLATE_ARGUMENT,
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Check that a template is valid."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    _run_status(options, lambda packer: packer.validate(template), f"{template} is valid.")


def console_command(
    template: TEMPLATE_ARGUMENT,
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Open an interactive packer console for a template."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    _run_status(options, lambda packer: packer.console(template), "Console session ended.")


def inspect_command(
    template: TEMPLATE_ARGUMENT,
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Print the variables, sources and provisioners of a template."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    _run_capture(options, lambda packer: packer.inspect(template))


def fix_command(
    template: TEMPLATE_ARGUMENT,
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Print a JSON template rewritten for the current packer release."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    _run_capture(options, lambda packer: packer.fix(template))


def hcl2_upgrade_command(
    template: TEMPLATE_ARGUMENT,
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Translate a JSON template into HCL2."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    _run_capture(options, lambda packer: packer.hcl2_upgrade(template))


def version_command(
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Print the packer version."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    _run_capture(options, lambda packer: packer.version())


__all__ = [
    "console_command",
    "fix_command",
    "hcl2_upgrade_command",
    "init_command",
    "inspect_command",
    "validate_command",
    "version_command",
]
