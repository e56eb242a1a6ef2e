# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands together."""

from __future__ import annotations

import typer

from .build import build_command
from .install import install_command
from .plugins import plugin_app
from .templates import (
    console_command,
    fix_command,
    hcl2_upgrade_command,
    init_command,
    inspect_command,
    validate_command,
    version_command,
)

app = typer.Typer(help="Run packer subcommands through a typed wrapper.", no_args_is_help=True)

app.command("build")(build_command)
app.command("init")(init_command)
app.command("validate")(validate_command)
app.command("inspect")(inspect_command)
app.command("fix")(fix_command)
app.command("console")(console_command)
app.command("hcl2-upgrade")(hcl2_upgrade_command)
app.command("version")(version_command)
app.command("install")(install_command)
app.add_typer(plugin_app, name="plugin")

__all__ = ["app"]
