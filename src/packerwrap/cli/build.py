# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``packerwrap build`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..errors import PackerError
from ..logging import info, ok
from ..options import BuildOptions, BuildOptionsBuilder, VariablePair
from .shared import (
    AUTO_INSTALL_OPTION,
    EMOJI_OPTION,
    ROOT_OPTION,
    TEMPLATE_ARGUMENT,
    WORKING_DIR_OPTION,
    build_facade_options,
    exit_with_error,
    resolve_packer,
)

DEBUG_OPTION = Annotated[bool, typer.Option("--debug", help="Run builds in debug mode.")]
FORCE_OPTION = Annotated[bool, typer.Option("--force", help="Replace artifacts left by earlier builds.")]
PARALLEL_OPTION = Annotated[
    int | None,
    typer.Option("--parallel-builds", min=0, help="Number of builds to run in parallel; 0 means no limit."),
]
COLOR_OPTION = Annotated[bool, typer.Option("--color/--no-color", help="Toggle packer's coloured output.")]
TIMESTAMP_OPTION = Annotated[bool, typer.Option("--timestamp-ui", help="Prefix packer output with timestamps.")]
VAR_OPTION = Annotated[
    list[str] | None,
    typer.Option("--var", help="Template variable as KEY=VALUE; repeatable, order is preserved."),
]
VAR_FILE_OPTION = Annotated[
    list[str] | None,
    typer.Option("--var-file", help="Variable file path; repeatable, order is preserved."),
]


def parse_variable(raw: str) -> VariablePair:
    """Split ``KEY=VALUE`` on the first ``=``.

    Raises:
        typer.BadParameter: If ``raw`` has no ``=`` or an empty key.
    """

    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"expected KEY=VALUE, got '{raw}'", param_hint="--var")
    return key, value


def build_options_from_cli(
    *,
    debug: bool,
    force: bool,
    parallel_builds: int | None,
    color: bool,
    timestamp_ui: bool,
    variables: list[str] | None,
    var_files: list[str] | None,
) -> BuildOptions:
    """Translate CLI flags into :class:`BuildOptions`."""

    builder = (
        BuildOptionsBuilder()
        .debug(debug)
        .force(force)
        .parallel_builds(parallel_builds)
        .color(color)
        .timestamp_ui(timestamp_ui)
    )
    for raw in variables or ():
        builder.var(*parse_variable(raw))
    for path in var_files or ():
        builder.var_file(path)
    return builder.build()


def build_command(
    template: TEMPLATE_ARGUMENT,
    debug: DEBUG_OPTION = False,
    force: FORCE_OPTION = False,
    parallel_builds: PARALLEL_OPTION = None,
    color: COLOR_OPTION = True,
    timestamp_ui: TIMESTAMP_OPTION = False,
    var: VAR_OPTION = None,
    var_file: VAR_FILE_OPTION = None,
    root: ROOT_OPTION = Path("."),
    working_dir: WORKING_DIR_OPTION = None,
    auto_install: AUTO_INSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Build images from a packer template."""

    options = build_facade_options(root, working_dir, auto_install, emoji)
    build_options = build_options_from_cli(
        debug=debug,
        force=force,
        parallel_builds=parallel_builds,
        color=color,
        timestamp_ui=timestamp_ui,
        variables=var,
        var_files=var_file,
    )
    packer = resolve_packer(options)
    info(f"Running packer build for {template}", use_emoji=options.use_emoji)
    try:
        packer.build(template, build_options)
    except PackerError as exc:
        exit_with_error(exc, use_emoji=options.use_emoji)
    ok("Build complete.", use_emoji=options.use_emoji)


__all__ = ["build_command", "build_options_from_cli", "parse_variable"]
