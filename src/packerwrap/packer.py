# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typed facade over the Packer command-line tool."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING

from .commands import (
    CONSOLE,
    FIX,
    HCL2_UPGRADE,
    INIT,
    INSPECT,
    PLUGIN_INSTALL,
    PLUGIN_LIST,
    PLUGIN_REMOVE,
    VALIDATE,
    VERSION,
    PathArg,
    Subcommand,
    build_arguments,
    subcommand_arguments,
)
from .errors import PackerExecutionError, PackerNotFoundError
from .options import BuildOptions
from .platform import executable_name
from .process import CommandOptions, decode_stream, run_command

if TYPE_CHECKING:
    from .config import PackerSettings


@dataclass(frozen=True, slots=True)
class Packer:
    """Handle on a Packer executable plus an optional working directory.

    Every method spawns one child process, blocks until it exits and either returns
    its result or raises a :class:`~packerwrap.errors.PackerError`. Instances are
    immutable and may be shared between threads.

    Attributes:
        executable: Absolute path of the Packer binary.
        working_dir: Directory the child processes run in; ``None`` inherits the
            caller's working directory.
    """

    executable: Path
    working_dir: Path | None = None

    @classmethod
    def discover(cls, base_dir: PathArg | None = None, *, system: str | None = None) -> Packer:
        """Locate ``packer`` (``packer.exe`` on Windows) inside ``base_dir``.

        Args:
            base_dir: Directory holding the executable; defaults to the current
                working directory.
            system: Operating system name used to pick the filename.

        Returns:
            Packer: Facade bound to the absolute executable path.

        Raises:
            PackerNotFoundError: If the executable does not exist.
        """

        root = Path(base_dir) if base_dir is not None else Path.cwd()
        return cls.at(root / executable_name(system))

    @classmethod
    def at(cls, executable: PathArg) -> Packer:
        """Return a facade for an explicit ``executable`` path after checking it exists.

        Raises:
            PackerNotFoundError: If ``executable`` does not exist.
        """

        path = Path(executable)
        if not path.exists():
            raise PackerNotFoundError(path)
        return cls(executable=path.absolute())

    @classmethod
    def from_settings(cls, settings: PackerSettings) -> Packer:
        """Return a facade configured from loaded :class:`PackerSettings`."""

        if settings.executable is not None:
            packer = cls.at(settings.executable)
        else:
            packer = cls.discover(settings.install_dir)
        if settings.working_dir is not None:
            packer = packer.with_working_dir(settings.working_dir)
        return packer

    def with_working_dir(self, directory: PathArg) -> Packer:
        """Return a copy running every subsequent command inside ``directory``."""

        return replace(self, working_dir=Path(directory))

    def command(self, arguments: list[str]) -> list[str]:
        """Return the full argv, executable first, for ``arguments``."""

        return [os.fspath(self.executable), *arguments]

    def build_command(self, template: PathArg, options: BuildOptions | None = None) -> list[str]:
        """Return the argv that :meth:`build` would execute."""

        return self.command(build_arguments(template, options))

    def build(self, template: PathArg, options: BuildOptions | None = None) -> None:
        """Run ``packer build`` for ``template`` with ``options``."""

        self._run_status(build_arguments(template, options))

    def init(self, template: PathArg) -> None:
        """Run ``packer init`` to install the plugins ``template`` requires."""

        self._run_status(subcommand_arguments(INIT, template))

    def validate(self, template: PathArg) -> None:
        """Run ``packer validate`` against ``template``."""

        self._run_status(subcommand_arguments(VALIDATE, template))

    def inspect(self, template: PathArg) -> str:
        """Return the ``packer inspect`` report for ``template``."""

        return self._run_capture(INSPECT, template)

    def fix(self, template: PathArg) -> str:
        """Return the template produced by ``packer fix``."""

        return self._run_capture(FIX, template)

    def version(self) -> str:
        """Return the output of ``packer version``."""

        return self._run_capture(VERSION)

    def plugin_install(self, plugin_name: str) -> None:
        """Run ``packer plugin install`` for ``plugin_name``.

        Args:
            plugin_name: Plugin source address, e.g. ``github.com/hashicorp/amazon``.

        Raises:
            PackerExecutionError: If Packer exits non-zero.
            PackerIOError: If the process cannot be spawned.
        """

        self._run_status(subcommand_arguments(PLUGIN_INSTALL, plugin_name))

    def plugin_remove(self, plugin_name: str) -> None:
        """Run ``packer plugin remove`` for ``plugin_name``."""

        self._run_status(subcommand_arguments(PLUGIN_REMOVE, plugin_name))

    def plugin_list(self) -> str:
        """Return the installed-plugin listing printed by Packer."""

        return self._run_capture(PLUGIN_LIST)

    def console(self, template: PathArg) -> None:
        """Start an interactive ``packer console`` session for ``template``."""

        self._run_status(subcommand_arguments(CONSOLE, template))

    def hcl2_upgrade(self, template: PathArg) -> str:
        """Run ``packer hcl2_upgrade`` on a JSON ``template`` and return its output."""

        return self._run_capture(HCL2_UPGRADE, template)

    def _options(self, *, capture_output: bool) -> CommandOptions:
        """Return process options running in the configured working directory."""

        return CommandOptions(cwd=self.working_dir, capture_output=capture_output)

    def _run_status(self, arguments: list[str]) -> None:
        """Run ``arguments`` with inherited stdio, raising on a non-zero exit."""

        command = self.command(arguments)
        completed = run_command(command, options=self._options(capture_output=False))
        if completed.returncode != 0:
            raise PackerExecutionError(
                f"Command failed with exit code: {completed.returncode}",
                returncode=completed.returncode,
                command=command,
            )

    def _run_capture(self, subcommand: Subcommand, positional: PathArg | None = None) -> str:
        """Run ``subcommand`` capturing its streams and return decoded stdout."""

        command = self.command(subcommand_arguments(subcommand, positional))
        completed = run_command(command, options=self._options(capture_output=True))
        if completed.returncode != 0:
            raise PackerExecutionError(
                decode_stream(completed.stderr),
                returncode=completed.returncode,
                command=command,
            )
        return decode_stream(completed.stdout)


__all__ = ["Packer"]
