# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution of the Packer binary."""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404 suppression_valid: Shell-free subprocess wrapper enforces safe execution.
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess

from .errors import PackerIOError

STREAM_ENCODING = "utf-8"


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable process execution options."""

    cwd: Path | None = None
    capture_output: bool = False


def decode_stream(value: bytes | None) -> str:
    """Return ``value`` decoded as text, replacing invalid byte sequences.

    Args:
        value: Raw stream output captured from the child process.

    Returns:
        str: Decoded text; empty when nothing was captured.
    """

    if not value:
        return ""
    return value.decode(STREAM_ENCODING, errors="replace")


def _normalize_args(args: Sequence[str | os.PathLike[str]]) -> list[str]:
    """Normalise the argument vector and resolve the executable path.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: String arguments with an absolute executable head.

    Raises:
        ValueError: If no arguments are provided.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = (os.fspath(arg) for arg in args)
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]
    if len(head_path.parts) > 1 or head.startswith("."):
        return [str(head_path.absolute()), *rest]
    resolved = shutil.which(head)
    return [resolved or head, *rest]


def run_command(
    args: Sequence[str | os.PathLike[str]],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess[bytes]:
    """Execute ``args`` synchronously and return the completed process.

    The exit status is not checked; callers translate it into their own results.

    Args:
        args: Executable followed by its arguments.
        options: Working directory and capture settings.

    Returns:
        CompletedProcess[bytes]: Exit status plus raw streams when captured.

    Raises:
        PackerIOError: If the process cannot be spawned or its pipes read.
    """

    normalized = _normalize_args(args)
    resolved = options or CommandOptions()
    try:
        # Bandit: the argument list is built by the facade, no shell expansion.
        return subprocess.run(  # nosec B603 - controlled arguments, not user supplied
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            check=False,
            capture_output=resolved.capture_output,
        )
    except OSError as exc:
        raise PackerIOError.from_os_error(exc) from exc


__all__ = [
    "CommandOptions",
    "STREAM_ENCODING",
    "decode_stream",
    "run_command",
]
