# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error taxonomy raised by the Packer facade and its collaborators."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum


class ErrorKind(str, Enum):
    """Categories of failure surfaced by :mod:`packerwrap`."""

    NOT_FOUND = "not_found"
    EXECUTION = "execution"
    CONFIG = "config"
    IO = "io"


class PackerError(RuntimeError):
    """Base class for every failure raised by the wrapper."""

    kind: ErrorKind = ErrorKind.EXECUTION


class PackerNotFoundError(PackerError):
    """Raised when the Packer executable is missing at discovery time."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, executable: object | None = None) -> None:
        """Initialise the error for the missing ``executable``.

        Args:
            executable: Path that was probed, when known.
        """

        message = "Failed to find Packer executable"
        if executable is not None:
            message = f"{message} at {executable}"
        super().__init__(message)
        self.executable = executable


class PackerExecutionError(PackerError):
    """Raised when Packer ran but exited with a non-zero status."""

    kind = ErrorKind.EXECUTION

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        command: Sequence[str] = (),
    ) -> None:
        """Initialise the error with the decoded diagnostic text.

        Args:
            message: Standard error text or a synthesised exit-code message.
            returncode: Exit status reported by the child process.
            command: Argument vector that was executed.
        """

        super().__init__(f"Failed to execute Packer command: {message}")
        self.message = message
        self.returncode = returncode
        self.command = tuple(command)


class PackerConfigError(PackerError):
    """Raised for invalid settings or unsupported provisioning targets."""

    kind = ErrorKind.CONFIG

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid configuration: {message}")
        self.message = message


class PackerIOError(PackerError):
    """Raised when the child process could not be spawned or its streams read."""

    kind = ErrorKind.IO

    def __init__(self, message: str) -> None:
        super().__init__(f"IO error: {message}")
        self.message = message

    @classmethod
    def from_os_error(cls, exc: OSError) -> PackerIOError:
        """Return an :class:`PackerIOError` describing ``exc``.

        Args:
            exc: Operating system failure raised while spawning or reading.

        Returns:
            PackerIOError: Wrapped error; callers chain it with ``raise ... from exc``.
        """

        detail = exc.strerror or str(exc) or exc.__class__.__name__
        if exc.filename is not None:
            detail = f"{detail}: {exc.filename}"
        return cls(detail)


__all__ = [
    "ErrorKind",
    "PackerConfigError",
    "PackerError",
    "PackerExecutionError",
    "PackerIOError",
    "PackerNotFoundError",
]
