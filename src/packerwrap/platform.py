# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host platform helpers used for executable discovery and release selection."""

from __future__ import annotations

import platform
from typing import Final

WINDOWS: Final[str] = "windows"
EXECUTABLE_STEM: Final[str] = "packer"

_SYSTEM_ALIASES: Final[dict[str, str]] = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
    "sunos": "solaris",
    "solaris": "solaris",
}

_ARCH_ALIASES: Final[dict[str, str]] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv6l": "arm",
    "armv7l": "arm",
    "arm": "arm",
}


def current_system() -> str:
    """Return the lower-cased operating system name of the host."""

    return platform.system().lower()


def executable_name(system: str | None = None) -> str:
    """Return the Packer executable filename for ``system``.

    Args:
        system: Operating system name; defaults to the running host.

    Returns:
        str: ``packer.exe`` on Windows, ``packer`` elsewhere.
    """

    resolved = (system or current_system()).lower()
    return f"{EXECUTABLE_STEM}.exe" if resolved == WINDOWS else EXECUTABLE_STEM


def release_os(system: str | None = None) -> str | None:
    """Return the release-archive OS token for ``system`` or ``None`` if unsupported."""

    return _SYSTEM_ALIASES.get((system or current_system()).lower())


def release_arch(machine: str | None = None) -> str | None:
    """Return the release-archive architecture token for ``machine``.

    Args:
        machine: Raw machine identifier such as ``x86_64``; defaults to the host.

    Returns:
        str | None: Normalised architecture token, ``None`` when unsupported.
    """

    raw = machine if machine is not None else platform.machine()
    return _ARCH_ALIASES.get(raw.lower())


__all__ = [
    "EXECUTABLE_STEM",
    "WINDOWS",
    "current_system",
    "executable_name",
    "release_arch",
    "release_os",
]
