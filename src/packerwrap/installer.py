# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Provision the Packer binary from HashiCorp's release archives."""

from __future__ import annotations

import io
import logging
import stat
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import requests

from .errors import PackerConfigError, PackerIOError
from .platform import executable_name, release_arch, release_os
from .process import CommandOptions, run_command

LOGGER = logging.getLogger(__name__)

DEFAULT_PACKER_VERSION: Final[str] = "1.7.8"
RELEASE_URL_TEMPLATE: Final[str] = (
    "https://releases.hashicorp.com/packer/{version}/packer_{version}_{os}_{arch}.zip"
)
DEFAULT_TIMEOUT_SECONDS: Final[float] = 60.0


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Outcome of :func:`ensure_installed`.

    Attributes:
        path: Location of the Packer executable.
        version: Release version requested from the provisioner.
        downloaded: ``True`` when the archive was fetched during this call.
    """

    path: Path
    version: str
    downloaded: bool


def is_installed(executable: Path) -> bool:
    """Return ``True`` when ``executable --version`` runs and exits successfully.

    Args:
        executable: Candidate Packer binary.

    Returns:
        bool: ``False`` when the binary is missing, unspawnable or reports failure.
    """

    try:
        # A relative path such as ./packer must not fall through to a PATH lookup.
        completed = run_command(
            [executable.absolute(), "--version"], options=CommandOptions(capture_output=True)
        )
    except PackerIOError as exc:
        LOGGER.debug("Packer probe failed for %s: %s", executable, exc)
        return False
    LOGGER.debug("Packer probe for %s exited with %s", executable, completed.returncode)
    return completed.returncode == 0


def download_url(version: str, *, system: str | None = None, machine: str | None = None) -> str:
    """Return the release archive URL for ``version`` on the given platform.

    Args:
        version: Packer release version, e.g. ``1.7.8``.
        system: Operating system name; defaults to the host.
        machine: Machine architecture; defaults to the host.

    Returns:
        str: Fully rendered download URL.

    Raises:
        PackerConfigError: If the platform has no published release archive.
    """

    os_token = release_os(system)
    arch_token = release_arch(machine)
    if os_token is None or arch_token is None:
        raise PackerConfigError(f"no Packer release available for {system or 'host'}/{machine or 'host'}")
    return RELEASE_URL_TEMPLATE.format(version=version, os=os_token, arch=arch_token)


def install(
    destination: Path,
    version: str = DEFAULT_PACKER_VERSION,
    *,
    system: str | None = None,
    machine: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Path:
    """Download the Packer release archive and extract the binary into ``destination``.

    Args:
        destination: Directory receiving the executable.
        version: Release version to install.
        system: Operating system name; defaults to the host.
        machine: Machine architecture; defaults to the host.
        timeout: HTTP timeout in seconds.

    Returns:
        Path: Path to the extracted executable.

    Raises:
        PackerConfigError: If the platform is unsupported.
        PackerIOError: If the download fails or the archive is unusable.
    """

    url = download_url(version, system=system, machine=machine)
    LOGGER.debug("Downloading Packer %s from %s", version, url)
    payload = _fetch_archive(url, timeout=timeout)
    destination.mkdir(parents=True, exist_ok=True)
    target = destination / executable_name(system)
    _extract_member(payload, member=target.name, destination=target, context=url)
    _make_executable(target)
    return target


def ensure_installed(
    destination: Path,
    version: str = DEFAULT_PACKER_VERSION,
    *,
    system: str | None = None,
    machine: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> InstallResult:
    """Install Packer into ``destination`` unless a working binary is already there.

    Args:
        destination: Directory expected to hold the executable.
        version: Release version to install when the probe fails.
        system: Operating system name; defaults to the host.
        machine: Machine architecture; defaults to the host.
        timeout: HTTP timeout in seconds.

    Returns:
        InstallResult: Absolute executable path and whether a download happened.
    """

    existing = (destination / executable_name(system)).absolute()
    if is_installed(existing):
        return InstallResult(path=existing, version=version, downloaded=False)
    path = install(destination, version, system=system, machine=machine, timeout=timeout)
    return InstallResult(path=path.absolute(), version=version, downloaded=True)


def _fetch_archive(url: str, *, timeout: float) -> bytes:
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise PackerIOError(f"failed to download {url}: {exc}") from exc
    return response.content


def _extract_member(payload: bytes, *, member: str, destination: Path, context: str) -> None:
    """Write archive ``member`` from the zip ``payload`` to ``destination``."""

    try:
        with zipfile.ZipFile(io.BytesIO(payload)) as archive:
            try:
                data = archive.read(member)
            except KeyError as exc:
                raise PackerIOError(f"{context}: archive does not contain '{member}'") from exc
    except zipfile.BadZipFile as exc:
        raise PackerIOError(f"{context}: downloaded file is not a zip archive") from exc
    try:
        destination.write_bytes(data)
    except OSError as exc:
        raise PackerIOError.from_os_error(exc) from exc


def _make_executable(path: Path) -> None:
    """Add the execute bits to ``path``.

    Raises:
        PackerIOError: If the file mode cannot be read or changed.
    """

    try:
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as exc:
        raise PackerIOError.from_os_error(exc) from exc


__all__ = [
    "DEFAULT_PACKER_VERSION",
    "InstallResult",
    "RELEASE_URL_TEMPLATE",
    "download_url",
    "ensure_installed",
    "install",
    "is_installed",
]
