# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Unit tests for the Packer provisioner."""

from __future__ import annotations

import io
import os
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest
import requests

from packerwrap.errors import PackerConfigError, PackerIOError
from packerwrap.installer import (
    DEFAULT_PACKER_VERSION,
    download_url,
    ensure_installed,
    install,
    is_installed,
)


class _FakeResponse:
    def __init__(self, content: bytes, status: int = 200) -> None:
        self.content = content
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


def _zip_payload(members: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in members.items():
            archive.writestr(name, data)
    return buffer.getvalue()


@pytest.mark.parametrize(
    ("system", "machine", "expected"),
    [
        ("Linux", "x86_64", "packer_1.7.8_linux_amd64.zip"),
        ("Darwin", "arm64", "packer_1.7.8_darwin_arm64.zip"),
        ("Windows", "AMD64", "packer_1.7.8_windows_amd64.zip"),
        ("Linux", "aarch64", "packer_1.7.8_linux_arm64.zip"),
    ],
)
def test_download_url_renders_release_template(system: str, machine: str, expected: str) -> None:
    url = download_url("1.7.8", system=system, machine=machine)

    assert url == f"https://releases.hashicorp.com/packer/1.7.8/{expected}"


def test_download_url_rejects_unknown_platform() -> None:
    with pytest.raises(PackerConfigError):
        download_url("1.7.8", system="Plan9", machine="x86_64")
    with pytest.raises(PackerConfigError):
        download_url("1.7.8", system="Linux", machine="sparc64")


def test_is_installed_probes_version(fake_packer: Path, tmp_path: Path) -> None:
    assert is_installed(fake_packer)
    assert not is_installed(tmp_path / "absent" / "packer")


def test_install_extracts_binary(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    requested: list[tuple[str, float]] = []
    payload = _zip_payload({"packer": b"#!/bin/sh\necho fake\n", "LICENSE.txt": b"MPL"})

    def fake_get(url: str, timeout: float) -> _FakeResponse:
        requested.append((url, timeout))
        return _FakeResponse(payload)

    monkeypatch.setattr("packerwrap.installer.requests.get", fake_get)

    path = install(tmp_path / "bin", "1.9.4", system="Linux", machine="x86_64", timeout=5)

    assert requested == [("https://releases.hashicorp.com/packer/1.9.4/packer_1.9.4_linux_amd64.zip", 5)]
    assert path == tmp_path / "bin" / "packer"
    assert path.read_bytes() == b"#!/bin/sh\necho fake\n"
    assert os.access(path, os.X_OK)


def test_install_uses_windows_member_name(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    payload = _zip_payload({"packer.exe": b"MZ"})
    monkeypatch.setattr("packerwrap.installer.requests.get", lambda url, timeout: _FakeResponse(payload))

    path = install(tmp_path, system="Windows", machine="AMD64")

    assert path.name == "packer.exe"
    assert path.read_bytes() == b"MZ"


def test_install_wraps_http_errors(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("packerwrap.installer.requests.get", lambda url, timeout: _FakeResponse(b"", status=404))

    with pytest.raises(PackerIOError) as excinfo:
        install(tmp_path, system="Linux", machine="x86_64")

    assert isinstance(excinfo.value.__cause__, requests.HTTPError)
    assert not (tmp_path / "packer").exists()


def test_install_rejects_archive_without_binary(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    payload = _zip_payload({"README": b"nothing here"})
    monkeypatch.setattr("packerwrap.installer.requests.get", lambda url, timeout: _FakeResponse(payload))

    with pytest.raises(PackerIOError, match="does not contain 'packer'"):
        install(tmp_path, system="Linux", machine="x86_64")


def test_install_rejects_non_zip_payload(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("packerwrap.installer.requests.get", lambda url, timeout: _FakeResponse(b"<html>"))

    with pytest.raises(PackerIOError, match="not a zip archive"):
        install(tmp_path, system="Linux", machine="x86_64")


def test_ensure_installed_skips_download_when_present(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    make_fake_packer: Callable[[Path], Path],
) -> None:
    make_fake_packer(tmp_path)

    def fail_get(url: str, timeout: float) -> _FakeResponse:
        raise AssertionError("download should not happen")

    monkeypatch.setattr("packerwrap.installer.requests.get", fail_get)

    result = ensure_installed(tmp_path)

    assert result.downloaded is False
    assert result.version == DEFAULT_PACKER_VERSION
    assert result.path == (tmp_path / "packer").absolute()


def test_ensure_installed_downloads_when_missing(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    payload = _zip_payload({"packer": b"binary"})
    monkeypatch.setattr("packerwrap.installer.requests.get", lambda url, timeout: _FakeResponse(payload))

    result = ensure_installed(tmp_path, "1.8.0", system="Linux", machine="x86_64")

    assert result.downloaded is True
    assert result.version == "1.8.0"
    assert result.path.read_bytes() == b"binary"


def test_relative_destination_ignores_packer_on_path(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    make_fake_packer: Callable[[Path], Path],
) -> None:
    on_path = tmp_path / "elsewhere"
    make_fake_packer(on_path)
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("PATH", f"{on_path}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.chdir(project)
    payload = _zip_payload({"packer": b"binary"})
    monkeypatch.setattr("packerwrap.installer.requests.get", lambda url, timeout: _FakeResponse(payload))

    assert not is_installed(Path("./packer"))

    result = ensure_installed(Path("."), system="Linux", machine="x86_64")

    assert result.downloaded is True
    assert result.path.resolve() == (project / "packer").resolve()
    assert result.path.read_bytes() == b"binary"


def test_install_wraps_chmod_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    payload = _zip_payload({"packer": b"binary"})
    monkeypatch.setattr("packerwrap.installer.requests.get", lambda url, timeout: _FakeResponse(payload))

    def deny_chmod(self: Path, mode: int) -> None:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "chmod", deny_chmod)

    with pytest.raises(PackerIOError, match="Permission denied") as excinfo:
        install(tmp_path, system="Linux", machine="x86_64")

    assert isinstance(excinfo.value.__cause__, PermissionError)
