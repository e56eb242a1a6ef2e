# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

FAKE_PACKER_SCRIPT = r"""#!/bin/sh
if [ -n "$PACKER_ARGS_LOG" ]; then
  printf '%s\n' "$@" > "$PACKER_ARGS_LOG"
fi
if [ -n "$PACKER_CWD_LOG" ]; then
  pwd > "$PACKER_CWD_LOG"
fi
case "$1" in
  --version|version)
    echo "Packer v1.7.8"
    exit 0
    ;;
  plugin)
    case "$2" in
      list)
        echo "github.com/hashicorp/amazon v1.2.0"
        exit 0
        ;;
      install)
        exit 0
        ;;
      remove)
        echo "plugin $3 is not installed" >&2
        exit 3
        ;;
    esac
    ;;
  inspect|fix|hcl2_upgrade)
    if [ -e "$2" ]; then
      cat "$2"
      exit 0
    fi
    echo "Error: Failed to read template $2" >&2
    exit 1
    ;;
  init|validate|console|build)
    eval "last=\${$#}"
    if [ -e "$last" ]; then
      exit 0
    fi
    echo "Error: $last does not exist" >&2
    exit 1
    ;;
esac
echo "unknown command $1" >&2
exit 127
"""


def write_fake_packer(directory: Path, name: str = "packer") -> Path:
    """Write the fake packer script into ``directory`` and return its path."""

    directory.mkdir(parents=True, exist_ok=True)
    executable = directory / name
    executable.write_text(FAKE_PACKER_SCRIPT, encoding="utf-8")
    executable.chmod(0o755)
    return executable


@pytest.fixture
def make_fake_packer() -> Callable[[Path], Path]:
    """Return a factory writing the fake packer script into a directory."""

    if sys.platform == "win32":
        pytest.skip("fake packer is a POSIX shell script")
    return write_fake_packer


@pytest.fixture
def fake_packer(tmp_path: Path, make_fake_packer: Callable[[Path], Path]) -> Path:
    """Return the path of an executable stand-in for packer."""

    return make_fake_packer(tmp_path / "bin")


@pytest.fixture
def args_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Record the argv of every fake packer invocation into the returned file."""

    log = tmp_path / "args.log"
    monkeypatch.setenv("PACKER_ARGS_LOG", str(log))
    return log


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("EXECUTABLE", "WORKING_DIR", "VERSION", "INSTALL_DIR", "AUTO_INSTALL"):
        monkeypatch.delenv(f"PACKERWRAP_{name}", raising=False)
