# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typed wrapper around the Packer image-building tool."""

from __future__ import annotations

from importlib import metadata

from .errors import (
    ErrorKind,
    PackerConfigError,
    PackerError,
    PackerExecutionError,
    PackerIOError,
    PackerNotFoundError,
)
from .options import BuildOptions, BuildOptionsBuilder
from .packer import Packer

__all__ = [
    "BuildOptions",
    "BuildOptionsBuilder",
    "ErrorKind",
    "Packer",
    "PackerConfigError",
    "PackerError",
    "PackerExecutionError",
    "PackerIOError",
    "PackerNotFoundError",
    "__version__",
]

try:
    __version__ = metadata.version("packerwrap")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
