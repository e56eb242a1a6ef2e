# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing status lines and verbatim relay of Packer output."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rich.text import Text

from .console import Stream, get_console_manager


@dataclass(frozen=True, slots=True)
class _Tone:
    glyph: str
    style: str
    stream: Stream


class Level(str, Enum):
    """Severity of a wrapper status line."""

    INFO = "info"
    OK = "ok"
    WARN = "warn"
    FAIL = "fail"


_TONES: dict[Level, _Tone] = {
    Level.INFO: _Tone("ℹ️ ", "cyan", "stdout"),
    Level.OK: _Tone("✅ ", "green", "stdout"),
    Level.WARN: _Tone("⚠️ ", "yellow", "stderr"),
    Level.FAIL: _Tone("❌ ", "red", "stderr"),
}


def emit(level: Level, msg: str, *, use_emoji: bool) -> None:
    """Print one status line for ``level``.

    Warnings and failures go to stderr; the others share stdout with Packer's
    own output.

    Args:
        level: Severity selecting glyph, style and stream.
        msg: Message body, printed without markup interpretation.
        use_emoji: Prefix the line with the level's glyph.
    """

    tone = _TONES[level]
    text = Text(f"{tone.glyph}{msg}" if use_emoji else msg, style=tone.style)
    get_console_manager().get(tone.stream, emoji=use_emoji).print(text)


def plain(msg: str) -> None:
    """Relay ``msg`` to stdout exactly as Packer produced it."""

    console = get_console_manager().get("stdout", emoji=False)
    console.print(msg, markup=False, highlight=False, end="")


def info(msg: str, *, use_emoji: bool) -> None:
    emit(Level.INFO, msg, use_emoji=use_emoji)


def ok(msg: str, *, use_emoji: bool) -> None:
    emit(Level.OK, msg, use_emoji=use_emoji)


def warn(msg: str, *, use_emoji: bool) -> None:
    emit(Level.WARN, msg, use_emoji=use_emoji)


def fail(msg: str, *, use_emoji: bool) -> None:
    emit(Level.FAIL, msg, use_emoji=use_emoji)


__all__ = ["Level", "emit", "fail", "info", "ok", "plain", "warn"]
