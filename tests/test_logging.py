# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for CLI status lines and Packer output relay."""

from __future__ import annotations

import pytest

from packerwrap.logging import Level, emit, fail, info, plain, warn


def test_failures_and_warnings_use_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    fail("Command failed with exit code: 2", use_emoji=False)
    warn("Ignoring auto-install", use_emoji=False)

    captured = capsys.readouterr()

    assert captured.out == ""
    assert "Command failed with exit code: 2" in captured.err
    assert "Ignoring auto-install" in captured.err


def test_plain_relays_output_verbatim(capsys: pytest.CaptureFixture[str]) -> None:
    plain('{"builders": [{"type": "[bold]docker[/bold]"}]}\n')
    info("done", use_emoji=False)

    captured = capsys.readouterr()

    assert captured.out.splitlines() == ['{"builders": [{"type": "[bold]docker[/bold]"}]}', "done"]
    assert captured.err == ""


@pytest.mark.parametrize(
    ("level", "glyph"),
    [(Level.OK, "✅"), (Level.FAIL, "❌")],
)
def test_emoji_prefix_follows_flag(
    capsys: pytest.CaptureFixture[str],
    level: Level,
    glyph: str,
) -> None:
    emit(level, "with glyph", use_emoji=True)
    emit(level, "without glyph", use_emoji=False)

    captured = capsys.readouterr()
    lines = (captured.out + captured.err).splitlines()

    assert lines[0].startswith(glyph)
    assert lines[1] == "without glyph"
