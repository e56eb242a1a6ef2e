# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles for the two streams the CLI writes to.

Packer output relayed by ``inspect``/``fix``/``version`` goes to stdout, so
wrapper diagnostics are kept on stderr where they cannot corrupt redirected
templates or reports.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import Literal

from rich.console import Console

Stream = Literal["stdout", "stderr"]


def stream_is_tty(stream: Stream) -> bool:
    """Return ``True`` when ``stream`` is attached to a terminal.

    Args:
        stream: Which standard stream to inspect.

    Returns:
        bool: ``False`` for redirected, closed or replaced streams without ``isatty``.
    """

    handle = sys.stderr if stream == "stderr" else sys.stdout
    try:
        return handle.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Hand out one Rich :class:`Console` per stream, emoji setting and terminal state."""

    def __init__(self) -> None:
        self._consoles: dict[tuple[Stream, bool, bool], Console] = {}

    def get(self, stream: Stream = "stdout", *, emoji: bool = True) -> Console:
        """Return the console writing to ``stream``.

        Colour is only enabled when the stream is a terminal; the terminal state is
        part of the cache key because test runners swap the standard streams.

        Args:
            stream: ``"stdout"`` for relayed Packer output, ``"stderr"`` for diagnostics.
            emoji: ``True`` when Rich should render emoji glyphs.

        Returns:
            Console: Cached console bound lazily to the current ``sys`` stream.
        """

        tty = stream_is_tty(stream)
        key = (stream, emoji, tty)
        console = self._consoles.get(key)
        if console is None:
            console = Console(
                stderr=stream == "stderr",
                color_system="auto" if tty else None,
                no_color=not tty,
                emoji=emoji,
                highlight=False,
                soft_wrap=True,
            )
            self._consoles[key] = console
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["RichConsoleManager", "Stream", "get_console_manager", "stream_is_tty"]
