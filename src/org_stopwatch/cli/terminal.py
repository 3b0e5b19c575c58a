"""Non-blocking keyboard input for the interactive stopwatch."""

import os
import select
import sys
import termios
import tty
from typing import Optional, TextIO

import click


class KeyboardInput:
    """Reads single keys from a TTY without blocking the render loop.

    Use as a context manager: the terminal is put in cbreak mode on enter
    and restored on exit, including when the loop dies with an exception.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdin
        self._saved = None

    @property
    def enabled(self) -> bool:
        return self._saved is not None

    def __enter__(self) -> "KeyboardInput":
        self.enable()
        return self

    def __exit__(self, *exc_info) -> None:
        self.disable()

    def enable(self) -> None:
        """Switch the terminal to cbreak mode if it is a TTY."""
        if not self.stream.isatty():
            return
        fd = self.stream.fileno()
        self._saved = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    def disable(self) -> None:
        """Restore the terminal mode saved by ``enable``."""
        if self._saved is None:
            return
        termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved)
        self._saved = None

    def poll(self) -> Optional[str]:
        """Return one pending key, or None if nothing has been typed."""
        readable, _, _ = select.select([self.stream], [], [], 0)
        if not readable:
            return None
        data = os.read(self.stream.fileno(), 1)
        if not data:
            return None
        return data.decode("utf-8", errors="replace")

    def prompt(self, label: str) -> str:
        """Read a line in normal terminal mode; this blocks the loop."""
        saved = self._saved
        self.disable()
        try:
            click.echo()
            return click.prompt(label, default="", show_default=False).strip()
        finally:
            if saved is not None:
                self.enable()
