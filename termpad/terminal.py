"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import sys
import termios
from collections import deque
from enum import Enum
from typing import Optional, TextIO

import blessed
from curtsies import Input
from curtsies.events import PasteEvent

logger = logging.getLogger(__name__)


class TerminalSetupError(Exception):
    """Raw mode or fullscreen could not be entered."""


class CursorShape(Enum):
    """DECSCUSR cursor styles."""
    DEFAULT = 0
    STEADY_BLOCK = 2
    STEADY_UNDERSCORE = 4


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None, stream: Optional[TextIO] = None,
                 in_stream: Optional[TextIO] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.stream = stream or sys.stdout
        self.in_stream = in_stream or sys.stdin
        self.is_fullscreen = False
        self._curtsies_input: Optional[Input] = None
        # Keys already taken from curtsies but not yet handed out
        self._pending: deque[str] = deque()

    def setup(self):
        """Enter raw mode and the alternate screen.

        Raises:
            TerminalSetupError: if either step fails. Whatever was already
                entered is undone before raising.
        """
        if not self.term.is_a_tty:
            raise TerminalSetupError("standard output is not a terminal")
        try:
            # Raw mode first so keystrokes are never echoed onto the screen
            self._curtsies_input = Input(in_stream=self.in_stream, keynames='curtsies')
            self._curtsies_input.__enter__()
        except (termios.error, OSError) as e:
            self._curtsies_input = None
            raise TerminalSetupError(f"cannot enable raw mode: {e}") from e
        # Set before the write so cleanup also exits a partly entered alternate screen
        self.is_fullscreen = True
        try:
            self.write(self.term.enter_fullscreen + self.term.home + self.term.clear)
        except OSError as e:
            try:
                self.cleanup()
            except OSError as cleanup_error:
                logger.error(f"Could not leave alternate screen: {cleanup_error}")
            raise TerminalSetupError(f"cannot enter alternate screen: {e}") from e

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        try:
            if self.is_fullscreen:
                self.is_fullscreen = False
                self.write(self.style_sequence(CursorShape.DEFAULT) + self.term.normal_cursor
                           + self.term.exit_fullscreen)
        finally:
            if self._curtsies_input is not None:
                try:
                    self._curtsies_input.__exit__(None, None, None)
                finally:
                    self._curtsies_input = None
                    self._pending.clear()

    def write(self, text: str):
        """Write raw text at the current cursor position."""
        print(text, end='', file=self.stream, flush=True)

    def clear_screen(self):
        """Clear the entire screen."""
        self.write(self.term.home + self.term.clear)

    def move_cursor_to(self, x: int, y: int):
        """Move the cursor to absolute column x, row y."""
        self.write(self.term.move(y, x))

    @staticmethod
    def style_sequence(shape: CursorShape) -> str:
        return f"\x1b[{shape.value} q"

    def set_cursor_style(self, shape: CursorShape):
        """Change the cursor glyph. Blessed has no capability for this, so emit DECSCUSR."""
        self.write(self.style_sequence(shape))

    def poll(self, timeout: float) -> bool:
        """Wait up to `timeout` seconds for a key that has not been read yet.

        Curtsies may already hold bytes from an earlier read, so the wait
        goes through Input.send() rather than select() on the raw stream.
        """
        if self._pending:
            return True
        if self._curtsies_input is None:
            return False
        event = self._curtsies_input.send(timeout)
        if event is None:
            return False
        if isinstance(event, PasteEvent):
            # A fast burst arrives as one paste; hand it out key by key
            self._pending.extend(str(e) for e in event.events)
        else:
            self._pending.append(str(event))
        return bool(self._pending)

    def read_key(self) -> Optional[str]:
        """Read one key as a curtsies key name, e.g. 'a', '<ESC>', '<UP>'."""
        if not self._pending and not self.poll(0):
            return None
        return self._pending.popleft()
