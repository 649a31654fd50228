import logging

from .model import TextView, Mode
from .terminal import TerminalInterface, CursorShape

logger = logging.getLogger(__name__)


CURSOR_SHAPES = {
    Mode.NORMAL: CursorShape.STEADY_BLOCK,
    Mode.EDITING: CursorShape.STEADY_UNDERSCORE,
}


class TerminalView(TextView):
    """Full-repaint renderer on top of a TerminalInterface.

    Every render clears the screen and rewrites all buffer lines, so the
    screen never drifts from the model. Output is proportional to the
    buffer size, which is fine at typing speed.
    """

    def __init__(self, terminal: TerminalInterface):
        self.terminal = terminal

    def render(self):
        self.terminal.clear_screen()
        for y, line in enumerate(self.model.lines):
            self._move(0, y)
            self.terminal.write(line)
        self.update_cursor()

    def update_cursor(self):
        column, row = self.model.cursor_position.as_tuple()
        self._move(column, row)

    def show_mode(self, mode: Mode):
        self.terminal.set_cursor_style(CURSOR_SHAPES[mode])

    def _move(self, x: int, y: int):
        # A failed move is not fatal; the next render repositions the cursor
        try:
            self.terminal.move_cursor_to(x, y)
        except OSError as e:
            logger.error(f"Error moving cursor to ({x}, {y}): {e}")
