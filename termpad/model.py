from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .constants import EditorConstants


@dataclass
class CursorPosition:
    column: int = 0
    row: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.column, self.row)


class Mode(Enum):
    NORMAL = "normal"
    EDITING = "editing"


class TextView(ABC):
    _model: "Optional[TextModel]" = None

    @property
    def model(self):
        assert self._model
        return self._model

    @abstractmethod
    def render(self):
        """Repaint the whole viewport from the model's lines.

        After this returns the terminal shows every buffer line and the
        visible cursor sits at the model's cursor position.
        """

    @abstractmethod
    def update_cursor(self):
        """Move the visible cursor to the model's cursor position."""

    @abstractmethod
    def show_mode(self, mode: Mode):
        """Reflect the input mode in the cursor shape."""


class TextModel:
    """Line buffer plus a (column, row) cursor.

    Every operation leaves the view consistent with the model: cursor
    moves update the visible cursor, content changes trigger a full
    render.
    """
    lines: list[str]
    cursor_position: CursorPosition
    mode: Mode
    view: TextView

    def __init__(self, view: TextView, lines: Optional[Iterable[str]] = None):
        self.view = view
        self.view._model = self
        self.lines = self._normalize(lines)
        self.cursor_position = CursorPosition()
        self.mode = Mode.NORMAL

    @staticmethod
    def _normalize(lines: Optional[Iterable[str]]) -> list[str]:
        # The buffer never holds embedded line breaks and never goes empty
        result: list[str] = []
        for line in lines or []:
            result.extend(line.split(EditorConstants.LINE_BREAK))
        return result or [""]

    def initialize(self, content: Optional[Iterable[str]] = None):
        """Seed the buffer, paint the viewport and home the cursor."""
        if content is not None:
            self.lines = self._normalize(content)
        self.view.render()
        self.set_position(0, 0)

    def line_count(self) -> int:
        return len(self.lines)

    def current_line(self) -> str:
        return self.lines[self.cursor_position.row]

    def _last_column(self, row: int) -> int:
        # "Stay on last character" policy: an empty line only has column 0
        return max(len(self.lines[row]) - 1, 0)

    def _clamp_column(self):
        last = self._last_column(self.cursor_position.row)
        if self.cursor_position.column > last:
            self.cursor_position.column = last

    # --- Navigation ---

    def move_up(self, amount: int = 1):
        amount = max(amount, 0)
        self.cursor_position.row = max(self.cursor_position.row - amount, 0)
        self._clamp_column()
        self.view.update_cursor()

    def move_down(self, amount: int = 1):
        amount = max(amount, 0)
        last_row = self.line_count() - 1
        self.cursor_position.row = min(self.cursor_position.row + amount, last_row)
        self._clamp_column()
        self.view.update_cursor()

    def move_left(self, amount: int = 1):
        amount = max(amount, 0)
        self.cursor_position.column = max(self.cursor_position.column - amount, 0)
        self.view.update_cursor()

    def move_right(self, amount: int = 1):
        amount = max(amount, 0)
        last = self._last_column(self.cursor_position.row)
        self.cursor_position.column = min(self.cursor_position.column + amount, last)
        self.view.update_cursor()

    def set_position(self, x: int, y: int):
        """Jump to an absolute position. The caller guarantees it is valid."""
        self.cursor_position = CursorPosition(x, y)
        self.view.update_cursor()

    # --- Editing ---

    def write_char(self, letter: str):
        """Insert a character at the cursor; a line break splits the line."""
        row = self.cursor_position.row
        column = self.cursor_position.column
        line = self.lines[row]
        if letter == EditorConstants.LINE_BREAK:
            self.lines[row] = line[:column]
            self.lines.insert(row + 1, line[column:])
            self.cursor_position = CursorPosition(0, row + 1)
        else:
            self.lines[row] = line[:column] + letter + line[column:]
            self.cursor_position.column = column + 1
        self.view.render()

    def delete_char(self):
        """Remove the character before the cursor, joining lines at column 0."""
        row = self.cursor_position.row
        column = self.cursor_position.column
        if column == 0:
            if row == 0:
                return
            current = self.lines.pop(row)
            previous_length = len(self.lines[row - 1])
            self.lines[row - 1] += current
            self.cursor_position = CursorPosition(previous_length, row - 1)
        else:
            line = self.lines[row]
            self.lines[row] = line[:column - 1] + line[column:]
            self.cursor_position.column = column - 1
        self.view.render()

    # --- Mode ---

    def set_editing(self, editing: bool):
        self.mode = Mode.EDITING if editing else Mode.NORMAL
        self.view.show_mode(self.mode)

    def is_editing(self) -> bool:
        return self.mode == Mode.EDITING
