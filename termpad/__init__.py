"""termpad - A minimal modal terminal text editor."""

from .model import TextModel, TextView, CursorPosition, Mode
from .view import TerminalView
from .editor import Editor

__all__ = [
    'TextModel',
    'TextView',
    'CursorPosition',
    'Mode',
    'TerminalView',
    'Editor',
]
