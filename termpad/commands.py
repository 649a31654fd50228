"""Command pattern implementation for editor actions."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .constants import EditorConstants
from .keyboard import KeyType
from .model import Mode

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the buffer
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the buffer."""
        self._move(editor)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""
        pass


class UpCommand(MovementCommand):
    def _move(self, editor):
        editor.model.move_up(1)


class DownCommand(MovementCommand):
    def _move(self, editor):
        editor.model.move_down(1)


class LeftCommand(MovementCommand):
    def _move(self, editor):
        editor.model.move_left(1)


class RightCommand(MovementCommand):
    def _move(self, editor):
        editor.model.move_right(1)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._edit(editor, key_event)
        return True

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class InsertCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.write_char(key_event.value)


class NewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.write_char(EditorConstants.LINE_BREAK)


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.delete_char()


class EnterEditingCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.model.set_editing(True)
        return False


class ExitEditingCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.model.set_editing(False)
        return False


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.running = False
        return False


class CommandRegistry:
    """Per-mode key tables.

    Normal mode only reaches navigation, mode switching and quit; buffer
    mutations are only reachable from the editing table.
    """

    def __init__(self):
        self._commands: Dict[Mode, Dict[Tuple[KeyType, str], EditorCommand]] = {
            Mode.NORMAL: {},
            Mode.EDITING: {},
        }
        self._register_default_commands()

    def _register_default_commands(self):
        # Normal mode: vi-style navigation
        for key, command in (
            ('k', UpCommand()),
            ('j', DownCommand()),
            ('h', LeftCommand()),
            ('l', RightCommand()),
        ):
            self.register(Mode.NORMAL, (KeyType.REGULAR, key), command)
        # Arrow keys behave the same
        self.register(Mode.NORMAL, (KeyType.SPECIAL, 'up'), UpCommand())
        self.register(Mode.NORMAL, (KeyType.SPECIAL, 'down'), DownCommand())
        self.register(Mode.NORMAL, (KeyType.SPECIAL, 'left'), LeftCommand())
        self.register(Mode.NORMAL, (KeyType.SPECIAL, 'right'), RightCommand())
        self.register(Mode.NORMAL, (KeyType.REGULAR, 'i'), EnterEditingCommand())
        self.register(Mode.NORMAL, (KeyType.REGULAR, 'q'), QuitCommand())

        # Editing mode
        self.register(Mode.EDITING, (KeyType.SPECIAL, 'escape'), ExitEditingCommand())
        self.register(Mode.EDITING, (KeyType.SPECIAL, 'enter'), NewlineCommand())
        self.register(Mode.EDITING, (KeyType.SPECIAL, 'backspace'), BackspaceCommand())

    def register(self, mode: Mode, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination in a mode."""
        self._commands[mode][key] = command

    def get_command(self, mode: Mode, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination in a mode."""
        return self._commands[mode].get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event in the editor's current mode.

        Returns:
            True if the buffer was modified
        """
        mode = Mode.EDITING if editor.model.is_editing() else Mode.NORMAL
        command = self.get_command(mode, key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Text input while editing
        if mode == Mode.EDITING and key_event.is_printable:
            return InsertCharCommand().execute(editor, key_event)

        logger.debug(f"Ignoring {key_event.raw!r} in {mode.value} mode")
        return False
