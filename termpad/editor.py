"""Main editor controller: owns the engine and runs the input loop."""

import logging
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConfig
from .debounce import Debouncer
from .keyboard import KeyboardHandler, KeyEvent
from .model import TextModel
from .terminal import TerminalInterface
from .view import TerminalView

logger = logging.getLogger(__name__)


class Editor:
    """Modal editor application controller."""

    def __init__(self, config: Optional[EditorConfig] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.config = config or EditorConfig()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = TerminalView(self.terminal)
        self.model = TextModel(self.view, lines=self.config.content)
        self.command_registry = CommandRegistry()
        self.debouncer = Debouncer(self.config.debounce_interval)
        self.running = False

    def run(self):
        """Run the main editor loop until quit.

        Raises:
            TerminalSetupError: if the terminal cannot be prepared. Nothing
                has been drawn in that case.
        """
        self.terminal.setup()
        logger.info(f"Session started with {self.model.line_count()} lines")
        try:
            self.model.initialize()
            self.model.set_editing(False)
            self.running = True
            while self.running:
                self.step()
        except KeyboardInterrupt:
            # Ctrl-C quits like 'q'
            self.running = False
        finally:
            self.terminal.cleanup()
            logger.info("Session ended")

    def step(self):
        """One loop iteration: wait briefly for input, dispatch at most one event."""
        if not self.keyboard.poll(self.config.poll_timeout):
            return
        key_event = self.keyboard.read_key_event()
        if key_event is None:
            return
        if not self.debouncer.should_call():
            logger.debug(f"Dropped {key_event.raw!r} (debounced)")
            return
        self._handle_key_event(key_event)

    def _handle_key_event(self, key_event: KeyEvent) -> bool:
        """Route an accepted key event through the current mode's command table.

        Returns:
            True if the buffer was modified
        """
        return self.command_registry.execute(self, key_event)
