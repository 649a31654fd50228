"""Constants and configuration for the termpad editor."""

from dataclasses import dataclass, field
from typing import Optional


class EditorConstants:
    """Central configuration constants for the editor."""

    APP_NAME = "termpad"
    LOG_FILE_NAME = "termpad.log"

    # Input timing
    DEBOUNCE_INTERVAL = 0.02  # Minimum gap between accepted key events (seconds)
    POLL_TIMEOUT = 0.02  # Bounded wait for input on each loop iteration (seconds)

    # Buffer shown when the editor starts
    DEFAULT_CONTENT = (
        "Hello, world!",
        "This is a termpad buffer!",
        "Third line of text!",
        "Fourth line of text!",
        "Fifth line of text!",
        "Sixth line of text!",
    )

    LINE_BREAK = "\n"

    # Status messages
    SETUP_FAILED_MESSAGE = "termpad: could not initialize terminal: {}"
    USAGE = "usage: termpad [--version] [--keytest] [--debounce-ms N] [--log-file PATH]"


@dataclass
class EditorConfig:
    """Effective settings for one editor session."""
    debounce_interval: float = EditorConstants.DEBOUNCE_INTERVAL
    poll_timeout: float = EditorConstants.POLL_TIMEOUT
    content: list[str] = field(default_factory=lambda: list(EditorConstants.DEFAULT_CONTENT))
    log_file: Optional[str] = None
