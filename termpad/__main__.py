"""termpad CLI entry point.

Allows running via `python -m termpad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import platformdirs

from .constants import EditorConfig, EditorConstants
from .editor import Editor
from .terminal import TerminalSetupError
from .version import get_version_string

logger = logging.getLogger(__name__)


class UsageError(Exception):
    """Bad command-line arguments."""


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def default_log_file() -> str:
    return os.path.join(platformdirs.user_log_dir(EditorConstants.APP_NAME),
                        EditorConstants.LOG_FILE_NAME)


def configure_logging(log_file: Optional[str]) -> None:
    """Send log records to a file; the screen belongs to the editor."""
    path = log_file or default_log_file()
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = logging.FileHandler(path, encoding='utf-8')
    except OSError as e:
        # Python's last-resort handler still reports warnings and errors
        print(f"termpad: cannot open log file {path}: {e}", file=sys.stderr)
        return
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if os.environ.get("TERMPAD_DEBUG") else logging.INFO)


def parse_args(args: list[str]) -> tuple[EditorConfig, set[str]]:
    """Very small arg parsing: returns the session config and the bare flags seen."""
    config = EditorConfig()
    flags: set[str] = set()
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--version", "-V"):
            flags.add("version")
        elif arg in ("--keytest", "--keyboard-test"):
            flags.add("keytest")
        elif arg in ("--debounce-ms", "--log-file"):
            if i + 1 >= len(args):
                raise UsageError(f"{arg} needs a value")
            value = args[i + 1]
            if arg == "--debounce-ms":
                if not value.isdecimal():
                    raise UsageError(f"--debounce-ms expects a non-negative integer, got {value!r}")
                config.debounce_interval = int(value) / 1000
            else:
                config.log_file = value
            i += 1
        else:
            raise UsageError(f"unrecognized argument {arg!r}")
        i += 1
    return config, flags


def run_keyboard_test() -> None:
    """Run an interactive keyboard test using the editor's input stack.

    Prints every parsed event. Quit with ESC.
    """
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    term.write("Keyboard test mode - press keys to see parsed events.\r\nQuit with ESC.\r\n")
    try:
        while True:
            if not kb.poll(EditorConstants.POLL_TIMEOUT):
                continue
            ev = kb.read_key_event()
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            raw = _escape_bytes(ev.raw)
            term.write(f"type={ev.key_type.value} value={ev.value!r} raw='{raw}'\r\n")
    except KeyboardInterrupt:
        pass
    finally:
        term.cleanup()


def main(argv: Optional[list[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    try:
        config, flags = parse_args(args)
    except UsageError as e:
        print(f"termpad: {e}", file=sys.stderr)
        print(EditorConstants.USAGE, file=sys.stderr)
        sys.exit(2)

    if "version" in flags:
        print(get_version_string())
        return

    configure_logging(config.log_file)

    try:
        if "keytest" in flags:
            run_keyboard_test()
        else:
            Editor(config).run()
    except TerminalSetupError as e:
        logger.error(f"Terminal setup failed: {e}")
        print(EditorConstants.SETUP_FAILED_MESSAGE.format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
