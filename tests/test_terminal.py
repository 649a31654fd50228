"""Test the blessed/curtsies terminal wrapper."""

import io
import os
import termios
import unittest
from unittest.mock import MagicMock, patch

from curtsies.events import PasteEvent

from termpad.terminal import TerminalInterface, TerminalSetupError, CursorShape


def make_term():
    term = MagicMock()
    term.is_a_tty = True
    term.enter_fullscreen = "<enter>"
    term.exit_fullscreen = "<exit>"
    term.normal_cursor = "<normal>"
    term.home = "<home>"
    term.clear = "<clear>"
    term.move.side_effect = lambda y, x: f"<move {y},{x}>"
    return term


class TestTerminalInterface(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.term = make_term()
        self.terminal = TerminalInterface(self.term, stream=self.stream)

    def test_move_cursor_to_uses_x_then_y(self):
        self.terminal.move_cursor_to(3, 7)
        self.term.move.assert_called_once_with(7, 3)
        self.assertEqual(self.stream.getvalue(), "<move 7,3>")

    def test_clear_and_write(self):
        self.terminal.clear_screen()
        self.terminal.write("hello")
        self.assertEqual(self.stream.getvalue(), "<home><clear>hello")

    def test_cursor_styles(self):
        self.terminal.set_cursor_style(CursorShape.STEADY_UNDERSCORE)
        self.terminal.set_cursor_style(CursorShape.STEADY_BLOCK)
        self.assertEqual(self.stream.getvalue(), "\x1b[4 q\x1b[2 q")

    @patch('termpad.terminal.Input')
    def test_setup_and_cleanup(self, input_cls):
        self.terminal.setup()
        input_cls.assert_called_once_with(in_stream=self.terminal.in_stream, keynames='curtsies')
        input_cls.return_value.__enter__.assert_called_once()
        self.assertTrue(self.terminal.is_fullscreen)
        self.assertTrue(self.stream.getvalue().startswith("<enter>"))

        self.terminal.cleanup()
        input_cls.return_value.__exit__.assert_called_once_with(None, None, None)
        self.assertFalse(self.terminal.is_fullscreen)
        self.assertTrue(self.stream.getvalue().endswith("\x1b[0 q<normal><exit>"))

    @patch('termpad.terminal.Input')
    def test_raw_mode_failure_raises(self, input_cls):
        input_cls.return_value.__enter__.side_effect = termios.error(25, "Inappropriate ioctl")
        with self.assertRaises(TerminalSetupError):
            self.terminal.setup()
        self.assertFalse(self.terminal.is_fullscreen)
        self.assertEqual(self.stream.getvalue(), "")

    def test_not_a_tty_raises(self):
        self.term.is_a_tty = False
        with self.assertRaises(TerminalSetupError):
            self.terminal.setup()

    @patch('termpad.terminal.Input')
    def test_fullscreen_failure_restores_raw_mode(self, input_cls):
        stream = MagicMock()
        stream.write.side_effect = OSError("broken pipe")
        terminal = TerminalInterface(self.term, stream=stream)
        with self.assertRaises(TerminalSetupError):
            terminal.setup()
        input_cls.return_value.__exit__.assert_called_once_with(None, None, None)
        self.assertFalse(terminal.is_fullscreen)

    @patch('termpad.terminal.Input')
    def test_partial_fullscreen_write_is_undone(self, input_cls):
        stream = FirstWriteFails()
        terminal = TerminalInterface(self.term, stream=stream)
        with self.assertRaises(TerminalSetupError):
            terminal.setup()
        # The alternate screen may be half entered, so it is left explicitly
        self.assertTrue(stream.getvalue().endswith("<exit>"))
        input_cls.return_value.__exit__.assert_called_once_with(None, None, None)

    def test_no_input_before_setup(self):
        self.assertFalse(self.terminal.poll(0))
        self.assertIsNone(self.terminal.read_key())

    @patch('termpad.terminal.Input')
    def test_poll_and_read(self, input_cls):
        input_cls.return_value.send.side_effect = ['<UP>', None]
        self.terminal.setup()
        self.assertTrue(self.terminal.poll(0.02))
        input_cls.return_value.send.assert_called_with(0.02)
        # A second poll does not consume another event
        self.assertTrue(self.terminal.poll(0.02))
        self.assertEqual(self.terminal.read_key(), '<UP>')
        self.assertFalse(self.terminal.poll(0.02))

    @patch('termpad.terminal.Input')
    def test_paste_is_split_into_keys(self, input_cls):
        paste = PasteEvent()
        paste.events = ['h', 'e', '<SPACE>', 'y']
        input_cls.return_value.send.side_effect = [paste, None]
        self.terminal.setup()
        keys = []
        while self.terminal.poll(0):
            keys.append(self.terminal.read_key())
        self.assertEqual(keys, ['h', 'e', '<SPACE>', 'y'])


class FirstWriteFails(io.StringIO):
    """Output stream whose first write fails, as if the tty hiccuped."""

    def __init__(self):
        super().__init__()
        self.failed = False

    def write(self, s):
        if not self.failed:
            self.failed = True
            raise OSError("interrupted")
        return super().write(s)


@unittest.skipUnless(hasattr(os, 'openpty'), "needs a pseudo-terminal")
class TestTerminalInputOnPty(unittest.TestCase):
    """Drive real curtsies input through a pseudo-terminal."""

    def setUp(self):
        self.master, slave = os.openpty()
        self.slave = os.fdopen(slave, 'r')
        self.terminal = TerminalInterface(make_term(), stream=io.StringIO(), in_stream=self.slave)
        self.terminal.setup()

    def tearDown(self):
        self.terminal.cleanup()
        self.slave.close()
        os.close(self.master)

    def read_next(self, timeout=1.0):
        self.assertTrue(self.terminal.poll(timeout))
        return self.terminal.read_key()

    def test_keys_typed_together_are_all_pending(self):
        os.write(self.master, b"ab")
        self.assertEqual(self.read_next(), 'a')
        # The second key came in the same read and must still be visible
        self.assertTrue(self.terminal.poll(0.05))
        self.assertEqual(self.terminal.read_key(), 'b')
        self.assertFalse(self.terminal.poll(0.05))

    def test_later_key_is_not_replaced_by_buffered_one(self):
        os.write(self.master, b"ab")
        self.assertEqual(self.read_next(), 'a')
        self.assertEqual(self.read_next(), 'b')
        os.write(self.master, b"c")
        self.assertEqual(self.read_next(), 'c')

    def test_long_burst_is_not_lost(self):
        os.write(self.master, b"hello world!")
        keys = [self.read_next() for _ in range(12)]
        self.assertEqual(''.join(' ' if k == '<SPACE>' else k for k in keys), "hello world!")
        self.assertFalse(self.terminal.poll(0.05))

if __name__ == '__main__':
    unittest.main()
