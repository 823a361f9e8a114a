"""Terminal interface using Blessed for display and Curtsies for input."""

import os
import select
import signal
import sys
import termios
from collections import deque
from typing import Optional

import blessed
from curtsies import Input
from curtsies.events import PasteEvent

from .constants import EditorConstants
from .keyboard import InputEvent, KeyboardHandler, ResizeEvent


class TerminalInterface:
    """Handles terminal I/O using Blessed and Curtsies.

    Output is queued by the drawing methods and written in one go by
    :meth:`flush`. Input is read with :meth:`read_next_event`, which blocks
    until a key arrives, the terminal is resized, or :meth:`wake` is called.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.keyboard = KeyboardHandler()
        self.is_fullscreen = False
        self._input: Optional[Input] = None
        self._old_settings = None
        self._original_winch_handler = None
        self._pending: deque = deque()
        self._out: list[str] = []
        # Self-pipe used to wake the input thread on resize or shutdown
        self._pipe_r, self._pipe_w = os.pipe()

    def setup(self) -> None:
        """Enter fullscreen and raw input mode.

        Must run on the main thread, which owns signal handling.
        """
        print(self.term.enter_fullscreen, end='', flush=True)
        self.is_fullscreen = True
        self._input = Input(keynames='curtsies', sigint_event=False)
        self._input.__enter__()
        try:
            self._old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(self._old_settings)
            # Deliver Ctrl-S/Ctrl-Q instead of using them for flow control
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            # Deliver Ctrl-C/Ctrl-Z/Ctrl-V as keys too
            new_settings[3] &= ~(termios.ISIG | termios.IEXTEN)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        except termios.error as e:
            raise OSError(f"could not enable raw mode: {e}") from e
        self._original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

    def cleanup(self) -> None:
        """Leave raw mode and fullscreen, restoring the terminal."""
        error = None
        if self._original_winch_handler is not None:
            signal.signal(signal.SIGWINCH, self._original_winch_handler)
            self._original_winch_handler = None
        if self._old_settings is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, self._old_settings)
            except termios.error as e:
                error = OSError(f"could not restore terminal mode: {e}")
            self._old_settings = None
        try:
            if self._input is not None:
                try:
                    self._input.__exit__(None, None, None)
                finally:
                    self._input = None
        finally:
            if self.is_fullscreen:
                print(self.term.clear + self.term.normal_cursor + self.term.exit_fullscreen,
                      end='', flush=True)
                self.is_fullscreen = False
        if error is not None:
            raise error

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def wake(self) -> None:
        """Interrupt a blocked :meth:`read_next_event`, which returns None."""
        os.write(self._pipe_w, EditorConstants.WAKE_PIPE_MARKER)

    def read_next_event(self) -> Optional[InputEvent]:
        """Block until the next key or resize event."""
        while True:
            if self._pending:
                key = self.keyboard.parse_key(self._pending.popleft())
                if key is not None:
                    return key
                continue
            event = self._input.send(0)
            if event is not None:
                if isinstance(event, PasteEvent):
                    # Pasted text is replayed as ordinary keystrokes
                    self._pending.extend(event.events)
                    continue
                key = self.keyboard.parse_key(event)
                if key is not None:
                    return key
                continue
            ready, _, _ = select.select([sys.stdin, self._pipe_r], [], [])
            if self._pipe_r in ready:
                data = os.read(self._pipe_r, 1024)
                if EditorConstants.WAKE_PIPE_MARKER in data:
                    return None
                if EditorConstants.RESIZE_PIPE_MARKER in data:
                    rows, cols = self.query_size()
                    return ResizeEvent(rows, cols)

    def query_size(self) -> tuple[int, int]:
        """Terminal size as (rows, cols)."""
        rows, cols = self.term.height, self.term.width
        if not rows or not cols:
            raise OSError("could not determine terminal size")
        return rows, cols

    def clear(self) -> None:
        """Clear the entire screen."""
        self._out.append(self.term.home + self.term.clear)

    def clear_line(self) -> None:
        self._out.append(self.term.clear_eol)

    def move_cursor(self, col: int, row: int) -> None:
        self._out.append(self.term.move_xy(col, row))

    def hide_cursor(self) -> None:
        self._out.append(self.term.hide_cursor)

    def show_cursor(self) -> None:
        self._out.append(self.term.normal_cursor)

    def write(self, text: str) -> None:
        self._out.append(text)

    def write_status(self, text: str) -> None:
        """Write text in the status bar style."""
        self._out.append(self.term.bold_white_on_bright_black(text))

    def flush(self) -> None:
        """Send queued output to the terminal."""
        data = ''.join(self._out)
        self._out.clear()
        sys.stdout.write(data)
        sys.stdout.flush()
