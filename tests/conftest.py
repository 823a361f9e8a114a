"""Shared fixtures: a scripted terminal that needs no TTY."""

import threading
from collections import deque
from types import SimpleNamespace

import pytest

from tedit.keyboard import KeyEvent, KeyType, ResizeEvent


class FakeTerminal:
    """Stands in for TerminalInterface.

    ``read_next_event`` pops scripted events. Once the script runs out it
    blocks until ``wake`` is called and then returns None, like the real
    terminal does on shutdown.
    """

    def __init__(self, events=(), rows=24, cols=80):
        self.events = deque(events)
        self.rows = rows
        self.cols = cols
        self.output = []
        self.flushed = []
        self.setup_called = False
        self.cleanup_called = False
        self._woken = threading.Event()

    def setup(self):
        self.setup_called = True

    def cleanup(self):
        self.cleanup_called = True

    def wake(self):
        self._woken.set()

    def read_next_event(self):
        if self.events:
            event = self.events.popleft()
            if isinstance(event, BaseException):
                raise event
            return event
        self._woken.wait(timeout=5)
        return None

    def query_size(self):
        return self.rows, self.cols

    def clear(self):
        self.output.append(("clear",))

    def clear_line(self):
        self.output.append(("clear_line",))

    def move_cursor(self, col, row):
        self.output.append(("move", col, row))

    def hide_cursor(self):
        self.output.append(("hide",))

    def show_cursor(self):
        self.output.append(("show",))

    def write(self, text):
        self.output.append(("write", text))

    def write_status(self, text):
        self.output.append(("status", text))

    def flush(self):
        self.flushed.append(list(self.output))
        self.output.clear()

    def written_text(self):
        return [item[1] for frame in self.flushed for item in frame
                if item[0] in ("write", "status")]


def key(value):
    """KeyEvent for a named special key or a printable character."""
    if len(value) == 1:
        return KeyEvent(key_type=KeyType.REGULAR, value=value, raw=value)
    return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=f"<{value.upper()}>", is_sequence=True)


def ctrl(letter):
    return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=f"<Ctrl-{letter}>", is_ctrl=True)


def resize(rows, cols):
    return ResizeEvent(rows, cols)


@pytest.fixture
def fake_terminal():
    return FakeTerminal()


@pytest.fixture
def keys():
    """Key event constructors: ``keys.key('left')``, ``keys.ctrl('q')``."""
    return SimpleNamespace(key=key, ctrl=ctrl, resize=resize)
