"""Paints a TextBuffer onto the terminal."""

import time
from typing import Optional

from .config import Config
from .constants import EditorConstants
from .model import EditStatus, TextBuffer
from .prompt import Prompt


def status_text(buffer: TextBuffer, config: Config, now: Optional[float] = None) -> str:
    """Status bar contents, padded or cut to the terminal width."""
    width = buffer.size.col
    if config.file is not None:
        marker = "*" if buffer.edit_status == EditStatus.EDITED else " "
        f_name = f"file: {config.file}{marker}"
    else:
        f_name = EditorConstants.NO_FILE_STATUS
    clock = "time: " + time.strftime("%H:%M:%S", time.localtime(now))
    if len(f_name) + len(clock) < width:
        return f_name + " " * (width - len(f_name) - len(clock)) + clock
    return f_name[:width]


def text_rows(buffer: TextBuffer) -> list[str]:
    """The visible lines with their row-number gutter, '~' past the end."""
    width = buffer.visible_cols
    digits = buffer.gutter_digits
    rows = []
    for idx in range(buffer.top_visible, buffer.top_visible + buffer.visible_rows):
        if idx < len(buffer.lines):
            visible = buffer.lines[idx].slice_chars(buffer.left_visible, width)
            rows.append(f"{idx:0>{digits}}| {visible}")
        else:
            rows.append("~")
    return rows


def cursor_position(buffer: TextBuffer) -> tuple[int, int]:
    """Screen (col, row) of the text cursor."""
    return (
        buffer.cursor_location.col + buffer.prefix_size - buffer.left_visible,
        buffer.location.row - buffer.top_visible + EditorConstants.STATUS_SIZE,
    )


class TerminalView:
    """Draws either the whole editor screen or just the active prompt."""

    def __init__(self, terminal):
        self.terminal = terminal

    def paint(self, buffer: TextBuffer, config: Config) -> None:
        if buffer.prompt is not None:
            self._paint_prompt(buffer.prompt, buffer.size.row, buffer.size.col)
        else:
            self._paint_normal(buffer, config)
        self.terminal.flush()

    def _paint_normal(self, buffer: TextBuffer, config: Config) -> None:
        term = self.terminal
        term.clear()
        term.hide_cursor()
        term.move_cursor(0, 0)
        term.write_status(status_text(buffer, config))
        for offset, row in enumerate(text_rows(buffer)):
            term.move_cursor(0, offset + EditorConstants.STATUS_SIZE)
            term.write(row)
        message = buffer.message.visible()
        if message:
            term.move_cursor(0, buffer.size.row - 1)
            term.write_status(message[:buffer.size.col])
        term.move_cursor(*cursor_position(buffer))
        term.show_cursor()

    def _paint_prompt(self, prompt: Prompt, rows: int, cols: int) -> None:
        term = self.terminal
        term.hide_cursor()
        term.move_cursor(0, rows - 1)
        term.clear_line()
        term.write(f"{prompt.label.text} {prompt.visible_input(cols)}")
        term.move_cursor(prompt.offset + prompt.cursor - prompt.left_visible, rows - 1)
        term.show_cursor()
