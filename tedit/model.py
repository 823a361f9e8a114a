"""Text buffer: lines, dual cursors, viewport and file I/O."""

from __future__ import annotations

import logging
import os
import tempfile
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .constants import EditorConstants
from .line import Line
from .prompt import Prompt

logger = logging.getLogger(__name__)


@dataclass
class TextPos:
    row: int = 0
    col: int = 0


class EditStatus(Enum):
    CLEAN = "clean"
    EDITED = "edited"


@dataclass
class Message:
    """Status bar text that disappears after ``timeout`` seconds."""
    text: str = ""
    created_at: float = field(default_factory=time.monotonic)
    timeout: float = EditorConstants.MESSAGE_TIMEOUT

    def visible(self, now: Optional[float] = None) -> Optional[str]:
        if not self.text:
            return None
        if now is None:
            now = time.monotonic()
        if now - self.created_at < self.timeout:
            return self.text
        return None


def lines_from_text(text: str, tab_size: int) -> list[Line]:
    """Split file content into lines.

    Tabs are expanded to ``tab_size`` spaces. Both LF and CRLF terminate a
    line, and a terminator at the very end does not start a new line, so
    content written by :meth:`TextBuffer.save` loads back unchanged.
    """
    if not text:
        return [Line()]
    pieces = text.replace("\t", " " * tab_size).split("\n")
    if len(pieces) > 1 and pieces[-1] == "":
        pieces.pop()
    return [Line(p[:-1] if p.endswith("\r") else p) for p in pieces]


def write_atomic(path: Union[str, Path], data: bytes) -> None:
    """Replace ``path`` with ``data`` via a temporary file in the same directory.

    Raises OSError if the file cannot be written; the temporary file is
    removed in that case.
    """
    dir_name = os.path.dirname(path) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name,
                                         suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(data)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_filename, path)
    except OSError:
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError:
                pass
        raise
    logger.info("Saved %d bytes to %s", len(data), path)


class TextBuffer:
    """The edited file.

    ``location`` is the byte cursor used to slice ``Line.data``;
    ``cursor_location`` is the character cursor used for painting and
    horizontal scrolling. Their rows always agree.
    """

    def __init__(self, lines: Optional[list[Line]] = None, path: Optional[Union[str, Path]] = None):
        self.lines: list[Line] = lines or [Line()]
        self.path: Optional[Path] = Path(path) if path is not None else None
        self.location = TextPos()
        self.cursor_location = TextPos()
        self.size = TextPos(24, 80)
        self.top_visible = 0
        self.left_visible = 0
        self.message = Message()
        self.edit_status = EditStatus.CLEAN
        self.prompt: Optional[Prompt] = None
        self.redraw = True
        self.terminated = False

    @classmethod
    def load(cls, path: Union[str, Path], tab_size: int = EditorConstants.DEFAULT_TAB_SIZE) -> "TextBuffer":
        """Load ``path``; a missing or unreadable file gives an empty buffer."""
        path = Path(path)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            logger.info("%s does not exist, starting a new file", path)
            return cls(path=path)
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            buffer = cls(path=path)
            buffer.post_message(f"Error: Cannot read {path}")
            return buffer
        lines = lines_from_text(raw.decode("utf-8", errors="replace"), tab_size)
        logger.debug("Loaded %d lines from %s", len(lines), path)
        return cls(lines, path=path)

    def snapshot(self) -> bytes:
        """File content: every line followed by CRLF."""
        terminator = EditorConstants.LINE_TERMINATOR
        return b"".join(bytes(line.data) + terminator for line in self.lines)

    def save(self) -> None:
        """Write :meth:`snapshot` to ``path``. Raises OSError on failure."""
        if self.path is None:
            raise ValueError("buffer has no file path")
        write_atomic(self.path, self.snapshot())

    @property
    def current_line(self) -> Line:
        return self.lines[self.location.row]

    @property
    def last_row(self) -> int:
        return len(self.lines) - 1

    @property
    def visible_rows(self) -> int:
        return max(1, self.size.row - EditorConstants.STATUS_SIZE - EditorConstants.MESSAGE_SIZE)

    @property
    def gutter_digits(self) -> int:
        """Digits in the row-number gutter; grows past 999 rows."""
        return max(EditorConstants.PREFIX_SIZE - 2, len(str(self.last_row)))

    @property
    def prefix_size(self) -> int:
        """Columns taken by the gutter, ``NNN| `` for short files."""
        return self.gutter_digits + 2

    @property
    def visible_cols(self) -> int:
        return max(1, self.size.col - self.prefix_size)

    def post_message(self, text: str) -> None:
        self.message = Message(text)

    def check_cursor(self) -> None:
        assert self.location.row == self.cursor_location.row, \
            "Different height of cursor and string pointer"

    def scroll(self) -> None:
        """Move the viewport so the cursor is visible."""
        row = self.location.row
        if row < self.top_visible:
            self.top_visible = row
        elif row >= self.top_visible + self.visible_rows:
            self.top_visible = row + 1 - self.visible_rows
        col = self.cursor_location.col
        if col < self.left_visible:
            self.left_visible = col
        elif col >= self.left_visible + self.visible_cols:
            self.left_visible = col + 1 - self.visible_cols
        self.check_cursor()

    def resize(self, rows: int, cols: int) -> None:
        self.size = TextPos(rows, cols)
        self.scroll()
        self.redraw = True

    def move_to_row(self, row: int) -> None:
        """Change rows keeping the character column where possible."""
        row = min(max(row, 0), self.last_row)
        line = self.lines[row]
        self.location.row = row
        self.cursor_location.row = row
        self.location.col = line.char_to_byte_offset(self.cursor_location.col)
        self.cursor_location.col = min(self.cursor_location.col, line.char_len)

    def jump_to(self, pos: TextPos) -> None:
        """Place both cursors at a byte position and scroll to it."""
        self.location = TextPos(pos.row, pos.col)
        self.cursor_location = TextPos(pos.row, self.lines[pos.row].byte_to_char_offset(pos.col))
        self.scroll()

    def find(self, phrase: str) -> Optional[TextPos]:
        """Find ``phrase`` starting at the cursor, wrapping to the top.

        Looks at the rest of the current row, then the rows below it, then
        rows 0 through the current row. Returns a byte position.
        """
        row, col = self.location.row, self.location.col
        found = self.lines[row].find(phrase, col)
        if found != -1:
            logger.debug("Found %r in current line at %d, %d", phrase, row, found)
            return TextPos(row, found)
        for idx in range(row + 1, len(self.lines)):
            found = self.lines[idx].find(phrase)
            if found != -1:
                logger.debug("Found %r in next lines at %d, %d", phrase, idx, found)
                return TextPos(idx, found)
        for idx in range(0, row + 1):
            found = self.lines[idx].find(phrase)
            if found != -1:
                logger.debug("Found %r from top at %d, %d", phrase, idx, found)
                return TextPos(idx, found)
        return None

    def search(self, phrase: str) -> bool:
        """Move to the next occurrence of ``phrase`` and report the outcome."""
        pos = self.find(phrase)
        if pos is None:
            logger.debug("Phrase %r not found", phrase)
            self.post_message(EditorConstants.NOT_FOUND_MESSAGE.format(phrase))
            return False
        self.jump_to(pos)
        self.post_message(EditorConstants.FOUND_MESSAGE.format(
            phrase, pos.row, self.cursor_location.col))
        return True
