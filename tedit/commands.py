"""Command pattern implementation for key handling in the text buffer."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional

from .keyboard import KeyEvent, KeyType
from .model import EditStatus, TextBuffer, TextPos


class EditorCommand(ABC):
    """Base class for buffer commands."""

    @abstractmethod
    def execute(self, buffer: TextBuffer, key_event: KeyEvent, tab_size: int) -> None:
        """Apply the command to ``buffer``."""
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, buffer: TextBuffer, key_event: KeyEvent, tab_size: int) -> None:
        self._move(buffer)

    @abstractmethod
    def _move(self, buffer: TextBuffer):
        pass


class EditCommand(EditorCommand):
    """Base class for editing commands.

    ``_edit`` returns True when the buffer content changed.
    """

    def execute(self, buffer: TextBuffer, key_event: KeyEvent, tab_size: int) -> None:
        if self._edit(buffer, key_event, tab_size):
            buffer.edit_status = EditStatus.EDITED

    @abstractmethod
    def _edit(self, buffer: TextBuffer, key_event: KeyEvent, tab_size: int) -> bool:
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, buffer):
        loc = buffer.location
        if loc.col > 0:
            prev_bound, _ = buffer.current_line.neighbor_boundaries(loc.col)
            loc.col = prev_bound
            buffer.cursor_location.col -= 1
        elif loc.row > 0:
            line = buffer.lines[loc.row - 1]
            buffer.location = TextPos(loc.row - 1, len(line))
            buffer.cursor_location = TextPos(loc.row - 1, line.char_len)


class RightCharCommand(MovementCommand):
    def _move(self, buffer):
        loc = buffer.location
        if loc.col < len(buffer.current_line):
            _, next_bound = buffer.current_line.neighbor_boundaries(loc.col)
            loc.col = next_bound
            buffer.cursor_location.col += 1
        elif loc.row < buffer.last_row:
            buffer.location = TextPos(loc.row + 1, 0)
            buffer.cursor_location = TextPos(loc.row + 1, 0)


class UpLineCommand(MovementCommand):
    def _move(self, buffer):
        if buffer.location.row > 0:
            buffer.move_to_row(buffer.location.row - 1)


class DownLineCommand(MovementCommand):
    def _move(self, buffer):
        if buffer.location.row < buffer.last_row:
            buffer.move_to_row(buffer.location.row + 1)


class PageUpCommand(MovementCommand):
    def _move(self, buffer):
        buffer.move_to_row(buffer.location.row - buffer.size.row)


class PageDownCommand(MovementCommand):
    def _move(self, buffer):
        buffer.move_to_row(buffer.location.row + buffer.size.row)


class BeginningOfLineCommand(MovementCommand):
    def _move(self, buffer):
        buffer.location.col = 0
        buffer.cursor_location.col = 0


class EndOfLineCommand(MovementCommand):
    def _move(self, buffer):
        buffer.location.col = len(buffer.current_line)
        buffer.cursor_location.col = buffer.current_line.char_len


class BackspaceCommand(EditCommand):
    def _edit(self, buffer, key_event, tab_size):
        row, col = buffer.location.row, buffer.location.col
        if col == 0 and row > 0:
            # Merge current line into the previous one
            prev = buffer.lines[row - 1]
            new_pos = TextPos(row - 1, len(prev))
            buffer.cursor_location = TextPos(row - 1, prev.char_len)
            prev.push_str(buffer.lines[row].text)
            del buffer.lines[row]
            buffer.location = new_pos
            return True
        if col > 0:
            prev_bound, _ = buffer.current_line.neighbor_boundaries(col)
            buffer.current_line.remove(prev_bound)
            buffer.location.col = prev_bound
            buffer.cursor_location.col -= 1
            return True
        return False


class DeleteCharCommand(EditCommand):
    def _edit(self, buffer, key_event, tab_size):
        row, col = buffer.location.row, buffer.location.col
        line = buffer.current_line
        if col == len(line):
            if row < buffer.last_row:
                line.push_str(buffer.lines[row + 1].text)
                del buffer.lines[row + 1]
                return True
            return False
        line.remove(col)
        return True


class InsertNewlineCommand(EditCommand):
    def _edit(self, buffer, key_event, tab_size):
        row = buffer.location.row
        rest = buffer.current_line.split_at(buffer.location.col)
        buffer.lines.insert(row + 1, rest)
        buffer.location = TextPos(row + 1, 0)
        buffer.cursor_location = TextPos(row + 1, 0)
        return True


class TabCommand(EditCommand):
    def _edit(self, buffer, key_event, tab_size):
        buffer.current_line.insert_str(buffer.location.col, " " * tab_size)
        buffer.location.col += tab_size
        buffer.cursor_location.col += tab_size
        return True


class BackTabCommand(EditCommand):
    def _edit(self, buffer, key_event, tab_size):
        removed = buffer.current_line.back_tab(tab_size)
        buffer.location.col = max(0, buffer.location.col - removed)
        buffer.cursor_location.col = max(0, buffer.cursor_location.col - removed)
        return removed > 0


class InsertTextCommand(EditCommand):
    def _edit(self, buffer, key_event, tab_size):
        changed = False
        for char in key_event.value:
            # Filter out control characters
            if ord(char) < 32 or ord(char) == 127:
                continue
            buffer.current_line.insert(buffer.location.col, char)
            buffer.location.col += len(char.encode("utf-8"))
            buffer.cursor_location.col += 1
            changed = True
        return changed


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())
        self.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
        self.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'tab'), TabCommand())
        self.register((KeyType.SPECIAL, 'back_tab'), BackTabCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, buffer: TextBuffer, key_event: KeyEvent, tab_size: int) -> None:
        """Apply ``key_event`` to ``buffer`` and scroll the viewport after it."""
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None and key_event.key_type == KeyType.REGULAR:
            command = self._insert_text
        if command is not None:
            command.execute(buffer, key_event, tab_size)
        buffer.scroll()
