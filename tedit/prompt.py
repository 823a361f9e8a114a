"""Single-line prompt shown in the message bar (save path, search phrase)."""

from enum import Enum

from .constants import EditorConstants
from .keyboard import KeyEvent, KeyType
from .line import Line


class PromptKind(Enum):
    SAVE_PATH = "save_path"
    SEARCH = "search"


class PromptStatus(Enum):
    PENDING = "pending"
    CANCELLED = "cancelled"
    ACCEPTED = "accepted"


class Prompt:
    """Modal text entry layered over the buffer.

    ``location`` is a byte offset into ``input`` and ``cursor`` is the
    matching character offset, the same split the buffer cursor uses.
    """

    def __init__(self, label: str, kind: PromptKind):
        self.label = Line(label)
        self.input = Line()
        self.kind = kind
        self.location = 0
        self.cursor = 0
        self.left_visible = 0
        self.status = PromptStatus.PENDING

    @classmethod
    def save_path(cls) -> "Prompt":
        return cls(EditorConstants.SAVE_PROMPT_LABEL, PromptKind.SAVE_PATH)

    @classmethod
    def search(cls) -> "Prompt":
        return cls(EditorConstants.SEARCH_PROMPT_LABEL, PromptKind.SEARCH)

    @property
    def text(self) -> str:
        return self.input.text

    @property
    def offset(self) -> int:
        """Columns taken by the label and the separating space."""
        return self.label.char_len + 1

    def handle_key(self, key_event: KeyEvent, width: int) -> PromptStatus:
        """Apply one key to the prompt and return the resulting status."""
        if self.status != PromptStatus.PENDING:
            return self.status
        prev_bound, next_bound = self.input.neighbor_boundaries(self.location)
        pos = self.location
        value = key_event.value

        if key_event.key_type == KeyType.SPECIAL:
            if value == 'enter':
                self.status = PromptStatus.ACCEPTED
            elif value == 'escape':
                self.status = PromptStatus.CANCELLED
            elif value == 'backspace':
                if pos > 0:
                    self.input.remove(prev_bound)
                    self.location = prev_bound
                    self.cursor -= 1
            elif value == 'delete':
                if pos < len(self.input):
                    self.input.remove(pos)
            elif value == 'left':
                if pos > 0:
                    self.location = prev_bound
                    self.cursor -= 1
            elif value == 'right':
                if pos < len(self.input):
                    self.location = next_bound
                    self.cursor += 1
            elif value == 'home':
                self.location = 0
                self.cursor = 0
            elif value == 'end':
                self.location = len(self.input)
                self.cursor = self.input.char_len
        elif key_event.key_type == KeyType.REGULAR:
            for char in value:
                if ord(char) < 32:
                    continue
                self.input.insert(self.location, char)
                self.location += len(char.encode("utf-8"))
                self.cursor += 1

        self.scroll(width)
        return self.status

    def scroll(self, width: int) -> None:
        """Keep the prompt cursor inside the visible part of the input."""
        visible = max(1, width - self.offset)
        if self.cursor < self.left_visible:
            self.left_visible = self.cursor
        elif self.cursor >= self.left_visible + visible:
            self.left_visible = self.cursor + 1 - visible

    def visible_input(self, width: int) -> str:
        return self.input.slice_chars(self.left_visible, max(0, width - self.offset))
