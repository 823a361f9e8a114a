"""A single line of text stored as UTF-8 bytes.

Offsets passed to the mutation methods are byte offsets and must fall on a
scalar-value boundary. Passing an offset inside a multi-byte encoding is a
programming error and trips an assertion.
"""

from typing import Optional


def _is_continuation(byte: int) -> bool:
    return (byte & 0xC0) == 0x80


def _encoded_width(lead: int) -> int:
    """Return the UTF-8 sequence length announced by a lead byte."""
    if lead < 0x80:
        return 1
    if lead < 0xE0:
        return 2
    if lead < 0xF0:
        return 3
    return 4


class Line:
    """Byte-backed line with a cached count of Unicode scalar values."""

    __slots__ = ("data", "char_len")

    def __init__(self, text: str = ""):
        self.data = bytearray(text.encode("utf-8"))
        self.char_len = len(text)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Line":
        """Build a line from raw bytes; invalid UTF-8 is replaced."""
        return cls(bytes(data).decode("utf-8", errors="replace"))

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return self.data == other.data

    def __repr__(self):
        return f"Line({self.text!r})"

    def is_boundary(self, offset: int) -> bool:
        """True if ``offset`` sits between two encoded scalar values."""
        if offset == 0 or offset == len(self.data):
            return True
        if offset < 0 or offset > len(self.data):
            return False
        return not _is_continuation(self.data[offset])

    def insert(self, offset: int, char: str) -> None:
        assert len(char) == 1, f"expected a single scalar value, got {char!r}"
        assert self.is_boundary(offset), f"offset {offset} is not a char boundary"
        self.data[offset:offset] = char.encode("utf-8")
        self.char_len += 1

    def remove(self, offset: int) -> str:
        """Remove the scalar value starting at ``offset`` and return it."""
        assert offset < len(self.data) and self.is_boundary(offset), \
            f"offset {offset} is not the start of a character"
        end = offset + _encoded_width(self.data[offset])
        removed = self.data[offset:end].decode("utf-8")
        del self.data[offset:end]
        self.char_len -= 1
        return removed

    def split_at(self, offset: int) -> "Line":
        """Truncate this line at ``offset`` and return the remainder."""
        assert self.is_boundary(offset), f"offset {offset} is not a char boundary"
        rest = Line.from_bytes(self.data[offset:])
        del self.data[offset:]
        self.char_len -= rest.char_len
        return rest

    def push_str(self, text: str) -> None:
        self.data.extend(text.encode("utf-8"))
        self.char_len += len(text)

    def insert_str(self, offset: int, text: str) -> None:
        assert self.is_boundary(offset), f"offset {offset} is not a char boundary"
        self.data[offset:offset] = text.encode("utf-8")
        self.char_len += len(text)

    def back_tab(self, max_chars: int) -> int:
        """Remove up to ``max_chars`` leading spaces; return how many went."""
        removed = 0
        while removed < max_chars and self.data[:1] == b" ":
            del self.data[0]
            removed += 1
        self.char_len -= removed
        return removed

    def char_to_byte_offset(self, char_index: int) -> int:
        """Map a scalar-value index to its byte offset, clamping to the end."""
        if char_index <= 0:
            return 0
        count = 0
        for offset, byte in enumerate(self.data):
            if not _is_continuation(byte):
                if count == char_index:
                    return offset
                count += 1
        return len(self.data)

    def byte_to_char_offset(self, offset: int) -> int:
        """Count the scalar values that start before ``offset``."""
        assert self.is_boundary(offset), f"offset {offset} is not a char boundary"
        return sum(1 for byte in self.data[:offset] if not _is_continuation(byte))

    def neighbor_boundaries(self, offset: int) -> tuple[int, int]:
        """Return the boundaries just before and just after ``offset``.

        Both saturate: at the start of the line the previous boundary is 0,
        at the end the next boundary is the line length.
        """
        size = len(self.data)
        if offset == 0:
            prev = 0
        else:
            prev = offset - 1
            while prev > 0 and _is_continuation(self.data[prev]):
                prev -= 1
        if offset >= size:
            nxt = size
        else:
            nxt = offset + 1
            while nxt < size and _is_continuation(self.data[nxt]):
                nxt += 1
        return prev, nxt

    def find(self, needle: str, start: int = 0) -> int:
        """Byte offset of ``needle`` at or after ``start``, or -1."""
        return self.data.find(needle.encode("utf-8"), start)

    def slice_chars(self, start: int, count: Optional[int] = None) -> str:
        """Return up to ``count`` characters beginning at char index ``start``."""
        begin = self.char_to_byte_offset(start)
        text = self.data[begin:].decode("utf-8")
        return text if count is None else text[:count]
