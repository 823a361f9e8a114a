"""Translate curtsies key names into editor key events."""

from typing import Optional, Union
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Decides which handler a key goes to."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """One key press after parsing."""
    key_type: KeyType
    value: str  # Typed text, or a key name like 'page_down'
    raw: str  # The raw token from curtsies
    is_ctrl: bool = False
    is_sequence: bool = False

    def is_ctrl_key(self, letter: str) -> bool:
        return self.key_type == KeyType.CTRL and self.value == letter


@dataclass
class ResizeEvent:
    """The terminal was resized to ``rows`` x ``cols``."""
    rows: int
    cols: int


InputEvent = Union[KeyEvent, ResizeEvent]


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert', 'tab', 'back_tab',
}


class KeyboardHandler:
    """Maps curtsies key names to KeyEvent objects."""

    def parse_key(self, key) -> Optional[KeyEvent]:
        """Parse a curtsies key token into a KeyEvent.

        Returns None for tokens that carry no key (an empty string).
        """
        key_str = str(key)
        if not key_str:
            return None

        # Curtsies-style key names like '<LEFT>', '<Ctrl-q>', '<Shift-TAB>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1]
            lower = name.lower().replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            mods = set(parts[:-1])
            base = parts[-1]
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'
            elif base in ('del',):
                base = 'delete'

            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab' and 'shift' in mods:
                return KeyEvent(key_type=KeyType.SPECIAL, value='back_tab', raw=key_str, is_sequence=True)
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are what the terminal sends for Enter
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
                if base == 'i':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='tab', raw=key_str, is_sequence=True)
                if base == 'h':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str, is_sequence=True)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if base in ('esc', 'escape') and not mods:
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
            if base in SPECIAL_KEYS:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
            # Unknown token (function keys, modified arrows, ...)
            return KeyEvent(key_type=KeyType.SPECIAL, value=lower, raw=key_str, is_sequence=True)

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (10, 13):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if o == 9:
                return KeyEvent(key_type=KeyType.SPECIAL, value='tab', raw=key_str)
            if o in (8, 127):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if o == 27:
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(key_type=KeyType.CTRL, value=chr(ord('a') + o - 1), raw=key_str, is_ctrl=True)
            if o < 32:
                return KeyEvent(key_type=KeyType.SPECIAL, value=f'ctrl_{o}', raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
