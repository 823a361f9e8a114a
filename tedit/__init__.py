"""tedit - A small terminal text editor."""

from .line import Line
from .model import TextBuffer, TextPos, EditStatus, Message
from .prompt import Prompt, PromptKind, PromptStatus

__version__ = "0.1.0"

__all__ = [
    'Line',
    'TextBuffer',
    'TextPos',
    'EditStatus',
    'Message',
    'Prompt',
    'PromptKind',
    'PromptStatus',
]
