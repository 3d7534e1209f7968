"""
Abstract key events consumed by the editor engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional


class Key(Enum):
    """Kinds of key events."""

    CHAR = "char"
    CTRL = "ctrl"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    DELETE = "delete"
    BACKSPACE = "backspace"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    ENTER = "enter"
    ESCAPE = "escape"


ARROW_KEYS: Final = frozenset({Key.ARROW_LEFT, Key.ARROW_RIGHT, Key.ARROW_UP, Key.ARROW_DOWN})

CTRL_SAVE: Final[str] = "s"
CTRL_OPEN: Final[str] = "o"
CTRL_FIND: Final[str] = "f"
CTRL_QUIT: Final[str] = "q"
CTRL_BRACE_MATCH: Final[str] = "]"
CTRL_PREVIEW: Final[str] = "p"
CTRL_BACKSPACE: Final[str] = "h"


@dataclass(frozen=True)
class KeyEvent:
    """
    One key press.

    ``char`` holds the typed character for CHAR events and the lower-case
    letter (or symbol) for CTRL events.
    """

    key: Key
    char: str = ""

    @classmethod
    def printable(cls, char: str) -> "KeyEvent":
        return cls(Key.CHAR, char)

    @classmethod
    def ctrl(cls, letter: str) -> "KeyEvent":
        return cls(Key.CTRL, letter.lower())

    def is_ctrl(self, letter: str) -> bool:
        return self.key is Key.CTRL and self.char == letter

    @property
    def is_backspace(self) -> bool:
        return self.key is Key.BACKSPACE or self.is_ctrl(CTRL_BACKSPACE)


def ctrl_letter(code: int) -> Optional[str]:
    """Map a control code (1-31) back to the key pressed with Ctrl."""

    if not 0 < code < 32:
        return None

    return chr(code | 0x60) if code <= 26 else chr(code | 0x40)
