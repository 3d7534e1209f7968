"""
Input handler module translating curses key codes into editor key events.
"""

import curses
from typing import Dict, Final, Optional, Union

from ..core.keys import Key, KeyEvent, ctrl_letter

ESCAPE_CHAR: Final[str] = "\x1b"
DEL_CHAR: Final[str] = "\x7f"

SPECIAL_KEYS: Final[Dict[int, Key]] = {
    curses.KEY_LEFT: Key.ARROW_LEFT,
    curses.KEY_RIGHT: Key.ARROW_RIGHT,
    curses.KEY_UP: Key.ARROW_UP,
    curses.KEY_DOWN: Key.ARROW_DOWN,
    curses.KEY_HOME: Key.HOME,
    curses.KEY_END: Key.END,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
    curses.KEY_DC: Key.DELETE,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_ENTER: Key.ENTER,
}

CHAR_KEYS: Final[Dict[str, Key]] = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    ESCAPE_CHAR: Key.ESCAPE,
    DEL_CHAR: Key.BACKSPACE,
}


def decode_key(ch: Union[int, str]) -> Optional[KeyEvent]:
    """
    Decode a value returned by ``get_wch`` or ``getch``.

    Args:
        ch: A character string or a curses key code

    Returns:
        The key event, or None for codes the editor does not use
    """

    if isinstance(ch, int):
        if ch in SPECIAL_KEYS:
            return KeyEvent(SPECIAL_KEYS[ch])

        if not 0 <= ch < curses.KEY_MIN:
            return None

        ch = chr(ch)

    if ch in CHAR_KEYS:
        return KeyEvent(CHAR_KEYS[ch])

    if ch == "\t":
        return KeyEvent.printable(ch)

    letter = ctrl_letter(ord(ch))
    if letter is not None:
        return KeyEvent.ctrl(letter)

    if not ch.isprintable():
        return None

    return KeyEvent.printable(ch)


class InputHandler:
    """Reads key events from a curses window."""

    def __init__(self, stdscr: 'curses.window') -> None:
        self.stdscr = stdscr
        self.stdscr.keypad(True)

    def read_key(self) -> Optional[KeyEvent]:
        """Wait for one key; None on timeout or for unused keys."""

        try:
            ch = self.stdscr.get_wch()
        except curses.error:
            return None

        return decode_key(ch)
