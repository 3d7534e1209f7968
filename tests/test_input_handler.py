from __future__ import annotations

import curses

import pytest

from termedit.core.keys import Key, KeyEvent, ctrl_letter
from termedit.ui.input_handler import decode_key


@pytest.mark.parametrize("code, expected", [
    (curses.KEY_LEFT, Key.ARROW_LEFT),
    (curses.KEY_DOWN, Key.ARROW_DOWN),
    (curses.KEY_HOME, Key.HOME),
    (curses.KEY_NPAGE, Key.PAGE_DOWN),
    (curses.KEY_DC, Key.DELETE),
    (curses.KEY_BACKSPACE, Key.BACKSPACE),
])
def test_special_keys(code: int, expected: Key) -> None:
    assert decode_key(code) == KeyEvent(expected)


@pytest.mark.parametrize("ch, expected", [
    ("\n", Key.ENTER),
    ("\r", Key.ENTER),
    ("\x1b", Key.ESCAPE),
    ("\x7f", Key.BACKSPACE),
    (127, Key.BACKSPACE),
])
def test_char_keys(ch, expected: Key) -> None:
    assert decode_key(ch) == KeyEvent(expected)


def test_printable_characters() -> None:
    assert decode_key("a") == KeyEvent.printable("a")
    assert decode_key("é") == KeyEvent.printable("é")
    assert decode_key(ord("Z")) == KeyEvent.printable("Z")
    assert decode_key("\t") == KeyEvent.printable("\t")


def test_control_keys() -> None:
    assert decode_key("\x13") == KeyEvent.ctrl("s")
    assert decode_key("\x11") == KeyEvent.ctrl("q")
    assert decode_key("\x1d") == KeyEvent.ctrl("]")
    assert decode_key("\x08").is_backspace


def test_unused_codes() -> None:
    assert decode_key(curses.KEY_F1) is None
    assert decode_key("\x00") is None


def test_ctrl_letter() -> None:
    assert ctrl_letter(1) == "a"
    assert ctrl_letter(26) == "z"
    assert ctrl_letter(29) == "]"
    assert ctrl_letter(0) is None
    assert ctrl_letter(65) is None
