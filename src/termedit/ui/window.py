"""
Window module drawing rendered frames with curses.
"""

import curses
from typing import Dict, Final

from ..core.frame import Frame
from ..core.messages import MessageKind
from ..core.spans import Span, Style, text_width

STYLE_COLORS: Final[Dict[Style, int]] = {
    Style.KEYWORD: 1,       # Yellow
    Style.TYPE: 2,          # Cyan
    Style.COMMENT: 3,       # Green
    Style.STRING: 4,        # Yellow
    Style.NUMBER: 5,        # Red
    Style.PREPROCESSOR: 6,  # Magenta
    Style.CONSTANT: 7,      # Red
    Style.CODE: 8,          # Green
    Style.HEADER: 9,        # Blue
    Style.BULLET: 10,       # Cyan
    Style.RULE: 11,         # Default
    Style.MARKER: 12,       # Gray
}

ERROR_COLOR: Final[int] = 13
WARNING_COLOR: Final[int] = 14

STYLE_ATTRS: Final[Dict[Style, int]] = {
    Style.BOLD: curses.A_BOLD,
    Style.ITALIC: getattr(curses, "A_ITALIC", curses.A_UNDERLINE),
    Style.BOLD_ITALIC: curses.A_BOLD | getattr(curses, "A_ITALIC", curses.A_UNDERLINE),
    Style.HEADER: curses.A_BOLD,
    Style.MARKER: curses.A_DIM,
}


def display_text(text: str) -> str:
    """Replace characters the terminal cannot show (controls, undecodable bytes)."""

    if text.isprintable():
        return text

    return "".join(char if char.isprintable() else "?" for char in text)


def safe_addstr(window: 'curses.window', y: int, x: int, string: str, attr: int = 0) -> None:
    """Safely add a string to a window, truncating if necessary."""

    height, width = window.getmaxyx()
    if y >= height or x >= width:
        return

    available = width - x
    if available <= 0:
        return

    if len(string) > available:
        string = string[:available]

    try:
        window.addstr(y, x, string, attr)
    except curses.error:
        pass


class FrameWindow:
    """Output sink drawing a Frame onto the whole terminal."""

    def __init__(self, stdscr: 'curses.window') -> None:
        self.stdscr = stdscr
        self.colors = False
        self.init_colors()

    def init_colors(self) -> None:
        """Initialize color pairs for every style."""

        if not curses.has_colors():
            return

        curses.start_color()
        curses.use_default_colors()

        curses.init_pair(STYLE_COLORS[Style.KEYWORD], curses.COLOR_YELLOW, -1)
        curses.init_pair(STYLE_COLORS[Style.TYPE], curses.COLOR_CYAN, -1)
        curses.init_pair(STYLE_COLORS[Style.COMMENT], curses.COLOR_GREEN, -1)
        curses.init_pair(STYLE_COLORS[Style.STRING], curses.COLOR_YELLOW, -1)
        curses.init_pair(STYLE_COLORS[Style.NUMBER], curses.COLOR_RED, -1)
        curses.init_pair(STYLE_COLORS[Style.PREPROCESSOR], curses.COLOR_MAGENTA, -1)
        curses.init_pair(STYLE_COLORS[Style.CONSTANT], curses.COLOR_RED, -1)
        curses.init_pair(STYLE_COLORS[Style.CODE], curses.COLOR_GREEN, -1)
        curses.init_pair(STYLE_COLORS[Style.HEADER], curses.COLOR_BLUE, -1)
        curses.init_pair(STYLE_COLORS[Style.BULLET], curses.COLOR_CYAN, -1)
        curses.init_pair(STYLE_COLORS[Style.RULE], -1, -1)
        curses.init_pair(STYLE_COLORS[Style.MARKER], 8 if curses.COLORS > 8 else curses.COLOR_WHITE, -1)
        curses.init_pair(ERROR_COLOR, curses.COLOR_RED, -1)
        curses.init_pair(WARNING_COLOR, curses.COLOR_YELLOW, -1)

        self.colors = True

    def span_attr(self, span: Span) -> int:
        """Get the curses attribute for a span."""

        attr = STYLE_ATTRS.get(span.style, curses.A_NORMAL)
        if self.colors and span.style in STYLE_COLORS:
            attr |= curses.color_pair(STYLE_COLORS[span.style])

        return attr

    def message_attr(self, kind: MessageKind) -> int:
        if not self.colors or kind is MessageKind.INFO:
            return curses.A_NORMAL

        if kind is MessageKind.ERROR:
            return curses.color_pair(ERROR_COLOR) | curses.A_BOLD

        return curses.color_pair(WARNING_COLOR)

    def draw(self, frame: Frame) -> None:
        """Draw the text rows, status line and message line, then place the cursor."""

        self.stdscr.erase()

        for y, row in enumerate(frame.rows):
            x = 0
            for span in row:
                safe_addstr(self.stdscr, y, x, display_text(span.text), self.span_attr(span))
                x += text_width(span.text)

        status_y = len(frame.rows)
        safe_addstr(self.stdscr, status_y, 0, display_text(frame.status).ljust(frame.width),
                    curses.A_REVERSE)
        safe_addstr(self.stdscr, status_y + 1, 0, display_text(frame.message),
                    self.message_attr(frame.message_kind))

        cursor_y, cursor_x = frame.cursor
        try:
            self.stdscr.move(cursor_y, cursor_x)
        except curses.error:
            pass

        self.stdscr.noutrefresh()
        curses.doupdate()
