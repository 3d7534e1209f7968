"""
Viewport module for the cursor, scroll offsets and buffer/render column mapping.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from ..config import TAB_SIZE
from .document import Document
from .row import TAB, Row
from .spans import char_width


class Direction(Enum):
    """Cursor movement directions."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class ViewState(NamedTuple):
    """Saved cursor and scroll position."""

    cx: int
    cy: int
    rowoff: int
    coloff: int


def cx_to_rx(row: Optional[Row], cx: int, tab_width: int = TAB_SIZE) -> int:
    """
    Map a buffer column to the rendered column, counted in terminal cells.

    Args:
        row: The row the cursor is on, or None for the virtual row
        cx: Column in the raw characters
        tab_width: Tab stop distance

    Returns:
        The column in the rendered text
    """

    if row is None:
        return 0

    rx = 0
    for char in row.chars[:cx]:
        if char == TAB:
            rx += tab_width - (rx % tab_width)
        else:
            rx += char_width(char)

    return rx


@dataclass
class Viewport:
    """Cursor position in buffer space plus the visible window onto the document."""

    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 24
    screencols: int = 80

    def reset(self) -> None:
        """Move the cursor and the scroll position back to the top left."""

        self.cx = self.cy = self.rx = 0
        self.rowoff = self.coloff = 0

    def save(self) -> ViewState:
        return ViewState(self.cx, self.cy, self.rowoff, self.coloff)

    def restore(self, state: ViewState) -> None:
        self.cx, self.cy, self.rowoff, self.coloff = state

    def clamp(self, document: Document) -> None:
        """Keep cy inside [0, numrows] and cx inside the current row."""

        self.cy = max(0, min(self.cy, document.numrows))
        row = document.row_at(self.cy)
        rowlen = row.size if row else 0
        self.cx = max(0, min(self.cx, rowlen))

    def scroll(self, document: Document) -> None:
        """Recompute rx and shift the scroll offsets so the cursor is visible."""

        self.rx = cx_to_rx(document.row_at(self.cy), self.cx, document.tab_width)

        if self.cy < self.rowoff:
            self.rowoff = self.cy
        if self.cy >= self.rowoff + self.screenrows:
            self.rowoff = self.cy - self.screenrows + 1
        if self.rx < self.coloff:
            self.coloff = self.rx
        if self.rx >= self.coloff + self.screencols:
            self.coloff = self.rx - self.screencols + 1

    def move_cursor(self, document: Document, direction: Direction) -> None:
        """
        Move the cursor one step.

        Horizontal moves wrap across line ends; vertical moves stop at the
        first and last rows.
        """

        row = document.row_at(self.cy)

        if direction is Direction.LEFT:
            if self.cx > 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                previous = document.row_at(self.cy)
                self.cx = previous.size if previous else 0

        elif direction is Direction.RIGHT:
            if row and self.cx < row.size:
                self.cx += 1
            elif row and self.cy < document.numrows - 1:
                self.cy += 1
                self.cx = 0

        elif direction is Direction.UP:
            if self.cy > 0:
                self.cy -= 1

        elif direction is Direction.DOWN:
            if self.cy < document.numrows - 1:
                self.cy += 1

        row = document.row_at(self.cy)
        rowlen = row.size if row else 0
        if self.cx > rowlen:
            self.cx = rowlen

    def move_home(self) -> None:
        self.cx = 0

    def move_end(self, document: Document) -> None:
        row = document.row_at(self.cy)
        if row:
            self.cx = row.size

    def page_up(self, document: Document) -> None:
        """Jump to the top row of the screen."""

        self.cy = self.rowoff
        self.clamp(document)

    def page_down(self, document: Document) -> None:
        """Jump to the bottom row of the screen."""

        self.cy = min(self.rowoff + self.screenrows - 1, document.numrows)
        self.clamp(document)
