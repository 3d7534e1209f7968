"""
Row module holding one line of text and its rendered form.
"""

from typing import Final, Tuple

from ..config import TAB_SIZE
from .spans import char_width

TAB: Final[str] = "\t"


def expand_tabs(chars: str, tab_width: int = TAB_SIZE) -> str:
    """
    Expand every tab to spaces up to the next multiple of tab_width.

    Tab stops are counted in terminal cells, so wide characters take two.
    """

    if TAB not in chars:
        return chars

    out = []
    column = 0
    for char in chars:
        if char == TAB:
            pad = tab_width - (column % tab_width)
            out.append(" " * pad)
            column += pad
            continue

        out.append(char)
        column += char_width(char)

    return "".join(out)


class Row:
    """
    One line of the document.

    ``chars`` is the raw text, ``render`` is the text as displayed with tabs
    expanded. Every mutating method rebuilds ``render`` before returning.
    Both are plain strings; Python manages their storage, so there is no
    separate capacity to grow or shrink.
    """

    __slots__ = ("chars", "render", "tab_width")

    def __init__(self, chars: str = "", tab_width: int = TAB_SIZE) -> None:
        self.tab_width = tab_width
        self.chars = chars
        self.render = ""
        self.update()

    def __repr__(self) -> str:
        return f"Row({self.chars!r})"

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def update(self) -> None:
        """Rebuild the rendered form from the raw characters."""

        self.render = expand_tabs(self.chars, self.tab_width)

    def insert_char(self, at: int, char: str) -> None:
        """Insert a character, clamping the position into [0, size]."""

        at = max(0, min(at, self.size))
        self.chars = self.chars[:at] + char + self.chars[at:]
        self.update()

    def delete_char(self, at: int) -> None:
        """Delete the character at a position; no-op outside [0, size)."""

        if not 0 <= at < self.size:
            return

        self.chars = self.chars[:at] + self.chars[at + 1:]
        self.update()

    def append(self, text: str) -> None:
        """Append text to the end of the row."""

        if not text:
            return

        self.chars += text
        self.update()

    def set_from(self, text: str) -> None:
        """Replace the row content."""

        self.chars = text
        self.update()

    def split_at(self, pos: int) -> Tuple["Row", "Row"]:
        """
        Split the row in two.

        This row keeps the text before ``pos``; a new row is created for
        the rest.

        Returns:
            The (left, right) pair of rows
        """

        pos = max(0, min(pos, self.size))
        right = Row(self.chars[pos:], self.tab_width)
        self.set_from(self.chars[:pos])

        return self, right
