"""
Document module for the ordered collection of rows and its edit operations.
"""

import io
import logging
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union, TYPE_CHECKING

from ..config import MAX_LINE_LENGTH, TAB_SIZE
from .row import Row

if TYPE_CHECKING:
    from .viewport import Viewport

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

OPEN_BRACE = "{"
CLOSE_BRACE = "}"


def decode_line(data: bytes) -> str:
    """Decode one line of file content; undecodable bytes survive a re-encode."""

    return data.decode(ENCODING, errors=ENCODING_ERRORS)


def encode_line(text: str) -> bytes:
    """Encode one row back into the bytes it was loaded from."""

    return text.encode(ENCODING, errors=ENCODING_ERRORS)


class Document:
    """Ordered rows of a single text document."""

    def __init__(self, filename: Optional[str] = None, tab_width: int = TAB_SIZE,
                 max_line_length: int = MAX_LINE_LENGTH) -> None:
        self.rows: List[Row] = []
        self.filename = filename
        self.dirty = False
        self.tab_width = tab_width
        self.max_line_length = max_line_length

    @classmethod
    def from_lines(cls, lines: List[str], filename: Optional[str] = None,
                   tab_width: int = TAB_SIZE) -> "Document":
        """Create a clean document holding the given lines."""

        doc = cls(filename, tab_width)
        doc.rows = [Row(line, tab_width) for line in lines]
        return doc

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def lines(self) -> List[str]:
        """Return the raw text of every row."""

        return [row.chars for row in self.rows]

    def insert_row(self, at: int, text: str = "") -> Row:
        """Insert a new row, clamping the position into [0, numrows]."""

        at = max(0, min(at, self.numrows))
        row = Row(text, self.tab_width)
        self.rows.insert(at, row)
        self.dirty = True

        return row

    def append_row(self, text: str = "") -> Row:
        """Add a row after the last one."""

        return self.insert_row(self.numrows, text)

    def delete_row(self, at: int) -> None:
        """Remove a row; no-op when the index is out of range."""

        if not 0 <= at < self.numrows:
            return

        del self.rows[at]
        self.dirty = True

    def row_at(self, cy: int) -> Optional[Row]:
        """Get the row at an index, or None for the virtual row past the end."""

        if 0 <= cy < self.numrows:
            return self.rows[cy]

        return None

    def insert_char_at_cursor(self, cursor: 'Viewport', char: str) -> None:
        """Insert a character at the cursor and advance it."""

        if cursor.cy >= self.numrows:
            cursor.cy = self.numrows
            self.append_row()

        row = self.rows[cursor.cy]
        at = max(0, min(cursor.cx, row.size))
        row.insert_char(at, char)
        self.dirty = True
        cursor.cx = at + 1

    def insert_newline_at_cursor(self, cursor: 'Viewport') -> None:
        """Break the line at the cursor and move to the start of the next line."""

        row = self.row_at(cursor.cy)

        if cursor.cx == 0 or row is None:
            self.insert_row(cursor.cy, "")
        else:
            _, right = row.split_at(cursor.cx)
            right_index = cursor.cy + 1
            self.rows.insert(right_index, right)
            self.dirty = True

        cursor.cy += 1
        cursor.cx = 0

    def delete_char_before_cursor(self, cursor: 'Viewport') -> None:
        """Backspace: delete the character left of the cursor or join with the previous line."""

        if cursor.cy >= self.numrows:
            return

        if cursor.cx == 0 and cursor.cy == 0:
            return

        row = self.rows[cursor.cy]
        if cursor.cx > 0:
            row.delete_char(cursor.cx - 1)
            self.dirty = True
            cursor.cx -= 1
            return

        previous = self.rows[cursor.cy - 1]
        cursor.cx = previous.size
        previous.append(row.chars)
        self.delete_row(cursor.cy)
        cursor.cy -= 1

    def to_bytes(self) -> bytes:
        """Serialize every row followed by a single newline."""

        return b"".join(encode_line(row.chars) + b"\n" for row in self.rows)

    def load(self, stream: Union[bytes, BinaryIO]) -> int:
        """
        Replace the rows with the lines read from a byte stream.

        Lines may end in ``\\n`` or ``\\r\\n``. Lines longer than
        ``max_line_length`` are truncated.

        Args:
            stream: Raw file content or a binary file object

        Returns:
            The number of truncated lines
        """

        if isinstance(stream, (bytes, bytearray)):
            stream = io.BytesIO(stream)

        rows: List[Row] = []
        truncated = 0

        for raw in stream:
            line = raw.rstrip(b"\r\n")
            if len(line) > self.max_line_length:
                line = line[:self.max_line_length]
                truncated += 1

            rows.append(Row(decode_line(line), self.tab_width))

        if truncated:
            logger.warning("Truncated %d line(s) longer than %d bytes",
                           truncated, self.max_line_length)

        self.rows = rows
        self.dirty = False

        return truncated

    def find_matching_brace(self, cy: int, cx: int) -> Optional[Tuple[int, int]]:
        """
        Find the brace matching the one at (cx, cy).

        Args:
            cy: Row of the brace
            cx: Column of the brace

        Returns:
            The (cy, cx) of the matching brace, or None if the position is
            not on a brace or no match exists
        """

        row = self.row_at(cy)
        if row is None or not 0 <= cx < row.size:
            return None

        char = row.chars[cx]
        if char == OPEN_BRACE:
            direction = 1
        elif char == CLOSE_BRACE:
            direction = -1
        else:
            return None

        level = 0
        for y, x, current in self._walk_chars(cy, cx, direction):
            if current == OPEN_BRACE:
                level += direction
            elif current == CLOSE_BRACE:
                level -= direction

            if level == 0:
                return y, x

        return None

    def _walk_chars(self, cy: int, cx: int, direction: int) -> Iterator[Tuple[int, int, str]]:
        """Yield (cy, cx, char) from a position onwards in the given direction."""

        y, x = cy, cx
        while 0 <= y < self.numrows:
            chars = self.rows[y].chars
            while 0 <= x < len(chars):
                yield y, x, chars[x]
                x += direction

            y += direction
            if 0 <= y < self.numrows:
                x = 0 if direction > 0 else self.rows[y].size - 1
