"""
Frame rendering: composes the document, viewport and highlighter output into
the rows, status line and message line of one screen.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, List, Tuple

from ..config import VERSION, EditorConfig
from .document import Document
from .markup import MarkupHighlighter
from .messages import MessageKind
from .spans import Highlighter, Span, SpanBuilder, Style, char_width, spans_text, text_width
from .viewport import Viewport

FILLER: Final[str] = "~"
NO_NAME: Final[str] = "[No Name]"
MODIFIED: Final[str] = "(modified)"
FILENAME_WIDTH: Final[int] = 20
WELCOME_TEMPLATE: Final[str] = "termedit -- version {}"
HELP_MESSAGE: Final[str] = (
    "HELP: Ctrl-S = Save | Ctrl-O = Open | Ctrl-F = Find | Ctrl-Q = Quit | "
    "Ctrl-] = Match Brace | Ctrl-P = Preview"
)


class Layout(Enum):
    """Screen layouts."""

    EDIT = "edit"
    SPLIT = "split"
    PREVIEW = "preview"

    def next(self) -> "Layout":
        order = list(Layout)
        return order[(order.index(self) + 1) % len(order)]


@dataclass
class Frame:
    """Everything the output sink needs to draw one screen."""

    rows: List[List[Span]]
    status: str
    message: str
    message_kind: MessageKind = MessageKind.INFO
    cursor: Tuple[int, int] = (0, 0)
    layout: Layout = Layout.EDIT
    width: int = 0

    def row_text(self, index: int) -> str:
        return spans_text(self.rows[index])


def clip_spans(spans: List[Span], start: int, width: int) -> List[Span]:
    """
    Cut the columns [start, start + width) out of a span sequence.

    Columns are terminal cells. A wide character cut in half by either edge
    is replaced by spaces for its visible cells.

    Args:
        spans: Spans covering a rendered row
        start: First visible column
        width: Number of visible columns

    Returns:
        The visible part, still split by style
    """

    if width <= 0:
        return []

    end = start + width
    builder = SpanBuilder()
    column = 0

    for span in spans:
        if column >= end:
            break

        span_end = column + text_width(span.text)
        if span_end <= start:
            column = span_end
            continue

        if span.text.isascii():
            lo = max(start, column) - column
            hi = min(end, span_end) - column
            builder.add(span.text[lo:hi], span.style, span.level)
            column = span_end
            continue

        visible = []
        for char in span.text:
            char_end = column + char_width(char)
            if column >= start and char_end <= end:
                visible.append(char)
            elif char_end > start and column < end:
                visible.append(" " * (min(end, char_end) - max(start, column)))
            column = char_end

        builder.add("".join(visible), span.style, span.level)

    return builder.build()


def pad_spans(spans: List[Span], width: int) -> List[Span]:
    """Pad a row with plain spaces up to width columns."""

    missing = width - text_width(spans_text(spans))
    if missing <= 0:
        return spans

    return spans + [Span(" " * missing)]


def text_columns(layout: Layout, screencols: int) -> int:
    """Number of columns available to the editable text in a layout."""

    if layout is Layout.SPLIT:
        return max(1, screencols // 2)

    return screencols


class FrameRenderer:
    """Builds frames for a given screen size."""

    def __init__(self, config: EditorConfig) -> None:
        self.config = config
        self.markup = MarkupHighlighter()

    def render(self, document: Document, view: Viewport, highlighter: Highlighter,
               screencols: int, layout: Layout = Layout.EDIT, message: str = "",
               message_kind: MessageKind = MessageKind.INFO) -> Frame:
        """
        Render the current state.

        The viewport must already be scrolled so the cursor is visible.

        Args:
            document: The document to draw
            view: Cursor and scroll position
            highlighter: Highlighter for the document's rows
            screencols: Full width of the screen
            layout: Edit, split or preview layout
            message: Text for the message line; the help line when empty
            message_kind: Kind of the message, for colouring

        Returns:
            The composed frame
        """

        if layout is Layout.EDIT:
            rows = self.draw_text_rows(document, view, highlighter, screencols)
        elif layout is Layout.PREVIEW:
            rows = self.draw_preview_rows(document, view, screencols)
        else:
            rows = self.draw_split_rows(document, view, highlighter, screencols)

        if layout is Layout.PREVIEW:
            cursor = (view.cy - view.rowoff, 0)
        else:
            cursor = (view.cy - view.rowoff, view.rx - view.coloff)

        if not message:
            message = HELP_MESSAGE
            message_kind = MessageKind.INFO

        return Frame(
            rows=rows,
            status=self.draw_status(document, view, screencols),
            message=message[:screencols],
            message_kind=message_kind,
            cursor=cursor,
            layout=layout,
            width=screencols,
        )

    def draw_text_rows(self, document: Document, view: Viewport,
                       highlighter: Highlighter, width: int) -> List[List[Span]]:
        """Draw the highlighted rows visible in the viewport."""

        rows: List[List[Span]] = []

        for y in range(view.screenrows):
            filerow = y + view.rowoff
            if filerow >= document.numrows:
                rows.append(self._filler_row(document, view, y, width))
                continue

            spans = highlighter.highlight(document.rows[filerow].render)
            rows.append(clip_spans(spans, view.coloff, width))

        return rows

    def draw_preview_rows(self, document: Document, view: Viewport,
                          width: int) -> List[List[Span]]:
        """Draw the rows as rendered markup."""

        rows: List[List[Span]] = []

        for y in range(view.screenrows):
            filerow = y + view.rowoff
            if filerow >= document.numrows:
                rows.append([Span(FILLER, Style.MARKER)])
                continue

            spans = self.markup.preview(document.rows[filerow].render, width)
            rows.append(clip_spans(spans, 0, width))

        return rows

    def draw_split_rows(self, document: Document, view: Viewport,
                        highlighter: Highlighter, width: int) -> List[List[Span]]:
        """Draw raw text on the left and its preview on the right."""

        separator = self.config.split_separator
        left_width = view.screencols
        right_width = max(0, width - left_width - len(separator))

        left_rows = self.draw_text_rows(document, view, highlighter, left_width)
        right_rows = self.draw_preview_rows(document, view, right_width)

        rows = []
        for left, right in zip(left_rows, right_rows):
            builder = SpanBuilder()
            for span in pad_spans(left, left_width) + [Span(separator, Style.MARKER)] + right:
                builder.add(span.text, span.style, span.level)
            rows.append(builder.build())

        return rows

    def _filler_row(self, document: Document, view: Viewport, y: int,
                    width: int) -> List[Span]:
        """Row past the end of the document; an empty document shows a banner."""

        if document.numrows or y != view.screenrows // 3:
            return [Span(FILLER, Style.MARKER)]

        welcome = WELCOME_TEMPLATE.format(VERSION)[:width]
        padding = (width - len(welcome)) // 2
        if not padding:
            return [Span(welcome)]

        return [Span(FILLER, Style.MARKER), Span(" " * (padding - 1) + welcome)]

    def draw_status(self, document: Document, view: Viewport, width: int) -> str:
        """Status line: filename, modified flag and the line position."""

        name = (document.filename or NO_NAME)[:FILENAME_WIDTH]
        status = f"{name} {MODIFIED if document.dirty else ''}"[:width]
        position = f"{view.cy + 1}/{document.numrows}"

        remaining = width - len(status)
        if remaining < len(position):
            return status.ljust(width)

        return status + " " * (remaining - len(position)) + position
