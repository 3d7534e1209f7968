"""
Lightweight markup (Markdown subset) highlighting and preview rendering.

Every line is classified on its own: header, horizontal rule, list item,
fenced line or normal text. Normal text is scanned for the bold, italic and
inline-code markers. Markers toggle their style; a style still open at the
end of the line is dropped with the line.
"""

import re
from enum import Enum
from typing import Final, List, NamedTuple

from .spans import Highlighter, Span, SpanBuilder, Style

MAX_HEADER_LEVEL: Final[int] = 6
FENCE: Final[str] = "```"
BOLD_MARKER: Final[str] = "**"
ITALIC_MARKER: Final[str] = "*"
CODE_MARKER: Final[str] = "`"
PREVIEW_BULLET: Final[str] = "•"
PREVIEW_RULE: Final[str] = "─"

HEADER_RE: Final[re.Pattern] = re.compile(r"(#+)(\s+)")
LIST_ITEM_RE: Final[re.Pattern] = re.compile(r"(\s*)([-*+])(\s+)")
RULE_RE: Final[re.Pattern] = re.compile(r"\s*([-*_])(?:\s*\1){2,}\s*")


class LineKind(Enum):
    """Classification of a markup line."""

    HEADER = "header"
    RULE = "rule"
    LIST_ITEM = "list_item"
    FENCE = "fence"
    TEXT = "text"


class LineClass(NamedTuple):
    """
    Result of classifying a line.

    ``marker_end`` is the offset where the line's content starts after the
    header or bullet marker; ``level`` is the header level.
    """

    kind: LineKind
    level: int = 0
    marker_end: int = 0


def classify_line(text: str) -> LineClass:
    """Classify one rendered line."""

    match = HEADER_RE.match(text)
    if match:
        level = min(len(match.group(1)), MAX_HEADER_LEVEL)
        return LineClass(LineKind.HEADER, level, match.end())

    if RULE_RE.fullmatch(text):
        return LineClass(LineKind.RULE)

    match = LIST_ITEM_RE.match(text)
    if match:
        return LineClass(LineKind.LIST_ITEM, 0, match.end())

    if text.startswith(FENCE):
        return LineClass(LineKind.FENCE)

    return LineClass(LineKind.TEXT)


def _inline_style(bold: bool, italic: bool, code: bool) -> Style:
    if code:
        return Style.CODE
    if bold and italic:
        return Style.BOLD_ITALIC
    if bold:
        return Style.BOLD
    if italic:
        return Style.ITALIC

    return Style.PLAIN


def scan_inline(text: str, builder: SpanBuilder) -> None:
    """
    Scan normal text for bold, italic and inline-code markers.

    Markers are emitted as MARKER spans; the state they toggle lives only
    for this call.
    """

    bold = italic = code = False
    length = len(text)
    i = 0

    while i < length:
        if text.startswith(BOLD_MARKER, i):
            bold = not bold
            builder.add(BOLD_MARKER, Style.MARKER)
            i += len(BOLD_MARKER)
            continue

        if text.startswith(ITALIC_MARKER, i):
            italic = not italic
            builder.add(ITALIC_MARKER, Style.MARKER)
            i += 1
            continue

        if text.startswith(CODE_MARKER, i):
            code = not code
            builder.add(CODE_MARKER, Style.MARKER)
            i += 1
            continue

        builder.add(text[i], _inline_style(bold, italic, code))
        i += 1


class MarkupHighlighter(Highlighter):
    """Highlighter for Markdown-style documents."""

    name = "Markdown"

    def highlight(self, text: str) -> List[Span]:
        builder = SpanBuilder()
        line = classify_line(text)

        if line.kind is LineKind.HEADER:
            builder.add(text[:line.marker_end], Style.MARKER, line.level)
            builder.add(text[line.marker_end:], Style.HEADER, line.level)

        elif line.kind is LineKind.RULE:
            builder.add(text, Style.RULE)

        elif line.kind is LineKind.LIST_ITEM:
            match = LIST_ITEM_RE.match(text)
            indent, bullet, gap = match.groups()
            builder.add(indent)
            builder.add(bullet, Style.BULLET)
            builder.add(gap)
            builder.add(text[line.marker_end:])

        elif line.kind is LineKind.FENCE:
            builder.add(text, Style.CODE)

        else:
            scan_inline(text, builder)

        return builder.build()

    def preview(self, text: str, width: int) -> List[Span]:
        """
        Render a line the way it reads, with markup markers hidden.

        Args:
            text: The rendered row
            width: Width of the pane, used for horizontal rules

        Returns:
            The spans to display in the preview pane
        """

        line = classify_line(text)
        builder = SpanBuilder()

        if line.kind is LineKind.HEADER:
            builder.add(text[line.marker_end:], Style.HEADER, line.level)

        elif line.kind is LineKind.RULE:
            builder.add(PREVIEW_RULE * max(0, width), Style.RULE)

        elif line.kind is LineKind.LIST_ITEM:
            indent = LIST_ITEM_RE.match(text).group(1)
            builder.add(indent)
            builder.add(PREVIEW_BULLET, Style.BULLET)
            builder.add(" ")
            builder.add(text[line.marker_end:])

        elif line.kind is LineKind.FENCE:
            builder.add(text, Style.CODE)

        else:
            for span in self.highlight(text):
                if span.style is not Style.MARKER:
                    builder.add(span.text, span.style, span.level)

        return builder.build()
