"""
Styled span types shared by every highlighter.
"""

import unicodedata
from enum import Enum
from typing import List, NamedTuple


class Style(Enum):
    """Style tags attached to spans of text."""

    PLAIN = "plain"
    KEYWORD = "keyword"
    TYPE = "type"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    CONSTANT = "constant"
    PREPROCESSOR = "preprocessor"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"
    CODE = "code"
    HEADER = "header"
    MARKER = "marker"
    BULLET = "bullet"
    RULE = "rule"


class Span(NamedTuple):
    """A run of text with one style. ``level`` carries the header level."""

    text: str
    style: Style = Style.PLAIN
    level: int = 0


class SpanBuilder:
    """Collects spans, merging neighbours that share a style."""

    def __init__(self) -> None:
        self.spans: List[Span] = []

    def add(self, text: str, style: Style = Style.PLAIN, level: int = 0) -> None:
        if not text:
            return

        if self.spans:
            last = self.spans[-1]
            if last.style is style and last.level == level:
                self.spans[-1] = Span(last.text + text, style, level)
                return

        self.spans.append(Span(text, style, level))

    def build(self) -> List[Span]:
        return self.spans


def spans_text(spans: List[Span]) -> str:
    """Concatenate the text of a span sequence."""

    return "".join(span.text for span in spans)


def char_width(char: str) -> int:
    """Terminal cells taken by one character: 0 for combining marks, 2 for wide ones."""

    if unicodedata.combining(char):
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2

    return 1


def text_width(text: str) -> int:
    """Terminal cells taken by a string without tabs."""

    if text.isascii():
        return len(text)

    return sum(char_width(char) for char in text)


class Highlighter:
    """Base class: every highlighter maps one rendered row to spans covering all of it."""

    name = "plain"

    def highlight(self, text: str) -> List[Span]:
        raise NotImplementedError


class PlainHighlighter(Highlighter):
    """No highlighting: the row is one plain span."""

    name = "plain"

    def highlight(self, text: str) -> List[Span]:
        if not text:
            return []

        return [Span(text)]

