"""
Syntax highlighting module turning a rendered row into styled spans.
"""

from typing import Any, Dict, FrozenSet, Final, List, Optional

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_for_filename
from pygments.token import Token
from pygments.util import ClassNotFound

from .markup import MarkupHighlighter
from .spans import Highlighter, PlainHighlighter, Span, SpanBuilder, Style, spans_text

C_KEYWORDS: Final[FrozenSet[str]] = frozenset({
    "auto", "break", "case", "const", "continue", "default", "do", "else",
    "enum", "extern", "for", "goto", "if", "register", "return", "sizeof",
    "static", "struct", "switch", "typedef", "union", "volatile", "while",
})

C_TYPES: Final[FrozenSet[str]] = frozenset({
    "char", "double", "float", "int", "long", "short", "signed", "unsigned",
    "void", "size_t", "FILE", "HANDLE", "DWORD", "BOOL", "boolean",
})

C_CONSTANTS: Final[FrozenSet[str]] = frozenset({
    "true", "false", "NULL", "BOOL", "boolean",
})

PREPROCESSOR_MARKER: Final[str] = "#"
LINE_COMMENT: Final[str] = "//"
QUOTES: Final[str] = "\"'"


def is_word_char(char: str) -> bool:
    """Check if a character can be part of an identifier."""

    return char.isalnum() or char == "_"


class CSyntaxHighlighter(Highlighter):
    """
    Single-pass scanner for C-like source lines.

    Recognizes, in priority order: a preprocessor line, a line comment, a
    string literal, a digit run, an identifier checked against the keyword,
    type and constant sets. Anything else is plain text.
    """

    name = "C"

    def __init__(self, keywords: FrozenSet[str] = C_KEYWORDS,
                 types: FrozenSet[str] = C_TYPES,
                 constants: FrozenSet[str] = C_CONSTANTS) -> None:
        self.keywords = keywords
        self.types = types
        self.constants = constants

    def classify(self, word: str) -> Style:
        """Return the style for an identifier that stands on its own."""

        if word in self.keywords:
            return Style.KEYWORD
        if word in self.types:
            return Style.TYPE
        if word in self.constants:
            return Style.CONSTANT

        return Style.PLAIN

    def highlight(self, text: str) -> List[Span]:
        builder = SpanBuilder()

        if text.startswith(PREPROCESSOR_MARKER):
            builder.add(text, Style.PREPROCESSOR)
            return builder.build()

        length = len(text)
        i = 0
        while i < length:
            char = text[i]

            if text.startswith(LINE_COMMENT, i):
                builder.add(text[i:], Style.COMMENT)
                break

            if char in QUOTES:
                end = text.find(char, i + 1)
                end = length if end == -1 else end + 1
                builder.add(text[i:end], Style.STRING)
                i = end
                continue

            if char.isdigit():
                end = i
                while end < length and text[end].isdigit():
                    end += 1
                builder.add(text[i:end], Style.NUMBER)
                i = end
                continue

            if char.isalpha() or char == "_":
                end = i
                while end < length and is_word_char(text[end]):
                    end += 1

                word = text[i:end]
                style = Style.PLAIN
                before_ok = i == 0 or not is_word_char(text[i - 1])
                after_ok = end == length or not is_word_char(text[end])
                if before_ok and after_ok:
                    style = self.classify(word)

                builder.add(word, style)
                i = end
                continue

            builder.add(char)
            i += 1

        return builder.build()


TOKEN_STYLE_MAP: Final[Dict[Any, Style]] = {
    Token.Keyword: Style.KEYWORD,
    Token.Keyword.Type: Style.TYPE,
    Token.Keyword.Constant: Style.CONSTANT,
    Token.Name.Builtin.Pseudo: Style.CONSTANT,
    Token.String: Style.STRING,
    Token.Comment: Style.COMMENT,
    Token.Comment.Preproc: Style.PREPROCESSOR,
    Token.Comment.PreprocFile: Style.PREPROCESSOR,
    Token.Number: Style.NUMBER,
}


class LexerHighlighter(Highlighter):
    """Highlights rows of any language Pygments has a lexer for."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.name = lexer.name

    def _get_token_style(self, token_type: Any) -> Style:
        """Find the style of a token, walking up its parent types."""

        while token_type is not None:
            if token_type in TOKEN_STYLE_MAP:
                return TOKEN_STYLE_MAP[token_type]
            token_type = token_type.parent

        return Style.PLAIN

    def highlight(self, text: str) -> List[Span]:
        if not text:
            return []

        builder = SpanBuilder()
        for token_type, value in self.lexer.get_tokens(text):
            builder.add(value, self._get_token_style(token_type))

        spans = builder.build()
        if spans_text(spans) != text:
            return [Span(text)]

        return spans


def select_highlighter(filename: Optional[str]) -> Highlighter:
    """
    Pick the highlighter for a file.

    Args:
        filename: The document's filename, or None for a new document

    Returns:
        The C scanner for C files and unnamed documents, the markup
        highlighter for Markdown, a Pygments lexer highlighter for other
        known languages and the plain highlighter otherwise
    """

    if not filename:
        return CSyntaxHighlighter()

    try:
        lexer = get_lexer_for_filename(filename, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return PlainHighlighter()

    if lexer.name == "C":
        return CSyntaxHighlighter()

    if "markdown" in lexer.aliases:
        return MarkupHighlighter()

    return LexerHighlighter(lexer)
