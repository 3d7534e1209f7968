"""
Core package for the text buffer engine.

This package implements the document model (rows and documents), the
viewport with its buffer/render coordinate mapping, the highlighters and the
frame renderer. The Editor engine tying them together lives in
``termedit.core.editor``.
"""

from .document import Document
from .row import Row
from .spans import Span, Style
from .syntax import select_highlighter
from .viewport import Viewport

__all__ = ['Document', 'Row', 'Span', 'Style', 'Viewport', 'select_highlighter']
