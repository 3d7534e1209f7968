"""
Editor engine: routes key events to the document, the viewport, prompts and
search, and renders a frame after each event.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Final, Optional

from ..config import EditorConfig
from ..utils.fileio import read_file, write_file
from ..utils.search import Advance, Cancel, Confirm, QueryChanged, SearchController, SearchDirection
from .document import CLOSE_BRACE, OPEN_BRACE, Document
from .frame import Frame, FrameRenderer, Layout, text_columns
from .keys import (
    ARROW_KEYS, CTRL_BACKSPACE, CTRL_BRACE_MATCH, CTRL_FIND, CTRL_OPEN, CTRL_PREVIEW,
    CTRL_QUIT, CTRL_SAVE, Key, KeyEvent,
)
from .messages import MessageKind, StatusMessage
from .syntax import select_highlighter
from .viewport import Direction, Viewport

logger = logging.getLogger(__name__)

SAVE_AS_PROMPT: Final[str] = "Save As: {} (ESC to cancel)"
OPEN_PROMPT: Final[str] = "Open File: {} (ESC to cancel)"
FIND_PROMPT: Final[str] = "Search: {} (ESC=Cancel | Arrows=Navigate | Enter=Confirm)"

UNSAVED_QUIT_MESSAGE: Final[str] = "WARNING! File has unsaved changes. Press Ctrl-Q {} more times to quit."
UNSAVED_OPEN_MESSAGE: Final[str] = "WARNING! File has unsaved changes. Save first (Ctrl-S)."
TRUNCATED_MESSAGE: Final[str] = "Warning: Line truncated (too long)"
NO_BRACE_MESSAGE: Final[str] = "No matching brace found"

ARROW_DIRECTIONS: Final[Dict[Key, Direction]] = {
    Key.ARROW_LEFT: Direction.LEFT,
    Key.ARROW_RIGHT: Direction.RIGHT,
    Key.ARROW_UP: Direction.UP,
    Key.ARROW_DOWN: Direction.DOWN,
}

SEARCH_DIRECTIONS: Final[Dict[Key, SearchDirection]] = {
    Key.ARROW_LEFT: SearchDirection.BACKWARD,
    Key.ARROW_UP: SearchDirection.BACKWARD,
    Key.ARROW_RIGHT: SearchDirection.FORWARD,
    Key.ARROW_DOWN: SearchDirection.FORWARD,
}


class PromptPurpose(Enum):
    SAVE_AS = "save_as"
    OPEN = "open"
    FIND = "find"


@dataclass
class Prompt:
    """Text being typed on the message line."""

    purpose: PromptPurpose
    template: str
    value: str = ""

    def text(self) -> str:
        return self.template.format(self.value)


class Editor:
    """
    A single-document editing session.

    All state lives on the instance: the document, the viewport, the active
    prompt or search and the status message.
    """

    def __init__(self, config: Optional[EditorConfig] = None,
                 document: Optional[Document] = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.config = config or EditorConfig()
        self.document = document if document is not None else self._new_document()
        self.view = Viewport()
        self.highlighter = select_highlighter(self.document.filename)
        self.layout = Layout.EDIT
        self.renderer = FrameRenderer(self.config)
        self.clock = clock
        self.screencols = self.view.screencols
        self.message: Optional[StatusMessage] = None
        self.prompt: Optional[Prompt] = None
        self.search: Optional[SearchController] = None
        self.quit_times = self.config.quit_times

        self.key_handlers: Dict[Key, Callable[[KeyEvent], None]] = self._setup_handlers()
        self.ctrl_handlers: Dict[str, Callable[[], None]] = self._setup_ctrl_handlers()

    def _new_document(self, filename: Optional[str] = None) -> Document:
        return Document(filename, self.config.tab_width, self.config.max_line_length)

    def _setup_handlers(self) -> Dict[Key, Callable[[KeyEvent], None]]:
        """Set up the handlers for non-control keys in edit mode."""

        return {
            Key.CHAR: lambda event: self.document.insert_char_at_cursor(self.view, event.char),
            Key.ENTER: lambda event: self.document.insert_newline_at_cursor(self.view),
            Key.BACKSPACE: lambda event: self.document.delete_char_before_cursor(self.view),
            Key.DELETE: lambda event: self.delete_forward(),
            Key.ARROW_LEFT: self._move,
            Key.ARROW_RIGHT: self._move,
            Key.ARROW_UP: self._move,
            Key.ARROW_DOWN: self._move,
            Key.HOME: lambda event: self.view.move_home(),
            Key.END: lambda event: self.view.move_end(self.document),
            Key.PAGE_UP: lambda event: self.view.page_up(self.document),
            Key.PAGE_DOWN: lambda event: self.view.page_down(self.document),
            Key.ESCAPE: lambda event: None,
        }

    def _setup_ctrl_handlers(self) -> Dict[str, Callable[[], None]]:
        """Set up the Ctrl+key commands."""

        return {
            CTRL_SAVE: self.save,
            CTRL_OPEN: self.start_open,
            CTRL_FIND: self.start_find,
            CTRL_BRACE_MATCH: self.match_brace,
            CTRL_PREVIEW: self.toggle_layout,
            CTRL_BACKSPACE: lambda: self.document.delete_char_before_cursor(self.view),
        }

    def set_status_message(self, text: str, kind: MessageKind = MessageKind.INFO) -> None:
        self.message = StatusMessage(text, kind, self.clock())

    def set_screen_size(self, rows: int, cols: int) -> None:
        """Take the terminal size; two rows are kept for the status and message lines."""

        self.view.screenrows = max(1, rows - 2)
        self.screencols = max(1, cols)
        self.view.screencols = text_columns(self.layout, self.screencols)

    def current_message(self) -> StatusMessage:
        """The text the message line shows right now."""

        if self.prompt:
            return StatusMessage(self.prompt.text())

        if self.message and self.message.is_active(self.clock(), self.config.message_duration):
            return self.message

        return StatusMessage("")

    def refresh(self) -> Frame:
        """Clamp the cursor, scroll it into view and render a frame."""

        self.view.screencols = text_columns(self.layout, self.screencols)
        self.view.clamp(self.document)
        self.view.scroll(self.document)

        message = self.current_message()
        return self.renderer.render(
            self.document,
            self.view,
            self.highlighter,
            self.screencols,
            self.layout,
            message.text,
            message.kind,
        )

    def handle_key(self, event: KeyEvent) -> bool:
        """
        Process one key event.

        Returns:
            False once the user has confirmed quitting, True otherwise
        """

        if self.prompt:
            self._handle_prompt_key(event)
            self.quit_times = self.config.quit_times
            return True

        if event.is_ctrl(CTRL_QUIT):
            return self._quit()

        self.quit_times = self.config.quit_times

        if self.layout is Layout.PREVIEW:
            self._handle_preview_key(event)
            return True

        if event.key is Key.CTRL:
            handler = self.ctrl_handlers.get(event.char)
            if handler:
                handler()
            return True

        handler = self.key_handlers.get(event.key)
        if handler:
            handler(event)

        return True

    def _handle_preview_key(self, event: KeyEvent) -> None:
        """In preview only navigation, saving and switching layout work."""

        if event.key is Key.CTRL:
            if event.char in (CTRL_PREVIEW, CTRL_SAVE):
                self.ctrl_handlers[event.char]()
            return

        if event.key in ARROW_KEYS or event.key in (Key.HOME, Key.END, Key.PAGE_UP, Key.PAGE_DOWN):
            self.key_handlers[event.key](event)

    def _move(self, event: KeyEvent) -> None:
        self.view.move_cursor(self.document, ARROW_DIRECTIONS[event.key])

    def _quit(self) -> bool:
        if self.document.dirty and self.quit_times > 0:
            self.set_status_message(UNSAVED_QUIT_MESSAGE.format(self.quit_times), MessageKind.WARNING)
            self.quit_times -= 1
            return True

        return False

    def delete_forward(self) -> None:
        """Delete the character under the cursor, joining lines at a line end."""

        before = (self.view.cx, self.view.cy)
        self.view.move_cursor(self.document, Direction.RIGHT)
        if (self.view.cx, self.view.cy) == before:
            return

        self.document.delete_char_before_cursor(self.view)

    def match_brace(self) -> None:
        """Jump to the brace matching the one under the cursor."""

        row = self.document.row_at(self.view.cy)
        if row is None or self.view.cx >= row.size:
            return

        if row.chars[self.view.cx] not in (OPEN_BRACE, CLOSE_BRACE):
            return

        match = self.document.find_matching_brace(self.view.cy, self.view.cx)
        if match is None:
            self.set_status_message(NO_BRACE_MESSAGE)
            return

        self.view.cy, self.view.cx = match

    def toggle_layout(self) -> None:
        """Cycle edit, split and preview layouts."""

        self.layout = self.layout.next()
        self.view.screencols = text_columns(self.layout, self.screencols)
        self.set_status_message(f"{self.layout.value.capitalize()} mode")

    def _start_prompt(self, purpose: PromptPurpose, template: str) -> None:
        self.prompt = Prompt(purpose, template)

    def _handle_prompt_key(self, event: KeyEvent) -> None:
        """Edit, confirm or cancel the active prompt."""

        prompt = self.prompt

        if event.is_backspace or event.key is Key.DELETE:
            if prompt.value:
                prompt.value = prompt.value[:-1]
                self._prompt_changed()
            return

        if event.key is Key.ESCAPE:
            self.prompt = None
            self.message = None
            self._cancel_prompt(prompt)
            return

        if event.key is Key.ENTER:
            if prompt.value:
                self.prompt = None
                self.message = None
                self._confirm_prompt(prompt)
            return

        if event.key in ARROW_KEYS:
            if self.search:
                self.search.handle(Advance(SEARCH_DIRECTIONS[event.key]))
            return

        if event.key is Key.CHAR and event.char.isprintable():
            prompt.value += event.char
            self._prompt_changed()

    def _prompt_changed(self) -> None:
        if self.search and self.prompt.purpose is PromptPurpose.FIND:
            self.search.handle(QueryChanged(self.prompt.value))

    def _confirm_prompt(self, prompt: Prompt) -> None:
        if prompt.purpose is PromptPurpose.SAVE_AS:
            self.document.filename = prompt.value
            self.highlighter = select_highlighter(prompt.value)
            self.write()

        elif prompt.purpose is PromptPurpose.OPEN:
            self.open_file(prompt.value)

        elif prompt.purpose is PromptPurpose.FIND:
            self.search.handle(Confirm())
            self.search = None

    def _cancel_prompt(self, prompt: Prompt) -> None:
        if prompt.purpose is PromptPurpose.SAVE_AS:
            self.set_status_message("Save aborted.")

        elif prompt.purpose is PromptPurpose.OPEN:
            self.set_status_message("Open aborted.")

        elif prompt.purpose is PromptPurpose.FIND:
            self.search.handle(Cancel())
            self.search = None

    def start_find(self) -> None:
        """Start an incremental search from the current position."""

        self.search = SearchController(self.document, self.view)
        self._start_prompt(PromptPurpose.FIND, FIND_PROMPT)

    def start_open(self) -> None:
        """Ask for a file to open, unless there are unsaved changes."""

        if self.document.dirty:
            self.set_status_message(UNSAVED_OPEN_MESSAGE, MessageKind.WARNING)
            return

        self._start_prompt(PromptPurpose.OPEN, OPEN_PROMPT)

    def save(self) -> None:
        """Save the document, asking for a name if it has none."""

        filename = self.document.filename
        if not filename or filename == self.config.default_filename:
            self._start_prompt(PromptPurpose.SAVE_AS, SAVE_AS_PROMPT)
            return

        self.write()

    def write(self) -> bool:
        """
        Write the document to its filename.

        Returns:
            True if the file was written
        """

        data = self.document.to_bytes()

        try:
            written = write_file(self.document.filename, data, self.config.save_directory)
        except OSError as e:
            logger.warning("Saving %s failed: %s", self.document.filename, e)
            self.set_status_message(f"Can't save! I/O error: {e.strerror or e}", MessageKind.ERROR)
            return False

        self.document.dirty = False
        logger.info("Saved %s (%d bytes)", self.document.filename, written)
        self.set_status_message(f"{written} bytes written to disk")
        return True

    def open_file(self, filename: str) -> bool:
        """
        Replace the document with a file's content.

        A file that does not exist gives an empty document that keeps the
        name, so saving creates it.

        Returns:
            True if the document was replaced
        """

        try:
            data = read_file(filename, self.config.save_directory)
        except OSError as e:
            logger.warning("Opening %s failed: %s", filename, e)
            self.set_status_message(f"Can't open {filename}: {e.strerror or e}", MessageKind.ERROR)
            return False

        document = self._new_document(filename)

        if data is None:
            self.set_status_message(f"New file: {filename}")
        elif document.load(data):
            self.set_status_message(TRUNCATED_MESSAGE, MessageKind.WARNING)

        logger.info("Opened %s (%d lines)", filename, document.numrows)

        self.document = document
        self.view.reset()
        self.highlighter = select_highlighter(filename)
        self.search = None

        return True
