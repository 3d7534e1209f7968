from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from termedit.config import EditorConfig
from termedit.core.document import Document
from termedit.core.editor import (
    NO_BRACE_MESSAGE, TRUNCATED_MESSAGE, UNSAVED_OPEN_MESSAGE, Editor, PromptPurpose,
)
from termedit.core.frame import HELP_MESSAGE, Layout
from termedit.core.keys import Key, KeyEvent
from termedit.core.markup import MarkupHighlighter
from termedit.core.messages import MessageKind
from termedit.core.syntax import CSyntaxHighlighter


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def key(kind: Key) -> KeyEvent:
    return KeyEvent(kind)


def ctrl(letter: str) -> KeyEvent:
    return KeyEvent.ctrl(letter)


def type_text(editor: Editor, text: str) -> None:
    for char in text:
        editor.handle_key(KeyEvent.printable(char))


def make_editor(lines: List[str] = (), filename: str | None = None,
                config: EditorConfig | None = None) -> Editor:
    doc = Document.from_lines(list(lines), filename=filename)
    editor = Editor(config, doc, clock=FakeClock())
    editor.set_screen_size(10, 40)
    return editor


def test_typing_and_enter() -> None:
    editor = make_editor()

    type_text(editor, "abc")
    editor.handle_key(key(Key.ENTER))
    type_text(editor, "d")

    assert editor.document.lines() == ["abc", "d"]
    assert (editor.view.cx, editor.view.cy) == (1, 1)
    assert editor.document.dirty is True


def test_enter_then_backspace_restores_line() -> None:
    editor = make_editor(["hello world"])
    editor.view.cx = 5

    editor.handle_key(key(Key.ENTER))
    assert editor.document.lines() == ["hello", " world"]

    editor.handle_key(key(Key.BACKSPACE))
    assert editor.document.lines() == ["hello world"]
    assert (editor.view.cx, editor.view.cy) == (5, 0)


def test_ctrl_h_is_backspace() -> None:
    editor = make_editor(["ab"])
    editor.view.cx = 2

    editor.handle_key(ctrl("h"))

    assert editor.document.lines() == ["a"]


def test_delete_forward_joins_lines() -> None:
    editor = make_editor(["ab", "cd"])
    editor.view.cx = 2

    editor.handle_key(key(Key.DELETE))

    assert editor.document.lines() == ["abcd"]
    assert (editor.view.cx, editor.view.cy) == (2, 0)


def test_delete_at_end_of_document_does_nothing() -> None:
    editor = make_editor(["ab", "cd"])
    editor.view.cx, editor.view.cy = 2, 1

    editor.handle_key(key(Key.DELETE))

    assert editor.document.lines() == ["ab", "cd"]
    assert editor.document.dirty is False


def test_navigation_keys() -> None:
    editor = make_editor(["first line", "x"])

    editor.handle_key(key(Key.END))
    assert editor.view.cx == 10

    editor.handle_key(key(Key.ARROW_DOWN))
    assert (editor.view.cx, editor.view.cy) == (1, 1)

    editor.handle_key(key(Key.HOME))
    editor.handle_key(key(Key.ARROW_LEFT))
    assert (editor.view.cx, editor.view.cy) == (10, 0)


def test_quit_clean_document() -> None:
    editor = make_editor(["saved"])

    assert editor.handle_key(ctrl("q")) is False


def test_quit_dirty_document_needs_confirmation() -> None:
    editor = make_editor()
    type_text(editor, "x")

    assert editor.handle_key(ctrl("q")) is True
    assert "Press Ctrl-Q 2 more times" in editor.current_message().text
    assert editor.current_message().kind is MessageKind.WARNING

    assert editor.handle_key(ctrl("q")) is True
    assert "Press Ctrl-Q 1 more times" in editor.current_message().text

    assert editor.handle_key(ctrl("q")) is False


def test_other_key_resets_quit_confirmation() -> None:
    editor = make_editor()
    type_text(editor, "x")

    editor.handle_key(ctrl("q"))
    editor.handle_key(ctrl("q"))
    editor.handle_key(key(Key.ARROW_LEFT))

    assert editor.handle_key(ctrl("q")) is True
    assert "Press Ctrl-Q 2 more times" in editor.current_message().text


def test_message_expires() -> None:
    editor = make_editor(["text"])

    editor.set_status_message("hello")
    assert editor.refresh().message == "hello"

    editor.clock.now += 6
    assert editor.refresh().message == HELP_MESSAGE[:40]


def test_save_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "main.c"
    editor = make_editor(["int x;"], filename=str(path))
    editor.document.dirty = True

    editor.handle_key(ctrl("s"))

    assert path.read_bytes() == b"int x;\n"
    assert editor.document.dirty is False
    assert editor.current_message().text == "7 bytes written to disk"


def test_save_as_prompt(tmp_path: Path) -> None:
    editor = make_editor(config=EditorConfig(save_directory=str(tmp_path)))
    type_text(editor, "hello")

    editor.handle_key(ctrl("s"))
    assert editor.prompt is not None
    assert editor.prompt.purpose is PromptPurpose.SAVE_AS

    type_text(editor, "notes.mdx")
    editor.handle_key(key(Key.BACKSPACE))
    editor.handle_key(key(Key.ENTER))

    assert editor.prompt is None
    assert (tmp_path / "notes.md").read_bytes() == b"hello\n"
    assert editor.document.filename == "notes.md"
    assert isinstance(editor.highlighter, MarkupHighlighter)


def test_default_filename_asks_for_a_name() -> None:
    editor = make_editor(["x"], filename="untitled.c")

    editor.handle_key(ctrl("s"))

    assert editor.prompt.purpose is PromptPurpose.SAVE_AS
    assert editor.current_message().text == "Save As:  (ESC to cancel)"


def test_save_as_escape_aborts() -> None:
    editor = make_editor(["x"])

    editor.handle_key(ctrl("s"))
    type_text(editor, "name")
    editor.handle_key(key(Key.ESCAPE))

    assert editor.prompt is None
    assert editor.document.filename is None
    assert editor.current_message().text == "Save aborted."


def test_enter_on_empty_prompt_keeps_prompting() -> None:
    editor = make_editor(["x"])

    editor.handle_key(ctrl("s"))
    editor.handle_key(key(Key.ENTER))

    assert editor.prompt is not None


def test_save_failure_reports_error(tmp_path: Path) -> None:
    editor = make_editor(["x"], filename=str(tmp_path / "missing" / "x.c"))
    editor.document.dirty = True

    assert editor.write() is False

    message = editor.current_message()
    assert message.text.startswith("Can't save! I/O error:")
    assert message.kind is MessageKind.ERROR
    assert editor.document.dirty is True


def test_open_file(tmp_path: Path) -> None:
    path = tmp_path / "prog.c"
    path.write_bytes(b"int main(void) {\r\n    return 0;\r\n}\n")
    editor = make_editor(["old"])
    editor.view.cy = 1

    editor.handle_key(ctrl("o"))
    type_text(editor, str(path))
    editor.handle_key(key(Key.ENTER))

    assert editor.document.lines() == ["int main(void) {", "    return 0;", "}"]
    assert editor.document.filename == str(path)
    assert editor.document.dirty is False
    assert (editor.view.cx, editor.view.cy) == (0, 0)
    assert isinstance(editor.highlighter, CSyntaxHighlighter)


def test_open_missing_file_starts_new_document(tmp_path: Path) -> None:
    editor = make_editor(["old"])
    name = str(tmp_path / "new.c")

    assert editor.open_file(name) is True

    assert editor.document.numrows == 0
    assert editor.document.filename == name
    assert editor.current_message().text == f"New file: {name}"


def test_open_truncates_long_lines(tmp_path: Path) -> None:
    path = tmp_path / "wide.txt"
    path.write_bytes(b"x" * 30 + b"\nshort\n")
    editor = make_editor(config=EditorConfig(max_line_length=10))

    editor.open_file(str(path))

    assert editor.document.lines() == ["x" * 10, "short"]
    assert editor.current_message().text == TRUNCATED_MESSAGE
    assert editor.current_message().kind is MessageKind.WARNING


def test_open_refused_with_unsaved_changes() -> None:
    editor = make_editor()
    type_text(editor, "x")

    editor.handle_key(ctrl("o"))

    assert editor.prompt is None
    assert editor.current_message().text == UNSAVED_OPEN_MESSAGE


def test_open_escape_aborts() -> None:
    editor = make_editor(["x"])

    editor.handle_key(ctrl("o"))
    editor.handle_key(key(Key.ESCAPE))

    assert editor.current_message().text == "Open aborted."


def test_incremental_find_and_confirm() -> None:
    editor = make_editor(["alpha", "a comment here", "beta"])

    editor.handle_key(ctrl("f"))
    type_text(editor, "com")

    assert (editor.view.cy, editor.view.cx) == (1, 2)
    assert editor.current_message().text.startswith("Search: com")

    editor.handle_key(key(Key.ENTER))

    assert editor.prompt is None
    assert editor.search is None
    assert (editor.view.cy, editor.view.cx) == (1, 2)


def test_find_escape_restores_cursor() -> None:
    editor = make_editor(["alpha", "a comment here", "beta"])
    editor.view.cx = 3

    editor.handle_key(ctrl("f"))
    type_text(editor, "beta")
    assert editor.view.cy == 2

    editor.handle_key(key(Key.ESCAPE))

    assert (editor.view.cy, editor.view.cx) == (0, 3)
    assert editor.search is None


def test_find_arrows_step_between_matches() -> None:
    editor = make_editor(["ab", "xx", "ab"])

    editor.handle_key(ctrl("f"))
    type_text(editor, "ab")
    assert editor.view.cy == 0

    editor.handle_key(key(Key.ARROW_DOWN))
    assert editor.view.cy == 2

    editor.handle_key(key(Key.ARROW_UP))
    assert editor.view.cy == 0


def test_find_does_not_edit_document() -> None:
    editor = make_editor(["abc"])

    editor.handle_key(ctrl("f"))
    type_text(editor, "b")
    editor.handle_key(key(Key.BACKSPACE))
    editor.handle_key(key(Key.ESCAPE))

    assert editor.document.lines() == ["abc"]
    assert editor.document.dirty is False


def test_match_brace() -> None:
    editor = make_editor(["int f() {", "    return 0;", "}"])
    editor.view.cx = 8

    editor.handle_key(ctrl("]"))
    assert (editor.view.cy, editor.view.cx) == (2, 0)

    editor.handle_key(ctrl("]"))
    assert (editor.view.cy, editor.view.cx) == (0, 8)


def test_match_brace_without_partner() -> None:
    editor = make_editor(["{ {", "}"])

    editor.handle_key(ctrl("]"))

    assert (editor.view.cy, editor.view.cx) == (0, 0)
    assert editor.current_message().text == NO_BRACE_MESSAGE


def test_match_brace_off_brace_does_nothing() -> None:
    editor = make_editor(["x {}"])

    editor.handle_key(ctrl("]"))

    assert (editor.view.cy, editor.view.cx) == (0, 0)
    assert editor.message is None


def test_layout_toggle_and_preview_is_read_only() -> None:
    editor = make_editor(["# Title", "text"])

    editor.handle_key(ctrl("p"))
    assert editor.layout is Layout.SPLIT
    assert editor.view.screencols == 20

    editor.handle_key(ctrl("p"))
    assert editor.layout is Layout.PREVIEW
    assert editor.current_message().text == "Preview mode"

    type_text(editor, "zz")
    editor.handle_key(key(Key.ENTER))
    editor.handle_key(ctrl("f"))
    assert editor.document.lines() == ["# Title", "text"]
    assert editor.prompt is None

    editor.handle_key(key(Key.ARROW_DOWN))
    assert editor.view.cy == 1

    editor.handle_key(ctrl("p"))
    assert editor.layout is Layout.EDIT
    assert editor.view.screencols == 40


def test_refresh_scrolls_cursor_into_view() -> None:
    editor = make_editor([str(i) for i in range(30)])
    editor.view.cy = 20

    frame = editor.refresh()

    assert editor.view.rowoff == 20 - 8 + 1
    assert frame.cursor == (7, 0)
    assert len(frame.rows) == 8
    assert frame.row_text(7) == "20"


def test_empty_document_given_to_editor_is_kept() -> None:
    doc = Document(filename="notes.md", max_line_length=50)

    editor = Editor(document=doc)

    assert editor.document is doc
    assert editor.document.max_line_length == 50
    assert isinstance(editor.highlighter, MarkupHighlighter)


def test_empty_named_document_keeps_name_on_save(tmp_path: Path) -> None:
    path = tmp_path / "empty.c"
    editor = make_editor([], filename=str(path))

    editor.handle_key(ctrl("s"))

    assert editor.prompt is None
    assert path.read_bytes() == b""
