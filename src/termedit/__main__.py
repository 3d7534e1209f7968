"""
Command line entry point for termedit.
"""

import argparse
import curses
import logging
import os
import sys
from typing import List, Optional

from .config import load_config
from .core.editor import Editor
from .log import setup_logging
from .ui.input_handler import InputHandler
from .ui.window import FrameWindow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="termedit - Terminal text editor with syntax highlighting and live markup preview"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=str,
        help="File to open"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a JSON settings file"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Write a debug log to this file"
    )
    return parser.parse_args(argv)


def run(stdscr: 'curses.window', editor: Editor) -> None:
    """Process key events until the editor asks to quit."""

    curses.curs_set(1)
    window = FrameWindow(stdscr)
    input_handler = InputHandler(stdscr)

    while True:
        height, width = stdscr.getmaxyx()
        editor.set_screen_size(height, width)
        window.draw(editor.refresh())

        event = input_handler.read_key()
        if event is None:
            continue

        if not editor.handle_key(event):
            break


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = parse_args(argv)
    setup_logging(args.log_file, logging.DEBUG)

    editor = Editor(load_config(args.config))
    if args.file:
        editor.open_file(args.file)

    os.environ.setdefault("ESCDELAY", "25")

    try:
        curses.wrapper(run, editor)
    except MemoryError:
        logger.critical("Out of memory", exc_info=True)
        print("termedit: out of memory", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
