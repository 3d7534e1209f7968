"""
UI package for the curses front end.

This package implements the FrameWindow that draws rendered frames and the
InputHandler that turns curses key codes into editor key events.
"""

from .window import FrameWindow
from .input_handler import InputHandler

__all__ = ['FrameWindow', 'InputHandler']
