"""
termedit: a terminal text editor with syntax highlighting and a live
markup preview.
"""

__version__ = "1.0.0"
