"""
Utility package for search and file access.
"""

from .fileio import read_file, write_file
from .search import SearchController, SearchResult

__all__ = [
    'read_file',
    'write_file',
    'SearchController',
    'SearchResult'
]
