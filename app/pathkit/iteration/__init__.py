"""Directory iteration engines.

This module exports the flat and recursive directory iterators.
"""

from pathkit.iteration.cursor import EntryCursor, iterate_entries
from pathkit.iteration.directory import DirectoryIterator
from pathkit.iteration.recursive import RecursiveDirectoryIterator

__all__ = ["DirectoryIterator", "EntryCursor", "RecursiveDirectoryIterator", "iterate_entries"]
