"""Data models for pathkit.

This module exports the file status and directory entry value types.
"""

from pathkit.models.entry import DirectoryEntry
from pathkit.models.status import (
    NOT_FOUND_STATUS,
    UNKNOWN_SPACE,
    FileStatus,
    FileType,
    SpaceInfo,
)

__all__ = [
    "NOT_FOUND_STATUS",
    "UNKNOWN_SPACE",
    "DirectoryEntry",
    "FileStatus",
    "FileType",
    "SpaceInfo",
]
