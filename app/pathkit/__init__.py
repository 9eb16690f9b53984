"""pathkit - path grammar and directory traversal.

Paths are values with a platform grammar (:class:`FsPath`); directory
trees are walked with :class:`DirectoryIterator` and
:class:`RecursiveDirectoryIterator`. Every operation that touches the
file system raises :class:`FilesystemError`, or reports into an
:class:`ErrorCode` passed as ``ec``.
"""

from pathkit.core import (
    BaseFsPath,
    CopyOptions,
    ErrorCode,
    ErrorKind,
    FilesystemError,
    FsPath,
    Perms,
    PosixFsPath,
    SymlinkOption,
    WindowsFsPath,
)
from pathkit.iteration import DirectoryIterator, RecursiveDirectoryIterator
from pathkit.models import DirectoryEntry, FileStatus, FileType, SpaceInfo

__version__ = "0.1.0"

__all__ = [
    "BaseFsPath",
    "CopyOptions",
    "DirectoryEntry",
    "DirectoryIterator",
    "ErrorCode",
    "ErrorKind",
    "FileStatus",
    "FileType",
    "FilesystemError",
    "FsPath",
    "Perms",
    "PosixFsPath",
    "RecursiveDirectoryIterator",
    "SpaceInfo",
    "SymlinkOption",
    "WindowsFsPath",
    "__version__",
]
