"""Core path model and error handling.

This module exports the path value types, the error model and the
bitmask option types.
"""

from pathkit.core.errors import (
    ErrorCode,
    ErrorKind,
    Failure,
    FilesystemError,
    Outcome,
    report,
    resolve,
)
from pathkit.core.flags import CopyOptions, Perms, SymlinkOption
from pathkit.core.path import BaseFsPath, FsPath, PathLike, PosixFsPath, WindowsFsPath

__all__ = [
    "BaseFsPath",
    "CopyOptions",
    "ErrorCode",
    "ErrorKind",
    "Failure",
    "FilesystemError",
    "FsPath",
    "Outcome",
    "PathLike",
    "Perms",
    "PosixFsPath",
    "SymlinkOption",
    "WindowsFsPath",
    "report",
    "resolve",
]
