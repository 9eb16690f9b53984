"""File status value types.

A :class:`FileStatus` pairs a :class:`FileType` with a :class:`Perms`
mask. The default status ``(NONE, UNKNOWN)`` means "not yet queried" (or
"query failed"); a path that does not exist reports ``(NOT_FOUND, NONE)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pathkit.core.flags import Perms


class FileType(str, Enum):
    """Type of a file-system object.

    Attributes:
        NONE: Status not determined yet, or the query failed.
        NOT_FOUND: The path does not exist.
        REGULAR: Regular file.
        DIRECTORY: Directory.
        SYMLINK: Symbolic link (only reported when not following links).
        BLOCK: Block device.
        CHARACTER: Character device.
        FIFO: Named pipe.
        SOCKET: Socket.
        UNKNOWN: Exists but the type cannot be determined.
    """

    NONE = "none"
    NOT_FOUND = "not_found"
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    BLOCK = "block"
    CHARACTER = "character"
    FIFO = "fifo"
    SOCKET = "socket"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class FileStatus:
    """Type and permissions of one file-system object.

    Attributes:
        type: Object type.
        permissions: Permission bits, ``Perms.UNKNOWN`` when not queried.
    """

    type: FileType = FileType.NONE
    permissions: Perms = Perms.UNKNOWN

    def type_present(self) -> bool:
        return self.type != FileType.NONE

    def permissions_present(self) -> bool:
        return self.permissions != Perms.UNKNOWN

    def status_known(self) -> bool:
        """True when both type and permissions have been determined."""
        return self.type_present() and self.permissions_present()

    def exists(self) -> bool:
        return self.type not in (FileType.NONE, FileType.NOT_FOUND)

    def is_regular_file(self) -> bool:
        return self.type == FileType.REGULAR

    def is_directory(self) -> bool:
        return self.type == FileType.DIRECTORY

    def is_symlink(self) -> bool:
        return self.type == FileType.SYMLINK

    def is_other(self) -> bool:
        """True for existing objects that are not files, directories or links."""
        return (
            self.exists()
            and not self.is_regular_file()
            and not self.is_directory()
            and not self.is_symlink()
        )


NOT_FOUND_STATUS = FileStatus(FileType.NOT_FOUND, Perms.NONE)


@dataclass(frozen=True, slots=True)
class SpaceInfo:
    """Space on the file system containing a path, in bytes.

    Attributes:
        capacity: Total size.
        free: Free space (``<= capacity``).
        available: Space available to an unprivileged process (``<= free``).
    """

    capacity: int
    free: int
    available: int


UNKNOWN_SPACE = SpaceInfo(capacity=-1, free=-1, available=-1)
