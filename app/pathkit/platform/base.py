"""Abstract platform collaborator.

The core never calls the operating system directly. Every query or
mutation goes through a :class:`Platform`, whose methods each perform
one bounded unit of work and return an :class:`~pathkit.core.errors.Outcome`
instead of raising. :mod:`pathkit.operations` turns those outcomes into
the raising and reporting call shapes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pathkit.core.errors import Outcome
from pathkit.core.flags import Perms
from pathkit.core.path import BaseFsPath
from pathkit.models.status import FileStatus, FileType, SpaceInfo


@dataclass(frozen=True, slots=True)
class NativeEntry:
    """One raw entry read from an open directory.

    Attributes:
        name: Entry name relative to the directory (no separators).
        type_hint: Type reported by the directory listing without a stat
            call (``FileType.NONE`` when the listing does not say).
    """

    name: str
    type_hint: FileType = FileType.NONE


class DirectoryHandle(ABC):
    """Opaque handle on an open directory.

    Handles are closed through :meth:`Platform.close_directory`; closing
    twice is harmless.
    """

    @property
    @abstractmethod
    def closed(self) -> bool:
        """Return True once the handle has been released."""


class Platform(ABC):
    """Narrow interface to the operating system.

    Implementations must not raise for OS failures; they return
    ``Outcome.error(...)`` carrying the operation name and paths.

    Example:
        >>> platform = NativePlatform()
        >>> outcome = platform.status(FsPath("/tmp"))
        >>> outcome.ok and outcome.value.is_directory()
        True
    """

    # ----- status -----

    @abstractmethod
    def status(self, path: BaseFsPath) -> Outcome[FileStatus]:
        """Status following symlinks. A missing path is a successful NOT_FOUND."""

    @abstractmethod
    def symlink_status(self, path: BaseFsPath) -> Outcome[FileStatus]:
        """Status of the path itself, not following a final symlink."""

    @abstractmethod
    def file_identity(self, path: BaseFsPath) -> Outcome[tuple[int, int]]:
        """Return ``(device, inode)`` identifying the object ``path`` resolves to."""

    @abstractmethod
    def file_size(self, path: BaseFsPath) -> Outcome[int]:
        """Size in bytes of a regular file."""

    @abstractmethod
    def hard_link_count(self, path: BaseFsPath) -> Outcome[int]:
        """Number of hard links to the object."""

    @abstractmethod
    def last_write_time(self, path: BaseFsPath) -> Outcome[float]:
        """Modification time as seconds since the epoch."""

    @abstractmethod
    def space(self, path: BaseFsPath) -> Outcome[SpaceInfo]:
        """Capacity and free space of the containing file system."""

    # ----- directory listing -----

    @abstractmethod
    def open_directory(self, path: BaseFsPath) -> Outcome[DirectoryHandle]:
        """Open ``path`` for iteration."""

    @abstractmethod
    def read_directory(self, handle: DirectoryHandle) -> Outcome[NativeEntry | None]:
        """Read the next entry; a None value signals exhaustion."""

    @abstractmethod
    def close_directory(self, handle: DirectoryHandle) -> Outcome[None]:
        """Release the handle. Must be idempotent."""

    # ----- mutation -----

    @abstractmethod
    def create_directory(self, path: BaseFsPath) -> Outcome[None]:
        """Create one directory; its parent must exist."""

    @abstractmethod
    def remove(self, path: BaseFsPath) -> Outcome[None]:
        """Remove a file, symlink or empty directory."""

    @abstractmethod
    def rename(self, old: BaseFsPath, new: BaseFsPath) -> Outcome[None]:
        """Rename ``old`` to ``new``, replacing ``new`` if it is a file."""

    @abstractmethod
    def copy_file(self, source: BaseFsPath, target: BaseFsPath) -> Outcome[None]:
        """Copy file contents and permission bits, overwriting ``target``."""

    @abstractmethod
    def create_symlink(self, target: BaseFsPath, link: BaseFsPath, *, directory: bool = False) -> Outcome[None]:
        """Create ``link`` pointing at ``target``."""

    @abstractmethod
    def create_hard_link(self, target: BaseFsPath, link: BaseFsPath) -> Outcome[None]:
        """Create ``link`` as a new name for ``target``."""

    @abstractmethod
    def read_symlink(self, path: BaseFsPath) -> Outcome[str]:
        """Return the stored target of a symlink."""

    @abstractmethod
    def set_permissions(self, path: BaseFsPath, perms: Perms, *, follow_symlinks: bool = True) -> Outcome[None]:
        """Replace the permission bits of ``path``."""

    @abstractmethod
    def set_last_write_time(self, path: BaseFsPath, when: float) -> Outcome[None]:
        """Set the modification time (seconds since the epoch)."""

    @abstractmethod
    def resize_file(self, path: BaseFsPath, size: int) -> Outcome[None]:
        """Truncate or extend a regular file."""

    # ----- process state -----

    @abstractmethod
    def current_path(self) -> Outcome[str]:
        """Current working directory."""

    @abstractmethod
    def set_current_path(self, path: BaseFsPath) -> Outcome[None]:
        """Change the current working directory."""

    @abstractmethod
    def canonical(self, path: BaseFsPath) -> Outcome[str]:
        """Absolute path with every symlink, ``.`` and ``..`` resolved; must exist."""

    @abstractmethod
    def temp_directory_path(self) -> Outcome[str]:
        """Directory for temporary files."""
