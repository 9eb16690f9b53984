"""Directory entry: a path plus lazily cached status.

A :class:`DirectoryEntry` is what directory iteration yields. The type
reported by the directory listing primes the cache, so most callers can
ask ``entry.symlink_status()`` (and, for non-links, ``entry.status()``)
without another system call.

The status caches are filled lazily even though the accessors look like
plain queries. An entry is a cheap value owned by one thread at a time;
it is not safe to query one entry from several threads concurrently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathkit.core.errors import ErrorCode, resolve
from pathkit.core.path import BaseFsPath, FsPath, PathLike
from pathkit.models.status import FileStatus, FileType

if TYPE_CHECKING:
    from pathkit.platform.base import Platform

_UNQUERIED = FileStatus()


class DirectoryEntry:
    """A path with cached ``status`` and ``symlink_status``.

    A cache slot counts as filled only when its status is fully known
    (type and permissions). A failed query leaves the slot empty so the
    next call retries.

    Example:
        >>> entry = DirectoryEntry("/etc/hosts")
        >>> entry.status().is_regular_file()
        True
    """

    __slots__ = ("_path", "_status", "_symlink_status", "_platform")

    def __init__(
        self,
        path: PathLike | None = None,
        status: FileStatus = _UNQUERIED,
        symlink_status: FileStatus = _UNQUERIED,
        *,
        platform: Platform | None = None,
    ) -> None:
        self._path: BaseFsPath = path.copy() if isinstance(path, BaseFsPath) else FsPath(path)
        self._status = status
        self._symlink_status = symlink_status
        self._platform = platform

    # ----- modifiers -----

    def assign(
        self,
        path: PathLike,
        status: FileStatus = _UNQUERIED,
        symlink_status: FileStatus = _UNQUERIED,
    ) -> None:
        """Replace the path and reset both caches to the given values."""
        self._path = path.copy() if isinstance(path, BaseFsPath) else FsPath(path)
        self._status = status
        self._symlink_status = symlink_status

    def replace_filename(
        self,
        name: PathLike,
        status: FileStatus = _UNQUERIED,
        symlink_status: FileStatus = _UNQUERIED,
    ) -> None:
        """Swap the last element of the path and reset both caches."""
        self._path.replace_filename(name)
        self._status = status
        self._symlink_status = symlink_status

    def refresh(self, ec: ErrorCode | None = None) -> None:
        """Discard cached statuses and query them again."""
        self._status = _UNQUERIED
        self._symlink_status = _UNQUERIED
        self.symlink_status(ec)
        if ec:
            return
        self.status(ec)

    # ----- observers -----

    @property
    def path(self) -> BaseFsPath:
        return self._path

    def _get_platform(self) -> Platform:
        if self._platform is None:
            from pathkit.platform import get_platform

            return get_platform()
        return self._platform

    def status(self, ec: ErrorCode | None = None) -> FileStatus:
        """Status following symlinks, queried at most once while known.

        When the symlink status is known and is not a link, the two are the
        same and no query is made.

        Raises:
            FilesystemError: If the query fails and ``ec`` is None.
        """
        if self._status.status_known():
            if ec is not None:
                ec.clear()
            return self._status
        if self._symlink_status.status_known() and not self._symlink_status.is_symlink():
            self._status = self._symlink_status
            if ec is not None:
                ec.clear()
            return self._status
        self._status = resolve(self._get_platform().status(self._path), ec, _UNQUERIED)
        return self._status

    def symlink_status(self, ec: ErrorCode | None = None) -> FileStatus:
        """Status of the entry itself, not following a final symlink."""
        if self._symlink_status.status_known():
            if ec is not None:
                ec.clear()
            return self._symlink_status
        self._symlink_status = resolve(self._get_platform().symlink_status(self._path), ec, _UNQUERIED)
        return self._symlink_status

    def file_type(self, ec: ErrorCode | None = None) -> FileType:
        """Type following symlinks; a type-only cache hit avoids the query."""
        known = self._status
        if not known.type_present() and not self._symlink_status.is_symlink():
            known = self._symlink_status
        if known.type_present():
            if ec is not None:
                ec.clear()
            return known.type
        return self.status(ec).type

    def symlink_file_type(self, ec: ErrorCode | None = None) -> FileType:
        """Type of the entry itself; the listing's type tag usually answers this."""
        if self._symlink_status.type_present():
            if ec is not None:
                ec.clear()
            return self._symlink_status.type
        return self.symlink_status(ec).type

    def cached_status(self) -> FileStatus:
        """Return the cached status without querying."""
        return self._status

    def cached_symlink_status(self) -> FileStatus:
        return self._symlink_status

    def exists(self, ec: ErrorCode | None = None) -> bool:
        return self.status(ec).exists()

    def is_directory(self, ec: ErrorCode | None = None) -> bool:
        return self.status(ec).is_directory()

    def is_regular_file(self, ec: ErrorCode | None = None) -> bool:
        return self.status(ec).is_regular_file()

    def is_symlink(self, ec: ErrorCode | None = None) -> bool:
        return self.symlink_status(ec).is_symlink()

    # ----- protocol -----

    def __fspath__(self) -> str:
        return self._path.native()

    def __str__(self) -> str:
        return self._path.native()

    def __repr__(self) -> str:
        return f"DirectoryEntry({self._path.native()!r})"

    def _key(self, other: object) -> BaseFsPath | None:
        if isinstance(other, DirectoryEntry):
            return other._path
        return None

    def __eq__(self, other: object) -> bool:
        key = self._key(other)
        if key is None:
            return NotImplemented
        return self._path == key

    def __lt__(self, other: DirectoryEntry) -> bool:
        return self._path < other._path

    def __le__(self, other: DirectoryEntry) -> bool:
        return self._path <= other._path

    def __gt__(self, other: DirectoryEntry) -> bool:
        return self._path > other._path

    def __ge__(self, other: DirectoryEntry) -> bool:
        return self._path >= other._path

    def __hash__(self) -> int:
        return hash(self._path)
