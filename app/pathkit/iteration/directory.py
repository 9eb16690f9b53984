"""Flat directory iteration.

A :class:`DirectoryIterator` is a handle on a shared traversal state.
Copies alias that state: advancing one handle advances every copy, and
handles compare equal when they share the state. Every end iterator
equals every other end iterator.

The native directory handle is released once, when the traversal is
exhausted, fails, is closed explicitly, or when the last handle is
garbage collected.
"""

from __future__ import annotations

import errno
import logging
import weakref
from collections.abc import Iterator

from pathkit.core.errors import ErrorCode, Failure, report
from pathkit.core.flags import Perms
from pathkit.core.grammar import DOT, DOT_DOT
from pathkit.core.path import BaseFsPath, FsPath, PathLike
from pathkit.iteration.cursor import iterate_entries
from pathkit.models.entry import DirectoryEntry
from pathkit.models.status import FileStatus, FileType
from pathkit.platform import get_platform
from pathkit.platform.base import DirectoryHandle, Platform

logger = logging.getLogger(__name__)


def _release(platform: Platform, handle: DirectoryHandle) -> None:
    outcome = platform.close_directory(handle)
    if not outcome.ok and outcome.failure is not None:
        logger.warning("Failed to close directory: %s", outcome.failure.message())


class _DirectoryState:
    """Shared cursor: one open native handle and the current entry."""

    __slots__ = ("platform", "handle", "directory", "entry", "_finalizer", "__weakref__")

    def __init__(self, platform: Platform, handle: DirectoryHandle, directory: BaseFsPath) -> None:
        self.platform = platform
        self.handle = handle
        self.directory = directory
        self.entry = DirectoryEntry(directory, platform=platform)
        self._finalizer = weakref.finalize(self, _release, platform, handle)

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def close(self) -> None:
        self._finalizer()

    def advance(self, ec: ErrorCode | None) -> None:
        """Move to the next real entry, skipping ``.`` and ``..``.

        Exhaustion or a read failure closes the state.
        """
        while True:
            outcome = self.platform.read_directory(self.handle)
            if not outcome.ok:
                self.close()
                report(outcome.failure, ec)
                return
            native = outcome.value
            if native is None:
                self.close()
                if ec is not None:
                    ec.clear()
                return
            if native.name in (DOT, DOT_DOT):
                continue
            symlink_status = FileStatus()
            if native.type_hint != FileType.NONE:
                symlink_status = FileStatus(native.type_hint, Perms.UNKNOWN)
            self.entry = DirectoryEntry(
                self.directory / native.name,
                symlink_status=symlink_status,
                platform=self.platform,
            )
            if ec is not None:
                ec.clear()
            return


class DirectoryIterator:
    """Single-pass iterator over the entries of one directory.

    Args:
        path: Directory to list. None builds the end iterator.
        ec: Out-parameter for the reporting form; a failed open leaves the
            iterator at end.
        platform: Platform to use instead of the active one.

    Raises:
        FilesystemError: If the directory cannot be opened or read and
            ``ec`` is None.

    Example:
        >>> for entry in DirectoryIterator("/etc"):
        ...     print(entry.path.filename())
    """

    __slots__ = ("_state",)

    def __init__(
        self,
        path: PathLike | None = None,
        ec: ErrorCode | None = None,
        *,
        platform: Platform | None = None,
    ) -> None:
        self._state: _DirectoryState | None = None
        if path is None:
            return
        platform = platform or get_platform()
        directory = path.copy() if isinstance(path, BaseFsPath) else FsPath(path)
        if directory.empty():
            report(Failure.from_errno(errno.ENOENT, "directory_iterator::construct", directory), ec)
            return
        outcome = platform.open_directory(directory)
        if not outcome.ok or outcome.value is None:
            report(outcome.failure, ec)
            return
        self._state = _DirectoryState(platform, outcome.value, directory)
        self._state.advance(ec)

    @property
    def at_end(self) -> bool:
        return self._state is None or self._state.closed

    @property
    def entry(self) -> DirectoryEntry:
        """The current entry.

        Raises:
            ValueError: If the iterator is at end.
        """
        if self.at_end:
            msg = "Cannot dereference an end directory iterator"
            raise ValueError(msg)
        assert self._state is not None
        return self._state.entry

    def increment(self, ec: ErrorCode | None = None) -> DirectoryIterator:
        """Advance to the next entry, or to end when the directory is exhausted.

        Raises:
            ValueError: If the iterator is already at end.
            FilesystemError: If reading fails and ``ec`` is None. The
                iterator is at end afterwards either way.
        """
        if self.at_end:
            msg = "Cannot increment an end directory iterator"
            raise ValueError(msg)
        assert self._state is not None
        self._state.advance(ec)
        return self

    def close(self) -> None:
        """Release the native handle now; every alias becomes end."""
        if self._state is not None:
            self._state.close()

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return iterate_entries(self)

    def __enter__(self) -> DirectoryIterator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __copy__(self) -> DirectoryIterator:
        clone = DirectoryIterator()
        clone._state = self._state
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectoryIterator):
            return NotImplemented
        if self.at_end or other.at_end:
            return self.at_end and other.at_end
        return self._state is other._state

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.at_end:
            return "DirectoryIterator(<end>)"
        return f"DirectoryIterator(at={self.entry.path.native()!r})"
