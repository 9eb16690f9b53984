"""Recursive directory iteration.

A stack of flat :class:`DirectoryIterator` objects, innermost on top.
Each step first tries to descend into the current entry, then advances
and unwinds exhausted levels. A step always leaves the iterator on a
valid next entry or at end, even when it reports an error, so a
consumer that keeps going after a failure never loops.

Directory symlinks are not followed unless ``SymlinkOption.RECURSE`` is
given, which makes traversal of link cycles terminate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pathkit.core.errors import ErrorCode, Failure, report
from pathkit.core.flags import SymlinkOption
from pathkit.core.path import PathLike
from pathkit.iteration.cursor import iterate_entries
from pathkit.iteration.directory import DirectoryIterator
from pathkit.models.entry import DirectoryEntry
from pathkit.models.status import FileStatus, FileType
from pathkit.platform.base import Platform

logger = logging.getLogger(__name__)


class _RecursiveState:
    __slots__ = ("stack", "options", "skip_push", "platform")

    def __init__(self, root: DirectoryIterator, options: SymlinkOption, platform: Platform | None) -> None:
        self.stack: list[DirectoryIterator] = [root]
        self.options = options
        self.skip_push = False
        self.platform = platform

    @property
    def level(self) -> int:
        return len(self.stack) - 1

    def push_directory(self) -> tuple[bool, Failure | None]:
        """Descend into the current entry when it is an eligible directory.

        Returns:
            ``(pushed, failure)``. A failure means the entry could not be
            examined or opened; nothing was pushed.
        """
        if self.skip_push:
            self.skip_push = False
            return False, None

        entry = self.stack[-1].entry
        probe = ErrorCode()
        if not self.options & SymlinkOption.RECURSE:
            link_type = entry.symlink_file_type(probe)
            if probe:
                return False, probe.failure
            if link_type == FileType.SYMLINK:
                return False, None

        if entry.file_type(probe) != FileType.DIRECTORY:
            return False, probe.failure

        child = DirectoryIterator(entry.path, probe, platform=self.platform)
        if probe:
            return False, probe.failure
        if child.at_end:
            return False, None
        self.stack.append(child)
        logger.debug("Descending into %s (level %d)", entry.path, self.level)
        return True, None

    def unwind(self) -> Failure | None:
        """Advance the top and pop while it is exhausted.

        A read failure ends that level (the flat iterator is at end) and
        unwinding continues; the first failure is returned.
        """
        failure: Failure | None = None
        probe = ErrorCode()
        while self.stack:
            top = self.stack[-1]
            if not top.at_end:
                top.increment(probe)
                if probe and failure is None:
                    failure = probe.failure
                if not top.at_end:
                    break
            self.stack.pop()
        return failure

    def close(self) -> None:
        for iterator in self.stack:
            iterator.close()
        self.stack.clear()


class RecursiveDirectoryIterator:
    """Depth-first iterator over a directory tree.

    Args:
        path: Root directory. None builds the end iterator.
        options: ``SymlinkOption.RECURSE`` to descend into directory symlinks.
        ec: Out-parameter for the reporting form.
        platform: Platform to use instead of the active one.

    Raises:
        FilesystemError: If the root cannot be opened and ``ec`` is None.

    Example:
        >>> it = RecursiveDirectoryIterator("/srv/data")
        >>> for entry in it:
        ...     if entry.path.filename().native() == ".git":
        ...         it.disable_recursion_pending()
    """

    __slots__ = ("_state",)

    def __init__(
        self,
        path: PathLike | None = None,
        options: SymlinkOption = SymlinkOption.NONE,
        ec: ErrorCode | None = None,
        *,
        platform: Platform | None = None,
    ) -> None:
        self._state: _RecursiveState | None = None
        if path is None:
            return
        root = DirectoryIterator(path, ec, platform=platform)
        if not root.at_end:
            self._state = _RecursiveState(root, options, platform)

    @property
    def at_end(self) -> bool:
        return self._state is None or not self._state.stack

    def _require_state(self, action: str) -> _RecursiveState:
        if self.at_end:
            msg = f"Cannot {action} an end recursive directory iterator"
            raise ValueError(msg)
        assert self._state is not None
        return self._state

    @property
    def entry(self) -> DirectoryEntry:
        return self._require_state("dereference").stack[-1].entry

    @property
    def options(self) -> SymlinkOption:
        return self._state.options if self._state is not None else SymlinkOption.NONE

    def depth(self) -> int:
        """Nesting level of the current entry; 0 for the root's own children."""
        return self._require_state("query depth of").level

    level = depth

    def recursion_pending(self) -> bool:
        """False once ``disable_recursion_pending`` was called for the current entry."""
        return not self._require_state("query").skip_push

    def disable_recursion_pending(self) -> None:
        """Do not descend into the current entry on the next increment."""
        self._require_state("modify").skip_push = True

    def status(self, ec: ErrorCode | None = None) -> FileStatus:
        """Status of the current entry, following symlinks."""
        return self.entry.status(ec)

    def symlink_status(self, ec: ErrorCode | None = None) -> FileStatus:
        return self.entry.symlink_status(ec)

    def increment(self, ec: ErrorCode | None = None) -> RecursiveDirectoryIterator:
        """Move to the next entry in depth-first order.

        If descending into the current entry fails, the iterator still
        advances past it and the failure is reported from this same call.

        Raises:
            ValueError: If the iterator is at end.
            FilesystemError: If a step failed and ``ec`` is None. The
                iterator has already advanced.
        """
        state = self._require_state("increment")
        current = state.stack[-1].entry.path
        pushed, push_failure = state.push_directory()
        if pushed:
            if ec is not None:
                ec.clear()
            return self

        read_failure = state.unwind()
        if push_failure is not None:
            logger.info("Skipped directory %s: %s", current, push_failure.message())
        report(push_failure or read_failure, ec)
        return self

    def pop(self, ec: ErrorCode | None = None) -> RecursiveDirectoryIterator:
        """Leave the current directory and move to the next entry of its parent.

        Popping at depth 0 ends the traversal.

        Raises:
            ValueError: If the iterator is at end.
            FilesystemError: If advancing the parent fails and ``ec`` is None.
        """
        state = self._require_state("pop")
        state.stack.pop().close()
        state.skip_push = False
        report(state.unwind(), ec)
        return self

    def close(self) -> None:
        """Release every open handle; the iterator becomes end."""
        if self._state is not None:
            self._state.close()

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return iterate_entries(self)

    def __enter__(self) -> RecursiveDirectoryIterator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __copy__(self) -> RecursiveDirectoryIterator:
        clone = RecursiveDirectoryIterator()
        clone._state = self._state
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecursiveDirectoryIterator):
            return NotImplemented
        if self.at_end or other.at_end:
            return self.at_end and other.at_end
        return self._state is other._state

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.at_end:
            return "RecursiveDirectoryIterator(<end>)"
        return f"RecursiveDirectoryIterator(at={self.entry.path.native()!r}, depth={self.depth()})"
