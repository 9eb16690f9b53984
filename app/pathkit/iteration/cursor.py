"""The capability shared by flat and recursive directory iterators."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from pathkit.core.errors import ErrorCode
from pathkit.models.entry import DirectoryEntry


class EntryCursor(Protocol):
    """A single-pass cursor over directory entries.

    ``entry`` is the current position, ``at_end`` says whether there is
    one, and ``increment`` moves forward (raising, or reporting into
    ``ec``, when the step fails).
    """

    @property
    def entry(self) -> DirectoryEntry: ...

    @property
    def at_end(self) -> bool: ...

    def increment(self, ec: ErrorCode | None = None) -> EntryCursor: ...


def iterate_entries(cursor: EntryCursor) -> Iterator[DirectoryEntry]:
    """Adapt a cursor to the Python iteration protocol.

    The current entry is yielded before the cursor advances, so a consumer
    may adjust the cursor (for example ``disable_recursion_pending()``)
    between receiving an entry and the next step. If a step raises, the
    cursor has already moved on; iterating the cursor again resumes there.
    """
    while not cursor.at_end:
        yield cursor.entry
        cursor.increment()
