"""Unit tests for the cursor-to-iterator adapter."""

from pathkit.core.errors import ErrorCode
from pathkit.iteration.cursor import EntryCursor, iterate_entries
from pathkit.models.entry import DirectoryEntry


class ListCursor:
    """Cursor over a fixed list of names that records each step."""

    def __init__(self, names: list[str]) -> None:
        self._entries = [DirectoryEntry(name) for name in names]
        self._index = 0
        self.steps = 0

    @property
    def entry(self) -> DirectoryEntry:
        return self._entries[self._index]

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._entries)

    def increment(self, ec: ErrorCode | None = None) -> "ListCursor":
        self._index += 1
        self.steps += 1
        return self


class TestIterateEntries:
    """Tests for iterate_entries."""

    def test_yields_every_entry(self) -> None:
        """Each position is yielded once, in order."""
        cursor = ListCursor(["a", "b", "c"])
        assert [str(entry) for entry in iterate_entries(cursor)] == ["a", "b", "c"]

    def test_yields_before_advancing(self) -> None:
        """The cursor still points at the yielded entry inside the loop body."""
        cursor = ListCursor(["a", "b"])
        for entry in iterate_entries(cursor):
            assert cursor.entry is entry

    def test_stopping_early_does_not_advance(self) -> None:
        """Breaking out leaves the cursor on the last yielded entry."""
        cursor = ListCursor(["a", "b", "c"])
        for entry in iterate_entries(cursor):
            if str(entry) == "b":
                break
        assert str(cursor.entry) == "b"
        assert cursor.steps == 1

    def test_protocol_is_structural(self) -> None:
        """Any object with entry, at_end and increment is an EntryCursor."""
        cursor: EntryCursor = ListCursor([])
        assert list(iterate_entries(cursor)) == []
