"""Lexical grammar of native path strings.

All functions here are stateless and work on string positions, so every
decomposition is one linear scan of the stored string. Two flavors are
provided:

- ``POSIX``: ``/`` is the only separator; ``//name`` is a network root-name.
- ``WINDOWS``: ``/`` and ``\\`` are separators (``\\`` preferred); a drive
  (``c:``) or ``\\\\server`` is a root-name.

A path decomposes into ``root-name``, ``root-directory`` and
``relative-path``. Iteration yields the root-name (if any), the
root-directory as ``/`` (if any), each filename, and an implicit ``.``
when the path ends in a non-root separator.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathkit.core.path import BaseFsPath

DOT = "."
DOT_DOT = ".."
GENERIC_SEPARATOR = "/"


@dataclass(frozen=True, slots=True)
class Grammar:
    """Separator and root-name rules for one path flavor.

    Attributes:
        name: Flavor name ("posix" or "windows").
        separators: Every character accepted as a directory separator.
        preferred_separator: Separator inserted by append operations.
        drive_letters: Whether ``x:`` introduces a root-name.
    """

    name: str
    separators: str
    preferred_separator: str
    drive_letters: bool

    def is_separator(self, char: str) -> bool:
        return char in self.separators

    def find_first_separator(self, text: str, start: int, end: int | None = None) -> int:
        """Index of the first separator in ``text[start:end]``, or -1."""
        stop = len(text) if end is None else end
        for index in range(start, stop):
            if text[index] in self.separators:
                return index
        return -1

    def find_last_separator(self, text: str, end: int) -> int:
        """Index of the last separator in ``text[:end]``, or -1."""
        for index in range(end - 1, -1, -1):
            if text[index] in self.separators:
                return index
        return -1

    def to_generic(self, text: str) -> str:
        """Return ``text`` with every separator replaced by ``/``."""
        if self.separators == GENERIC_SEPARATOR:
            return text
        for sep in self.separators:
            if sep != GENERIC_SEPARATOR:
                text = text.replace(sep, GENERIC_SEPARATOR)
        return text

    def to_preferred(self, text: str) -> str:
        """Return ``text`` with every separator replaced by the preferred one."""
        for sep in self.separators:
            if sep != self.preferred_separator:
                text = text.replace(sep, self.preferred_separator)
        return text


POSIX = Grammar(name="posix", separators="/", preferred_separator="/", drive_letters=False)
WINDOWS = Grammar(name="windows", separators="/\\", preferred_separator="\\", drive_letters=True)

_COLON = ":"


def _is_net_prefix(grammar: Grammar, text: str, size: int) -> bool:
    """True for ``//x...``: exactly two leading separators then a name."""
    return (
        size > 2
        and grammar.is_separator(text[0])
        and grammar.is_separator(text[1])
        and not grammar.is_separator(text[2])
    )


def is_root_separator(grammar: Grammar, text: str, pos: int) -> bool:
    """Return True if the separator at ``pos`` is the root-directory.

    ``pos`` may point anywhere inside a run of separators.
    """
    while pos > 0 and grammar.is_separator(text[pos - 1]):
        pos -= 1
    # "/" [...]
    if pos == 0:
        return True
    # "c:/" [...]
    if grammar.drive_letters and pos == 2 and text[1] == _COLON and text[0].isalpha():
        return True
    # "//" name "/"
    if pos < 3 or not grammar.is_separator(text[0]) or not grammar.is_separator(text[1]):
        return False
    return grammar.find_first_separator(text, 2) == pos


def filename_pos(grammar: Grammar, text: str, end: int) -> int:
    """Return the start of the last element of ``text[:end]``.

    Returns 0 when the whole prefix is a single filename (or empty). For a
    prefix ending in a separator, returns the position of that separator.
    """
    # "//"
    if end == 2 and grammar.is_separator(text[0]) and grammar.is_separator(text[1]):
        return 0
    # ends in a separator
    if end and grammar.is_separator(text[end - 1]):
        return end - 1
    pos = grammar.find_last_separator(text, end)
    if grammar.drive_letters and pos == -1 and end > 1:
        pos = text.rfind(_COLON, 0, end - 1)
    if pos == -1 or (pos == 1 and grammar.is_separator(text[0])):
        return 0
    return pos + 1


def root_directory_start(grammar: Grammar, text: str, size: int) -> int:
    """Return the position of the root-directory in ``text[:size]``, or -1."""
    # "c:/"
    if grammar.drive_letters and size > 2 and text[1] == _COLON and grammar.is_separator(text[2]):
        return 2
    # "//"
    if size == 2 and grammar.is_separator(text[0]) and grammar.is_separator(text[1]):
        return -1
    # "//net {/}"
    if size > 3 and _is_net_prefix(grammar, text, size):
        return grammar.find_first_separator(text, 2, size)
    # "/"
    if size > 0 and grammar.is_separator(text[0]):
        return 0
    return -1


def first_element(grammar: Grammar, text: str) -> tuple[int, int]:
    """Return ``(pos, size)`` of the first element, skipping extra separators."""
    size = len(text)
    if not size:
        return 0, 0
    element_pos = 0
    element_size = 0
    cur = 0
    if (
        size >= 2
        and grammar.is_separator(text[0])
        and grammar.is_separator(text[1])
        and (size == 2 or not grammar.is_separator(text[2]))
    ):
        # network name
        cur += 2
        element_size += 2
    elif grammar.is_separator(text[0]):
        # leading separator; report the last one of the run
        element_size += 1
        while cur + 1 < size and grammar.is_separator(text[cur + 1]):
            cur += 1
            element_pos += 1
        return element_pos, element_size

    while cur < size and not grammar.is_separator(text[cur]):
        if grammar.drive_letters and text[cur] == _COLON:
            break
        cur += 1
        element_size += 1
    if grammar.drive_letters and cur < size and text[cur] == _COLON:
        element_size += 1
    return element_pos, element_size


def _generic_element(grammar: Grammar, element: str) -> str:
    if element == grammar.preferred_separator:
        return GENERIC_SEPARATOR
    return element


def increment(grammar: Grammar, text: str, pos: int, element: str) -> tuple[int, str]:
    """Advance from the element at ``pos`` to the next one.

    Returns:
        ``(pos, element)`` of the next element; ``pos == len(text)`` and an
        empty element mark the end.
    """
    size = len(text)
    was_net = _is_net_prefix(grammar, element, len(element))
    pos += len(element)
    if pos == size:
        return pos, ""

    if grammar.is_separator(text[pos]):
        # root-directory after a root-name
        if was_net or (grammar.drive_letters and element.endswith(_COLON)):
            return pos, GENERIC_SEPARATOR

        while pos != size and grammar.is_separator(text[pos]):
            pos += 1

        # a trailing non-root separator is reported as "."
        if pos == size and not is_root_separator(grammar, text, pos - 1):
            return pos - 1, DOT

    end = grammar.find_first_separator(text, pos)
    if end == -1:
        end = size
    return pos, text[pos:end]


def decrement(grammar: Grammar, text: str, pos: int) -> tuple[int, str]:
    """Step back from ``pos`` (an element start or the end) to the previous element."""
    size = len(text)
    end_pos = pos

    # at the end with a trailing non-root separator: implicit "."
    if (
        pos == size
        and size > 1
        and grammar.is_separator(text[pos - 1])
        and not is_root_separator(grammar, text, pos - 1)
    ):
        return pos - 1, DOT

    root_dir_pos = root_directory_start(grammar, text, end_pos)
    while end_pos > 0 and (end_pos - 1) != root_dir_pos and grammar.is_separator(text[end_pos - 1]):
        end_pos -= 1

    start = filename_pos(grammar, text, end_pos)
    return start, _generic_element(grammar, text[start:end_pos])


def begin(grammar: Grammar, text: str) -> tuple[int, str]:
    """Return ``(pos, element)`` of the first element, or ``(len, "")`` when empty."""
    if not text:
        return 0, ""
    pos, size = first_element(grammar, text)
    return pos, _generic_element(grammar, text[pos : pos + size])


def elements(grammar: Grammar, text: str) -> Iterator[str]:
    """Yield the elements of ``text`` left to right."""
    pos, element = begin(grammar, text)
    size = len(text)
    while pos != size:
        yield element
        pos, element = increment(grammar, text, pos, element)


def parent_path_end(grammar: Grammar, text: str) -> int:
    """Return the end of the parent path, or -1 when there is none to strip."""
    size = len(text)
    end_pos = filename_pos(grammar, text, size)
    filename_was_separator = bool(size) and end_pos < size and grammar.is_separator(text[end_pos])

    # skip separators unless root directory
    root_dir_pos = root_directory_start(grammar, text, end_pos)
    while end_pos > 0 and (end_pos - 1) != root_dir_pos and grammar.is_separator(text[end_pos - 1]):
        end_pos -= 1

    if end_pos == 1 and root_dir_pos == 0 and filename_was_separator:
        return -1
    return end_pos


def _is_root_name(grammar: Grammar, element: str) -> bool:
    if len(element) > 1 and grammar.is_separator(element[0]) and grammar.is_separator(element[1]):
        return True
    return grammar.drive_letters and element.endswith(_COLON)


def root_name(grammar: Grammar, text: str) -> str:
    pos, element = begin(grammar, text)
    if pos == len(text) or not _is_root_name(grammar, element):
        return ""
    return element


def root_directory(grammar: Grammar, text: str) -> str:
    pos = root_directory_start(grammar, text, len(text))
    if pos == -1:
        return ""
    return text[pos : pos + 1]


def relative_path_start(grammar: Grammar, text: str) -> int:
    """Return the position where the relative-path begins."""
    size = len(text)
    pos, element = begin(grammar, text)
    # at most one root-name, then at most one root-directory
    if pos != size and _is_root_name(grammar, element):
        pos, element = increment(grammar, text, pos, element)
    if pos != size and grammar.is_separator(element[0]):
        pos, element = increment(grammar, text, pos, element)
    return pos


def filename(grammar: Grammar, text: str) -> str:
    size = len(text)
    pos = filename_pos(grammar, text, size)
    if size and pos and grammar.is_separator(text[pos]) and not is_root_separator(grammar, text, pos):
        return DOT
    return text[pos:]


def _split_name(name: str) -> int:
    if name in (DOT, DOT_DOT):
        return -1
    return name.rfind(DOT)


def stem(grammar: Grammar, text: str) -> str:
    name = filename(grammar, text)
    dot = _split_name(name)
    return name if dot == -1 else name[:dot]


def extension(grammar: Grammar, text: str) -> str:
    name = filename(grammar, text)
    dot = _split_name(name)
    return "" if dot == -1 else name[dot:]


def needs_separator(grammar: Grammar, text: str) -> bool:
    """True when appending to ``text`` must first insert a separator."""
    if not text:
        return False
    last = text[-1]
    if grammar.drive_letters and last == _COLON:
        return False
    return not grammar.is_separator(last)


class PathIterator(Iterator["BaseFsPath"]):
    """Read-only cursor over the elements of a path.

    The iterator borrows the path it walks; mutating that path while the
    iterator is live gives unspecified results. Elements are returned as
    new path values of the same flavor.
    """

    def __init__(self, path: BaseFsPath, *, reverse: bool = False) -> None:
        self._path = path
        self._text = path.native()
        self._grammar = path.grammar
        self._reverse = reverse
        self._begin_pos, self._begin_element = begin(self._grammar, self._text)
        if reverse:
            self._pos = len(self._text)
            self._element = ""
        else:
            self._pos = self._begin_pos
            self._element = self._begin_element

    def __iter__(self) -> PathIterator:
        return self

    def __next__(self) -> BaseFsPath:
        if self._reverse:
            return self._previous()
        if self._pos == len(self._text):
            raise StopIteration
        current = self._element
        self._pos, self._element = increment(self._grammar, self._text, self._pos, self._element)
        return type(self._path)(current)

    def _previous(self) -> BaseFsPath:
        if self._pos <= self._begin_pos:
            raise StopIteration
        pos, element = decrement(self._grammar, self._text, self._pos)
        if pos <= self._begin_pos:
            pos, element = self._begin_pos, self._begin_element
        self._pos = pos
        return type(self._path)(element)
