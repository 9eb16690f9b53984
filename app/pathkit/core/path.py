"""Path value type.

An :class:`FsPath` holds exactly one native string and never re-encodes
it. Everything else (root-name, filename, extension, ...) is derived on
demand through :mod:`pathkit.core.grammar`.

Equality, ordering and hashing compare the generic element sequence,
so ``FsPath("a//b") == FsPath("a/b")`` while ``FsPath("a/b/")`` (which
ends in an implicit ``"."``) differs from both. Only paths of the same
flavor compare; compare a string with ``p.compare("...")`` or wrap it
in a path first.

Mutating operations (``/=``, ``+=``, ``remove_filename``, ...) modify the
value in place and return it. Copies never share state.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import ClassVar, Union

from pathkit.core import grammar as g
from pathkit.core import lexical

PathLike = Union["BaseFsPath", str, "os.PathLike[str]"]


def _as_text(value: PathLike | None) -> str:
    if value is None:
        return ""
    if isinstance(value, BaseFsPath):
        return value.native()
    if isinstance(value, str):
        return value
    text = os.fspath(value)
    if not isinstance(text, str):
        msg = f"Path must be a str or os.PathLike[str], got {type(text).__name__}"
        raise TypeError(msg)
    return text


class BaseFsPath(os.PathLike[str]):
    """Path value parameterized by a :class:`~pathkit.core.grammar.Grammar`.

    Use :class:`PosixFsPath`, :class:`WindowsFsPath`, or the native alias
    :data:`FsPath`.
    """

    grammar: ClassVar[g.Grammar] = g.POSIX

    __slots__ = ("_text",)

    def __init__(self, value: PathLike | None = None) -> None:
        self._text = _as_text(value)

    # ----- native format observers -----

    def native(self) -> str:
        """Return the stored string exactly as given."""
        return self._text

    def string(self) -> str:
        return self._text

    def generic_string(self) -> str:
        """Return the string with separators converted to ``/``."""
        return self.grammar.to_generic(self._text)

    def size(self) -> int:
        return len(self._text)

    def __fspath__(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"

    def __bool__(self) -> bool:
        return bool(self._text)

    def __len__(self) -> int:
        return len(self._text)

    def __copy__(self) -> BaseFsPath:
        return type(self)(self._text)

    def __deepcopy__(self, memo: dict[int, object]) -> BaseFsPath:
        return type(self)(self._text)

    def copy(self) -> BaseFsPath:
        """Return an independent copy."""
        return type(self)(self._text)

    def _coerce(self, other: PathLike) -> BaseFsPath:
        if isinstance(other, type(self)):
            return other
        return type(self)(_as_text(other))

    # ----- modifiers -----

    def clear(self) -> BaseFsPath:
        self._text = ""
        return self

    def assign(self, value: PathLike) -> BaseFsPath:
        self._text = _as_text(value)
        return self

    def append(self, other: PathLike) -> BaseFsPath:
        """Append ``other`` as a new element (the ``/=`` operation).

        Inserts one preferred separator unless this path is empty, already
        ends in a separator, or ``other`` starts with a separator or a
        root-name. Appending an empty path changes nothing.
        """
        text = _as_text(other)
        if not text:
            return self
        starts_rooted = self.grammar.is_separator(text[0]) or bool(g.root_name(self.grammar, text))
        if not starts_rooted and g.needs_separator(self.grammar, self._text):
            self._text += self.grammar.preferred_separator
        self._text += text
        return self

    def concat(self, other: PathLike) -> BaseFsPath:
        """Raw concatenation without separator logic (the ``+=`` operation)."""
        self._text += _as_text(other)
        return self

    def __itruediv__(self, other: PathLike) -> BaseFsPath:
        return self.append(other)

    def __truediv__(self, other: PathLike) -> BaseFsPath:
        return self.copy().append(other)

    def __rtruediv__(self, other: PathLike) -> BaseFsPath:
        return type(self)(_as_text(other)).append(self)

    def __iadd__(self, other: PathLike) -> BaseFsPath:
        return self.concat(other)

    def __add__(self, other: PathLike) -> BaseFsPath:
        return self.copy().concat(other)

    def make_preferred(self) -> BaseFsPath:
        """Convert every separator to the preferred one (no-op on POSIX)."""
        self._text = self.grammar.to_preferred(self._text)
        return self

    def remove_filename(self) -> BaseFsPath:
        end = g.parent_path_end(self.grammar, self._text)
        if end != -1:
            self._text = self._text[:end]
        return self

    def remove_trailing_separator(self) -> BaseFsPath:
        if self._text and self.grammar.is_separator(self._text[-1]):
            self._text = self._text[:-1]
        return self

    def replace_filename(self, replacement: PathLike) -> BaseFsPath:
        self.remove_filename()
        return self.append(replacement)

    def replace_extension(self, new_extension: PathLike = "") -> BaseFsPath:
        """Replace the extension, adding the leading dot when missing.

        An empty ``new_extension`` just removes the current extension.
        """
        current = g.extension(self.grammar, self._text)
        if current:
            self._text = self._text[: len(self._text) - len(current)]
        text = _as_text(new_extension)
        if text:
            if text[0] != g.DOT:
                self._text += g.DOT
            self._text += text
        return self

    # ----- decomposition -----

    def root_name(self) -> BaseFsPath:
        return type(self)(g.root_name(self.grammar, self._text))

    def root_directory(self) -> BaseFsPath:
        return type(self)(g.root_directory(self.grammar, self._text))

    def root_path(self) -> BaseFsPath:
        return type(self)(
            g.root_name(self.grammar, self._text) + g.root_directory(self.grammar, self._text)
        )

    def relative_path(self) -> BaseFsPath:
        return type(self)(self._text[g.relative_path_start(self.grammar, self._text) :])

    def parent_path(self) -> BaseFsPath:
        end = g.parent_path_end(self.grammar, self._text)
        return type(self)("" if end == -1 else self._text[:end])

    def filename(self) -> BaseFsPath:
        return type(self)(g.filename(self.grammar, self._text))

    def stem(self) -> BaseFsPath:
        return type(self)(g.stem(self.grammar, self._text))

    def extension(self) -> BaseFsPath:
        return type(self)(g.extension(self.grammar, self._text))

    # ----- query -----

    def empty(self) -> bool:
        return not self._text

    def has_root_name(self) -> bool:
        return bool(g.root_name(self.grammar, self._text))

    def has_root_directory(self) -> bool:
        return bool(g.root_directory(self.grammar, self._text))

    def has_root_path(self) -> bool:
        return self.has_root_directory() or self.has_root_name()

    def has_relative_path(self) -> bool:
        return g.relative_path_start(self.grammar, self._text) != len(self._text)

    def has_parent_path(self) -> bool:
        return not self.parent_path().empty()

    def has_filename(self) -> bool:
        return bool(self._text)

    def has_stem(self) -> bool:
        return bool(g.stem(self.grammar, self._text))

    def has_extension(self) -> bool:
        return bool(g.extension(self.grammar, self._text))

    def is_absolute(self) -> bool:
        if self.grammar.drive_letters:
            return self.has_root_name() and self.has_root_directory()
        return self.has_root_directory()

    def is_relative(self) -> bool:
        return not self.is_absolute()

    # ----- iteration -----

    def __iter__(self) -> Iterator[BaseFsPath]:
        return g.PathIterator(self)

    def __reversed__(self) -> Iterator[BaseFsPath]:
        return g.PathIterator(self, reverse=True)

    def parts(self) -> tuple[str, ...]:
        """Return the elements as plain strings."""
        return tuple(g.elements(self.grammar, self._text))

    # ----- comparison -----

    def _generic_parts(self) -> tuple[str, ...]:
        to_generic = self.grammar.to_generic
        return tuple(to_generic(element) for element in g.elements(self.grammar, self._text))

    def compare(self, other: PathLike) -> int:
        """Three-way element-wise comparison.

        Returns:
            Negative, zero or positive as this path sorts before, equal to,
            or after ``other``.
        """
        left = self._generic_parts()
        right = self._coerce(other)._generic_parts()
        if left == right:
            return 0
        return -1 if left < right else 1

    def _comparable(self, other: object) -> bool:
        return isinstance(other, BaseFsPath) and other.grammar is self.grammar

    def __eq__(self, other: object) -> bool:
        # Equal paths hash alike, so only paths of the same flavor compare.
        if not self._comparable(other):
            return NotImplemented
        return self._generic_parts() == other._generic_parts()  # type: ignore[union-attr]

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.compare(other) < 0  # type: ignore[arg-type]

    def __le__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.compare(other) <= 0  # type: ignore[arg-type]

    def __gt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.compare(other) > 0  # type: ignore[arg-type]

    def __ge__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.compare(other) >= 0  # type: ignore[arg-type]

    def __hash__(self) -> int:
        # Do not mutate a path while it is a dict key.
        return hash(self._generic_parts())

    # ----- lexical operations -----

    def lexically_normal(self) -> BaseFsPath:
        return lexical.normal(self)

    def lexically_relative(self, base: PathLike) -> BaseFsPath:
        return lexical.relative(self, self._coerce(base))

    def lexically_proximate(self, base: PathLike) -> BaseFsPath:
        return lexical.proximate(self, self._coerce(base))


class PosixFsPath(BaseFsPath):
    """Path using POSIX grammar (``/`` separator, ``//net`` root-names)."""

    grammar: ClassVar[g.Grammar] = g.POSIX
    __slots__ = ()


class WindowsFsPath(BaseFsPath):
    """Path using Windows grammar (``\\`` and ``/`` separators, drive root-names)."""

    grammar: ClassVar[g.Grammar] = g.WINDOWS
    __slots__ = ()


FsPath: type[BaseFsPath] = WindowsFsPath if os.name == "nt" else PosixFsPath
"""Path flavor of the running platform."""
