"""Lexical path algorithms: normalization and relative paths.

Nothing here touches the file system and nothing here fails. When no
answer can be computed lexically the result is an empty path (for
``relative``) or the input unchanged (for ``proximate``).
"""

from __future__ import annotations

from itertools import zip_longest
from typing import TYPE_CHECKING

from pathkit.core import grammar as g

if TYPE_CHECKING:
    from pathkit.core.path import BaseFsPath


def normal(path: BaseFsPath) -> BaseFsPath:
    """Return the lexically normal form of ``path``.

    - redundant separators collapse and become the preferred separator
    - ``.`` elements are dropped; a trailing ``.`` keeps a trailing separator
    - ``name/..`` pairs cancel; a leading ``..`` (even right after the root)
      is kept since resolving it needs the file system
    - an empty result becomes ``.``
    """
    grammar = path.grammar
    text = path.native()
    if not text:
        return type(path)()

    sep = grammar.preferred_separator
    root = grammar.to_preferred(g.root_name(grammar, text))
    if g.root_directory(grammar, text):
        root += sep

    names: list[str] = []
    trailing = False
    for element in g.elements(grammar, text[g.relative_path_start(grammar, text) :]):
        if element == g.DOT:
            trailing = True
            continue
        # "x:" inside the relative part reports its separator as an element
        if element == g.GENERIC_SEPARATOR:
            continue
        trailing = False
        if element == g.DOT_DOT and names and names[-1] != g.DOT_DOT:
            names.pop()
            continue
        names.append(element)

    result = root + sep.join(names)
    if names and trailing:
        result += sep
    return type(path)(result or g.DOT)


def _generic_elements(path: BaseFsPath) -> list[str]:
    grammar = path.grammar
    return [grammar.to_generic(e) for e in g.elements(grammar, path.native())]


def relative(path: BaseFsPath, base: BaseFsPath) -> BaseFsPath:
    """Return ``path`` expressed relative to ``base``, or an empty path.

    The result is empty when the root-names differ, when exactly one of
    the two is absolute, when only ``base`` has a root-directory, or when
    ``base`` climbs (``..``) further than the shared prefix allows.
    """
    grammar = path.grammar
    empty = type(path)()
    if grammar.to_generic(g.root_name(grammar, path.native())) != grammar.to_generic(
        g.root_name(grammar, base.native())
    ):
        return empty
    if path.is_absolute() != base.is_absolute():
        return empty
    if not path.has_root_directory() and base.has_root_directory():
        return empty

    mine = _generic_elements(path)
    theirs = _generic_elements(base)
    common = 0
    for left, right in zip_longest(mine, theirs):
        if left is None or right is None or left != right:
            break
        common += 1

    rest = mine[common:]
    base_rest = theirs[common:]
    if not rest and not base_rest:
        return type(path)(g.DOT)

    climb = 0
    for element in base_rest:
        if element == g.DOT_DOT:
            climb -= 1
        elif element not in (g.DOT, ""):
            climb += 1
    if climb < 0:
        return empty
    if climb == 0 and (not rest or rest[0] == ""):
        return type(path)(g.DOT)

    result = type(path)()
    for _ in range(climb):
        result.append(g.DOT_DOT)
    for element in rest:
        result.append(element)
    return result


def proximate(path: BaseFsPath, base: BaseFsPath) -> BaseFsPath:
    """Return ``relative(path, base)``, or a copy of ``path`` when that is empty."""
    result = relative(path, base)
    if result.empty():
        return path.copy()
    return result
