"""Filename portability checks.

Each predicate takes a single path element (no separators) and answers
whether it would be valid, or portable, on some class of systems.
"""

from __future__ import annotations

import os
import string
from collections.abc import Callable

# Control characters (including NUL) and the characters Windows reserves.
WINDOWS_INVALID_CHARS = frozenset("".join(chr(code) for code in range(0x20)) + '<>:"/\\|')

# The POSIX portable filename character set.
POSIX_PORTABLE_CHARS = frozenset(string.ascii_letters + string.digits + "._-")


def portable_posix_name(name: str) -> bool:
    """True if ``name`` uses only the POSIX portable filename character set."""
    return bool(name) and all(char in POSIX_PORTABLE_CHARS for char in name)


def windows_name(name: str) -> bool:
    """True if ``name`` is a valid Windows filename.

    No reserved or control characters, no leading or trailing space, and
    no trailing dot except for ``.`` and ``..``.
    """
    if not name or name[0] == " " or name[-1] == " ":
        return False
    if any(char in WINDOWS_INVALID_CHARS for char in name):
        return False
    return name[-1] != "." or name in (".", "..")


def portable_name(name: str) -> bool:
    """True if ``name`` is valid on both POSIX and Windows.

    It must also not start with ``.`` or ``-`` (``.`` and ``..`` excepted).
    """
    if name in (".", ".."):
        return True
    return (
        windows_name(name)
        and portable_posix_name(name)
        and name[0] != "."
        and name[0] != "-"
    )


def portable_directory_name(name: str) -> bool:
    """True for a portable name without any dot (``.`` and ``..`` excepted)."""
    return name in (".", "..") or (portable_name(name) and "." not in name)


def portable_file_name(name: str) -> bool:
    """True for a portable name with at most one dot and an extension of 1-3 characters."""
    if not portable_name(name) or name in (".", ".."):
        return False
    dot = name.find(".")
    if dot == -1:
        return True
    return name.find(".", dot + 1) == -1 and dot + 5 > len(name)


def native_name(name: str) -> bool:
    """True if ``name`` is valid on the running platform."""
    if os.name == "nt":
        return windows_name(name)
    return bool(name) and name[0] != " " and "/" not in name


NAME_CHECKS: dict[str, Callable[[str], bool]] = {
    "native": native_name,
    "portable_posix": portable_posix_name,
    "windows": windows_name,
    "portable": portable_name,
    "portable_directory": portable_directory_name,
    "portable_file": portable_file_name,
}


def check_name(name: str) -> dict[str, bool]:
    """Run every check against ``name``.

    Returns:
        Mapping of check name to result, in ``NAME_CHECKS`` order.
    """
    return {check: predicate(name) for check, predicate in NAME_CHECKS.items()}
