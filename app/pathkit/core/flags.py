"""Bitmask option types.

Permission bits use the POSIX octal values so they can be passed to
``os.chmod`` unchanged.
"""

from enum import IntFlag


class Perms(IntFlag):
    """File permission bits plus modifiers for :func:`pathkit.operations.permissions`.

    ``UNKNOWN`` marks a status whose permissions were never queried; a
    missing file reports ``NONE``.
    """

    NONE = 0

    OWNER_READ = 0o400
    OWNER_WRITE = 0o200
    OWNER_EXEC = 0o100
    OWNER_ALL = 0o700

    GROUP_READ = 0o040
    GROUP_WRITE = 0o020
    GROUP_EXEC = 0o010
    GROUP_ALL = 0o070

    OTHERS_READ = 0o004
    OTHERS_WRITE = 0o002
    OTHERS_EXEC = 0o001
    OTHERS_ALL = 0o007

    ALL = 0o777

    SET_UID = 0o4000
    SET_GID = 0o2000
    STICKY_BIT = 0o1000

    MASK = 0o7777

    UNKNOWN = 0xFFFF

    # permissions() modifiers; without ADD/REMOVE the bits are replaced,
    # SYMLINK_PERMS acts on a symlink itself instead of its target
    ADD_PERMS = 0x1000
    REMOVE_PERMS = 0x2000
    SYMLINK_PERMS = 0x4000

    def bits(self) -> "Perms":
        """Return only the permission bits, dropping modifiers."""
        return self & Perms.MASK


class CopyOptions(IntFlag):
    """Options for :func:`pathkit.operations.copy` and ``copy_file``.

    At most one of the existing-file options may be given.
    """

    NONE = 0
    SKIP_EXISTING = 1
    OVERWRITE_EXISTING = 2
    UPDATE_EXISTING = 4
    RECURSIVE = 8
    COPY_SYMLINKS = 16
    SKIP_SYMLINKS = 32
    DIRECTORIES_ONLY = 64
    CREATE_SYMLINKS = 128
    CREATE_HARD_LINKS = 256


class SymlinkOption(IntFlag):
    """Recursive iteration policy for directory symlinks."""

    NONE = 0
    NO_RECURSE = 0
    RECURSE = 1
