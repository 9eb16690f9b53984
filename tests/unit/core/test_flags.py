"""Unit tests for bitmask option types."""

import stat

from pathkit.core.flags import CopyOptions, Perms, SymlinkOption


class TestPerms:
    """Tests for permission bits and modifiers."""

    def test_values_match_stat(self) -> None:
        """Permission bits use the POSIX octal values."""
        assert Perms.OWNER_READ == stat.S_IRUSR
        assert Perms.GROUP_WRITE == stat.S_IWGRP
        assert Perms.OTHERS_EXEC == stat.S_IXOTH
        assert Perms.SET_UID == stat.S_ISUID
        assert Perms.STICKY_BIT == stat.S_ISVTX

    def test_groups_are_unions(self) -> None:
        """The *_ALL constants combine read, write and execute."""
        assert Perms.OWNER_ALL == Perms.OWNER_READ | Perms.OWNER_WRITE | Perms.OWNER_EXEC
        assert Perms.ALL == Perms.OWNER_ALL | Perms.GROUP_ALL | Perms.OTHERS_ALL

    def test_bits_drops_modifiers(self) -> None:
        """bits() strips ADD/REMOVE/SYMLINK modifiers."""
        value = Perms.ADD_PERMS | Perms.SYMLINK_PERMS | Perms.OWNER_READ
        assert value.bits() == Perms.OWNER_READ

    def test_membership_and_complement(self) -> None:
        """Flags support membership tests and masking."""
        mode = Perms(0o754)
        assert Perms.OWNER_EXEC in mode
        assert Perms.OTHERS_WRITE not in mode
        assert (mode & ~Perms.OWNER_WRITE & Perms.MASK) == Perms(0o554)


class TestCopyOptions:
    """Tests for copy option flags."""

    def test_combination(self) -> None:
        """Options combine and can be queried individually."""
        options = CopyOptions.RECURSIVE | CopyOptions.SKIP_EXISTING
        assert options & CopyOptions.RECURSIVE
        assert not options & CopyOptions.COPY_SYMLINKS

    def test_none_is_empty(self) -> None:
        """NONE is the empty set."""
        assert CopyOptions.NONE == 0


class TestSymlinkOption:
    """Tests for recursion policy flags."""

    def test_no_recurse_is_default(self) -> None:
        """NO_RECURSE is an alias of NONE."""
        assert SymlinkOption.NO_RECURSE is SymlinkOption.NONE
        assert not SymlinkOption.NONE & SymlinkOption.RECURSE
