"""Unit tests for lexical normalization and relative paths."""

import pytest
from pathkit.core.path import PosixFsPath, WindowsFsPath


class TestLexicallyNormal:
    """Tests for lexically_normal."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", ""),
            (".", "."),
            ("./", "."),
            ("a/./b/../c", "a/c"),
            ("a/b/..", "a"),
            ("a/..", "."),
            ("a//b", "a/b"),
            ("a/b/", "a/b/"),
            ("../a", "../a"),
            ("../../a/..", "../.."),
            ("/..", "/.."),
            ("/a/../../b", "/../b"),
            ("//net/a/../b", "//net/b"),
        ],
    )
    def test_posix(self, text: str, expected: str) -> None:
        """Dots vanish, name/.. pairs cancel, leading .. is kept."""
        assert PosixFsPath(text).lexically_normal().native() == expected

    def test_windows_uses_preferred_separator(self) -> None:
        """Windows output uses backslashes throughout."""
        assert WindowsFsPath("c:/a/../b").lexically_normal().native() == "c:\\b"
        assert WindowsFsPath("a/b\\./c").lexically_normal().native() == "a\\b\\c"

    def test_windows_long_path_prefix_is_stable(self) -> None:
        """A drive inside the relative part keeps its separator."""
        assert WindowsFsPath("\\\\?\\c:\\x").lexically_normal().native() == "\\\\?\\c:\\x"

    @pytest.mark.parametrize("text", ["a/./b/../c", "../x/./y/", "/a/b/../../..", "a/..", "x//y/."])
    def test_idempotent(self, text: str) -> None:
        """normal(normal(p)) == normal(p)."""
        once = PosixFsPath(text).lexically_normal()
        assert once.lexically_normal() == once

    def test_returns_new_value(self) -> None:
        """The source path is not modified."""
        p = PosixFsPath("a/./b")
        p.lexically_normal()
        assert p.native() == "a/./b"


class TestLexicallyRelative:
    """Tests for lexically_relative and lexically_proximate."""

    @pytest.mark.parametrize(
        ("path", "base", "expected"),
        [
            ("/a/b/c", "/a", "b/c"),
            ("/a", "/a/b/c", "../.."),
            ("/a/d", "/a/b/c", "../../d"),
            ("a/b", "a/b", "."),
            ("a/b/c", "a", "b/c"),
            ("a/b", "a/b/.", "."),
        ],
    )
    def test_relative(self, path: str, base: str, expected: str) -> None:
        """The relative form climbs out of base and descends into path."""
        assert PosixFsPath(path).lexically_relative(base).native() == expected

    @pytest.mark.parametrize(
        ("path", "base"),
        [
            ("a", "/a"),
            ("/a", "a"),
            ("//net/a", "/a"),
            ("a", "b/../.."),
        ],
    )
    def test_no_relative_form(self, path: str, base: str) -> None:
        """Different roots, or a base escaping upwards, give an empty path."""
        assert PosixFsPath(path).lexically_relative(base).empty()

    def test_windows_different_drives(self) -> None:
        """Paths on different drives have no relative form."""
        assert WindowsFsPath("c:\\a").lexically_relative("d:\\a").empty()

    def test_windows_mixed_separators(self) -> None:
        """Separators are compared generically on Windows."""
        assert WindowsFsPath("c:\\a\\b\\c").lexically_relative("c:/a").native() == "b\\c"

    @pytest.mark.parametrize(
        ("path", "base"),
        [("/a/c/d", "/a/b"), ("/x/y", "/x/y/z/w"), ("p/q", "p"), ("/r", "/")],
    )
    def test_base_join_relative_normalizes_to_path(self, path: str, base: str) -> None:
        """base / relative(path, base) is lexically path."""
        p, b = PosixFsPath(path), PosixFsPath(base)
        joined = b / p.lexically_relative(b)
        assert joined.lexically_normal() == p.lexically_normal()

    def test_proximate_falls_back_to_path(self) -> None:
        """Without a relative form, proximate returns the path itself."""
        assert PosixFsPath("a").lexically_proximate("/b").native() == "a"
        assert PosixFsPath("/a/b").lexically_proximate("/a").native() == "b"
