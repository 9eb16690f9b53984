"""Unit tests for the os-backed platform."""

import errno
import os
import stat
from pathlib import Path

import pytest
from pathkit.core.errors import ErrorKind
from pathkit.core.flags import Perms
from pathkit.core.path import FsPath
from pathkit.models.status import NOT_FOUND_STATUS, FileType
from pathkit.platform.base import DirectoryHandle
from pathkit.platform.native import NativePlatform, ScandirHandle, status_from_stat


@pytest.fixture
def platform() -> NativePlatform:
    return NativePlatform()


class TestStatus:
    """Tests for status queries."""

    def test_regular_file(self, tmp_path: Path, platform: NativePlatform) -> None:
        """A file reports REGULAR with its permission bits."""
        target = tmp_path / "f"
        target.write_text("x")
        target.chmod(0o640)

        outcome = platform.status(FsPath(str(target)))

        assert outcome.ok
        assert outcome.value is not None
        assert outcome.value.type == FileType.REGULAR
        if os.name != "nt":
            assert outcome.value.permissions == Perms(0o640)

    def test_missing_is_success(self, tmp_path: Path, platform: NativePlatform) -> None:
        """A missing path is a successful NOT_FOUND, not a failure."""
        outcome = platform.status(FsPath(str(tmp_path / "missing")))
        assert outcome.ok
        assert outcome.value == NOT_FOUND_STATUS

    def test_file_as_directory_component_is_not_found(self, tmp_path: Path, platform: NativePlatform) -> None:
        """Walking through a regular file (ENOTDIR) also means nothing is there."""
        (tmp_path / "f").write_text("")
        outcome = platform.symlink_status(FsPath(str(tmp_path / "f" / "child")))
        assert outcome.ok
        assert outcome.value == NOT_FOUND_STATUS

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_symlink_status_does_not_follow(self, tmp_path: Path, platform: NativePlatform) -> None:
        """symlink_status reports the link; status reports the target."""
        (tmp_path / "target").mkdir()
        (tmp_path / "link").symlink_to(tmp_path / "target")
        link = FsPath(str(tmp_path / "link"))

        assert platform.symlink_status(link).value.type == FileType.SYMLINK  # type: ignore[union-attr]
        assert platform.status(link).value.type == FileType.DIRECTORY  # type: ignore[union-attr]

    def test_status_from_stat(self, tmp_path: Path) -> None:
        """stat results convert to type plus masked mode bits."""
        (tmp_path / "d").mkdir()
        status = status_from_stat(os.stat(tmp_path / "d"))
        assert status.is_directory()
        assert status.permissions == Perms(stat.S_IMODE(os.stat(tmp_path / "d").st_mode))


class TestDirectoryHandles:
    """Tests for open/read/close."""

    def test_read_until_exhausted(self, tmp_path: Path, platform: NativePlatform) -> None:
        """read_directory returns entries with type hints, then None."""
        (tmp_path / "sub").mkdir()
        (tmp_path / "file").write_text("")
        handle = platform.open_directory(FsPath(str(tmp_path))).value
        assert isinstance(handle, ScandirHandle)

        seen = {}
        while True:
            outcome = platform.read_directory(handle)
            assert outcome.ok
            if outcome.value is None:
                break
            seen[outcome.value.name] = outcome.value.type_hint

        assert seen == {"sub": FileType.DIRECTORY, "file": FileType.REGULAR}
        assert platform.close_directory(handle).ok

    def test_close_is_idempotent(self, tmp_path: Path, platform: NativePlatform) -> None:
        """Closing twice is harmless."""
        handle = platform.open_directory(FsPath(str(tmp_path))).value
        assert handle is not None
        platform.close_directory(handle)
        platform.close_directory(handle)
        assert handle.closed

    def test_open_missing_fails(self, tmp_path: Path, platform: NativePlatform) -> None:
        """Opening a missing directory is a NOT_FOUND failure."""
        outcome = platform.open_directory(FsPath(str(tmp_path / "missing")))
        assert not outcome.ok
        assert outcome.failure is not None
        assert outcome.failure.kind == ErrorKind.NOT_FOUND

    def test_foreign_handle_is_rejected(self, platform: NativePlatform) -> None:
        """A handle from another platform raises TypeError on read and close."""

        class ForeignHandle(DirectoryHandle):
            @property
            def closed(self) -> bool:
                return False

        with pytest.raises(TypeError, match="ForeignHandle"):
            platform.read_directory(ForeignHandle())
        with pytest.raises(TypeError, match="ForeignHandle"):
            platform.close_directory(ForeignHandle())


class TestMutations:
    """Tests for mutating calls."""

    def test_create_existing_directory_fails(self, tmp_path: Path, platform: NativePlatform) -> None:
        """create_directory reports EEXIST for an existing path."""
        outcome = platform.create_directory(FsPath(str(tmp_path)))
        assert outcome.failure is not None
        assert outcome.failure.errno == errno.EEXIST

    def test_file_size_of_directory_fails(self, tmp_path: Path, platform: NativePlatform) -> None:
        """file_size is only defined for regular files."""
        outcome = platform.file_size(FsPath(str(tmp_path)))
        assert outcome.failure is not None
        assert outcome.failure.kind == ErrorKind.PERMISSION_DENIED

    def test_copy_onto_itself_fails(self, tmp_path: Path, platform: NativePlatform) -> None:
        """Copying a file onto itself is ALREADY_EXISTS."""
        (tmp_path / "f").write_text("x")
        path = FsPath(str(tmp_path / "f"))
        outcome = platform.copy_file(path, path)
        assert outcome.failure is not None
        assert outcome.failure.kind == ErrorKind.ALREADY_EXISTS

    def test_space(self, tmp_path: Path, platform: NativePlatform) -> None:
        """space reports consistent sizes."""
        info = platform.space(FsPath(str(tmp_path))).value
        assert info is not None
        assert info.capacity > 0
        assert 0 <= info.available <= info.capacity
        assert 0 <= info.free <= info.capacity

    def test_temp_directory_exists(self, platform: NativePlatform) -> None:
        """The temp directory is an existing directory."""
        outcome = platform.temp_directory_path()
        assert outcome.ok
        assert os.path.isdir(outcome.value)  # type: ignore[arg-type]
