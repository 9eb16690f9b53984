"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from pathkit.core.errors import Failure, Outcome
from pathkit.core.path import BaseFsPath
from pathkit.models.status import FileStatus
from pathkit.platform import set_platform, use_platform
from pathkit.platform.base import DirectoryHandle, NativeEntry
from pathkit.platform.native import NativePlatform, ScandirHandle


class FaultyPlatform(NativePlatform):
    """Native platform that fails selected calls and records handle usage.

    Failures are keyed by the native path string and hold an errno value.
    """

    def __init__(self) -> None:
        self.open_failures: dict[str, int] = {}
        self.read_failures: dict[str, int] = {}
        self.status_failures: dict[str, int] = {}
        self.opened: list[str] = []
        self.closed: list[str] = []
        self.status_calls: list[str] = []

    def open_directory(self, path: BaseFsPath) -> Outcome[DirectoryHandle]:
        code = self.open_failures.get(path.native())
        if code:
            return Outcome.error(Failure.from_errno(code, "directory_iterator::construct", path))
        outcome = super().open_directory(path)
        if outcome.ok:
            self.opened.append(path.native())
        return outcome

    def read_directory(self, handle: DirectoryHandle) -> Outcome[NativeEntry | None]:
        assert isinstance(handle, ScandirHandle)
        code = self.read_failures.get(handle.path.native())
        if code:
            return Outcome.error(Failure.from_errno(code, "directory_iterator::operator++", handle.path))
        return super().read_directory(handle)

    def close_directory(self, handle: DirectoryHandle) -> Outcome[None]:
        assert isinstance(handle, ScandirHandle)
        if not handle.closed:
            self.closed.append(handle.path.native())
        return super().close_directory(handle)

    def status(self, path: BaseFsPath) -> Outcome[FileStatus]:
        self.status_calls.append(path.native())
        code = self.status_failures.get(path.native())
        if code:
            return Outcome.error(Failure.from_errno(code, "status", path))
        return super().status(path)

    def symlink_status(self, path: BaseFsPath) -> Outcome[FileStatus]:
        self.status_calls.append(path.native())
        code = self.status_failures.get(path.native())
        if code:
            return Outcome.error(Failure.from_errno(code, "symlink_status", path))
        return super().symlink_status(path)


@pytest.fixture(autouse=True)
def reset_platform() -> Iterator[None]:
    """Restore the native platform after every test."""
    yield
    set_platform(None)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def faulty_platform() -> Iterator[FaultyPlatform]:
    """Install a FaultyPlatform as the active platform."""
    platform = FaultyPlatform()
    with use_platform(platform):
        yield platform


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Build a directory tree from a layout.

    Keys ending in "/" are directories, every other key is a file whose
    value is its content. Returns the root.
    """

    def _make(layout: dict[str, str], root: Path | None = None) -> Path:
        base = root or tmp_path / "root"
        base.mkdir(parents=True, exist_ok=True)
        for relative, content in layout.items():
            target = base / relative
            if relative.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content)
        return base

    return _make
