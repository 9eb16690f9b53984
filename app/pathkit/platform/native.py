"""Platform collaborator backed by ``os`` and ``shutil``.

Each method is a one-call translation: it invokes the OS, converts the
result to pathkit types, and turns ``OSError`` into a failed
:class:`~pathkit.core.errors.Outcome`.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
import tempfile
from collections.abc import Iterator

from pathkit.core.errors import Failure, Outcome
from pathkit.core.flags import Perms
from pathkit.core.path import BaseFsPath
from pathkit.models.status import NOT_FOUND_STATUS, FileStatus, FileType, SpaceInfo
from pathkit.platform.base import DirectoryHandle, NativeEntry, Platform

logger = logging.getLogger(__name__)

# errno values meaning "there is nothing at this path"
_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


def _file_type(mode: int) -> FileType:
    if stat.S_ISREG(mode):
        return FileType.REGULAR
    if stat.S_ISDIR(mode):
        return FileType.DIRECTORY
    if stat.S_ISLNK(mode):
        return FileType.SYMLINK
    if stat.S_ISBLK(mode):
        return FileType.BLOCK
    if stat.S_ISCHR(mode):
        return FileType.CHARACTER
    if stat.S_ISFIFO(mode):
        return FileType.FIFO
    if stat.S_ISSOCK(mode):
        return FileType.SOCKET
    return FileType.UNKNOWN


def status_from_stat(result: os.stat_result) -> FileStatus:
    """Convert an ``os.stat_result`` to a :class:`FileStatus`."""
    return FileStatus(_file_type(result.st_mode), Perms(stat.S_IMODE(result.st_mode)))


class ScandirHandle(DirectoryHandle):
    """Directory handle wrapping an ``os.scandir`` iterator."""

    def __init__(self, path: BaseFsPath, iterator: Iterator[os.DirEntry[str]]) -> None:
        self.path = path
        self._iterator = iterator
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def next_entry(self) -> os.DirEntry[str] | None:
        return next(self._iterator, None)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()


def _type_hint(entry: os.DirEntry[str]) -> FileType:
    try:
        if entry.is_symlink():
            return FileType.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return FileType.DIRECTORY
        if entry.is_file(follow_symlinks=False):
            return FileType.REGULAR
    except OSError:
        return FileType.NONE
    return FileType.NONE


def _scandir_handle(handle: DirectoryHandle) -> ScandirHandle:
    if not isinstance(handle, ScandirHandle):
        msg = f"Expected a ScandirHandle, got {type(handle).__name__}"
        raise TypeError(msg)
    return handle


class NativePlatform(Platform):
    """The real operating system."""

    def _stat(self, path: BaseFsPath, operation: str, *, follow: bool) -> Outcome[FileStatus]:
        try:
            result = os.stat(path.native(), follow_symlinks=follow)
        except OSError as e:
            if e.errno in _NOT_FOUND_ERRNOS:
                return Outcome.success(NOT_FOUND_STATUS)
            return Outcome.error(Failure.from_os_error(e, operation, path))
        return Outcome.success(status_from_stat(result))

    def status(self, path: BaseFsPath) -> Outcome[FileStatus]:
        return self._stat(path, "status", follow=True)

    def symlink_status(self, path: BaseFsPath) -> Outcome[FileStatus]:
        return self._stat(path, "symlink_status", follow=False)

    def file_identity(self, path: BaseFsPath) -> Outcome[tuple[int, int]]:
        try:
            result = os.stat(path.native())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "equivalent", path))
        return Outcome.success((result.st_dev, result.st_ino))

    def file_size(self, path: BaseFsPath) -> Outcome[int]:
        try:
            result = os.stat(path.native())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "file_size", path))
        if not stat.S_ISREG(result.st_mode):
            return Outcome.error(Failure.from_errno(errno.EPERM, "file_size", path))
        return Outcome.success(result.st_size)

    def hard_link_count(self, path: BaseFsPath) -> Outcome[int]:
        try:
            return Outcome.success(os.stat(path.native()).st_nlink)
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "hard_link_count", path))

    def last_write_time(self, path: BaseFsPath) -> Outcome[float]:
        try:
            return Outcome.success(os.stat(path.native()).st_mtime)
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "last_write_time", path))

    def space(self, path: BaseFsPath) -> Outcome[SpaceInfo]:
        try:
            usage = shutil.disk_usage(path.native())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "space", path))
        available = usage.free
        if hasattr(os, "statvfs"):
            try:
                vfs = os.statvfs(path.native())
                available = vfs.f_bavail * vfs.f_frsize
                free = vfs.f_bfree * vfs.f_frsize
                return Outcome.success(SpaceInfo(capacity=usage.total, free=free, available=available))
            except OSError as e:
                return Outcome.error(Failure.from_os_error(e, "space", path))
        return Outcome.success(SpaceInfo(capacity=usage.total, free=usage.free, available=available))

    def open_directory(self, path: BaseFsPath) -> Outcome[DirectoryHandle]:
        try:
            iterator = os.scandir(path.native())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "directory_iterator::construct", path))
        logger.debug("Opened directory %s", path)
        return Outcome.success(ScandirHandle(path, iterator))

    def read_directory(self, handle: DirectoryHandle) -> Outcome[NativeEntry | None]:
        scandir = _scandir_handle(handle)
        try:
            entry = scandir.next_entry()
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "directory_iterator::operator++", scandir.path))
        if entry is None:
            return Outcome.success(None)
        return Outcome.success(NativeEntry(name=entry.name, type_hint=_type_hint(entry)))

    def close_directory(self, handle: DirectoryHandle) -> Outcome[None]:
        scandir = _scandir_handle(handle)
        if not scandir.closed:
            logger.debug("Closing directory %s", scandir.path)
        scandir.close()
        return Outcome.success(None)

    def create_directory(self, path: BaseFsPath) -> Outcome[None]:
        try:
            os.mkdir(path.native())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "create_directory", path))
        return Outcome.success(None)

    def remove(self, path: BaseFsPath) -> Outcome[None]:
        try:
            result = os.lstat(path.native())
            if stat.S_ISDIR(result.st_mode):
                os.rmdir(path.native())
            else:
                os.unlink(path.native())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "remove", path))
        return Outcome.success(None)

    def rename(self, old: BaseFsPath, new: BaseFsPath) -> Outcome[None]:
        try:
            os.replace(old.native(), new.native())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "rename", old, new))
        return Outcome.success(None)

    def copy_file(self, source: BaseFsPath, target: BaseFsPath) -> Outcome[None]:
        try:
            shutil.copyfile(source.native(), target.native())
            shutil.copymode(source.native(), target.native())
        except shutil.SameFileError:
            return Outcome.error(Failure.from_errno(errno.EEXIST, "copy_file", source, target))
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "copy_file", source, target))
        return Outcome.success(None)

    def create_symlink(self, target: BaseFsPath, link: BaseFsPath, *, directory: bool = False) -> Outcome[None]:
        operation = "create_directory_symlink" if directory else "create_symlink"
        try:
            os.symlink(target.native(), link.native(), target_is_directory=directory)
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, operation, target, link))
        return Outcome.success(None)

    def create_hard_link(self, target: BaseFsPath, link: BaseFsPath) -> Outcome[None]:
        try:
            os.link(target.native(), link.native())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "create_hard_link", target, link))
        return Outcome.success(None)

    def read_symlink(self, path: BaseFsPath) -> Outcome[str]:
        try:
            return Outcome.success(os.readlink(path.native()))
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "read_symlink", path))

    def set_permissions(self, path: BaseFsPath, perms: Perms, *, follow_symlinks: bool = True) -> Outcome[None]:
        try:
            if follow_symlinks or os.chmod not in os.supports_follow_symlinks:
                os.chmod(path.native(), int(perms.bits()))
            else:
                os.chmod(path.native(), int(perms.bits()), follow_symlinks=False)
        except (OSError, NotImplementedError) as e:
            if isinstance(e, NotImplementedError):
                return Outcome.error(Failure.from_errno(errno.EOPNOTSUPP, "permissions", path))
            return Outcome.error(Failure.from_os_error(e, "permissions", path))
        return Outcome.success(None)

    def set_last_write_time(self, path: BaseFsPath, when: float) -> Outcome[None]:
        try:
            result = os.stat(path.native())
            os.utime(path.native(), (result.st_atime, when))
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "last_write_time", path))
        return Outcome.success(None)

    def resize_file(self, path: BaseFsPath, size: int) -> Outcome[None]:
        try:
            os.truncate(path.native(), size)
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "resize_file", path))
        return Outcome.success(None)

    def current_path(self) -> Outcome[str]:
        try:
            return Outcome.success(os.getcwd())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "current_path"))

    def set_current_path(self, path: BaseFsPath) -> Outcome[None]:
        try:
            os.chdir(path.native())
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "current_path", path))
        return Outcome.success(None)

    def canonical(self, path: BaseFsPath) -> Outcome[str]:
        try:
            return Outcome.success(os.path.realpath(path.native(), strict=True))
        except OSError as e:
            return Outcome.error(Failure.from_os_error(e, "canonical", path))

    def temp_directory_path(self) -> Outcome[str]:
        directory = tempfile.gettempdir()
        if not os.path.isdir(directory):
            return Outcome.error(Failure.from_errno(errno.ENOTDIR, "temp_directory_path"))
        return Outcome.success(directory)
