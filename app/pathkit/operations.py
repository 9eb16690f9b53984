"""File-system operations in raising and reporting form.

Every function takes an optional ``ec`` keyword. Without it, a failure
raises :class:`~pathkit.core.errors.FilesystemError`. With it, the
failure is stored in ``ec`` and the function returns its documented
default (``False``, ``-1``, an empty path, ``FileStatus()``, ...);
``ec`` is cleared on success.

All calls go to the active platform (see :func:`pathkit.platform.use_platform`).

Example:
    >>> ec = ErrorCode()
    >>> file_size("/does/not/exist", ec=ec)
    -1
    >>> ec.kind
    <ErrorKind.NOT_FOUND: 'not_found'>
"""

from __future__ import annotations

import dataclasses
import errno
import logging

from pathkit.core.errors import ErrorCode, Failure, report, resolve
from pathkit.core.flags import CopyOptions, Perms
from pathkit.core.path import BaseFsPath, FsPath, PathLike
from pathkit.iteration.directory import DirectoryIterator
from pathkit.models.status import UNKNOWN_SPACE, FileStatus, SpaceInfo
from pathkit.platform import get_platform

logger = logging.getLogger(__name__)

_EXISTING_OPTIONS = CopyOptions.SKIP_EXISTING | CopyOptions.OVERWRITE_EXISTING | CopyOptions.UPDATE_EXISTING


def _path(value: PathLike) -> BaseFsPath:
    if isinstance(value, BaseFsPath):
        return value
    return FsPath(value)


def _fail(code: int, operation: str, ec: ErrorCode | None, path1: BaseFsPath, path2: BaseFsPath | None = None) -> None:
    report(Failure.from_errno(code, operation, path1, path2), ec)


# ----- status queries -----


def status(p: PathLike, *, ec: ErrorCode | None = None) -> FileStatus:
    """Return the status of ``p``, following symlinks.

    A missing path is not an error: it reports ``FileType.NOT_FOUND``.
    """
    return resolve(get_platform().status(_path(p)), ec, FileStatus())


def symlink_status(p: PathLike, *, ec: ErrorCode | None = None) -> FileStatus:
    """Return the status of ``p`` itself, not following a final symlink."""
    return resolve(get_platform().symlink_status(_path(p)), ec, FileStatus())


def exists(p: PathLike, *, ec: ErrorCode | None = None) -> bool:
    return status(p, ec=ec).exists()


def is_directory(p: PathLike, *, ec: ErrorCode | None = None) -> bool:
    return status(p, ec=ec).is_directory()


def is_regular_file(p: PathLike, *, ec: ErrorCode | None = None) -> bool:
    return status(p, ec=ec).is_regular_file()


def is_symlink(p: PathLike, *, ec: ErrorCode | None = None) -> bool:
    return symlink_status(p, ec=ec).is_symlink()


def is_other(p: PathLike, *, ec: ErrorCode | None = None) -> bool:
    return status(p, ec=ec).is_other()


def is_empty(p: PathLike, *, ec: ErrorCode | None = None) -> bool:
    """True for a directory without entries or a regular file of size zero."""
    path = _path(p)
    local = ErrorCode()
    current = status(path, ec=local)
    if local:
        report(local.failure, ec)
        return False
    if current.is_directory():
        iterator = DirectoryIterator(path, local)
        if local:
            report(local.failure, ec)
            return False
        empty = iterator.at_end
        iterator.close()
        report(None, ec)
        return empty
    return file_size(path, ec=ec) == 0


def equivalent(p1: PathLike, p2: PathLike, *, ec: ErrorCode | None = None) -> bool:
    """True when both paths resolve to the same file-system object.

    If only one of them exists the answer is False without an error; if
    neither exists, that is reported.
    """
    first, second = _path(p1), _path(p2)
    platform = get_platform()
    left = platform.file_identity(first)
    right = platform.file_identity(second)
    if left.failure is not None and right.failure is not None:
        report(dataclasses.replace(left.failure, path2=second), ec)
        return False
    report(None, ec)
    if left.failure is not None or right.failure is not None:
        return False
    return left.value == right.value


def file_size(p: PathLike, *, ec: ErrorCode | None = None) -> int:
    """Size of a regular file in bytes; ``-1`` on reported failure."""
    return resolve(get_platform().file_size(_path(p)), ec, -1)


def hard_link_count(p: PathLike, *, ec: ErrorCode | None = None) -> int:
    return resolve(get_platform().hard_link_count(_path(p)), ec, -1)


def last_write_time(p: PathLike, *, ec: ErrorCode | None = None) -> float:
    """Modification time in seconds since the epoch; ``-1.0`` on reported failure."""
    return resolve(get_platform().last_write_time(_path(p)), ec, -1.0)


def set_last_write_time(p: PathLike, when: float, *, ec: ErrorCode | None = None) -> None:
    resolve(get_platform().set_last_write_time(_path(p), when), ec, None)


def space(p: PathLike, *, ec: ErrorCode | None = None) -> SpaceInfo:
    """Capacity and free space of the file system holding ``p``.

    Every field is ``-1`` on reported failure.
    """
    return resolve(get_platform().space(_path(p)), ec, UNKNOWN_SPACE)


# ----- creation and removal -----


def create_directory(p: PathLike, *, ec: ErrorCode | None = None) -> bool:
    """Create the directory ``p``; its parent must exist.

    Returns:
        True if a directory was created, False if ``p`` already was one.

    Raises:
        FilesystemError: If creation failed and ``ec`` is None. An existing
            non-directory at ``p`` is an error.
    """
    path = _path(p)
    outcome = get_platform().create_directory(path)
    if outcome.ok:
        report(None, ec)
        return True
    if is_directory(path, ec=ErrorCode()):
        report(None, ec)
        return False
    report(outcome.failure, ec)
    return False


def create_directories(p: PathLike, *, ec: ErrorCode | None = None) -> bool:
    """Create ``p`` and every missing parent.

    Returns:
        True if any directory was created.
    """
    path = _path(p)
    if path.empty():
        report(None, ec)
        return False
    if path.filename().native() in (".", ".."):
        return create_directories(path.parent_path(), ec=ec)

    local = ErrorCode()
    current = status(path, ec=local)
    if local:
        report(local.failure, ec)
        return False
    if current.is_directory():
        report(None, ec)
        return False
    if current.exists():
        _fail(errno.EEXIST, "create_directories", ec, path)
        return False

    parent = path.parent_path()
    if not parent.empty() and not exists(parent, ec=local):
        if local:
            report(local.failure, ec)
            return False
        create_directories(parent, ec=local)
        if local:
            report(local.failure, ec)
            return False
    logger.debug("Creating directory %s", path)
    return create_directory(path, ec=ec)


def create_symlink(to: PathLike, new_symlink: PathLike, *, ec: ErrorCode | None = None) -> None:
    resolve(get_platform().create_symlink(_path(to), _path(new_symlink)), ec, None)


def create_directory_symlink(to: PathLike, new_symlink: PathLike, *, ec: ErrorCode | None = None) -> None:
    resolve(get_platform().create_symlink(_path(to), _path(new_symlink), directory=True), ec, None)


def create_hard_link(to: PathLike, new_hard_link: PathLike, *, ec: ErrorCode | None = None) -> None:
    resolve(get_platform().create_hard_link(_path(to), _path(new_hard_link)), ec, None)


def remove(p: PathLike, *, ec: ErrorCode | None = None) -> bool:
    """Remove a file, symlink or empty directory.

    Returns:
        True if something was removed, False if ``p`` did not exist.
    """
    path = _path(p)
    local = ErrorCode()
    current = symlink_status(path, ec=local)
    if local:
        report(local.failure, ec)
        return False
    if not current.exists():
        report(None, ec)
        return False
    resolve(get_platform().remove(path), ec, None)
    return not ec


def remove_all(p: PathLike, *, ec: ErrorCode | None = None) -> int:
    """Remove ``p`` and, if it is a directory, everything below it.

    Symlinks are removed, never followed.

    Returns:
        Number of objects removed, or ``-1`` on reported failure.
    """
    local = ErrorCode()
    count = _remove_all(_path(p), local)
    report(local.failure, ec)
    return -1 if local else count


def _remove_all(path: BaseFsPath, ec: ErrorCode) -> int:
    current = symlink_status(path, ec=ec)
    if ec or not current.exists():
        return 0
    count = 0
    if current.is_directory():
        children: list[BaseFsPath] = []
        iterator = DirectoryIterator(path, ec)
        while not ec and not iterator.at_end:
            children.append(iterator.entry.path)
            iterator.increment(ec)
        if ec:
            return count
        for child in children:
            count += _remove_all(child, ec)
            if ec:
                return count
    resolve(get_platform().remove(path), ec, None)
    if ec:
        return count
    return count + 1


def rename(old_p: PathLike, new_p: PathLike, *, ec: ErrorCode | None = None) -> None:
    resolve(get_platform().rename(_path(old_p), _path(new_p)), ec, None)


def resize_file(p: PathLike, size: int, *, ec: ErrorCode | None = None) -> None:
    resolve(get_platform().resize_file(_path(p), size), ec, None)


# ----- copying -----


def copy_file(
    source: PathLike,
    target: PathLike,
    options: CopyOptions = CopyOptions.NONE,
    *,
    ec: ErrorCode | None = None,
) -> bool:
    """Copy a regular file.

    Args:
        source: File to copy.
        target: Destination path.
        options: At most one of ``SKIP_EXISTING``, ``OVERWRITE_EXISTING``
            and ``UPDATE_EXISTING``; without one an existing target is an
            error.
        ec: Out-parameter for the reporting form.

    Returns:
        True if the file was copied.

    Raises:
        ValueError: If more than one existing-file option is given.
        FilesystemError: If copying failed and ``ec`` is None.
    """
    chosen = options & _EXISTING_OPTIONS
    if chosen and chosen & (chosen - 1):
        msg = f"At most one existing-file option may be given, got {chosen!r}"
        raise ValueError(msg)

    src, dst = _path(source), _path(target)
    local = ErrorCode()
    source_status = status(src, ec=local)
    if local:
        report(local.failure, ec)
        return False
    if not source_status.is_regular_file():
        _fail(errno.EINVAL if source_status.exists() else errno.ENOENT, "copy_file", ec, src, dst)
        return False

    target_status = status(dst, ec=local)
    if local:
        report(local.failure, ec)
        return False
    if target_status.exists():
        if not target_status.is_regular_file():
            _fail(errno.EINVAL, "copy_file", ec, src, dst)
            return False
        if equivalent(src, dst, ec=local):
            _fail(errno.EEXIST, "copy_file", ec, src, dst)
            return False
        if chosen == CopyOptions.SKIP_EXISTING:
            report(None, ec)
            return False
        if chosen == CopyOptions.UPDATE_EXISTING:
            newer = last_write_time(src, ec=local) > last_write_time(dst, ec=local)
            if local:
                report(local.failure, ec)
                return False
            if not newer:
                report(None, ec)
                return False
        elif chosen != CopyOptions.OVERWRITE_EXISTING:
            _fail(errno.EEXIST, "copy_file", ec, src, dst)
            return False

    resolve(get_platform().copy_file(src, dst), ec, None)
    return not ec


def copy_symlink(existing_symlink: PathLike, new_symlink: PathLike, *, ec: ErrorCode | None = None) -> None:
    """Create ``new_symlink`` with the same target as ``existing_symlink``."""
    existing = _path(existing_symlink)
    local = ErrorCode()
    target = read_symlink(existing, ec=local)
    if local:
        report(local.failure, ec)
        return
    if is_directory(existing, ec=ErrorCode()):
        create_directory_symlink(target, new_symlink, ec=ec)
    else:
        create_symlink(target, new_symlink, ec=ec)


def copy(
    source: PathLike,
    target: PathLike,
    options: CopyOptions = CopyOptions.NONE,
    *,
    ec: ErrorCode | None = None,
) -> None:
    """Copy files, directories and symlinks.

    Directories are copied one level deep (files only) unless
    ``CopyOptions.RECURSIVE`` is given. Symlinks are followed unless
    ``COPY_SYMLINKS`` or ``SKIP_SYMLINKS`` is given. ``DIRECTORIES_ONLY``
    copies the directory structure without files; ``CREATE_SYMLINKS``
    and ``CREATE_HARD_LINKS`` link files instead of copying them.

    Raises:
        FilesystemError: On the first failure when ``ec`` is None.
    """
    local = ErrorCode()
    _copy(_path(source), _path(target), options, local, top_level=True)
    report(local.failure, ec)


def _copy(src: BaseFsPath, dst: BaseFsPath, options: CopyOptions, ec: ErrorCode, *, top_level: bool) -> None:
    no_follow = options & (CopyOptions.COPY_SYMLINKS | CopyOptions.SKIP_SYMLINKS | CopyOptions.CREATE_SYMLINKS)
    source_status = symlink_status(src, ec=ec) if no_follow else status(src, ec=ec)
    if ec:
        return
    if not source_status.exists():
        report(Failure.from_errno(errno.ENOENT, "copy", src, dst), ec)
        return
    target_status = status(dst, ec=ec)
    if ec:
        return
    if target_status.exists() and equivalent(src, dst, ec=ec):
        report(Failure.from_errno(errno.EEXIST, "copy", src, dst), ec)
        return

    if source_status.is_symlink():
        if options & CopyOptions.SKIP_SYMLINKS:
            return
        copy_symlink(src, dst, ec=ec)
    elif source_status.is_regular_file():
        if options & CopyOptions.DIRECTORIES_ONLY:
            return
        if options & CopyOptions.CREATE_SYMLINKS:
            create_symlink(src, dst, ec=ec)
        elif options & CopyOptions.CREATE_HARD_LINKS:
            create_hard_link(src, dst, ec=ec)
        elif target_status.is_directory():
            copy_file(src, dst / src.filename(), options, ec=ec)
        else:
            copy_file(src, dst, options, ec=ec)
    elif source_status.is_directory():
        if options & CopyOptions.CREATE_SYMLINKS:
            report(Failure.from_errno(errno.EISDIR, "copy", src, dst), ec)
            return
        if not (options & CopyOptions.RECURSIVE or top_level):
            return
        if target_status.exists() and not target_status.is_directory():
            report(Failure.from_errno(errno.EEXIST, "copy", src, dst), ec)
            return
        if not target_status.exists():
            create_directory(dst, ec=ec)
            if ec:
                return
        iterator = DirectoryIterator(src, ec)
        while not ec and not iterator.at_end:
            child = iterator.entry.path
            _copy(child, dst / child.filename(), options, ec, top_level=False)
            if ec:
                break
            iterator.increment(ec)
        iterator.close()
    else:
        report(Failure.from_errno(errno.EOPNOTSUPP, "copy", src, dst), ec)


# ----- links and permissions -----


def read_symlink(p: PathLike, *, ec: ErrorCode | None = None) -> BaseFsPath:
    """Return the stored target of symlink ``p``; empty on reported failure."""
    path = _path(p)
    return type(path)(resolve(get_platform().read_symlink(path), ec, ""))


def permissions(p: PathLike, prms: Perms, *, ec: ErrorCode | None = None) -> None:
    """Change the permission bits of ``p``.

    ``prms`` replaces the current bits unless it carries ``ADD_PERMS``
    or ``REMOVE_PERMS``. With ``SYMLINK_PERMS`` a symlink itself is
    changed instead of its target.

    Raises:
        ValueError: If both ``ADD_PERMS`` and ``REMOVE_PERMS`` are given.
        FilesystemError: If the change failed and ``ec`` is None.
    """
    if prms & Perms.ADD_PERMS and prms & Perms.REMOVE_PERMS:
        msg = "ADD_PERMS and REMOVE_PERMS are mutually exclusive"
        raise ValueError(msg)
    path = _path(p)
    on_link = bool(prms & Perms.SYMLINK_PERMS)
    wanted = prms.bits()
    if prms & (Perms.ADD_PERMS | Perms.REMOVE_PERMS):
        local = ErrorCode()
        current = symlink_status(path, ec=local) if on_link else status(path, ec=local)
        if local:
            report(local.failure, ec)
            return
        if not current.exists():
            _fail(errno.ENOENT, "permissions", ec, path)
            return
        if prms & Perms.ADD_PERMS:
            wanted = current.permissions.bits() | wanted
        else:
            wanted = Perms(int(current.permissions.bits()) & ~int(wanted) & int(Perms.MASK))
    resolve(get_platform().set_permissions(path, Perms(wanted), follow_symlinks=not on_link), ec, None)


# ----- path resolution -----


def current_path(*, ec: ErrorCode | None = None) -> BaseFsPath:
    return FsPath(resolve(get_platform().current_path(), ec, ""))


def set_current_path(p: PathLike, *, ec: ErrorCode | None = None) -> None:
    resolve(get_platform().set_current_path(_path(p)), ec, None)


def temp_directory_path(*, ec: ErrorCode | None = None) -> BaseFsPath:
    return FsPath(resolve(get_platform().temp_directory_path(), ec, ""))


def absolute(p: PathLike, base: PathLike | None = None, *, ec: ErrorCode | None = None) -> BaseFsPath:
    """Compose ``p`` with ``base`` (default: the current directory).

    No file-system access is made beyond reading the current directory
    when ``base`` is omitted or relative. Root-name and root-directory of
    ``p`` take precedence over those of ``base``.
    """
    path = _path(p)
    if path.is_absolute():
        report(None, ec)
        return path.copy()

    if base is None:
        local = ErrorCode()
        anchor = current_path(ec=local)
        if local:
            report(local.failure, ec)
            return type(path)()
    else:
        anchor = _path(base)
        if not anchor.is_absolute():
            anchor = absolute(anchor, ec=ec)
            if ec:
                return type(path)()
    report(None, ec)

    if path.has_root_name():
        if path.has_root_directory():
            return path.copy()
        result = path.root_name()
        result /= anchor.root_directory()
        result /= anchor.relative_path()
        result /= path.relative_path()
        return result
    if path.has_root_directory():
        result = anchor.root_name()
        result /= path
        return result
    return anchor / path


def system_complete(p: PathLike, *, ec: ErrorCode | None = None) -> BaseFsPath:
    path = _path(p)
    if path.empty() or path.is_absolute():
        report(None, ec)
        return path.copy()
    return absolute(path, ec=ec)


def canonical(p: PathLike, base: PathLike | None = None, *, ec: ErrorCode | None = None) -> BaseFsPath:
    """Absolute form of ``p`` with every symlink, ``.`` and ``..`` resolved.

    The path must exist.
    """
    path = _path(p)
    local = ErrorCode()
    full = absolute(path, base, ec=local)
    if local:
        report(local.failure, ec)
        return type(path)()
    return type(path)(resolve(get_platform().canonical(full), ec, ""))


def weakly_canonical(p: PathLike, *, ec: ErrorCode | None = None) -> BaseFsPath:
    """Canonicalize the longest existing prefix of ``p`` and normalize the rest."""
    path = _path(p)
    elements = list(path)
    head = type(path)()
    local = ErrorCode()
    split = len(elements)
    for index, element in enumerate(elements):
        candidate = head / element
        current = status(candidate, ec=local)
        if local:
            report(local.failure, ec)
            return type(path)()
        if not current.exists():
            split = index
            break
        head = candidate

    if not head.empty():
        head = canonical(head, ec=local)
        if local:
            report(local.failure, ec)
            return type(path)()
    report(None, ec)
    tail = elements[split:]
    if not tail:
        return head
    for element in tail:
        head /= element
    return head.lexically_normal()


def relative(p: PathLike, base: PathLike | None = None, *, ec: ErrorCode | None = None) -> BaseFsPath:
    """``p`` relative to ``base`` (default: current directory) after resolving both."""
    return _relative_to(p, base, ec, fallback=False)


def proximate(p: PathLike, base: PathLike | None = None, *, ec: ErrorCode | None = None) -> BaseFsPath:
    """Like :func:`relative`, but returns the resolved ``p`` when no relative form exists."""
    return _relative_to(p, base, ec, fallback=True)


def _relative_to(p: PathLike, base: PathLike | None, ec: ErrorCode | None, *, fallback: bool) -> BaseFsPath:
    path = _path(p)
    local = ErrorCode()
    anchor = current_path(ec=local) if base is None else _path(base)
    if local:
        report(local.failure, ec)
        return type(path)()
    resolved = weakly_canonical(path, ec=local)
    resolved_base = type(path)() if local else weakly_canonical(anchor, ec=local)
    if local:
        report(local.failure, ec)
        return type(path)()
    report(None, ec)
    if fallback:
        return resolved.lexically_proximate(resolved_base)
    return resolved.lexically_relative(resolved_base)
