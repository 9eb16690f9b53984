"""Error model shared by every fallible pathkit operation.

Each operation that touches the file system is available in two call
shapes over a single fallible core:

- raising: ``status(p)`` raises :class:`FilesystemError` on failure.
- reporting: ``status(p, ec=ErrorCode())`` records the failure in the
  out-parameter and returns a documented default instead.

The platform layer produces an :class:`Outcome` (tagged success or
failure); :func:`resolve` turns it into one of the two shapes above.
"""

from __future__ import annotations

import errno as errno_codes
import os
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from pathkit.core.path import BaseFsPath

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Category of a file-system failure.

    Attributes:
        NOT_FOUND: The path (or a component of it) does not exist.
        PERMISSION_DENIED: Access was refused by the operating system.
        NOT_A_DIRECTORY: A directory was required but something else was found.
        ALREADY_EXISTS: The target of a create/copy/link already exists.
        CROSS_DEVICE: The operation cannot span file systems (e.g. rename).
        LOOP_DETECTED: Too many levels of symbolic links.
        OTHER: Any other native error; the errno is kept on the error.
    """

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    NOT_A_DIRECTORY = "not_a_directory"
    ALREADY_EXISTS = "already_exists"
    CROSS_DEVICE = "cross_device"
    LOOP_DETECTED = "loop_detected"
    OTHER = "other"


_ERRNO_KINDS: dict[int, ErrorKind] = {
    errno_codes.ENOENT: ErrorKind.NOT_FOUND,
    errno_codes.EACCES: ErrorKind.PERMISSION_DENIED,
    errno_codes.EPERM: ErrorKind.PERMISSION_DENIED,
    errno_codes.ENOTDIR: ErrorKind.NOT_A_DIRECTORY,
    errno_codes.EEXIST: ErrorKind.ALREADY_EXISTS,
    errno_codes.EXDEV: ErrorKind.CROSS_DEVICE,
    errno_codes.ELOOP: ErrorKind.LOOP_DETECTED,
}


def kind_from_errno(code: int | None) -> ErrorKind:
    """Map a native errno value to an :class:`ErrorKind`.

    Args:
        code: errno value, or None when the OS did not provide one.

    Returns:
        The matching kind, or ``ErrorKind.OTHER`` for unmapped codes.
    """
    if code is None:
        return ErrorKind.OTHER
    return _ERRNO_KINDS.get(code, ErrorKind.OTHER)


def _quote(path: BaseFsPath | None) -> str | None:
    if path is None or path.empty():
        return None
    return f'"{path.string()}"'


@dataclass(frozen=True, slots=True)
class Failure:
    """Description of one failed file-system call.

    Attributes:
        kind: Error category.
        errno: Native error code (0 when the failure is not an OS error).
        reason: Human-readable reason, usually ``os.strerror(errno)``.
        operation: Name of the operation that failed (e.g. ``"status"``).
        path1: First offending path, if any.
        path2: Second offending path, if any.
    """

    kind: ErrorKind
    errno: int
    reason: str
    operation: str
    path1: BaseFsPath | None = None
    path2: BaseFsPath | None = None

    @classmethod
    def from_os_error(
        cls,
        exc: OSError,
        operation: str,
        path1: BaseFsPath | None = None,
        path2: BaseFsPath | None = None,
    ) -> Failure:
        """Build a failure from an ``OSError`` raised by the OS layer."""
        code = exc.errno or 0
        reason = exc.strerror or (os.strerror(code) if code else str(exc))
        return cls(
            kind=kind_from_errno(exc.errno),
            errno=code,
            reason=reason,
            operation=operation,
            path1=path1,
            path2=path2,
        )

    @classmethod
    def from_errno(
        cls,
        code: int,
        operation: str,
        path1: BaseFsPath | None = None,
        path2: BaseFsPath | None = None,
    ) -> Failure:
        """Build a failure for a condition detected without an OS call."""
        return cls(
            kind=kind_from_errno(code),
            errno=code,
            reason=os.strerror(code),
            operation=operation,
            path1=path1,
            path2=path2,
        )

    def message(self) -> str:
        """Return ``operation: reason: "path1", "path2"``."""
        text = f"{self.operation}: {self.reason}"
        first = _quote(self.path1)
        second = _quote(self.path2)
        if first:
            text += f": {first}"
        if second:
            text += f", {second}"
        return text

    def to_exception(self) -> FilesystemError:
        """Convert the failure to the raising-mode exception."""
        return FilesystemError(
            self.reason,
            kind=self.kind,
            errno=self.errno,
            operation=self.operation,
            path1=self.path1,
            path2=self.path2,
        )


class FilesystemError(OSError):
    """Raised by the raising form of every fallible operation.

    Subclasses ``OSError`` so callers that already handle OS errors keep
    working. The offending paths are available as ``path1`` and ``path2``
    (None when not applicable).
    """

    def __init__(
        self,
        reason: str,
        *,
        kind: ErrorKind = ErrorKind.OTHER,
        errno: int = 0,
        operation: str = "",
        path1: BaseFsPath | None = None,
        path2: BaseFsPath | None = None,
    ) -> None:
        super().__init__(errno, reason)
        self.kind = kind
        self.operation = operation
        self.path1 = path1
        self.path2 = path2
        self._failure = Failure(
            kind=kind,
            errno=errno,
            reason=reason,
            operation=operation,
            path1=path1,
            path2=path2,
        )

    def __str__(self) -> str:
        return self._failure.message()


@dataclass(slots=True)
class ErrorCode:
    """Out-parameter for the reporting form of an operation.

    An ``ErrorCode`` is falsy while clear and truthy once a failure has
    been recorded, so the usual check reads ``if ec: ...``. Every
    reporting call overwrites it: cleared on success, assigned on failure.
    """

    failure: Failure | None = None

    def __bool__(self) -> bool:
        return self.failure is not None

    @property
    def kind(self) -> ErrorKind | None:
        """Kind of the recorded failure, None when clear."""
        return self.failure.kind if self.failure is not None else None

    @property
    def value(self) -> int:
        """Native errno of the recorded failure, 0 when clear."""
        return self.failure.errno if self.failure is not None else 0

    def message(self) -> str:
        """Formatted failure message, empty when clear."""
        return self.failure.message() if self.failure is not None else ""

    def assign(self, failure: Failure) -> None:
        self.failure = failure

    def clear(self) -> None:
        self.failure = None


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Tagged result of one platform call: a value or a failure."""

    value: T | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def error(cls, failure: Failure) -> Outcome[T]:
        return cls(failure=failure)


def report(failure: Failure | None, ec: ErrorCode | None) -> None:
    """Deliver ``failure`` in the mode chosen by the caller.

    Raises the failure when ``ec`` is None, otherwise stores it. A None
    failure clears ``ec``.

    Raises:
        FilesystemError: If ``failure`` is set and ``ec`` is None.
    """
    if failure is None:
        if ec is not None:
            ec.clear()
        return
    if ec is None:
        raise failure.to_exception()
    ec.assign(failure)


def resolve(outcome: Outcome[T], ec: ErrorCode | None, default: T) -> T:
    """Unwrap an outcome in raising or reporting mode.

    Args:
        outcome: Result of the underlying platform call.
        ec: Caller's out-parameter, or None for raising mode.
        default: Value returned when the call failed in reporting mode.

    Returns:
        The outcome's value on success, ``default`` on reported failure.

    Raises:
        FilesystemError: If the call failed and ``ec`` is None.
    """
    report(outcome.failure, ec)
    if outcome.failure is not None:
        return default
    return outcome.value  # type: ignore[return-value]
