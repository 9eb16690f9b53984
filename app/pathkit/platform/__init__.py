"""Platform collaborators.

The active platform is process-wide. Tests swap in a fake with
:func:`use_platform`::

    with use_platform(FakePlatform()):
        list(DirectoryIterator("/anything"))
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pathkit.platform.base import DirectoryHandle, NativeEntry, Platform
from pathkit.platform.native import NativePlatform

logger = logging.getLogger(__name__)

_current: Platform | None = None


def get_platform() -> Platform:
    """Return the active platform, creating the native one on first use."""
    global _current
    if _current is None:
        _current = NativePlatform()
    return _current


def set_platform(platform: Platform | None) -> None:
    """Install ``platform`` as the active one (None restores the native default)."""
    global _current
    logger.debug("Active platform set to %s", type(platform).__name__ if platform else "default")
    _current = platform


@contextmanager
def use_platform(platform: Platform) -> Iterator[Platform]:
    """Temporarily make ``platform`` the active one."""
    previous = _current
    set_platform(platform)
    try:
        yield platform
    finally:
        set_platform(previous)


__all__ = [
    "DirectoryHandle",
    "NativeEntry",
    "NativePlatform",
    "Platform",
    "get_platform",
    "set_platform",
    "use_platform",
]
