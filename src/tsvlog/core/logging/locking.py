# src/tsvlog/core/logging/locking.py
"""
Exclusive advisory locks on an open destination.

Used by StreamHandler around every single write: acquire right before writing,
release right after. Blocking by default; the lock is held only for one line.

- Unix/Linux/macOS: fcntl.flock
- Windows: msvcrt.locking on the first byte

Usage:
    acquire_lock(stream)
    try:
        stream.write(line)
        stream.flush()
    finally:
        release_lock(stream)

Streams without a real file descriptor (io.StringIO, pytest capture objects)
cannot be locked; `supports_locking()` tells the caller to skip them.
"""

import io
import logging
import platform

logger = logging.getLogger(__name__)


class FileLockError(OSError):
    """Lock operation failed."""


def supports_locking(stream) -> bool:
    try:
        stream.fileno()
    except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
        return False
    return True


def acquire_lock(stream, non_blocking: bool = False) -> None:
    """
    Take an exclusive lock on `stream`.

    Raises:
        FileLockError: the lock could not be taken
    """
    if platform.system() == "Windows":
        _acquire_lock_windows(stream, non_blocking)
    else:
        _acquire_lock_unix(stream, non_blocking)


def release_lock(stream) -> None:
    if platform.system() == "Windows":
        _release_lock_windows(stream)
    else:
        _release_lock_unix(stream)


# ============================================
# Unix/Linux/macOS
# ============================================

def _acquire_lock_unix(stream, non_blocking: bool) -> None:
    import fcntl

    flags = fcntl.LOCK_EX
    if non_blocking:
        flags |= fcntl.LOCK_NB
    try:
        fcntl.flock(stream.fileno(), flags)
    except OSError as e:
        logger.error("Failed to lock %s: %s", getattr(stream, "name", stream), e)
        raise FileLockError(f"fcntl.flock failed: {e}") from e


def _release_lock_unix(stream) -> None:
    import fcntl

    try:
        fcntl.flock(stream.fileno(), fcntl.LOCK_UN)
    except OSError as e:
        raise FileLockError(f"fcntl.flock unlock failed: {e}") from e


# ============================================
# Windows
# ============================================

def _acquire_lock_windows(stream, non_blocking: bool) -> None:
    import msvcrt

    # LK_NBLCK: non-blocking, LK_LOCK: retries for ~10s then fails
    mode = msvcrt.LK_NBLCK if non_blocking else msvcrt.LK_LOCK
    try:
        msvcrt.locking(stream.fileno(), mode, 1)
    except OSError as e:
        logger.error("Failed to lock %s: %s", getattr(stream, "name", stream), e)
        raise FileLockError(f"msvcrt.locking failed: {e}") from e


def _release_lock_windows(stream) -> None:
    import msvcrt

    try:
        msvcrt.locking(stream.fileno(), msvcrt.LK_UNLCK, 1)
    except OSError as e:
        raise FileLockError(f"msvcrt.locking unlock failed: {e}") from e
