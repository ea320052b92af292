"""Per-user archive lock so two runs never archive or restore the same user at once.

Usage:
    from user_manager.archive.lock import archive_lock

    with archive_lock(archive_dir, "alice"):
        # Create or extract /archive/alice.tgz
        ...
"""

from __future__ import annotations

import fcntl
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from user_manager.accounts.exceptions import ArchiveBusyError, ArchiveLockError
from user_manager.logging import LoggerFactory


log = LoggerFactory.for_archive(job_id="lock")


def lock_path_for(archive_dir: Path, username: str) -> Path:
    return archive_dir / f".{username}.lock"


def _still_linked(handle, lock_path: Path) -> bool:
    """True if ``lock_path`` still names the file behind ``handle``."""
    try:
        current = os.stat(lock_path)
    except FileNotFoundError:
        return False
    opened = os.fstat(handle.fileno())
    return (opened.st_dev, opened.st_ino) == (current.st_dev, current.st_ino)


@contextmanager
def archive_lock(archive_dir: Path, username: str) -> Generator[Path, None, None]:
    """Hold an exclusive advisory lock on ``<archive_dir>/.<username>.lock``.

    The lock is non-blocking: if another process holds it, ArchiveBusyError
    is raised immediately. The archive directory must already exist. The
    lock file is removed before the lock is released; a lock taken on a file
    that has since been unlinked is reported as busy.

    Args:
        archive_dir: Directory holding the user archives
        username: User whose archive is being created or read

    Yields:
        Path of the lock file

    Raises:
        ArchiveBusyError: If another run holds the lock
        ArchiveLockError: If the lock file cannot be opened or locked
    """
    lock_path = lock_path_for(archive_dir, username)
    try:
        handle = open(lock_path, "w")
    except OSError as error:
        raise ArchiveLockError(lock_path, str(error)) from error
    try:
        try:
            os.chmod(lock_path, 0o600)
        except OSError as error:
            raise ArchiveLockError(lock_path, str(error)) from error
        try:
            fcntl.lockf(handle, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except (BlockingIOError, PermissionError) as error:
            raise ArchiveBusyError(username, lock_path) from error
        except OSError as error:
            raise ArchiveLockError(lock_path, str(error)) from error
        if not _still_linked(handle, lock_path):
            raise ArchiveBusyError(username, lock_path)
        log.debug(f"Acquired archive lock {lock_path}")
        try:
            yield lock_path
        finally:
            lock_path.unlink(missing_ok=True)
            fcntl.lockf(handle, fcntl.LOCK_UN)
            log.debug(f"Released archive lock {lock_path}")
    finally:
        handle.close()
