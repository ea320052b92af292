"""Home directory archives stored as ``<archive-dir>/<username>.tgz``.

Archives are produced and consumed with the system ``tar`` binary. Paths are
passed as given, so an archive of ``/home/alice`` contains ``home/alice/...``
and extracting it into ``/srv/restore`` yields ``/srv/restore/home/alice/...``.
"""

from __future__ import annotations

from pathlib import Path

from user_manager.accounts.command_runners import run_checked_command
from user_manager.accounts.exceptions import (
    ArchiveCreateError,
    ArchiveDirectoryError,
    ArchiveExtractError,
    ArchiveNotFoundError,
    CommandError,
    HomeDirectoryNotFoundError,
    TargetDirectoryError,
)
from user_manager.domain.models import HomeArchive
from user_manager.logging import LoggerFactory

from .lock import archive_lock

log = LoggerFactory.for_archive()

ARCHIVE_SUFFIX = ".tgz"
PARTIAL_SUFFIX = ".partial"


class ArchiveStore:
    """Create and extract per-user home directory archives."""

    def __init__(self, archive_dir: Path):
        self.archive_dir = Path(archive_dir)

    def archive_for(self, username: str) -> HomeArchive:
        return HomeArchive(
            username=username,
            path=self.archive_dir / f"{username}{ARCHIVE_SUFFIX}",
        )

    def ensure_directory(self) -> bool:
        """Create the archive directory and its parents if missing.

        Returns:
            True if the directory was created, False if it already existed

        Raises:
            ArchiveDirectoryError: If the directory cannot be created
        """
        if self.archive_dir.is_dir():
            return False
        try:
            self.archive_dir.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise ArchiveDirectoryError(self.archive_dir, str(error)) from error
        log.debug(f"Created archive directory {self.archive_dir}")
        return True

    def create(self, username: str, home: Path) -> HomeArchive:
        """Archive ``home`` to ``<archive-dir>/<username>.tgz``.

        tar writes to a temporary file first so a failed run never replaces an
        existing archive. tar's own diagnostics are logged at DEBUG only.
        """
        if not home.is_dir():
            raise HomeDirectoryNotFoundError(home)
        archive = self.archive_for(username)
        partial = archive.path.with_name(archive.path.name + PARTIAL_SUFFIX)
        with archive_lock(self.archive_dir, username):
            try:
                run_checked_command(["tar", "-zcf", str(partial), str(home)])
            except CommandError as error:
                partial.unlink(missing_ok=True)
                raise ArchiveCreateError(archive.path, error.output) from error
            try:
                partial.replace(archive.path)
            except OSError as error:
                partial.unlink(missing_ok=True)
                raise ArchiveCreateError(archive.path, str(error)) from error
        log.debug(f"Archived {home} to {archive.path}")
        return archive

    def extract(self, username: str, target: Path) -> HomeArchive:
        """Extract the user's archive into ``target``, creating it if needed.

        Raises:
            ArchiveNotFoundError: If no archive exists; nothing is created
            TargetDirectoryError: If ``target`` cannot be created
            ArchiveExtractError: If tar fails
        """
        archive = self.require(username)
        self.ensure_target(target)
        with archive_lock(self.archive_dir, username):
            try:
                run_checked_command(["tar", "-zxf", str(archive.path), "-C", str(target)])
            except CommandError as error:
                raise ArchiveExtractError(archive.path, target, error.output) from error
        log.debug(f"Extracted {archive.path} into {target}")
        return archive

    def require(self, username: str) -> HomeArchive:
        archive = self.archive_for(username)
        if not archive.exists:
            raise ArchiveNotFoundError(archive.path)
        return archive

    @staticmethod
    def ensure_target(target: Path) -> None:
        if target.is_dir():
            return
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise TargetDirectoryError(target, str(error)) from error
