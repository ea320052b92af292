"""Home directory archive storage and locking."""

from .lock import archive_lock
from .store import ArchiveStore

__all__ = ["ArchiveStore", "archive_lock"]
