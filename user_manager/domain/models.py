"""Minimal domain model for account administration.

Type-safe objects for the values that flow between prompts, the account
store and the archive store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


# ==============================================================================
# Operations
# ==============================================================================


class Operation(Enum):
    """A command-line operation and the single-character flag that requests it."""

    ADD = ("s", "Add a new local Linux user account.")
    ARCHIVE = ("a", "Archive a user's home directory.")
    PASSWORD = ("p", "Generate a strong and secure password.")
    DELETE = ("d", "Delete an existing user account.")
    RESTORE = ("r", "Restore a user's home directory from an archive.")

    def __init__(self, flag: str, description: str) -> None:
        self.flag = flag
        self.description = description

    @property
    def option(self) -> str:
        """Command-line option string (e.g., "-s")."""
        return f"-{self.flag}"


# Execution priority, independent of the order flags appear on the command line.
OPERATION_ORDER: tuple[Operation, ...] = (
    Operation.ADD,
    Operation.ARCHIVE,
    Operation.PASSWORD,
    Operation.DELETE,
    Operation.RESTORE,
)

# Order in which flags are listed in the usage text.
USAGE_ORDER: tuple[Operation, ...] = (
    Operation.DELETE,
    Operation.ARCHIVE,
    Operation.ADD,
    Operation.PASSWORD,
    Operation.RESTORE,
)


def order_operations(requested) -> list[Operation]:
    """Return requested operations in execution priority, without duplicates."""
    wanted = set(requested)
    return [operation for operation in OPERATION_ORDER if operation in wanted]


# ==============================================================================
# Account Domain
# ==============================================================================


@dataclass(frozen=True)
class Account:
    """An existing account from the password database."""

    username: str
    uid: int
    home: Path

    def is_system_account(self, min_human_uid: int = 1000) -> bool:
        return self.uid < min_human_uid


@dataclass(frozen=True)
class NewAccount:
    """Parameters collected for account creation.

    The password is excluded from repr so it cannot leak into logs.
    """

    username: str
    full_name: str
    home: Path
    password: str = field(repr=False)
    expiration: Optional[str] = None  # YYYY-MM-DD, passed through to chage


# ==============================================================================
# Archive Domain
# ==============================================================================


@dataclass(frozen=True)
class HomeArchive:
    """A compressed snapshot of one user's home directory."""

    username: str
    path: Path  # <archive-dir>/<username>.tgz

    @property
    def exists(self) -> bool:
        return self.path.is_file()
