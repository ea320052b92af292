"""Custom exceptions for account and archive operations.

Every exception in this module is fatal for the current run: the dispatcher
catches ``UserManagerError``, prints a one-line message and exits non-zero.
``ExpirationError`` is the only one downgraded to a warning by its caller.

Exception Hierarchy:
    UserManagerError (base)
        ├── PrivilegeError
        ├── InputError
        │   └── PromptError
        ├── CommandError
        ├── AccountError
        │   ├── AccountNotFoundError
        │   ├── SystemAccountProtectedError
        │   ├── AccountCreateError
        │   ├── PasswordSetError
        │   ├── ExpirationError
        │   └── AccountDeleteError
        └── ArchiveError
            ├── ArchiveDirectoryError
            ├── HomeDirectoryNotFoundError
            ├── ArchiveNotFoundError
            ├── TargetDirectoryError
            ├── ArchiveLockError
            ├── ArchiveBusyError
            ├── ArchiveCreateError
            └── ArchiveExtractError

Usage:
    from user_manager.accounts.exceptions import SystemAccountProtectedError

    if account.uid < min_uid:
        raise SystemAccountProtectedError(account.username, account.uid)
"""

from __future__ import annotations

from pathlib import Path


class UserManagerError(Exception):
    """Base exception for all fatal user-manager errors."""


class PrivilegeError(UserManagerError):
    """The tool was started without superuser privileges."""

    def __init__(self, message: str = "Please run this script as root or use sudo."):
        super().__init__(message)


class InputError(UserManagerError):
    """Operator input was empty or unusable."""

    def __init__(self, field_name: str, reason: str = "a value is required"):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Invalid {field_name}: {reason}.")


class PromptError(InputError):
    """The input stream closed before an answer was read."""

    def __init__(self, field_name: str):
        super().__init__(field_name, "input stream closed")


class CommandError(UserManagerError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, command: list[str], returncode: int | None, output: str = ""):
        self.command = command
        self.returncode = returncode
        self.output = output
        message = f"Command failed ({' '.join(command)})"
        if returncode is not None:
            message += f" with exit code {returncode}"
        if output:
            message += f": {output}"
        super().__init__(message)


class AccountError(UserManagerError):
    """Base exception for account database operations."""


class AccountNotFoundError(AccountError):
    """Account does not exist in the password database."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User '{username}' does not exist.")


class SystemAccountProtectedError(AccountError):
    """Refusal to delete an account below the human-user UID threshold."""

    def __init__(self, username: str, uid: int):
        self.username = username
        self.uid = uid
        super().__init__(f"Cannot delete system account '{username}' (UID: {uid}).")


class AccountCreateError(AccountError):
    def __init__(self, username: str, detail: str = ""):
        self.username = username
        self.detail = detail
        super().__init__("Failed to create user account.")


class PasswordSetError(AccountError):
    def __init__(self, username: str, detail: str = ""):
        self.username = username
        self.detail = detail
        super().__init__("Failed to set password.")


class ExpirationError(AccountError):
    """Setting the account expiration date failed (reported as a warning)."""

    def __init__(self, username: str, expiration: str, detail: str = ""):
        self.username = username
        self.expiration = expiration
        self.detail = detail
        super().__init__(f"Failed to set expiration date for '{username}'.")


class AccountDeleteError(AccountError):
    def __init__(self, username: str, detail: str = ""):
        self.username = username
        self.detail = detail
        super().__init__(f"Failed to delete user '{username}'.")


class ArchiveError(UserManagerError):
    """Base exception for home directory archive operations."""


class ArchiveDirectoryError(ArchiveError):
    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to create archive directory {path}.")


class HomeDirectoryNotFoundError(ArchiveError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Home directory {path} does not exist or is not a directory.")


class ArchiveNotFoundError(ArchiveError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Archive file {path} does not exist.")


class TargetDirectoryError(ArchiveError):
    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not create target directory {path}.")


class ArchiveCreateError(ArchiveError):
    def __init__(self, path: Path, detail: str = ""):
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to create archive {path}.")


class ArchiveExtractError(ArchiveError):
    def __init__(self, path: Path, target: Path, detail: str = ""):
        self.path = path
        self.target = target
        self.detail = detail
        super().__init__("Restoration failed.")


class ArchiveLockError(ArchiveError):
    """The archive lock file could not be opened or locked."""

    def __init__(self, lock_path: Path, reason: str = ""):
        self.lock_path = lock_path
        self.reason = reason
        super().__init__(f"Cannot use archive lock file {lock_path}.")


class ArchiveBusyError(ArchiveError):
    """Another run holds the archive lock for this user."""

    def __init__(self, username: str, lock_path: Path):
        self.username = username
        self.lock_path = lock_path
        super().__init__(
            f"Another archive or restore for '{username}' is in progress ({lock_path})."
        )
