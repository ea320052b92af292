"""Account database operations backed by the shadow-utils command set.

``AccountStore`` is the only place that mutates the OS account database.
Each failure cause maps to its own exception from ``exceptions`` so callers
can decide what is fatal and what is only a warning.
"""

from __future__ import annotations

import pwd
from pathlib import Path
from typing import Optional

from user_manager.domain.models import Account, NewAccount
from user_manager.logging import LoggerFactory

from .command_runners import run_checked_command
from .exceptions import (
    AccountCreateError,
    AccountDeleteError,
    AccountError,
    AccountNotFoundError,
    CommandError,
    ExpirationError,
    PasswordSetError,
)

log = LoggerFactory.for_accounts()


class AccountStore:
    """Create, modify, look up and delete local accounts."""

    def lookup(self, username: str) -> Optional[Account]:
        """Return the account for ``username``, or None when it does not exist."""
        try:
            entry = pwd.getpwnam(username)
        except KeyError:
            log.debug(f"No password database entry for {username!r}")
            return None
        return Account(username=entry.pw_name, uid=entry.pw_uid, home=Path(entry.pw_dir))

    def get(self, username: str) -> Account:
        account = self.lookup(username)
        if account is None:
            raise AccountNotFoundError(username)
        return account

    def create(self, new_account: NewAccount) -> None:
        """Create the account and its home directory."""
        command = [
            "useradd",
            "-c",
            new_account.full_name,
            "-m",
            "-d",
            str(new_account.home),
            new_account.username,
        ]
        try:
            run_checked_command(command)
        except CommandError as error:
            raise AccountCreateError(new_account.username, error.output) from error
        log.debug(f"Created account {new_account.username} at {new_account.home}")

    def set_password(self, username: str, password: str) -> None:
        try:
            run_checked_command(["chpasswd"], input_text=f"{username}:{password}\n")
        except CommandError as error:
            raise PasswordSetError(username, error.output) from error
        log.debug(f"Password set for {username}")

    def set_expiration(self, username: str, expiration: str) -> None:
        """Set the account expiration date (YYYY-MM-DD)."""
        try:
            run_checked_command(["chage", "-E", expiration, username])
        except CommandError as error:
            raise ExpirationError(username, expiration, error.output) from error
        log.debug(f"Expiration for {username} set to {expiration}")

    def expire_password(self, username: str) -> None:
        """Force a password change at next login."""
        try:
            run_checked_command(["passwd", "-e", username])
        except CommandError as error:
            raise AccountError(
                f"Failed to expire password for '{username}': {error.output}"
            ) from error

    def delete(self, username: str, *, remove_home: bool = False) -> None:
        command = ["userdel", "-r", username] if remove_home else ["userdel", username]
        try:
            run_checked_command(command)
        except CommandError as error:
            raise AccountDeleteError(username, error.output) from error
        log.debug(f"Deleted account {username} (remove_home={remove_home})")
