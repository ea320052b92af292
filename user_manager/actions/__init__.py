"""Operation handlers, one per command-line flag."""

from __future__ import annotations

from typing import Callable, Dict

from user_manager.app.context import AppContext
from user_manager.domain.models import Operation

from .account_actions import add_user, delete_user
from .archive_actions import archive_user, restore_archive
from .password_actions import generate_password

OPERATION_HANDLERS: Dict[Operation, Callable[[AppContext], object]] = {
    Operation.ADD: add_user,
    Operation.ARCHIVE: archive_user,
    Operation.PASSWORD: generate_password,
    Operation.DELETE: delete_user,
    Operation.RESTORE: restore_archive,
}

__all__ = [
    "OPERATION_HANDLERS",
    "add_user",
    "archive_user",
    "delete_user",
    "generate_password",
    "restore_archive",
]
