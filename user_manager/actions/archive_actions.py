"""Home directory archive and restore operations."""

from __future__ import annotations

from pathlib import Path

from user_manager.accounts.exceptions import HomeDirectoryNotFoundError
from user_manager.app.context import AppContext
from user_manager.domain.models import HomeArchive
from user_manager.logging import log_action, operation_context


def archive_user(context: AppContext) -> HomeArchive:
    """Archive ``<home-root>/<username>`` into the archive directory.

    The home directory is always derived from the home root, even when the
    account was created with a custom home. A mismatch is logged, not fixed.
    """
    with operation_context("archive") as log:
        username = context.prompter.ask_required(
            "Enter the username to archive: ", field_name="username"
        )
        archives = context.archives
        if not archives.archive_dir.is_dir():
            context.echo(f"Creating archive directory: {archives.archive_dir}...")
        archives.ensure_directory()

        home = context.settings.default_home(username)
        account = context.accounts.lookup(username)
        if account is not None and account.home != home:
            log.warning(
                f"Account {username} has home {account.home}, archiving {home} instead"
            )
        if not home.is_dir():
            raise HomeDirectoryNotFoundError(home)

        archive = archives.archive_for(username)
        context.echo(f"Archiving {home} to {archive.path}...")
        archive = archives.create(username, home)

        context.echo(f"Archive created successfully: {archive.path}")
        log_action(f"Archived home directory for user {username} to {archive.path}.")
        return archive


def restore_archive(context: AppContext) -> Path:
    """Extract a user's archive into a target directory (default: their home).

    Archive member paths are kept, so an archive of /home/alice restored into
    /home/alice ends up under /home/alice/home/alice.
    """
    with operation_context("restore"):
        username = context.prompter.ask_required(
            "Enter the username to restore archive for: ", field_name="username"
        )
        context.archives.require(username)

        default_target = context.settings.default_home(username)
        target_answer = context.prompter.ask_optional(
            f"Enter the target directory for restoration (default: {default_target}): ",
            field_name="target directory",
        )
        target = Path(target_answer) if target_answer else default_target
        context.archives.extract(username, target)

        context.echo(f"Archive restored successfully to {target}.")
        log_action(f"Restored archive for user {username} to {target}.")
        return target
