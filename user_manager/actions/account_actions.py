"""Account creation and deletion operations."""

from __future__ import annotations

from pathlib import Path

from user_manager.accounts.exceptions import (
    AccountError,
    ExpirationError,
    InputError,
    SystemAccountProtectedError,
)
from user_manager.app.context import AppContext
from user_manager.domain.models import Account, NewAccount
from user_manager.logging import log_action, operation_context

DELETE_HOME_CONFIRMATION = "1"


def collect_new_account(context: AppContext) -> NewAccount:
    prompter = context.prompter
    username = prompter.ask_required("Enter the username to add: ", field_name="username")
    full_name = prompter.ask("Enter the full name of the user: ", field_name="full name")
    password = prompter.ask_secret("Enter the password: ")
    if not password:
        raise InputError("password")
    default_home = context.settings.default_home(username)
    custom_home = prompter.ask_optional(
        f"Enter a custom home directory (press Enter for default {default_home}): ",
        field_name="home directory",
    )
    expiration = prompter.ask_optional(
        "Enter an expiration date (YYYY-MM-DD, press Enter to skip): ",
        field_name="expiration date",
    )
    return NewAccount(
        username=username,
        full_name=full_name,
        home=Path(custom_home) if custom_home else default_home,
        password=password,
        expiration=expiration,
    )


def add_user(context: AppContext) -> Account | None:
    """Create an account, set its password and force a change at first login.

    Account creation and password failures are fatal and not rolled back.
    Expiration and password-expiry failures are warnings only.
    """
    with operation_context("add") as log:
        new_account = collect_new_account(context)
        context.echo(
            f"Creating user '{new_account.username}' with home directory '{new_account.home}'..."
        )
        context.accounts.create(new_account)
        context.accounts.set_password(new_account.username, new_account.password)

        if new_account.expiration:
            try:
                context.accounts.set_expiration(new_account.username, new_account.expiration)
            except ExpirationError as error:
                log.warning(f"{error} {error.detail}".strip())
                context.warn(str(error))
            else:
                context.echo(f"Expiration date set to: {new_account.expiration}")

        try:
            context.accounts.expire_password(new_account.username)
        except AccountError as error:
            log.warning(str(error))
            context.warn(str(error))

        context.echo(f"User '{new_account.username}' added successfully!")
        context.echo(f"Home Directory: {new_account.home}")
        context.echo(f"Hostname: {context.hostname()}")
        log_action(
            f"Added new user {new_account.username} with home directory {new_account.home}."
        )
        return context.accounts.lookup(new_account.username)


def delete_user(context: AppContext) -> Account:
    with operation_context("delete") as log:
        username = context.prompter.ask_required(
            "Enter the username to delete: ", field_name="username"
        )
        account = context.accounts.get(username)
        if account.is_system_account(context.settings.min_human_uid):
            raise SystemAccountProtectedError(account.username, account.uid)

        confirm = context.prompter.ask(
            f"Press 1 to delete the home directory of '{username}': ",
            field_name="confirmation",
        )
        remove_home = confirm == DELETE_HOME_CONFIRMATION
        log.debug(f"Deleting {username} (uid={account.uid}, remove_home={remove_home})")
        context.accounts.delete(username, remove_home=remove_home)

        context.echo(f"User '{username}' has been deleted successfully.")
        log_action(f"Deleted user account for {username}.")
        return account
