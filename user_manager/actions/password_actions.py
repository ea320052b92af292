from __future__ import annotations

from user_manager.app.context import AppContext
from user_manager.logging import log_action, operation_context
from user_manager.passwords import generate_password as new_password


def generate_password(context: AppContext) -> str:
    """Print a fresh password once. Only the fact of generation is logged."""
    with operation_context("password"):
        context.echo("Generating a secure password...")
        password = new_password()
        context.echo("Your new secure password is:")
        context.echo(password)
        log_action("Generated a new secure password.")
        return password
