"""External command execution for account and archive tools."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from user_manager.logging import LoggerFactory

from .exceptions import CommandError

log = LoggerFactory.for_commands()


def validate_command_args(args: list[str]) -> None:
    """Validate command arguments before executing.

    Empty strings are legitimate arguments (e.g. an empty GECOS field for
    ``useradd -c ""``); only the program name must be non-empty.
    """
    if not args or not args[0] or not all(isinstance(arg, str) for arg in args):
        raise ValueError("Command args must be a non-empty list of strings.")


def run_command(
    args: list[str],
    *,
    input_text: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command and capture output.

    ``input_text`` is fed on stdin and never logged; it may carry a password.
    """
    validate_command_args(args)
    log.debug(f"Running command: {args!r} cwd={cwd}")
    result = subprocess.run(
        args,
        input=input_text,
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    log.debug(f"Command return code: {result.returncode}")
    log.debug(f"Command stdout: {result.stdout.strip()!r}")
    log.debug(f"Command stderr: {result.stderr.strip()!r}")
    return result


def run_checked_command(
    args: list[str],
    *,
    input_text: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> str:
    """Run a command and raise CommandError if it fails or cannot be started."""
    try:
        result = run_command(args, input_text=input_text, cwd=cwd)
    except OSError as error:
        log.debug(f"Command could not be started: {error}")
        raise CommandError(args, None, str(error)) from error
    if result.returncode != 0:
        stderr = result.stderr.strip()
        stdout = result.stdout.strip()
        message = stderr or stdout or "Command failed"
        raise CommandError(args, result.returncode, message)
    return result.stdout
