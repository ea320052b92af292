from __future__ import annotations

import sys
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger

# Action log entries look like "2024-05-01 13:37:00 - Deleted user account for bob."
ACTION_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} - {message}"


def _is_action_record(record) -> bool:
    """Only records explicitly bound with ``audit=True`` reach the action log."""
    return bool(record["extra"].get("audit"))


def debug_log_path(log_file: Path) -> Path:
    """Debug log lives next to the action log (user_management.log -> user_management.debug.log)."""
    return log_file.with_name(f"{log_file.stem}.debug{log_file.suffix or '.log'}")


def setup_logging(
    *,
    log_file: Path,
    debug: bool = False,
) -> Logger:
    """
    Setup logging sinks for a user-manager run.

    Logging Tiers:
    - Action log: one line per completed action, never rotated
    - DEBUG: command execution, operation timing (only with debug enabled)

    Log Files:
    - <log_file>: audit-bound INFO events in "<timestamp> - <message>" form
    - <log_file stem>.debug.log: DEBUG+ events when debug is enabled (3 day retention)

    Args:
        log_file: Path of the action log, created if missing
        debug: Enable DEBUG console output and the debug log file
    """
    logger.remove()
    logger.configure(extra={"job_id": "-", "tags": [], "source": "APP", "audit": False})

    # SINK 1: Console (stderr) - only when debugging, user output goes through print()
    if debug:
        logger.add(
            sys.stderr,
            level="DEBUG",
            backtrace=False,
            diagnose=False,
            colorize=True,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[source]: <15}</cyan> | "
                "<blue>{extra[job_id]: <15}</blue> | "
                "{message}"
            ),
        )

    log_file.parent.mkdir(parents=True, exist_ok=True)

    # SINK 2: Action log - synchronous so a fatal exit right after never loses a line
    logger.add(
        log_file,
        level="INFO",
        enqueue=False,
        backtrace=False,
        diagnose=False,
        filter=_is_action_record,
        format=ACTION_LOG_FORMAT,
    )

    # SINK 3: Debug Log - Detailed diagnostics (DEBUG+ when debug=True)
    if debug:
        logger.add(
            debug_log_path(log_file),
            level="DEBUG",
            rotation="10 MB",
            retention="3 days",
            compression="zip",
            backtrace=True,
            diagnose=False,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{extra[source]: <15} | "
                "{extra[job_id]: <15} | "
                "{extra[tags]} | "
                "{message}"
            ),
        )

    return logger


def get_logger(
    *,
    job_id: str | None = None,
    tags: Iterable[str] | None = None,
    source: str | None = None,
) -> Logger:
    """
    Get a logger with bound context.

    Args:
        job_id: Job identifier for tracking operations
        tags: Tags for filtering (e.g., ["accounts", "archive"])
        source: Source component (e.g., "accounts", "archive")

    Returns:
        Logger with bound context
    """
    extras: dict[str, object] = {}
    if job_id is not None:
        extras["job_id"] = job_id
    if tags is not None:
        extras["tags"] = list(tags)
    if source is not None:
        extras["source"] = source
    return logger.bind(**extras)


def log_action(message: str) -> None:
    """Append one entry to the action log. Never pass secrets here."""
    logger.bind(audit=True, source="audit", tags=["audit"]).info(message)


@contextmanager
def operation_context(operation: str, **details):
    """
    Context manager for tracking an operation with automatic timing.

    Logs start, completion and failure at DEBUG/ERROR level. None of these
    records are audit-bound, so they never reach the action log.

    Args:
        operation: Operation name (e.g., "add", "archive")
        **details: Operation-specific details to log

    Yields:
        Logger bound with job_id and operation context

    Example:
        with operation_context("archive") as log:
            log.debug("Resolving home directory")
    """
    job_id = f"{operation}-{uuid.uuid4().hex[:8]}"

    with logger.contextualize(job_id=job_id, operation=operation, **details):
        start_time = time.time()
        log = get_logger(source=operation, job_id=job_id, tags=[operation])

        log.debug(f"{operation.capitalize()} started")

        try:
            yield log
            duration = time.time() - start_time
            log.debug(
                f"{operation.capitalize()} completed in {duration:.2f}s"
            )
        except Exception as e:
            duration = time.time() - start_time
            log.error(
                f"{operation.capitalize()} failed after {duration:.2f}s: "
                f"{type(e).__name__}: {e}"
            )
            raise


class LoggerFactory:
    """
    Factory for creating domain-specific loggers with automatic context.

    Each factory method returns a logger pre-configured with appropriate
    source and tags for the domain.
    """

    @staticmethod
    def for_accounts() -> Logger:
        """Logger for account database operations."""
        return get_logger(source="accounts", tags=["accounts", "system"])

    @staticmethod
    def for_archive(job_id: str | None = None) -> Logger:
        """Logger for home directory archive/restore operations."""
        if job_id is None:
            job_id = f"archive-{uuid.uuid4().hex[:8]}"
        return get_logger(job_id=job_id, source="archive", tags=["archive", "storage"])

    @staticmethod
    def for_commands() -> Logger:
        """Logger for external command execution."""
        return get_logger(source="commands", tags=["commands"])

    @staticmethod
    def for_system() -> Logger:
        """Logger for system operations (startup, dispatch, config)."""
        return get_logger(source="system", tags=["system"])
