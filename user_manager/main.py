import argparse
import os
import sys
from typing import Iterable, List, Optional

from user_manager import actions
from user_manager.accounts.exceptions import PrivilegeError, UserManagerError
from user_manager.app.context import AppContext
from user_manager.config.settings import load_settings
from user_manager.domain.models import USAGE_ORDER, Operation, order_operations
from user_manager.logging import LoggerFactory, setup_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class UsageError(Exception):
    """Command line could not be parsed into at least one operation."""


class _FlagParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad flags via UsageError instead of exiting 2."""

    def error(self, message):
        raise UsageError(message)


def format_usage(prog: str = "user-manager") -> str:
    flags = "".join(operation.flag for operation in USAGE_ORDER[:4])
    lines = [
        "",
        f"Usage: {prog} -{flags}[{USAGE_ORDER[4].flag}]",
        "***** Manage Local User Accounts *****",
        "",
    ]
    lines.extend(f" {op.option}  {op.description}" for op in USAGE_ORDER)
    lines.append("")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = _FlagParser(prog="user-manager", add_help=False)
    for operation in USAGE_ORDER:
        parser.add_argument(
            operation.option,
            dest=operation.name.lower(),
            action="store_true",
            help=operation.description,
        )
    return parser


def parse_operations(argv: Optional[Iterable[str]] = None) -> List[Operation]:
    """Return the requested operations in execution order.

    Raises:
        UsageError: On an unknown flag, a stray argument, or no flags at all
    """
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    requested = [op for op in Operation if getattr(args, op.name.lower())]
    if not requested:
        raise UsageError("no operation requested")
    return order_operations(requested)


def require_root() -> None:
    if os.geteuid() != 0:
        raise PrivilegeError()


def run_operations(operations: Iterable[Operation], context: AppContext) -> int:
    """Run each operation in turn; the first fatal error stops the run."""
    log = LoggerFactory.for_system()
    for operation in operations:
        handler = actions.OPERATION_HANDLERS[operation]
        log.debug(f"Dispatching {operation.name.lower()} ({operation.option})")
        try:
            handler(context)
        except UserManagerError as error:
            print(f"Error: {error}", file=context.err)
            return EXIT_FAILURE
    return EXIT_OK


def main(argv=None, context: Optional[AppContext] = None) -> int:
    try:
        require_root()
    except PrivilegeError as error:
        print(f"Error: {error}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        operations = parse_operations(argv)
    except UsageError:
        print(format_usage())
        return EXIT_FAILURE

    settings = context.settings if context is not None else load_settings()
    try:
        setup_logging(log_file=settings.log_file, debug=settings.debug)
    except OSError as error:
        print(f"Error: Cannot open log file {settings.log_file}: {error}", file=sys.stderr)
        return EXIT_FAILURE
    if context is None:
        context = AppContext.from_settings(settings)

    LoggerFactory.for_system().debug(
        f"Requested operations: {[op.name.lower() for op in operations]}"
    )
    try:
        return run_operations(operations, context)
    except KeyboardInterrupt:
        print("\nAborted.", file=context.err)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
