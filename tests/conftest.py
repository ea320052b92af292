"""
Pytest configuration and shared fixtures for user-manager tests.

This module provides common fixtures and utilities used across all test modules.
"""

import io
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest
from loguru import logger

from user_manager.accounts.exceptions import AccountNotFoundError
from user_manager.app.context import AppContext
from user_manager.archive.store import ArchiveStore
from user_manager.config.settings import Settings
from user_manager.domain.models import Account, NewAccount
from user_manager.logging import setup_logging
from user_manager.prompts import ScriptedPrompter


# ==============================================================================
# Account Store Fake
# ==============================================================================


class FakeAccountStore:
    """In-memory stand-in for AccountStore that records every mutation."""

    def __init__(self, accounts: Optional[List[Account]] = None):
        self.accounts: Dict[str, Account] = {a.username: a for a in accounts or []}
        self.passwords: Dict[str, str] = {}
        self.calls: List[tuple] = []
        self.failures: Dict[str, Exception] = {}
        self._next_uid = 1001

    def fail(self, method: str, error: Exception) -> None:
        self.failures[method] = error

    def _maybe_fail(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    def lookup(self, username: str) -> Optional[Account]:
        return self.accounts.get(username)

    def get(self, username: str) -> Account:
        account = self.lookup(username)
        if account is None:
            raise AccountNotFoundError(username)
        return account

    def create(self, new_account: NewAccount) -> None:
        self.calls.append(("create", new_account.username, new_account.full_name, new_account.home))
        self._maybe_fail("create")
        self.accounts[new_account.username] = Account(
            username=new_account.username, uid=self._next_uid, home=new_account.home
        )
        self._next_uid += 1

    def set_password(self, username: str, password: str) -> None:
        self.calls.append(("set_password", username))
        self._maybe_fail("set_password")
        self.passwords[username] = password

    def set_expiration(self, username: str, expiration: str) -> None:
        self.calls.append(("set_expiration", username, expiration))
        self._maybe_fail("set_expiration")

    def expire_password(self, username: str) -> None:
        self.calls.append(("expire_password", username))
        self._maybe_fail("expire_password")

    def delete(self, username: str, *, remove_home: bool = False) -> None:
        self.calls.append(("delete", username, remove_home))
        self._maybe_fail("delete")
        self.accounts.pop(username, None)

    def called(self, method: str) -> bool:
        return any(call[0] == method for call in self.calls)


# ==============================================================================
# Logging
# ==============================================================================


@pytest.fixture(autouse=True)
def reset_logger():
    """
    Auto-use fixture that removes every loguru sink around each test.

    Keeps debug output of the code under test off the console and releases
    log files opened by setup_logging().
    """
    logger.remove()
    yield
    logger.remove()


# ==============================================================================
# Settings & Context Fixtures
# ==============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with every path inside tmp_path."""
    home_root = tmp_path / "home"
    home_root.mkdir()
    return Settings(
        archive_dir=tmp_path / "archive",
        log_file=tmp_path / "log" / "user_management.log",
        home_root=home_root,
    )


@pytest.fixture
def fake_accounts() -> FakeAccountStore:
    return FakeAccountStore(
        [
            Account(username="root", uid=0, home=Path("/root")),
            Account(username="daemon", uid=1, home=Path("/usr/sbin")),
            Account(username="bob", uid=1001, home=Path("/home/bob")),
        ]
    )


@pytest.fixture
def make_context(settings, fake_accounts) -> Callable[..., AppContext]:
    """
    Factory fixture building an AppContext that answers prompts from a script.

    Usage:
        context = make_context(["alice", "Alice", "pw", "", ""])
    """

    def _make(answers=(), **overrides) -> AppContext:
        values = dict(
            settings=settings,
            prompter=ScriptedPrompter(answers),
            accounts=fake_accounts,
            archives=ArchiveStore(settings.archive_dir),
            out=io.StringIO(),
            err=io.StringIO(),
            hostname=lambda: "testhost",
        )
        values.update(overrides)
        return AppContext(**values)

    return _make


@pytest.fixture
def action_log(settings) -> Callable[[], List[str]]:
    """
    Fixture that enables the action log sink and returns a reader for its lines.

    Returns:
        Callable returning the current action log lines (without newlines).
    """
    setup_logging(log_file=settings.log_file)

    def _read() -> List[str]:
        logger.complete()
        if not settings.log_file.exists():
            return []
        return settings.log_file.read_text(encoding="utf-8").splitlines()

    return _read


@pytest.fixture
def home_dir(settings) -> Path:
    """A populated home directory for user 'alice' under the test home root."""
    home = settings.home_root / "alice"
    (home / "docs").mkdir(parents=True)
    (home / ".bashrc").write_text("export EDITOR=vi\n")
    (home / "docs" / "notes.txt").write_text("remember the milk\n")
    return home


@pytest.fixture
def mock_subprocess_run(mocker):
    """
    Fixture providing a mock for subprocess.run.

    Returns:
        Mock object for subprocess.run
    """
    return mocker.patch("subprocess.run")


def output_of(context: AppContext) -> str:
    return context.out.getvalue()


def errors_of(context: AppContext) -> str:
    return context.err.getvalue()
