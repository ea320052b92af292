from __future__ import annotations

import socket
import sys
from dataclasses import dataclass, field
from typing import Callable, TextIO

from user_manager.accounts.store import AccountStore
from user_manager.archive.store import ArchiveStore
from user_manager.config.settings import Settings
from user_manager.prompts import ConsolePrompter


@dataclass
class AppContext:
    settings: Settings
    prompter: ConsolePrompter
    accounts: AccountStore
    archives: ArchiveStore
    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)
    hostname: Callable[[], str] = socket.gethostname

    def echo(self, message: str = "") -> None:
        print(message, file=self.out)

    def warn(self, message: str) -> None:
        print(f"Warning: {message}", file=self.err)

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        return cls(
            settings=settings,
            prompter=ConsolePrompter(),
            accounts=AccountStore(),
            archives=ArchiveStore(settings.archive_dir),
        )
