"""Interactive parameter input.

Operations never call ``input()`` directly; they ask a prompter. The console
prompter reads from the terminal, the scripted prompter replays canned
answers for tests and non-interactive use.
"""

from __future__ import annotations

import getpass
from typing import Callable, Iterable, List, Optional

from user_manager.accounts.exceptions import InputError, PromptError


class ConsolePrompter:
    """Read answers from the controlling terminal."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        secret_func: Callable[[str], str] = getpass.getpass,
    ):
        self._input = input_func
        self._secret = secret_func

    def ask(self, prompt: str, *, field_name: str = "input") -> str:
        try:
            return self._input(prompt).strip()
        except EOFError as error:
            raise PromptError(field_name) from error

    def ask_secret(self, prompt: str, *, field_name: str = "password") -> str:
        try:
            return self._secret(prompt)
        except EOFError as error:
            raise PromptError(field_name) from error

    def ask_required(self, prompt: str, *, field_name: str) -> str:
        answer = self.ask(prompt, field_name=field_name)
        if not answer:
            raise InputError(field_name)
        return answer

    def ask_optional(self, prompt: str, *, field_name: str = "input") -> Optional[str]:
        answer = self.ask(prompt, field_name=field_name)
        return answer or None


class ScriptedPrompter(ConsolePrompter):
    """Replay a fixed list of answers in order; records every prompt shown."""

    def __init__(self, answers: Iterable[str]):
        self._answers: List[str] = list(answers)
        self.prompts: List[str] = []
        super().__init__(input_func=self._next_answer, secret_func=self._next_answer)

    def _next_answer(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError(prompt)
        return self._answers.pop(0)

    @property
    def remaining(self) -> List[str]:
        return list(self._answers)
