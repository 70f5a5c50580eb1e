"""Operator prompt abstraction."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt


class Prompter(Protocol):
    """Blocking operator input. Every call waits indefinitely."""

    def ask(self, text: str, default: str | None = None) -> str: ...

    def confirm(self, text: str) -> bool: ...

    def wait(self, text: str) -> None: ...


class RichPrompter:
    """Prompter reading from the terminal through rich."""

    def __init__(self, console: Console):
        self.console = console

    def ask(self, text: str, default: str | None = None) -> str:
        if default is None:
            return Prompt.ask(text, console=self.console)
        return Prompt.ask(text, console=self.console, default=default, show_default=bool(default))

    def confirm(self, text: str) -> bool:
        return Confirm.ask(text, console=self.console, default=False)

    def wait(self, text: str) -> None:
        self.console.input(text)
