"""Session controller - drives display, start and completion of one task."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule

from .errors import InvalidSessionTransitionError
from .models import TaskDefinition
from .prompts import Prompter

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    IDLE = "idle"
    DISPLAYED = "displayed"
    STARTED = "started"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Session:
    """A completed timing session handed from the controller to the recorder."""

    task: TaskDefinition
    started_at: float
    completed_at: float

    @property
    def duration_seconds(self) -> int:
        return elapsed_seconds(self.started_at, self.completed_at)


def elapsed_seconds(start: float, end: float) -> int:
    """Whole seconds between two clock readings, floored and never negative."""
    return max(0, math.floor(end - start))


class SessionController:
    """Single-task state machine: idle -> displayed -> started -> completed.

    Nothing advances on its own; each transition waits on the operator. The
    controller forgets the session once it is completed, so an interrupted
    run leaves nothing behind for the recorder.
    """

    def __init__(
        self,
        console: Console,
        prompter: Prompter,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.console = console
        self.prompter = prompter
        self.clock = clock
        self.state = SessionState.IDLE
        self._task: TaskDefinition | None = None
        self._started_at: float | None = None

    def _require(self, expected: SessionState, action: str) -> None:
        if self.state is not expected:
            raise InvalidSessionTransitionError(self.state.value, action)

    def _write_verbatim(self, text: str) -> None:
        """Write text to the console stream as-is, bypassing rich rendering."""
        stream = self.console.file
        stream.write(text)
        if not text.endswith("\n"):
            stream.write("\n")
        stream.flush()

    def display(self, task: TaskDefinition, result_path: Path | None = None) -> None:
        self._require(SessionState.IDLE, "display")
        self.console.print(Panel(f"Task: {task.id}", style="yellow", expand=True))
        self._write_verbatim(task.description)
        self.console.print(Rule(style="yellow"))
        self.console.print("Instructions:")
        self.console.print("1. Read the task above")
        self.console.print("2. Execute with your agent")
        if result_path is not None:
            self.console.print("3. Results will be recorded in ", end="")
            self.console.out(str(result_path), highlight=False)
        self._task = task
        self.state = SessionState.DISPLAYED

    def start(self) -> None:
        self._require(SessionState.DISPLAYED, "start")
        self._started_at = self.clock()
        self.state = SessionState.STARTED
        logger.debug("Timer started for %s", self._task.id if self._task else "?")

    def complete(self) -> Session:
        self._require(SessionState.STARTED, "complete")
        if self._task is None or self._started_at is None:
            raise InvalidSessionTransitionError(self.state.value, "complete")
        session = Session(task=self._task, started_at=self._started_at, completed_at=self.clock())
        self.state = SessionState.COMPLETED
        logger.debug("Timer stopped for %s after %ss", session.task.id, session.duration_seconds)
        self.reset()
        return session

    def reset(self) -> None:
        self.state = SessionState.IDLE
        self._task = None
        self._started_at = None

    def run(self, task: TaskDefinition, result_path: Path | None = None) -> Session:
        """Drive a full session for task and return it once the operator is done."""
        self.reset()
        try:
            self.display(task, result_path)
            self.prompter.wait("\nPress Enter when ready to start timing...")
            self.start()
            self.console.print("\n[green]Timer started. Execute the task now.[/green]")
            self.prompter.wait("Press Enter when complete...")
            session = self.complete()
        except BaseException:
            self.reset()
            raise
        self.console.print(
            f"\n[green]Task completed in {session.duration_seconds} seconds[/green]\n"
        )
        return session
