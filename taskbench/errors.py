"""Error types for the benchmark harness."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click


class BenchError(click.ClickException):
    """Base class for harness errors; click renders these without a traceback."""


class TaskNotFoundError(BenchError):
    """Raised when a task id has no discoverable task directory."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class MalformedTaskDefinitionError(BenchError):
    """Raised when a task directory exists but its definition cannot be parsed."""

    def __init__(self, task_id: str, reason: str) -> None:
        self.task_id = task_id
        self.reason = reason
        super().__init__(f"Task {task_id} is malformed: {reason}")


class InvalidJudgmentInputError(BenchError):
    """Raised when an operator-supplied judgment field is not acceptable."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class PersistenceError(BenchError):
    """Raised when a result record cannot be written to or read from the store."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not persist {path}: {reason}")


class InvalidSessionTransitionError(BenchError):
    """Raised when the session state machine is driven out of order."""

    def __init__(self, current: str, attempted: str) -> None:
        self.current = current
        self.attempted = attempted
        super().__init__(f"Cannot {attempted} a session in state '{current}'")
