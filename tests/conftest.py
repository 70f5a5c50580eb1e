"""Shared test fixtures and configuration for pytest."""

import io
import json
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
from rich.console import Console

from taskbench.models import TaskDefinition
from taskbench.prompts import Prompter
from taskbench.recorder import ResultRecorder
from taskbench.registry import TaskRegistry
from taskbench.runner import BenchRunner
from taskbench.timer import SessionController


class ScriptedPrompter:
    """Prompter fed from a fixed list of answers; runs dry with EOFError like a closed stdin."""

    def __init__(self, answers: Iterable[object] = ()):
        self.answers = list(answers)
        self.prompts: list[str] = []

    def _next(self, text: str) -> object:
        self.prompts.append(text)
        if not self.answers:
            raise EOFError(text)
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def ask(self, text: str, default: str | None = None) -> str:
        answer = str(self._next(text))
        if answer == "" and default is not None:
            return default
        return answer

    def confirm(self, text: str) -> bool:
        answer = self._next(text)
        if isinstance(answer, bool):
            return answer
        return str(answer).strip().lower() == "y"

    def wait(self, text: str) -> None:
        self._next(text)


class FakeClock:
    def __init__(self, *readings: float):
        self.readings = list(readings)

    def __call__(self) -> float:
        return self.readings.pop(0)


def make_console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


def console_text(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def tasks_dir(tmp_path: Path) -> Path:
    path = tmp_path / "tasks"
    path.mkdir()
    return path


@pytest.fixture
def results_dir(tmp_path: Path) -> Path:
    return tmp_path / "results"


@pytest.fixture
def make_task(tasks_dir: Path) -> Callable[..., Path]:
    """Create a task directory; metadata=None skips metadata.json, a str is written raw."""

    def _make(
        task_id: str,
        name: str = "Sample Task",
        difficulty: str | None = "Easy",
        description: str | None = None,
        metadata: dict | str | None | bool = True,
    ) -> Path:
        task_dir = tasks_dir / task_id
        task_dir.mkdir()
        if description is None:
            description = f"# {task_id}: {name}\n\nDo the thing.\n"
        (task_dir / "task.md").write_text(description, encoding="utf-8")
        if metadata is True:
            payload: dict = {"name": name}
            if difficulty is not None:
                payload["difficulty"] = difficulty
            (task_dir / "metadata.json").write_text(json.dumps(payload), encoding="utf-8")
        elif isinstance(metadata, dict):
            (task_dir / "metadata.json").write_text(json.dumps(metadata), encoding="utf-8")
        elif isinstance(metadata, str):
            (task_dir / "metadata.json").write_text(metadata, encoding="utf-8")
        return task_dir

    return _make


@pytest.fixture
def sample_task(tmp_path: Path) -> TaskDefinition:
    return TaskDefinition(
        id="T001",
        name="Fix Broken Link",
        difficulty="Easy",
        description="# Fix Broken Link\n\nRepair the [README] link.\n",
        path=tmp_path / "tasks" / "T001",
    )


@pytest.fixture
def build_runner(tasks_dir: Path, results_dir: Path) -> Callable[..., BenchRunner]:
    def _build(prompter: Prompter, clock: Callable[[], float] | None = None) -> BenchRunner:
        console = make_console()
        controller = SessionController(console, prompter, clock=clock or FakeClock(*range(0, 1000, 10)))
        return BenchRunner(
            registry=TaskRegistry(tasks_dir),
            controller=controller,
            recorder=ResultRecorder(results_dir),
            prompter=prompter,
            console=console,
            err_console=make_console(),
        )

    return _build
