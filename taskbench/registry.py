"""Task registry - discovers task definitions from a directory tree."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from .errors import MalformedTaskDefinitionError, TaskNotFoundError
from .models import Difficulty, TaskDefinition, TaskMetadata

logger = logging.getLogger(__name__)

TASK_ID_RE = re.compile(r"^T\d+$")

DESCRIPTION_FILE = "task.md"
METADATA_FILE = "metadata.json"


def is_task_id(value: str) -> bool:
    """Return True if value looks like a task id (T followed by digits)."""
    return bool(TASK_ID_RE.match(value))


def load_task(task_dir: Path) -> TaskDefinition:
    """Parse one task directory into a TaskDefinition.

    metadata.json is optional: a missing file or missing keys fall back to the
    task id as name and an Unknown difficulty. A metadata file that exists but
    is not a JSON object with string fields makes the task malformed.
    """
    task_id = task_dir.name
    description_path = task_dir / DESCRIPTION_FILE
    if not description_path.is_file():
        raise MalformedTaskDefinitionError(task_id, f"missing {DESCRIPTION_FILE}")

    try:
        description = description_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedTaskDefinitionError(task_id, f"unreadable {DESCRIPTION_FILE}: {exc}") from exc

    metadata = TaskMetadata()
    metadata_path = task_dir / METADATA_FILE
    if metadata_path.is_file():
        try:
            raw = json.loads(metadata_path.read_text(encoding="utf-8"))
            metadata = TaskMetadata.model_validate(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            raise MalformedTaskDefinitionError(task_id, f"bad {METADATA_FILE}: {exc}") from exc

    return TaskDefinition(
        id=task_id,
        name=metadata.name or task_id,
        difficulty=metadata.difficulty or Difficulty.UNKNOWN.value,
        description=description,
        path=task_dir,
    )


class TaskRegistry:
    """Read-only view over a tasks/ directory."""

    def __init__(self, tasks_dir: Path):
        self.tasks_dir = Path(tasks_dir)

    def _task_dirs(self) -> list[Path]:
        if not self.tasks_dir.is_dir():
            return []
        return sorted(
            entry
            for entry in self.tasks_dir.iterdir()
            if entry.is_dir() and is_task_id(entry.name)
        )

    def list_tasks(self) -> Iterator[TaskDefinition]:
        """Yield every well-formed task in directory order.

        Malformed tasks are skipped with a warning; an absent or empty tasks
        directory yields nothing.
        """
        for task_dir in self._task_dirs():
            try:
                yield load_task(task_dir)
            except MalformedTaskDefinitionError as exc:
                logger.warning("Skipping task %s: %s", exc.task_id, exc.reason)

    def get_task(self, task_id: str) -> TaskDefinition:
        task_dir = self.tasks_dir / task_id
        if not is_task_id(task_id) or not task_dir.is_dir():
            raise TaskNotFoundError(task_id)
        if not (task_dir / DESCRIPTION_FILE).is_file():
            raise TaskNotFoundError(task_id)
        return load_task(task_dir)

    def __iter__(self) -> Iterator[TaskDefinition]:
        return self.list_tasks()

    def __contains__(self, task_id: object) -> bool:
        return (
            isinstance(task_id, str)
            and is_task_id(task_id)
            and (self.tasks_dir / task_id / DESCRIPTION_FILE).is_file()
        )
