"""Result recorder - collects operator judgments and persists result records."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .errors import InvalidJudgmentInputError, PersistenceError
from .models import ResultMetrics, ResultRecord
from .prompts import Prompter
from .timer import Session

logger = logging.getLogger(__name__)

RESULT_SUFFIX = "_result.json"
NOMINAL_STATUSES = ("pass", "fail", "partial")
QUALITY_RANGE = (1, 10)


@dataclass(frozen=True)
class Judgment:
    """Operator's post-session assessment."""

    status: str
    iterations: int
    quality_score: int
    notes: str = ""


def coerce_int(field: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise InvalidJudgmentInputError(field, raw, "expected a whole number") from exc


def coerce_iterations(raw: str) -> int:
    value = coerce_int("iterations", raw)
    if value < 1:
        raise InvalidJudgmentInputError("iterations", raw, "must be at least 1")
    return value


# Acceptance policies: called with (field, value), raise InvalidJudgmentInputError to reject.
JudgmentPolicy = Callable[[str, object], None]


def permissive_policy(field: str, value: object) -> None:
    """Accept any status and any integer quality score."""
    del field, value


def strict_policy(field: str, value: object) -> None:
    """Require a nominal status and a quality score within QUALITY_RANGE."""
    if field == "status" and str(value).strip().lower() not in NOMINAL_STATUSES:
        raise InvalidJudgmentInputError(field, value, f"expected one of {', '.join(NOMINAL_STATUSES)}")
    if field == "quality_score":
        low, high = QUALITY_RANGE
        if not isinstance(value, int) or not low <= value <= high:
            raise InvalidJudgmentInputError(field, value, f"expected {low}-{high}")


def collect_judgment(
    prompter: Prompter,
    console: Console,
    policy: JudgmentPolicy = permissive_policy,
) -> Judgment:
    """Prompt for each judgment field, re-asking a field until it is accepted."""
    console.print("Record your results:")

    def ask_field(field: str, text: str, convert: Callable[[str], object], default: str | None = None):
        while True:
            raw = prompter.ask(text, default=default)
            try:
                value = convert(raw)
                policy(field, value)
                return value
            except InvalidJudgmentInputError as exc:
                logger.debug("Re-prompting %s: %s", exc.field, exc.reason)
                console.print(f"[red]{escape(exc.format_message())}[/red]", highlight=False)

    status = ask_field("status", "  Status (pass/fail/partial)", str)
    iterations = ask_field("iterations", "  Iterations", coerce_iterations)
    quality = ask_field("quality_score", "  Quality score (1-10)", lambda raw: coerce_int("quality_score", raw))
    notes = ask_field("notes", "  Notes", str, default="")
    return Judgment(status=status, iterations=iterations, quality_score=quality, notes=notes)


class ResultRecorder:
    """Owns every write to the results directory."""

    def __init__(self, results_dir: Path, now: Callable[[], datetime] | None = None):
        self.results_dir = Path(results_dir)
        self._now = now or (lambda: datetime.now().astimezone())

    def result_path(self, task_id: str) -> Path:
        return self.results_dir / f"{task_id}{RESULT_SUFFIX}"

    def build(self, session: Session, judgment: Judgment) -> ResultRecord:
        """Combine a completed session and a judgment, stamping the record time."""
        return ResultRecord(
            task_id=session.task.id,
            status=judgment.status,
            metrics=ResultMetrics(
                iterations=judgment.iterations,
                duration_seconds=session.duration_seconds,
            ),
            quality_score=judgment.quality_score,
            timestamp=self._now().replace(microsecond=0),
            notes=judgment.notes,
        )

    def write(self, task_id: str, record: ResultRecord) -> Path:
        """Atomically replace the stored record for task_id.

        The JSON is written to a temporary file in the results directory and
        renamed over the target, so readers only ever see a complete file.
        """
        path = self.result_path(task_id)
        payload = json.dumps(record.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"
        tmp_path: Path | None = None
        try:
            self.results_dir.mkdir(parents=True, exist_ok=True)
            # open() applies the process umask to the result file
            tmp_path = self.results_dir / f".{task_id}.{os.getpid()}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as exc:
            raise PersistenceError(path, exc.strerror or str(exc)) from exc
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
        logger.info("Wrote result for %s to %s", task_id, path)
        return path

    def read(self, task_id: str) -> ResultRecord:
        path = self.result_path(task_id)
        try:
            return ResultRecord.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise PersistenceError(path, exc.strerror or str(exc)) from exc
        except ValidationError as exc:
            raise PersistenceError(path, f"invalid result record: {exc.error_count()} error(s)") from exc
        except UnicodeDecodeError as exc:
            raise PersistenceError(path, f"invalid result record: {exc.reason}") from exc

    def iter_results(self) -> Iterator[ResultRecord]:
        """Yield every readable stored record, in file-name order."""
        if not self.results_dir.is_dir():
            return
        for path in sorted(self.results_dir.glob(f"*{RESULT_SUFFIX}")):
            task_id = path.name[: -len(RESULT_SUFFIX)]
            try:
                yield self.read(task_id)
            except PersistenceError as exc:
                logger.warning("Skipping %s: %s", path.name, exc.reason)
