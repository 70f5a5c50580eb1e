"""Benchmark runner - composes registry, session controller and recorder per mode."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .errors import PersistenceError, TaskNotFoundError
from .models import TaskDefinition
from .prompts import Prompter
from .recorder import JudgmentPolicy, ResultRecorder, collect_judgment, permissive_policy
from .registry import TaskRegistry
from .timer import SessionController

logger = logging.getLogger(__name__)


@dataclass
class BenchRunner:
    """One process invocation's worth of collaborators."""

    registry: TaskRegistry
    controller: SessionController
    recorder: ResultRecorder
    prompter: Prompter
    console: Console
    err_console: Console
    policy: JudgmentPolicy = permissive_policy

    def list_tasks(self) -> int:
        for task in self.registry.list_tasks():
            self.console.out(task.summary_line(), highlight=False)
        return 0

    def run_task(self, task: TaskDefinition) -> bool:
        """Time one task and record the operator's judgment. Returns True if saved."""
        result_path = self.recorder.result_path(task.id)
        session = self.controller.run(task, result_path)
        judgment = collect_judgment(self.prompter, self.console, self.policy)
        record = self.recorder.build(session, judgment)
        try:
            path = self.recorder.write(task.id, record)
        except PersistenceError as exc:
            logger.error("Result for %s not saved: %s", task.id, exc.reason)
            self.err_console.print(f"[red]Error: {escape(exc.format_message())}[/red]")
            return False
        self.console.print(f"\n[green]Results saved to {escape(str(path))}[/green]")
        return True

    def run_one(self, task_id: str) -> int:
        try:
            task = self.registry.get_task(task_id)
        except TaskNotFoundError as exc:
            self.err_console.print(f"[red]Error: {escape(exc.format_message())}[/red]")
            return 1
        return 0 if self.run_task(task) else 1

    def run_all(self) -> int:
        tasks = list(self.registry.list_tasks())
        if not tasks:
            self.console.print("[yellow]No tasks found[/yellow]")
            return 0

        for index, task in enumerate(tasks):
            self.run_task(task)
            if index == len(tasks) - 1:
                break
            self.console.print()
            if not self.prompter.confirm("Continue to next task?"):
                logger.info("Stopped after %s; %d task(s) skipped", task.id, len(tasks) - index - 1)
                break
        return 0

    def show_results(self) -> int:
        records = list(self.recorder.iter_results())
        if not records:
            self.console.print("[yellow]No results recorded[/yellow]")
            return 0

        table = Table(title="Benchmark Results")
        table.add_column("Task", style="cyan")
        table.add_column("Status")
        table.add_column("Iterations", justify="right")
        table.add_column("Duration (s)", justify="right")
        table.add_column("Quality", justify="right")
        table.add_column("Recorded")

        for record in records:
            table.add_row(
                record.task_id,
                escape(record.status),
                str(record.metrics.iterations),
                str(record.metrics.duration_seconds),
                str(record.quality_score),
                record.timestamp.strftime("%Y-%m-%d %H:%M"),
            )
        self.console.print(table)
        return 0
