"""Main CLI entry point for the benchmark runner."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .config import settings
from .prompts import RichPrompter
from .recorder import ResultRecorder, permissive_policy, strict_policy
from .registry import TaskRegistry, is_task_id
from .runner import BenchRunner
from .timer import SessionController

console = Console()
err_console = Console(stderr=True)

USAGE = """Benchmark Runner

Usage:
  run_bench T001        Run specific task
  run_bench --list      List all tasks
  run_bench --all       Run all tasks (interactive)
  run_bench --results   Show recorded results
  run_bench --help      Show this help

Options:
  --tasks-dir PATH      Task definitions directory
  --results-dir PATH    Result files directory
  --strict              Require pass/fail/partial status and a 1-10 quality score
  -v, --verbose         Log debug output to stderr
  --version             Show the version and exit
"""


def configure_logging(verbose: bool) -> None:
    """Route package logs to stderr through rich."""
    package_logger = logging.getLogger("taskbench")
    package_logger.setLevel(logging.DEBUG if verbose else settings.log_level.upper())
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False))


def build_runner(tasks_dir: Path, results_dir: Path, strict: bool) -> BenchRunner:
    prompter = RichPrompter(console)
    return BenchRunner(
        registry=TaskRegistry(tasks_dir),
        controller=SessionController(console, prompter),
        recorder=ResultRecorder(results_dir),
        prompter=prompter,
        console=console,
        err_console=err_console,
        policy=strict_policy if strict else permissive_policy,
    )


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "help_option_names": [],
    }
)
@click.argument("selector", required=False)
@click.option("--list", "-l", "list_mode", is_flag=True, help="List all tasks")
@click.option("--all", "-a", "all_mode", is_flag=True, help="Run all tasks (interactive)")
@click.option("--results", "-r", "results_mode", is_flag=True, help="Show recorded results")
@click.option("--help", "-h", "help_mode", is_flag=True, help="Show this help")
@click.option(
    "--tasks-dir", type=click.Path(file_okay=False, path_type=Path), help="Task definitions directory"
)
@click.option(
    "--results-dir", type=click.Path(file_okay=False, path_type=Path), help="Result files directory"
)
@click.option("--strict", is_flag=True, help="Validate status and quality score")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.version_option(version=__version__, prog_name="run_bench")
@click.pass_context
def main(
    ctx: click.Context,
    selector: str | None,
    list_mode: bool,
    all_mode: bool,
    results_mode: bool,
    help_mode: bool,
    tasks_dir: Path | None,
    results_dir: Path | None,
    strict: bool,
    verbose: bool,
) -> None:
    """Benchmark runner: time an operator or agent through benchmark tasks.

    SELECTOR: A task id such as T001
    """
    configure_logging(verbose)

    task_selected = selector is not None and is_task_id(selector)
    unrecognized = list(ctx.args)
    if selector is not None and not task_selected:
        unrecognized.insert(0, selector)
    for arg in unrecognized:
        err_console.print(f"[yellow]Unrecognized argument: {escape(arg)}[/yellow]")

    modes = [list_mode, all_mode, results_mode, task_selected]
    if help_mode or sum(modes) != 1:
        console.out(USAGE, highlight=False)
        raise SystemExit(0)

    runner = build_runner(
        tasks_dir or settings.resolved_tasks_dir,
        results_dir or settings.resolved_results_dir,
        strict or settings.strict_judgments,
    )

    if list_mode:
        raise SystemExit(runner.list_tasks())
    if results_mode:
        raise SystemExit(runner.show_results())
    if all_mode:
        raise SystemExit(runner.run_all())
    raise SystemExit(runner.run_one(selector))


if __name__ == "__main__":
    main()
