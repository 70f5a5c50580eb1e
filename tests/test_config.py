from pathlib import Path

from taskbench.config import Settings


def test_default_paths_are_relative_to_bench_dir(tmp_path: Path) -> None:
    settings = Settings(bench_dir=tmp_path)

    assert settings.resolved_tasks_dir == tmp_path / "tasks"
    assert settings.resolved_results_dir == tmp_path / "results"
    assert settings.strict_judgments is False


def test_environment_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKBENCH_TASKS_DIR", str(tmp_path / "suite"))
    monkeypatch.setenv("TASKBENCH_STRICT_JUDGMENTS", "1")

    settings = Settings()

    assert settings.resolved_tasks_dir == tmp_path / "suite"
    assert settings.strict_judgments is True
