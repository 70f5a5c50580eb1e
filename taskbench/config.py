"""Configuration settings for the benchmark harness."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Repository directory (the one holding tasks/ and results/)
_BENCH_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Harness settings, overridable through TASKBENCH_* environment variables."""

    bench_dir: Path = _BENCH_DIR
    tasks_dir: Path | None = None
    results_dir: Path | None = None

    # Enforce nominal status values and the 1-10 quality range
    strict_judgments: bool = False

    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="TASKBENCH_", env_file=".env", extra="ignore")

    @property
    def resolved_tasks_dir(self) -> Path:
        """Directory holding one sub-directory per task."""
        return self.tasks_dir or self.bench_dir / "tasks"

    @property
    def resolved_results_dir(self) -> Path:
        """Directory receiving one <task_id>_result.json per task."""
        return self.results_dir or self.bench_dir / "results"


# Global settings instance
settings = Settings()
