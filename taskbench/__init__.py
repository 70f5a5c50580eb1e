"""
Task Benchmark Harness

Times a human or agent working through a directory of benchmark tasks and
records one JSON result file per task.
"""

__version__ = "0.1.0"

# Configuration
from taskbench.config import Settings

# Errors
from taskbench.errors import (
    BenchError,
    InvalidJudgmentInputError,
    InvalidSessionTransitionError,
    MalformedTaskDefinitionError,
    PersistenceError,
    TaskNotFoundError,
)

# Models
from taskbench.models import Difficulty, ResultMetrics, ResultRecord, TaskDefinition

# Components
from taskbench.prompts import Prompter, RichPrompter
from taskbench.recorder import Judgment, ResultRecorder, collect_judgment
from taskbench.registry import TaskRegistry
from taskbench.runner import BenchRunner
from taskbench.timer import Session, SessionController, SessionState

__all__ = [
    # Version
    "__version__",
    # Config
    "Settings",
    # Errors
    "BenchError",
    "TaskNotFoundError",
    "MalformedTaskDefinitionError",
    "InvalidJudgmentInputError",
    "PersistenceError",
    "InvalidSessionTransitionError",
    # Models
    "Difficulty",
    "TaskDefinition",
    "ResultMetrics",
    "ResultRecord",
    # Components
    "TaskRegistry",
    "Session",
    "SessionController",
    "SessionState",
    "Judgment",
    "ResultRecorder",
    "collect_judgment",
    "Prompter",
    "RichPrompter",
    "BenchRunner",
]
