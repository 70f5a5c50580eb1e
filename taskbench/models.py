"""Data models for benchmark tasks and result records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(StrEnum):
    """Known difficulty tags, in ascending order."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    UNKNOWN = "Unknown"

    @classmethod
    def rank(cls, value: str) -> int:
        """Sort key for a difficulty string; unrecognised tags sort last."""
        ordered = [cls.EASY, cls.MEDIUM, cls.HARD]
        for index, known in enumerate(ordered):
            if value.lower() == known.value.lower():
                return index
        return len(ordered)


class TaskMetadata(BaseModel):
    """Machine-readable part of a task definition (metadata.json).

    Unknown keys are ignored so task authors can add fields freely.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    difficulty: str | None = None


@dataclass(frozen=True)
class TaskDefinition:
    """A benchmark task as discovered on disk."""

    id: str
    name: str
    difficulty: str
    description: str
    path: Path

    def summary_line(self) -> str:
        return f"{self.id}: {self.name} [{self.difficulty}]"


class ResultMetrics(BaseModel):
    iterations: int = Field(ge=1)
    duration_seconds: int = Field(ge=0)


class ResultRecord(BaseModel):
    """Persisted outcome of one task session.

    Field names and nesting are the on-disk contract read by external tooling.
    """

    model_config = ConfigDict(extra="ignore")

    task_id: str
    status: str
    metrics: ResultMetrics
    quality_score: int
    timestamp: datetime
    notes: str = ""
