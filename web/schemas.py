"""Pydantic v2 request/response schemas for the web API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, Field, model_validator

from devjournal.models import (
    BugStatus,
    Difficulty,
    JourneyStyle,
    Priority,
    SnippetCategory,
    Source,
)


# ---------------------------------------------------------------------------
# Partial updates
# ---------------------------------------------------------------------------

class PartialUpdate(BaseModel):
    """Base for PUT bodies. Absent keys are left alone; an explicit null is
    only accepted for the fields listed in ``nullable_fields``.
    """
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulls = sorted(
                k for k, v in data.items()
                if v is None and k in cls.model_fields and k not in cls.nullable_fields
            )
            if nulls:
                raise ValueError(f"fields may not be null: {', '.join(nulls)}")
        return data


# ---------------------------------------------------------------------------
# Journal schemas
# ---------------------------------------------------------------------------

class JournalEntryCreate(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    difficulty: Difficulty
    source: Source
    tags: list[str] = []
    read_time: int = Field(default=0, ge=0)
    is_bookmarked: bool = False


class JournalEntryUpdate(PartialUpdate):
    title: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    difficulty: Difficulty | None = None
    source: Source | None = None
    tags: list[str] | None = None
    read_time: int | None = Field(default=None, ge=0)
    is_bookmarked: bool | None = None


class JournalEntryOut(BaseModel):
    id: int
    title: str
    content: str
    difficulty: str
    source: str
    tags: list[str] = []
    read_time: int = 0
    is_bookmarked: bool = False
    created_at: datetime


# ---------------------------------------------------------------------------
# Bug schemas
# ---------------------------------------------------------------------------

class BugCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    solution: str | None = None
    status: BugStatus
    priority: Priority
    problem_code: str | None = None
    solution_code: str | None = None
    tags: list[str] = []
    resolution_time: int | None = Field(default=None, ge=0)


class BugUpdate(PartialUpdate):
    nullable_fields: ClassVar[frozenset[str]] = frozenset(
        {"solution", "problem_code", "solution_code", "resolution_time"}
    )

    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    solution: str | None = None
    status: BugStatus | None = None
    priority: Priority | None = None
    problem_code: str | None = None
    solution_code: str | None = None
    tags: list[str] | None = None
    resolution_time: int | None = Field(default=None, ge=0)


class BugOut(BaseModel):
    id: int
    title: str
    description: str
    solution: str | None = None
    status: str
    priority: str
    problem_code: str | None = None
    solution_code: str | None = None
    tags: list[str] = []
    resolution_time: int | None = None
    created_at: datetime
    resolved_at: datetime | None = None


# ---------------------------------------------------------------------------
# Snippet schemas
# ---------------------------------------------------------------------------

class SnippetCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    code: str = Field(min_length=1)
    language: str = Field(min_length=1)
    category: SnippetCategory
    tags: list[str] = []
    times_used: int = Field(default=0, ge=0)


class SnippetUpdate(PartialUpdate):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    code: str | None = Field(default=None, min_length=1)
    language: str | None = Field(default=None, min_length=1)
    category: SnippetCategory | None = None
    tags: list[str] | None = None
    times_used: int | None = Field(default=None, ge=0)


class SnippetOut(BaseModel):
    id: int
    title: str
    description: str
    code: str
    language: str
    category: str
    tags: list[str] = []
    times_used: int = 0
    created_at: datetime


# ---------------------------------------------------------------------------
# Analytics schemas
# ---------------------------------------------------------------------------

class WeeklyGrowthOut(BaseModel):
    insights: int = 0
    bugs: int = 0


class DashboardStatsOut(BaseModel):
    total_insights: int = 0
    bugs_resolved: int = 0
    snippets: int = 0
    streak: int = 0
    weekly_growth: WeeklyGrowthOut = WeeklyGrowthOut()


class ActivityDataOut(BaseModel):
    date: str
    journal_entries: int = 0
    bugs_resolved: int = 0
    snippets_added: int = 0


class TechnologyDistributionOut(BaseModel):
    name: str
    count: int
    percentage: int


class JourneyInputOut(BaseModel):
    journal_entries: int = 0
    bugs_resolved: int = 0
    snippets_added: int = 0
    technologies: list[str] = []


# ---------------------------------------------------------------------------
# Turtle schemas
# ---------------------------------------------------------------------------

class DrawRequest(BaseModel):
    style: JourneyStyle = JourneyStyle.SPIRAL
    complexity: int = Field(default=5, ge=1, le=10)
    seed: int | None = None


class CanvasOut(BaseModel):
    """Current drawing: canvas size, cursor state and segments in draw order."""
    width: int
    height: int
    state: dict[str, Any]
    segments: list[dict[str, Any]] = []


class DrawResponse(BaseModel):
    style: str
    canvas: CanvasOut
    journey: JourneyInputOut
    stats: dict[str, int] = {}
