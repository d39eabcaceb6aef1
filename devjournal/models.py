"""Shared data models for Dev Journal.

All models serialize to/from JSON. Records carry naive local timestamps;
calendar-day arithmetic in the analytics layer relies on that.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Source(str, Enum):
    """Where a journal insight came from."""
    DOCUMENTATION = "documentation"
    TUTORIAL = "tutorial"
    EXPERIMENTATION = "experimentation"
    TEAM = "team"


class BugStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SnippetCategory(str, Enum):
    UTILITIES = "utilities"
    COMPONENTS = "components"
    HOOKS = "hooks"
    API = "api"


class JourneyStyle(str, Enum):
    """Visualization styles offered by the turtle page."""
    SPIRAL = "spiral"
    TREE = "tree"
    GEOMETRIC = "geometric"
    ORGANIC = "organic"


# ---------------------------------------------------------------------------
# JSON serialization helpers
# ---------------------------------------------------------------------------

def _serialize(obj: Any) -> Any:
    """Convert dataclass trees to JSON-safe dicts."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, "__dataclass_fields__"):
        return {k: _serialize(v) for k, v in asdict(obj).items()}
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize(v) for v in obj]
    return obj


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


class JSONSerializable:
    """Mixin for dataclasses that need JSON round-trip."""

    def to_dict(self) -> dict:
        return _serialize(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> "JSONSerializable":
        """Override in subclasses that have nested model or datetime fields."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_json(cls, text: str) -> "JSONSerializable":
        return cls.from_dict(json.loads(text))


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass
class JournalEntry(JSONSerializable):
    """A learning insight recorded by the user."""
    id: int = 0
    title: str = ""
    content: str = ""
    difficulty: str = Difficulty.BEGINNER.value
    source: str = Source.DOCUMENTATION.value
    tags: list[str] = field(default_factory=list)
    read_time: int = 5
    is_bookmarked: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_dict(cls, data: dict) -> "JournalEntry":
        data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        if "created_at" in data:
            data["created_at"] = _parse_datetime(data["created_at"]) or datetime.now()
        return cls(**data)

    def matches(self, needle: str) -> bool:
        """Case-insensitive search over title, content and tags."""
        needle = needle.lower()
        return (
            needle in self.title.lower()
            or needle in self.content.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


@dataclass
class Bug(JSONSerializable):
    """A bug report, optionally with its fix."""
    id: int = 0
    title: str = ""
    description: str = ""
    solution: str | None = None
    status: str = BugStatus.OPEN.value
    priority: str = Priority.MEDIUM.value
    problem_code: str | None = None
    solution_code: str | None = None
    tags: list[str] = field(default_factory=list)
    resolution_time: int | None = None  # hours
    created_at: datetime = field(default_factory=datetime.now)
    resolved_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Bug":
        data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        if "created_at" in data:
            data["created_at"] = _parse_datetime(data["created_at"]) or datetime.now()
        if "resolved_at" in data:
            data["resolved_at"] = _parse_datetime(data["resolved_at"])
        return cls(**data)

    @property
    def is_resolved(self) -> bool:
        return self.status == BugStatus.RESOLVED.value

    def matches(self, needle: str) -> bool:
        needle = needle.lower()
        return (
            needle in self.title.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


@dataclass
class Snippet(JSONSerializable):
    """A reusable piece of code."""
    id: int = 0
    title: str = ""
    description: str = ""
    code: str = ""
    language: str = ""
    category: str = SnippetCategory.UTILITIES.value
    tags: list[str] = field(default_factory=list)
    times_used: int = 0
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_dict(cls, data: dict) -> "Snippet":
        data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        if "created_at" in data:
            data["created_at"] = _parse_datetime(data["created_at"]) or datetime.now()
        return cls(**data)

    def matches(self, needle: str) -> bool:
        needle = needle.lower()
        return (
            needle in self.title.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


# ---------------------------------------------------------------------------
# Analytics results (derived, never stored)
# ---------------------------------------------------------------------------

@dataclass
class WeeklyGrowth(JSONSerializable):
    insights: int = 0
    bugs: int = 0


@dataclass
class DashboardStats(JSONSerializable):
    total_insights: int = 0
    bugs_resolved: int = 0
    snippets: int = 0
    streak: int = 0
    weekly_growth: WeeklyGrowth = field(default_factory=WeeklyGrowth)


@dataclass
class ActivityData(JSONSerializable):
    """Activity counts for one calendar day."""
    date: str = ""
    journal_entries: int = 0
    bugs_resolved: int = 0
    snippets_added: int = 0


@dataclass
class TechnologyDistribution(JSONSerializable):
    name: str = ""
    count: int = 0
    percentage: int = 0


@dataclass
class JourneyInput(JSONSerializable):
    """Drawing parameters handed from the aggregator to the turtle engine."""
    journal_entries: int = 0
    bugs_resolved: int = 0
    snippets_added: int = 0
    technologies: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.journal_entries + self.bugs_resolved + self.snippets_added


@dataclass
class JourneyStats(JSONSerializable):
    """Headline numbers shown next to the visualization."""
    distance: int = 0
    turns: int = 0
    peaks: int = 0
