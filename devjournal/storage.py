"""Record Store — in-memory collections of journal entries, bugs and snippets.

Each collection is a dict keyed by an auto-incrementing integer id. Filtering
is a linear scan; results come back newest first. Nothing is persisted: a
snapshot file can seed a fresh store, but the store never writes one.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from devjournal.models import Bug, BugStatus, JournalEntry, Snippet

logger = logging.getLogger(__name__)

DEFAULT_READ_TIME = 5


class RecordNotFoundError(KeyError):
    """Raised when a record id does not exist in its collection."""

    def __init__(self, kind: str, record_id: int):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be imported."""


def _newest_first(records: list) -> list:
    return sorted(records, key=lambda r: r.created_at, reverse=True)


def _wanted(value: str | None) -> bool:
    """Filter values of None, "" and "all" mean no filter."""
    return bool(value) and value != "all"


class MemStorage:
    """Holds the three record collections for one application instance.

    ``clock`` returns the current local time; tests pass a fixed one.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self.clock = clock or datetime.now
        self.journal_entries: dict[int, JournalEntry] = {}
        self.bugs: dict[int, Bug] = {}
        self.snippets: dict[int, Snippet] = {}
        self._next_journal_id = 1
        self._next_bug_id = 1
        self._next_snippet_id = 1

    # ------------------------------------------------------------------
    # Journal
    # ------------------------------------------------------------------

    def list_journal_entries(
        self,
        search: str | None = None,
        difficulty: str | None = None,
        source: str | None = None,
    ) -> list[JournalEntry]:
        entries = list(self.journal_entries.values())
        if search:
            entries = [e for e in entries if e.matches(search)]
        if _wanted(difficulty):
            entries = [e for e in entries if e.difficulty == difficulty]
        if _wanted(source):
            entries = [e for e in entries if e.source == source]
        return _newest_first(entries)

    def get_journal_entry(self, entry_id: int) -> JournalEntry | None:
        return self.journal_entries.get(entry_id)

    def create_journal_entry(self, data: dict[str, Any]) -> JournalEntry:
        entry = JournalEntry(
            id=self._next_journal_id,
            title=data["title"],
            content=data["content"],
            difficulty=data["difficulty"],
            source=data["source"],
            tags=list(data.get("tags") or []),
            read_time=data.get("read_time") or DEFAULT_READ_TIME,
            is_bookmarked=bool(data.get("is_bookmarked", False)),
            created_at=data.get("created_at") or self.clock(),
        )
        self.journal_entries[entry.id] = entry
        self._next_journal_id += 1
        logger.debug("Created journal entry %d: %s", entry.id, entry.title)
        return entry

    def update_journal_entry(self, entry_id: int, changes: dict[str, Any]) -> JournalEntry | None:
        entry = self.journal_entries.get(entry_id)
        if entry is None:
            return None
        for key, value in changes.items():
            if key in ("id", "created_at"):
                continue
            setattr(entry, key, value)
        return entry

    def delete_journal_entry(self, entry_id: int) -> bool:
        return self.journal_entries.pop(entry_id, None) is not None

    # ------------------------------------------------------------------
    # Bugs
    # ------------------------------------------------------------------

    def list_bugs(
        self,
        search: str | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> list[Bug]:
        bugs = list(self.bugs.values())
        if search:
            bugs = [b for b in bugs if b.matches(search)]
        if _wanted(status):
            bugs = [b for b in bugs if b.status == status]
        if _wanted(priority):
            bugs = [b for b in bugs if b.priority == priority]
        return _newest_first(bugs)

    def get_bug(self, bug_id: int) -> Bug | None:
        return self.bugs.get(bug_id)

    def create_bug(self, data: dict[str, Any]) -> Bug:
        now = self.clock()
        created_at = data.get("created_at") or now
        bug = Bug(
            id=self._next_bug_id,
            title=data["title"],
            description=data["description"],
            solution=data.get("solution") or None,
            status=data["status"],
            priority=data["priority"],
            problem_code=data.get("problem_code") or None,
            solution_code=data.get("solution_code") or None,
            tags=list(data.get("tags") or []),
            resolution_time=data.get("resolution_time") or None,
            created_at=created_at,
        )
        if bug.is_resolved:
            bug.resolved_at = data.get("resolved_at") or now
        self.bugs[bug.id] = bug
        self._next_bug_id += 1
        logger.debug("Created bug %d (%s): %s", bug.id, bug.status, bug.title)
        return bug

    def update_bug(self, bug_id: int, changes: dict[str, Any]) -> Bug | None:
        """Apply a partial update. Moving into ``resolved`` stamps resolved_at once."""
        bug = self.bugs.get(bug_id)
        if bug is None:
            return None
        was_resolved = bug.is_resolved
        for key, value in changes.items():
            if key in ("id", "created_at", "resolved_at"):
                continue
            setattr(bug, key, value)
        if changes.get("status") == BugStatus.RESOLVED.value and not was_resolved:
            bug.resolved_at = self.clock()
        return bug

    def delete_bug(self, bug_id: int) -> bool:
        return self.bugs.pop(bug_id, None) is not None

    # ------------------------------------------------------------------
    # Snippets
    # ------------------------------------------------------------------

    def list_snippets(
        self,
        search: str | None = None,
        language: str | None = None,
        category: str | None = None,
    ) -> list[Snippet]:
        snippets = list(self.snippets.values())
        if search:
            snippets = [s for s in snippets if s.matches(search)]
        if _wanted(language):
            snippets = [s for s in snippets if s.language == language]
        if _wanted(category):
            snippets = [s for s in snippets if s.category == category]
        return _newest_first(snippets)

    def get_snippet(self, snippet_id: int) -> Snippet | None:
        return self.snippets.get(snippet_id)

    def create_snippet(self, data: dict[str, Any]) -> Snippet:
        snippet = Snippet(
            id=self._next_snippet_id,
            title=data["title"],
            description=data["description"],
            code=data["code"],
            language=data["language"],
            category=data["category"],
            tags=list(data.get("tags") or []),
            times_used=data.get("times_used") or 0,
            created_at=data.get("created_at") or self.clock(),
        )
        self.snippets[snippet.id] = snippet
        self._next_snippet_id += 1
        logger.debug("Created snippet %d (%s): %s", snippet.id, snippet.language, snippet.title)
        return snippet

    def update_snippet(self, snippet_id: int, changes: dict[str, Any]) -> Snippet | None:
        snippet = self.snippets.get(snippet_id)
        if snippet is None:
            return None
        for key, value in changes.items():
            if key in ("id", "created_at"):
                continue
            setattr(snippet, key, value)
        return snippet

    def delete_snippet(self, snippet_id: int) -> bool:
        return self.snippets.pop(snippet_id, None) is not None

    def increment_snippet_usage(self, snippet_id: int) -> Snippet:
        snippet = self.snippets.get(snippet_id)
        if snippet is None:
            raise RecordNotFoundError("Snippet", snippet_id)
        snippet.times_used += 1
        return snippet

    def records(self) -> tuple[list[JournalEntry], list[Bug], list[Snippet]]:
        """All three collections in id order, for the analytics functions."""
        return (
            list(self.journal_entries.values()),
            list(self.bugs.values()),
            list(self.snippets.values()),
        )

    # ------------------------------------------------------------------
    # Snapshot import
    # ------------------------------------------------------------------

    def import_snapshot(self, data: dict[str, Any]) -> int:
        """Add records from a ``{"journal": [...], "bugs": [...], "snippets": [...]}`` dict.

        Ids are reassigned in file order. Returns the number of records added.
        """
        if not isinstance(data, dict):
            raise SnapshotError("Snapshot must be a JSON object")

        creators: dict[str, tuple[Callable, type]] = {
            "journal": (self.create_journal_entry, JournalEntry),
            "bugs": (self.create_bug, Bug),
            "snippets": (self.create_snippet, Snippet),
        }
        added = 0
        for key, (create, model) in creators.items():
            items = data.get(key, [])
            if not isinstance(items, list):
                raise SnapshotError(f"Snapshot field '{key}' must be a list")
            for i, item in enumerate(items):
                if not isinstance(item, dict):
                    raise SnapshotError(f"Invalid {key}[{i}]: expected an object")
                try:
                    record = model.from_dict(item)
                    fields = record.to_dict()
                    # records without a timestamp are stamped by the store's clock
                    fields["created_at"] = record.created_at if item.get("created_at") else None
                    if isinstance(record, Bug):
                        fields["resolved_at"] = record.resolved_at
                    create(fields)
                except (KeyError, TypeError, ValueError) as e:
                    raise SnapshotError(f"Invalid {key}[{i}]: {e}") from e
                added += 1

        logger.info("Imported %d records from snapshot", added)
        return added

    @classmethod
    def from_snapshot(
        cls, path: str | Path, clock: Callable[[], datetime] | None = None
    ) -> "MemStorage":
        """Build a store seeded from a JSON snapshot file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No snapshot found at {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SnapshotError(f"{path} is not valid JSON: {e}") from e
        storage = cls(clock=clock)
        storage.import_snapshot(data)
        return storage
