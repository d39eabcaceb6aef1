"""Record store tests — CRUD, filtering, bug resolution, snapshot import."""

from __future__ import annotations

import json
from datetime import datetime, timedelta

import pytest

from devjournal.storage import MemStorage, RecordNotFoundError, SnapshotError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 5, 1, 9, 0))


@pytest.fixture
def storage(clock):
    return MemStorage(clock=clock)


def journal_data(**overrides):
    data = {
        "title": "Async generators",
        "content": "They can be consumed with async for",
        "difficulty": "intermediate",
        "source": "documentation",
        "tags": ["python", "asyncio"],
    }
    data.update(overrides)
    return data


def bug_data(**overrides):
    data = {
        "title": "Race in cache warmup",
        "description": "Two workers fill the same key",
        "status": "open",
        "priority": "high",
        "tags": ["redis"],
    }
    data.update(overrides)
    return data


def snippet_data(**overrides):
    data = {
        "title": "Retry decorator",
        "description": "Exponential backoff",
        "code": "def retry(): ...",
        "language": "python",
        "category": "utilities",
        "tags": ["python"],
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# Journal
# ---------------------------------------------------------------------------

class TestJournal:
    def test_ids_auto_increment(self, storage):
        a = storage.create_journal_entry(journal_data())
        b = storage.create_journal_entry(journal_data())
        assert (a.id, b.id) == (1, 2)

    def test_ids_not_reused_after_delete(self, storage):
        storage.create_journal_entry(journal_data())
        storage.delete_journal_entry(1)
        assert storage.create_journal_entry(journal_data()).id == 2

    def test_defaults(self, storage, clock):
        entry = storage.create_journal_entry(journal_data())
        assert entry.read_time == 5
        assert entry.is_bookmarked is False
        assert entry.created_at == clock.now

    def test_list_newest_first(self, storage, clock):
        storage.create_journal_entry(journal_data(title="old"))
        clock.advance(hours=1)
        storage.create_journal_entry(journal_data(title="new"))
        assert [e.title for e in storage.list_journal_entries()] == ["new", "old"]

    def test_search_is_case_insensitive_over_tags(self, storage):
        storage.create_journal_entry(journal_data())
        storage.create_journal_entry(journal_data(title="Other", content="x", tags=["go"]))
        assert len(storage.list_journal_entries(search="ASYNCIO")) == 1
        assert len(storage.list_journal_entries(search="consumed")) == 1

    def test_filters_and_all(self, storage):
        storage.create_journal_entry(journal_data())
        storage.create_journal_entry(journal_data(difficulty="advanced", source="team"))
        assert len(storage.list_journal_entries(difficulty="advanced")) == 1
        assert len(storage.list_journal_entries(source="team")) == 1
        assert len(storage.list_journal_entries(difficulty="all", source="all")) == 2

    def test_partial_update(self, storage):
        storage.create_journal_entry(journal_data())
        entry = storage.update_journal_entry(1, {"title": "Renamed", "id": 99})
        assert entry.title == "Renamed"
        assert entry.id == 1
        assert entry.content == journal_data()["content"]

    def test_update_missing_returns_none(self, storage):
        assert storage.update_journal_entry(42, {"title": "x"}) is None

    def test_delete(self, storage):
        storage.create_journal_entry(journal_data())
        assert storage.delete_journal_entry(1) is True
        assert storage.delete_journal_entry(1) is False
        assert storage.get_journal_entry(1) is None


# ---------------------------------------------------------------------------
# Bugs
# ---------------------------------------------------------------------------

class TestBugs:
    def test_open_bug_not_stamped(self, storage):
        bug = storage.create_bug(bug_data())
        assert bug.resolved_at is None
        assert bug.solution is None

    def test_created_resolved_is_stamped(self, storage, clock):
        bug = storage.create_bug(bug_data(status="resolved"))
        assert bug.resolved_at == clock.now

    def test_resolving_stamps_once(self, storage, clock):
        storage.create_bug(bug_data())
        clock.advance(hours=3)
        first = storage.update_bug(1, {"status": "resolved"}).resolved_at
        assert first == clock.now
        clock.advance(hours=3)
        storage.update_bug(1, {"status": "resolved", "solution": "lock"})
        assert storage.get_bug(1).resolved_at == first

    def test_reopen_keeps_resolved_at(self, storage):
        storage.create_bug(bug_data(status="resolved"))
        bug = storage.update_bug(1, {"status": "open"})
        assert bug.resolved_at is not None

    def test_filters(self, storage):
        storage.create_bug(bug_data())
        storage.create_bug(bug_data(status="resolved", priority="low"))
        assert len(storage.list_bugs(status="resolved")) == 1
        assert len(storage.list_bugs(priority="high")) == 1
        assert len(storage.list_bugs(search="warmup")) == 2
        assert storage.list_bugs(search="nothing-like-this") == []


# ---------------------------------------------------------------------------
# Snippets
# ---------------------------------------------------------------------------

class TestSnippets:
    def test_create_and_filter(self, storage):
        storage.create_snippet(snippet_data())
        storage.create_snippet(snippet_data(language="typescript", category="hooks"))
        assert len(storage.list_snippets(language="python")) == 1
        assert len(storage.list_snippets(category="hooks")) == 1
        assert len(storage.list_snippets(search="backoff")) == 2

    def test_increment_usage(self, storage):
        storage.create_snippet(snippet_data())
        storage.increment_snippet_usage(1)
        storage.increment_snippet_usage(1)
        assert storage.get_snippet(1).times_used == 2

    def test_increment_missing_raises(self, storage):
        with pytest.raises(RecordNotFoundError):
            storage.increment_snippet_usage(7)

    def test_records_in_id_order(self, storage):
        storage.create_snippet(snippet_data(title="a"))
        storage.create_snippet(snippet_data(title="b"))
        _, _, snippets = storage.records()
        assert [s.title for s in snippets] == ["a", "b"]


# ---------------------------------------------------------------------------
# Snapshot import
# ---------------------------------------------------------------------------

class TestSnapshot:
    def test_import_counts_and_timestamps(self, storage):
        added = storage.import_snapshot({
            "journal": [journal_data(created_at="2026-04-30T10:00:00")],
            "bugs": [bug_data(status="resolved", resolved_at="2026-04-29T08:00:00")],
            "snippets": [snippet_data()],
        })
        assert added == 3
        assert storage.get_journal_entry(1).created_at == datetime(2026, 4, 30, 10, 0)
        assert storage.get_bug(1).resolved_at == datetime(2026, 4, 29, 8, 0)

    def test_missing_sections_allowed(self, storage):
        assert storage.import_snapshot({"journal": [journal_data()]}) == 1

    def test_non_object_rejected(self, storage):
        with pytest.raises(SnapshotError):
            storage.import_snapshot([1, 2])

    def test_bad_item_rejected(self, storage):
        with pytest.raises(SnapshotError):
            storage.import_snapshot({"journal": ["not an object"]})

    def test_bad_timestamp_rejected(self, storage):
        with pytest.raises(SnapshotError):
            storage.import_snapshot({"journal": [journal_data(created_at="yesterday")]})

    def test_from_snapshot_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"snippets": [snippet_data()]}), encoding="utf-8")
        storage = MemStorage.from_snapshot(path)
        assert len(storage.snippets) == 1

    def test_from_snapshot_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MemStorage.from_snapshot(tmp_path / "absent.json")

    def test_from_snapshot_invalid_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SnapshotError):
            MemStorage.from_snapshot(path)
