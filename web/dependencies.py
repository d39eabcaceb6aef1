"""Shared FastAPI dependencies for the web layer."""

from __future__ import annotations

from fastapi import HTTPException, Request

from devjournal.models import Bug, JournalEntry, Snippet
from devjournal.storage import MemStorage
from devjournal.turtle import TurtleCanvas


def get_storage(request: Request) -> MemStorage:
    """Return the record store from app state."""
    return request.app.state.storage


def get_canvas(request: Request) -> TurtleCanvas:
    """Return the application's single drawing canvas."""
    return request.app.state.canvas


def get_journal_entry(entry_id: int, request: Request) -> JournalEntry:
    """Load a journal entry by ID, raising 404 if not found."""
    entry = get_storage(request).get_journal_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    return entry


def get_bug(bug_id: int, request: Request) -> Bug:
    """Load a bug by ID, raising 404 if not found."""
    bug = get_storage(request).get_bug(bug_id)
    if bug is None:
        raise HTTPException(status_code=404, detail="Bug not found")
    return bug


def get_snippet(snippet_id: int, request: Request) -> Snippet:
    """Load a snippet by ID, raising 404 if not found."""
    snippet = get_storage(request).get_snippet(snippet_id)
    if snippet is None:
        raise HTTPException(status_code=404, detail="Snippet not found")
    return snippet
