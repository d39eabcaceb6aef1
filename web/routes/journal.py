"""Journal endpoints — list, create, get, update, delete."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response

from web.dependencies import get_journal_entry, get_storage
from web.schemas import JournalEntryCreate, JournalEntryOut, JournalEntryUpdate

router = APIRouter(tags=["journal"])


@router.get("/journal", response_model=list[JournalEntryOut])
async def list_journal_entries(
    request: Request,
    search: str | None = None,
    difficulty: str | None = None,
    source: str | None = None,
):
    """List journal entries, newest first. ``all`` disables a filter."""
    storage = get_storage(request)
    entries = storage.list_journal_entries(search, difficulty, source)
    return [e.to_dict() for e in entries]


@router.get("/journal/{entry_id}", response_model=JournalEntryOut)
async def get_journal_entry_detail(entry_id: int, request: Request):
    return get_journal_entry(entry_id, request).to_dict()


@router.post("/journal", response_model=JournalEntryOut, status_code=201)
async def create_journal_entry(body: JournalEntryCreate, request: Request):
    storage = get_storage(request)
    entry = storage.create_journal_entry(body.model_dump(mode="json"))
    return entry.to_dict()


@router.put("/journal/{entry_id}", response_model=JournalEntryOut)
async def update_journal_entry(entry_id: int, body: JournalEntryUpdate, request: Request):
    """Partial update — only fields present in the body change."""
    get_journal_entry(entry_id, request)
    storage = get_storage(request)
    entry = storage.update_journal_entry(entry_id, body.model_dump(mode="json", exclude_unset=True))
    return entry.to_dict()


@router.delete("/journal/{entry_id}", status_code=204)
async def delete_journal_entry(entry_id: int, request: Request):
    get_journal_entry(entry_id, request)
    get_storage(request).delete_journal_entry(entry_id)
    return Response(status_code=204)
