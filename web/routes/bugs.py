"""Bug endpoints — list, create, get, update, delete."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response

from web.dependencies import get_bug, get_storage
from web.schemas import BugCreate, BugOut, BugUpdate

router = APIRouter(tags=["bugs"])


@router.get("/bugs", response_model=list[BugOut])
async def list_bugs(
    request: Request,
    search: str | None = None,
    status: str | None = None,
    priority: str | None = None,
):
    """List bugs, newest first. ``all`` disables a filter."""
    bugs = get_storage(request).list_bugs(search, status, priority)
    return [b.to_dict() for b in bugs]


@router.get("/bugs/{bug_id}", response_model=BugOut)
async def get_bug_detail(bug_id: int, request: Request):
    return get_bug(bug_id, request).to_dict()


@router.post("/bugs", response_model=BugOut, status_code=201)
async def create_bug(body: BugCreate, request: Request):
    """Create a bug. A bug created as resolved is stamped resolved now."""
    bug = get_storage(request).create_bug(body.model_dump(mode="json"))
    return bug.to_dict()


@router.put("/bugs/{bug_id}", response_model=BugOut)
async def update_bug(bug_id: int, body: BugUpdate, request: Request):
    get_bug(bug_id, request)
    bug = get_storage(request).update_bug(bug_id, body.model_dump(mode="json", exclude_unset=True))
    return bug.to_dict()


@router.delete("/bugs/{bug_id}", status_code=204)
async def delete_bug(bug_id: int, request: Request):
    get_bug(bug_id, request)
    get_storage(request).delete_bug(bug_id)
    return Response(status_code=204)
