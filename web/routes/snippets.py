"""Snippet endpoints — list, create, get, update, delete, record a use."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from devjournal.storage import RecordNotFoundError
from web.dependencies import get_snippet, get_storage
from web.schemas import SnippetCreate, SnippetOut, SnippetUpdate

router = APIRouter(tags=["snippets"])


@router.get("/snippets", response_model=list[SnippetOut])
async def list_snippets(
    request: Request,
    search: str | None = None,
    language: str | None = None,
    category: str | None = None,
):
    """List snippets, newest first. ``all`` disables a filter."""
    snippets = get_storage(request).list_snippets(search, language, category)
    return [s.to_dict() for s in snippets]


@router.get("/snippets/{snippet_id}", response_model=SnippetOut)
async def get_snippet_detail(snippet_id: int, request: Request):
    return get_snippet(snippet_id, request).to_dict()


@router.post("/snippets", response_model=SnippetOut, status_code=201)
async def create_snippet(body: SnippetCreate, request: Request):
    snippet = get_storage(request).create_snippet(body.model_dump(mode="json"))
    return snippet.to_dict()


@router.put("/snippets/{snippet_id}", response_model=SnippetOut)
async def update_snippet(snippet_id: int, body: SnippetUpdate, request: Request):
    get_snippet(snippet_id, request)
    snippet = get_storage(request).update_snippet(
        snippet_id, body.model_dump(mode="json", exclude_unset=True)
    )
    return snippet.to_dict()


@router.delete("/snippets/{snippet_id}", status_code=204)
async def delete_snippet(snippet_id: int, request: Request):
    get_snippet(snippet_id, request)
    get_storage(request).delete_snippet(snippet_id)
    return Response(status_code=204)


@router.post("/snippets/{snippet_id}/use", status_code=204)
async def use_snippet(snippet_id: int, request: Request):
    """Count one more use of a snippet."""
    try:
        get_storage(request).increment_snippet_usage(snippet_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Snippet not found")
    return Response(status_code=204)
