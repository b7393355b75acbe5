"""Context snippet CRUD endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from prompt_studio.actions import snippets as actions
from prompt_studio.api.deps import get_current_user_id, unwrap
from prompt_studio.api.models import SnippetCreate, SnippetResponse, SnippetUpdate
from prompt_studio.core.snippets import SnippetStore, get_snippet_store
from prompt_studio.core.suggestions import SnippetSuggestions, get_snippet_suggestions

router = APIRouter()


@router.post("", response_model=SnippetResponse, status_code=201)
async def create_snippet(
    data: SnippetCreate,
    user_id: str | None = Depends(get_current_user_id),
    store: SnippetStore = Depends(get_snippet_store),
) -> SnippetResponse:
    """Create a context snippet."""
    result = await actions.create_context_snippet(store, user_id, data.name, data.content)
    return SnippetResponse(**unwrap(result).model_dump())


@router.get("", response_model=list[SnippetResponse])
async def list_snippets(
    search: str | None = None,
    user_id: str | None = Depends(get_current_user_id),
    store: SnippetStore = Depends(get_snippet_store),
) -> list[SnippetResponse]:
    """List the caller's snippets, optionally filtered for autocomplete."""
    result = await actions.get_context_snippets(store, user_id, search=search)
    return [SnippetResponse(**s.model_dump()) for s in unwrap(result)]


@router.get("/suggest", response_model=list[SnippetResponse])
async def suggest_snippets(
    q: str = "",
    user_id: str | None = Depends(get_current_user_id),
    suggestions: SnippetSuggestions = Depends(get_snippet_suggestions),
) -> list[SnippetResponse]:
    """Debounced @-autocomplete; a superseded request for the same user gets an empty list."""
    result = await actions.suggest_context_snippets(suggestions, user_id, q)
    return [SnippetResponse(**s.model_dump()) for s in unwrap(result)]


@router.get("/by-name/{name}", response_model=SnippetResponse)
async def get_snippet_by_name(
    name: str,
    user_id: str | None = Depends(get_current_user_id),
    store: SnippetStore = Depends(get_snippet_store),
) -> SnippetResponse:
    """Get a snippet by its @name."""
    result = await actions.get_context_snippet_by_name(store, user_id, name)
    return SnippetResponse(**unwrap(result).model_dump())


@router.get("/{snippet_id}", response_model=SnippetResponse)
async def get_snippet(
    snippet_id: str,
    user_id: str | None = Depends(get_current_user_id),
    store: SnippetStore = Depends(get_snippet_store),
) -> SnippetResponse:
    """Get a snippet by id."""
    result = await actions.get_context_snippet(store, user_id, snippet_id)
    return SnippetResponse(**unwrap(result).model_dump())


@router.patch("/{snippet_id}", response_model=SnippetResponse)
async def update_snippet(
    snippet_id: str,
    data: SnippetUpdate,
    user_id: str | None = Depends(get_current_user_id),
    store: SnippetStore = Depends(get_snippet_store),
) -> SnippetResponse:
    """Rename a snippet and/or replace its content."""
    result = await actions.update_context_snippet(
        store, user_id, snippet_id, name=data.name, content=data.content
    )
    return SnippetResponse(**unwrap(result).model_dump())


@router.delete("/{snippet_id}", status_code=204)
async def delete_snippet(
    snippet_id: str,
    user_id: str | None = Depends(get_current_user_id),
    store: SnippetStore = Depends(get_snippet_store),
) -> None:
    """Delete a snippet."""
    unwrap(await actions.delete_context_snippet(store, user_id, snippet_id))
