"""Characters — upstream search proxy and local in-memory CRUD on one URL namespace.

Invariants:
    - GET /characters goes to the local store only when source == "local"
    - skip/limit parsed by parse_pagination() on both branches
    - Upstream bodies relayed byte-for-byte with HTTP 200
    - Store errors (400/404) raised as GatewayError, serialized by error_handlers

Design Decisions:
    - Body read as Any: the store decides what a valid character payload is
    - Store and upstream client reached through dependencies, never imported globals
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from marvel_gateway.api.dependencies import get_character_store, get_marvel_client
from marvel_gateway.core.character_store import CharacterStore
from marvel_gateway.core.query_params import parse_pagination
from marvel_gateway.infrastructure.marvel_client import MarvelAPIClient

router = APIRouter(prefix="/characters", tags=["characters"])

LOCAL_SOURCE = "local"


@router.get("")
async def list_characters(
    source: str = Query("external"),
    name: str = Query(""),
    skip: str | None = Query(None),
    limit: str | None = Query(None),
    store: CharacterStore = Depends(get_character_store),
    marvel: MarvelAPIClient = Depends(get_marvel_client),
):
    """Search upstream characters, or list the local store with ?source=local."""
    skip_n, limit_n = parse_pagination(skip, limit)

    if source == LOCAL_SOURCE:
        return store.list_page(skip_n, limit_n).to_dict()

    upstream = await marvel.search("characters", name, skip_n, limit_n)
    return Response(content=upstream.content, media_type=upstream.media_type)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_character(
    payload: Any = Body(None),
    store: CharacterStore = Depends(get_character_store),
):
    """Create a local character; body needs at least a name."""
    return store.create(payload).to_dict()


@router.put("/{character_id}")
async def update_character(
    character_id: str,
    payload: Any = Body(None),
    store: CharacterStore = Depends(get_character_store),
):
    """Shallow-merge the body into a local character."""
    return store.update(character_id, payload).to_dict()


@router.delete("/{character_id}")
async def delete_character(
    character_id: str,
    store: CharacterStore = Depends(get_character_store),
):
    removed = store.delete(character_id)
    return {"deleted": removed.to_dict()}
