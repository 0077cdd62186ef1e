"""Comics — read-only proxy to the upstream comics search."""

from fastapi import APIRouter, Depends, Query, Response

from marvel_gateway.api.dependencies import get_marvel_client
from marvel_gateway.core.query_params import parse_pagination
from marvel_gateway.infrastructure.marvel_client import MarvelAPIClient

router = APIRouter(prefix="/comics", tags=["comics"])


@router.get("")
async def search_comics(
    name: str = Query(""),
    skip: str | None = Query(None),
    limit: str | None = Query(None),
    marvel: MarvelAPIClient = Depends(get_marvel_client),
):
    skip_n, limit_n = parse_pagination(skip, limit)
    upstream = await marvel.search("comics", name, skip_n, limit_n)
    return Response(content=upstream.content, media_type=upstream.media_type)
