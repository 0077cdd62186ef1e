"""Root & Fallback — liveness greeting and the catch-all 404.

Invariants:
    - GET / always returns 200 text/plain "Hello World!"
    - fallback_router matches every method and path; include it LAST in main.py
      so it never shadows a named route

Design Decisions:
    - Catch-all as a real route instead of a 404/405 handler: PATCH /characters
      and other method mismatches get the same body as unknown paths
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from marvel_gateway.core.errors import ErrorContext, RouteNotFoundError

router = APIRouter(tags=["root"])
fallback_router = APIRouter(include_in_schema=False)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.get("/", response_class=PlainTextResponse)
async def hello():
    return "Hello World!"


@fallback_router.api_route("/{full_path:path}", methods=ALL_METHODS)
async def route_not_found(full_path: str, request: Request):
    raise RouteNotFoundError(
        ErrorContext(debug_info={"method": request.method, "path": f"/{full_path}"}),
    )
