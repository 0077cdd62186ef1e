"""Middleware — path normalisation before routing, unhandled errors inside CORS.

Invariants:
    - Route prefixes match case-insensitively ("/Characters" → "/characters");
      path parameters (character ids) keep their case
    - One trailing slash is optional ("/characters/" → "/characters"); "/" is left alone
    - An exception escaping the routes becomes 500 {"message": str(exc)} while
      CORSMiddleware still wraps the response

Design Decisions:
    - Pure ASGI classes: scope["path"] rewritten before the router sees it
    - UnhandledErrorMiddleware registered before CORSMiddleware so CORS is outermost
"""

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from marvel_gateway.api.error_handlers import unhandled_error_response

ROUTE_PREFIXES = ("characters", "comics")


def normalize_path(path: str) -> str:
    """Lower-case a known leading segment and drop one trailing slash."""
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    segments = path.split("/")
    if len(segments) > 1 and segments[1].lower() in ROUTE_PREFIXES:
        segments[1] = segments[1].lower()
    return "/".join(segments)


class PathNormalizationMiddleware:
    """Rewrite the request path so routing is case-insensitive and non-strict."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = normalize_path(scope["path"])
            if path != scope["path"]:
                scope = dict(scope)
                scope["path"] = path
                scope["raw_path"] = path.encode("utf-8")
        await self.app(scope, receive, send)


class UnhandledErrorMiddleware:
    """Convert exceptions that escape the routes into the 500 envelope."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_tracking)
        except Exception as exc:
            if response_started:
                raise
            response = unhandled_error_response(scope["path"], scope["method"], exc)
            await response(scope, receive, send)
