"""Error Hierarchy — typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), http_status (int)
    - to_response() always produces the single-field envelope {"message": ...}
    - Client errors (400/404) never touch the local store; upstream errors map to 500

Design Decisions:
    - Single hierarchy with GatewayError base: one global handler serializes all of them
    - ErrorContext as dataclass: observability fields travel with the error, not the logger
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"


@dataclass
class ErrorContext:
    """Request-side details attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    character_id: str | None = None
    resource: str | None = None
    debug_info: dict[str, Any] | None = None


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"message": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

CREATE_BODY_MESSAGE = "Le body doit contenir au moins { name }"
OBJECT_BODY_MESSAGE = "Le body doit être un objet JSON"
CHARACTER_NOT_FOUND_MESSAGE = "Character not found in local store"
ROUTE_NOT_FOUND_MESSAGE = "This route does not exist"


class CharacterValidationError(GatewayError):
    """Request body rejected before any record is touched."""
    def __init__(
        self, message: str = CREATE_BODY_MESSAGE, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION, context, 400,
        )


class CharacterNotFoundError(GatewayError):
    """No local character carries the requested id."""
    def __init__(self, character_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.character_id = character_id
        super().__init__(
            CHARACTER_NOT_FOUND_MESSAGE, "CHARACTER_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ctx, 404,
        )
        self.character_id = character_id


class RouteNotFoundError(GatewayError):
    """No route matches the method and path."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            ROUTE_NOT_FOUND_MESSAGE, "ROUTE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, context, 404,
        )


# ─── Upstream Errors (500-level) ────────────────────────────────

class UpstreamAPIError(GatewayError):
    """Search upstream unreachable or answered with a non-2xx status."""
    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        upstream_payload: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UPSTREAM_API_ERROR", ErrorCategory.EXTERNAL_API,
            context, 500,
        )
        self.upstream_status = upstream_status
        self.upstream_payload = upstream_payload
