"""Marvel Search Client — wraps httpx.AsyncClient with error mapping for the upstream API.

Invariants:
    - Every search sends apiKey, name, skip, limit as query parameters
    - 2xx bodies are returned as raw bytes, never parsed or reshaped
    - Redirects are followed; a final non-2xx and any request failure
      (transport, redirect loop) are mapped to UpstreamAPIError (core/errors.py)
    - Error messages never carry the request URL, so the API key cannot leak
    - No retry: one outbound call per inbound request

Design Decisions:
    - Wrapper over raw client: routes only see search() and UpstreamAPIError
    - transport injectable: tests substitute httpx.MockTransport for the network
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from marvel_gateway.core.errors import ErrorContext, UpstreamAPIError

logger = logging.getLogger(__name__)

SEARCHABLE_RESOURCES = ("characters", "comics")


@dataclass
class UpstreamResponse:
    """Opaque upstream body relayed to the caller."""
    content: bytes
    media_type: str = "application/json"


class MarvelAPIClient:
    """Forwards character/comic searches to the upstream Marvel API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport,
            follow_redirects=True,
        )

    async def search(
        self, resource: str, name: str, skip: int, limit: int,
    ) -> UpstreamResponse:
        """GET /{resource} upstream; raise UpstreamAPIError on any failure."""
        if resource not in SEARCHABLE_RESOURCES:
            raise ValueError(f"Unknown upstream resource: {resource}")
        context = ErrorContext(resource=resource)
        params = {
            "apiKey": self.api_key,
            "name": name,
            "skip": skip,
            "limit": limit,
        }

        try:
            response = await self.client.get(f"/{resource}", params=params)
        except httpx.RequestError as e:
            description = str(e) or e.__class__.__name__
            self._log_failure(description, resource, None)
            raise UpstreamAPIError(description, context=context)

        if not response.is_success:
            description = f"Request failed with status code {response.status_code}"
            payload = _read_payload(response)
            self._log_failure(payload or description, resource, response.status_code)
            raise UpstreamAPIError(
                description,
                upstream_status=response.status_code,
                upstream_payload=payload,
                context=context,
            )

        logger.info(
            f"Upstream {resource} search ok",
            extra={"resource": resource, "upstream_status": response.status_code},
        )
        return UpstreamResponse(content=response.content)

    async def aclose(self) -> None:
        await self.client.aclose()

    def _log_failure(self, detail: Any, resource: str, status: int | None) -> None:
        logger.error(
            f"Upstream {resource} search failed: {detail}",
            extra={"resource": resource, "upstream_status": status},
        )


def _read_payload(response: httpx.Response) -> Any:
    """Upstream error body as JSON when possible, else text; None when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
