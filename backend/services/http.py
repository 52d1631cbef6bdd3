"""
Catalog API HTTP Client

Thin wrapper around httpx.AsyncClient. Every non-2xx response and every
transport failure is translated into the catalog error taxonomy so the
entity services deal with a single exception family.
"""

from typing import Any

import httpx
import structlog

from catalog.errors import CatalogServiceError, NotFoundError, TransportError, ValidationError
from core.config import Settings

logger = structlog.get_logger()


class CatalogClient:
    """Client for the remote catalog REST API."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CatalogClient":
        return cls(
            settings.catalog_api_url,
            token=settings.catalog_api_token,
            timeout=settings.catalog_api_timeout,
            transport=transport,
        )

    async def request(self, method: str, path: str, *, json: Any = None) -> Any:
        """Send one request; return the decoded JSON body (None when empty)."""
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Timed out calling {method} {path}", method=method, path=path
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Could not reach catalog API: {exc}", method=method, path=path
            ) from exc

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise TransportError(
                    f"Malformed response body from {method} {path}",
                    method=method,
                    path=path,
                    status_code=response.status_code,
                ) from exc

        error = _error_for_response(method, path, response)
        logger.warning(
            "catalog.request.failed",
            method=method,
            path=path,
            status_code=response.status_code,
            error_type=type(error).__name__,
        )
        raise error

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, json: Any) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_for_response(method: str, path: str, response: httpx.Response) -> CatalogServiceError:
    try:
        detail = response.json()
    except ValueError:
        detail = response.text or None

    status = response.status_code
    kwargs = {"method": method, "path": path, "status_code": status, "detail": detail}
    if status == 404:
        return NotFoundError(f"{method} {path} returned 404", **kwargs)
    if 400 <= status < 500:
        return ValidationError(f"{method} {path} was rejected ({status})", **kwargs)
    return TransportError(f"{method} {path} failed ({status})", **kwargs)
