"""
Tests for the catalog HTTP client: headers, body decoding and the mapping of
HTTP/transport failures onto the catalog error taxonomy.
"""

import json

import httpx
import pytest

from catalog.errors import CatalogServiceError, NotFoundError, TransportError, ValidationError
from services.http import CatalogClient


def _client(handler, **kwargs) -> CatalogClient:
    return CatalogClient("http://catalog.test/api/", transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
class TestCatalogClient:
    async def test_joins_base_url_and_sends_bearer_token(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": 1}])

        client = _client(handler, token="secret")
        try:
            data = await client.get("/products")
        finally:
            await client.aclose()

        assert data == [{"id": 1}]
        assert seen[0].url.path == "/api/products"
        assert seen[0].headers["Authorization"] == "Bearer secret"
        assert seen[0].headers["Accept"] == "application/json"

    async def test_no_authorization_header_without_token(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        client = _client(handler)
        try:
            await client.get("/events")
        finally:
            await client.aclose()

        assert "Authorization" not in seen[0].headers

    async def test_no_content_returns_none(self):
        client = _client(lambda request: httpx.Response(204))
        try:
            assert await client.delete("/products/1") is None
        finally:
            await client.aclose()

    async def test_json_body_is_sent(self):
        bodies: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(request.content)
            return httpx.Response(200, json={"id": 3, "order": 2})

        client = _client(handler)
        try:
            await client.patch("/product-events/3/order", {"order": 2})
        finally:
            await client.aclose()

        assert [json.loads(body) for body in bodies] == [{"order": 2}]

    @pytest.mark.parametrize(
        "status_code,error_type",
        [
            (404, NotFoundError),
            (400, ValidationError),
            (422, ValidationError),
            (409, ValidationError),
            (500, TransportError),
            (503, TransportError),
        ],
    )
    async def test_status_codes_map_to_error_taxonomy(self, status_code, error_type):
        client = _client(lambda request: httpx.Response(status_code, json={"detail": "nope"}))
        try:
            with pytest.raises(error_type) as exc_info:
                await client.get("/partners/9")
        finally:
            await client.aclose()

        error = exc_info.value
        assert error.status_code == status_code
        assert error.method == "GET"
        assert error.path == "/partners/9"
        assert error.detail == {"detail": "nope"}

    async def test_connection_failure_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(handler)
        try:
            with pytest.raises(TransportError, match="Could not reach catalog API"):
                await client.get("/products")
        finally:
            await client.aclose()

    async def test_timeout_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client = _client(handler)
        try:
            with pytest.raises(TransportError, match="Timed out"):
                await client.get("/products")
        finally:
            await client.aclose()

    async def test_malformed_body_is_transport_error(self):
        client = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
        try:
            with pytest.raises(TransportError, match="Malformed"):
                await client.get("/products")
        finally:
            await client.aclose()

    async def test_error_to_dict(self):
        client = _client(lambda request: httpx.Response(404, text="missing"))
        try:
            with pytest.raises(CatalogServiceError) as exc_info:
                await client.get("/events/5")
        finally:
            await client.aclose()

        payload = exc_info.value.to_dict()
        assert payload["error"] == "NotFoundError"
        assert payload["status_code"] == 404
        assert payload["detail"] == "missing"
