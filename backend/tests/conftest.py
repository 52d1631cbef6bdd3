"""
Test Configuration — in-memory fake of the catalog REST API, wired clients,
services, console session and console API client.

The fake speaks the catalog API over httpx.MockTransport, so every test goes
through the real CatalogClient request/response handling.
"""

import asyncio
import json
from collections import defaultdict

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from console.session import CatalogConsole
from notifications.channel import NotificationChannel
from services import CatalogClient, build_services

CATALOG_BASE_URL = "http://catalog.test/api"

COLLECTIONS = ("products", "events", "partners", "product-events", "subscriptions")


class FakeCatalogApi:
    """Minimal catalog API: JSON CRUD over dict tables, plus failure injection."""

    def __init__(self):
        self.tables: dict[str, dict[int, dict]] = {name: {} for name in COLLECTIONS}
        self._next_ids: dict[str, int] = defaultdict(lambda: 1)
        self.calls: list[tuple[str, str]] = []
        self.bodies: list[dict | None] = []
        self._failures: dict[tuple[str, str], object] = {}
        self.gate: asyncio.Event | None = None
        self.embed = True

    # ── Test helpers ──────────────────────────────────────────────────────

    def seed(self, collection: str, **record) -> dict:
        if "id" not in record:
            record["id"] = self._next_ids[collection]
        self._next_ids[collection] = max(self._next_ids[collection], record["id"] + 1)
        self.tables[collection][record["id"]] = record
        return self._expand(collection, record)

    def fail(self, method: str, path: str, status: int | type[Exception] = 500) -> None:
        """Make METHOD path fail with an HTTP status or an httpx exception class."""
        self._failures[(method, path)] = status

    def heal(self) -> None:
        self._failures.clear()

    def count(self, method: str, path: str | None = None) -> int:
        return sum(1 for m, p in self.calls if m == method and (path is None or p == path))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    # ── Request handling ──────────────────────────────────────────────────

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        method = request.method
        self.calls.append((method, path))
        body = json.loads(request.content) if request.content else None
        self.bodies.append(body)

        if self.gate is not None:
            await self.gate.wait()

        failure = self._failures.get((method, path))
        if isinstance(failure, int):
            return httpx.Response(failure, json={"detail": "injected failure"})
        if isinstance(failure, type) and issubclass(failure, Exception):
            raise failure("injected failure", request=request)

        return self._route(method, path.strip("/").split("/"), body)

    def _route(self, method: str, parts: list[str], body: dict | None) -> httpx.Response:
        collection = parts[0]
        if collection not in self.tables:
            return httpx.Response(404, json={"detail": "Unknown collection"})
        table = self.tables[collection]

        if len(parts) == 1:
            if method == "GET":
                return httpx.Response(200, json=[self._expand(collection, r) for r in table.values()])
            if method == "POST":
                record = self.seed(collection, **body)
                return httpx.Response(201, json=record)

        if len(parts) == 3 and parts[2] in ("events", "subscriptions") and method == "GET":
            owner_id = int(parts[1])
            if parts[2] == "events":
                rows = [r for r in self.tables["product-events"].values() if r["product_id"] == owner_id]
                return httpx.Response(200, json=[self._expand("product-events", r) for r in rows])
            rows = [r for r in self.tables["subscriptions"].values() if r["partner_id"] == owner_id]
            return httpx.Response(200, json=[self._expand("subscriptions", r) for r in rows])

        entity_id = int(parts[1])
        record = table.get(entity_id)
        if record is None:
            return httpx.Response(404, json={"detail": "Not found"})

        if len(parts) == 2:
            if method == "GET":
                return httpx.Response(200, json=self._expand(collection, record))
            if method == "PUT":
                record = {**body, "id": entity_id}
                table[entity_id] = record
                return httpx.Response(200, json=self._expand(collection, record))
            if method == "DELETE":
                del table[entity_id]
                return httpx.Response(204)

        if len(parts) == 3 and method == "PATCH":
            record.update(body)
            return httpx.Response(200, json=self._expand(collection, record))

        return httpx.Response(405, json={"detail": "Method not allowed"})

    def _expand(self, collection: str, record: dict) -> dict:
        if not self.embed:
            return dict(record)
        data = dict(record)
        if collection == "product-events":
            product = self.tables["products"].get(record["product_id"])
            event = self.tables["events"].get(record["event_id"])
            data["product"] = dict(product) if product else None
            data["event"] = dict(event) if event else None
        if collection == "subscriptions":
            partner = self.tables["partners"].get(record["partner_id"])
            mapping = self.tables["product-events"].get(record["product_event_id"])
            data["partner"] = (
                {"id": partner["id"], "name": partner["name"], "merchant_number": partner["merchant_number"]}
                if partner
                else None
            )
            data["product_event"] = self._expand("product-events", mapping) if mapping else None
        return data


@pytest.fixture
def fake_api():
    return FakeCatalogApi()


@pytest.fixture
def notifications():
    return NotificationChannel()


@pytest.fixture
async def catalog_client(fake_api):
    client = CatalogClient(CATALOG_BASE_URL, token="test-token", transport=fake_api.transport())
    yield client
    await client.aclose()


@pytest.fixture
def services(catalog_client, notifications):
    return build_services(client=catalog_client, notifications=notifications)


@pytest.fixture
async def console(fake_api):
    session = CatalogConsole(
        CatalogClient(CATALOG_BASE_URL, transport=fake_api.transport()),
        page_size=10,
    )
    yield session
    await session.aclose()


@pytest.fixture
def seeded_api(fake_api):
    """A small catalog: two products, two events, three mappings, two partners, two subscriptions."""
    fake_api.seed("products", id=1, name="Premium Service", description="Full support tier")
    fake_api.seed("products", id=2, name="Basic Plan", description="Entry tier")
    fake_api.seed("events", id=1, name="Product Launch", description="Go-live announcement")
    fake_api.seed("events", id=2, name="User Training", description="Onboarding session")
    fake_api.seed("product-events", id=1, product_id=1, event_id=1, order=1)
    fake_api.seed("product-events", id=2, product_id=1, event_id=2, order=2)
    fake_api.seed("product-events", id=3, product_id=2, event_id=1, order=1)
    fake_api.seed(
        "partners",
        id=1,
        merchant_number="MER001",
        name="TechCorp Solutions",
        partner_id="PARTNER001",
        client_id="CLIENT_001",
        status="Active",
    )
    fake_api.seed(
        "partners",
        id=2,
        merchant_number="MER002",
        name="Digital Innovations",
        partner_id="PARTNER002",
        client_id="CLIENT_002",
        status="Inactive",
    )
    fake_api.seed("subscriptions", id=1, partner_id=1, product_event_id=1, status="ACTIVE")
    fake_api.seed("subscriptions", id=2, partner_id=2, product_event_id=3, status="INACTIVE")
    return fake_api


@pytest.fixture
async def client(console):
    """Async test client for the console API with the fake-backed session."""
    from api.main import app

    app.state.console = console
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.state.console = None
