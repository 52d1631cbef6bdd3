"""
Entity Service — Abstract Base Class

Every catalog entity (products, events, partners, product-event mappings,
subscriptions) is reached through a service built on this class, so list
controllers and forms can drive any of them uniformly.

Contract:
    list()              — fetch all records
    get(id)             — fetch one record
    create(draft)       — submit a validated draft, returns the stored record
    update(id, draft)   — full-record replace
    delete(id)          — remove a record

Each call emits exactly one notification on failure, and one on success for
mutations. Failures are logged and re-raised unchanged; nothing is retried.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from catalog.errors import CatalogServiceError, TransportError
from notifications.channel import Notification, NotificationChannel
from services.http import CatalogClient

logger = structlog.get_logger()

EntityT = TypeVar("EntityT", bound=BaseModel)
DraftT = TypeVar("DraftT", bound=BaseModel)
ResultT = TypeVar("ResultT")


# ── Entity kinds ───────────────────────────────────────────────────────────


class EntityKind(str, Enum):
    """Catalog entities, valued by their REST collection segment."""

    PRODUCT = "products"
    EVENT = "events"
    PARTNER = "partners"
    PRODUCT_EVENT = "product-events"
    SUBSCRIPTION = "subscriptions"


# ── Abstract service ───────────────────────────────────────────────────────


class EntityService(Generic[EntityT, DraftT]):
    """
    Base class for all catalog entity services.

    Subclasses declare the entity/draft models, the collection path and the
    nouns used in notification copy:

        singular     "product event"           → "Failed to fetch product event"
        plural       "product events"          → "Failed to fetch product events"
        record_name  "product event mapping"   → "Product event mapping created successfully"
    """

    kind: ClassVar[EntityKind]
    entity_model: ClassVar[type[BaseModel]]
    draft_model: ClassVar[type[BaseModel]]
    singular: ClassVar[str]
    plural: ClassVar[str]
    record_name: ClassVar[str]

    def __init__(self, client: CatalogClient, notifications: NotificationChannel):
        self.client = client
        self.notifications = notifications
        self.logger = logger.bind(entity=self.kind.value)

    @property
    def collection_path(self) -> str:
        return f"/{self.kind.value}"

    def item_path(self, entity_id: int) -> str:
        return f"{self.collection_path}/{entity_id}"

    # ── CRUD ──────────────────────────────────────────────────────────────

    async def list(self) -> list[EntityT]:
        async def _op() -> list[EntityT]:
            return self._parse_many(await self.client.get(self.collection_path))

        return await self._run("list", _op, failure=f"Failed to fetch {self.plural}")

    async def get(self, entity_id: int) -> EntityT:
        async def _op() -> EntityT:
            return self._parse(await self.client.get(self.item_path(entity_id)))

        return await self._run(
            "get", _op, failure=f"Failed to fetch {self.singular}", entity_id=entity_id
        )

    async def create(self, draft: DraftT) -> EntityT:
        async def _op() -> EntityT:
            payload = draft.model_dump(mode="json")
            return self._parse(await self.client.post(self.collection_path, payload))

        return await self._run(
            "create",
            _op,
            success=f"{self.record_name.capitalize()} created successfully",
            failure=f"Failed to create {self.record_name}",
        )

    async def update(self, entity_id: int, draft: DraftT) -> EntityT:
        async def _op() -> EntityT:
            payload = draft.model_dump(mode="json")
            return self._parse(await self.client.put(self.item_path(entity_id), payload))

        return await self._run(
            "update",
            _op,
            success=f"{self.record_name.capitalize()} updated successfully",
            failure=f"Failed to update {self.record_name}",
            entity_id=entity_id,
        )

    async def delete(self, entity_id: int) -> None:
        async def _op() -> None:
            await self.client.delete(self.item_path(entity_id))

        await self._run(
            "delete",
            _op,
            success=f"{self.record_name.capitalize()} deleted successfully",
            failure=f"Failed to delete {self.record_name}",
            entity_id=entity_id,
        )

    # ── Helpers for subclasses ─────────────────────────────────────────────

    async def _patch(
        self,
        entity_id: int,
        segment: str,
        payload: dict[str, Any],
        *,
        success: str,
        failure: str,
    ) -> EntityT:
        """Narrow mutator: PATCH only the changed field of one record."""

        async def _op() -> EntityT:
            path = f"{self.item_path(entity_id)}/{segment}"
            return self._parse(await self.client.patch(path, payload))

        return await self._run(
            f"patch_{segment}", _op, success=success, failure=failure, entity_id=entity_id
        )

    async def _list_at(self, path: str, *, failure: str) -> list[EntityT]:
        async def _op() -> list[EntityT]:
            return self._parse_many(await self.client.get(path))

        return await self._run("list", _op, failure=failure, path=path)

    async def _run(
        self,
        action: str,
        operation: Callable[[], Awaitable[ResultT]],
        *,
        failure: str,
        success: str | None = None,
        **context: Any,
    ) -> ResultT:
        try:
            result = await operation()
        except CatalogServiceError as exc:
            self.logger.error(
                f"catalog.{action}.failed",
                error=exc.message,
                error_type=type(exc).__name__,
                status_code=exc.status_code,
                **context,
            )
            self.notifications.emit(Notification.failure(failure))
            raise
        if success is not None:
            self.logger.info(f"catalog.{action}.succeeded", **context)
            self.notifications.emit(Notification.success(success))
        return result

    def _parse(self, data: Any) -> EntityT:
        try:
            return self.entity_model.model_validate(data)  # type: ignore[return-value]
        except PydanticValidationError as exc:
            raise TransportError(
                f"Unexpected {self.singular} shape from catalog API",
                detail=exc.errors(include_url=False),
            ) from exc

    def _parse_many(self, data: Any) -> list[EntityT]:
        if not isinstance(data, list):
            raise TransportError(f"Expected a list of {self.plural} from catalog API")
        return [self._parse(item) for item in data]


# ── Service registry ───────────────────────────────────────────────────────

_SERVICE_REGISTRY: dict[EntityKind, type[EntityService]] = {}


def register_service(service_cls: type[EntityService]) -> type[EntityService]:
    """Decorator: register a service class for its entity kind."""
    _SERVICE_REGISTRY[service_cls.kind] = service_cls
    return service_cls


def build_services(
    client: CatalogClient,
    notifications: NotificationChannel,
) -> dict[EntityKind, EntityService]:
    """Factory: one service instance per registered entity kind."""
    return {
        kind: service_cls(client=client, notifications=notifications)
        for kind, service_cls in _SERVICE_REGISTRY.items()
    }
