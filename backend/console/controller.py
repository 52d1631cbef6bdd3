"""
List Controller — state and derivation logic behind one console list page.

    refresh() ──▶ items ──▶ filter(query) ──▶ stable sort(key, direction) ──▶ page slice
                    ▲
                    └── create_or_update / confirm_remove / toggle_status / reorder

Mutations are serialized by the `mutating` flag: a second mutation issued while
one is in flight is dropped without touching the network. Nothing is committed
to `items` unless the remote call succeeded.
"""

from __future__ import annotations

import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

import structlog
from pydantic import BaseModel

from catalog.errors import CatalogServiceError
from console.listings import ListingSpec
from console.relationships import CatalogIndex
from services.base import EntityService

logger = structlog.get_logger()

EntityT = TypeVar("EntityT", bound=BaseModel)

DEFAULT_PAGE_SIZE = 10


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class MutationStatus(str, Enum):
    """Outcome of a controller mutation."""

    APPLIED = "applied"
    BUSY = "busy"  # dropped: another mutation was in flight
    FAILED = "failed"  # remote call failed; items untouched
    SKIPPED = "skipped"  # nothing to do (e.g. order would drop below 1)


@dataclass
class MutationResult(Generic[EntityT]):
    status: MutationStatus
    entity: EntityT | None = None
    error: CatalogServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.status in (MutationStatus.APPLIED, MutationStatus.SKIPPED)


@dataclass
class ListView(Generic[EntityT]):
    """One derived page of a list."""

    items: list[EntityT]
    total: int
    page: int
    page_size: int
    page_count: int
    query: str
    sort_key: str | None
    sort_direction: SortDirection
    loading: bool
    mutating: bool
    rows: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": self.rows,
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
            "page_count": self.page_count,
            "query": self.query,
            "sort": self.sort_key,
            "direction": self.sort_direction.value,
            "loading": self.loading,
            "mutating": self.mutating,
        }


class ListController(Generic[EntityT]):
    """Owns one page's collection, query/sort/page state and mutation guard."""

    def __init__(
        self,
        service: EntityService,
        listing: ListingSpec,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        index_provider: Callable[[], CatalogIndex] | None = None,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.service = service
        self.listing = listing
        self.page_size = page_size
        self.index_provider = index_provider
        self.logger = logger.bind(entity=listing.kind.value)

        self.items: list[EntityT] = []
        self.query = ""
        self.sort_key: str | None = listing.default_sort
        self.sort_direction = SortDirection.ASC
        self.page = 1
        self.loading = False
        self.mutating = False
        self.loaded = False
        self.pending_removal: EntityT | None = None

    # ── Loading ───────────────────────────────────────────────────────────

    async def refresh(self) -> bool:
        """Reload items; on failure the previous items stay available."""
        self.loading = True
        try:
            items = await self.service.list()
        except CatalogServiceError as exc:
            self.logger.warning("console.refresh.failed", error=exc.message, kept=len(self.items))
            return False
        finally:
            self.loading = False
        self.items = list(items)
        self.loaded = True
        return True

    async def ensure_loaded(self) -> None:
        if not self.loaded:
            await self.refresh()

    # ── Query state ───────────────────────────────────────────────────────

    def set_query(self, query: str) -> None:
        if query != self.query:
            self.query = query
            self.page = 1

    def set_sort(self, key: str | None, direction: SortDirection | str | None = None) -> None:
        if key is not None and key not in self.listing.sort_keys:
            raise ValueError(f"Unknown sort key for {self.listing.kind.value}: {key}")
        if key != self.sort_key:
            self.sort_key = key
            self.page = 1
        if direction is not None:
            self.sort_direction = SortDirection(direction)

    def set_page(self, page: int) -> None:
        self.page = min(max(1, page), self.page_count())

    def page_count(self, total: int | None = None) -> int:
        if total is None:
            total = len(self._filtered(self._index()))
        return max(1, math.ceil(total / self.page_size))

    def find(self, entity_id: int) -> EntityT | None:
        for item in self.items:
            if item.id == entity_id:
                return item
        return None

    # ── Derived view ──────────────────────────────────────────────────────

    def view(self) -> ListView[EntityT]:
        index = self._index()
        filtered = self._filtered(index)
        ordered = self._sorted(filtered, index)
        page_count = self.page_count(len(ordered))
        page = min(max(1, self.page), page_count)
        start = (page - 1) * self.page_size
        window = ordered[start : start + self.page_size]
        return ListView(
            items=window,
            total=len(ordered),
            page=page,
            page_size=self.page_size,
            page_count=page_count,
            query=self.query,
            sort_key=self.sort_key,
            sort_direction=self.sort_direction,
            loading=self.loading,
            mutating=self.mutating,
            rows=[self.listing.row(item, index) for item in window],
        )

    def _index(self) -> CatalogIndex | None:
        return self.index_provider() if self.index_provider else None

    def _filtered(self, index: CatalogIndex | None) -> list[EntityT]:
        return [item for item in self.items if self.listing.matches(item, self.query, index)]

    def _sorted(self, items: list[EntityT], index: CatalogIndex | None) -> list[EntityT]:
        if self.sort_key is None:
            return items
        key = self.sort_key
        tie_break = self.listing.tie_breaks.get(key)
        if tie_break is not None:
            items = sorted(items, key=lambda item: tie_break(item, index))
        # sorted() is stable for reverse=True as well.
        return sorted(
            items,
            key=lambda item: self.listing.sort_value(key, item, index),
            reverse=self.sort_direction is SortDirection.DESC,
        )

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create_or_update(
        self, draft: BaseModel, existing: EntityT | None = None
    ) -> MutationResult[EntityT]:
        if existing is not None:
            return await self._mutate(
                "update", lambda: self.service.update(existing.id, draft), self._replace
            )
        return await self._mutate("create", lambda: self.service.create(draft), self._append)

    def request_remove(self, target: EntityT) -> None:
        """First step of removal: remember what the user asked to delete."""
        self.pending_removal = target

    def cancel_remove(self) -> None:
        self.pending_removal = None

    async def confirm_remove(self) -> MutationResult[EntityT]:
        target = self.pending_removal
        if target is None:
            return MutationResult(MutationStatus.SKIPPED)

        async def _delete() -> EntityT:
            await self.service.delete(target.id)
            return target

        result = await self._mutate("delete", _delete, self._drop)
        if result.status is not MutationStatus.BUSY:
            self.pending_removal = None
        return result

    async def toggle_status(self, target: EntityT) -> MutationResult[EntityT]:
        update_status = getattr(self.service, "update_status", None)
        if update_status is None:
            raise TypeError(f"{self.listing.kind.value} has no status to toggle")
        new_status = target.status.toggled()
        return await self._mutate(
            "toggle_status", lambda: update_status(target.id, new_status), self._replace
        )

    async def reorder(
        self, target: EntityT, direction: MoveDirection | str
    ) -> MutationResult[EntityT]:
        update_order = getattr(self.service, "update_order", None)
        if update_order is None:
            raise TypeError(f"{self.listing.kind.value} cannot be reordered")
        step = -1 if MoveDirection(direction) is MoveDirection.UP else 1
        new_order = target.order + step
        if new_order < 1:
            return MutationResult(MutationStatus.SKIPPED, entity=target)
        return await self._mutate(
            "reorder", lambda: update_order(target.id, new_order), self._replace
        )

    async def _mutate(
        self,
        action: str,
        call: Callable[[], Awaitable[EntityT]],
        reconcile: Callable[[EntityT], None],
    ) -> MutationResult[EntityT]:
        if self.mutating:
            self.logger.warning("console.mutation.dropped", action=action)
            return MutationResult(MutationStatus.BUSY)
        self.mutating = True
        try:
            entity = await call()
        except CatalogServiceError as exc:
            return MutationResult(MutationStatus.FAILED, error=exc)
        finally:
            self.mutating = False
        reconcile(entity)
        return MutationResult(MutationStatus.APPLIED, entity=entity)

    def _append(self, entity: EntityT) -> None:
        self.items = [*self.items, entity]

    def _replace(self, entity: EntityT) -> None:
        self.items = [entity if item.id == entity.id else item for item in self.items]

    def _drop(self, entity: EntityT) -> None:
        self.items = [item for item in self.items if item.id != entity.id]
