"""
Per-entity list page definitions: which fields the search box matches, which
columns can be sorted, and the display columns derived for each row.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from console.relationships import (
    CatalogIndex,
    mapping_event_name,
    mapping_product_name,
    subscription_event_name,
    subscription_partner_name,
    subscription_product_name,
)
from services.base import EntityKind

FieldGetter = Callable[[Any, CatalogIndex | None], Any]


@dataclass(frozen=True)
class ListingSpec:
    kind: EntityKind
    search_fields: tuple[FieldGetter, ...]
    sort_keys: dict[str, FieldGetter]
    default_sort: str | None = None
    display: dict[str, FieldGetter] = field(default_factory=dict)
    # Secondary keys, always ascending, regardless of the primary direction.
    tie_breaks: dict[str, FieldGetter] = field(default_factory=dict)

    def matches(self, entity: Any, needle: str, index: CatalogIndex | None = None) -> bool:
        """Case-insensitive substring match against any searchable field."""
        if not needle:
            return True
        needle = needle.casefold()
        for getter in self.search_fields:
            value = getter(entity, index)
            if value is not None and needle in str(value).casefold():
                return True
        return False

    def sort_value(self, key: str, entity: Any, index: CatalogIndex | None = None) -> Any:
        value = self.sort_keys[key](entity, index)
        if isinstance(value, str):
            return value.casefold()
        return value

    def row(self, entity: Any, index: CatalogIndex | None = None) -> dict[str, Any]:
        data = entity.model_dump(mode="json")
        for column, getter in self.display.items():
            data[column] = getter(entity, index)
        return data


def _attr(name: str) -> FieldGetter:
    def _get(entity: Any, index: CatalogIndex | None = None) -> Any:
        value = getattr(entity, name)
        return getattr(value, "value", value)

    return _get


PRODUCT_LISTING = ListingSpec(
    kind=EntityKind.PRODUCT,
    search_fields=(_attr("name"), _attr("description")),
    sort_keys={"id": _attr("id"), "name": _attr("name"), "description": _attr("description")},
)

EVENT_LISTING = ListingSpec(
    kind=EntityKind.EVENT,
    search_fields=(_attr("name"), _attr("description")),
    sort_keys={"id": _attr("id"), "name": _attr("name"), "description": _attr("description")},
)

PARTNER_LISTING = ListingSpec(
    kind=EntityKind.PARTNER,
    search_fields=(_attr("name"), _attr("merchant_number"), _attr("partner_id")),
    sort_keys={
        "id": _attr("id"),
        "name": _attr("name"),
        "merchant_number": _attr("merchant_number"),
        "partner_id": _attr("partner_id"),
        "client_id": _attr("client_id"),
        "status": _attr("status"),
    },
)

PRODUCT_EVENT_LISTING = ListingSpec(
    kind=EntityKind.PRODUCT_EVENT,
    search_fields=(mapping_product_name, mapping_event_name),
    sort_keys={
        "id": _attr("id"),
        "product": mapping_product_name,
        "event": mapping_event_name,
        "order": _attr("order"),
    },
    default_sort="order",
    tie_breaks={"order": _attr("id")},
    display={"product_name": mapping_product_name, "event_name": mapping_event_name},
)

SUBSCRIPTION_LISTING = ListingSpec(
    kind=EntityKind.SUBSCRIPTION,
    search_fields=(subscription_product_name, subscription_event_name, subscription_partner_name),
    sort_keys={
        "id": _attr("id"),
        "partner": subscription_partner_name,
        "product": subscription_product_name,
        "event": subscription_event_name,
        "status": _attr("status"),
    },
    display={
        "partner_name": subscription_partner_name,
        "product_name": subscription_product_name,
        "event_name": subscription_event_name,
    },
)

LISTINGS: dict[EntityKind, ListingSpec] = {
    spec.kind: spec
    for spec in (
        PRODUCT_LISTING,
        EVENT_LISTING,
        PARTNER_LISTING,
        PRODUCT_EVENT_LISTING,
        SUBSCRIPTION_LISTING,
    )
}
