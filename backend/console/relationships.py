"""
Relationship resolvers — human-readable labels for foreign keys.

Nested objects embedded by the catalog API are preferred; a CatalogIndex of
records already loaded by other pages is consulted next; otherwise a
placeholder carrying the raw id is returned. Resolution never raises.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from catalog.models import Event, Partner, Product, ProductEvent, Subscription

UNKNOWN_PRODUCT = "Unknown Product"
UNKNOWN_EVENT = "Unknown Event"
LABEL_SEPARATOR = " — "


@dataclass
class CatalogIndex:
    """Lookup tables of loaded records, keyed by id."""

    products: dict[int, Product] = field(default_factory=dict)
    events: dict[int, Event] = field(default_factory=dict)
    partners: dict[int, Partner] = field(default_factory=dict)
    product_events: dict[int, ProductEvent] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        products: Iterable[Product] = (),
        events: Iterable[Event] = (),
        partners: Iterable[Partner] = (),
        product_events: Iterable[ProductEvent] = (),
    ) -> "CatalogIndex":
        return cls(
            products={p.id: p for p in products},
            events={e.id: e for e in events},
            partners={p.id: p for p in partners},
            product_events={pe.id: pe for pe in product_events},
        )


# ── Product-event mappings ────────────────────────────────────────────────


def product_label(product_id: int | None, index: CatalogIndex | None = None) -> str:
    if product_id is None:
        return UNKNOWN_PRODUCT
    if index is not None and product_id in index.products:
        return index.products[product_id].name
    return f"Product {product_id}"


def event_label(event_id: int | None, index: CatalogIndex | None = None) -> str:
    if event_id is None:
        return UNKNOWN_EVENT
    if index is not None and event_id in index.events:
        return index.events[event_id].name
    return f"Event {event_id}"


def mapping_product_name(mapping: ProductEvent, index: CatalogIndex | None = None) -> str:
    if mapping.product is not None:
        return mapping.product.name
    return product_label(mapping.product_id, index)


def mapping_event_name(mapping: ProductEvent, index: CatalogIndex | None = None) -> str:
    if mapping.event is not None:
        return mapping.event.name
    return event_label(mapping.event_id, index)


def mapping_label(mapping: ProductEvent, index: CatalogIndex | None = None) -> str:
    """'Product — Event' label used by the subscription form."""
    return f"{mapping_product_name(mapping, index)}{LABEL_SEPARATOR}{mapping_event_name(mapping, index)}"


def group_by_product(
    mappings: Iterable[ProductEvent],
    index: CatalogIndex | None = None,
) -> list[tuple[str, list[ProductEvent]]]:
    """
    Group mappings per product label, preserving first-seen product order.
    Each group is ranked by (order, id) so duplicate order values stay stable.
    """
    groups: dict[str, list[ProductEvent]] = {}
    for mapping in mappings:
        groups.setdefault(mapping_product_name(mapping, index), []).append(mapping)
    return [
        (label, sorted(members, key=lambda m: (m.order, m.id)))
        for label, members in groups.items()
    ]


# ── Subscriptions ─────────────────────────────────────────────────────────


def subscription_product_name(sub: Subscription, index: CatalogIndex | None = None) -> str:
    ref = sub.product_event
    if ref is None:
        mapping = index.product_events.get(sub.product_event_id) if index else None
        return mapping_product_name(mapping, index) if mapping else UNKNOWN_PRODUCT
    if ref.product is not None:
        return ref.product.name
    return product_label(ref.product_id, index)


def subscription_event_name(sub: Subscription, index: CatalogIndex | None = None) -> str:
    ref = sub.product_event
    if ref is None:
        mapping = index.product_events.get(sub.product_event_id) if index else None
        return mapping_event_name(mapping, index) if mapping else UNKNOWN_EVENT
    if ref.event is not None:
        return ref.event.name
    return event_label(ref.event_id, index)


def subscription_partner_name(sub: Subscription, index: CatalogIndex | None = None) -> str:
    if sub.partner is not None:
        return sub.partner.name
    if index is not None and sub.partner_id in index.partners:
        return index.partners[sub.partner_id].name
    return f"Partner {sub.partner_id}"


def product_event_options(
    mappings: Iterable[ProductEvent],
    index: CatalogIndex | None = None,
) -> list[dict]:
    """
    Every mapping as a selectable option. The list is not narrowed by the
    selected partner: a subscription binds a partner to any mapping.
    """
    return [{"id": m.id, "label": mapping_label(m, index)} for m in mappings]


def partner_options(partners: Iterable[Partner]) -> list[dict]:
    return [{"id": p.id, "label": p.name} for p in partners]
