"""
Product-event mappings service — /product-events.

A mapping binds one event to one product at a position (`order`) within that
product's event list.
"""

from __future__ import annotations

from catalog.models import ProductEvent, ProductEventDraft
from services.base import EntityKind, EntityService, register_service


@register_service
class ProductEventsService(EntityService[ProductEvent, ProductEventDraft]):
    kind = EntityKind.PRODUCT_EVENT
    entity_model = ProductEvent
    draft_model = ProductEventDraft
    singular = "product event"
    plural = "product events"
    record_name = "product event mapping"

    async def list_for_product(self, product_id: int) -> list[ProductEvent]:
        """GET /products/{id}/events — mappings of a single product."""
        return await self._list_at(
            f"/{EntityKind.PRODUCT.value}/{product_id}/events",
            failure="Failed to fetch product events",
        )

    async def update_order(self, mapping_id: int, order: int) -> ProductEvent:
        """PATCH /product-events/{id}/order without re-sending the full record."""
        return await self._patch(
            mapping_id,
            "order",
            {"order": order},
            success="Product event order updated successfully",
            failure="Failed to update product event order",
        )
