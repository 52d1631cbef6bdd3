"""
Subscriptions service — /subscriptions, plus the status narrow mutator and the
per-partner listing.
"""

from __future__ import annotations

from catalog.models import Subscription, SubscriptionDraft, SubscriptionStatus
from services.base import EntityKind, EntityService, register_service


@register_service
class SubscriptionsService(EntityService[Subscription, SubscriptionDraft]):
    kind = EntityKind.SUBSCRIPTION
    entity_model = Subscription
    draft_model = SubscriptionDraft
    singular = "subscription"
    plural = "subscriptions"
    record_name = "subscription"

    async def list_for_partner(self, partner_id: int) -> list[Subscription]:
        """GET /partners/{id}/subscriptions."""
        return await self._list_at(
            f"/{EntityKind.PARTNER.value}/{partner_id}/subscriptions",
            failure="Failed to fetch partner subscriptions",
        )

    async def update_status(
        self, subscription_id: int, status: SubscriptionStatus
    ) -> Subscription:
        """PATCH /subscriptions/{id}/status without re-sending the full record."""
        status = SubscriptionStatus(status)
        return await self._patch(
            subscription_id,
            "status",
            {"status": status.value},
            success=f"Subscription {status.value.lower()} successfully",
            failure="Failed to update subscription status",
        )
