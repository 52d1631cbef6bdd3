"""
Partners service — /partners, plus the status narrow mutator.
"""

from catalog.models import Partner, PartnerDraft, PartnerStatus
from services.base import EntityKind, EntityService, register_service


@register_service
class PartnersService(EntityService[Partner, PartnerDraft]):
    kind = EntityKind.PARTNER
    entity_model = Partner
    draft_model = PartnerDraft
    singular = "partner"
    plural = "partners"
    record_name = "partner"

    async def update_status(self, partner_id: int, status: PartnerStatus) -> Partner:
        """PATCH /partners/{id}/status without re-sending the full record."""
        status = PartnerStatus(status)
        return await self._patch(
            partner_id,
            "status",
            {"status": status.value},
            success=f"Partner {status.value.lower()} successfully",
            failure="Failed to update partner status",
        )
