"""Events service — /events."""

from catalog.models import Event, EventDraft
from services.base import EntityKind, EntityService, register_service


@register_service
class EventsService(EntityService[Event, EventDraft]):
    kind = EntityKind.EVENT
    entity_model = Event
    draft_model = EventDraft
    singular = "event"
    plural = "events"
    record_name = "event"
