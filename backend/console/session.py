"""
Console session — wires the client, notification channel, entity services
and list controllers for one operator console.
"""

from __future__ import annotations

import httpx
import structlog

from console.controller import ListController
from console.dashboard import DashboardStat, load_dashboard
from console.forms import EntityForm
from console.listings import LISTINGS
from console.relationships import CatalogIndex
from core.config import Settings
from notifications.channel import NotificationChannel
from services import CatalogClient, EntityKind, EntityService, build_services

logger = structlog.get_logger()


class CatalogConsole:
    def __init__(
        self,
        client: CatalogClient,
        *,
        page_size: int = 10,
        notification_history: int = 50,
    ):
        self.client = client
        self.notifications = NotificationChannel(history_size=notification_history)
        self.services: dict[EntityKind, EntityService] = build_services(
            client=client, notifications=self.notifications
        )
        self.controllers: dict[EntityKind, ListController] = {
            kind: ListController(
                self.services[kind],
                LISTINGS[kind],
                page_size=page_size,
                index_provider=self.index,
            )
            for kind in EntityKind
        }

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CatalogConsole":
        client = CatalogClient.from_settings(settings, transport=transport)
        return cls(
            client,
            page_size=settings.page_size,
            notification_history=settings.notification_history,
        )

    def controller(self, kind: EntityKind) -> ListController:
        return self.controllers[kind]

    def form(self, kind: EntityKind) -> EntityForm:
        return EntityForm(kind)

    def index(self) -> CatalogIndex:
        """Records currently loaded by every page, for relationship labels."""
        return CatalogIndex.build(
            products=self.controllers[EntityKind.PRODUCT].items,
            events=self.controllers[EntityKind.EVENT].items,
            partners=self.controllers[EntityKind.PARTNER].items,
            product_events=self.controllers[EntityKind.PRODUCT_EVENT].items,
        )

    async def dashboard(self) -> list[DashboardStat]:
        return await load_dashboard(self.services)

    async def aclose(self) -> None:
        logger.info("console.closing")
        await self.client.aclose()
