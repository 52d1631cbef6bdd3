"""
Dashboard — headline counts across the catalog.

The four lists load concurrently; each stat is reconciled independently, so a
failed list only zeroes its own card.
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass

import structlog

from catalog.errors import CatalogServiceError
from catalog.models import SubscriptionStatus
from services.base import EntityKind, EntityService

logger = structlog.get_logger()


@dataclass
class DashboardStat:
    title: str
    value: int
    description: str
    href: str
    available: bool = True

    def to_dict(self) -> dict:
        return asdict(self)


async def _count(service: EntityService, *, active_only: bool = False) -> int:
    items = await service.list()
    if active_only:
        return sum(1 for item in items if item.status == SubscriptionStatus.ACTIVE)
    return len(items)


async def load_dashboard(services: dict[EntityKind, EntityService]) -> list[DashboardStat]:
    cards = [
        ("Total Products", "Active products in system", EntityKind.PRODUCT, False),
        ("Total Events", "Available events", EntityKind.EVENT, False),
        ("Partners", "Registered partners", EntityKind.PARTNER, False),
        ("Active Subscriptions", "Partner subscriptions", EntityKind.SUBSCRIPTION, True),
    ]
    results = await asyncio.gather(
        *(_count(services[kind], active_only=active_only) for _, _, kind, active_only in cards),
        return_exceptions=True,
    )

    stats: list[DashboardStat] = []
    for (title, description, kind, _), result in zip(cards, results):
        href = f"/{kind.value}"
        if isinstance(result, CatalogServiceError):
            logger.warning("dashboard.stat.unavailable", entity=kind.value, error=result.message)
            stats.append(DashboardStat(title, 0, description, href, available=False))
        elif isinstance(result, BaseException):
            raise result
        else:
            stats.append(DashboardStat(title, result, description, href))
    return stats
