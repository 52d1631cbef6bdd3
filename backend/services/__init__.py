"""
Catalog entity services package.

One service per catalog entity, all built on EntityService so the console
can drive them uniformly:
  - ProductsService        /products
  - EventsService          /events
  - PartnersService        /partners            (+ status patch)
  - ProductEventsService   /product-events      (+ order patch)
  - SubscriptionsService   /subscriptions       (+ status patch)

Usage:
    from services import CatalogClient, EntityKind, build_services

    services = build_services(client=CatalogClient(base_url), notifications=channel)
    products = await services[EntityKind.PRODUCT].list()
"""

from services.base import (
    EntityKind,
    EntityService,
    build_services,
    register_service,
)
from services.events import EventsService
from services.http import CatalogClient
from services.partners import PartnersService
from services.product_events import ProductEventsService
from services.products import ProductsService
from services.subscriptions import SubscriptionsService

__all__ = [
    "CatalogClient",
    "EntityKind",
    "EntityService",
    "build_services",
    "register_service",
    "ProductsService",
    "EventsService",
    "PartnersService",
    "ProductEventsService",
    "SubscriptionsService",
]
