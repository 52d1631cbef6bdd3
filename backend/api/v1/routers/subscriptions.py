"""
Subscriptions Router — partner subscriptions to product-event mappings.
"""

from typing import Any

from fastapi import APIRouter, Body, Query

from api.deps import ConsoleDep, ListParams, ListParamsDep
from api.v1.routers.common import (
    fetch_one,
    find_or_404,
    mutation_response,
    refresh_list,
    remove,
    render_list,
    submit_form,
)
from console.relationships import partner_options, product_event_options
from console.session import CatalogConsole
from services.base import EntityKind

router = APIRouter(prefix="/api/v1/subscriptions", tags=["subscriptions"])

KIND = EntityKind.SUBSCRIPTION


@router.get("/")
async def list_subscriptions(
    params: ListParams = ListParamsDep,
    console: CatalogConsole = ConsoleDep,
):
    """Search by partner, product or event name; sort and paginate."""
    return await render_list(console.controller(KIND), params)


@router.post("/refresh")
async def refresh_subscriptions(console: CatalogConsole = ConsoleDep):
    return await refresh_list(console.controller(KIND))


@router.get("/options")
async def subscription_form_options(console: CatalogConsole = ConsoleDep):
    """
    Choices for the subscription form. Every product-event mapping is offered
    regardless of the selected partner.
    """
    partners = console.controller(EntityKind.PARTNER)
    mappings = console.controller(EntityKind.PRODUCT_EVENT)
    await partners.ensure_loaded()
    await mappings.ensure_loaded()
    index = console.index()
    return {
        "partners": partner_options(partners.items),
        "product_events": product_event_options(mappings.items, index),
    }


@router.get("/{subscription_id}")
async def get_subscription(subscription_id: int, console: CatalogConsole = ConsoleDep):
    return await fetch_one(console, KIND, subscription_id)


@router.post("/", status_code=201)
async def create_subscription(
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    """Create a subscription through the subscription form."""
    return await submit_form(console, KIND, values)


@router.put("/{subscription_id}")
async def update_subscription(
    subscription_id: int,
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    existing = await find_or_404(console.controller(KIND), subscription_id)
    return await submit_form(console, KIND, values, existing)


@router.patch("/{subscription_id}/status")
async def toggle_subscription_status(subscription_id: int, console: CatalogConsole = ConsoleDep):
    """Flip ACTIVE/INACTIVE through the narrow status mutator."""
    controller = console.controller(KIND)
    target = await find_or_404(controller, subscription_id)
    return mutation_response(await controller.toggle_status(target))


@router.delete("/{subscription_id}")
async def delete_subscription(
    subscription_id: int,
    confirm: bool = Query(False),
    console: CatalogConsole = ConsoleDep,
):
    return await remove(console.controller(KIND), subscription_id, confirm)
