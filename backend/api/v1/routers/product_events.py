"""
Product Events Router — product/event mappings and their per-product order.
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
from console.controller import MoveDirection
from console.relationships import group_by_product
from console.session import CatalogConsole
from services.base import EntityKind

router = APIRouter(prefix="/api/v1/product-events", tags=["product-events"])

KIND = EntityKind.PRODUCT_EVENT


@router.get("/")
async def list_product_events(
    params: ListParams = ListParamsDep,
    console: CatalogConsole = ConsoleDep,
):
    """Search by product or event name; sorted by order unless asked otherwise."""
    return await render_list(console.controller(KIND), params)


@router.post("/refresh")
async def refresh_product_events(console: CatalogConsole = ConsoleDep):
    return await refresh_list(console.controller(KIND))


@router.get("/grouped")
async def grouped_product_events(
    q: str | None = Query(None),
    console: CatalogConsole = ConsoleDep,
):
    """Mappings grouped per product, each group ranked by order."""
    controller = console.controller(KIND)
    await controller.ensure_loaded()
    if q is not None:
        controller.set_query(q)
    index = console.index()
    matching = [m for m in controller.items if controller.listing.matches(m, controller.query, index)]
    return [
        {
            "product": label,
            "count": len(members),
            "items": [controller.listing.row(m, index) for m in members],
        }
        for label, members in group_by_product(matching, index)
    ]


@router.get("/{mapping_id}")
async def get_product_event(mapping_id: int, console: CatalogConsole = ConsoleDep):
    return await fetch_one(console, KIND, mapping_id)


@router.post("/", status_code=201)
async def create_product_event(
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    """Map an event to a product through the mapping form."""
    return await submit_form(console, KIND, values)


@router.put("/{mapping_id}")
async def update_product_event(
    mapping_id: int,
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    existing = await find_or_404(console.controller(KIND), mapping_id)
    return await submit_form(console, KIND, values, existing)


@router.post("/{mapping_id}/move/{direction}")
async def move_product_event(
    mapping_id: int,
    direction: MoveDirection,
    console: CatalogConsole = ConsoleDep,
):
    """Shift a mapping's order by one; moving up from order 1 is a no-op."""
    controller = console.controller(KIND)
    target = await find_or_404(controller, mapping_id)
    return mutation_response(await controller.reorder(target, direction))


@router.delete("/{mapping_id}")
async def delete_product_event(
    mapping_id: int,
    confirm: bool = Query(False),
    console: CatalogConsole = ConsoleDep,
):
    """Request removal of a mapping; `confirm=true` performs it."""
    return await remove(console.controller(KIND), mapping_id, confirm)
