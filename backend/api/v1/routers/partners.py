"""
Partners Router — console list page for partners, including the status toggle.
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
from console.session import CatalogConsole
from services.base import EntityKind

router = APIRouter(prefix="/api/v1/partners", tags=["partners"])

KIND = EntityKind.PARTNER


@router.get("/")
async def list_partners(
    params: ListParams = ListParamsDep,
    console: CatalogConsole = ConsoleDep,
):
    """Search by name, merchant number or partner ID; sort and paginate."""
    return await render_list(console.controller(KIND), params)


@router.post("/refresh")
async def refresh_partners(console: CatalogConsole = ConsoleDep):
    return await refresh_list(console.controller(KIND))


@router.get("/{partner_id}")
async def get_partner(partner_id: int, console: CatalogConsole = ConsoleDep):
    return await fetch_one(console, KIND, partner_id)


@router.post("/", status_code=201)
async def create_partner(
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    """Create a partner through the partner form."""
    return await submit_form(console, KIND, values)


@router.put("/{partner_id}")
async def update_partner(
    partner_id: int,
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    existing = await find_or_404(console.controller(KIND), partner_id)
    return await submit_form(console, KIND, values, existing)


@router.patch("/{partner_id}/status")
async def toggle_partner_status(partner_id: int, console: CatalogConsole = ConsoleDep):
    """Flip Active/Inactive through the narrow status mutator."""
    controller = console.controller(KIND)
    target = await find_or_404(controller, partner_id)
    return mutation_response(await controller.toggle_status(target))


@router.delete("/{partner_id}")
async def delete_partner(
    partner_id: int,
    confirm: bool = Query(False),
    console: CatalogConsole = ConsoleDep,
):
    """Request removal of a partner; `confirm=true` performs it."""
    return await remove(console.controller(KIND), partner_id, confirm)
