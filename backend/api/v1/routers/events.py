"""
Events Router — console list page for catalog events.
"""

from typing import Any

from fastapi import APIRouter, Body, Query

from api.deps import ConsoleDep, ListParams, ListParamsDep
from api.v1.routers.common import fetch_one, find_or_404, refresh_list, remove, render_list, submit_form
from console.session import CatalogConsole
from services.base import EntityKind

router = APIRouter(prefix="/api/v1/events", tags=["events"])

KIND = EntityKind.EVENT


@router.get("/")
async def list_events(
    params: ListParams = ListParamsDep,
    console: CatalogConsole = ConsoleDep,
):
    """Search, sort and paginate the loaded events."""
    return await render_list(console.controller(KIND), params)


@router.post("/refresh")
async def refresh_events(console: CatalogConsole = ConsoleDep):
    """Reload events from the catalog API."""
    return await refresh_list(console.controller(KIND))


@router.get("/{event_id}")
async def get_event(event_id: int, console: CatalogConsole = ConsoleDep):
    """Fetch a single event from the catalog API."""
    return await fetch_one(console, KIND, event_id)


@router.post("/", status_code=201)
async def create_event(
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    """Create an event through the event form."""
    return await submit_form(console, KIND, values)


@router.put("/{event_id}")
async def update_event(
    event_id: int,
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    """Replace an event through the event form."""
    existing = await find_or_404(console.controller(KIND), event_id)
    return await submit_form(console, KIND, values, existing)


@router.delete("/{event_id}")
async def delete_event(
    event_id: int,
    confirm: bool = Query(False),
    console: CatalogConsole = ConsoleDep,
):
    """Request removal of an event; `confirm=true` performs it."""
    return await remove(console.controller(KIND), event_id, confirm)
