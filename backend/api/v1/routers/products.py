"""
Products Router — console list page for the product catalog.
"""

from typing import Any

from fastapi import APIRouter, Body, Query

from api.deps import ConsoleDep, ListParams, ListParamsDep
from api.v1.routers.common import fetch_one, find_or_404, refresh_list, remove, render_list, submit_form
from console.session import CatalogConsole
from services.base import EntityKind

router = APIRouter(prefix="/api/v1/products", tags=["products"])

KIND = EntityKind.PRODUCT


@router.get("/")
async def list_products(
    params: ListParams = ListParamsDep,
    console: CatalogConsole = ConsoleDep,
):
    """Search, sort and paginate the loaded products."""
    return await render_list(console.controller(KIND), params)


@router.post("/refresh")
async def refresh_products(console: CatalogConsole = ConsoleDep):
    """Reload products from the catalog API."""
    return await refresh_list(console.controller(KIND))


@router.get("/{product_id}")
async def get_product(product_id: int, console: CatalogConsole = ConsoleDep):
    """Fetch a single product from the catalog API."""
    return await fetch_one(console, KIND, product_id)


@router.post("/", status_code=201)
async def create_product(
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    """Create a product through the product form."""
    return await submit_form(console, KIND, values)


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    values: dict[str, Any] = Body(...),
    console: CatalogConsole = ConsoleDep,
):
    """Replace a product through the product form."""
    existing = await find_or_404(console.controller(KIND), product_id)
    return await submit_form(console, KIND, values, existing)


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    confirm: bool = Query(False),
    console: CatalogConsole = ConsoleDep,
):
    """Request removal of a product; `confirm=true` performs it."""
    return await remove(console.controller(KIND), product_id, confirm)
