"""
Shared request handling for the entity list routers.
"""

from typing import Any

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from api.deps import ListParams
from catalog.errors import CatalogServiceError, NotFoundError, ValidationError
from console.controller import ListController, MutationResult, MutationStatus
from console.session import CatalogConsole
from services.base import EntityKind

UNPROCESSABLE_ENTITY = 422


async def render_list(controller: ListController, params: ListParams) -> dict[str, Any]:
    """Apply query/sort/page changes, loading on first visit, and render the page."""
    await controller.ensure_loaded()
    if params.q is not None:
        controller.set_query(params.q)
    if params.sort is not None or params.direction is not None:
        try:
            controller.set_sort(params.sort or controller.sort_key, params.direction)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if params.page is not None:
        controller.set_page(params.page)
    return controller.view().to_dict()


async def refresh_list(controller: ListController) -> dict[str, Any]:
    refreshed = await controller.refresh()
    payload = controller.view().to_dict()
    payload["refreshed"] = refreshed
    return payload


async def fetch_one(console: CatalogConsole, kind: EntityKind, entity_id: int) -> dict[str, Any]:
    try:
        entity = await console.services[kind].get(entity_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.to_dict()) from exc
    except CatalogServiceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.to_dict()) from exc
    return entity.model_dump(mode="json")


async def find_or_404(controller: ListController, entity_id: int):
    await controller.ensure_loaded()
    entity = controller.find(entity_id)
    if entity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Record not found")
    return entity


def mutation_response(result: MutationResult, *, created: bool = False) -> JSONResponse:
    if result.status is MutationStatus.BUSY:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another change is still in progress",
        )
    if result.status is MutationStatus.FAILED:
        error = result.error
        if isinstance(error, NotFoundError):
            code = status.HTTP_404_NOT_FOUND
        elif isinstance(error, ValidationError):
            code = UNPROCESSABLE_ENTITY
        else:
            code = status.HTTP_502_BAD_GATEWAY
        raise HTTPException(status_code=code, detail=error.to_dict() if error else None)

    body = {
        "status": result.status.value,
        "item": result.entity.model_dump(mode="json") if result.entity is not None else None,
    }
    code = status.HTTP_201_CREATED if created and result.status is MutationStatus.APPLIED else 200
    return JSONResponse(status_code=code, content=body)


async def submit_form(
    console: CatalogConsole,
    kind: EntityKind,
    values: dict[str, Any],
    existing=None,
) -> JSONResponse:
    controller = console.controller(kind)
    form = console.form(kind)
    form.open(existing)
    form.update(values)
    result = await form.submit(controller)
    if result is None:
        raise HTTPException(
            status_code=UNPROCESSABLE_ENTITY,
            detail={"fields": form.errors},
        )
    return mutation_response(result, created=existing is None)


async def remove(controller: ListController, entity_id: int, confirm: bool) -> JSONResponse:
    target = await find_or_404(controller, entity_id)
    if not confirm:
        controller.request_remove(target)
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED,
            content={"status": "pending_confirmation", "item": target.model_dump(mode="json")},
        )
    if controller.mutating:
        return mutation_response(MutationResult(MutationStatus.BUSY))
    controller.request_remove(target)
    return mutation_response(await controller.confirm_remove())
