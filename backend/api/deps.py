"""
Catalog Console API Dependencies

Dependency injection for the console session and list query parameters.
"""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Query, Request, status

from console.controller import SortDirection
from console.session import CatalogConsole


def get_console(request: Request) -> CatalogConsole:
    """Return the console session created at startup."""
    console = getattr(request.app.state, "console", None)
    if console is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Console is not initialised",
        )
    return console


@dataclass
class ListParams:
    q: str | None
    sort: str | None
    direction: SortDirection | None
    page: int | None


def get_list_params(
    q: str | None = Query(None, description="Case-insensitive search term"),
    sort: str | None = Query(None, description="Sort column"),
    direction: SortDirection | None = Query(None),
    page: int | None = Query(None, ge=1),
) -> ListParams:
    return ListParams(q=q, sort=sort, direction=direction, page=page)


ConsoleDep = Depends(get_console)
ListParamsDep = Depends(get_list_params)
