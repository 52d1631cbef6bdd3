"""
Notifications Router — the browser polls this to show toasts.
"""

from fastapi import APIRouter, Query

from api.deps import ConsoleDep
from console.session import CatalogConsole

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get("/")
async def list_notifications(
    history: bool = Query(False, description="Return the full history instead of draining"),
    console: CatalogConsole = ConsoleDep,
):
    channel = console.notifications
    notifications = list(channel.history) if history else channel.drain()
    return [n.to_dict() for n in notifications]
