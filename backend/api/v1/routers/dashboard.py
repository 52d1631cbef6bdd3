"""
Dashboard Router — headline catalog counts.
"""

from fastapi import APIRouter

from api.deps import ConsoleDep
from console.session import CatalogConsole

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/")
async def get_dashboard(console: CatalogConsole = ConsoleDep):
    """Products, events, partners and active subscriptions, loaded concurrently."""
    stats = await console.dashboard()
    return {"stats": [stat.to_dict() for stat in stats]}
