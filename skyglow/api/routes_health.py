# File: skyglow/api/routes_health.py

from fastapi import APIRouter, Depends

from skyglow.api.deps import get_sky_context
from skyglow.services.context import SkyContext

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz(context: SkyContext = Depends(get_sky_context)):
    return {
        "status": "ok",
        "raster": context.store.describe(),
    }
