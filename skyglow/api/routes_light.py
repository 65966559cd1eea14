# File: skyglow/api/routes_light.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from skyglow.api.deps import get_sky_context
from skyglow.core.numbers import parse_invariant_float
from skyglow.schemas.light import ErrorResponse, LightReading
from skyglow.services.context import SkyContext
from skyglow.services.sky_quality import locate

router = APIRouter(tags=["light"])


# Plain def: FastAPI runs this in its worker thread pool.
@router.get(
    "/light",
    response_model=LightReading,
    responses={400: {"model": ErrorResponse}},
)
def get_light(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    context: SkyContext = Depends(get_sky_context),
):
    """Raw brightness, SQM and Bortle estimate for one map click."""
    lat_value = parse_invariant_float(lat)
    lng_value = parse_invariant_float(lng)
    if lat_value is None or lng_value is None:
        raise HTTPException(status_code=400, detail="Invalid lat/lng")

    return locate(context, lat_value, lng_value)
