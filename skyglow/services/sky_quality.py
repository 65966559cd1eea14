# File: skyglow/services/sky_quality.py

from skyglow.schemas.light import LightReading
from skyglow.services.context import SkyContext
from skyglow.services.photometry import raw_to_sqm, sqm_to_bortle


def locate(context: SkyContext, lat: float, lng: float) -> LightReading:
    """
    Sky darkness at (lat, lng).

    Never fails for numeric input: sampling problems surface as raw 0.0,
    i.e. SQM "22.00" and Bortle 1.0.
    """
    raw = context.sampler.sample_at(lat, lng)
    sqm = raw_to_sqm(raw)
    bortle = sqm_to_bortle(sqm)
    return LightReading(
        latitude=lat,
        longitude=lng,
        raw_value=raw,
        sqm=sqm,
        bortle=bortle,
    )
