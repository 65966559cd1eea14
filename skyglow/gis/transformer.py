# File: skyglow/gis/transformer.py

"""
WGS84 lon/lat -> raster native coordinates.

Built once from the raster CRS. transform() never raises: when PROJ cannot
place a point it returns (inf, inf), which no raster cell contains.
"""

import logging
import math
from typing import Any, Optional, Tuple

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from skyglow.core.exceptions import TransformerBuildError

logger = logging.getLogger(__name__)

WGS84 = CRS.from_epsg(4326)

UNPLACEABLE = (math.inf, math.inf)


def resolve_native_crs(native_crs: Any) -> CRS:
    """
    Turn whatever the raster declared (WKT, "EPSG:xxxx", rasterio CRS, None)
    into a pyproj CRS, falling back to WGS84.
    """
    if native_crs is None or (isinstance(native_crs, str) and not native_crs.strip()):
        logger.warning("Raster declares no CRS, assuming WGS84")
        return WGS84

    # rasterio.crs.CRS and friends
    if hasattr(native_crs, "to_wkt") and not isinstance(native_crs, CRS):
        native_crs = native_crs.to_wkt()

    try:
        return CRS.from_user_input(native_crs)
    except CRSError as exc:
        logger.warning("Could not parse raster CRS (%s), assuming WGS84", exc)
        return WGS84


class CoordinateTransformer:
    def __init__(self, native_crs: CRS):
        self.native_crs = native_crs
        self._transformer: Optional[Transformer] = None

        if not native_crs.equals(WGS84, ignore_axis_order=True):
            try:
                self._transformer = Transformer.from_crs(WGS84, native_crs, always_xy=True)
            except ProjError as exc:
                raise TransformerBuildError(
                    f"Cannot build WGS84 -> {native_crs.name} transform: {exc}"
                ) from exc

    @classmethod
    def from_crs(cls, native_crs: Any) -> "CoordinateTransformer":
        return cls(resolve_native_crs(native_crs))

    @property
    def is_identity(self) -> bool:
        return self._transformer is None

    def transform(self, lon: float, lat: float) -> Tuple[float, float]:
        if self._transformer is None:
            return lon, lat

        try:
            x, y = self._transformer.transform(lon, lat)
        except ProjError:
            return UNPLACEABLE

        if not (math.isfinite(x) and math.isfinite(y)):
            return UNPLACEABLE
        return x, y
