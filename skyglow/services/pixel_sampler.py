# File: skyglow/services/pixel_sampler.py

"""
Geographic point -> raster cell -> raw value.

sample_at() never raises. Every way of not getting a usable value
(bad coordinates, PROJ failure, outside the grid, nodata, read error)
comes back as NO_DATA_RAW, which downstream reads as a pristine dark sky.
Callers therefore cannot tell "dark" from "could not sample".
"""

import logging
import math
from typing import Optional, Tuple

from rasterio.errors import RasterioIOError

from skyglow.core.exceptions import CellOutOfBoundsError
from skyglow.gis.raster_store import RasterStore
from skyglow.gis.transformer import CoordinateTransformer

logger = logging.getLogger(__name__)

NO_DATA_RAW = 0.0


class PixelSampler:
    def __init__(
        self,
        store: Optional[RasterStore],
        transformer: CoordinateTransformer,
    ):
        self.store = store
        self.transformer = transformer

    def cell_for(self, lat: float, lon: float) -> Optional[Tuple[int, int]]:
        """
        Return (col, row) of the cell containing the point, or None if the
        point does not land on the grid.
        """
        if self.store is None:
            return None
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return None

        x, y = self.transformer.transform(lon, lat)
        if not (math.isfinite(x) and math.isfinite(y)):
            return None

        origin_x, pixel_width, _, origin_y, _, pixel_height = self.store.geotransform
        # pixel_height is negative for north-up rasters; floor, not truncation,
        # so points just west/north of the origin land on col/row -1.
        col_offset = (x - origin_x) / pixel_width
        row_offset = (y - origin_y) / pixel_height
        # huge but finite coordinates overflow on fine grids
        if not (math.isfinite(col_offset) and math.isfinite(row_offset)):
            return None

        col = math.floor(col_offset)
        row = math.floor(row_offset)

        if not self.store.contains(col, row):
            return None
        return col, row

    def sample_at(self, lat: float, lon: float) -> float:
        cell = self.cell_for(lat, lon)
        if cell is None:
            return NO_DATA_RAW

        col, row = cell
        try:
            value = self.store.sample_cell(col, row)
        except (CellOutOfBoundsError, RasterioIOError, OSError) as exc:
            logger.warning("Raster read failed at col=%d row=%d: %s", col, row, exc)
            return NO_DATA_RAW

        if not math.isfinite(value):
            return NO_DATA_RAW
        nodata = self.store.nodata
        if nodata is not None and value == nodata:
            return NO_DATA_RAW
        return value
