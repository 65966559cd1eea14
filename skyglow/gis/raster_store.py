# File: skyglow/gis/raster_store.py

"""
Read-only access to the light-emission raster.

The dataset is opened once at startup and shared by every request.
rasterio dataset handles are not safe for concurrent reads, so single-cell
window reads go through one lock. With preload=True the whole band is held
in a read-only numpy array instead and reads need no lock.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np
import rasterio
from rasterio.errors import RasterioIOError
from rasterio.windows import Window

from skyglow.core.exceptions import CellOutOfBoundsError, RasterLoadError

logger = logging.getLogger(__name__)

# GDAL order: (originX, pixelWidth, rotX, originY, rotY, pixelHeight)
GeoTransform = Tuple[float, float, float, float, float, float]

BAND = 1


def validate_geotransform(geotransform: GeoTransform) -> None:
    """Reject geotransforms whose cells do not map one-to-one to coordinates."""
    if len(geotransform) != 6:
        raise RasterLoadError(f"Expected 6 geotransform coefficients, got {len(geotransform)}")

    pixel_width, pixel_height = geotransform[1], geotransform[5]
    if pixel_width == 0 or pixel_height == 0:
        raise RasterLoadError(
            f"Degenerate geotransform: pixel size ({pixel_width}, {pixel_height})"
        )


class RasterStore:
    def __init__(self, dataset, *, preload: bool = False):
        self._dataset = dataset
        self._lock = threading.Lock()

        self.path: str = dataset.name
        self.width: int = dataset.width
        self.height: int = dataset.height
        self.geotransform: GeoTransform = tuple(dataset.transform.to_gdal())
        self.crs_wkt: Optional[str] = dataset.crs.to_wkt() if dataset.crs else None
        self.crs_name: Optional[str] = dataset.crs.to_string() if dataset.crs else None
        self.nodata: Optional[float] = dataset.nodata

        validate_geotransform(self.geotransform)

        self._band: Optional[np.ndarray] = None
        if preload:
            band = dataset.read(BAND, out_dtype="float32")
            band.flags.writeable = False
            self._band = band

    @classmethod
    def open(cls, path, *, preload: bool = False) -> "RasterStore":
        """
        Open the raster at `path`.

        Raises RasterLoadError for anything that leaves us without a usable
        single-band grid.
        """
        path = Path(path)
        if not path.exists():
            raise RasterLoadError(f"Raster not found at: {path}")

        try:
            dataset = rasterio.open(path)
        except (RasterioIOError, OSError) as exc:
            raise RasterLoadError(f"Failed to open raster {path}: {exc}") from exc

        try:
            if dataset.count < BAND:
                raise RasterLoadError(f"Raster {path} has no bands.")
            store = cls(dataset, preload=preload)
        except Exception:
            dataset.close()
            raise

        logger.info(
            "Loaded raster %s (%dx%d, crs=%s, preload=%s)",
            path,
            store.width,
            store.height,
            store.crs_name or "none",
            preload,
        )
        return store

    # -----------------------------
    # Cell access
    # -----------------------------
    def contains(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def sample_cell(self, col: int, row: int) -> float:
        """Return the float value stored at (col, row)."""
        if not self.contains(col, row):
            raise CellOutOfBoundsError(col, row, self.width, self.height)

        if self._band is not None:
            return float(self._band[row, col])

        with self._lock:
            data = self._dataset.read(
                BAND,
                window=Window(col, row, 1, 1),
                out_dtype="float32",
            )
        return float(data[0, 0])

    # -----------------------------
    # Lifecycle / info
    # -----------------------------
    @property
    def preloaded(self) -> bool:
        return self._band is not None

    def describe(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "width": self.width,
            "height": self.height,
            "crs": self.crs_name,
            "nodata": self.nodata if self.nodata is not None and np.isfinite(self.nodata) else None,
            "preloaded": self.preloaded,
        }

    def close(self) -> None:
        self._band = None
        if not self._dataset.closed:
            self._dataset.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
