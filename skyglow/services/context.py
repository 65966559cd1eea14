# File: skyglow/services/context.py

"""
Process-wide sampling state.

Everything a request needs is built once, before the server accepts
connections, and handed to handlers as one frozen SkyContext.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from skyglow.gis.raster_store import RasterStore
from skyglow.gis.transformer import CoordinateTransformer
from skyglow.services.pixel_sampler import PixelSampler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkyContext:
    store: RasterStore
    transformer: CoordinateTransformer
    sampler: PixelSampler

    def close(self) -> None:
        self.store.close()


def load_sky_context(raster_path: Union[str, Path], *, preload: bool = False) -> SkyContext:
    """
    Open the raster and build its transform.

    Raises RasterLoadError / TransformerBuildError; the caller decides
    whether that is fatal.
    """
    store = RasterStore.open(raster_path, preload=preload)
    try:
        transformer = CoordinateTransformer.from_crs(store.crs_wkt)
    except Exception:
        store.close()
        raise

    logger.info(
        "Sky context ready: native crs %s%s",
        transformer.native_crs.name,
        " (identity transform)" if transformer.is_identity else "",
    )
    return SkyContext(
        store=store,
        transformer=transformer,
        sampler=PixelSampler(store, transformer),
    )
